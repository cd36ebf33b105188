"""
Local graph construction and export.
"""

from .builder import GraphBuilder, build_graph_data, filter_neighbor_links
from .models import Direction, GraphBuildOptions, GraphData, GraphEdge, GraphNode

__all__ = [
    "Direction",
    "GraphBuildOptions",
    "GraphBuilder",
    "GraphData",
    "GraphEdge",
    "GraphNode",
    "build_graph_data",
    "filter_neighbor_links",
]
