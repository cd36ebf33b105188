"""
Renderer hand-off for local graphs.

Converts GraphData into a JSON-ready pydantic payload, a networkx graph,
or a plain-text summary for the command line.
"""

from collections import Counter
from pathlib import PurePosixPath
from typing import Any

import networkx as nx
from pydantic import BaseModel, Field

from localgraph.graph.models import Direction, GraphBuildOptions, GraphData
from localgraph.graph.styling import GraphPalette


class PayloadNode(BaseModel):
    id: str
    label: str
    depth: int
    direction: str = Field(description="root|outgoing|incoming")
    color: str


class PayloadEdge(BaseModel):
    source: str
    target: str


class PhysicsHints(BaseModel):
    node_size: int = 10
    link_distance: int = 100
    charge_strength: int = -250


class GraphPayload(BaseModel):
    root: str | None
    max_out_depth: int
    max_in_depth: int
    include_neighbor_links: bool
    nodes: list[PayloadNode]
    edges: list[PayloadEdge]
    physics: PhysicsHints = Field(default_factory=PhysicsHints)
    metrics: dict[str, Any] = Field(default_factory=dict)


def note_label(doc_id: str) -> str:
    """Display label for a document: its file name without extension."""
    return PurePosixPath(doc_id).stem or doc_id


def graph_metrics(graph: GraphData) -> dict[str, Any]:
    """Count nodes per direction and edges."""
    by_direction = Counter(node.direction.value for node in graph.nodes)
    return {
        "total_nodes": len(graph.nodes),
        "total_edges": len(graph.edges),
        "outgoing_nodes": by_direction.get(Direction.OUTGOING.value, 0),
        "incoming_nodes": by_direction.get(Direction.INCOMING.value, 0),
        "max_depth": max((node.depth for node in graph.nodes), default=0),
    }


def to_payload(
    graph: GraphData,
    options: GraphBuildOptions,
    palette: GraphPalette | None = None,
    physics: PhysicsHints | None = None,
) -> GraphPayload:
    """Build the renderer payload for a graph."""
    palette = palette or GraphPalette()
    root = graph.root

    return GraphPayload(
        root=root.id if root else None,
        max_out_depth=options.max_out_depth,
        max_in_depth=options.max_in_depth,
        include_neighbor_links=options.include_neighbor_links,
        nodes=[
            PayloadNode(
                id=node.id,
                label=note_label(node.id),
                depth=node.depth,
                direction=node.direction.value,
                color=palette.color_for(node),
            )
            for node in graph.nodes
        ],
        edges=[PayloadEdge(source=edge.source, target=edge.target) for edge in graph.edges],
        physics=physics or PhysicsHints(),
        metrics=graph_metrics(graph),
    )


def to_networkx(graph: GraphData) -> nx.MultiDiGraph:
    """Export a graph as a MultiDiGraph so repeated edges are preserved."""
    G = nx.MultiDiGraph()
    for node in graph.nodes:
        G.add_node(node.id, depth=node.depth, direction=node.direction.value, label=note_label(node.id))
    for edge in graph.edges:
        G.add_edge(edge.source, edge.target)
    return G


def format_summary(graph: GraphData) -> str:
    """Human-readable summary of a graph, grouped by direction and depth."""
    if graph.is_empty:
        return "Empty graph: root document not found."

    root = graph.root
    lines = [f"Local graph for {root.id}" if root else "Local graph"]

    for direction in (Direction.OUTGOING, Direction.INCOMING):
        members = sorted(
            (node for node in graph.nodes if node.direction is direction),
            key=lambda n: (n.depth, n.id),
        )
        lines.append(f"{direction.value.capitalize()} ({len(members)}):")
        for node in members:
            lines.append(f"  [{node.depth}] {node.id}")

    lines.append(f"Edges ({len(graph.edges)}):")
    for edge in graph.edges:
        lines.append(f"  {edge.source} -> {edge.target}")

    return "\n".join(lines)
