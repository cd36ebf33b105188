"""
Local graph construction.

Starting from a root document, the builder runs a breadth-first traversal
over outgoing links and then a second one over backlinks, each bounded by
its own depth limit. Nodes keep the direction and depth of the traversal
that reached them first.
"""

import logging
from collections import deque
from typing import Callable, Iterable

from localgraph.core.interfaces import ILinkResolutionSource
from localgraph.graph.models import (
    Direction,
    GraphBuildOptions,
    GraphData,
    GraphEdge,
    GraphNode,
    validate_depth,
)

logger = logging.getLogger(__name__)


class GraphBuilder:
    """Builds local graphs from a link resolution source."""

    def __init__(self, source: ILinkResolutionSource):
        self.source = source

    def build_with_options(self, root_id: str, options: GraphBuildOptions) -> GraphData:
        return self.build(
            root_id,
            options.max_out_depth,
            options.max_in_depth,
            options.include_neighbor_links,
        )

    def build(
        self,
        root_id: str,
        max_out_depth: int,
        max_in_depth: int,
        include_neighbor_links: bool = True,
    ) -> GraphData:
        """Build the local graph around a document.

        Args:
            root_id: Identifier of the starting document
            max_out_depth: Maximum number of hops along outgoing links
            max_in_depth: Maximum number of hops along backlinks
            include_neighbor_links: Keep edges between non-root nodes of equal depth

        Returns:
            GraphData with unique nodes and every discovered edge. A missing
            root yields an empty graph.

        Raises:
            ValidationError: If either depth is negative
        """
        validate_depth("max_out_depth", max_out_depth)
        validate_depth("max_in_depth", max_in_depth)

        if not self.source.exists(root_id):
            logger.debug(f"Root document not found, returning empty graph: {root_id}")
            return GraphData.empty()

        nodes: dict[str, GraphNode] = {
            root_id: GraphNode(id=root_id, depth=0, direction=Direction.ROOT)
        }
        edges: list[GraphEdge] = []

        self._traverse(
            root_id,
            max_out_depth,
            Direction.OUTGOING,
            self.source.outgoing_links_of,
            nodes,
            edges,
        )
        self._traverse(
            root_id,
            max_in_depth,
            Direction.INCOMING,
            self.source.backlinks_of,
            nodes,
            edges,
        )

        if not include_neighbor_links:
            before = len(edges)
            edges = filter_neighbor_links(nodes, edges)
            logger.debug(f"Neighbor link filter removed {before - len(edges)} edges")

        logger.debug(
            f"Built local graph for {root_id}: {len(nodes)} nodes, {len(edges)} edges "
            f"(out={max_out_depth}, in={max_in_depth})"
        )
        return GraphData(nodes=list(nodes.values()), edges=edges)

    def _traverse(
        self,
        root_id: str,
        max_depth: int,
        direction: Direction,
        neighbors_of: Callable[[str], Iterable[str]],
        nodes: dict[str, GraphNode],
        edges: list[GraphEdge],
    ) -> None:
        """Breadth-first walk in one direction, filling nodes and edges in place."""
        queue: deque[tuple[str, int]] = deque([(root_id, 0)])
        visited = {root_id}
        incoming = direction is Direction.INCOMING

        while queue:
            doc_id, depth = queue.popleft()
            if depth >= max_depth:
                continue

            for neighbor in neighbors_of(doc_id):
                # Backlink indexes can outlive the documents they point at
                if incoming and not self.source.exists(neighbor):
                    logger.debug(f"Skipping stale backlink {neighbor} -> {doc_id}")
                    continue

                if neighbor not in nodes:
                    nodes[neighbor] = GraphNode(id=neighbor, depth=depth + 1, direction=direction)

                if neighbor not in visited:
                    visited.add(neighbor)
                    queue.append((neighbor, depth + 1))

                if incoming:
                    edges.append(GraphEdge(source=neighbor, target=doc_id))
                else:
                    edges.append(GraphEdge(source=doc_id, target=neighbor))


def filter_neighbor_links(nodes: dict[str, GraphNode], edges: list[GraphEdge]) -> list[GraphEdge]:
    """Drop edges joining two non-root nodes of the same depth.

    Only depth is compared, so an outgoing and an incoming node at the same
    depth count as neighbors too.
    """
    kept = []
    for edge in edges:
        source = nodes[edge.source]
        target = nodes[edge.target]
        if source.depth != target.depth or source.is_root or target.is_root:
            kept.append(edge)
    return kept


def build_graph_data(
    source: ILinkResolutionSource,
    root_id: str,
    max_out_depth: int,
    max_in_depth: int,
    include_neighbor_links: bool = True,
) -> GraphData:
    """Build a local graph with a one-off GraphBuilder."""
    return GraphBuilder(source).build(root_id, max_out_depth, max_in_depth, include_neighbor_links)
