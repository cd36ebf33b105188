"""
Data models for local graphs.

Nodes carry the direction and depth at which the traversal first reached
them; edges point from the referencing document to the referenced one.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from localgraph.utils.errors import ValidationError

if TYPE_CHECKING:
    from localgraph.utils.config import LocalGraphSettings


class Direction(Enum):
    """Which traversal first discovered a node."""
    ROOT = "root"
    OUTGOING = "outgoing"
    INCOMING = "incoming"


@dataclass(frozen=True)
class GraphNode:
    """A document in the local graph."""
    id: str
    depth: int
    direction: Direction

    @property
    def is_root(self) -> bool:
        return self.direction is Direction.ROOT


@dataclass(frozen=True)
class GraphEdge:
    """A link from the source document to the target document."""
    source: str
    target: str


@dataclass
class GraphData:
    """Nodes and edges of a local graph."""
    nodes: list[GraphNode] = field(default_factory=list)
    edges: list[GraphEdge] = field(default_factory=list)

    @classmethod
    def empty(cls) -> "GraphData":
        return cls(nodes=[], edges=[])

    @property
    def is_empty(self) -> bool:
        return not self.nodes

    @property
    def root(self) -> GraphNode | None:
        for node in self.nodes:
            if node.is_root:
                return node
        return None

    def node_ids(self) -> list[str]:
        return [node.id for node in self.nodes]

    def get_node(self, doc_id: str) -> GraphNode | None:
        for node in self.nodes:
            if node.id == doc_id:
                return node
        return None


@dataclass(frozen=True)
class GraphBuildOptions:
    """Depth bounds and edge filtering for one graph build.

    Negative depths are rejected with ``ValidationError``.
    """
    max_out_depth: int
    max_in_depth: int
    include_neighbor_links: bool = True

    def __post_init__(self):
        validate_depth("max_out_depth", self.max_out_depth)
        validate_depth("max_in_depth", self.max_in_depth)

    @classmethod
    def from_settings(cls, settings: "LocalGraphSettings") -> "GraphBuildOptions":
        return cls(
            max_out_depth=settings.default_outgoing_depth,
            max_in_depth=settings.default_incoming_depth,
            include_neighbor_links=settings.include_neighbor_links,
        )


def validate_depth(name: str, value: int) -> None:
    """Raise ``ValidationError`` unless value is a non-negative integer."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(
            f"{name} must be an integer, got {type(value).__name__}",
            context={name: value},
        )
    if value < 0:
        raise ValidationError(
            f"{name} must be non-negative, got {value}",
            suggestions=["Use 0 to disable traversal in this direction"],
            context={name: value},
        )
