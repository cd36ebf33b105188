"""
Node colors for local graphs.

The root has its own color; outgoing and incoming nodes take the palette
entry for their depth, reusing the last entry for deeper nodes.
"""

from dataclasses import dataclass, field

from localgraph.graph.models import Direction, GraphNode
from localgraph.utils.config import LocalGraphSettings


@dataclass
class GraphPalette:
    """Colors for root, outgoing and incoming nodes."""
    root_color: str = "#ff6600"
    outgoing_colors: list[str] = field(default_factory=list)
    incoming_colors: list[str] = field(default_factory=list)

    @classmethod
    def from_settings(cls, settings: LocalGraphSettings) -> "GraphPalette":
        return cls(
            root_color=settings.root_color,
            outgoing_colors=list(settings.outgoing_colors),
            incoming_colors=list(settings.incoming_colors),
        )

    def color_for(self, node: GraphNode) -> str:
        if node.direction is Direction.ROOT:
            return self.root_color

        colors = self.outgoing_colors if node.direction is Direction.OUTGOING else self.incoming_colors
        if not colors:
            return self.root_color

        index = min(max(node.depth - 1, 0), len(colors) - 1)
        return colors[index]
