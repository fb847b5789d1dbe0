"""Edges between graph nodes."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class GraphEdge:
    """A directed edge from one node index to another, with optional waypoints."""

    source: int
    target: int
    path: list[tuple[float, float]] = field(default_factory=list)

    def clear_path(self) -> None:
        """Drop any routed waypoints so the edge is routed dynamically."""
        self.path.clear()