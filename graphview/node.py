"""Graph nodes, their nested children and size estimation."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Protocol

_BASE_WIDTH = 120.0
HEADER_HEIGHT = 28.0
PORT_SIZE = 10.0
_CHAR_WIDTH = 7.2
_PADDING = 24.0


class _GraphHandle(Protocol):
    def handle_node_moved(self, node_id: int) -> None: ...

    def handle_drag_ended(self) -> None: ...


@dataclass
class NodeChild:
    """A child element inside a node, such as a partition or a software component."""

    name: str
    kind: str
    children: list[NodeChild] = field(default_factory=list)


def _text_len(text: str) -> int:
    return len(text.encode("utf-8"))


def estimate_node_size(
    name: str, node_type: str, children: list[NodeChild]
) -> tuple[float, float]:
    """Estimate a node's (width, height) from its name, type and children."""
    name_width = _text_len(name) * _CHAR_WIDTH + _PADDING
    type_width = _text_len(node_type) * 6.0 + 40.0
    content_width = max(name_width, type_width, _BASE_WIDTH)

    if not children:
        return content_width, HEADER_HEIGHT

    total_child_height = 0.0
    max_partition_width = 0.0
    for child in children:
        swc_count = max(len(child.children), 1)
        total_child_height += 40.0 + swc_count * 45.0 + 8.0

        partition_name_width = _text_len(child.name) * 6.0 + 50.0
        max_swc_width = max(
            (_text_len(swc.name) * 6.0 + 50.0 for swc in child.children),
            default=60.0,
        )
        partition_width = max(partition_name_width, max_swc_width * 2.0 + 20.0)
        max_partition_width = max(max_partition_width, partition_width)

    content_width = max(content_width, max_partition_width + 16.0)
    return content_width, HEADER_HEIGHT + total_child_height + 12.0


@dataclass
class GraphNode:
    """A draggable node placed in world coordinates."""

    id: int
    name: str
    node_type: str = "node"
    x: float = 0.0
    y: float = 0.0
    width: float = 80.0
    height: float = 32.0
    zoom: float = 1.0
    pan: tuple[float, float] = (0.0, 0.0)
    container_offset: tuple[float, float] = (0.0, 0.0)
    selected: bool = False
    drag_offset: Optional[tuple[float, float]] = None
    children: list[NodeChild] = field(default_factory=list)
    span: Optional[tuple[int, int]] = None
    graph: Optional[_GraphHandle] = field(default=None, repr=False, compare=False)

    def estimate_dimensions(self) -> tuple[float, float]:
        """Estimate this node's (width, height)."""
        return estimate_node_size(self.name, self.node_type, self.children)

    def refresh_size(self) -> tuple[float, float]:
        """Store the estimated dimensions as the node's width and height."""
        self.width, self.height = self.estimate_dimensions()
        return self.width, self.height

    def screen_position(self) -> tuple[float, float]:
        """Top-left corner of the node in container coordinates."""
        pan_x, pan_y = self.pan
        return pan_x + self.x * self.zoom, pan_y + self.y * self.zoom

    def begin_drag(
        self, pointer_x: float, pointer_y: float, bounds_left: float, bounds_top: float
    ) -> tuple[float, float]:
        """Record where inside the node the pointer grabbed it, once per drag."""
        if self.drag_offset is None:
            self.drag_offset = (
                (pointer_x - bounds_left) / self.zoom,
                (pointer_y - bounds_top) / self.zoom,
            )
        return self.drag_offset

    def drag_to(self, pointer_x: float, pointer_y: float) -> bool:
        """Move the node to follow the pointer; return whether it moved."""
        if self.drag_offset is None:
            return False
        offset_x, offset_y = self.drag_offset
        container_x, container_y = self.container_offset
        pan_x, pan_y = self.pan
        self.x = (pointer_x - container_x - pan_x) / self.zoom - offset_x
        self.y = (pointer_y - container_y - pan_y) / self.zoom - offset_y
        if self.graph is not None:
            self.graph.handle_node_moved(self.id)
        return True

    def end_drag(self) -> None:
        """Finish a drag and tell the owning graph."""
        self.drag_offset = None
        if self.graph is not None:
            self.graph.handle_drag_ended()