"""The graph model: nodes, edges, view transform and layout modes."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Mapping, Optional, Union

from .edge import GraphEdge
from .node import GraphNode

Positions = Optional[Mapping[int, tuple[float, float]]]

_MIN_ZOOM = 0.1
_MAX_ZOOM = 3.0
_MAX_FIT_ZOOM = 2.0
_LAYOUT_MARGIN = 60.0
_FIT_PADDING = 40.0
_LAYOUT_ORIGIN = 50.0
_GRID_GAP = 50.0


class EdgeRouting(Enum):
    """How edges are drawn between ports."""

    STRAIGHT = "straight"
    MANHATTAN = "manhattan"


class LayoutMode(Enum):
    """Which layout algorithm positions the nodes."""

    FORCE = "Force"
    DAGRE = "Dagre"
    ARCHVIZ = "ArchViz"


@dataclass(frozen=True)
class NodeSelected:
    """Emitted when a node is selected."""

    node_id: int
    span: Optional[tuple[int, int]] = None


@dataclass(frozen=True)
class NodeMoved:
    """Emitted when a node has been moved."""

    node_id: int


GraphEvent = Union[NodeSelected, NodeMoved]


class Graph:
    """Nodes and edges together with zoom, pan and layout state."""

    def __init__(
        self, nodes: list[GraphNode], edges: list[GraphEdge], k: int, beta: float
    ) -> None:
        self.zoom = 1.0
        self.pan: tuple[float, float] = (0.0, 0.0)
        for node in nodes:
            node.zoom = self.zoom
            node.pan = self.pan
        self.nodes: list[GraphNode] = list(nodes)
        self.edges: list[GraphEdge] = list(edges)
        self.k = k
        self.beta = beta
        self.sim_tick = 0
        self.playing = False
        self.container_offset: tuple[float, float] = (0.0, 0.0)
        self.container_size: tuple[float, float] = (0.0, 0.0)
        self.needs_layout = True
        self.needs_fit_to_content = False
        self.is_panning = False
        self.pan_start: tuple[float, float] = (0.0, 0.0)
        self.pan_start_pos: tuple[float, float] = (0.0, 0.0)
        self.edge_routing = EdgeRouting.STRAIGHT
        self.layout_mode = LayoutMode.FORCE
        self.is_dragging_nodes = False
        self.revision = 0
        self._listeners: list[Callable[[GraphEvent], None]] = []

    # -- change notification -------------------------------------------------

    def _notify(self) -> None:
        self.revision += 1

    def subscribe(self, callback: Callable[[GraphEvent], None]) -> None:
        """Register a callback for events emitted by this graph."""
        self._listeners.append(callback)

    def emit(self, event: GraphEvent) -> None:
        """Deliver an event to every subscriber."""
        for listener in list(self._listeners):
            listener(event)

    # -- view state ----------------------------------------------------------

    def _sync_view(self) -> None:
        for node in self.nodes:
            node.zoom = self.zoom
            node.pan = self.pan

    def set_container(
        self, offset: tuple[float, float], size: tuple[float, float]
    ) -> None:
        """Record the container's position and size; relayout when the size changes."""
        offset = (float(offset[0]), float(offset[1]))
        size = (float(size[0]), float(size[1]))
        if offset != self.container_offset:
            self.container_offset = offset
            for node in self.nodes:
                node.container_offset = offset
        if size != self.container_size:
            self.container_size = size
            self.layout_nodes()
            self.fit_to_content()

    def layout_nodes(self) -> None:
        """Rescale node positions once so they fit inside the container margins."""
        container_width, container_height = self.container_size
        if not self.needs_layout or container_width <= 0.0 or container_height <= 0.0:
            return
        self.needs_layout = False

        width = container_width - _LAYOUT_MARGIN * 2.0
        height = container_height - _LAYOUT_MARGIN * 2.0
        if width <= 0.0 or height <= 0.0 or not self.nodes:
            return

        min_x = min(node.x for node in self.nodes)
        max_x = max(node.x for node in self.nodes)
        min_y = min(node.y for node in self.nodes)
        max_y = max(node.y for node in self.nodes)

        current_width = max(max_x - min_x, 1.0)
        current_height = max(max_y - min_y, 1.0)
        scale = min(width / current_width, height / current_height)
        span_x = min(width, current_width * scale)
        span_y = min(height, current_height * scale)

        for node in self.nodes:
            norm_x = (node.x - min_x) / current_width
            norm_y = (node.y - min_y) / current_height
            node.x = _LAYOUT_MARGIN + norm_x * span_x
            node.y = _LAYOUT_MARGIN + norm_y * span_y

    def set_edge_routing(self, routing: EdgeRouting) -> None:
        """Change the edge routing style."""
        if self.edge_routing != routing:
            self.edge_routing = routing
            self._notify()

    def update_model(self, nodes: list[GraphNode], edges: list[GraphEdge]) -> None:
        """Replace all nodes and edges, attaching the nodes to this graph."""
        for node in nodes:
            node.zoom = self.zoom
            node.pan = self.pan
            node.container_offset = self.container_offset
            node.graph = self
        self.nodes = list(nodes)
        self.edges = list(edges)
        self.needs_layout = True
        self._notify()

    def set_zoom(self, new_zoom: float) -> None:
        """Set the zoom level, clamped to the allowed range."""
        new_zoom = min(max(new_zoom, _MIN_ZOOM), _MAX_ZOOM)
        if abs(new_zoom - self.zoom) < 0.001:
            return
        self.zoom = new_zoom
        for node in self.nodes:
            node.zoom = new_zoom
        self._notify()

    def set_pan(self, pan_x: float, pan_y: float) -> None:
        """Set the pan offset on the graph and all nodes."""
        self.pan = (pan_x, pan_y)
        for node in self.nodes:
            node.pan = self.pan
        self._notify()

    # -- dragging ------------------------------------------------------------

    def handle_node_moved(self, node_id: int) -> None:
        """React to a node moving; routed paths are dropped in ArchViz mode."""
        if self.layout_mode is LayoutMode.ARCHVIZ:
            for edge in self.edges:
                edge.clear_path()
            self._notify()

    def handle_drag_started(self) -> None:
        """Mark that nodes are being dragged."""
        self.is_dragging_nodes = True
        self._notify()

    def handle_drag_ended(self) -> None:
        """Mark that node dragging has finished."""
        self.is_dragging_nodes = False
        self._notify()

    # -- layouts -------------------------------------------------------------

    def fit_to_content(self) -> None:
        """Choose zoom and pan so all nodes are visible and centred."""
        container_width, container_height = self.container_size
        if not self.nodes or container_width <= 0.0:
            return

        boxes = []
        for node in self.nodes:
            w, h = node.estimate_dimensions()
            boxes.append((node.x, node.y, node.x + w, node.y + h))
        min_x = min(box[0] for box in boxes)
        min_y = min(box[1] for box in boxes)
        max_x = max(box[2] for box in boxes)
        max_y = max(box[3] for box in boxes)

        content_width = max_x - min_x
        content_height = max_y - min_y
        if content_width <= 0.0 or content_height <= 0.0:
            return

        available_width = container_width - _FIT_PADDING * 2.0
        available_height = container_height - _FIT_PADDING * 2.0
        zoom = min(available_width / content_width, available_height / content_height)
        zoom = min(max(zoom, _MIN_ZOOM), _MAX_FIT_ZOOM)

        center_x = (min_x + max_x) / 2.0
        center_y = (min_y + max_y) / 2.0
        self.zoom = zoom
        self.pan = (
            container_width / 2.0 - center_x * zoom,
            container_height / 2.0 - center_y * zoom,
        )
        self._sync_view()
        self._notify()

    def _max_node_size(self) -> tuple[float, float]:
        max_width = max((node.width for node in self.nodes), default=0.0)
        max_height = max((node.height for node in self.nodes), default=0.0)
        return max(max_width, 0.0), max(max_height, 0.0)

    def apply_grid_layout(self) -> None:
        """Arrange nodes on a square-ish grid spaced by the largest node size."""
        count = len(self.nodes)
        if count == 0:
            return
        max_width, max_height = self._max_node_size()
        cols = math.ceil(math.sqrt(count))
        spacing_x = max_width + _GRID_GAP
        spacing_y = max_height + _GRID_GAP
        for index, node in enumerate(self.nodes):
            row, col = divmod(index, cols)
            node.x = _LAYOUT_ORIGIN + col * spacing_x
            node.y = _LAYOUT_ORIGIN + row * spacing_y
        self._sync_view()
        self._notify()

    def apply_dagre_layout(self, positions: Positions) -> None:
        """Place nodes at hierarchical layout positions, shifted so the minimum is at (50, 50).

        ``positions`` maps node index to a computed position; without any
        positions the nodes fall back to a grid.
        """
        if not self.nodes:
            return
        if not positions:
            self.apply_grid_layout()
            return

        known = [
            positions[index] for index in range(len(self.nodes)) if index in positions
        ]
        min_x = min((x for x, _ in known), default=math.inf)
        min_y = min((y for _, y in known), default=math.inf)
        offset_x = _LAYOUT_ORIGIN - min_x
        offset_y = _LAYOUT_ORIGIN - min_y

        for index, node in enumerate(self.nodes):
            x, y = positions.get(index, (0.0, 0.0))
            node.x = x + offset_x
            node.y = y + offset_y
        self._sync_view()
        self._notify()

    def _apply_fixed_positions(self, positions: Positions) -> None:
        if not positions:
            return
        for index, node in enumerate(self.nodes):
            if index in positions:
                node.x, node.y = positions[index]
        self._sync_view()
        self._notify()

    def cycle_layout_mode(self, positions: Positions = None) -> LayoutMode:
        """Switch Force -> Dagre -> ArchViz -> Force and return the new mode."""
        for edge in self.edges:
            edge.clear_path()
        if self.layout_mode is LayoutMode.FORCE:
            self.apply_dagre_layout(positions)
            self.playing = False
            self.layout_mode = LayoutMode.DAGRE
        elif self.layout_mode is LayoutMode.DAGRE:
            self._apply_fixed_positions(positions)
            self.playing = False
            self.layout_mode = LayoutMode.ARCHVIZ
        else:
            self.layout_mode = LayoutMode.FORCE
        self._notify()
        return self.layout_mode

    def press_play(self, positions: Positions = None) -> None:
        """Toggle the simulation in Force mode, or reapply the layout otherwise."""
        if self.layout_mode is LayoutMode.FORCE:
            self.playing = not self.playing
        elif self.layout_mode is LayoutMode.DAGRE:
            self.apply_dagre_layout(positions)
        else:
            self._apply_fixed_positions(positions)
        self._notify()

    # -- labels --------------------------------------------------------------

    def zoom_percent(self) -> int:
        """Zoom level as a whole percentage, truncated."""
        return int(self.zoom * 100.0)

    def layout_label(self) -> str:
        """Name of the current layout mode."""
        return self.layout_mode.value

    def play_symbol(self) -> str:
        """Symbol for the play control in the current state."""
        if self.layout_mode in (LayoutMode.DAGRE, LayoutMode.ARCHVIZ):
            return "⟳"
        if self.playing:
            return "||"
        return "▶"