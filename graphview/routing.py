"""Edge geometry: port-to-port routes, screen transforms and stroke triangles."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from itertools import pairwise

from .edge import GraphEdge
from .graph import Graph, LayoutMode
from .node import HEADER_HEIGHT, GraphNode

Point = tuple[float, float]
Triangle = tuple[Point, Point, Point]

PORT_Y_OFFSET = HEADER_HEIGHT / 2.0
ROUTE_CLEARANCE = 30.0
STUB_LENGTH = 15.0
_MIN_SEGMENT_LENGTH = 0.0001

SOURCE_COLOR = 0xFF8844
TARGET_COLOR = 0x4488FF
NORMAL_COLOR = 0x323232
SOURCE_GLOW_RGBA = 0xFF884460
TARGET_GLOW_RGBA = 0x4488FF60


class EdgeSelection(Enum):
    """How an edge relates to the current node selection."""

    NONE = "none"
    SOURCE_SELECTED = "source"
    TARGET_SELECTED = "target"
    BOTH_SELECTED = "both"

    @property
    def is_outgoing(self) -> bool:
        """Drawn in the outgoing colour (source or both ends selected)."""
        return self in (EdgeSelection.SOURCE_SELECTED, EdgeSelection.BOTH_SELECTED)

    @property
    def is_incoming(self) -> bool:
        """Drawn in the incoming colour (only the target selected)."""
        return self is EdgeSelection.TARGET_SELECTED


@dataclass
class EdgeDrawing:
    """An edge's screen-space polyline and its selection state."""

    path: list[Point]
    selection: EdgeSelection


def edge_selection(source_selected: bool, target_selected: bool) -> EdgeSelection:
    """Classify an edge by whether its source and target nodes are selected."""
    if source_selected and target_selected:
        return EdgeSelection.BOTH_SELECTED
    if source_selected:
        return EdgeSelection.SOURCE_SELECTED
    if target_selected:
        return EdgeSelection.TARGET_SELECTED
    return EdgeSelection.NONE


def port_route(source: GraphNode, target: GraphNode, zoom: float) -> list[Point]:
    """Orthogonal route from the source's right port over the top to the target's left port.

    The six points are in world coordinates: source port, stub right, up,
    across, down to the target stub, and the target port.
    """
    x1 = source.x + source.width
    y1 = source.y + PORT_Y_OFFSET
    x2 = target.x
    y2 = target.y + PORT_Y_OFFSET

    clearance = ROUTE_CLEARANCE * zoom
    stub = STUB_LENGTH * zoom

    s1 = (x1 + stub, y1)
    s2 = (x2 - stub, y2)
    route_y = min(y1, y2) - clearance
    c1 = (s1[0], route_y)
    c2 = (s2[0], route_y)
    return [(x1, y1), s1, c1, c2, s2, (x2, y2)]


def to_screen(
    points: list[Point], offset: Point, pan: Point, zoom: float
) -> list[Point]:
    """Map world points to screen points through container offset, pan and zoom."""
    offset_x, offset_y = offset
    pan_x, pan_y = pan
    return [
        (offset_x + pan_x + x * zoom, offset_y + pan_y + y * zoom) for x, y in points
    ]


def edge_screen_path(graph: Graph, edge: GraphEdge) -> list[Point]:
    """Screen-space polyline for an edge: its stored path in ArchViz mode, else a port route."""
    if graph.layout_mode is LayoutMode.ARCHVIZ and edge.path:
        world = list(edge.path)
    else:
        world = port_route(
            graph.nodes[edge.source], graph.nodes[edge.target], graph.zoom
        )
    return to_screen(world, graph.container_offset, graph.pan, graph.zoom)


def collect_edge_drawings(graph: Graph) -> list[EdgeDrawing]:
    """Screen paths and selection state of every edge whose ends exist."""
    count = len(graph.nodes)
    drawings = []
    for edge in graph.edges:
        if edge.source >= count or edge.target >= count:
            continue
        selection = edge_selection(
            graph.nodes[edge.source].selected, graph.nodes[edge.target].selected
        )
        drawings.append(EdgeDrawing(edge_screen_path(graph, edge), selection))
    return drawings


def segment_triangles(p1: Point, p2: Point, half_thickness: float) -> list[Triangle]:
    """Two triangles covering a thick line segment; none for a degenerate segment."""
    dir_x = p2[0] - p1[0]
    dir_y = p2[1] - p1[1]
    length = math.hypot(dir_x, dir_y)
    if length <= _MIN_SEGMENT_LENGTH:
        return []
    scale = half_thickness / length
    normal_x = -dir_y * scale
    normal_y = dir_x * scale

    p1a = (p1[0] + normal_x, p1[1] + normal_y)
    p1b = (p1[0] - normal_x, p1[1] - normal_y)
    p2a = (p2[0] + normal_x, p2[1] + normal_y)
    p2b = (p2[0] - normal_x, p2[1] - normal_y)
    return [(p1a, p1b, p2a), (p2a, p1b, p2b)]


def path_triangles(points: list[Point], half_thickness: float) -> list[Triangle]:
    """Triangles stroking every segment of a polyline."""
    return [
        triangle
        for p1, p2 in pairwise(points)
        for triangle in segment_triangles(p1, p2, half_thickness)
    ]


def stroke_thickness(zoom: float) -> float:
    """Base edge thickness at a zoom level, never thinner than one pixel."""
    return max(1.0 * zoom, 1.0)