"""Pointer handling for a graph: selection, panning and zoom toward the cursor."""

from __future__ import annotations

from typing import Optional

from .graph import Graph, NodeSelected

_CONTROLS_WIDTH = 290.0
_CONTROLS_HEIGHT = 60.0
_PLAY_BUTTON_MARGIN = 50.0
_PLAY_BUTTON_HEIGHT = 50.0
_SCROLL_ZOOM_IN = 1.1
_SCROLL_ZOOM_OUT = 0.9
_SCROLL_MIN_ZOOM = 0.25
_SCROLL_MAX_ZOOM = 4.0


def _to_local(graph: Graph, window_x: float, window_y: float) -> tuple[float, float]:
    offset_x, offset_y = graph.container_offset
    return window_x - offset_x, window_y - offset_y


def _apply_view(graph: Graph) -> None:
    for node in graph.nodes:
        node.zoom = graph.zoom
        node.pan = graph.pan


def _clear_selection(graph: Graph) -> None:
    for node in graph.nodes:
        node.selected = False


def in_control_region(graph: Graph, x: float, y: float) -> bool:
    """Whether a container-local point lies over the controls panel or the play button."""
    container_width = graph.container_size[0]
    in_controls_panel = x < _CONTROLS_WIDTH and y < _CONTROLS_HEIGHT
    in_play_button = x > container_width - _PLAY_BUTTON_MARGIN and y < _PLAY_BUTTON_HEIGHT
    return in_controls_panel or in_play_button


def hit_test(graph: Graph, x: float, y: float) -> Optional[int]:
    """Index of the first node whose scaled box contains a container-local point."""
    pan_x, pan_y = graph.pan
    zoom = graph.zoom
    for index, node in enumerate(graph.nodes):
        left = pan_x + node.x * zoom
        top = pan_y + node.y * zoom
        if (
            left <= x <= left + node.width * zoom
            and top <= y <= top + node.height * zoom
        ):
            return index
    return None


def _start_panning(graph: Graph, x: float, y: float) -> None:
    graph.is_panning = True
    graph.pan_start = graph.pan
    graph.pan_start_pos = (x, y)


def left_mouse_down(
    graph: Graph, window_x: float, window_y: float, shift: bool = False
) -> Optional[int]:
    """Select the node under the pointer, or start panning over empty space.

    Shift adds to the current selection. Returns the index of the selected
    node, or None when nothing was hit or the press landed on a control.
    """
    x, y = _to_local(graph, window_x, window_y)
    if in_control_region(graph, x, y):
        return None

    hit = hit_test(graph, x, y)
    if hit is None:
        _clear_selection(graph)
        _start_panning(graph, x, y)
    else:
        if not shift:
            _clear_selection(graph)
        target = graph.nodes[hit]
        target.selected = True
        graph.emit(NodeSelected(node_id=target.id, span=target.span))
    graph._notify()
    return hit


def middle_mouse_down(graph: Graph, window_x: float, window_y: float) -> None:
    """Start panning from the pointer position."""
    _start_panning(graph, *_to_local(graph, window_x, window_y))
    graph._notify()


def mouse_up(graph: Graph) -> None:
    """Stop panning."""
    graph.is_panning = False
    graph._notify()


def mouse_move(
    graph: Graph,
    window_x: float,
    window_y: float,
    left_pressed: bool,
    middle_pressed: bool,
) -> bool:
    """Pan with the pointer while a pan is in progress; return whether the pan changed.

    A pan ends as soon as neither the left nor the middle button is held.
    """
    if not graph.is_panning:
        return False
    if not (left_pressed or middle_pressed):
        graph.is_panning = False
        graph._notify()
        return False

    x, y = _to_local(graph, window_x, window_y)
    start_x, start_y = graph.pan_start_pos
    pan_x, pan_y = graph.pan_start
    graph.pan = (pan_x + (x - start_x), pan_y + (y - start_y))
    _apply_view(graph)
    graph._notify()
    return True


def scroll_wheel(graph: Graph, window_x: float, window_y: float, delta_y: float) -> bool:
    """Zoom in or out around the pointer; return whether the view changed."""
    if delta_y == 0.0:
        return False
    factor = _SCROLL_ZOOM_IN if delta_y > 0.0 else _SCROLL_ZOOM_OUT
    old_zoom = graph.zoom
    new_zoom = min(max(old_zoom * factor, _SCROLL_MIN_ZOOM), _SCROLL_MAX_ZOOM)

    x, y = _to_local(graph, window_x, window_y)
    pan_x, pan_y = graph.pan
    world_x = (x - pan_x) / old_zoom
    world_y = (y - pan_y) / old_zoom
    graph.pan = (x - world_x * new_zoom, y - world_y * new_zoom)
    graph.zoom = new_zoom
    _apply_view(graph)
    graph._notify()
    return True