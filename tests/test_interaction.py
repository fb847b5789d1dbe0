import pytest

from graphview.graph import Graph, NodeSelected
from graphview.interaction import (
    hit_test,
    in_control_region,
    left_mouse_down,
    middle_mouse_down,
    mouse_move,
    mouse_up,
    scroll_wheel,
)
from graphview.node import GraphNode


def _graph(offset=(0.0, 0.0)):
    nodes = [
        GraphNode(id=1, name="A", x=400.0, y=300.0, width=80.0, height=32.0, span=(3, 9)),
        GraphNode(id=2, name="B", x=600.0, y=400.0, width=80.0, height=32.0),
    ]
    graph = Graph(nodes, [], 3, 0.05)
    graph.container_size = (1000.0, 800.0)
    graph.container_offset = offset
    return graph


def test_control_regions():
    graph = _graph()
    assert in_control_region(graph, 10.0, 10.0)
    assert in_control_region(graph, 980.0, 10.0)
    assert not in_control_region(graph, 500.0, 10.0)
    assert not in_control_region(graph, 10.0, 100.0)


def test_hit_test_finds_node_and_misses_empty_space():
    graph = _graph()
    assert hit_test(graph, 420.0, 310.0) == 0
    assert hit_test(graph, 610.0, 420.0) == 1
    assert hit_test(graph, 50.0, 500.0) is None


def test_hit_test_respects_zoom_and_pan():
    graph = _graph()
    graph.set_zoom(2.0)
    graph.set_pan(-100.0, -50.0)
    left, top = graph.nodes[0].screen_position()
    assert hit_test(graph, left + 1.0, top + 1.0) == 0
    assert hit_test(graph, 420.0, 310.0) is None


def test_left_click_selects_and_emits():
    graph = _graph(offset=(5.0, 7.0))
    events = []
    graph.subscribe(events.append)
    hit = left_mouse_down(graph, 425.0, 317.0)
    assert hit == 0
    assert graph.nodes[0].selected
    assert not graph.nodes[1].selected
    assert events == [NodeSelected(node_id=1, span=(3, 9))]
    assert not graph.is_panning


def test_click_without_shift_replaces_selection():
    graph = _graph()
    left_mouse_down(graph, 420.0, 310.0)
    left_mouse_down(graph, 610.0, 410.0)
    assert [node.selected for node in graph.nodes] == [False, True]


def test_shift_click_adds_to_selection():
    graph = _graph()
    left_mouse_down(graph, 420.0, 310.0)
    left_mouse_down(graph, 610.0, 410.0, shift=True)
    assert all(node.selected for node in graph.nodes)


def test_click_on_empty_space_clears_selection_and_starts_pan():
    graph = _graph()
    graph.nodes[0].selected = True
    assert left_mouse_down(graph, 100.0, 500.0) is None
    assert not any(node.selected for node in graph.nodes)
    assert graph.is_panning
    assert graph.pan_start_pos == (100.0, 500.0)
    assert graph.pan_start == graph.pan


def test_click_on_controls_is_ignored():
    graph = _graph()
    events = []
    graph.subscribe(events.append)
    graph.nodes[0].selected = True
    revision = graph.revision
    assert left_mouse_down(graph, 20.0, 20.0) is None
    assert graph.nodes[0].selected
    assert not graph.is_panning
    assert events == []
    assert graph.revision == revision


def test_drag_pans_by_pointer_delta():
    graph = _graph(offset=(10.0, 20.0))
    middle_mouse_down(graph, 110.0, 520.0)
    assert graph.is_panning
    assert mouse_move(graph, 140.0, 500.0, left_pressed=False, middle_pressed=True)
    assert graph.pan == (30.0, -20.0)
    assert all(node.pan == graph.pan for node in graph.nodes)


def test_move_without_button_stops_panning():
    graph = _graph()
    left_mouse_down(graph, 100.0, 500.0)
    assert not mouse_move(graph, 200.0, 600.0, left_pressed=False, middle_pressed=False)
    assert not graph.is_panning
    assert graph.pan == (0.0, 0.0)


def test_move_when_not_panning_does_nothing():
    graph = _graph()
    assert not mouse_move(graph, 200.0, 600.0, left_pressed=True, middle_pressed=False)
    assert graph.pan == (0.0, 0.0)


def test_mouse_up_ends_pan():
    graph = _graph()
    middle_mouse_down(graph, 100.0, 500.0)
    mouse_up(graph)
    assert not graph.is_panning


def test_scroll_up_zooms_in_around_cursor():
    graph = _graph(offset=(10.0, 20.0))
    cursor = (310.0, 220.0)
    local = (cursor[0] - 10.0, cursor[1] - 20.0)
    before = ((local[0] - graph.pan[0]) / graph.zoom, (local[1] - graph.pan[1]) / graph.zoom)
    assert scroll_wheel(graph, *cursor, 3.0)
    assert graph.zoom == pytest.approx(1.1)
    after = ((local[0] - graph.pan[0]) / graph.zoom, (local[1] - graph.pan[1]) / graph.zoom)
    assert after == pytest.approx(before)
    assert all(node.zoom == graph.zoom and node.pan == graph.pan for node in graph.nodes)


def test_scroll_down_zooms_out():
    graph = _graph()
    scroll_wheel(graph, 100.0, 100.0, -1.0)
    assert graph.zoom == pytest.approx(0.9)


def test_scroll_zoom_is_clamped():
    graph = _graph()
    for _ in range(50):
        scroll_wheel(graph, 100.0, 100.0, 1.0)
    assert graph.zoom == pytest.approx(4.0)
    for _ in range(100):
        scroll_wheel(graph, 100.0, 100.0, -1.0)
    assert graph.zoom == pytest.approx(0.25)


def test_zero_scroll_changes_nothing():
    graph = _graph()
    assert not scroll_wheel(graph, 100.0, 100.0, 0.0)
    assert graph.zoom == 1.0
    assert graph.pan == (0.0, 0.0)