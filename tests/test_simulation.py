import math

import pytest

from graphview.edge import GraphEdge
from graphview.graph import Graph, LayoutMode
from graphview.node import GraphNode
from graphview.simulation import (
    ForceParameters,
    resolve_overlaps,
    run_frame,
    simulation_step,
)


def _graph(positions, edges=(), playing=True):
    nodes = [
        GraphNode(id=i + 1, name=f"Node {i + 1}", x=x, y=y, width=80.0, height=32.0)
        for i, (x, y) in enumerate(positions)
    ]
    graph = Graph(nodes, [GraphEdge(s, t) for s, t in edges], 3, 0.05)
    graph.playing = playing
    return graph


def _boxes_overlap(xs, ys, widths, heights, i, j, padding):
    dx = (xs[j] + widths[j] / 2) - (xs[i] + widths[i] / 2)
    dy = (ys[j] + heights[j] / 2) - (ys[i] + heights[i] / 2)
    sep_x = (widths[i] + widths[j]) / 2 + padding
    sep_y = (heights[i] + heights[j]) / 2 + padding
    return sep_x - abs(dx) > 0 and sep_y - abs(dy) > 0


def test_run_frame_does_nothing_when_paused():
    graph = _graph([(100.0, 100.0), (500.0, 400.0)], playing=False)
    assert run_frame(graph) is False
    assert [(n.x, n.y) for n in graph.nodes] == [(100.0, 100.0), (500.0, 400.0)]
    assert graph.sim_tick == 0


@pytest.mark.parametrize("mode", [LayoutMode.DAGRE, LayoutMode.ARCHVIZ])
def test_run_frame_only_in_force_mode(mode):
    graph = _graph([(100.0, 100.0), (500.0, 400.0)])
    graph.layout_mode = mode
    assert run_frame(graph) is False
    assert graph.nodes[0].x == 100.0
    assert graph.sim_tick == 0


def test_run_frame_empty_graph():
    graph = _graph([])
    assert run_frame(graph) is False
    assert graph.sim_tick == 0


def test_run_frame_advances_tick_and_moves_nodes():
    graph = _graph([(100.0, 100.0), (700.0, 500.0)], edges=[(0, 1)])
    revision = graph.revision
    assert run_frame(graph) is True
    assert graph.sim_tick == 1
    assert graph.revision > revision
    assert (graph.nodes[0].x, graph.nodes[0].y) != (100.0, 100.0)


def test_run_frame_tick_wraps():
    graph = _graph([(100.0, 100.0)])
    graph.sim_tick = 2**64 - 1
    assert run_frame(graph) is True
    assert graph.sim_tick == 0


def test_run_frame_matches_repeated_steps():
    positions = [(100.0, 100.0), (300.0, 250.0), (700.0, 500.0)]
    edges = [(0, 1), (1, 2)]
    graph = _graph(positions, edges=edges)
    params = ForceParameters()
    xs = [x for x, _ in positions]
    ys = [y for _, y in positions]
    widths = [80.0] * 3
    heights = [32.0] * 3
    for _ in range(params.steps_per_frame):
        xs, ys = simulation_step(
            xs, ys, widths, heights, [GraphEdge(s, t) for s, t in edges], params
        )
    run_frame(graph, params)
    assert [n.x for n in graph.nodes] == pytest.approx(xs)
    assert [n.y for n in graph.nodes] == pytest.approx(ys)


def test_single_node_at_center_stays():
    xs, ys = simulation_step([400.0], [300.0], [0.0], [0.0], [])
    assert xs == [400.0]
    assert ys == [300.0]


def test_displacement_is_capped():
    params = ForceParameters()
    xs, ys = simulation_step([10000.0], [300.0], [10.0], [10.0], [], params)
    moved = math.hypot(xs[0] - 10000.0, ys[0] - 300.0)
    assert moved <= params.max_disp + 1e-9
    assert xs[0] < 10000.0


def test_gravity_pulls_toward_center():
    xs, ys = simulation_step([500.0], [400.0], [0.0], [0.0], [])
    assert 400.0 < xs[0] < 500.0
    assert 300.0 < ys[0] < 400.0


def test_repulsion_pushes_nearby_nodes_apart_symmetrically():
    xs, ys = simulation_step([350.0, 450.0], [300.0, 300.0], [0.0, 0.0], [0.0, 0.0], [])
    assert xs[1] - xs[0] > 100.0
    assert xs[0] + xs[1] == pytest.approx(800.0)
    assert ys == pytest.approx([300.0, 300.0])


def test_edge_attraction_brings_nodes_closer():
    start_x = [-2000.0, 2800.0]
    start_y = [300.0, 300.0]
    size = [10.0, 10.0]
    free_x, _ = simulation_step(start_x, start_y, size, size, [])
    linked_x, _ = simulation_step(start_x, start_y, size, size, [GraphEdge(0, 1)])
    assert linked_x[1] - linked_x[0] < free_x[1] - free_x[0]


def test_out_of_range_edges_are_ignored():
    xs = [100.0, 700.0]
    ys = [100.0, 500.0]
    size = [80.0, 80.0]
    plain = simulation_step(xs, ys, size, size, [])
    with_bad = simulation_step(xs, ys, size, size, [GraphEdge(0, 5), GraphEdge(9, 1)])
    assert plain == with_bad


def test_simulation_step_does_not_mutate_inputs():
    xs = [100.0, 120.0]
    ys = [100.0, 110.0]
    simulation_step(xs, ys, [80.0, 80.0], [32.0, 32.0], [GraphEdge(0, 1)])
    assert xs == [100.0, 120.0]
    assert ys == [100.0, 110.0]


def test_step_leaves_no_overlap_for_two_nodes():
    widths = [80.0, 80.0]
    heights = [32.0, 32.0]
    xs, ys = simulation_step([400.0, 405.0], [300.0, 302.0], widths, heights, [])
    assert len(xs) == 2 and len(ys) == 2
    centre_dx = abs((xs[1] + 40.0) - (xs[0] + 40.0))
    centre_dy = abs((ys[1] + 16.0) - (ys[0] + 16.0))
    # Required separation: half widths plus padding, half heights plus padding.
    assert centre_dx >= 100.0 or centre_dy >= 52.0


def test_resolve_overlaps_keeps_separated_boxes():
    xs, ys = resolve_overlaps(
        [0.0, 500.0], [0.0, 500.0], [80.0, 80.0], [32.0, 32.0], 20.0, 3
    )
    assert xs == [0.0, 500.0]
    assert ys == [0.0, 500.0]


def test_resolve_overlaps_pushes_along_smaller_overlap_axis():
    xs, ys = resolve_overlaps([0.0, 0.0], [0.0, 5.0], [80.0, 80.0], [32.0, 32.0], 20.0, 1)
    assert xs == [0.0, 0.0]
    assert ys[0] < 0.0 and ys[1] > 5.0


def test_resolve_overlaps_zero_iterations_is_identity():
    xs, ys = resolve_overlaps([0.0, 1.0], [0.0, 1.0], [80.0, 80.0], [32.0, 32.0], 20.0, 0)
    assert (xs, ys) == ([0.0, 1.0], [0.0, 1.0])


def test_resolve_overlaps_does_not_mutate_inputs():
    xs = [0.0, 10.0]
    ys = [0.0, 0.0]
    resolve_overlaps(xs, ys, [80.0, 80.0], [32.0, 32.0], 20.0, 3)
    assert xs == [0.0, 10.0]
    assert ys == [0.0, 0.0]