"""Force-directed layout simulation with grid-approximated repulsion and overlap removal."""

from __future__ import annotations

import math
from collections import defaultdict
from dataclasses import dataclass
from typing import Iterable, Optional

from .edge import GraphEdge
from .graph import Graph, LayoutMode

_MASK64 = 0xFFFFFFFFFFFFFFFF
_NEIGHBOUR_CELLS = [(dx, dy) for dy in (-1, 0, 1) for dx in (-1, 0, 1)]
_MIN_CELL = 300.0
_CELL_MARGIN = 100.0
_SOFTENING = 0.01


@dataclass(frozen=True)
class ForceParameters:
    """Tuning constants for the force simulation."""

    repulsion: float = 1200.0
    attraction: float = 0.03
    gravity: float = 0.006
    damping: float = 0.9
    dt: float = 0.8
    max_disp: float = 15.0
    center_x: float = 400.0
    center_y: float = 300.0
    padding: float = 20.0
    overlap_iterations: int = 3
    steps_per_frame: int = 5


def _cell_of(x: float, y: float, cell: float) -> tuple[int, int]:
    return math.floor(x / cell), math.floor(y / cell)


def resolve_overlaps(
    xs: list[float],
    ys: list[float],
    widths: list[float],
    heights: list[float],
    padding: float,
    iterations: int,
) -> tuple[list[float], list[float]]:
    """Push overlapping node boxes apart along their axis of least overlap.

    Returns new x and y lists; the inputs are left untouched.
    """
    xs = list(xs)
    ys = list(ys)
    count = len(xs)
    for _ in range(iterations):
        for i in range(count):
            for j in range(i + 1, count):
                sep_x = (widths[i] + widths[j]) / 2.0 + padding
                sep_y = (heights[i] + heights[j]) / 2.0 + padding
                dx = (xs[j] + widths[j] / 2.0) - (xs[i] + widths[i] / 2.0)
                dy = (ys[j] + heights[j] / 2.0) - (ys[i] + heights[i] / 2.0)
                overlap_x = sep_x - abs(dx)
                overlap_y = sep_y - abs(dy)
                if overlap_x <= 0.0 or overlap_y <= 0.0:
                    continue
                if overlap_x < overlap_y:
                    push = overlap_x / 2.0 + 1.0
                    if dx < 0.0:
                        push = -push
                    xs[i] -= push
                    xs[j] += push
                else:
                    push = overlap_y / 2.0 + 1.0
                    if dy < 0.0:
                        push = -push
                    ys[i] -= push
                    ys[j] += push
    return xs, ys


def simulation_step(
    xs: list[float],
    ys: list[float],
    widths: list[float],
    heights: list[float],
    edges: Iterable[GraphEdge],
    params: Optional[ForceParameters] = None,
) -> tuple[list[float], list[float]]:
    """Advance the simulation by one step and return the new x and y positions."""
    params = params or ForceParameters()
    count = len(xs)
    fx = [0.0] * count
    fy = [0.0] * count

    max_dim = max([*widths, *heights], default=0.0)
    max_dim = max(max_dim, 0.0)
    cell = max(max_dim + _CELL_MARGIN, _MIN_CELL)

    bins: dict[tuple[int, int], list[int]] = defaultdict(list)
    cells = [_cell_of(x, y, cell) for x, y in zip(xs, ys)]
    for index, key in enumerate(cells):
        bins[key].append(index)

    centers = [
        (x + w / 2.0, y + h / 2.0) for x, y, w, h in zip(xs, ys, widths, heights)
    ]

    for i, (gx, gy) in enumerate(cells):
        cx_i, cy_i = centers[i]
        for dxg, dyg in _NEIGHBOUR_CELLS:
            for j in bins.get((gx + dxg, gy + dyg), ()):
                if j <= i:
                    continue
                cx_j, cy_j = centers[j]
                dx = cx_j - cx_i
                dy = cy_j - cy_i
                inv = 1.0 / (dx * dx + dy * dy + _SOFTENING)
                force_x = params.repulsion * dx * inv
                force_y = params.repulsion * dy * inv
                fx[i] -= force_x
                fy[i] -= force_y
                fx[j] += force_x
                fy[j] += force_y

    for edge in edges:
        i, j = edge.source, edge.target
        if i >= count or j >= count:
            continue
        force_x = params.attraction * (xs[j] - xs[i])
        force_y = params.attraction * (ys[j] - ys[i])
        fx[i] += force_x
        fy[i] += force_y
        fx[j] -= force_x
        fy[j] -= force_y

    new_xs = []
    new_ys = []
    limit_sq = params.max_disp * params.max_disp
    for x, y, force_x, force_y in zip(xs, ys, fx, fy):
        force_x += params.gravity * (params.center_x - x)
        force_y += params.gravity * (params.center_y - y)
        dx = force_x * params.dt * params.damping
        dy = force_y * params.dt * params.damping
        disp_sq = dx * dx + dy * dy
        if disp_sq > limit_sq:
            scale = params.max_disp / math.sqrt(disp_sq)
            dx *= scale
            dy *= scale
        new_xs.append(x + dx)
        new_ys.append(y + dy)

    return resolve_overlaps(
        new_xs, new_ys, widths, heights, params.padding, params.overlap_iterations
    )


def run_frame(graph: Graph, params: Optional[ForceParameters] = None) -> bool:
    """Run one animation frame of the simulation on a playing Force-mode graph.

    Returns whether the simulation ran.
    """
    if not graph.playing or graph.layout_mode is not LayoutMode.FORCE:
        return False
    if not graph.nodes:
        return False
    params = params or ForceParameters()

    for _ in range(params.steps_per_frame):
        xs = [node.x for node in graph.nodes]
        ys = [node.y for node in graph.nodes]
        widths = [node.width for node in graph.nodes]
        heights = [node.height for node in graph.nodes]
        xs, ys = simulation_step(xs, ys, widths, heights, graph.edges, params)
        for node, x, y in zip(graph.nodes, xs, ys):
            node.x = x
            node.y = y

    graph.sim_tick = (graph.sim_tick + 1) & _MASK64
    graph._notify()
    return True