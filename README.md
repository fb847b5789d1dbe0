# graphview

A toolkit-independent model of an interactive node graph: nodes with
nested children, edges with optional routed paths, zoom and pan,
selection, dragging, a force-directed simulation and deterministic graph
generators. Everything here is plain data and geometry; drawing it is up
to you.

## Installation

```
pip install .
```

For running the tests:

```
pip install .[test]
pytest
```

## Quick start

```python
from graphview.generators import generate_nodes, generate_watts_strogatz_graph
from graphview.graph import Graph
from graphview.routing import collect_edge_drawings
from graphview.simulation import ForceParameters, run_frame

nodes = generate_nodes(25)
edges = generate_watts_strogatz_graph(25, 3, 0.05)
graph = Graph(nodes, edges, 3, 0.05)

# Tell the graph where it lives on screen; this rescales and fits the nodes.
graph.set_container((0.0, 0.0), (1200.0, 800.0))

# Start the force simulation (Force mode) and run a few frames.
graph.press_play()
for _ in range(10):
    run_frame(graph, ForceParameters())

# Screen-space polylines for each edge, with selection state for colouring.
for drawing in collect_edge_drawings(graph):
    print(drawing.selection, drawing.path)
```

## Modules

- `graphview.generators` — `generate_nodes(n)` scatters `n` nodes over a
  fixed box using a fixed seed; `generate_watts_strogatz_graph(n, k, beta)`
  builds a reproducible small-world edge list with `source < target`.
- `graphview.node` — `GraphNode`, `NodeChild` and `estimate_node_size`,
  which sizes a node from its name, type and nested children.
  `GraphNode.refresh_size` stores that estimate; `begin_drag`, `drag_to`
  and `end_drag` move a node with the pointer and inform the graph it is
  attached to.
- `graphview.edge` — `GraphEdge`, a source/target index pair with an
  optional waypoint `path` and `clear_path()`.
- `graphview.graph` — `Graph`, holding nodes, edges, zoom, pan, container
  geometry, `LayoutMode` (Force, Dagre, ArchViz) and `EdgeRouting`. It offers
  `set_container`, `layout_nodes`, `fit_to_content`, `set_zoom`, `set_pan`,
  `update_model`, `apply_grid_layout`, `apply_dagre_layout`,
  `cycle_layout_mode` and `press_play`, plus `zoom_percent`, `layout_label`
  and `play_symbol` for labelling controls. Callbacks registered with
  `subscribe` receive the events passed to `emit`, such as `NodeSelected`.
- `graphview.routing` — `port_route` builds an orthogonal route from a
  source node's right port over the top to a target node's left port;
  `to_screen`, `edge_screen_path` and `collect_edge_drawings` turn routes
  into screen coordinates with an `EdgeSelection`; `segment_triangles`,
  `path_triangles` and `stroke_thickness` triangulate thick strokes.
- `graphview.simulation` — `simulation_step` applies grid-binned
  repulsion, spring attraction along edges, gravity to a centre and a
  damped, capped displacement, then `resolve_overlaps`; `run_frame` runs
  several steps on a playing Force-mode graph. Constants live in
  `ForceParameters`.
- `graphview.interaction` — pointer handling: `hit_test`,
  `left_mouse_down` (select, shift to extend, or start panning on empty
  space, ignoring the control regions), `middle_mouse_down`, `mouse_up`,
  `mouse_move` for panning, and `scroll_wheel` for zooming toward the
  cursor.
- `graphview.rng` — `XorShift`, the small deterministic generator behind
  the generators; `next_float()` returns a value in `[0, 1]`.

## What this package does not do

- It draws nothing and has no window or widgets; it produces positions,
  polylines and triangles for a renderer of your choice.
- It does not compute hierarchical layouts itself. `apply_dagre_layout`
  and the ArchViz step of `cycle_layout_mode` / `press_play` take
  precomputed positions (a mapping from node index to `(x, y)`);
  `apply_dagre_layout` falls back to a grid when none are given.
- It does not route edges around obstacles. Stored edge paths are used
  as given in ArchViz mode; otherwise edges follow `port_route`.
- There is no command-line tool.