"""Interactive node-graph model: nodes, edges, layouts, routing, simulation and generators."""

__version__ = "0.1.0"

__all__ = [
    "edge",
    "generators",
    "graph",
    "interaction",
    "node",
    "rng",
    "routing",
    "simulation",
]