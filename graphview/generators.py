"""Deterministic generators for sample nodes and small-world edge sets."""

from __future__ import annotations

import struct

from .edge import GraphEdge
from .node import GraphNode
from .rng import XorShift

_NODE_SEED = 0xCAFEBABEDEADBEEF
_EDGE_SEED = 0xBADC0FFEE0DDF00D


def _f32(value: float) -> float:
    return struct.unpack("f", struct.pack("f", value))[0]


def generate_nodes(n: int) -> list[GraphNode]:
    """Create ``n`` nodes scattered pseudo-randomly over a fixed viewport box."""
    rng = XorShift(_NODE_SEED)
    left, top, width, height = 50.0, 50.0, 1200.0, 800.0
    nodes = []
    for index in range(n):
        rx = rng.next_float()
        ry = rng.next_float()
        nodes.append(
            GraphNode(
                id=index + 1,
                name=f"Node {index + 1}",
                node_type="node",
                x=_f32(left + _f32(rx * width)),
                y=_f32(top + _f32(ry * height)),
                width=80.0,
                height=32.0,
            )
        )
    return nodes


def generate_watts_strogatz_graph(n: int, k: int, beta: float) -> list[GraphEdge]:
    """Build a Watts-Strogatz small-world graph as undirected edges with source < target."""
    if n < 2:
        return []
    effective_k = min(k, max((n - 1) // 2, 1))
    if effective_k == 0:
        return []

    rewiring_prob = _f32(min(max(beta, 0.0), 1.0))
    rng = XorShift(_EDGE_SEED)
    adjacency: list[set[int]] = [set() for _ in range(n)]
    targets: list[list[int]] = [[] for _ in range(n)]

    for source in range(n):
        for offset in range(1, effective_k + 1):
            target = (source + offset) % n
            adjacency[source].add(target)
            adjacency[target].add(source)
            targets[source].append(target)

    if rewiring_prob > 0.0:
        attempt_cap = n * 8
        n_f32 = _f32(float(n))
        for source in range(n):
            source_targets = targets[source]
            for edge_index, old_target in enumerate(source_targets):
                if rng.next_float() >= rewiring_prob:
                    continue
                adjacency[source].discard(old_target)
                adjacency[old_target].discard(source)

                new_target = old_target
                for _ in range(attempt_cap):
                    candidate = min(int(_f32(rng.next_float() * n_f32)), n - 1)
                    if candidate == source or candidate in adjacency[source]:
                        continue
                    adjacency[source].add(candidate)
                    adjacency[candidate].add(source)
                    new_target = candidate
                    break
                else:
                    adjacency[source].add(old_target)
                    adjacency[old_target].add(source)
                source_targets[edge_index] = new_target

    return [
        GraphEdge(source, target)
        for source, neighbours in enumerate(adjacency)
        for target in sorted(neighbours)
        if source < target
    ]