"""
dijkstra.py — Dijkstra's Single-Source Shortest Paths
=====================================================
Array-scan Dijkstra (no heap): every round scans the unvisited set for the
minimum-distance node.  That keeps the step sequence simple to replay:

  1. select  – node with the smallest distance among unvisited is chosen
  2. update  – a still-unvisited neighbour gets a shorter distance

The run stops when unvisited is empty or every remaining node is at INF.
No step is emitted for an INF node, so unreachable nodes are never selected.

Ties between equal distances go to the lexicographically smallest name.

The relaxation core (_label_setting) is shared by the recording generator
and by shortest_distances(), which the repeated-single-source engine uses.
Both see exactly the same sequence of decisions.

Correctness note: requires non-negative weights.
"""

import logging
from typing import Dict, Generator, List, Optional, Tuple

from graph import Adjacency, build_adjacency, as_snapshot
from algorithms.matrix import INF, add, format_distance
from algorithms.step import DijkstraStep, DijkstraStepBuilder, StepKind

logger = logging.getLogger(__name__)

# (kind, node, neighbour, old, new)
Event = Tuple[StepKind, str, Optional[str], Optional[int], Optional[int]]


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def Dijkstra(graph, source):",                    # 0
    "    dist ← {v: ∞ for v in V}",                    # 1
    "    dist[source] ← 0",                            # 2
    "    unvisited ← V",                               # 3
    "    while unvisited is not empty:",               # 4
    "        u ← argmin dist[v] for v in unvisited",   # 5
    "        if dist[u] = ∞: break",                   # 6
    "        move u from unvisited to visited",        # 7
    "        for (v, w) in adj(u):",                   # 8
    "            if v in unvisited and",               # 9
    "                  dist[u] + w < dist[v]:",        # 10
    "                dist[v] ← dist[u] + w",           # 11
    "    return dist",                                 # 12
]


# ---------------------------------------------------------------------------
# Relaxation core
# ---------------------------------------------------------------------------
def _closest(distances: Dict[str, int], unvisited) -> Optional[str]:
    best_node, best = None, INF
    for node in sorted(unvisited):
        if distances[node] < best:
            best_node, best = node, distances[node]
    return best_node


def _label_setting(
    adjacency: Adjacency,
    sb: DijkstraStepBuilder,
) -> Generator[Event, None, None]:
    """
    Drive one run over the builder's working state, yielding an event
    BEFORE the state moves on past it, so a consumer snapshotting at the
    yield sees the state at that instant.
    """
    while sb.unvisited:
        node = _closest(sb.distances, sb.unvisited)
        if node is None:
            return                        # everything left is unreachable

        yield StepKind.SELECT, node, None, None, None
        sb.visit(node)

        for nbr, weight in adjacency.get(node, []):
            if nbr not in sb.unvisited:
                continue
            candidate = add(sb.distances[node], weight)
            if candidate < sb.distances[nbr]:
                old = sb.distances[nbr]
                sb.distances[nbr] = candidate
                yield StepKind.UPDATE, node, nbr, old, candidate


def _start(graph, source: str) -> Tuple[Adjacency, DijkstraStepBuilder]:
    snap = as_snapshot(graph)
    adjacency = build_adjacency(snap.nodes, snap.edges)
    distances = {name: (0 if name == source else INF) for name in snap.nodes}
    return adjacency, DijkstraStepBuilder(distances, set(snap.nodes))


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def dijkstra_steps(graph, source: str) -> Generator[DijkstraStep, None, None]:
    """Yield one DijkstraStep per select and per distance update."""
    adjacency, sb = _start(graph, source)

    for kind, node, nbr, old, new in _label_setting(adjacency, sb):
        if kind is StepKind.SELECT:
            d = sb.distances[node]
            yield sb.build(
                kind, node,
                description=(
                    f"Select '{node}' with distance {d}: smallest among unvisited. "
                    f"This distance is now final."
                ),
                pseudocode_line=5,
            )
        else:
            yield sb.build(
                kind, node,
                neighbor=nbr,
                old_distance=old,
                new_distance=new,
                description=f"Update '{nbr}' via '{node}': {format_distance(old)} → {new}",
                pseudocode_line=11,
            )


def compute_steps(graph, source: str) -> List[DijkstraStep]:
    steps = list(dijkstra_steps(graph, source))
    logger.debug("dijkstra from %r: %d steps", source, len(steps))
    return steps


# ---------------------------------------------------------------------------
# Direct computation
# ---------------------------------------------------------------------------
def shortest_distances(graph, source: str) -> Dict[str, int]:
    """Final distances from `source` without recording any steps."""
    adjacency, sb = _start(graph, source)
    for _ in _label_setting(adjacency, sb):
        pass
    return dict(sb.distances)


def initial_distances(graph, source: str) -> Dict[str, int]:
    """Distances before the first step: 0 at the source, INF elsewhere."""
    snap = as_snapshot(graph)
    return {name: (0 if name == source else INF) for name in snap.nodes}
