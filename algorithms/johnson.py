"""
johnson.py — All-Pairs via Repeated Dijkstra
============================================
Runs the single-source engine once per node (sorted order) and stacks the
resulting distance maps into a matrix.

The name is historical: true Johnson's algorithm first reweights every
edge with Bellman-Ford potentials so Dijkstra can cope with negative
weights.  That phase is NOT performed here, so results are only correct
for non-negative weights.
"""

import logging
from typing import List, Optional

from graph import as_snapshot
from algorithms.dijkstra import shortest_distances
from algorithms.matrix import INF, AllPairsResult, build_result

logger = logging.getLogger(__name__)


PSEUDOCODE: List[str] = [
    "def RepeatedDijkstra(graph):",                # 0
    "    for s in V (sorted):",                    # 1
    "        d ← Dijkstra(graph, s)",              # 2
    "        for t in V (sorted):",                # 3
    "            dist[s][t] ← d[t] or ∞",          # 4
    "    return dist",                             # 5
]


def johnson(graph) -> Optional[AllPairsResult]:
    snap = as_snapshot(graph)
    if not snap.nodes:
        return None

    nodes = snap.node_ids()
    matrix = []
    for source in nodes:
        single = shortest_distances(snap, source)
        matrix.append([min(single.get(target, INF), INF) for target in nodes])

    logger.debug("repeated dijkstra: %d sources", len(nodes))
    return build_result(nodes, matrix, "johnson", len(nodes))
