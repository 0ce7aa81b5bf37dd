"""
faster_apsp.py — FASTER-ALL-PAIRS-SHORTEST-PATHS
================================================
Repeated squaring: L ← L ⊗ L doubles the number of edges a path may use,
so ⌈log₂(n-1)⌉ squarings reach the n-1 edge bound.  Θ(V³ log V).

min_plus() lets k range over every index including i and j, so with the
0 diagonal the previous L[i][j] is always a candidate and is never lost.
"""

import logging
from typing import List, Optional

from graph import as_snapshot
from algorithms.matrix import AllPairsResult, build_result, min_plus, weight_matrix

logger = logging.getLogger(__name__)


PSEUDOCODE: List[str] = [
    "def FasterAPSP(W):",                          # 0
    "    n ← rows(W)",                             # 1
    "    L ← W",                                   # 2
    "    r ← 1",                                   # 3
    "    while r < n - 1:",                        # 4
    "        L ← L ⊗ L",                           # 5
    "        r ← 2r",                              # 6
    "    return L",                                # 7
]


def faster_apsp(graph) -> Optional[AllPairsResult]:
    snap = as_snapshot(graph)
    if not snap.nodes:
        return None

    nodes, l = weight_matrix(snap)
    n = len(nodes)
    r = 1
    squarings = 0
    while r < n - 1:
        l = min_plus(l, l)
        r *= 2
        squarings += 1

    logger.debug("faster apsp: %d squarings over %d nodes", squarings, n)
    return build_result(nodes, l, "faster_apsp", squarings)
