"""
slow_apsp.py — SLOW-ALL-PAIRS-SHORTEST-PATHS
============================================
The textbook baseline: start from L⁽¹⁾ = W and extend by one edge per
round,

    L⁽ʳ⁺¹⁾[i][j] = min(L⁽ʳ⁾[i][j], min_k L⁽ʳ⁾[i][k] + W[k][j])

for |V| - 1 rounds.  Θ(V⁴), kept deliberately naive so faster_apsp has
something to be compared against.
"""

import logging
from typing import List, Optional

from graph import as_snapshot
from algorithms.matrix import AllPairsResult, build_result, extend, weight_matrix

logger = logging.getLogger(__name__)


PSEUDOCODE: List[str] = [
    "def SlowAPSP(W):",                            # 0
    "    n ← rows(W)",                             # 1
    "    L ← W",                                   # 2
    "    for r in 1 … n-1:",                       # 3
    "        L ← ExtendShortestPaths(L, W)",       # 4
    "    return L",                                # 5
]


def slow_apsp(graph) -> Optional[AllPairsResult]:
    snap = as_snapshot(graph)
    if not snap.nodes:
        return None

    nodes, w = weight_matrix(snap)
    n = len(nodes)
    l = w
    rounds = 0
    for _ in range(1, n):
        l = extend(l, w)
        rounds += 1

    logger.debug("slow apsp: %d rounds over %d nodes", rounds, n)
    return build_result(nodes, l, "slow_apsp", rounds)
