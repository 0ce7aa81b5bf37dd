"""
floyd_warshall.py — Floyd–Warshall (All-Pairs Shortest Paths)
===============================================================
The signature "matrix algorithm".  Every step carries the full N×N
distance matrix so a consumer can show the grid evolving cell by cell.

Structure:
  for k in nodes:          ← "intermediate" node
      for i in nodes:
          for j in nodes:
              if dist[i][k] + dist[k][j] < dist[i][j]:
                  dist[i][j] = dist[i][k] + dist[k][j]

Yields a step for:
  1. Initialisation (direct-edge matrix)           k = i = j = -1
  2. Each (i, j) relaxation that changes a cell    updated = True
  3. End of each k-round, even with no change      i = j = -1

Nodes are indexed in sorted-name order.  No negative-cycle detection.
"""

import logging
from typing import Generator, List, Optional

from graph import as_snapshot
from algorithms.matrix import (
    AllPairsResult,
    add,
    build_result,
    weight_matrix,
)
from algorithms.step import FloydWarshallStep, matrix_step

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def FloydWarshall(graph):",                   # 0
    "    dist ← direct-edge matrix",               # 1
    "    for k in 0 … n-1:",                       # 2
    "        for i in 0 … n-1:",                   # 3
    "            for j in 0 … n-1:",               # 4
    "                if dist[i][k]+dist[k][j]",    # 5
    "                      < dist[i][j]:",         # 6
    "                    dist[i][j] = …",          # 7
    "    return dist",                             # 8
]


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def floyd_warshall_steps(graph) -> Generator[FloydWarshallStep, None, None]:
    snap = as_snapshot(graph)
    if not snap.nodes:
        return

    nodes, dist = weight_matrix(snap)
    n = len(nodes)
    step_no = 0

    # -- init step --
    yield matrix_step(
        step_no, -1, -1, -1, dist,
        description="Initial matrix with direct edges",
        pseudocode_line=1,
    )
    step_no += 1

    # ==============================================================
    # MAIN TRIPLE LOOP
    # ==============================================================
    for k in range(n):
        updates_this_round = 0
        for i in range(n):
            for j in range(n):
                new_dist = add(dist[i][k], dist[k][j])
                if new_dist < dist[i][j]:
                    dist[i][j] = new_dist
                    updates_this_round += 1
                    yield matrix_step(
                        step_no, k, i, j, dist,
                        description=f"Via {nodes[k]}: {nodes[i]} → {nodes[j]} = {new_dist}",
                        updated=True,
                        pseudocode_line=7,
                    )
                    step_no += 1

        # -- k-round checkpoint --
        yield matrix_step(
            step_no, k, -1, -1, dist,
            description=(
                f"Completed iteration k={k} (via {nodes[k]}): "
                f"{updates_this_round} update(s)"
            ),
            pseudocode_line=2,
        )
        step_no += 1


def compute_steps(graph) -> List[FloydWarshallStep]:
    steps = list(floyd_warshall_steps(graph))
    logger.debug("floyd-warshall: %d steps", len(steps))
    return steps


# ---------------------------------------------------------------------------
# Direct computation
# ---------------------------------------------------------------------------
def floyd_warshall(graph) -> Optional[AllPairsResult]:
    """Final matrix and node order, or None for an empty graph."""
    snap = as_snapshot(graph)
    steps = compute_steps(snap)
    if not steps:
        return None
    return build_result(snap.node_ids(), steps[-1].matrix, "floyd_warshall", len(snap))

