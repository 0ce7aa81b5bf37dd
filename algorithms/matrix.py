"""
matrix.py — Distance Matrices & Min-Plus Helpers
=================================================
Shared plumbing for the all-pairs engines.

    INF                  – "no path" sentinel, a plain int
    weight_matrix(g)     – sorted node order + direct-edge matrix (L⁽¹⁾ = W)
    min_plus(A, B)       – one min-plus product
    extend(L, W)         – min-plus product that keeps L[i][j] as a floor
    relax_pass(M)        – how many cells one more Floyd-Warshall pass changes
    AllPairsResult       – (matrix, nodes) pair every all-pairs engine returns

INF is a finite integer so matrices stay plain numeric grids.  Every sum
goes through add(), which saturates at INF: an unreachable leg never
produces a "distance" slightly below INF.
"""

from dataclasses import dataclass
from typing import Dict, List, Sequence, Tuple

from graph import GraphSnapshot

INF = 999999

Matrix = List[List[int]]
FrozenMatrix = Tuple[Tuple[int, ...], ...]


# ---------------------------------------------------------------------------
# Scalars
# ---------------------------------------------------------------------------
def add(a: int, b: int) -> int:
    """Saturating addition: anything plus INF is INF."""
    if a >= INF or b >= INF:
        return INF
    return a + b


def is_unreachable(value: int) -> bool:
    return value >= INF


def format_distance(value: int) -> str:
    return "∞" if is_unreachable(value) else str(value)


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------
def new_matrix(n: int) -> Matrix:
    """n×n grid, 0 on the diagonal, INF elsewhere."""
    m = [[INF] * n for _ in range(n)]
    for i in range(n):
        m[i][i] = 0
    return m


def weight_matrix(graph: GraphSnapshot) -> Tuple[List[str], Matrix]:
    """
    Direct-edge matrix in sorted node order.  The last edge listed for an
    ordered pair wins.  Self-loops never overwrite the 0 diagonal, and
    weights at or above INF are stored as INF.
    """
    nodes = graph.node_ids()
    idx = {name: i for i, name in enumerate(nodes)}
    m = new_matrix(len(nodes))
    for edge in graph.edges:
        i = idx.get(edge.source)
        j = idx.get(edge.target)
        if i is None or j is None or i == j:
            continue
        m[i][j] = min(edge.weight, INF)
    return nodes, m


def copy_matrix(m: Sequence[Sequence[int]]) -> Matrix:
    return [list(row) for row in m]


def freeze(m: Sequence[Sequence[int]]) -> FrozenMatrix:
    return tuple(tuple(row) for row in m)


# ---------------------------------------------------------------------------
# Min-plus algebra
# ---------------------------------------------------------------------------
def min_plus(a: Sequence[Sequence[int]], b: Sequence[Sequence[int]]) -> Matrix:
    """
    C[i][j] = min over k of A[i][k] + B[k][j].

    k runs over every index, i and j included, so with a 0 diagonal the
    previous A[i][j] is always one of the candidates.
    """
    n = len(a)
    c = [[INF] * n for _ in range(n)]
    for i in range(n):
        row_a = a[i]
        row_c = c[i]
        for j in range(n):
            best = INF
            for k in range(n):
                cand = add(row_a[k], b[k][j])
                if cand < best:
                    best = cand
            row_c[j] = best
    return c


def extend(l: Sequence[Sequence[int]], w: Sequence[Sequence[int]]) -> Matrix:
    """One round of L ⊗ W, carrying L[i][j] forward as a floor."""
    n = len(l)
    out = copy_matrix(l)
    for i in range(n):
        for j in range(n):
            for k in range(n):
                cand = add(l[i][k], w[k][j])
                if cand < out[i][j]:
                    out[i][j] = cand
    return out


def relax_pass(m: Sequence[Sequence[int]]) -> int:
    """
    Run the Floyd-Warshall triple loop once more over a copy of `m` and
    count the cells it lowers.  0 means `m` is a fixed point.
    """
    work = copy_matrix(m)
    n = len(work)
    changed = 0
    for k in range(n):
        for i in range(n):
            for j in range(n):
                cand = add(work[i][k], work[k][j])
                if cand < work[i][j]:
                    work[i][j] = cand
                    changed += 1
    return changed


# ---------------------------------------------------------------------------
# Result
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class AllPairsResult:
    """
    Attributes:
        matrix    : Final distance matrix, rows/cols in `nodes` order.
        nodes     : Sorted node names.
        algorithm : Registry key of the engine that produced it.
        rounds    : Outer iterations performed (k-rounds, sources, min-plus
                    rounds or squarings depending on the engine).
    """

    matrix:    FrozenMatrix
    nodes:     Tuple[str, ...]
    algorithm: str = ""
    rounds:    int = 0

    def distance(self, source: str, target: str) -> int:
        i = self.nodes.index(source)
        j = self.nodes.index(target)
        return self.matrix[i][j]

    def as_lists(self) -> Matrix:
        return copy_matrix(self.matrix)

    def to_dict(self) -> Dict:
        return {
            "algorithm": self.algorithm,
            "nodes":     list(self.nodes),
            "matrix":    self.as_lists(),
            "rounds":    self.rounds,
            "inf":       INF,
        }


def build_result(
    nodes: Sequence[str],
    matrix: Sequence[Sequence[int]],
    algorithm: str,
    rounds: int,
) -> AllPairsResult:
    return AllPairsResult(
        matrix=freeze(matrix),
        nodes=tuple(nodes),
        algorithm=algorithm,
        rounds=rounds,
    )


def diff_cells(
    left: AllPairsResult,
    right: AllPairsResult,
) -> List[Tuple[str, str, int, int]]:
    """Cells where two results disagree: (row, col, left, right)."""
    if left.nodes != right.nodes:
        raise ValueError("results were computed over different node sets")
    out = []
    for i, name_i in enumerate(left.nodes):
        for j, name_j in enumerate(left.nodes):
            lv, rv = left.matrix[i][j], right.matrix[i][j]
            if lv != rv:
                out.append((name_i, name_j, lv, rv))
    return out
