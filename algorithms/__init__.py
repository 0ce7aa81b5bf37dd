"""
algorithms/__init__.py — Algorithm Registry
=============================================
Single source of truth for every shortest-path engine the package knows.

    from algorithms import REGISTRY, get_algorithm

REGISTRY is a dict:
    {
        "dijkstra": AlgoInfo(key, label, fn, pseudocode, steps_fn, …),
        …
    }

`fn` is the direct computation: shortest_distances(graph, source) for the
single-source engine, engine(graph) -> AllPairsResult | None for the rest.
`steps_fn` is set only for the two stepwise engines.
"""

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from algorithms.dijkstra       import shortest_distances,          PSEUDOCODE as _dij_pc
from algorithms.dijkstra       import compute_steps as _dij_steps
from algorithms.floyd_warshall import floyd_warshall as _fw,       PSEUDOCODE as _fw_pc
from algorithms.floyd_warshall import compute_steps as _fw_steps
from algorithms.johnson        import johnson        as _johnson,  PSEUDOCODE as _jo_pc
from algorithms.slow_apsp      import slow_apsp      as _slow,     PSEUDOCODE as _slow_pc
from algorithms.faster_apsp    import faster_apsp    as _faster,   PSEUDOCODE as _fast_pc
from algorithms.matrix import INF, AllPairsResult


class UnknownAlgorithmError(ValueError):
    """Raised when a registry key does not name an engine."""


# ---------------------------------------------------------------------------
# AlgoInfo: metadata card for each algorithm
# ---------------------------------------------------------------------------
@dataclass
class AlgoInfo:
    key:               str                    # registry key, e.g. "dijkstra"
    label:             str                    # human label
    fn:                Callable               # direct computation
    pseudocode:        List[str]              # lines for the side-panel
    steps_fn:          Optional[Callable] = None   # step recorder, stepwise engines only
    tags:              List[str] = field(default_factory=list)
    supports_negative: bool     = False       # correct with negative (non-cycle) weights?
    is_all_pairs:      bool     = False
    complexity_time:   str      = ""
    complexity_space:  str      = ""
    description:       str      = ""

    @property
    def stepwise(self) -> bool:
        return self.steps_fn is not None

    def to_dict(self) -> Dict:
        return {
            "key":               self.key,
            "label":             self.label,
            "stepwise":          self.stepwise,
            "is_all_pairs":      self.is_all_pairs,
            "supports_negative": self.supports_negative,
            "tags":              list(self.tags),
            "complexity_time":   self.complexity_time,
            "complexity_space":  self.complexity_space,
            "description":       self.description,
            "pseudocode":        list(self.pseudocode),
        }


# ---------------------------------------------------------------------------
# THE REGISTRY
# ---------------------------------------------------------------------------
REGISTRY: Dict[str, AlgoInfo] = {

    "dijkstra": AlgoInfo(
        key="dijkstra", label="Dijkstra's Algorithm", fn=shortest_distances,
        pseudocode=_dij_pc, steps_fn=_dij_steps,
        tags=["single-source", "stepwise"],
        complexity_time="O(V²)", complexity_space="O(V)",
        description="Selects the closest unvisited node each round. Non-negative weights only.",
    ),

    "floyd_warshall": AlgoInfo(
        key="floyd_warshall", label="Floyd–Warshall", fn=_fw,
        pseudocode=_fw_pc, steps_fn=_fw_steps,
        tags=["all-pairs", "stepwise", "dynamic-programming"],
        supports_negative=True, is_all_pairs=True,
        complexity_time="O(V³)", complexity_space="O(V²)",
        description="All-pairs via dynamic programming. Watch the matrix evolve!",
    ),

    "johnson": AlgoInfo(
        key="johnson", label="Johnson (repeated Dijkstra)", fn=_johnson,
        pseudocode=_jo_pc,
        tags=["all-pairs", "single-source-reuse"],
        is_all_pairs=True,
        complexity_time="O(V³)", complexity_space="O(V²)",
        description="Dijkstra from every node. No reweighting, so non-negative weights only.",
    ),

    "slow_apsp": AlgoInfo(
        key="slow_apsp", label="SLOW-APSP", fn=_slow,
        pseudocode=_slow_pc,
        tags=["all-pairs", "min-plus"],
        supports_negative=True, is_all_pairs=True,
        complexity_time="O(V⁴)", complexity_space="O(V²)",
        description="n-1 rounds of min-plus extension by the weight matrix.",
    ),

    "faster_apsp": AlgoInfo(
        key="faster_apsp", label="FASTER-APSP", fn=_faster,
        pseudocode=_fast_pc,
        tags=["all-pairs", "min-plus", "repeated-squaring"],
        supports_negative=True, is_all_pairs=True,
        complexity_time="O(V³ log V)", complexity_space="O(V²)",
        description="Repeated squaring: log₂(n-1) min-plus products instead of n-1.",
    ),
}


# ---------------------------------------------------------------------------
# Lookup helpers
# ---------------------------------------------------------------------------
def get_algorithm(key: str) -> Optional[AlgoInfo]:
    """Return AlgoInfo by key, or None."""
    return REGISTRY.get(key)


def require_algorithm(key: str) -> AlgoInfo:
    info = REGISTRY.get(key)
    if info is None:
        raise UnknownAlgorithmError(f"Unknown algorithm: {key}")
    return info


def list_algorithms() -> List[AlgoInfo]:
    """Return all registered algorithms in insertion order."""
    return list(REGISTRY.values())


def algorithms_by_tag(tag: str) -> List[AlgoInfo]:
    """Filter registry by tag."""
    return [a for a in REGISTRY.values() if tag in a.tags]


def all_pairs_keys() -> List[str]:
    return [a.key for a in REGISTRY.values() if a.is_all_pairs]


__all__ = [
    "INF",
    "AllPairsResult",
    "AlgoInfo",
    "REGISTRY",
    "UnknownAlgorithmError",
    "get_algorithm",
    "require_algorithm",
    "list_algorithms",
    "algorithms_by_tag",
    "all_pairs_keys",
]
