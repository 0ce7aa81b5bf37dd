"""
runs.py — Run Sessions & Analytics
==================================
A run session is what a UI holds while showing one algorithm: it records
the step sequence from a graph snapshot, then exposes a "current view"
that moves one step per next_step() call, or jumps straight to the end.

    run = DijkstraRun(graph)
    run.run("A", mode="step")
    run.next_step()                 # applies steps[0]
    run.distances, run.visited      # current view

Modes:
    "step"      – cursor before the first Dijkstra step / on the initial
                  Floyd-Warshall matrix; next_step() advances one step
    "complete"  – terminal state applied immediately

"complete" is a plain synchronous call.  Any pacing delay before showing
the result belongs to the caller (see config.COMPLETE_DELAY_MS).

Comparison:
    compare_all_pairs(graph) runs every matrix engine on the SAME snapshot
    and reports whether they agree cell for cell.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, List, Mapping, Optional, Sequence, Tuple

from graph import GraphSnapshot, as_snapshot
from algorithms import AlgoInfo, all_pairs_keys, require_algorithm
from algorithms.dijkstra import compute_steps as dijkstra_steps, initial_distances
from algorithms.floyd_warshall import compute_steps as floyd_warshall_steps
from algorithms.matrix import (
    AllPairsResult,
    FrozenMatrix,
    build_result,
    diff_cells,
    is_unreachable,
)
from algorithms.step import DijkstraStep, FloydWarshallStep
from engine.stepper import Stepper

logger = logging.getLogger(__name__)

MODES = ("step", "complete")


def _check_mode(mode: str) -> None:
    if mode not in MODES:
        raise ValueError(f"mode must be one of {MODES}, got {mode!r}")


def _elapsed_ms(start: float) -> float:
    return round((time.monotonic() - start) * 1000, 3)


# ---------------------------------------------------------------------------
# Metrics: what the analytics card renders
# ---------------------------------------------------------------------------
@dataclass
class RunMetrics:
    algo_key:      str   = ""
    algo_label:    str   = ""
    source:        str   = ""
    node_count:    int   = 0
    total_steps:   int   = 0      # steps recorded
    update_steps:  int   = 0      # steps that changed a distance
    reachable:     int   = 0      # Dijkstra: finite distances at the end
    rounds:        int   = 0      # all-pairs: outer iterations
    wall_time_ms:  float = 0.0


# ---------------------------------------------------------------------------
# Dijkstra session
# ---------------------------------------------------------------------------
class DijkstraRun:
    """
    Attributes:
        distances    : {node: distance} currently shown.
        visited      : Nodes shown as final.
        unvisited    : Nodes shown as pending.
        current_node : Node of the last applied step, or None.
        stepper      : Cursor over the recorded steps.
        metrics      : RunMetrics of the last run().

    The view is the snapshot of the last applied step, and a select step is
    cut before its node moves to visited.  So in the terminal view, complete
    mode included, the last selected node is still listed in `unvisited`
    even though its distance is final.
    """

    def __init__(self, graph):
        self._graph = graph
        self.stepper = Stepper(on_step=self._apply)
        self.metrics: Optional[RunMetrics] = None
        self.source: Optional[str] = None
        self.mode: Optional[str] = None
        self._clear_view()

    # ------------------------------------------------------------------
    def run(self, source: str, mode: str = "step") -> List[DijkstraStep]:
        _check_mode(mode)
        snap = as_snapshot(self._graph)
        info = require_algorithm("dijkstra")

        started = time.monotonic()
        steps = dijkstra_steps(snap, source)
        wall_ms = _elapsed_ms(started)

        self.source = source
        self.mode = mode
        self.distances = initial_distances(snap, source)
        self.visited = frozenset()
        self.unvisited = frozenset(snap.nodes)
        self.current_node = None

        self.stepper.start(steps)
        if mode == "complete":
            self.stepper.jump_to_end()

        self.metrics = RunMetrics(
            algo_key=info.key,
            algo_label=info.label,
            source=source,
            node_count=len(snap),
            total_steps=len(steps),
            update_steps=sum(1 for s in steps if s.is_update),
            reachable=sum(1 for d in _final_distances(steps, self.distances).values()
                          if not is_unreachable(d)),
            wall_time_ms=wall_ms,
        )
        if source not in snap.nodes:
            logger.warning("dijkstra source %r is not in the graph", source)
        logger.info("dijkstra from %r (%s mode): %d steps", source, mode, len(steps))
        return steps

    def next_step(self) -> Optional[DijkstraStep]:
        """Apply exactly one more step; None when there is nothing left."""
        if not self.stepper.next_step():
            return None
        return self.stepper.current_step

    def reset(self) -> None:
        self.stepper.reset()
        self.metrics = None
        self.source = None
        self.mode = None
        self._clear_view()

    # ------------------------------------------------------------------
    @property
    def steps(self) -> List[DijkstraStep]:
        return self.stepper.steps

    @property
    def current_step_index(self) -> int:
        """Number of steps applied so far."""
        return self.stepper.applied_count

    @property
    def is_finished(self) -> bool:
        return self.stepper.is_finished

    @property
    def is_running(self) -> bool:
        """True while steps remain to be applied."""
        return self.mode is not None and not self.stepper.is_finished

    @property
    def found_nothing(self) -> bool:
        """Ran, but never selected a node (unknown source or empty graph)."""
        return self.mode is not None and not self.stepper.steps

    def view(self) -> Dict:
        return {
            "source":       self.source,
            "mode":         self.mode,
            "distances":    dict(self.distances),
            "visited":      sorted(self.visited),
            "unvisited":    sorted(self.unvisited),
            "current_node": self.current_node,
            "current_step": self.current_step_index,
            "total_steps":  len(self.steps),
            "finished":     self.is_finished,
        }

    # ------------------------------------------------------------------
    def _apply(self, step: DijkstraStep) -> None:
        self.distances = dict(step.distances)
        self.visited = step.visited
        self.unvisited = step.unvisited
        self.current_node = step.node

    def _clear_view(self) -> None:
        self.distances: Dict[str, int] = {}
        self.visited: FrozenSet[str] = frozenset()
        self.unvisited: FrozenSet[str] = frozenset()
        self.current_node: Optional[str] = None


def _final_distances(
    steps: Sequence[DijkstraStep],
    initial: Mapping[str, int],
) -> Mapping[str, int]:
    return steps[-1].distances if steps else initial


# ---------------------------------------------------------------------------
# Floyd-Warshall session
# ---------------------------------------------------------------------------
class FloydWarshallRun:
    """
    Attributes:
        matrix  : Matrix currently shown, or None before a run / on an empty graph.
        nodes   : Sorted node order of the last run.
        stepper : Cursor over the recorded steps.
    """

    def __init__(self, graph):
        self._graph = graph
        self.stepper = Stepper(on_step=self._apply)
        self.metrics: Optional[RunMetrics] = None
        self.mode: Optional[str] = None
        self.matrix: Optional[FrozenMatrix] = None
        self.nodes: Tuple[str, ...] = ()

    def run(self, mode: str = "complete") -> Optional[AllPairsResult]:
        """Record all steps; return the final (matrix, nodes) or None if empty."""
        _check_mode(mode)
        snap = as_snapshot(self._graph)
        info = require_algorithm("floyd_warshall")

        started = time.monotonic()
        steps = floyd_warshall_steps(snap)
        wall_ms = _elapsed_ms(started)

        self.mode = mode
        self.nodes = tuple(snap.node_ids())
        self.matrix = None
        if mode == "complete":
            self.stepper.start(steps)
            self.stepper.jump_to_end()
        else:
            # the first step IS the initial matrix
            self.stepper.start(steps, position=0)

        self.metrics = RunMetrics(
            algo_key=info.key,
            algo_label=info.label,
            node_count=len(snap),
            total_steps=len(steps),
            update_steps=sum(1 for s in steps if s.updated),
            rounds=len(snap),
            wall_time_ms=wall_ms,
        )
        logger.info("floyd-warshall (%s mode): %d steps", mode, len(steps))

        if not steps:
            return None
        return build_result(self.nodes, steps[-1].matrix, info.key, len(snap))

    def next_step(self) -> Optional[FloydWarshallStep]:
        if not self.stepper.next_step():
            return None
        return self.stepper.current_step

    def reset(self) -> None:
        self.stepper.reset()
        self.metrics = None
        self.mode = None
        self.matrix = None
        self.nodes = ()

    @property
    def steps(self) -> List[FloydWarshallStep]:
        return self.stepper.steps

    @property
    def current_step_index(self) -> int:
        return self.stepper.applied_count

    @property
    def is_finished(self) -> bool:
        return self.stepper.is_finished

    @property
    def is_running(self) -> bool:
        return self.mode is not None and not self.stepper.is_finished

    def view(self) -> Dict:
        step = self.stepper.current_step
        return {
            "mode":         self.mode,
            "nodes":        list(self.nodes),
            "matrix":       [list(r) for r in self.matrix] if self.matrix is not None else None,
            "description":  step.description if step else "",
            "cell":         [step.k, step.i, step.j] if step else None,
            "current_step": self.current_step_index,
            "total_steps":  len(self.steps),
            "finished":     self.is_finished,
        }

    def _apply(self, step: FloydWarshallStep) -> None:
        self.matrix = step.matrix


# ---------------------------------------------------------------------------
# Matrix-only session (johnson, slow_apsp, faster_apsp, floyd_warshall)
# ---------------------------------------------------------------------------
class AllPairsRun:
    def __init__(self, graph, key: str):
        info = require_algorithm(key)
        if not info.is_all_pairs:
            raise ValueError(f"{key} is not an all-pairs algorithm")
        self._graph = graph
        self.info: AlgoInfo = info
        self.result: Optional[AllPairsResult] = None
        self.metrics: Optional[RunMetrics] = None

    def run(self) -> Optional[AllPairsResult]:
        snap = as_snapshot(self._graph)
        started = time.monotonic()
        self.result = self.info.fn(snap)
        wall_ms = _elapsed_ms(started)
        self.metrics = RunMetrics(
            algo_key=self.info.key,
            algo_label=self.info.label,
            node_count=len(snap),
            rounds=self.result.rounds if self.result else 0,
            wall_time_ms=wall_ms,
        )
        logger.info("%s over %d nodes in %.3f ms", self.info.key, len(snap), wall_ms)
        return self.result

    @property
    def matrix(self) -> Optional[FrozenMatrix]:
        return self.result.matrix if self.result else None

    def reset(self) -> None:
        self.result = None
        self.metrics = None


# ---------------------------------------------------------------------------
# ComparisonResult: side-by-side agreement check
# ---------------------------------------------------------------------------
@dataclass
class ComparisonResult:
    results:    Dict[str, Optional[AllPairsResult]] = field(default_factory=dict)
    metrics:    Dict[str, RunMetrics]                = field(default_factory=dict)
    mismatches: Dict[str, List[Tuple[str, str, int, int]]] = field(default_factory=dict)
    fastest:    str = ""

    @property
    def agree(self) -> bool:
        return not self.mismatches

    def to_dict(self) -> Dict:
        return {
            "agree":      self.agree,
            "fastest":    self.fastest,
            "results":    {k: (r.to_dict() if r else None) for k, r in self.results.items()},
            "wall_time_ms": {k: m.wall_time_ms for k, m in self.metrics.items()},
            "mismatches": {k: [list(c) for c in cells] for k, cells in self.mismatches.items()},
        }


def compare_all_pairs(graph, keys: Optional[Sequence[str]] = None) -> ComparisonResult:
    """
    Run each matrix engine on one snapshot.  Every result is diffed against
    the first key's; mismatches are keyed "<first> vs <other>".
    """
    snap: GraphSnapshot = as_snapshot(graph)
    keys = list(keys) if keys else all_pairs_keys()
    out = ComparisonResult()

    for key in keys:
        session = AllPairsRun(snap, key)
        out.results[key] = session.run()
        out.metrics[key] = session.metrics

    base_key = keys[0]
    base = out.results[base_key]
    for key in keys[1:]:
        other = out.results[key]
        if base is None or other is None:
            if (base is None) != (other is None):
                out.mismatches[f"{base_key} vs {key}"] = []
            continue
        cells = diff_cells(base, other)
        if cells:
            out.mismatches[f"{base_key} vs {key}"] = cells

    if out.metrics:
        out.fastest = min(out.metrics.values(), key=lambda m: m.wall_time_ms).algo_key
    if not out.agree:
        logger.warning("all-pairs engines disagree: %s", sorted(out.mismatches))
    return out
