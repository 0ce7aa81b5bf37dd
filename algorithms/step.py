"""
step.py — Algorithm Step Snapshots
==================================
The stepwise engines are generators that yield step objects.  A step is a
frozen-in-time picture of everything a consumer needs to show one frame:

    DijkstraStep        – select / update event + distances, visited,
                          unvisited at that instant
    FloydWarshallStep   – (k, i, j) of the relaxation + the whole matrix

Design decisions:
  - Steps are frozen dataclasses.  Every container inside is an immutable
    copy (read-only mapping, frozenset, tuple-of-tuples), so a later step
    can never rewrite what an earlier one recorded.
  - The generator is the only writer.  It keeps its working state in a
    builder and calls build() to cut a snapshot.
"""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Dict, FrozenSet, Mapping, Optional, Sequence, Set

from algorithms.matrix import FrozenMatrix, freeze


class StepKind(Enum):
    SELECT = "select"   # node chosen as the unvisited minimum
    UPDATE = "update"   # neighbour distance lowered


def _frozen_mapping(d: Mapping[str, int]) -> Mapping[str, int]:
    return MappingProxyType(dict(d))


# ---------------------------------------------------------------------------
# Dijkstra
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class DijkstraStep:
    """
    Attributes:
        step_number     : 0-based index of this step in the run.
        kind            : StepKind.SELECT or StepKind.UPDATE.
        node            : Node selected (select) or being expanded (update).
        neighbor        : Neighbour whose distance changed (update only).
        old_distance    : Neighbour distance before the update (update only).
        new_distance    : Neighbour distance after the update (update only).
        distances       : {node: distance} at this instant, INF = unreachable.
        visited         : Nodes whose distance is final.
        unvisited       : Nodes still waiting to be selected.
        description     : Human-readable explanation.
        pseudocode_line : 0-based index into dijkstra.PSEUDOCODE.
    """

    step_number:     int
    kind:            StepKind
    node:            str
    distances:       Mapping[str, int]
    visited:         FrozenSet[str]
    unvisited:       FrozenSet[str]
    description:     str                 = ""
    neighbor:        Optional[str]       = None
    old_distance:    Optional[int]       = None
    new_distance:    Optional[int]       = None
    pseudocode_line: int                 = 0

    @property
    def is_update(self) -> bool:
        return self.kind is StepKind.UPDATE

    def to_dict(self) -> Dict:
        return {
            "step_number":     self.step_number,
            "type":            self.kind.value,
            "node":            self.node,
            "neighbor":        self.neighbor,
            "old_distance":    self.old_distance,
            "new_distance":    self.new_distance,
            "distances":       dict(self.distances),
            "visited":         sorted(self.visited),
            "unvisited":       sorted(self.unvisited),
            "description":     self.description,
            "pseudocode_line": self.pseudocode_line,
        }


class DijkstraStepBuilder:
    """
    Mutable working state of one Dijkstra run.

    Usage inside the generator:
        sb = DijkstraStepBuilder(distances, unvisited)
        sb.visit("A")
        yield sb.build(StepKind.SELECT, "A", description="…")
    """

    def __init__(self, distances: Dict[str, int], unvisited: Set[str]):
        self.distances: Dict[str, int] = distances
        self.unvisited: Set[str]       = unvisited
        self.visited:   Set[str]       = set()
        self.step_no:   int            = 0

    def visit(self, node: str) -> None:
        self.unvisited.discard(node)
        self.visited.add(node)

    def build(self, kind: StepKind, node: str, **extra) -> DijkstraStep:
        step = DijkstraStep(
            step_number=self.step_no,
            kind=kind,
            node=node,
            distances=_frozen_mapping(self.distances),
            visited=frozenset(self.visited),
            unvisited=frozenset(self.unvisited),
            **extra,
        )
        self.step_no += 1
        return step


# ---------------------------------------------------------------------------
# Floyd-Warshall
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class FloydWarshallStep:
    """
    Attributes:
        step_number     : 0-based index of this step in the run.
        k, i, j         : Indices of the relaxation that produced this step.
                          i = j = -1 on checkpoints; k = -1 on the initial one.
        matrix          : Full distance matrix at this instant.
        description     : Human-readable explanation.
        updated         : True if a cell changed, False for checkpoints.
        pseudocode_line : 0-based index into floyd_warshall.PSEUDOCODE.
    """

    step_number:     int
    k:               int
    i:               int
    j:               int
    matrix:          FrozenMatrix
    description:     str  = ""
    updated:         bool = False
    pseudocode_line: int  = 0

    @property
    def is_checkpoint(self) -> bool:
        return not self.updated

    def to_dict(self) -> Dict:
        return {
            "step_number":     self.step_number,
            "k":               self.k,
            "i":               self.i,
            "j":               self.j,
            "matrix":          [list(row) for row in self.matrix],
            "description":     self.description,
            "updated":         self.updated,
            "pseudocode_line": self.pseudocode_line,
        }


def matrix_step(
    step_number: int,
    k: int,
    i: int,
    j: int,
    matrix: Sequence[Sequence[int]],
    description: str,
    updated: bool = False,
    pseudocode_line: int = 0,
) -> FloydWarshallStep:
    return FloydWarshallStep(
        step_number=step_number,
        k=k, i=i, j=j,
        matrix=freeze(matrix),
        description=description,
        updated=updated,
        pseudocode_line=pseudocode_line,
    )
