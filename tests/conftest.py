"""Shared graph fixtures for the shortest-path tests."""

from __future__ import annotations

import random
from typing import Callable, Dict

import pytest

from algorithms.matrix import INF, add
from graph import Graph, GraphSnapshot


@pytest.fixture()
def triangle() -> Graph:
    """A->B=4, B->C=2, A->C=10."""
    return Graph.from_edges("ABC", [("A", "B", 4), ("B", "C", 2), ("A", "C", 10)])


@pytest.fixture()
def cycle4() -> Graph:
    """A->B->C->D->A, all weights 1."""
    return Graph.from_edges(
        "ABCD", [("A", "B", 1), ("B", "C", 1), ("C", "D", 1), ("D", "A", 1)]
    )


@pytest.fixture()
def make_random_graph() -> Callable[[int], Graph]:
    """Seeded random digraph with non-negative weights and no parallel edges."""

    def _make(seed: int, n: int = 6, p: float = 0.35, max_w: int = 9) -> Graph:
        rng = random.Random(seed)
        names = [f"n{i}" for i in range(n)]
        rng.shuffle(names)
        edges = []
        for a in names:
            for b in names:
                if a != b and rng.random() < p:
                    edges.append((a, b, rng.randint(0, max_w)))
        return Graph.from_edges(names, edges)

    return _make


@pytest.fixture()
def reference_distances() -> Callable[[GraphSnapshot, str], Dict[str, int]]:
    """Bellman-Ford style repeated full relaxation, independent of the engines."""

    def _ref(snap: GraphSnapshot, source: str) -> Dict[str, int]:
        dist = {name: INF for name in snap.nodes}
        if source in dist:
            dist[source] = 0
        for _ in range(max(len(dist) - 1, 0)):
            changed = False
            for e in snap.edges:
                cand = add(dist[e.source], e.weight)
                if cand < dist[e.target]:
                    dist[e.target] = cand
                    changed = True
            if not changed:
                break
        return dist

    return _ref
