"""Stepwise Dijkstra: step order, snapshots, tie-breaking and replay."""

from __future__ import annotations

import pytest

from algorithms.dijkstra import compute_steps, dijkstra_steps, shortest_distances
from algorithms.matrix import INF
from algorithms.step import StepKind
from graph import Graph


def test_triangle_step_sequence(triangle: Graph) -> None:
    steps = compute_steps(triangle, "A")

    kinds = [(s.kind.value, s.node, s.neighbor) for s in steps]
    assert kinds == [
        ("select", "A", None),
        ("update", "A", "B"),
        ("update", "A", "C"),
        ("select", "B", None),
        ("update", "B", "C"),
        ("select", "C", None),
    ]
    assert dict(steps[-1].distances) == {"A": 0, "B": 4, "C": 6}
    assert [s.step_number for s in steps] == list(range(6))


def test_update_step_for_c_records_old_and_new(triangle: Graph) -> None:
    steps = compute_steps(triangle, "A")
    via_b = [s for s in steps if s.is_update and s.neighbor == "C" and s.node == "B"]
    assert len(via_b) == 1
    assert via_b[0].old_distance == 10
    assert via_b[0].new_distance == 6
    assert "10 → 6" in via_b[0].description


def test_select_snapshot_is_taken_before_the_move(triangle: Graph) -> None:
    first = compute_steps(triangle, "A")[0]
    assert first.kind is StepKind.SELECT
    assert "A" in first.unvisited
    assert first.visited == frozenset()
    assert dict(first.distances) == {"A": 0, "B": INF, "C": INF}


def test_earlier_snapshots_are_never_rewritten(triangle: Graph) -> None:
    steps = compute_steps(triangle, "A")
    assert steps[2].distances["C"] == 10
    assert steps[4].distances["C"] == 6
    with pytest.raises(TypeError):
        steps[2].distances["C"] = 0  # type: ignore[index]


def test_unreachable_node_is_never_selected() -> None:
    g = Graph.from_edges("AB", [])
    steps = compute_steps(g, "A")
    assert len(steps) == 1
    assert steps[0].node == "A"
    assert not any(s.neighbor == "B" or s.node == "B" for s in steps)
    assert steps[-1].distances["B"] == INF


@pytest.mark.parametrize("source", ["Z", ""])
def test_missing_source_yields_no_steps(triangle: Graph, source: str) -> None:
    assert compute_steps(triangle, source) == []


def test_empty_graph_yields_no_steps() -> None:
    assert compute_steps(Graph(), "A") == []
    assert shortest_distances(Graph(), "A") == {}


def test_ties_go_to_smallest_name() -> None:
    g = Graph.from_edges("ACB", [("A", "C", 1), ("A", "B", 1)])
    selects = [s.node for s in compute_steps(g, "A") if s.kind is StepKind.SELECT]
    assert selects == ["A", "B", "C"]


def test_parallel_edges_all_relaxed() -> None:
    g = Graph.from_edges("AB", [("A", "B", 5), ("A", "B", 2)])
    updates = [(s.old_distance, s.new_distance) for s in compute_steps(g, "A") if s.is_update]
    assert updates == [(INF, 5), (5, 2)]


def test_generator_is_lazy(triangle: Graph) -> None:
    gen = dijkstra_steps(triangle, "A")
    assert next(gen).node == "A"


@pytest.mark.parametrize("seed", range(12))
def test_replay_matches_reference(make_random_graph, reference_distances, seed: int) -> None:
    g = make_random_graph(seed)
    snap = g.snapshot()
    for source in snap.node_ids():
        steps = compute_steps(snap, source)
        expected = reference_distances(snap, source)
        assert dict(steps[-1].distances) == expected
        assert shortest_distances(snap, source) == expected


@pytest.mark.parametrize("seed", range(6))
def test_distances_never_increase(make_random_graph, seed: int) -> None:
    g = make_random_graph(seed, n=7)
    source = g.node_ids()[0]
    steps = compute_steps(g, source)
    for prev, cur in zip(steps, steps[1:]):
        for node, d in cur.distances.items():
            assert d <= prev.distances[node]


def test_visited_distances_are_final(make_random_graph) -> None:
    g = make_random_graph(3, n=8)
    source = g.node_ids()[0]
    steps = compute_steps(g, source)
    final = steps[-1].distances
    for step in steps:
        for node in step.visited:
            assert step.distances[node] == final[node]
