"""Matrix engines, saturation arithmetic and the registry."""

from __future__ import annotations

import pytest

from algorithms import (
    INF,
    REGISTRY,
    UnknownAlgorithmError,
    algorithms_by_tag,
    all_pairs_keys,
    get_algorithm,
    require_algorithm,
)
from algorithms.faster_apsp import faster_apsp
from algorithms.floyd_warshall import compute_steps as floyd_warshall_steps, floyd_warshall
from algorithms.johnson import johnson
from algorithms.matrix import add, diff_cells, extend, format_distance, min_plus, weight_matrix
from algorithms.slow_apsp import slow_apsp
from graph import Graph

ENGINES = [floyd_warshall, johnson, slow_apsp, faster_apsp]


# ---------------------------------------------------------------------------
# Arithmetic
# ---------------------------------------------------------------------------
def test_add_saturates_at_inf() -> None:
    assert add(INF, 5) == INF
    assert add(5, INF) == INF
    assert add(INF, INF) == INF
    assert add(3, 4) == 7
    assert format_distance(INF) == "∞"
    assert format_distance(12) == "12"


def test_min_plus_keeps_previous_cell_through_zero_diagonal() -> None:
    w = [[0, 3], [INF, 0]]
    assert min_plus(w, w) == [[0, 3], [INF, 0]]
    assert extend(w, w) == [[0, 3], [INF, 0]]


def test_weight_matrix_last_edge_wins_and_skips_self_loops() -> None:
    g = Graph.from_edges("AB", [("A", "B", 2), ("A", "B", 5), ("B", "B", 9)])
    nodes, m = weight_matrix(g.snapshot())
    assert nodes == ["A", "B"]
    assert m == [[0, 5], [INF, 0]]


# ---------------------------------------------------------------------------
# Engines
# ---------------------------------------------------------------------------
@pytest.mark.parametrize("engine", ENGINES)
def test_single_node(engine) -> None:
    g = Graph.from_edges("X", [])
    result = engine(g)
    assert result.as_lists() == [[0]]
    assert result.nodes == ("X",)


@pytest.mark.parametrize("engine", ENGINES)
def test_two_disconnected_nodes(engine) -> None:
    result = engine(Graph.from_edges("AB", []))
    assert result.as_lists() == [[0, INF], [INF, 0]]


@pytest.mark.parametrize("engine", ENGINES)
def test_running_twice_gives_identical_results(engine, triangle: Graph) -> None:
    assert engine(triangle) == engine(triangle)


@pytest.mark.parametrize("engine", ENGINES)
def test_empty_graph(engine) -> None:
    assert engine(Graph()) is None


def test_single_node_round_counts() -> None:
    g = Graph.from_edges("A", [])
    assert slow_apsp(g).rounds == 0
    assert faster_apsp(g).rounds == 0


def test_cycle_round_counts(cycle4: Graph) -> None:
    assert slow_apsp(cycle4).matrix == faster_apsp(cycle4).matrix
    assert slow_apsp(cycle4).rounds == 3
    assert faster_apsp(cycle4).rounds == 2
    assert floyd_warshall(cycle4).rounds == 4
    assert johnson(cycle4).rounds == 4


@pytest.mark.parametrize("engine", ENGINES)
def test_cycle_distances(engine, cycle4: Graph) -> None:
    result = engine(cycle4)
    assert result.distance("A", "D") == 3
    assert result.distance("D", "C") == 3
    assert result.distance("B", "A") == 3


@pytest.mark.parametrize("seed", range(15))
def test_engines_agree_on_random_graphs(make_random_graph, reference_distances, seed: int) -> None:
    g = make_random_graph(seed, n=7)
    snap = g.snapshot()
    results = [engine(snap) for engine in ENGINES]
    base = results[0]
    for other in results[1:]:
        assert diff_cells(base, other) == []

    for i, source in enumerate(base.nodes):
        expected = reference_distances(snap, source)
        assert list(base.matrix[i]) == [expected[t] for t in base.nodes]


def test_unreachable_cells_stay_exactly_inf() -> None:
    g = Graph.from_edges("ABC", [("A", "B", 1)])
    for engine in ENGINES:
        result = engine(g)
        assert result.distance("B", "A") == INF
        assert result.distance("C", "A") == INF


def test_weights_beyond_inf_are_unreachable_everywhere() -> None:
    g = Graph.from_edges("AB", [("A", "B", INF + 1)])
    results = [engine(g) for engine in ENGINES]
    for result in results:
        assert result.as_lists() == [[0, INF], [INF, 0]]
    assert weight_matrix(g.snapshot())[1][0][1] == INF


def test_weight_beyond_inf_records_no_floyd_warshall_update() -> None:
    g = Graph.from_edges("ABC", [("A", "B", INF + 5), ("B", "C", 1)])
    steps = floyd_warshall_steps(g)
    assert not any(s.updated for s in steps)


def test_parallel_edges_split_matrix_and_adjacency_engines() -> None:
    g = Graph.from_edges("AB", [("A", "B", 2), ("A", "B", 5)])
    assert floyd_warshall(g).distance("A", "B") == 5
    assert slow_apsp(g).distance("A", "B") == 5
    assert johnson(g).distance("A", "B") == 2
    assert diff_cells(floyd_warshall(g), johnson(g)) == [("A", "B", 5, 2)]


def test_diff_cells_rejects_different_node_sets() -> None:
    left = floyd_warshall(Graph.from_edges("AB", []))
    right = floyd_warshall(Graph.from_edges("AC", []))
    with pytest.raises(ValueError):
        diff_cells(left, right)


def test_result_to_dict() -> None:
    result = faster_apsp(Graph.from_edges("AB", [("A", "B", 3)]))
    payload = result.to_dict()
    assert payload["nodes"] == ["A", "B"]
    assert payload["matrix"] == [[0, 3], [INF, 0]]
    assert payload["inf"] == INF
    assert payload["algorithm"] == "faster_apsp"


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------
def test_registry_keys() -> None:
    assert list(REGISTRY) == ["dijkstra", "floyd_warshall", "johnson", "slow_apsp", "faster_apsp"]
    assert all_pairs_keys() == ["floyd_warshall", "johnson", "slow_apsp", "faster_apsp"]


def test_stepwise_flags() -> None:
    stepwise = [a.key for a in REGISTRY.values() if a.stepwise]
    assert stepwise == ["dijkstra", "floyd_warshall"]
    assert [a.key for a in algorithms_by_tag("min-plus")] == ["slow_apsp", "faster_apsp"]


def test_lookup() -> None:
    assert get_algorithm("nope") is None
    assert require_algorithm("johnson").is_all_pairs
    with pytest.raises(UnknownAlgorithmError):
        require_algorithm("bellman_ford")


def test_registry_fn_runs(triangle: Graph) -> None:
    assert REGISTRY["dijkstra"].fn(triangle, "A") == {"A": 0, "B": 4, "C": 6}
    assert REGISTRY["johnson"].fn(triangle).distance("A", "C") == 6
    card = REGISTRY["floyd_warshall"].to_dict()
    assert card["stepwise"] is True
    assert card["pseudocode"]
