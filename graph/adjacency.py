"""
adjacency.py — Adjacency Index
==============================
Builds node → [(neighbour, weight)] on demand for the single-source
engines.  Every node gets an entry, isolated ones included, because the
label-setting loop treats every node as a visit candidate.
"""

from typing import Dict, Iterable, List, Tuple

from graph.edge import Edge

Adjacency = Dict[str, List[Tuple[str, int]]]


def build_adjacency(nodes: Iterable[str], edges: Iterable[Edge]) -> Adjacency:
    """
    Parallel edges stay separate entries, in insertion order.
    Edges with an endpoint outside `nodes` are skipped.
    """
    adjacency: Adjacency = {name: [] for name in nodes}
    for edge in edges:
        if edge.source not in adjacency or edge.target not in adjacency:
            continue
        adjacency[edge.source].append((edge.target, edge.weight))
    return adjacency
