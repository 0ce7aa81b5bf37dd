"""
graph/
-----
Core data layer.  Public API:

    from graph import Graph, GraphSnapshot, Node, Edge
    from graph import build_adjacency
"""

from graph.node      import Node, DEFAULT_COLOR
from graph.edge      import Edge
from graph.graph     import Graph, GraphSnapshot, as_snapshot
from graph.adjacency import Adjacency, build_adjacency

__all__ = [
    "Node",      "DEFAULT_COLOR",
    "Edge",
    "Graph",     "GraphSnapshot", "as_snapshot",
    "Adjacency", "build_adjacency",
]
