"""
graph.py — Graph Container
==========================
Single source of truth for the graph the user is editing.  The editing
UI mutates this object between runs; the engines never touch it directly
and instead work on an immutable GraphSnapshot.

Responsibilities:
  1. CRUD on nodes & edges                  (add / update / remove)
  2. Connection queries                     (connections, edges_from)
  3. Directed ↔ undirected conversion       (set_directed)
  4. Snapshotting for engine runs           (snapshot)
  5. Serialisation round-trip               (to_dict / from_dict)

Design decisions:
  - Nodes stored in a dict keyed by name for O(1) lookup.
  - Edges stored in a plain list, in insertion order.  Parallel edges
    between the same ordered pair are allowed; the adjacency index keeps
    all of them, matrix construction keeps the last one.
  - Edge objects are immutable, so editing replaces list entries.
"""

from dataclasses import dataclass
from typing import Dict, FrozenSet, Iterable, List, Optional, Tuple

from graph.edge import Edge
from graph.node import Node


@dataclass(frozen=True)
class GraphSnapshot:
    """Read-only view of the node set and edge list at one instant."""

    nodes: FrozenSet[str]
    edges: Tuple[Edge, ...]

    def node_ids(self) -> List[str]:
        """Node names in the sorted order every algorithm indexes by."""
        return sorted(self.nodes)

    def __len__(self) -> int:
        return len(self.nodes)


class Graph:
    """
    Attributes:
        nodes    : {name: Node}
        edges    : [Edge] in insertion order
        directed : bool – whether add_edge also adds the reverse edge
    """

    def __init__(self, directed: bool = True):
        self.nodes:    Dict[str, Node] = {}
        self.edges:    List[Edge]      = []
        self.directed: bool            = directed

    # ==================================================================
    # NODE CRUD
    # ==================================================================
    def add_node(
        self,
        x: float = 0.0,
        y: float = 0.0,
        name: Optional[str] = None,
        color: Optional[str] = None,
    ) -> Node:
        """Create + add a node.  Without a name the next free letter is used."""
        name = name or self._next_name()
        node = Node(name=name, x=x, y=y, color=color)
        self.nodes[name] = node
        return node

    def get_node(self, name: str) -> Optional[Node]:
        return self.nodes.get(name)

    def update_node(self, name: str, **changes) -> Optional[Node]:
        node = self.nodes.get(name)
        if node is None:
            return None
        for attr in ("x", "y", "color"):
            if attr in changes:
                setattr(node, attr, changes[attr])
        return node

    def move_node(self, name: str, x: float, y: float) -> Optional[Node]:
        node = self.nodes.get(name)
        if node is not None:
            node.move_to(x, y)
        return node

    def remove_node(self, name: str) -> None:
        if name not in self.nodes:
            return
        del self.nodes[name]
        # drop every edge touching this node
        self.edges = [e for e in self.edges if not e.touches(name)]

    # ==================================================================
    # EDGE CRUD
    # ==================================================================
    def add_edge(
        self,
        source: str,
        target: str,
        weight: int = 1,
        directed: Optional[bool] = None,
    ) -> Edge:
        """
        Append source → target.  For undirected graphs the reverse edge is
        appended too, unless one already exists.
        """
        if directed is None:
            directed = self.directed
        edge = Edge(source=source, target=target, weight=weight)
        had_reverse = any(e.connects(target, source) for e in self.edges)
        self.edges.append(edge)
        if not directed and not had_reverse:
            self.edges.append(edge.reversed())
        return edge

    def update_edge(self, source: str, target: str, weight: int) -> int:
        """Re-weight every source → target edge.  Returns how many changed."""
        changed = 0
        for idx, edge in enumerate(self.edges):
            if edge.connects(source, target):
                self.edges[idx] = edge.with_weight(weight)
                changed += 1
        return changed

    def remove_edge(self, source: str, target: str) -> int:
        """Remove the edge between source and target in BOTH directions."""
        before = len(self.edges)
        self.edges = [
            e for e in self.edges
            if not (e.connects(source, target) or e.connects(target, source))
        ]
        return before - len(self.edges)

    def edges_from(self, name: str) -> List[Edge]:
        return [e for e in self.edges if e.source == name]

    def get_edge_between(self, a: str, b: str) -> Optional[Edge]:
        """Last a → b edge, i.e. the one matrix construction keeps."""
        found = None
        for e in self.edges:
            if e.connects(a, b):
                found = e
        return found

    # ==================================================================
    # CONNECTION QUERIES
    # ==================================================================
    def connections(self, name: str) -> List[Dict]:
        """
        Every node sharing an edge with `name`, once per unordered pair.
        `bidirectional` is True when the reverse edge exists with the same weight.
        """
        result: List[Dict] = []
        seen = set()
        for edge in self.edges:
            if not edge.touches(name):
                continue
            other = edge.target if edge.source == name else edge.source
            pair = tuple(sorted((name, other)))
            if pair in seen:
                continue
            seen.add(pair)
            reverse = next(
                (e for e in self.edges if e is not edge and e.connects(edge.target, edge.source)),
                None,
            )
            result.append({
                "node":          other,
                "weight":        edge.weight,
                "bidirectional": reverse is not None and reverse.weight == edge.weight,
            })
        return result

    def set_directed(self, directed: bool) -> None:
        """
        Switch graph mode.  Going undirected keeps the first edge seen for
        every unordered pair; going directed keeps the edge list as is.
        """
        if not directed:
            kept: Dict[Tuple[str, ...], Edge] = {}
            for edge in self.edges:
                kept.setdefault(tuple(sorted((edge.source, edge.target))), edge)
            self.edges = list(kept.values())
        self.directed = directed

    # ==================================================================
    # RESET / SNAPSHOT
    # ==================================================================
    def clear(self) -> None:
        self.nodes.clear()
        self.edges = []

    def snapshot(self) -> GraphSnapshot:
        return GraphSnapshot(nodes=frozenset(self.nodes), edges=tuple(self.edges))

    # ==================================================================
    # SERIALISATION
    # ==================================================================
    def to_dict(self) -> dict:
        return {
            "directed": self.directed,
            "nodes":    [n.to_dict() for n in self.nodes.values()],
            "edges":    [e.to_dict() for e in self.edges],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Graph":
        g = cls(directed=data.get("directed", True))
        for nd in data.get("nodes", []):
            node = Node.from_dict(nd)
            g.nodes[node.name] = node
        g.edges = [Edge.from_dict(ed) for ed in data.get("edges", [])]
        return g

    @classmethod
    def from_edges(cls, nodes: Iterable[str], edges: Iterable[Tuple[str, str, int]]) -> "Graph":
        """Build a directed graph from plain names and (from, to, weight) triples."""
        g = cls(directed=True)
        for name in nodes:
            g.add_node(name=name)
        for source, target, weight in edges:
            g.add_edge(source, target, weight)
        return g

    # ==================================================================
    # UTILITY
    # ==================================================================
    def node_count(self) -> int:
        return len(self.nodes)

    def edge_count(self) -> int:
        return len(self.edges)

    def has_negative_edges(self) -> bool:
        return any(e.weight < 0 for e in self.edges)

    def node_ids(self) -> List[str]:
        return sorted(self.nodes)

    def _next_name(self) -> str:
        # A, B, … Z, AA, AB, … starting at the current node count
        idx = len(self.nodes)
        while True:
            name = _column_name(idx)
            if name not in self.nodes:
                return name
            idx += 1

    def __repr__(self) -> str:
        return f"Graph(nodes={self.node_count()}, edges={self.edge_count()}, directed={self.directed})"


def _column_name(idx: int) -> str:
    letters = ""
    idx += 1
    while idx > 0:
        idx, rem = divmod(idx - 1, 26)
        letters = chr(65 + rem) + letters
    return letters


def as_snapshot(graph) -> GraphSnapshot:
    """Accept a Graph or a GraphSnapshot; always hand back a snapshot."""
    if isinstance(graph, GraphSnapshot):
        return graph
    return graph.snapshot()
