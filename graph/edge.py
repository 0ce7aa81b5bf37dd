"""
edge.py — Directed Weighted Edge
================================
A single directed connection between two node names.

Design decisions:
  - `source` and `target` are node-name strings, NOT Node references.
    This keeps edges serialisable and lets a snapshot share them freely.
  - Edges are immutable values.  Editing an edge replaces it in the
    graph's edge list, so a snapshot taken earlier never sees the change.
  - No id: two edges with the same endpoints and weight are equal.
    Parallel edges are still kept as separate list entries by the Graph.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Edge:
    """
    Attributes:
        source : Name of the tail node.
        target : Name of the head node.
        weight : Integer cost.  Negative values are stored as-is.
    """

    source: str
    target: str
    weight: int = 1

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def connects(self, node_a: str, node_b: str) -> bool:
        """True if this edge runs node_a → node_b."""
        return self.source == node_a and self.target == node_b

    def touches(self, node: str) -> bool:
        return node in (self.source, self.target)

    def reversed(self) -> "Edge":
        return Edge(source=self.target, target=self.source, weight=self.weight)

    def with_weight(self, weight: int) -> "Edge":
        return Edge(source=self.source, target=self.target, weight=weight)

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> dict:
        return {
            "from":   self.source,
            "to":     self.target,
            "weight": self.weight,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Edge":
        return cls(
            source=str(data["from"]),
            target=str(data["to"]),
            weight=int(data.get("weight", 1)),
        )

    def __repr__(self) -> str:
        return f"Edge({self.source} → {self.target}, w={self.weight})"
