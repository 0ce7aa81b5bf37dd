"""
node.py — Graph Node
====================
A named vertex plus the layout attributes the editing UI attaches to it.
The shortest-path engines only ever read `name`; x / y / color belong to
the presentation layer and ride along so a graph round-trips intact.
"""

from typing import Optional

DEFAULT_COLOR = "#e5e7eb"


class Node:
    """
    Attributes:
        name  : Unique identifier, also the label shown on the canvas.
        x, y  : Canvas coordinates (pixel or normalised, caller decides).
        color : Fill colour chosen by the user.
    """

    __slots__ = ("name", "x", "y", "color")

    def __init__(
        self,
        name: str,
        x: float = 0.0,
        y: float = 0.0,
        color: Optional[str] = None,
    ):
        self.name: str  = name
        self.x: float   = x
        self.y: float   = y
        self.color: str = color or DEFAULT_COLOR

    def move_to(self, x: float, y: float) -> None:
        self.x = x
        self.y = y

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> dict:
        return {
            "name":  self.name,
            "x":     self.x,
            "y":     self.y,
            "color": self.color,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Node":
        return cls(
            name=str(data["name"]),
            x=data.get("x", 0.0),
            y=data.get("y", 0.0),
            color=data.get("color"),
        )

    # ------------------------------------------------------------------
    # Dunder
    # ------------------------------------------------------------------
    def __repr__(self) -> str:
        return f"Node(name={self.name}, pos=({self.x:.2f},{self.y:.2f}), color={self.color})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Node) and self.name == other.name

    def __hash__(self) -> int:
        return hash(self.name)
