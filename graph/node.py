"""
node.py — Graph Node
====================
Identity plus a 2-D position.  The position is opaque to BFS / DFS /
Dijkstra; only A* reads it (straight-line heuristic) and the renderer
uses it to lay the node out.
"""

from typing import Optional
import uuid


class Node:
    """
    Attributes:
        id    : Unique identifier (uuid prefix by default, or user-supplied).
        label : Human-readable name shown by the renderer.
        x, y  : Canvas coordinates.
    """

    __slots__ = ("id", "label", "x", "y")

    def __init__(
        self,
        x: float = 0.0,
        y: float = 0.0,
        label: Optional[str] = None,
        node_id: Optional[str] = None,
    ):
        self.id: str     = node_id or str(uuid.uuid4())[:8]
        self.label: str  = label or self.id
        self.x: float    = x
        self.y: float    = y

    # ------------------------------------------------------------------
    # Geometry
    # ------------------------------------------------------------------
    def distance_to(self, other: "Node") -> float:
        """Euclidean distance — the A* heuristic."""
        return ((self.x - other.x) ** 2 + (self.y - other.y) ** 2) ** 0.5

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> dict:
        return {
            "id":    self.id,
            "label": self.label,
            "x":     self.x,
            "y":     self.y,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Node":
        if "id" not in data:
            raise ValueError(f"Node without an id: {data!r}")
        try:
            x = float(data.get("x", 0.0))
            y = float(data.get("y", 0.0))
        except (TypeError, ValueError):
            raise ValueError(f"Node {data['id']!r} has a non-numeric position")
        return cls(x=x, y=y, label=data.get("label"), node_id=str(data["id"]))

    # ------------------------------------------------------------------
    # Dunder
    # ------------------------------------------------------------------
    def __repr__(self) -> str:
        return f"Node(id={self.id}, label={self.label}, pos=({self.x:.2f},{self.y:.2f}))"

    def __eq__(self, other) -> bool:
        return isinstance(other, Node) and self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)
