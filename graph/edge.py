"""
edge.py — Graph Edge
====================
Connects two nodes with a non-negative weight.

Design decisions:
  - `source` and `target` are node-id strings, NOT Node references.
    This keeps edges serialisable and avoids circular references.
  - Weight defaults to 1 for unweighted graphs — BFS and DFS simply
    never read it.
  - Negative and non-finite (NaN, ±inf) weights are rejected at
    construction: every shortest-path algorithm in this project assumes
    finite, non-negative costs.
"""

import math
from typing import Optional
import uuid


class Edge:
    """
    Attributes:
        id       : Unique identifier.
        source   : ID of the tail node.
        target   : ID of the head node.
        weight   : Non-negative numeric cost (default 1).
        directed : If False, traversal works in both directions.
    """

    __slots__ = ("id", "source", "target", "weight", "directed")

    def __init__(
        self,
        source: str,
        target: str,
        weight: float = 1.0,
        directed: bool = False,
        edge_id: Optional[str] = None,
    ):
        if isinstance(weight, bool) or not isinstance(weight, (int, float)):
            raise ValueError(f"Edge {source}-{target} weight must be a number, got {weight!r}")
        if not math.isfinite(weight):
            raise ValueError(f"Edge {source}-{target} weight must be finite, got {weight!r}")
        if weight < 0:
            raise ValueError(f"Edge {source}-{target} has negative weight {weight}")
        self.id:       str   = edge_id or str(uuid.uuid4())[:8]
        self.source:   str   = source
        self.target:   str   = target
        self.weight:   float = weight
        self.directed: bool  = directed

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> dict:
        return {
            "id":       self.id,
            "source":   self.source,
            "target":   self.target,
            "weight":   self.weight,
            "directed": self.directed,
        }

    @classmethod
    def from_dict(cls, data: dict, directed: bool = False) -> "Edge":
        if "source" not in data or "target" not in data:
            raise ValueError(f"Edge needs a source and a target: {data!r}")
        return cls(
            source=str(data["source"]),
            target=str(data["target"]),
            weight=data.get("weight", 1.0),
            directed=data.get("directed", directed),
            edge_id=data.get("id"),
        )

    # ------------------------------------------------------------------
    # Dunder
    # ------------------------------------------------------------------
    def __repr__(self) -> str:
        arrow = " → " if self.directed else " ↔ "
        return f"Edge({self.source}{arrow}{self.target}, w={self.weight})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Edge) and self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)
