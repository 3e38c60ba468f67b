"""
graph.py — Graph Container & Generator
=======================================
Single source of truth for a graph-search input.  The graph algorithms
only ever call `neighbours()`, `get_node()` and `has_node()`.

Responsibilities:
  1. Building nodes & edges                 (add / create / get)
  2. Adjacency queries                      (neighbours, symmetry)
  3. Random-graph generation                (seeded, always connected)
  4. Import from adjacency-list text        (text → graph)
  5. Serialisation round-trip               (to_dict / from_dict)

Design decisions:
  - Nodes & edges stored in plain dicts keyed by id for O(1) lookup.
  - A separate adjacency dict  `_adj[node_id] → [(neighbour_id, edge_id)]`
    is maintained incrementally so neighbour queries are O(degree), not O(E).
    Its order is edge-insertion order, which fixes the traversal order of
    every search algorithm.
  - An undirected edge is registered on both endpoints, so adjacency is
    symmetric by construction (`is_symmetric()` checks it).
  - Malformed input raises plain ValueError; callers translate it.
"""

import math
import random
from typing import Dict, List, Optional, Set, Tuple

from graph.edge import Edge
from graph.node import Node


class Graph:
    """
    Attributes:
        nodes      : {node_id: Node}
        edges      : {edge_id: Edge}
        directed   : bool – graph-level directedness
        _adj       : {node_id: [(neighbour_id, edge_id), …]}
    """

    def __init__(self, directed: bool = False):
        self.nodes:    Dict[str, Node] = {}
        self.edges:    Dict[str, Edge] = {}
        self.directed: bool           = directed
        self._adj:     Dict[str, List[Tuple[str, str]]] = {}   # node_id → [(nbr, edge_id)]

    # ==================================================================
    # NODE CRUD
    # ==================================================================
    def add_node(self, node: Node) -> Node:
        if node.id in self.nodes:
            raise ValueError(f"Duplicate node id: {node.id}")
        self.nodes[node.id] = node
        self._adj.setdefault(node.id, [])
        return node

    def create_node(self, x: float, y: float, label: Optional[str] = None, node_id: Optional[str] = None) -> Node:
        """Convenience: create + add in one call."""
        return self.add_node(Node(x=x, y=y, label=label, node_id=node_id))

    def get_node(self, node_id: str) -> Optional[Node]:
        return self.nodes.get(node_id)

    def has_node(self, node_id: str) -> bool:
        return node_id in self.nodes

    # ==================================================================
    # EDGE CRUD
    # ==================================================================
    def add_edge(self, edge: Edge) -> Edge:
        for end in (edge.source, edge.target):
            if end not in self.nodes:
                raise ValueError(f"Edge {edge.source}-{edge.target} references unknown node {end!r}")
        self.edges[edge.id] = edge
        self._adj[edge.source].append((edge.target, edge.id))
        if not edge.directed and edge.source != edge.target:
            self._adj[edge.target].append((edge.source, edge.id))
        return edge

    def create_edge(self, source: str, target: str, weight: float = 1.0, edge_id: Optional[str] = None) -> Edge:
        return self.add_edge(Edge(source=source, target=target, weight=weight, directed=self.directed, edge_id=edge_id))

    def get_edge_between(self, a: str, b: str) -> Optional[Edge]:
        """First edge connecting a and b (direction-aware)."""
        for nbr, eid in self._adj.get(a, []):
            if nbr == b:
                return self.edges[eid]
        return None

    # ==================================================================
    # ADJACENCY QUERIES
    # ==================================================================
    def neighbours(self, node_id: str) -> List[Tuple[str, Edge]]:
        """Return [(neighbour_id, edge)] for every reachable neighbour."""
        return [(nbr_id, self.edges[eid]) for nbr_id, eid in self._adj.get(node_id, [])]

    def is_symmetric(self) -> bool:
        """For undirected graphs: A adjoins B ⇔ B adjoins A."""
        for a, pairs in self._adj.items():
            for b, eid in pairs:
                if self.directed or self.edges[eid].directed:
                    continue
                if not any(n == a for n, _ in self._adj.get(b, [])):
                    return False
        return True

    # ==================================================================
    # SERIALISATION
    # ==================================================================
    def to_dict(self) -> dict:
        return {
            "directed": self.directed,
            "nodes":    [n.to_dict() for n in self.nodes.values()],
            "edges":    [e.to_dict() for e in self.edges.values()],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Graph":
        if not isinstance(data, dict):
            raise ValueError("Graph must be an object with nodes and edges")
        nodes = data.get("nodes", [])
        edges = data.get("edges", [])
        if not isinstance(nodes, list) or not isinstance(edges, list):
            raise ValueError("Graph nodes and edges must be lists")
        g = cls(directed=bool(data.get("directed", False)))
        for nd in nodes:
            if not isinstance(nd, dict):
                raise ValueError(f"Node must be an object, got {nd!r}")
            g.add_node(Node.from_dict(nd))
        for ed in edges:
            if not isinstance(ed, dict):
                raise ValueError(f"Edge must be an object, got {ed!r}")
            g.add_edge(Edge.from_dict(ed, directed=g.directed))
        return g

    # ==================================================================
    # GENERATORS — Factory class-methods
    # ==================================================================
    @classmethod
    def generate_random(
        cls,
        num_nodes: int = 10,
        edge_probability: float = 0.3,
        directed: bool = False,
        weight_range: Tuple[int, int] = (1, 10),
        seed: Optional[int] = None,
        canvas_w: float = 800,
        canvas_h: float = 500,
    ) -> "Graph":
        """
        Erdős–Rényi style random graph.
        Each possible edge is included with probability `edge_probability`;
        a spanning backbone keeps it connected.
        """
        rng = random.Random(seed)
        g = cls(directed=directed)
        margin = 40

        # place nodes in a circle with jitter so it looks natural
        ids = []
        for i in range(num_nodes):
            angle  = 2 * math.pi * i / num_nodes
            radius = min(canvas_w, canvas_h) * 0.35
            cx, cy = canvas_w / 2, canvas_h / 2
            x = cx + radius * math.cos(angle) + rng.uniform(-30, 30)
            y = cy + radius * math.sin(angle) + rng.uniform(-30, 30)
            x = max(margin, min(canvas_w - margin, x))
            y = max(margin, min(canvas_h - margin, y))
            nid = str(i)
            g.create_node(round(x, 1), round(y, 1), label=nid, node_id=nid)
            ids.append(nid)

        for i in range(num_nodes):
            for j in (range(num_nodes) if directed else range(i + 1, num_nodes)):
                if i != j and rng.random() < edge_probability:
                    g.create_edge(ids[i], ids[j], weight=rng.randint(*weight_range))

        # guarantee connectivity: add a spanning-tree backbone
        shuffled = list(ids)
        rng.shuffle(shuffled)
        for k in range(1, len(shuffled)):
            if not g.get_edge_between(shuffled[k - 1], shuffled[k]):
                g.create_edge(shuffled[k - 1], shuffled[k], weight=rng.randint(*weight_range))

        return g

    @classmethod
    def from_adjacency_list(
        cls,
        text: str,
        directed: bool = False,
        canvas_w: float = 800,
        canvas_h: float = 500,
    ) -> "Graph":
        """
        Parse a simple text adjacency list.

        Supported formats (one node per line):
            A: B C D            → A connects to B, C, D  (weight 1)
            A: B(3) C(7)        → A→B weight 3, A→C weight 7
            0 -> 1, 2           → arrow syntax, comma separated

        Nodes are auto-laid-out in a circle.
        """
        g = cls(directed=directed)
        adjacency: Dict[str, List[Tuple[str, float]]] = {}

        for line in text.strip().splitlines():
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            for sep in (":", "→", "->"):
                if sep in line:
                    src, rest = line.split(sep, 1)
                    break
            else:
                raise ValueError(f"Cannot parse adjacency line: {line!r}")

            src = src.strip()
            adjacency.setdefault(src, [])
            for token in rest.replace(",", " ").split():
                if "(" in token and token.endswith(")"):
                    tgt, w_str = token[:-1].split("(", 1)
                    w = float(w_str)
                else:
                    tgt, w = token, 1.0
                adjacency.setdefault(tgt, [])
                adjacency[src].append((tgt, w))

        labels = list(adjacency)
        n = len(labels)
        cx, cy = canvas_w / 2, canvas_h / 2
        radius = min(canvas_w, canvas_h) * 0.35
        for i, label in enumerate(labels):
            angle = 2 * math.pi * i / n
            g.create_node(round(cx + radius * math.cos(angle), 1),
                          round(cy + radius * math.sin(angle), 1),
                          label=label, node_id=label)

        # deduplicate for undirected
        seen: Set = set()
        for src, targets in adjacency.items():
            for tgt, w in targets:
                key = (src, tgt) if directed else frozenset([src, tgt])
                if key in seen:
                    continue
                seen.add(key)
                g.create_edge(src, tgt, weight=w)

        return g

    # ==================================================================
    # UTILITY
    # ==================================================================
    def node_count(self) -> int:
        return len(self.nodes)

    def edge_count(self) -> int:
        return len(self.edges)

    def node_ids(self) -> List[str]:
        return list(self.nodes.keys())

    def __repr__(self) -> str:
        return f"Graph(nodes={self.node_count()}, edges={self.edge_count()}, directed={self.directed})"
