"""
pathfinding.py — Shared Plumbing for the Graph Searches
=========================================================
BFS, DFS, Dijkstra and A* all take the same input and return the same
result shape:

    input   {"graph": {"nodes": [...], "edges": [...], "directed": false},
             "source": "A", "target": "F"}
    result  {"path": ["A", …, "F"], "cost": 7.0, "visited": ["A", …]}

An unreachable target completes with the no-path outcome, `path == []`
and `cost is None`.
"""

from typing import Any, Dict, List, Optional

from algorithms.inputs import require
from engine.errors import InvalidInput
from graph import Graph


def prepare(data: Dict[str, Any]) -> Dict[str, Any]:
    """Build the Graph and check both endpoints exist."""
    raw = data.get("graph", data)
    try:
        graph = Graph.from_dict(raw)
    except ValueError as exc:
        raise InvalidInput(str(exc)) from exc

    source = str(require(data, "source"))
    target = str(require(data, "target"))
    for role, node_id in (("source", source), ("target", target)):
        if not graph.has_node(node_id):
            raise InvalidInput(f"Unknown {role} node: {node_id!r}")
    return {"graph": graph, "source": source, "target": target}


def reconstruct(parent: Dict[str, Optional[str]], target: str) -> List[str]:
    """Walk predecessor links from the goal back to the start, then reverse."""
    path = []
    cur: Optional[str] = target
    while cur is not None:
        path.append(cur)
        cur = parent.get(cur)
    path.reverse()
    return path


def path_cost(graph: Graph, path: List[str]) -> float:
    """Total weight along consecutive nodes of `path`."""
    return float(sum(graph.get_edge_between(a, b).weight for a, b in zip(path, path[1:])))


def finite(dist: Dict[str, float]) -> Dict[str, float]:
    """Distance map with the unreached (∞) nodes left out, JSON-safe."""
    return {n: d for n, d in dist.items() if d != float("inf")}


def found(
    graph: Graph,
    parent: Dict[str, Optional[str]],
    target: str,
    visited: List[str],
    cost: Optional[float] = None,
) -> Dict[str, Any]:
    path = reconstruct(parent, target)
    if cost is None:
        cost = path_cost(graph, path)
    return {"path": path, "cost": float(cost), "visited": list(visited)}


def no_path(visited: List[str]) -> Dict[str, Any]:
    return {"path": [], "cost": None, "visited": list(visited)}
