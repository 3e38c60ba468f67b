"""
astar.py — A* Search
=====================
Generator-based A*: Dijkstra with a heuristic added to the priority key.

Built-in heuristics (two Node objects in, float out):
  • euclidean   – √(Δx² + Δy²)         straight-line distance, the default
  • manhattan   – |Δx| + |Δy|
  • zero        – h = 0, A* degrades to Dijkstra

Edge weights need not match node distances (generated graphs put weights
of 1–10 on edges between nodes hundreds of units apart), so h is scaled by
the largest factor s ≤ 1 with  weight(u, v) ≥ s · h(u, v)  on every edge.
Both heuristics are metrics, so by the triangle inequality s · h never
overestimates the remaining cost and A* stays optimal on any graph with
non-negative weights.

Emits the same event kinds as Dijkstra; RELAX payloads also carry g, h, f.
"""

import heapq
import itertools
from typing import Any, Callable, Dict, List, Optional

from algorithms.inputs import one_of
from algorithms.pathfinding import finite, found, no_path
from algorithms.pathfinding import prepare as _prepare_search
from algorithms.step import StepKind
from graph import Graph, Node


# ---------------------------------------------------------------------------
# Built-in heuristics
# ---------------------------------------------------------------------------
def euclidean(a: Node, b: Node) -> float:
    return a.distance_to(b)

def manhattan(a: Node, b: Node) -> float:
    return abs(a.x - b.x) + abs(a.y - b.y)

def zero(a: Node, b: Node) -> float:
    """h=0 → A* degrades to Dijkstra.  Useful for teaching."""
    return 0.0

HEURISTICS: Dict[str, Callable[[Node, Node], float]] = {
    "euclidean": euclidean,
    "manhattan": manhattan,
    "zero":      zero,
}


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def AStar(graph, source, target, h):",        # 0
    "    g[source] ← 0",                           # 1
    "    f[source] ← h(source, target)",           # 2
    "    open_set ← [(f[source], source)]",        # 3
    "    parent ← {}",                             # 4
    "    while open_set:",                          # 5
    "        (_, node) ← open_set.pop_min()",      # 6
    "        if node == target: return path",      # 7
    "        closed.add(node)",                    # 8
    "        for (nbr, w) in adj(node):",          # 9
    "            tentative_g ← g[node] + w",       # 10
    "            if tentative_g < g[nbr]:",        # 11
    "                parent[nbr] = node",          # 12
    "                g[nbr] ← tentative_g",        # 13
    "                f[nbr] ← g[nbr] + h(nbr)",    # 14
    "                open_set.push((f[nbr], nbr))",# 15
    "    return NOT FOUND",                        # 16
]


def heuristic_scale(graph: Graph, h_fn: Callable[[Node, Node], float]) -> float:
    """Largest s in [0, 1] with edge.weight >= s * h_fn(u, v) for every edge."""
    scale = 1.0
    for edge in graph.edges.values():
        span = h_fn(graph.get_node(edge.source), graph.get_node(edge.target))
        if span > 0:
            scale = min(scale, edge.weight / span)
    return scale


def prepare(data: Dict[str, Any]) -> Dict[str, Any]:
    kwargs = _prepare_search(data)
    kwargs["heuristic"] = one_of(data.get("heuristic", "euclidean"), list(HEURISTICS), "heuristic")
    return kwargs


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def astar(graph: Graph, source: str, target: str, emit, heuristic: str = "euclidean"):
    """
    Args:
        graph     : The graph.
        source    : Start node id.
        target    : Goal node id.
        heuristic : Key into HEURISTICS.
    """
    h_fn        = HEURISTICS[heuristic]
    scale       = heuristic_scale(graph, h_fn)
    target_node = graph.get_node(target)
    INF         = float("inf")

    g_score: Dict[str, float]         = {nid: INF for nid in graph.nodes}
    h_cache: Dict[str, float]         = {}
    parent:  Dict[str, Optional[str]] = {source: None}
    closed:  set                      = set()
    order:   List[str]                = []

    def h(node_id: str) -> float:
        if node_id not in h_cache:
            h_cache[node_id] = scale * h_fn(graph.get_node(node_id), target_node)
        return h_cache[node_id]

    g_score[source] = 0.0
    counter  = itertools.count()
    open_set = [(h(source), next(counter), source)]

    yield emit(
        StepKind.START,
        f"A* init: g(source)=0, h(source)={h(source):.2f} (using {heuristic}, "
        f"scaled by {scale:.4g}), f(source)={h(source):.2f}. Push into open set.",
        node=source, g=0.0, h=h(source), f=h(source), heuristic=heuristic, scale=scale, line=2,
    )

    while open_set:
        f, _, node = heapq.heappop(open_set)
        if node in closed:
            continue

        closed.add(node)
        order.append(node)
        emit.count("visited")
        yield emit(
            StepKind.VISIT,
            f"Pop '{node}': g={g_score[node]:.2f}, h={h(node):.2f}, f={f:.2f}. Expand neighbours.",
            node=node, g=g_score[node], h=h(node), f=f,
            open=[n for _, _, n in sorted(open_set) if n not in closed], line=6,
        )

        if node == target:
            result = found(graph, parent, target, order, cost=g_score[target])
            yield emit.final(
                StepKind.FOUND,
                f"Target '{target}' reached! Cost = {g_score[target]:.2f}. "
                f"Path: {' → '.join(result['path'])}",
                path=result["path"], cost=result["cost"], line=7,
            )
            return result

        for nbr, edge in graph.neighbours(node):
            if nbr in closed:
                continue
            tentative_g = g_score[node] + edge.weight
            emit.count("relaxations")
            improved = tentative_g < g_score[nbr]
            if improved:
                g_score[nbr] = tentative_g
                parent[nbr]  = node
                heapq.heappush(open_set, (tentative_g + h(nbr), next(counter), nbr))
                explanation = (
                    f"Relax {node}→{nbr}: g={tentative_g:.2f}, h={h(nbr):.2f}, "
                    f"f={tentative_g + h(nbr):.2f} — UPDATE!"
                )
            else:
                explanation = (
                    f"Edge {node}→{nbr}: tentative g={tentative_g:.2f} ≥ "
                    f"current g={g_score[nbr]:.2f} — no improvement."
                )
            yield emit(
                StepKind.RELAX, explanation,
                source=node, target=nbr, edge=edge.id, weight=edge.weight,
                g=tentative_g, h=h(nbr), f=tentative_g + h(nbr), improved=improved,
                scores=finite(g_score), line=11,
            )

    yield emit.final(
        StepKind.NO_PATH,
        f"Open set empty. '{target}' not reachable.",
        visited=list(order), line=16,
    )
    return no_path(order)
