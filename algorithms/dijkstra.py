"""
dijkstra.py — Dijkstra's Shortest-Path Algorithm
==================================================
Generator-based Dijkstra using a min-heap (heapq).

Emits a Step at:
  1. Initialise distances / push source          →  START
  2. Pop a stale heap entry                      →  HIGHLIGHT (skipped)
  3. Pop minimum-distance node                   →  VISIT (distance final)
  4. Each relaxation attempt                     →  RELAX (`improved` flag)
  5. Target popped                               →  FOUND
  6. Heap empty                                  →  NO_PATH

The predecessor of a node changes only on STRICT improvement, and ties
in the heap are broken by push order, so equal-cost paths resolve to
the first one discovered.

Correctness note: Dijkstra requires non-negative weights; Edge rejects
negative ones at construction.
"""

import heapq
import itertools
from typing import Dict, List, Optional

from algorithms.pathfinding import finite, found, no_path
from algorithms.step import StepKind
from graph import Graph


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def Dijkstra(graph, source, target):",        # 0
    "    dist ← {v: ∞ for v in V}",                # 1
    "    dist[source] ← 0",                        # 2
    "    pq ← [(0, source)]",                      # 3
    "    parent ← {}",                             # 4
    "    while pq is not empty:",                   # 5
    "        (d, node) ← pq.pop_min()",            # 6
    "        if d > dist[node]: continue",         # 7
    "        if node == target: return path",      # 8
    "        for (neighbour, w) in adj(node):",    # 9
    "            new_dist ← dist[node] + w",       # 10
    "            if new_dist < dist[neighbour]:",  # 11
    "                dist[neighbour] ← new_dist",  # 12
    "                parent[neighbour] = node",    # 13
    "                pq.push((new_dist, nbr))",    # 14
    "    return NOT FOUND",                        # 15
]


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def dijkstra(graph: Graph, source: str, target: str, emit):
    INF = float("inf")

    dist:   Dict[str, float]          = {nid: INF for nid in graph.nodes}
    parent: Dict[str, Optional[str]]  = {source: None}
    dist[source] = 0.0
    counter = itertools.count()
    pq = [(0.0, next(counter), source)]     # min-heap: (distance, push order, node_id)
    done:  set       = set()
    order: List[str] = []

    yield emit(
        StepKind.START,
        f"Initialise: all distances = ∞ except source '{source}' = 0. "
        f"Push source into the priority queue.",
        node=source, distances=finite(dist), queue=_queue(pq), line=2,
    )

    while pq:
        d, _, node = heapq.heappop(pq)

        if node in done or d > dist[node]:
            yield emit(
                StepKind.HIGHLIGHT,
                f"Pop (dist={d}, '{node}') — stale entry (current best = {dist[node]}). Skip.",
                node=node, queue=_queue(pq), line=7,
            )
            continue

        done.add(node)
        order.append(node)
        emit.count("visited")
        yield emit(
            StepKind.VISIT,
            f"Pop '{node}' with distance {d} — smallest in the priority queue. "
            f"This distance is now FINAL.",
            node=node, distance=d, distances=finite(dist), queue=_queue(pq), line=6,
        )

        if node == target:
            result = found(graph, parent, target, order, cost=dist[target])
            yield emit.final(
                StepKind.FOUND,
                f"Target '{target}' popped! Shortest distance = {dist[target]}. "
                f"Path: {' → '.join(result['path'])}",
                path=result["path"], cost=result["cost"], line=8,
            )
            return result

        for nbr, edge in graph.neighbours(node):
            if nbr in done:
                continue
            new_dist = dist[node] + edge.weight
            emit.count("relaxations")
            improved = new_dist < dist[nbr]
            if improved:
                old = dist[nbr]
                dist[nbr]   = new_dist
                parent[nbr] = node
                heapq.heappush(pq, (new_dist, next(counter), nbr))
                explanation = (
                    f"Relax {node}→{nbr}: {dist[node]} + {edge.weight} = {new_dist} "
                    f"< current {old} → UPDATE!"
                )
            else:
                explanation = (
                    f"Edge {node}→{nbr}: {dist[node]} + {edge.weight} = {new_dist} "
                    f"≥ current {dist[nbr]} → no improvement."
                )
            yield emit(
                StepKind.RELAX, explanation,
                source=node, target=nbr, edge=edge.id, weight=edge.weight,
                candidate=new_dist, improved=improved,
                distances=finite(dist), queue=_queue(pq), line=11,
            )

    yield emit.final(
        StepKind.NO_PATH,
        f"Priority queue empty. '{target}' is not reachable.",
        distances=finite(dist), visited=list(order), line=15,
    )
    return no_path(order)


def _queue(pq) -> List[List]:
    """Heap snapshot as [[node, dist], …] in pop order."""
    return [[n, d] for d, _, n in sorted(pq)]
