"""
bfs.py — Breadth-First Search
==============================
Generator-based BFS.  Emits a Step at every meaningful event:
  1. Dequeue a node             →  VISIT
  2. Discover an unseen node    →  ENQUEUE (marked visited right here,
                                   so no node is ever queued twice)
  3. Target dequeued            →  FOUND with the fewest-hops path
  4. Queue exhausted            →  NO_PATH

Pseudocode lines are 0-indexed and match the PSEUDOCODE constant
exported alongside the generator so the UI can highlight them live.
"""

from collections import deque
from typing import Dict, List, Optional

from algorithms.pathfinding import found, no_path
from algorithms.step import StepKind
from graph import Graph


# ---------------------------------------------------------------------------
# Pseudocode — each string is one displayed line; index = payload["line"]
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def BFS(graph, source, target):",          # 0
    "    queue ← [source]",                     # 1
    "    visited ← {source}",                   # 2
    "    parent ← {}",                          # 3
    "    while queue is not empty:",             # 4
    "        node ← queue.dequeue()",           # 5
    "        if node == target: return path",   # 6
    "        for neighbour in adj(node):",      # 7
    "            if neighbour not visited:",     # 8
    "                visited.add(neighbour)",   # 9
    "                parent[neighbour] = node", # 10
    "                queue.enqueue(neighbour)", # 11
    "    return NOT FOUND",                     # 12
]


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def bfs(graph: Graph, source: str, target: str, emit):
    """
    Args:
        graph  : The graph to search.
        source : Starting node id.
        target : Goal node id.
        emit   : StepEmitter of the owning Run.

    Returns:
        {"path", "cost", "visited"} — `visited` is the dequeue order.
    """
    queue   = deque([source])
    seen    = {source}
    parent: Dict[str, Optional[str]] = {source: None}
    order:  List[str] = []

    yield emit(
        StepKind.START,
        f"Initialise: source '{source}' is placed into the queue and marked as seen. "
        f"BFS explores layer by layer from here.",
        node=source, queue=list(queue), line=1,
    )

    while queue:
        node = queue.popleft()
        order.append(node)
        emit.count("visited")
        yield emit(
            StepKind.VISIT,
            f"Dequeue '{node}' — BFS always expands the node discovered earliest (FIFO).",
            node=node, queue=list(queue), line=5,
        )

        if node == target:
            result = found(graph, parent, target, order)
            yield emit.final(
                StepKind.FOUND,
                f"Target '{target}' reached! The fewest-hops path has {len(result['path']) - 1} "
                f"edge(s): {' → '.join(result['path'])}",
                path=result["path"], cost=result["cost"], line=6,
            )
            return result

        for nbr, edge in graph.neighbours(node):
            if nbr in seen:
                continue
            seen.add(nbr)
            parent[nbr] = node
            queue.append(nbr)
            yield emit(
                StepKind.ENQUEUE,
                f"Edge {node}→{nbr}: '{nbr}' is new — mark it seen and enqueue it (parent = '{node}').",
                node=nbr, parent=node, edge=edge.id, queue=list(queue), line=11,
            )

    yield emit.final(
        StepKind.NO_PATH,
        f"Queue is empty. Target '{target}' is NOT reachable from '{source}'.",
        visited=list(order), line=12,
    )
    return no_path(order)
