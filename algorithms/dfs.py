"""
dfs.py — Depth-First Search
=============================
Generator-based DFS using an explicit stack (no Python recursion limit issues).

Emits a Step at:
  1. Pop a node that was not yet visited  →  VISIT
  2. Pop a node that was already visited  →  HIGHLIGHT (skipped)
  3. Push an unvisited neighbour          →  ENQUEUE
  4. Target popped                        →  FOUND
  5. Stack empty                          →  NO_PATH

Visit order: a node is marked visited when it is POPPED, and a node
may sit on the stack several times; the first pop wins and later pops
are skipped.  The parent link is overwritten by the latest push.  This
fixes one specific DFS order, and the tests pin it.
"""

from typing import Dict, List, Optional

from algorithms.pathfinding import found, no_path
from algorithms.step import StepKind
from graph import Graph


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def DFS(graph, source, target):",          # 0
    "    stack ← [source]",                     # 1
    "    visited ← {}",                         # 2
    "    parent ← {}",                          # 3
    "    while stack is not empty:",             # 4
    "        node ← stack.pop()",               # 5
    "        if node in visited: continue",     # 6
    "        visited.add(node)",                # 7
    "        if node == target: return path",   # 8
    "        for neighbour in adj(node):",      # 9
    "            if neighbour not visited:",     # 10
    "                parent[neighbour] = node", # 11
    "                stack.push(neighbour)",    # 12
    "    return NOT FOUND",                     # 13
]


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def dfs(graph: Graph, source: str, target: str, emit):
    stack   = [source]
    visited = set()
    parent: Dict[str, Optional[str]] = {source: None}
    order:  List[str] = []

    yield emit(
        StepKind.START,
        f"Initialise: push source '{source}' onto the stack.",
        node=source, stack=list(stack), line=1,
    )

    while stack:
        node = stack.pop()

        if node in visited:
            yield emit(
                StepKind.HIGHLIGHT,
                f"Pop '{node}' — already visited through another branch, skip it.",
                node=node, stack=list(stack), line=6,
            )
            continue

        visited.add(node)
        order.append(node)
        emit.count("visited")
        yield emit(
            StepKind.VISIT,
            f"Pop '{node}' and mark it visited. DFS always expands the most recently pushed node (LIFO).",
            node=node, stack=list(stack), line=7,
        )

        if node == target:
            result = found(graph, parent, target, order)
            yield emit.final(
                StepKind.FOUND,
                f"Target '{target}' reached via {' → '.join(result['path'])}. "
                f"DFS does NOT guarantee the shortest path.",
                path=result["path"], cost=result["cost"], line=8,
            )
            return result

        for nbr, edge in graph.neighbours(node):
            if nbr in visited:
                continue
            parent[nbr] = node
            stack.append(nbr)
            yield emit(
                StepKind.ENQUEUE,
                f"Edge {node}→{nbr}: '{nbr}' not visited yet — push it (parent = '{node}').",
                node=nbr, parent=node, edge=edge.id, stack=list(stack), line=12,
            )

    yield emit.final(
        StepKind.NO_PATH,
        f"Stack is empty. Target '{target}' is NOT reachable from '{source}'.",
        visited=list(order), line=13,
    )
    return no_path(order)
