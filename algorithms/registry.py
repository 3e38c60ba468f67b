"""
algorithms/registry.py — Algorithm Registry
=========================================
Single source of truth for every algorithm the engine can run.

    from algorithms.registry import REGISTRY, get_algorithm

REGISTRY is a dict:
    {
        "bfs": AlgoInfo(key, label, fn, prepare, family, tags, pseudocode, …),
        …
    }

An entry pairs the generator (`fn`) with its input coercion
(`prepare(data) -> kwargs`, raising InvalidInput).  The runner calls
`fn(emit=…, **prepare(input))`.  Entries that can replay a pre-computed
answer (animate_only) also carry `replay` / `replay_prepare`.

Adding a new algorithm is: write the generator and its prepare, add one
entry here.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from algorithms import (
    astar, bfs, binary_search, bst, dfs, dijkstra, hash_table,
    linear, n_queens, pathfinding, scheduling, sorting, sudoku, trie,
)


# ---------------------------------------------------------------------------
# AlgoInfo — metadata card for each algorithm
# ---------------------------------------------------------------------------
@dataclass
class AlgoInfo:
    key:              str                          # registry key, e.g. "bfs"
    label:            str                          # human label, e.g. "Breadth-First Search"
    fn:               Callable                     # the generator function
    prepare:          Callable[[dict], dict]       # raw input → fn kwargs
    family:           str                          # "search", "graph", "sorting", …
    tags:             List[str] = field(default_factory=list)
    pseudocode:       List[str] = field(default_factory=list)
    replay:           Optional[Callable] = None    # animate_only generator
    replay_prepare:   Optional[Callable[[dict], dict]] = None
    complexity_time:  str = ""
    complexity_space: str = ""
    description:      str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "key":              self.key,
            "label":            self.label,
            "family":           self.family,
            "tags":             list(self.tags),
            "pseudocode":       list(self.pseudocode),
            "replay":           self.replay is not None,
            "complexity_time":  self.complexity_time,
            "complexity_space": self.complexity_space,
            "description":      self.description,
        }


# ---------------------------------------------------------------------------
# THE REGISTRY
# ---------------------------------------------------------------------------
_ENTRIES: List[AlgoInfo] = [

    # ---------- searching ----------
    AlgoInfo(
        key="binary_search", label="Binary Search", fn=binary_search.binary_search,
        prepare=binary_search.prepare, family="search", pseudocode=binary_search.PSEUDOCODE,
        tags=["array", "divide-and-conquer"],
        complexity_time="O(log n)", complexity_space="O(1)",
        description="Halves a sorted range each step.",
    ),

    # ---------- trees ----------
    AlgoInfo(
        key="bst_insert", label="BST Insert", fn=bst.bst_insert, prepare=bst.prepare, family="tree",
        pseudocode=bst.INSERT_PSEUDOCODE,
        tags=["bst"], complexity_time="O(h)", complexity_space="O(1)",
        description="Walk down by comparison and hang the value on an empty slot.",
    ),
    AlgoInfo(
        key="bst_search", label="BST Search", fn=bst.bst_search, prepare=bst.prepare, family="tree",
        pseudocode=bst.SEARCH_PSEUDOCODE,
        tags=["bst"], complexity_time="O(h)", complexity_space="O(1)",
        description="Go left for smaller, right for larger.",
    ),
    AlgoInfo(
        key="bst_delete", label="BST Delete", fn=bst.bst_delete, prepare=bst.prepare, family="tree",
        pseudocode=bst.DELETE_PSEUDOCODE,
        tags=["bst"], complexity_time="O(h)", complexity_space="O(h)",
        description="Two children: replace with the in-order successor.",
    ),
    AlgoInfo(
        key="bst_traverse", label="BST Traversal", fn=bst.bst_traverse, prepare=bst.prepare_traverse,
        family="tree", pseudocode=bst.TRAVERSE_PSEUDOCODE, tags=["bst", "traversal"],
        complexity_time="O(n)", complexity_space="O(h)",
        description="In-order, pre-order or post-order walk.",
    ),
    AlgoInfo(
        key="trie_insert", label="Trie Insert", fn=trie.trie_insert, prepare=trie.prepare_insert,
        pseudocode=trie.INSERT_PSEUDOCODE,
        family="tree", tags=["trie", "strings"], complexity_time="O(m)", complexity_space="O(m)",
        description="One node per character; the last one is marked as a word end.",
    ),
    AlgoInfo(
        key="trie_search", label="Trie Autocomplete", fn=trie.trie_search, prepare=trie.prepare_search,
        pseudocode=trie.SEARCH_PSEUDOCODE,
        family="tree", tags=["trie", "strings"], complexity_time="O(m + k)", complexity_space="O(k)",
        description="Walk the prefix, then collect up to ten completions.",
    ),

    # ---------- graphs ----------
    AlgoInfo(
        key="bfs", label="Breadth-First Search", fn=bfs.bfs, prepare=pathfinding.prepare,
        family="graph", pseudocode=bfs.PSEUDOCODE,
        tags=["unweighted", "shortest-path", "traversal"],
        complexity_time="O(V + E)", complexity_space="O(V)",
        description="Explores layer-by-layer. Finds shortest path by hop count.",
    ),
    AlgoInfo(
        key="dfs", label="Depth-First Search", fn=dfs.dfs, prepare=pathfinding.prepare,
        family="graph", pseudocode=dfs.PSEUDOCODE,
        tags=["unweighted", "traversal"],
        complexity_time="O(V + E)", complexity_space="O(V)",
        description="Dives deep before backtracking. Does NOT guarantee shortest path.",
    ),
    AlgoInfo(
        key="dijkstra", label="Dijkstra's Algorithm", fn=dijkstra.dijkstra, prepare=pathfinding.prepare,
        family="graph", pseudocode=dijkstra.PSEUDOCODE,
        tags=["weighted", "shortest-path"],
        complexity_time="O((V + E) log V)", complexity_space="O(V)",
        description="Greedily expands the closest node. Optimal for non-negative weights.",
    ),
    AlgoInfo(
        key="astar", label="A* Search", fn=astar.astar, prepare=astar.prepare,
        family="graph", pseudocode=astar.PSEUDOCODE,
        tags=["weighted", "shortest-path", "heuristic"],
        complexity_time="O((V + E) log V)", complexity_space="O(V)",
        description="Dijkstra + heuristic guidance. Optimal when h is admissible.",
    ),

    # ---------- hashing ----------
    AlgoInfo(
        key="hash_insert", label="Hash Table Insert", fn=hash_table.hash_insert,
        prepare=hash_table.prepare_insert, family="hashing", tags=["hash-table"],
        pseudocode=hash_table.PSEUDOCODE,
        complexity_time="O(1) average", complexity_space="O(n)",
        description="Chaining, linear probing or quadratic probing.",
    ),
    AlgoInfo(
        key="hash_search", label="Hash Table Search", fn=hash_table.hash_search,
        prepare=hash_table.prepare_lookup, family="hashing", tags=["hash-table"],
        pseudocode=hash_table.PSEUDOCODE,
        complexity_time="O(1) average", complexity_space="O(1)",
        description="Follow the policy's probe order until the key or an empty slot.",
    ),
    AlgoInfo(
        key="hash_delete", label="Hash Table Delete", fn=hash_table.hash_delete,
        prepare=hash_table.prepare_lookup, family="hashing", tags=["hash-table"],
        pseudocode=hash_table.PSEUDOCODE,
        complexity_time="O(1) average", complexity_space="O(1)",
        description="Tombstone deletion, or the legacy full-table scan.",
    ),

    # ---------- backtracking ----------
    AlgoInfo(
        key="n_queens", label="N-Queens", fn=n_queens.n_queens, prepare=n_queens.prepare,
        pseudocode=n_queens.PSEUDOCODE,
        family="backtracking", tags=["backtracking", "constraint"],
        replay=n_queens.n_queens_replay, replay_prepare=n_queens.prepare_replay,
        complexity_time="O(n!)", complexity_space="O(n²)",
        description="One queen per row; backtrack when every column is attacked.",
    ),
    AlgoInfo(
        key="sudoku", label="Sudoku Solver", fn=sudoku.sudoku, prepare=sudoku.prepare,
        pseudocode=sudoku.PSEUDOCODE,
        family="backtracking", tags=["backtracking", "constraint"],
        replay=sudoku.sudoku_replay, replay_prepare=sudoku.prepare_replay,
        complexity_time="O(9^m)", complexity_space="O(m)",
        description="Fill the first empty cell with the first digit that fits.",
    ),
    AlgoInfo(
        key="sudoku_validate", label="Sudoku Validator", fn=sudoku.sudoku_validate,
        prepare=sudoku.prepare_validate, family="backtracking", tags=["constraint"],
        pseudocode=sudoku.VALIDATE_PSEUDOCODE,
        complexity_time="O(81)", complexity_space="O(1)",
        description="Flag every cell that breaks a row, column or box rule.",
    ),

    # ---------- sorting ----------
    AlgoInfo(
        key="bubble_sort", label="Bubble Sort", fn=sorting.bubble_sort, prepare=sorting.prepare,
        pseudocode=sorting.BUBBLE_PSEUDOCODE,
        family="sorting", tags=["sorting", "stable", "in-place"],
        complexity_time="O(n²)", complexity_space="O(1)",
        description="Adjacent compare-swap; the largest value bubbles to the end.",
    ),
    AlgoInfo(
        key="insertion_sort", label="Insertion Sort", fn=sorting.insertion_sort, prepare=sorting.prepare,
        pseudocode=sorting.INSERTION_PSEUDOCODE,
        family="sorting", tags=["sorting", "stable", "in-place"],
        complexity_time="O(n²)", complexity_space="O(1)",
        description="Shift larger elements right and drop the key in the gap.",
    ),
    AlgoInfo(
        key="merge_sort", label="Merge Sort", fn=sorting.merge_sort, prepare=sorting.prepare,
        pseudocode=sorting.MERGE_PSEUDOCODE,
        family="sorting", tags=["sorting", "stable", "divide-and-conquer"],
        complexity_time="O(n log n)", complexity_space="O(n)",
        description="Split, sort halves, merge preferring the left on ties.",
    ),
    AlgoInfo(
        key="quick_sort", label="Quick Sort", fn=sorting.quick_sort, prepare=sorting.prepare,
        pseudocode=sorting.QUICK_PSEUDOCODE,
        family="sorting", tags=["sorting", "in-place", "divide-and-conquer"],
        complexity_time="O(n log n) average", complexity_space="O(log n)",
        description="Lomuto partition around the last element.",
    ),

    # ---------- scheduling ----------
    AlgoInfo(
        key="scheduling", label="Job Scheduling", fn=scheduling.schedule_jobs, prepare=scheduling.prepare,
        pseudocode=scheduling.PSEUDOCODE,
        family="scheduling", tags=["greedy"],
        complexity_time="O(n log n)", complexity_space="O(n)",
        description="SJF, EDF, priority or FCFS; non-preemptive.",
    ),

    # ---------- linear structures ----------
    AlgoInfo(
        key="stack", label="Stack", fn=linear.stack_op, prepare=linear.prepare_stack,
        pseudocode=linear.STACK_PSEUDOCODE,
        family="linear", tags=["lifo"], complexity_time="O(1)", complexity_space="O(1)",
        description="Push, pop and peek at the top.",
    ),
    AlgoInfo(
        key="queue", label="Queue", fn=linear.queue_op, prepare=linear.prepare_queue,
        pseudocode=linear.QUEUE_PSEUDOCODE,
        family="linear", tags=["fifo"], complexity_time="O(1)", complexity_space="O(1)",
        description="Enqueue at the back, dequeue from the front.",
    ),
    AlgoInfo(
        key="linked_list", label="Linked List", fn=linear.linked_list_op, prepare=linear.prepare_list,
        pseudocode=linear.LIST_PSEUDOCODE,
        family="linear", tags=["list"], complexity_time="O(n)", complexity_space="O(1)",
        description="Insert, delete and search by walking the nodes.",
    ),
]

REGISTRY: Dict[str, AlgoInfo] = {info.key: info for info in _ENTRIES}

SORTING_KEYS: List[str] = ["bubble_sort", "insertion_sort", "merge_sort", "quick_sort"]


# ---------------------------------------------------------------------------
# Lookup helpers
# ---------------------------------------------------------------------------
def get_algorithm(key: str) -> Optional[AlgoInfo]:
    """Return AlgoInfo by key, or None."""
    return REGISTRY.get(key)


def list_algorithms() -> List[AlgoInfo]:
    """Return all registered algorithms in insertion order."""
    return list(REGISTRY.values())


def algorithms_by_tag(tag: str) -> List[AlgoInfo]:
    """Filter registry by tag."""
    return [a for a in REGISTRY.values() if tag in a.tags]


def algorithms_by_family(family: str) -> List[AlgoInfo]:
    return [a for a in REGISTRY.values() if a.family == family]


__all__ = [
    "AlgoInfo",
    "REGISTRY",
    "SORTING_KEYS",
    "get_algorithm",
    "list_algorithms",
    "algorithms_by_tag",
    "algorithms_by_family",
]
