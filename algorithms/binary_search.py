"""
binary_search.py — Binary Search
=================================
Classic halving search over an ascending list.

Emits per iteration:
  1. COMPARE   – the middle element against the target
  2. HIGHLIGHT – the half that was just eliminated
then FOUND (index) or NOT_FOUND once `low > high`.

Exactly one COMPARE per iteration, so a run never makes more than
⌈log2(n + 1)⌉ comparisons.  The input is assumed sorted; it is not checked.
"""

from typing import Any, Dict, List

from algorithms.inputs import as_int, as_int_list, require
from algorithms.step import StepKind


PSEUDOCODE: List[str] = [
    "def binary_search(a, target):",           # 0
    "    low, high ← 0, len(a) - 1",           # 1
    "    while low <= high:",                   # 2
    "        mid ← (low + high) // 2",          # 3
    "        if a[mid] == target: return mid",  # 4
    "        elif a[mid] < target: low ← mid + 1",   # 5
    "        else: high ← mid - 1",             # 6
    "    return -1",                            # 7
]


def prepare(data: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "values": as_int_list(require(data, "values")),
        "target": as_int(require(data, "target"), "target"),
    }


def binary_search(values: List[int], target: int, emit):
    """Returns the index of `target`, or -1."""
    low, high = 0, len(values) - 1

    yield emit(
        StepKind.START,
        f"Search for {target} in {len(values)} sorted element(s): low=0, high={high}.",
        low=low, high=high, target=target, line=1,
    )

    while low <= high:
        mid = (low + high) // 2
        value = values[mid]
        emit.count("comparisons")
        yield emit(
            StepKind.COMPARE,
            f"Check the middle element at index {mid} (value: {value}).",
            low=low, high=high, mid=mid, value=value, target=target, line=3,
        )

        if value == target:
            yield emit.final(StepKind.FOUND, f"Found {target} at index {mid}!", index=mid, line=4)
            return mid

        if value < target:
            eliminated = [low, mid]
            low = mid + 1
            explanation, line = f"{value} < {target}, search the right half.", 5
        else:
            eliminated = [mid, high]
            high = mid - 1
            explanation, line = f"{value} > {target}, search the left half.", 6
        yield emit(
            StepKind.HIGHLIGHT, explanation,
            eliminated=eliminated, low=low, high=high, line=line,
        )

    yield emit.final(
        StepKind.NOT_FOUND,
        f"low ({low}) > high ({high}): {target} is not in the list.",
        index=-1, line=7,
    )
    return -1
