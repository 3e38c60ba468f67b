"""
sorting.py — The Sorting Race
==============================
Four in-place sorts over the same integer list, built to be raced
against each other (see engine/race.py).

    bubble_sort     adjacent compare-swap, boundary shrinks each pass
    insertion_sort  shift larger elements right, drop the key in the gap
    merge_sort      top-down, stable: ties take the LEFT element
    quick_sort      Lomuto partition, last element is the pivot

Every sort emits COMPARE before each comparison and SWAP / WRITE when an
element moves, carrying a snapshot of the array.  Metrics:
`comparisons` and `swaps`, where a swap is real movement only — a
bubble or quicksort exchange of two distinct slots, an insertion shift,
or a merge step where the right half overtakes pending left elements.
An already-sorted input therefore finishes with zero swaps.
"""

from typing import Any, Dict, List

from algorithms.inputs import as_int_list, require
from engine.errors import InvalidInput
from algorithms.step import StepKind


MAX_LENGTH = 200

BUBBLE_PSEUDOCODE: List[str] = [
    "for i in 0..n-2:",
    "    for j in 0..n-i-2:",
    "        if a[j] > a[j+1]:",
    "            swap(a[j], a[j+1])",
]

INSERTION_PSEUDOCODE: List[str] = [
    "for i in 1..n-1:",
    "    key ← a[i]; j ← i - 1",
    "    while j >= 0 and a[j] > key:",
    "        a[j+1] ← a[j]; j ← j - 1",
    "    a[j+1] ← key",
]

MERGE_PSEUDOCODE: List[str] = [
    "def merge_sort(a, l, r):",
    "    if l >= r: return",
    "    m ← (l + r) // 2",
    "    merge_sort(a, l, m); merge_sort(a, m+1, r)",
    "    merge a[l..m] and a[m+1..r], left first on ties",
]

QUICK_PSEUDOCODE: List[str] = [
    "def quick_sort(a, lo, hi):",
    "    if lo >= hi: return",
    "    pivot ← a[hi]; i ← lo - 1",
    "    for j in lo..hi-1:",
    "        if a[j] < pivot: i ← i + 1; swap(a[i], a[j])",
    "    swap(a[i+1], a[hi])",
    "    quick_sort(a, lo, i); quick_sort(a, i+2, hi)",
]


def prepare(data: Dict[str, Any]) -> Dict[str, Any]:
    values = as_int_list(require(data, "values"))
    if len(values) > MAX_LENGTH:
        raise InvalidInput(f"At most {MAX_LENGTH} values can be sorted")
    return {"values": values}


def _start(values: List[int], emit, name: str):
    emit.set_metric("comparisons", 0)
    emit.set_metric("swaps", 0)
    return emit(StepKind.START, f"{name} on {len(values)} element(s).", array=values)


def _done(values: List[int], emit, name: str):
    return emit.final(
        StepKind.DONE,
        f"{name} finished: {emit.metric('comparisons')} comparison(s), {emit.metric('swaps')} swap(s).",
        array=values,
    )


# ---------------------------------------------------------------------------
# Bubble
# ---------------------------------------------------------------------------
def bubble_sort(values: List[int], emit):
    yield _start(values, emit, "Bubble sort")
    n = len(values)
    for i in range(n - 1):
        for j in range(n - i - 1):
            emit.count("comparisons")
            yield emit(StepKind.COMPARE, f"Compare a[{j}]={values[j]} with a[{j + 1}]={values[j + 1]}.",
                       i=j, j=j + 1, array=values)
            if values[j] > values[j + 1]:
                values[j], values[j + 1] = values[j + 1], values[j]
                emit.count("swaps")
                yield emit(StepKind.SWAP, f"{values[j + 1]} > {values[j]}: swap them.", i=j, j=j + 1, array=values)
        yield emit(StepKind.HIGHLIGHT, f"a[{n - i - 1}] is in its final place.", sorted=[n - i - 1])
    yield _done(values, emit, "Bubble sort")
    return values


# ---------------------------------------------------------------------------
# Insertion
# ---------------------------------------------------------------------------
def insertion_sort(values: List[int], emit):
    yield _start(values, emit, "Insertion sort")
    for i in range(1, len(values)):
        key = values[i]
        j = i - 1
        yield emit(StepKind.HIGHLIGHT, f"Take key a[{i}]={key}.", i=i, key=key)
        while j >= 0:
            emit.count("comparisons")
            yield emit(StepKind.COMPARE, f"Compare a[{j}]={values[j]} with key {key}.", i=j, key=key, array=values)
            if values[j] <= key:
                break
            values[j + 1] = values[j]
            emit.count("swaps")
            yield emit(StepKind.WRITE, f"{values[j]} > {key}: shift it right to index {j + 1}.",
                       index=j + 1, value=values[j], array=values)
            j -= 1
        if j + 1 != i:
            values[j + 1] = key
            yield emit(StepKind.WRITE, f"Drop key {key} at index {j + 1}.", index=j + 1, value=key, array=values)
    yield _done(values, emit, "Insertion sort")
    return values


# ---------------------------------------------------------------------------
# Merge
# ---------------------------------------------------------------------------
def merge_sort(values: List[int], emit):
    yield _start(values, emit, "Merge sort")
    yield from _merge_sort(values, 0, len(values) - 1, emit)
    yield _done(values, emit, "Merge sort")
    return values


def _merge_sort(values: List[int], left: int, right: int, emit):
    if left >= right:
        return
    mid = (left + right) // 2
    yield from _merge_sort(values, left, mid, emit)
    yield from _merge_sort(values, mid + 1, right, emit)
    yield from _merge(values, left, mid, right, emit)


def _merge(values: List[int], left: int, mid: int, right: int, emit):
    left_part  = values[left:mid + 1]
    right_part = values[mid + 1:right + 1]
    i = j = 0
    k = left
    yield emit(StepKind.HIGHLIGHT, f"Merge [{left}..{mid}] with [{mid + 1}..{right}].",
               left=left, mid=mid, right=right)

    while i < len(left_part) and j < len(right_part):
        emit.count("comparisons")
        yield emit(StepKind.COMPARE, f"Compare {left_part[i]} (left) with {right_part[j]} (right).",
                   left=left + i, right=mid + 1 + j, array=values)
        if left_part[i] <= right_part[j]:
            values[k] = left_part[i]
            i += 1
        else:
            values[k] = right_part[j]
            j += 1
            emit.count("swaps")
        yield emit(StepKind.WRITE, f"Write {values[k]} to index {k}.", index=k, value=values[k], array=values)
        k += 1

    while i < len(left_part):
        values[k] = left_part[i]
        yield emit(StepKind.WRITE, f"Copy leftover {values[k]} to index {k}.", index=k, value=values[k], array=values)
        i += 1
        k += 1
    while j < len(right_part):
        values[k] = right_part[j]
        yield emit(StepKind.WRITE, f"Copy leftover {values[k]} to index {k}.", index=k, value=values[k], array=values)
        j += 1
        k += 1


# ---------------------------------------------------------------------------
# Quick
# ---------------------------------------------------------------------------
def quick_sort(values: List[int], emit):
    yield _start(values, emit, "Quick sort")
    yield from _quick_sort(values, 0, len(values) - 1, emit)
    yield _done(values, emit, "Quick sort")
    return values


def _quick_sort(values: List[int], low: int, high: int, emit):
    if low >= high:
        return
    pivot_index = yield from _partition(values, low, high, emit)
    yield from _quick_sort(values, low, pivot_index - 1, emit)
    yield from _quick_sort(values, pivot_index + 1, high, emit)


def _partition(values: List[int], low: int, high: int, emit):
    pivot = values[high]
    yield emit(StepKind.HIGHLIGHT, f"Partition [{low}..{high}] around pivot {pivot}.", pivot=high, low=low, high=high)
    i = low - 1
    for j in range(low, high):
        emit.count("comparisons")
        yield emit(StepKind.COMPARE, f"Compare a[{j}]={values[j]} with pivot {pivot}.", i=j, pivot=high, array=values)
        if values[j] < pivot:
            i += 1
            if i != j:
                values[i], values[j] = values[j], values[i]
                emit.count("swaps")
                yield emit(StepKind.SWAP, f"{values[i]} < pivot: swap a[{i}] and a[{j}].", i=i, j=j, array=values)
    if i + 1 != high and values[i + 1] != values[high]:
        values[i + 1], values[high] = values[high], values[i + 1]
        emit.count("swaps")
        yield emit(StepKind.SWAP, f"Move pivot {pivot} to index {i + 1}.", i=i + 1, j=high, array=values)
    return i + 1
