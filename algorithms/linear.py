"""
linear.py — Stack, Queue and Linked List
=========================================
One animated operation against a structure given as a plain list
(`items`; top of the stack / back of the queue is the LAST element).

    stack        push · pop · peek
    queue        enqueue · dequeue · front
    linked_list  insert (position 0..len) · delete (position 0..len-1) · search

Popping, dequeuing or peeking an empty structure is a negative
completion (NOT_FOUND), not an error.  An out-of-range list position is
rejected as invalid input before the run starts.
"""

from collections import deque
from typing import Any, Dict, List, Optional

from algorithms.inputs import as_int, as_int_list, in_range, one_of, require
from algorithms.step import StepKind


STACK_OPS  = ("push", "pop", "peek")
QUEUE_OPS  = ("enqueue", "dequeue", "front")
LIST_OPS   = ("insert", "delete", "search")

STACK_PSEUDOCODE: List[str] = [
    "push(x): items.append(x)",
    "pop():   if empty: return None; return items.pop()",
    "peek():  if empty: return None; return items[-1]",
]

QUEUE_PSEUDOCODE: List[str] = [
    "enqueue(x): items.append(x)",
    "dequeue():  if empty: return None; return items.popleft()",
    "front():    if empty: return None; return items[0]",
]

LIST_PSEUDOCODE: List[str] = [
    "insert(x, p): walk p nodes; link x in after them",
    "delete(p):    walk p nodes; unlink the next one",
    "search(x):    walk until node.value == x or the end",
]


def _base(data: Dict[str, Any], ops) -> Dict[str, Any]:
    op = one_of(require(data, "op"), ops, "op")
    kwargs = {"items": as_int_list(data.get("items", []), "items"), "op": op}
    if op in ("push", "enqueue", "insert", "search"):
        kwargs["value"] = as_int(require(data, "value"))
    return kwargs


def prepare_stack(data: Dict[str, Any]) -> Dict[str, Any]:
    return _base(data, STACK_OPS)


def prepare_queue(data: Dict[str, Any]) -> Dict[str, Any]:
    return _base(data, QUEUE_OPS)


def prepare_list(data: Dict[str, Any]) -> Dict[str, Any]:
    kwargs = _base(data, LIST_OPS)
    size = len(kwargs["items"])
    if kwargs["op"] == "insert":
        kwargs["position"] = in_range(as_int(require(data, "position"), "position"), 0, size, "position")
    elif kwargs["op"] == "delete":
        kwargs["position"] = in_range(as_int(require(data, "position"), "position"), 0, size - 1, "position")
    return kwargs


def _empty(name: str, op: str, emit, items: List[int]):
    return emit.final(StepKind.NOT_FOUND, f"{name} is empty: nothing to {op}.", items=items)


# ---------------------------------------------------------------------------
# Stack
# ---------------------------------------------------------------------------
def stack_op(items: List[int], op: str, emit, value: Optional[int] = None):
    yield emit(StepKind.START, f"Stack {op}.", items=items, op=op)

    if op == "push":
        items.append(value)
        yield emit(StepKind.INSERT, f"Pushed {value} on top.", value=value, index=len(items) - 1, items=items)
        yield emit.final(StepKind.DONE, f"Stack size {len(items)}.", items=items)
        return {"items": items, "value": value}

    if not items:
        yield _empty("Stack", op, emit, items)
        return {"items": items, "value": None}

    if op == "pop":
        top = items.pop()
        yield emit(StepKind.REMOVE, f"Popped {top} from the top.", value=top, items=items)
        yield emit.final(StepKind.DONE, f"Stack size {len(items)}.", items=items)
        return {"items": items, "value": top}

    top = items[-1]
    yield emit.final(StepKind.FOUND, f"Top element: {top}.", value=top, index=len(items) - 1)
    return {"items": items, "value": top}


# ---------------------------------------------------------------------------
# Queue
# ---------------------------------------------------------------------------
def queue_op(items: List[int], op: str, emit, value: Optional[int] = None):
    queue = deque(items)
    yield emit(StepKind.START, f"Queue {op}.", items=list(queue), op=op)

    if op == "enqueue":
        queue.append(value)
        yield emit(StepKind.INSERT, f"Enqueued {value} at the back.", value=value, index=len(queue) - 1, items=list(queue))
        yield emit.final(StepKind.DONE, f"Queue size {len(queue)}.", items=list(queue))
        return {"items": list(queue), "value": value}

    if not queue:
        yield _empty("Queue", op, emit, [])
        return {"items": [], "value": None}

    if op == "dequeue":
        front = queue.popleft()
        yield emit(StepKind.REMOVE, f"Dequeued {front} from the front.", value=front, items=list(queue))
        yield emit.final(StepKind.DONE, f"Queue size {len(queue)}.", items=list(queue))
        return {"items": list(queue), "value": front}

    front = queue[0]
    yield emit.final(StepKind.FOUND, f"Front element: {front}.", value=front, index=0)
    return {"items": list(queue), "value": front}


# ---------------------------------------------------------------------------
# Linked list
# ---------------------------------------------------------------------------
def linked_list_op(items: List[int], op: str, emit, value: Optional[int] = None, position: Optional[int] = None):
    yield emit(StepKind.START, f"Linked list {op}.", items=items, op=op)

    if op == "search":
        for index, current in enumerate(items):
            emit.count("comparisons")
            yield emit(StepKind.COMPARE, f"Node {index} holds {current}.", index=index, value=current)
            if current == value:
                yield emit.final(StepKind.FOUND, f"Found {value} at position {index}.", index=index)
                return {"items": items, "index": index}
        yield emit.final(StepKind.NOT_FOUND, f"{value} not found in the list.", index=-1)
        return {"items": items, "index": -1}

    for index in range(position):
        yield emit(StepKind.VISIT, f"Walk past node {index} ({items[index]}).", index=index)

    if op == "insert":
        items.insert(position, value)
        yield emit(StepKind.INSERT, f"Link {value} in at position {position}.", index=position, value=value, items=items)
        yield emit.final(StepKind.DONE, f"Inserted {value} at position {position}.", items=items)
        return {"items": items, "index": position}

    removed = items.pop(position)
    yield emit(StepKind.DELETE, f"Unlink {removed} from position {position}.", index=position, value=removed, items=items)
    yield emit.final(StepKind.DONE, f"Deleted {removed} from position {position}.", items=items)
    return {"items": items, "index": position, "value": removed}
