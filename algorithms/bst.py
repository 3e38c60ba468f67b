"""
bst.py — Binary Search Tree
============================
Insert / search / delete / traverse on an integer BST.

Every operation takes the tree as its starting state — built silently
from `values` (inserted in order) or given as a nested `tree` dict —
and animates only the requested operation.

Rules:
  - Duplicate inserts are ignored (reported with a FOUND step).
  - Deleting a node with two children copies the in-order successor
    (minimum of the right subtree) into it, then deletes that successor
    from the right subtree.
  - Traversals emit one VISIT per node in in-/pre-/post-order.

Recursive operations are recursive generators (`yield from`), so the
input size is capped to stay well inside the interpreter's recursion limit.
"""

from typing import Any, Dict, List, Optional

from algorithms.inputs import as_int, as_int_list, one_of, require
from algorithms.step import StepKind
from engine.errors import InvalidInput


MAX_NODES = 100
ORDERS    = ("inorder", "preorder", "postorder")

INSERT_PSEUDOCODE: List[str] = [
    "if root is None: root ← Node(value)",
    "node ← root",
    "loop:",
    "    if value == node.value: return        # duplicate",
    "    side ← left if value < node.value else right",
    "    if node.side is None: node.side ← Node(value); return",
    "    node ← node.side",
]

TRAVERSE_PSEUDOCODE: List[str] = [
    "def walk(node):",
    "    if node is None: return",
    "    preorder:  visit(node)",
    "    walk(node.left)",
    "    inorder:   visit(node)",
    "    walk(node.right)",
    "    postorder: visit(node)",
]

SEARCH_PSEUDOCODE: List[str] = [
    "node ← root",
    "while node:",
    "    if value == node.value: return node",
    "    node ← node.left if value < node.value else node.right",
    "return None",
]

DELETE_PSEUDOCODE: List[str] = [
    "find node with value",
    "if node has no child: unlink it",
    "elif node has one child: replace node with that child",
    "else: copy in-order successor into node, delete successor",
]


# ---------------------------------------------------------------------------
# Tree node
# ---------------------------------------------------------------------------
class TreeNode:
    __slots__ = ("value", "left", "right")

    def __init__(self, value: int):
        self.value: int                   = value
        self.left:  Optional["TreeNode"]  = None
        self.right: Optional["TreeNode"]  = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "value": self.value,
            "left":  self.left.to_dict() if self.left else None,
            "right": self.right.to_dict() if self.right else None,
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]], _depth: int = 0) -> Optional["TreeNode"]:
        if data is None:
            return None
        if not isinstance(data, dict) or "value" not in data:
            raise InvalidInput(f"Tree node must be an object with a value: {data!r}")
        if _depth > MAX_NODES:
            raise InvalidInput(f"Tree is deeper than {MAX_NODES} levels")
        node = cls(as_int(data["value"], "tree value"))
        node.left  = cls.from_dict(data.get("left"), _depth + 1)
        node.right = cls.from_dict(data.get("right"), _depth + 1)
        return node

    def __repr__(self) -> str:
        return f"TreeNode({self.value})"


def tree_dict(root: Optional[TreeNode]) -> Optional[Dict[str, Any]]:
    return root.to_dict() if root else None


def build_tree(values: List[int]) -> Optional[TreeNode]:
    """Insert `values` in order without animation; duplicates are dropped."""
    root = None
    for value in values:
        if root is None:
            root = TreeNode(value)
            continue
        node = root
        while value != node.value:
            side = "left" if value < node.value else "right"
            child = getattr(node, side)
            if child is None:
                setattr(node, side, TreeNode(value))
                break
            node = child
    return root


def is_bst(root: Optional[TreeNode], low: float = float("-inf"), high: float = float("inf")) -> bool:
    if root is None:
        return True
    return low < root.value < high and is_bst(root.left, low, root.value) and is_bst(root.right, root.value, high)


# ---------------------------------------------------------------------------
# Input
# ---------------------------------------------------------------------------
def _prepare_tree(data: Dict[str, Any]) -> Optional[TreeNode]:
    if "tree" in data:
        root = TreeNode.from_dict(data["tree"])
        if not is_bst(root):
            raise InvalidInput("tree violates the BST ordering")
        return root
    values = as_int_list(data.get("values", []))
    if len(values) > MAX_NODES:
        raise InvalidInput(f"At most {MAX_NODES} values are supported")
    return build_tree(values)


def prepare(data: Dict[str, Any]) -> Dict[str, Any]:
    """insert / search / delete: starting tree plus the operand."""
    return {"root": _prepare_tree(data), "value": as_int(require(data, "value"))}


def prepare_traverse(data: Dict[str, Any]) -> Dict[str, Any]:
    return {"root": _prepare_tree(data), "order": one_of(data.get("order", "inorder"), ORDERS, "order")}


# ---------------------------------------------------------------------------
# Insert
# ---------------------------------------------------------------------------
def bst_insert(root: Optional[TreeNode], value: int, emit):
    yield emit(StepKind.START, f"Insert {value}.", value=value, tree=tree_dict(root))

    if root is None:
        root = TreeNode(value)
        yield emit(StepKind.INSERT, f"Tree is empty: {value} becomes the root.",
                   value=value, parent=None, side=None)
        return (yield from _inserted(root, value, emit))

    node, path = root, []
    while True:
        path.append(node.value)
        emit.count("comparisons")
        yield emit(StepKind.COMPARE, _compare_text(value, node.value), node=node.value, value=value, path=list(path))
        if value == node.value:
            yield emit.final(StepKind.FOUND, f"{value} is already in the tree — duplicates are ignored.",
                             node=value, tree=tree_dict(root))
            return tree_dict(root)
        side = "left" if value < node.value else "right"
        child = getattr(node, side)
        if child is None:
            setattr(node, side, TreeNode(value))
            yield emit(StepKind.INSERT, f"Empty {side} slot under {node.value}: place {value} there.",
                       value=value, parent=node.value, side=side)
            return (yield from _inserted(root, value, emit))
        node = child


def _inserted(root: TreeNode, value: int, emit):
    yield emit.final(StepKind.DONE, f"Inserted {value}.", value=value, tree=tree_dict(root))
    return tree_dict(root)


# ---------------------------------------------------------------------------
# Search
# ---------------------------------------------------------------------------
def bst_search(root: Optional[TreeNode], value: int, emit):
    yield emit(StepKind.START, f"Search for {value}.", value=value, tree=tree_dict(root))

    node, path = root, []
    while node is not None:
        path.append(node.value)
        emit.count("comparisons")
        yield emit(StepKind.COMPARE, _compare_text(value, node.value), node=node.value, value=value, path=list(path))
        if value == node.value:
            yield emit.final(StepKind.FOUND, f"Found {value} in the tree.", node=value, path=list(path))
            return True
        node = node.left if value < node.value else node.right

    yield emit.final(StepKind.NOT_FOUND, f"Reached an empty subtree: {value} is not in the tree.",
                     value=value, path=list(path))
    return False


# ---------------------------------------------------------------------------
# Delete
# ---------------------------------------------------------------------------
def bst_delete(root: Optional[TreeNode], value: int, emit):
    yield emit(StepKind.START, f"Delete {value}.", value=value, tree=tree_dict(root))

    state = {"deleted": False}
    root = yield from _delete(root, value, emit, state)

    if not state["deleted"]:
        yield emit.final(StepKind.NOT_FOUND, f"{value} is not in the tree; nothing to delete.",
                         value=value, tree=tree_dict(root))
    else:
        yield emit.final(StepKind.DONE, f"Deleted {value}. The BST ordering still holds.",
                         value=value, tree=tree_dict(root))
    return tree_dict(root)


def _delete(node: Optional[TreeNode], value: int, emit, state: Dict[str, bool]):
    """Recursive generator; returns the new root of this subtree."""
    if node is None:
        return None

    emit.count("comparisons")
    yield emit(StepKind.COMPARE, _compare_text(value, node.value), node=node.value, value=value)

    if value < node.value:
        node.left = yield from _delete(node.left, value, emit, state)
        return node
    if value > node.value:
        node.right = yield from _delete(node.right, value, emit, state)
        return node

    if node.left is None or node.right is None:
        state["deleted"] = True
        child = node.left or node.right
        yield emit(StepKind.DELETE,
                   f"Remove {node.value}: it has {'one child' if child else 'no children'}"
                   + (f", so {child.value} takes its place." if child else "."),
                   node=node.value, replacement=child.value if child else None)
        return child

    successor = node.right
    while successor.left is not None:
        successor = successor.left
    yield emit(StepKind.HIGHLIGHT,
               f"{node.value} has two children: its in-order successor is {successor.value} "
               f"(minimum of the right subtree).",
               node=node.value, successor=successor.value)
    yield emit(StepKind.UPDATE, f"Copy {successor.value} into the node holding {node.value}.",
               node=node.value, value=successor.value)
    node.value = successor.value
    node.right = yield from _delete(node.right, successor.value, emit, state)
    return node


# ---------------------------------------------------------------------------
# Traversal
# ---------------------------------------------------------------------------
def bst_traverse(root: Optional[TreeNode], order: str, emit):
    yield emit(StepKind.START, f"{order} traversal.", order=order, tree=tree_dict(root))
    sequence: List[int] = []
    if root is not None:
        yield from _traverse(root, order, emit, sequence)
    yield emit.final(StepKind.DONE,
                     f"{order} traversal: {', '.join(map(str, sequence))}" if sequence else "Tree is empty.",
                     order=order, sequence=list(sequence))
    return sequence


def _traverse(node: Optional[TreeNode], order: str, emit, sequence: List[int]):
    if node is None:
        return
    if order == "preorder":
        yield from _visit(node, emit, sequence)
    yield from _traverse(node.left, order, emit, sequence)
    if order == "inorder":
        yield from _visit(node, emit, sequence)
    yield from _traverse(node.right, order, emit, sequence)
    if order == "postorder":
        yield from _visit(node, emit, sequence)


def _visit(node: TreeNode, emit, sequence: List[int]):
    sequence.append(node.value)
    yield emit(StepKind.VISIT, f"Visit {node.value}.", node=node.value, sequence=list(sequence))


def _compare_text(value: int, current: int) -> str:
    if value == current:
        return f"{value} == {current}."
    side = "left" if value < current else "right"
    return f"{value} {'<' if value < current else '>'} {current}: go {side}."
