"""
n_queens.py — N-Queens Backtracking
====================================
Place N queens row by row so that no two share a column or a diagonal.

Emits:
  • PLACE      – a safe square gets a queen
  • CONFLICT   – a tried square is attacked (payload names the attacker)
  • BACKTRACK  – the queen of this row is lifted again
  • HIGHLIGHT  – (find_all) a complete board was recorded
and finally FOUND or NO_SOLUTION.

Metrics: `attempts` (squares tried), `backtracks`.  In find-all mode a
backtrack is counted after every recursive return, including the ones
that follow a recorded solution.

Replay (`animate_only`): a pre-computed board is re-emitted as PLACE
steps, row by row, without searching.
"""

from typing import Any, Dict, List, Optional, Tuple

from algorithms.inputs import as_bool, as_grid, as_int, in_range, require
from algorithms.step import StepKind
from engine.errors import InvalidInput


MAX_N = 12

Board = List[List[int]]

PSEUDOCODE: List[str] = [
    "def place(board, row):",
    "    if row == n: return True",
    "    for col in 0..n-1:",
    "        if no queen attacks (row, col):",
    "            board[row][col] ← Q",
    "            if place(board, row + 1): return True",
    "            board[row][col] ← .      # backtrack",
    "    return False",
]


def prepare(data: Dict[str, Any]) -> Dict[str, Any]:
    n = in_range(as_int(require(data, "n"), "n"), 1, MAX_N, "n")
    return {"n": n, "find_all": as_bool(data.get("find_all", False), "find_all")}


def prepare_replay(data: Dict[str, Any]) -> Dict[str, Any]:
    solution = require(data, "solution")
    if not isinstance(solution, list) or not 1 <= len(solution) <= MAX_N:
        raise InvalidInput(f"solution must be an n×n board with 1 <= n <= {MAX_N}")
    board = as_grid(solution, len(solution), 0, 1, "solution")
    if not is_solution(board):
        raise InvalidInput("solution is not a valid N-Queens board")
    return {"board": board}


# ---------------------------------------------------------------------------
# Board helpers
# ---------------------------------------------------------------------------
def attacker(board: Board, row: int, col: int) -> Optional[Tuple[int, int]]:
    """First queen above (row, col) that attacks it: column, then ↖, then ↗."""
    n = len(board)
    for i in range(row):
        if board[i][col]:
            return i, col
    i, j = row - 1, col - 1
    while i >= 0 and j >= 0:
        if board[i][j]:
            return i, j
        i, j = i - 1, j - 1
    i, j = row - 1, col + 1
    while i >= 0 and j < n:
        if board[i][j]:
            return i, j
        i, j = i - 1, j + 1
    return None


def is_solution(board: Board) -> bool:
    n = len(board)
    if any(sum(row) != 1 for row in board):
        return False
    return all(attacker(board, r, board[r].index(1)) is None for r in range(n))


def _copy(board: Board) -> Board:
    return [list(row) for row in board]


# ---------------------------------------------------------------------------
# Solver
# ---------------------------------------------------------------------------
def n_queens(n: int, emit, find_all: bool = False):
    """First board found, or (find_all) every board — each a list of 0/1 rows."""
    board: Board = [[0] * n for _ in range(n)]
    solutions: List[Board] = []
    emit.set_metric("attempts", 0)
    emit.set_metric("backtracks", 0)

    yield emit(StepKind.START, f"Place {n} queen(s) on a {n}×{n} board, one per row.",
               n=n, find_all=find_all, board=board)

    if find_all:
        yield from _place_all(board, 0, emit, solutions)
        if solutions:
            yield emit.final(StepKind.FOUND, f"Found {len(solutions)} solution(s) for {n}-Queens!",
                             count=len(solutions), solutions=solutions)
        else:
            yield emit.final(StepKind.NO_SOLUTION, f"No solutions exist for {n}-Queens.", count=0)
        return solutions

    solved = yield from _place_first(board, 0, emit)
    if not solved:
        yield emit.final(StepKind.NO_SOLUTION, f"No solution exists for {n}-Queens.", board=board)
        return None
    yield emit.final(StepKind.FOUND, f"Solution found for {n}-Queens!", board=board)
    return _copy(board)


def _try(board: Board, row: int, col: int, emit):
    """Shared attempt logic; returns True if the queen was placed."""
    emit.count("attempts")
    hit = attacker(board, row, col)
    if hit is not None:
        yield emit(StepKind.CONFLICT, f"({row}, {col}) is attacked by the queen at {hit}.",
                   row=row, col=col, attacker=list(hit))
        return False
    board[row][col] = 1
    yield emit(StepKind.PLACE, f"({row}, {col}) is safe: place a queen.", row=row, col=col, board=board)
    return True


def _lift(board: Board, row: int, col: int, emit):
    board[row][col] = 0
    emit.count("backtracks")
    yield emit(StepKind.BACKTRACK, f"Backtrack: remove the queen from ({row}, {col}).",
               row=row, col=col, board=board)


def _place_first(board: Board, row: int, emit):
    n = len(board)
    if row == n:
        return True
    for col in range(n):
        if (yield from _try(board, row, col, emit)):
            if (yield from _place_first(board, row + 1, emit)):
                return True
            yield from _lift(board, row, col, emit)
    return False


def _place_all(board: Board, row: int, emit, solutions: List[Board]):
    n = len(board)
    if row == n:
        solutions.append(_copy(board))
        emit.set_metric("solutions", len(solutions))
        yield emit(StepKind.HIGHLIGHT, f"Solution #{len(solutions)} recorded.",
                   index=len(solutions) - 1, board=board)
        return
    for col in range(n):
        if (yield from _try(board, row, col, emit)):
            yield from _place_all(board, row + 1, emit, solutions)
            yield from _lift(board, row, col, emit)


# ---------------------------------------------------------------------------
# Replay
# ---------------------------------------------------------------------------
def n_queens_replay(board: Board, emit):
    n = len(board)
    shown: Board = [[0] * n for _ in range(n)]
    yield emit(StepKind.START, f"Replay a {n}-Queens solution.", n=n, board=shown)
    for row in range(n):
        col = board[row].index(1)
        shown[row][col] = 1
        yield emit(StepKind.PLACE, f"Queen at ({row}, {col}).", row=row, col=col, board=shown)
    yield emit.final(StepKind.FOUND, f"{n}-Queens solution replayed.", board=shown)
    return _copy(shown)
