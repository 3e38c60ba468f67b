"""
sudoku.py — Sudoku Backtracking Solver
=======================================
9×9 grid, 0 = empty.  The solver always fills the FIRST empty cell in
row-major order and tries candidates 1..9; a candidate is valid when the
row, the column and the 3×3 box are free of it.

Emits PLACE / CONFLICT / BACKTRACK like N-Queens; HIGHLIGHT marks every
recorded solution in find_all mode (which stops after `limit`).

A grid whose givens already clash cannot be solved and completes with
NO_SOLUTION straight away.

Also here:
  • sudoku_validate – animated conflict scan of a (partial) grid
  • sudoku_replay   – re-emit a known solution (animate_only)
  • PUZZLES         – the easy / medium / hard / expert presets
"""

from typing import Any, Dict, List, Optional, Tuple

from algorithms.inputs import as_bool, as_grid, as_int, in_range, require
from algorithms.step import StepKind
from engine.errors import InvalidInput


SIZE          = 9
DEFAULT_LIMIT = 10
MAX_LIMIT     = 1000

Grid = List[List[int]]

PSEUDOCODE: List[str] = [
    "def solve(grid):",
    "    cell ← first empty cell",
    "    if no cell: return True",
    "    for num in 1..9:",
    "        if valid(grid, cell, num):",
    "            grid[cell] ← num",
    "            if solve(grid): return True",
    "            grid[cell] ← 0            # backtrack",
    "    return False",
]

VALIDATE_PSEUDOCODE: List[str] = [
    "def validate(grid):",
    "    for cell in grid:",
    "        if cell clashes with its row, column or box:",
    "            mark cell invalid",
    "    return no cell marked",
]

PUZZLES: Dict[str, Grid] = {
    "easy": [
        [5, 3, 0, 0, 7, 0, 0, 0, 0],
        [6, 0, 0, 1, 9, 5, 0, 0, 0],
        [0, 9, 8, 0, 0, 0, 0, 6, 0],
        [8, 0, 0, 0, 6, 0, 0, 0, 3],
        [4, 0, 0, 8, 0, 3, 0, 0, 1],
        [7, 0, 0, 0, 2, 0, 0, 0, 6],
        [0, 6, 0, 0, 0, 0, 2, 8, 0],
        [0, 0, 0, 4, 1, 9, 0, 0, 5],
        [0, 0, 0, 0, 8, 0, 0, 7, 9],
    ],
    "medium": [
        [0, 0, 0, 6, 0, 0, 4, 0, 0],
        [7, 0, 0, 0, 0, 3, 6, 0, 0],
        [0, 0, 0, 0, 9, 1, 0, 8, 0],
        [0, 0, 0, 0, 0, 0, 0, 0, 0],
        [0, 5, 0, 1, 8, 0, 0, 0, 3],
        [0, 0, 0, 3, 0, 6, 0, 4, 5],
        [0, 4, 0, 2, 0, 0, 0, 6, 0],
        [9, 0, 3, 0, 0, 0, 0, 0, 0],
        [0, 2, 0, 0, 0, 0, 1, 0, 0],
    ],
    "hard": [
        [0, 0, 0, 0, 0, 0, 0, 1, 0],
        [4, 0, 0, 0, 0, 0, 0, 0, 0],
        [0, 0, 0, 0, 0, 0, 6, 0, 2],
        [0, 0, 0, 0, 3, 0, 0, 7, 0],
        [5, 0, 0, 0, 0, 0, 0, 0, 0],
        [0, 0, 0, 0, 0, 8, 0, 4, 0],
        [0, 0, 0, 2, 0, 0, 0, 0, 0],
        [0, 6, 0, 0, 0, 0, 0, 0, 5],
        [0, 0, 4, 0, 0, 0, 0, 0, 0],
    ],
    "expert": [
        [0, 0, 0, 0, 0, 0, 0, 0, 0],
        [0, 0, 0, 0, 0, 3, 0, 8, 5],
        [0, 0, 1, 0, 2, 0, 0, 0, 0],
        [0, 0, 0, 5, 0, 7, 0, 0, 0],
        [0, 0, 4, 0, 0, 0, 1, 0, 0],
        [0, 9, 0, 0, 0, 0, 0, 0, 0],
        [5, 0, 0, 0, 0, 0, 0, 7, 3],
        [0, 0, 2, 0, 1, 0, 0, 0, 0],
        [0, 0, 0, 0, 4, 0, 0, 0, 9],
    ],
}


# ---------------------------------------------------------------------------
# Input
# ---------------------------------------------------------------------------
def _grid(data: Dict[str, Any], key: str = "grid") -> Grid:
    raw = require(data, key)
    if isinstance(raw, str):
        if raw not in PUZZLES:
            raise InvalidInput(f"Unknown puzzle {raw!r}; presets: {', '.join(PUZZLES)}")
        return copy_grid(PUZZLES[raw])
    return as_grid(raw, SIZE, 0, 9, key)


def prepare(data: Dict[str, Any]) -> Dict[str, Any]:
    limit = in_range(as_int(data.get("limit", DEFAULT_LIMIT), "limit"), 1, MAX_LIMIT, "limit")
    return {"grid": _grid(data), "find_all": as_bool(data.get("find_all", False), "find_all"), "limit": limit}


def prepare_validate(data: Dict[str, Any]) -> Dict[str, Any]:
    return {"grid": _grid(data)}


def prepare_replay(data: Dict[str, Any]) -> Dict[str, Any]:
    solution = as_grid(require(data, "solution"), SIZE, 1, 9, "solution")
    if conflicts(solution):
        raise InvalidInput("solution breaks a row, column or box rule")
    givens = _grid(data) if "grid" in data else [[0] * SIZE for _ in range(SIZE)]
    for r in range(SIZE):
        for c in range(SIZE):
            if givens[r][c] and givens[r][c] != solution[r][c]:
                raise InvalidInput(f"solution disagrees with the given at ({r}, {c})")
    return {"grid": givens, "solution": solution}


# ---------------------------------------------------------------------------
# Grid helpers
# ---------------------------------------------------------------------------
def copy_grid(grid: Grid) -> Grid:
    return [list(row) for row in grid]


def find_empty(grid: Grid) -> Optional[Tuple[int, int]]:
    for r in range(SIZE):
        for c in range(SIZE):
            if grid[r][c] == 0:
                return r, c
    return None


def clashes(grid: Grid, row: int, col: int, num: int) -> List[List[int]]:
    """Cells in the row, column or box of (row, col) already holding `num`."""
    box_r, box_c = row // 3 * 3, col // 3 * 3
    cells = {(row, c) for c in range(SIZE) if grid[row][c] == num}
    cells |= {(r, col) for r in range(SIZE) if grid[r][col] == num}
    cells |= {(r, c) for r in range(box_r, box_r + 3) for c in range(box_c, box_c + 3) if grid[r][c] == num}
    cells.discard((row, col))
    return [list(cell) for cell in sorted(cells)]


def is_valid_move(grid: Grid, row: int, col: int, num: int) -> bool:
    return not clashes(grid, row, col, num)


def conflicts(grid: Grid) -> List[List[int]]:
    """Every filled cell that clashes with another filled cell."""
    return [[r, c] for r in range(SIZE) for c in range(SIZE)
            if grid[r][c] and clashes(grid, r, c, grid[r][c])]


# ---------------------------------------------------------------------------
# Solver
# ---------------------------------------------------------------------------
def sudoku(grid: Grid, emit, find_all: bool = False, limit: int = DEFAULT_LIMIT):
    """Solved grid (or None), or with find_all the list of up to `limit` solutions."""
    emit.set_metric("attempts", 0)
    emit.set_metric("backtracks", 0)
    empty = sum(row.count(0) for row in grid)
    yield emit(StepKind.START, f"Solve a puzzle with {empty} empty cell(s).", grid=grid, empty=empty)

    bad = conflicts(grid)
    if bad:
        yield emit.final(StepKind.NO_SOLUTION, "The givens already break a rule: unsolvable.", conflicts=bad)
        return [] if find_all else None

    if find_all:
        solutions: List[Grid] = []
        yield from _solve_all(grid, emit, solutions, limit)
        if not solutions:
            yield emit.final(StepKind.NO_SOLUTION, "No solution exists for this puzzle.", count=0)
        else:
            yield emit.final(StepKind.FOUND, f"Found {len(solutions)} solution(s)"
                             + (f" (stopped at the limit of {limit})." if len(solutions) >= limit else "."),
                             count=len(solutions), solutions=solutions)
        return solutions

    if (yield from _solve(grid, emit)):
        yield emit.final(StepKind.FOUND, "Sudoku solved successfully!", grid=grid)
        return copy_grid(grid)
    yield emit.final(StepKind.NO_SOLUTION, "No solution exists for this puzzle.", grid=grid)
    return None


def _attempt(grid: Grid, row: int, col: int, num: int, emit):
    emit.count("attempts")
    hit = clashes(grid, row, col, num)
    if hit:
        yield emit(StepKind.CONFLICT, f"{num} at ({row}, {col}) clashes with {len(hit)} cell(s).",
                   row=row, col=col, value=num, cells=hit)
        return False
    grid[row][col] = num
    yield emit(StepKind.PLACE, f"Place {num} at ({row}, {col}).", row=row, col=col, value=num)
    return True


def _undo(grid: Grid, row: int, col: int, emit):
    num = grid[row][col]
    grid[row][col] = 0
    emit.count("backtracks")
    yield emit(StepKind.BACKTRACK, f"Backtrack: clear {num} from ({row}, {col}).", row=row, col=col, value=num)


def _solve(grid: Grid, emit):
    cell = find_empty(grid)
    if cell is None:
        return True
    row, col = cell
    for num in range(1, 10):
        if (yield from _attempt(grid, row, col, num, emit)):
            if (yield from _solve(grid, emit)):
                return True
            yield from _undo(grid, row, col, emit)
    return False


def _solve_all(grid: Grid, emit, solutions: List[Grid], limit: int):
    cell = find_empty(grid)
    if cell is None:
        solutions.append(copy_grid(grid))
        emit.set_metric("solutions", len(solutions))
        yield emit(StepKind.HIGHLIGHT, f"Solution #{len(solutions)} recorded.", index=len(solutions) - 1, grid=grid)
        return
    row, col = cell
    for num in range(1, 10):
        if len(solutions) >= limit:
            return
        if (yield from _attempt(grid, row, col, num, emit)):
            yield from _solve_all(grid, emit, solutions, limit)
            yield from _undo(grid, row, col, emit)


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------
def sudoku_validate(grid: Grid, emit):
    yield emit(StepKind.START, "Check every filled cell against its row, column and box.", grid=grid)
    empty = 0
    bad: List[List[int]] = []
    for row in range(SIZE):
        for col in range(SIZE):
            value = grid[row][col]
            if value == 0:
                empty += 1
                continue
            emit.count("checks")
            hit = clashes(grid, row, col, value)
            if hit:
                bad.append([row, col])
                yield emit(StepKind.CONFLICT, f"{value} at ({row}, {col}) clashes with {hit}.",
                           row=row, col=col, value=value, cells=hit)
            else:
                yield emit(StepKind.VISIT, f"{value} at ({row}, {col}) is fine.", row=row, col=col, value=value)

    result = {"valid": not bad, "complete": empty == 0, "empty": empty, "conflicts": bad}
    if result["complete"] and result["valid"]:
        explanation = "Sudoku is solved correctly!"
    elif bad:
        explanation = f"{len(bad)} cell(s) break a rule."
    else:
        explanation = f"No conflicts so far; {empty} cell(s) still empty."
    yield emit.final(StepKind.DONE, explanation, **result)
    return result


# ---------------------------------------------------------------------------
# Replay
# ---------------------------------------------------------------------------
def sudoku_replay(grid: Grid, solution: Grid, emit):
    shown = copy_grid(grid)
    yield emit(StepKind.START, "Replay a known solution.", grid=shown)
    for row in range(SIZE):
        for col in range(SIZE):
            if shown[row][col] == 0:
                shown[row][col] = solution[row][col]
                yield emit(StepKind.PLACE, f"Place {solution[row][col]} at ({row}, {col}).",
                           row=row, col=col, value=solution[row][col])
    yield emit.final(StepKind.FOUND, "Solution replayed.", grid=shown)
    return shown
