"""
inputs.py — Input Coercion Helpers
===================================
Every algorithm module exposes a `prepare(data) -> kwargs` function that
turns the raw JSON-ish input of a run into the arguments of its
generator.  These helpers do the coercion and raise InvalidInput so a
bad input is rejected synchronously, before any Run exists.
"""

from typing import Any, Dict, List, Sequence

from engine.errors import InvalidInput


def require(data: Dict[str, Any], key: str) -> Any:
    if key not in data:
        raise InvalidInput(f"Missing required field: {key}")
    return data[key]


def as_int(value: Any, name: str = "value") -> int:
    """Integers and integer strings only ("42" ok, "4.2" / 4.2 / True rejected)."""
    if isinstance(value, bool):
        raise InvalidInput(f"{name} must be an integer, got {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass
    raise InvalidInput(f"{name} must be an integer, got {value!r}")


def as_number(value: Any, name: str = "value") -> float:
    if isinstance(value, bool):
        raise InvalidInput(f"{name} must be a number, got {value!r}")
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            pass
    raise InvalidInput(f"{name} must be a number, got {value!r}")


def as_bool(value: Any, name: str = "value") -> bool:
    """JSON booleans only; "false" or 0 is a mistake, not a falsy flag."""
    if not isinstance(value, bool):
        raise InvalidInput(f"{name} must be a boolean, got {value!r}")
    return value


def as_int_list(values: Any, name: str = "values") -> List[int]:
    if not isinstance(values, (list, tuple)):
        raise InvalidInput(f"{name} must be a list of integers")
    return [as_int(v, f"{name}[{i}]") for i, v in enumerate(values)]


def as_str(value: Any, name: str = "value") -> str:
    if not isinstance(value, str):
        raise InvalidInput(f"{name} must be a string, got {value!r}")
    return value


def one_of(value: Any, choices: Sequence[str], name: str) -> str:
    if value not in choices:
        raise InvalidInput(f"{name} must be one of {', '.join(choices)}; got {value!r}")
    return value


def in_range(value: int, low: int, high: int, name: str) -> int:
    """Inclusive range check."""
    if not low <= value <= high:
        raise InvalidInput(f"{name} must be between {low} and {high}, got {value}")
    return value


def as_grid(rows: Any, size: int, low: int, high: int, name: str = "grid") -> List[List[int]]:
    """A size×size grid of ints within [low, high]."""
    if not isinstance(rows, (list, tuple)) or len(rows) != size:
        raise InvalidInput(f"{name} must have {size} rows")
    grid = []
    for r, row in enumerate(rows):
        if not isinstance(row, (list, tuple)) or len(row) != size:
            raise InvalidInput(f"{name}[{r}] must have {size} cells")
        grid.append([in_range(as_int(v, f"{name}[{r}][{c}]"), low, high, f"{name}[{r}][{c}]")
                     for c, v in enumerate(row)])
    return grid
