"""
race.py — Race Analytics
=========================
Several Runs started together on the same input (see
AlgorithmRunner.race) are ranked once they are terminal.

Usage:
    runs = runner.race(SORTING_KEYS, {"values": [5, 2, 9, 1]})
    runner.run_until_complete(runs)
    summary = race_summary(runs)     # → RaceResult
    summary.winner                   # key of the first Run to complete

The ranking is completion order (`Run.finish_order`), not step count:
with equal pacing the Run with fewer steps finishes first anyway.
"""

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from engine.run import Run, RunStatus


# ---------------------------------------------------------------------------
# RaceEntry — one lane of the race
# ---------------------------------------------------------------------------
@dataclass
class RaceEntry:
    run_id:       str   = ""
    algo_key:     str   = ""
    status:       str   = ""
    rank:         Optional[int] = None     # 1 = winner; None until completed
    total_steps:  int   = 0
    comparisons:  int   = 0
    swaps:        int   = 0
    wall_time_ms: float = 0.0


# ---------------------------------------------------------------------------
# RaceResult — the whole race
# ---------------------------------------------------------------------------
@dataclass
class RaceResult:
    entries:           List[RaceEntry] = field(default_factory=list)
    winner:            Optional[str]   = None
    finished:          bool            = False   # every Run is terminal
    total_steps:       int             = 0
    total_comparisons: int             = 0
    total_swaps:       int             = 0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def race_summary(runs: Iterable[Run]) -> RaceResult:
    """Rank the given Runs.  Only completed Runs are ranked."""
    runs = list(runs)
    completed = sorted((r for r in runs if r.status is RunStatus.COMPLETED),
                       key=lambda r: r.finish_order)
    ranks = {run.id: i + 1 for i, run in enumerate(completed)}

    entries = [
        RaceEntry(
            run_id=run.id,
            algo_key=run.algo_key,
            status=run.status.value,
            rank=ranks.get(run.id),
            total_steps=len(run.steps),
            comparisons=run.counters.get("comparisons", 0),
            swaps=run.counters.get("swaps", 0),
            wall_time_ms=run.wall_time_ms,
        )
        for run in runs
    ]

    return RaceResult(
        entries=entries,
        winner=completed[0].algo_key if completed else None,
        finished=all(r.is_terminal for r in runs),
        total_steps=sum(e.total_steps for e in entries),
        total_comparisons=sum(e.comparisons for e in entries),
        total_swaps=sum(e.swaps for e in entries),
    )
