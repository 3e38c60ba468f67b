"""
run.py — One Execution of One Algorithm
========================================
A Run owns everything about a single execution:

    • the input snapshot (deep-copied at start, never aliased)
    • the append-only log of emitted Steps
    • the running counters the emitter stamps onto each Step
    • status / result / outcome

State machine:
    PENDING  →  start()          →  RUNNING
    RUNNING  →  generator ends   →  COMPLETED
    RUNNING  →  cancel()         →  CANCELLED
    RUNNING  →  unexpected error →  FAILED

Only the AlgorithmRunner mutates a Run.  Renderers read `steps`,
`status` and (once completed) `result`, and never write.
"""

import time
import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Generator, List, Optional

from algorithms.step import Step, StepKind
from engine.config import RunConfig


class RunStatus(str, Enum):
    PENDING   = "pending"
    RUNNING   = "running"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    FAILED    = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (RunStatus.COMPLETED, RunStatus.CANCELLED, RunStatus.FAILED)


@dataclass(eq=False)
class Run:
    """
    Attributes:
        algo_key     : Registry key of the algorithm being executed.
        input        : Deep-copied snapshot of the caller's input.
        config       : Current RunConfig (pacing may be reconfigured).
        id           : Short unique handle.
        status       : Current RunStatus.
        steps        : Every Step emitted so far, in sequence order.
        counters     : Running metrics (comparisons, swaps, attempts, …).
        result       : Populated only when status is COMPLETED.
        outcome      : Kind of the final step (found, not-found, no-path, …).
        error        : Message of the exception that FAILED the run.
        finish_order : 1-based order in which this run reached a terminal
                       status within its runner (race ranking).
    """

    algo_key:     str
    input:        Any
    config:       RunConfig                = field(default_factory=RunConfig)
    id:           str                      = field(default_factory=lambda: uuid.uuid4().hex[:8])
    status:       RunStatus                = RunStatus.PENDING
    steps:        List[Step]               = field(default_factory=list)
    counters:     Dict[str, Any]           = field(default_factory=dict)
    result:       Any                      = None
    outcome:      Optional[StepKind]       = None
    error:        Optional[str]            = None
    finish_order: int                      = 0
    started_at:   Optional[float]          = None
    finished_at:  Optional[float]          = None

    # driving state — owned by the runner
    _generator:   Optional[Generator[Step, None, Any]]  = field(default=None, repr=False)
    _next_due:    float                                  = field(default=0.0, repr=False)
    _emitted_at:  float                                  = field(default=0.0, repr=False)
    _advancing:   bool                                   = field(default=False, repr=False)
    _on_step:     Optional[Callable[[Step], None]]       = field(default=None, repr=False)
    _clock:       Callable[[], float]                    = field(default=time.monotonic, repr=False)

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def is_terminal(self) -> bool:
        return self.status.is_terminal

    @property
    def last_step(self) -> Optional[Step]:
        return self.steps[-1] if self.steps else None

    @property
    def wall_time_ms(self) -> float:
        if self.started_at is None:
            return 0.0
        end = self.finished_at if self.finished_at is not None else self._clock()
        return round((end - self.started_at) * 1000, 2)

    def steps_since(self, sequence: int = 0) -> List[Step]:
        """Steps with `step.sequence >= sequence` (a copy of the log slice)."""
        return list(self.steps[max(sequence, 0):])

    def to_dict(self, include_steps: bool = False) -> Dict[str, Any]:
        data = {
            "id":           self.id,
            "algorithm":    self.algo_key,
            "status":       self.status.value,
            "outcome":      self.outcome.value if self.outcome else None,
            "config":       self.config.to_dict(),
            "total_steps":  len(self.steps),
            "metrics":      dict(self.counters),
            "error":        self.error,
            "wall_time_ms": self.wall_time_ms,
        }
        if include_steps:
            data["steps"] = [s.to_dict() for s in self.steps]
        return data
