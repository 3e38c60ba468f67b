"""
emitter.py — The Step Channel
==============================
Algorithms never build Steps by hand and never know about pacing.
They call the emitter at every observable decision point and yield
what it returns:

    def binary_search(values, target, emit):
        ...
        emit.count("comparisons")
        yield emit(StepKind.COMPARE, "Check the middle element", low=low, high=high, mid=mid)
        ...
        yield emit.final(StepKind.FOUND, f"Found at {mid}", index=mid)
        return mid

The `yield` is the suspension point: the runner decides when the
generator is resumed (pacing) and whether it is resumed at all
(cancellation).  `emit` itself fails fast with Cancelled once the Run
has been cancelled, so no step is appended after that point.
"""

import copy
import logging
from typing import Any

from algorithms.step import Step, StepKind
from engine.config import RunConfig
from engine.errors import Cancelled
from engine.run import Run, RunStatus

logger = logging.getLogger(__name__)


class StepEmitter:
    def __init__(self, run: Run):
        self._run = run

    @classmethod
    def detached(cls) -> "StepEmitter":
        """An emitter bound to a private scratch run.

        Used to replay an operation silently, e.g. to build a hash table
        or tree from prior inserts before the animated operation starts.
        """
        run = Run(algo_key="<detached>", input=None, config=RunConfig())
        run.status = RunStatus.RUNNING
        return cls(run)

    # ------------------------------------------------------------------
    # Emission
    # ------------------------------------------------------------------
    def emit(self, kind: StepKind, explanation: str = "", **payload: Any) -> Step:
        return self._append(kind, explanation, payload, is_final=False)

    __call__ = emit

    def final(self, kind: StepKind, explanation: str = "", **payload: Any) -> Step:
        """Emit the terminal step of the run."""
        return self._append(kind, explanation, payload, is_final=True)

    # ------------------------------------------------------------------
    # Counters
    # ------------------------------------------------------------------
    def count(self, name: str, by: int = 1) -> int:
        counters = self._run.counters
        counters[name] = counters.get(name, 0) + by
        return counters[name]

    def set_metric(self, name: str, value: Any) -> None:
        self._run.counters[name] = value

    def metric(self, name: str, default: Any = 0) -> Any:
        return self._run.counters.get(name, default)

    @property
    def run_id(self) -> str:
        return self._run.id

    @property
    def sequence(self) -> int:
        """Sequence number the next emitted step will carry."""
        return len(self._run.steps)

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _append(self, kind: StepKind, explanation: str, payload: dict, is_final: bool) -> Step:
        run = self._run
        if run.status is RunStatus.CANCELLED:
            raise Cancelled(run.id)
        step = Step(
            kind=StepKind(kind),
            sequence=len(run.steps),
            payload=copy.deepcopy(payload),
            metrics=copy.deepcopy(run.counters),
            explanation=explanation,
            is_final=is_final,
        )
        run.steps.append(step)
        logger.debug("run %s step %d %s", run.id, step.sequence, step.kind.value)
        return step


def drain(generator) -> Any:
    """Exhaust an algorithm generator and return its result."""
    while True:
        try:
            next(generator)
        except StopIteration as stop:
            return stop.value


def run_silently(fn, *args: Any, **kwargs: Any) -> Any:
    """Run an algorithm generator against a detached emitter, return its result."""
    return drain(fn(*args, emit=StepEmitter.detached(), **kwargs))
