"""
runner.py — Cooperative Run Scheduler
======================================
The AlgorithmRunner owns the lifecycle of every Run it starts.

    runner = AlgorithmRunner()
    run = runner.start("bubble_sort", {"values": [5, 1, 4]}, RunConfig(pacing_ms=150))
    runner.run_until_complete([run])        # or: call runner.tick() from a timer
    runner.result(run)                      # → [1, 4, 5]

Scheduling model:
  Single-threaded and cooperative.  Each Run's algorithm body is a
  generator that suspends exactly where it yields an emitted Step.
  tick() resumes every running Run whose pacing delay has elapsed by
  exactly ONE step, round-robin, so many Runs (the sorting race)
  interleave and no Run can starve another.  start() never executes
  algorithm code; it only builds the generator.

Cancellation:
  Cooperative.  cancel() marks the Run and throws Cancelled into the
  suspended generator at its yield, so `finally` blocks run and no
  further algorithm code executes.  A Run mid-advance (e.g. cancelled
  from an on_step callback) stops at its next emit instead.

Thread safety:
  All public methods take an internal re-entrant lock, so a threaded
  web server can poll tick() from several request threads.  Re-entering
  advance() on the same Run from its own callback is an error.
"""

import copy
import logging
import threading
import time
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional, Union

from algorithms import registry
from algorithms.step import Step, StepKind
from engine.config import RunConfig, validate_pacing
from engine.emitter import StepEmitter
from engine.errors import Cancelled, EngineError, InvalidInput, NotReady, UnknownAlgorithm
from engine.run import Run, RunStatus

logger = logging.getLogger(__name__)

ConfigLike = Union[RunConfig, Dict[str, Any], None]


class AlgorithmRunner:
    """
    Attributes:
        default_pacing_ms : Pacing used when start() receives no config.
        max_runs          : Upper bound on remembered Runs; the oldest
                            terminal Runs are forgotten first.
    """

    def __init__(
        self,
        default_pacing_ms: int = 0,
        max_runs: Optional[int] = None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.default_pacing_ms = validate_pacing(default_pacing_ms)
        self.max_runs          = max_runs
        self._clock            = clock
        self._sleep            = sleep
        self._runs:     Dict[str, Run] = {}
        self._finished: int            = 0
        self._lock                     = threading.RLock()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def start(
        self,
        algo_key: str,
        input: Any,
        config: ConfigLike = None,
        on_step: Optional[Callable[[Step], None]] = None,
    ) -> Run:
        """Validate + snapshot the input, create the Run, return immediately.

        Raises InvalidInput (or UnknownAlgorithm) synchronously; in that
        case no Run exists.
        """
        if not isinstance(algo_key, str):
            raise InvalidInput(f"Algorithm key must be a string, got {algo_key!r}")
        info = registry.get_algorithm(algo_key)
        if info is None:
            raise UnknownAlgorithm(algo_key)
        config = self._coerce_config(config)

        snapshot = copy.deepcopy(input)
        if config.animate_only:
            if info.replay is None:
                raise InvalidInput(f"{algo_key} has no pre-computed replay (animate_only)")
            fn, prepare = info.replay, info.replay_prepare or info.prepare
        else:
            fn, prepare = info.fn, info.prepare

        if not isinstance(snapshot, dict):
            raise InvalidInput(f"{algo_key} expects a JSON object as input")
        kwargs = prepare(copy.deepcopy(snapshot))

        run = Run(algo_key=algo_key, input=snapshot, config=config)
        run._generator = fn(emit=StepEmitter(run), **kwargs)
        run._on_step   = on_step
        run._clock     = self._clock

        with self._lock:
            run.status     = RunStatus.RUNNING
            run.started_at = self._clock()
            run._next_due  = run.started_at
            self._runs[run.id] = run
            self._prune()

        logger.info("run %s started: %s (pacing=%dms, animate_only=%s)",
                    run.id, algo_key, config.pacing_ms, config.animate_only)
        return run

    def race(self, algo_keys: Iterable[str], input: Any, config: ConfigLike = None) -> List[Run]:
        """Start one Run per algorithm on independent copies of the same input.

        All or nothing: if any algorithm rejects the input, the Runs already
        started are cancelled and forgotten before the error propagates.
        """
        keys = list(algo_keys)
        if not keys:
            raise InvalidInput("A race needs at least one algorithm")
        # validate every key before starting anything
        for key in keys:
            if not isinstance(key, str):
                raise InvalidInput(f"Algorithm keys must be strings, got {key!r}")
            if registry.get_algorithm(key) is None:
                raise UnknownAlgorithm(key)
        runs: List[Run] = []
        try:
            for key in keys:
                runs.append(self.start(key, input, config))
        except EngineError:
            for run in runs:
                self.forget(run.id)
            raise
        logger.info("race started: %s", ", ".join(f"{r.algo_key}={r.id}" for r in runs))
        return runs

    def cancel(self, run: Run) -> Run:
        """Idempotent.  Terminal Runs are left exactly as they are."""
        with self._lock:
            if run.is_terminal:
                return run
            run.status = RunStatus.CANCELLED
            gen = run._generator
            if gen is not None and not run._advancing:
                try:
                    gen.throw(Cancelled(run.id))
                except (Cancelled, StopIteration):
                    pass
                except Exception as exc:
                    run.error = f"{type(exc).__name__}: {exc}"
                    logger.exception("run %s raised while being cancelled", run.id)
                else:
                    # the body swallowed Cancelled and yielded again
                    gen.close()
                run._generator = None
            self._finish(run)
        logger.info("run %s cancelled after %d step(s)", run.id, len(run.steps))
        return run

    def configure(self, run: Run, pacing_ms: int) -> Run:
        """Change the delay used from the current suspension onwards."""
        pacing_ms = validate_pacing(pacing_ms)
        with self._lock:
            run.config = run.config.with_pacing(pacing_ms)
            if not run.is_terminal and run.steps:
                run._next_due = run._emitted_at + pacing_ms / 1000.0
        logger.debug("run %s pacing set to %dms", run.id, pacing_ms)
        return run

    def result(self, run: Run) -> Any:
        if run.status is not RunStatus.COMPLETED:
            raise NotReady(run.id, run.status.value)
        return run.result

    # ------------------------------------------------------------------
    # Driving
    # ------------------------------------------------------------------
    def advance(self, run: Run) -> Optional[Step]:
        """Resume the Run's generator exactly once.

        Returns the Step it emitted, or None when the Run is (or just
        became) terminal.
        """
        with self._lock:
            if run.is_terminal or run._generator is None:
                return None
            if run._advancing:
                raise RuntimeError(f"Run {run.id} is already advancing")
            run._advancing = True
            try:
                step = next(run._generator)
            except StopIteration as stop:
                self._complete(run, stop.value)
                return None
            except Cancelled:
                run.status = RunStatus.CANCELLED
                self._finish(run)
                logger.info("run %s cancelled at its suspension point", run.id)
                return None
            except Exception as exc:
                self._fail(run, exc)
                return None
            finally:
                run._advancing = False

            run._emitted_at = self._clock()
            run._next_due   = run._emitted_at + run.config.pacing_ms / 1000.0
            callback = run._on_step

        if callback is not None:
            callback(step)
        return step

    def tick(self, now: Optional[float] = None, runs: Optional[Iterable[Run]] = None) -> int:
        """
        Call periodically (e.g. every 50 ms, or on every poll).  Advances
        each due Run by one step.  Returns the number of Runs advanced.
        """
        with self._lock:
            now = self._clock() if now is None else now
            candidates = list(runs) if runs is not None else list(self._runs.values())
            advanced = 0
            for run in candidates:
                if run.status is RunStatus.RUNNING and not run._advancing and run._next_due <= now:
                    self.advance(run)
                    advanced += 1
            return advanced

    def run_until_complete(
        self,
        runs: Optional[Iterable[Run]] = None,
        timeout: Optional[float] = None,
    ) -> List[Run]:
        """Drive the given Runs (default: all live Runs) to a terminal status.

        `timeout` is a wall-clock budget in seconds; Runs still going when
        it expires are cancelled.
        """
        with self._lock:
            targets = list(runs) if runs is not None else [r for r in self._runs.values() if not r.is_terminal]
        deadline = None if timeout is None else self._clock() + timeout

        while True:
            pending = [r for r in targets if not r.is_terminal]
            if not pending:
                return targets
            now = self._clock()
            if deadline is not None and now >= deadline:
                logger.warning("timeout: cancelling %d unfinished run(s)", len(pending))
                for run in pending:
                    self.cancel(run)
                return targets
            if self.tick(now=now, runs=pending) == 0:
                wake = min(r._next_due for r in pending)
                if deadline is not None:
                    wake = min(wake, deadline)
                self._sleep(max(0.0, wake - now))

    def stream(self, run: Run, since: int = 0) -> Iterator[Step]:
        """Lazily yield the Run's steps in real time, driving it as needed.

        A terminal Run yields its static log and stops.
        """
        index = since
        while True:
            while index < len(run.steps):
                yield run.steps[index]
                index += 1
            if run.is_terminal:
                return
            wait = run._next_due - self._clock()
            if wait > 0:
                self._sleep(wait)
            self.advance(run)

    # ------------------------------------------------------------------
    # Handles
    # ------------------------------------------------------------------
    def get(self, run_id: str) -> Optional[Run]:
        return self._runs.get(run_id)

    def runs(self) -> List[Run]:
        with self._lock:
            return list(self._runs.values())

    def forget(self, run_id: str) -> None:
        """Drop the runner's reference; a live Run is cancelled first."""
        with self._lock:
            run = self._runs.get(run_id)
            if run is None:
                return
            if not run.is_terminal:
                self.cancel(run)
            del self._runs[run_id]

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _coerce_config(self, config: ConfigLike) -> RunConfig:
        if config is None:
            return RunConfig(pacing_ms=self.default_pacing_ms)
        if isinstance(config, RunConfig):
            return config
        if isinstance(config, dict):
            return RunConfig.from_dict(config, default_pacing_ms=self.default_pacing_ms)
        raise InvalidInput(f"Unsupported config: {config!r}")

    def _complete(self, run: Run, value: Any) -> None:
        last = run.last_step
        run.result  = value
        run.outcome = last.kind if last is not None and last.is_final else StepKind.DONE
        run.status  = RunStatus.COMPLETED
        run._generator = None
        self._finish(run)
        logger.info("run %s completed: %s in %d step(s)", run.id, run.outcome.value, len(run.steps))

    def _fail(self, run: Run, exc: Exception) -> None:
        run.error  = f"{type(exc).__name__}: {exc}"
        run.status = RunStatus.FAILED
        run._generator = None
        self._finish(run)
        logger.exception("run %s failed", run.id)

    def _finish(self, run: Run) -> None:
        if run.finished_at is not None:
            return
        run.finished_at = self._clock()
        self._finished += 1
        run.finish_order = self._finished

    def _prune(self) -> None:
        if self.max_runs is None or len(self._runs) <= self.max_runs:
            return
        for run_id in [rid for rid, r in self._runs.items() if r.is_terminal]:
            if len(self._runs) <= self.max_runs:
                break
            del self._runs[run_id]
