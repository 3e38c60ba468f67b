"""
errors.py — Engine Error Kinds
===============================
Every failure the engine reports is scoped to a single Run.

    InvalidInput      – bad input / config, raised synchronously by start()
    UnknownAlgorithm  – registry miss (a flavour of InvalidInput)
    Cancelled         – raised inside the algorithm body at its next
                        suspension point once the Run has been cancelled
    NotReady          – result() asked for before the Run completed

A negative answer (not found / no path / no solution) is NOT an error:
the Run completes and its final step says so.
"""


class EngineError(Exception):
    """Base class for all engine errors."""


class InvalidInput(EngineError, ValueError):
    """The input or configuration was rejected; the run never started."""


class UnknownAlgorithm(InvalidInput):
    def __init__(self, key: str):
        super().__init__(f"Unknown algorithm: {key}")
        self.key = key


class Cancelled(EngineError):
    """The run was cancelled; the algorithm must stop, not retry."""

    def __init__(self, run_id: str = ""):
        super().__init__(f"Run {run_id} was cancelled" if run_id else "Run was cancelled")
        self.run_id = run_id


class NotReady(EngineError):
    def __init__(self, run_id: str, status: str):
        super().__init__(f"Run {run_id} has no result yet (status: {status})")
        self.run_id = run_id
        self.status = status
