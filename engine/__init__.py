"""
engine/
-------
Execution, pacing and playback layer.

    from engine import AlgorithmRunner, RunConfig, Stepper, race_summary
"""

from engine.errors  import EngineError, InvalidInput, UnknownAlgorithm, Cancelled, NotReady
from engine.config  import RunConfig, SPEED_PRESETS, DEFAULT_PACING_MS
from engine.run     import Run, RunStatus
from engine.emitter import StepEmitter
from engine.stepper import Stepper, StepperState
from engine.race    import RaceEntry, RaceResult, race_summary
from engine.runner  import AlgorithmRunner

__all__ = [
    "EngineError",
    "InvalidInput",
    "UnknownAlgorithm",
    "Cancelled",
    "NotReady",
    "RunConfig",
    "SPEED_PRESETS",
    "DEFAULT_PACING_MS",
    "Run",
    "RunStatus",
    "StepEmitter",
    "Stepper",
    "StepperState",
    "RaceEntry",
    "RaceResult",
    "race_summary",
    "AlgorithmRunner",
]
