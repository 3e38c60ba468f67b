"""
algorithms/
-----------
One generator module per algorithm family.

    from algorithms.registry import get_algorithm, list_algorithms
    from algorithms.step import Step, StepKind

The registry lives in its own module: the hashing family replays prior
inserts through engine.emitter, and engine.run needs algorithms.step, so
importing the package must stay free of algorithm modules.
"""

from algorithms.step import Step, StepKind, TERMINAL_KINDS

__all__ = ["Step", "StepKind", "TERMINAL_KINDS"]
