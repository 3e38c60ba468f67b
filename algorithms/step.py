"""
step.py — Algorithm Step Snapshot
==================================
Every algorithm is a generator that yields Step objects.
A Step is a frozen-in-time observation of one decision the algorithm
just made:

    • What kind of event it was (compare, visit, place, swap, …)
    • Where in the run it sits (a contiguous, 0-based sequence number)
    • The event-specific data (indices, values, node ids, coordinates)
    • The running counters as of this step (comparisons, swaps, …)
    • A plain-English explanation of *why* this step happened
      (Learning Mode reads this)

Design decisions:
  - Step is a frozen dataclass.  It is a SNAPSHOT: the emitter deep-copies
    the payload before the Step is built, so nothing inside a Step is a
    live reference into the algorithm's working state.
  - `payload` is a free-form dict so every algorithm family can push
    whatever the renderer needs without growing the envelope.
  - The terminal step of every run carries `is_final=True` and one of the
    TERMINAL kinds below.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict


# ---------------------------------------------------------------------------
# Step kinds — one tag per observable event
# ---------------------------------------------------------------------------
class StepKind(str, Enum):
    START       = "start"
    COMPARE     = "compare"
    VISIT       = "visit"
    HIGHLIGHT   = "highlight"
    ENQUEUE     = "enqueue"
    RELAX       = "relax"
    PLACE       = "place"
    REMOVE      = "remove"
    BACKTRACK   = "backtrack"
    CONFLICT    = "conflict"
    SWAP        = "swap"
    WRITE       = "write"
    COLLISION   = "collision"
    PROBE       = "probe"
    INSERT      = "insert"
    UPDATE      = "update"
    DELETE      = "delete"
    SCHEDULE    = "schedule"
    # terminal kinds
    FOUND       = "found"
    NOT_FOUND   = "not-found"
    NO_PATH     = "no-path"
    NO_SOLUTION = "no-solution"
    DONE        = "done"


TERMINAL_KINDS = frozenset({
    StepKind.FOUND,
    StepKind.NOT_FOUND,
    StepKind.NO_PATH,
    StepKind.NO_SOLUTION,
    StepKind.DONE,
})


@dataclass(frozen=True)
class Step:
    """
    Attributes:
        kind        : StepKind tag.
        sequence    : 0-based, contiguous position of this step in its run.
        payload     : Variant-specific data, e.g.
                        • binary search – low, high, mid, value
                        • graph search  – node, edge, frontier, distances
                        • backtracking  – row, col, value
                        • sorting       – i, j, array
        metrics     : Running counters valid as of this step.
        explanation : Human-readable "why" text for Learning Mode.
        is_final    : True on the very last step of a run.
    """

    kind:         StepKind
    sequence:     int
    payload:      Dict[str, Any] = field(default_factory=dict)
    metrics:      Dict[str, Any] = field(default_factory=dict)
    explanation:  str            = ""
    is_final:     bool           = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind":        self.kind.value,
            "sequence":    self.sequence,
            "payload":     self.payload,
            "metrics":     self.metrics,
            "explanation": self.explanation,
            "is_final":    self.is_final,
        }
