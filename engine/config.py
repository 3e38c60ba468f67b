"""
config.py — Run Configuration
==============================
Pacing is the only knob that changes *when* steps appear; it never
changes *which* steps appear.

    RunConfig(pacing_ms=400)                 # explicit
    RunConfig.from_preset("fast")            # named speed
    RunConfig.from_dict({"pacingMs": 0})     # JSON from the UI layer
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from engine.errors import InvalidInput


# ---------------------------------------------------------------------------
# Speed presets (milliseconds per suspension point)
# ---------------------------------------------------------------------------
SPEED_PRESETS: Dict[str, int] = {
    "slow":    1000,    # teaching mode
    "medium":   400,
    "fast":     150,    # demo mode
    "turbo":     50,
    "instant":    0,
}

DEFAULT_PACING_MS = SPEED_PRESETS["medium"]


def validate_pacing(value: Any) -> int:
    """Return `value` as a non-negative int or raise InvalidInput."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidInput(f"pacing_ms must be a non-negative integer, got {value!r}")
    if value < 0:
        raise InvalidInput(f"pacing_ms must be a non-negative integer, got {value}")
    return value


@dataclass(frozen=True)
class RunConfig:
    """
    Attributes:
        pacing_ms    : Delay enforced after every emitted step.
        animate_only : Replay a pre-computed result instead of computing it
                       (used by "show next solution" style navigation).
    """

    pacing_ms:    int  = 0
    animate_only: bool = False

    def __post_init__(self):
        validate_pacing(self.pacing_ms)
        if not isinstance(self.animate_only, bool):
            raise InvalidInput(f"animate_only must be a boolean, got {self.animate_only!r}")

    @classmethod
    def from_preset(cls, preset: str, animate_only: bool = False) -> "RunConfig":
        if preset not in SPEED_PRESETS:
            raise InvalidInput(f"Unknown speed preset: {preset}")
        return cls(pacing_ms=SPEED_PRESETS[preset], animate_only=animate_only)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]], default_pacing_ms: int = 0) -> "RunConfig":
        """Accept both snake_case and the UI's camelCase option names."""
        data = data or {}
        if "speed" in data:
            return cls.from_preset(data["speed"], animate_only=data.get("animate_only", data.get("animateOnly", False)))
        pacing = data.get("pacing_ms", data.get("pacingMs", default_pacing_ms))
        animate = data.get("animate_only", data.get("animateOnly", False))
        return cls(pacing_ms=pacing, animate_only=animate)

    def with_pacing(self, pacing_ms: int) -> "RunConfig":
        return RunConfig(pacing_ms=pacing_ms, animate_only=self.animate_only)

    def to_dict(self) -> Dict[str, Any]:
        return {"pacing_ms": self.pacing_ms, "animate_only": self.animate_only}
