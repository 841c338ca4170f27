"""
Landing grading.

Maps touchdown speed to a quality grade and bundles the outcome of a jump
into a LandingReport.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any


class LandingQuality(Enum):
    """
    Touchdown grade by impact speed [m/s].

    Upper bounds (inclusive):
        PERFECT ≤ 3 < EXCELLENT ≤ 5 < GOOD ≤ 8 < MODERATE ≤ 12 < HARD ≤ 20 < DANGEROUS
    """

    PERFECT = ("Perfect", 3.0)
    EXCELLENT = ("Excellent", 5.0)
    GOOD = ("Good", 8.0)
    MODERATE = ("Moderate", 12.0)
    HARD = ("Hard", 20.0)
    DANGEROUS = ("Dangerous", float("inf"))

    def __init__(self, label: str, max_speed: float) -> None:
        self.label = label
        self.max_speed = max_speed

    @property
    def is_safe(self) -> bool:
        return self.max_speed <= LandingQuality.GOOD.max_speed


def classify_landing(speed: float) -> LandingQuality:
    """Grade a touchdown speed [m/s]."""
    for quality in LandingQuality:
        if speed <= quality.max_speed:
            return quality
    return LandingQuality.DANGEROUS


@dataclass
class LandingReport:
    """
    Outcome of a jump, captured at first ground contact.

    Attributes
    ----------
    speed : float
        Impact speed: speed at the start of the step that reached the ground [m/s]
    reported_speed : float
        Speed passed by the engine's ground-hit signal. The engine clears
        the downward component before signalling, so this is the residual
        horizontal speed [m/s]
    quality : LandingQuality
    flight_time : float
        Simulation time at touchdown [s]
    parachute_deployed : bool
    parameters : dict[str, Any]
        Parameter snapshot at touchdown (public names)
    timestamp : datetime
        Wall-clock time of the report
    """
    speed: float
    reported_speed: float
    quality: LandingQuality
    flight_time: float
    parachute_deployed: bool
    parameters: dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=datetime.now)

    def summary(self) -> str:
        chute = "canopy open" if self.parachute_deployed else "no canopy"
        return (
            f"Landing: {self.quality.label} at {self.speed:.2f} m/s "
            f"after {self.flight_time:.1f} s ({chute})"
        )

    def as_dict(self) -> dict[str, Any]:
        return {
            "timestamp": self.timestamp.isoformat(),
            "velocity": self.speed,
            "reported_velocity": self.reported_speed,
            "quality": self.quality.label,
            "flight_time": self.flight_time,
            "parachute_deployed": self.parachute_deployed,
            "parameters": dict(self.parameters),
        }
