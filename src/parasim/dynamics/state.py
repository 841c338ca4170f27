"""
Simulation parameters and state for a point-mass parachutist.

World frame is y-up: position[1] is altitude above the flat ground plane.

All physical quantities use SI units:
- Position: meters [m]
- Velocity: meters per second [m/s]
- Acceleration: meters per second squared [m/s²]
- Forces: Newtons [N]
"""
from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Any

import numpy as np
from numpy.typing import NDArray

from parasim.config import DEFAULT_PARAMETERS, INITIAL_ALTITUDE

# Public (camelCase) parameter name -> attribute name
PARAMETER_FIELDS: dict[str, str] = {
    "gravity": "gravity",
    "mass": "mass",
    "dragCoefficient": "drag_coefficient",
    "airDensity": "air_density",
    "parachuteArea": "parachute_area",
    "bodyArea": "body_area",
    "windSpeed": "wind_speed",
    "parachuteDeployed": "parachute_deployed",
    "ropeLength": "rope_length",
    "bodyVolume": "body_volume",
}

FORCE_NAMES = ("gravity", "drag", "buoyancy", "tension", "lift", "wind")


def resolve_parameter(name: str) -> str | None:
    """
    Map a parameter name to its attribute name.

    Accepts both the public camelCase names ("dragCoefficient") and the
    attribute names ("drag_coefficient"). Returns None for unknown names.
    """
    if name in PARAMETER_FIELDS:
        return PARAMETER_FIELDS[name]
    if name in SimulationParameters.__slots__:
        return name
    return None


class SimulationParameters:
    """
    Mutable jump configuration, one instance per engine.

    Attributes
    ----------
    gravity : float
        Gravitational acceleration magnitude [m/s²]
    mass : float
        Jumper plus equipment mass [kg]
    drag_coefficient : float
        Canopy drag coefficient, used only when deployed [-]
    air_density : float
        Current air density [kg/m³]. Derived: overwritten every step from altitude.
    parachute_area : float
        Canopy reference area [m²]
    body_area : float
        Jumper cross-sectional area [m²]
    wind_speed : float
        Signed wind speed along +x [m/s]
    parachute_deployed : bool
        Deployment latch. True once the canopy is open.
    rope_length : float
        Suspension line length [m]. Only used for the torque readout.
    body_volume : float
        Jumper volume for air buoyancy [m³]
    """
    __slots__ = tuple(PARAMETER_FIELDS.values())

    def __init__(self, **overrides: Any) -> None:
        for public_name, value in DEFAULT_PARAMETERS.items():
            setattr(self, PARAMETER_FIELDS[public_name], value)
        for name, value in overrides.items():
            attr = resolve_parameter(name)
            if attr is None:
                raise ValueError(
                    f"Unknown parameter '{name}'. Valid options: {list(PARAMETER_FIELDS)}"
                )
            if attr == "parachute_deployed":
                value = bool(value)
            setattr(self, attr, value)

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any] | None) -> SimulationParameters:
        """Build parameters from defaults plus an optional mapping of overrides."""
        return cls(**dict(mapping or {}))

    @property
    def deployed(self) -> bool:
        return bool(self.parachute_deployed)

    def as_dict(self) -> dict[str, Any]:
        """Snapshot keyed by public parameter name."""
        return {public: getattr(self, attr) for public, attr in PARAMETER_FIELDS.items()}

    def copy(self) -> SimulationParameters:
        return SimulationParameters(**self.as_dict())

    def __repr__(self) -> str:
        body = ", ".join(f"{k}={v!r}" for k, v in self.as_dict().items())
        return f"SimulationParameters({body})"


class ForceRecord:
    """
    Most recently computed force vectors, keyed by force name.

    Telemetry only: the record never feeds back into the next step, with
    the single exception that tension reads the drag computed earlier in
    the same step.
    """
    __slots__ = FORCE_NAMES

    def __init__(self) -> None:
        for name in FORCE_NAMES:
            setattr(self, name, np.zeros(3, dtype=np.float64))

    def __getitem__(self, name: str) -> NDArray[np.float64]:
        if name not in FORCE_NAMES:
            raise KeyError(name)
        return getattr(self, name)

    def __setitem__(self, name: str, value: NDArray[np.float64]) -> None:
        if name not in FORCE_NAMES:
            raise KeyError(name)
        getattr(self, name)[:] = value

    def __iter__(self) -> Iterator[str]:
        return iter(FORCE_NAMES)

    def items(self) -> Iterator[tuple[str, NDArray[np.float64]]]:
        for name in FORCE_NAMES:
            yield name, getattr(self, name)

    def total(self) -> NDArray[np.float64]:
        """Unweighted vector sum of all recorded forces [N]."""
        out = np.zeros(3, dtype=np.float64)
        for _, f in self.items():
            out += f
        return out

    def magnitude(self, name: str) -> float:
        return float(np.linalg.norm(self[name]))

    def clear(self) -> None:
        for name in FORCE_NAMES:
            getattr(self, name)[:] = 0.0


class SimulationState:
    """
    Kinematic state of the jumper.

    State Variables
    ---------------
    - position : NDArray[np.float64]
        Position in world frame [m] (3,), y = altitude
    - velocity : NDArray[np.float64]
        Linear velocity [m/s] (3,)
    - acceleration : NDArray[np.float64]
        Acceleration from the last step [m/s²] (3,). Derived, not integrated.
    - angular_velocity : NDArray[np.float64]
        Always zero; kept for display collaborators [rad/s] (3,)
    - time : float
        Elapsed simulation time [s]
    - forces : ForceRecord
        Per-force vectors from the last step [N]
    """
    __slots__ = ("position", "velocity", "acceleration", "angular_velocity", "time", "forces")

    def __init__(self) -> None:
        self.position = np.array([0.0, INITIAL_ALTITUDE, 0.0], dtype=np.float64)
        self.velocity = np.zeros(3, dtype=np.float64)
        self.acceleration = np.zeros(3, dtype=np.float64)
        self.angular_velocity = np.zeros(3, dtype=np.float64)
        self.time = 0.0
        self.forces = ForceRecord()

    def reset(self) -> None:
        """Return to the exit condition in place (arrays keep their identity)."""
        self.position[:] = (0.0, INITIAL_ALTITUDE, 0.0)
        self.velocity[:] = 0.0
        self.acceleration[:] = 0.0
        self.angular_velocity[:] = 0.0
        self.time = 0.0
        self.forces.clear()

    @property
    def altitude(self) -> float:
        return float(self.position[1])

    @property
    def speed(self) -> float:
        return float(np.linalg.norm(self.velocity))
