"""
Physics engine for the parachute jump.

Owns the jump parameters and the kinematic state, and advances them with an
explicit force-accumulation step. Rendering, controls and persistence live
outside and talk to the engine only through its public methods and the two
callback slots.
"""
from __future__ import annotations

import math
from collections.abc import Callable, Mapping
from dataclasses import asdict, dataclass, field
from typing import Any

import numpy as np
from numpy.typing import NDArray

from parasim.config import (
    AIR_DENSITY_SEA_LEVEL,
    DEPLOYMENT_SHOCK_FRACTION,
    MAX_DEPLOYMENT_SHOCK,
    MAX_TIME_STEP,
    MIN_DEPLOY_ALTITUDE,
    get_preset,
)
from parasim.dynamics.forces import (
    EPSILON_VELOCITY,
    FORCE_MODELS,
    drag_configuration,
    line_torque,
)
from parasim.dynamics.state import SimulationParameters, SimulationState, resolve_parameter
from parasim.models.atmosphere import air_density, mach_number, reynolds_number
from parasim.utils.validation import parse_parameter_value

GroundHitCallback = Callable[[float], None]
ParameterChangeCallback = Callable[[str, Any], None]


@dataclass(frozen=True)
class PhysicsData:
    """
    Read-only snapshot for display collaborators.

    Attributes
    ----------
    velocity : float
        Speed magnitude [m/s]
    altitude : float
        Height above ground, floored at 0 [m]
    acceleration : float
        Acceleration magnitude from the last step [m/s²]
    drag_force, gravity_force, wind_force : float
        Force magnitudes from the last step [N]
    terminal_velocity : float
        Analytical terminal velocity for the current configuration [m/s]
    kinetic_energy : float
        0.5·m·v² [J]
    position : NDArray[np.float64]
        Copy of the position vector [m]
    parachute_deployed : bool
    time : float
        Elapsed simulation time [s]
    """
    velocity: float
    altitude: float
    acceleration: float
    drag_force: float
    gravity_force: float
    wind_force: float
    terminal_velocity: float
    kinetic_energy: float
    position: NDArray[np.float64] = field(repr=False)
    parachute_deployed: bool
    time: float

    def as_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["position"] = self.position.copy()
        return data


class PhysicsEngine:
    """
    Point-mass parachute jump simulator.

    Parameters
    ----------
    parameters : Mapping[str, Any] | None
        Overrides applied on top of DEFAULT_PARAMETERS. Keys may use the
        public camelCase names ("parachuteArea") or attribute names
        ("parachute_area").

    Attributes
    ----------
    parameters : SimulationParameters
        Mutable configuration
    state : SimulationState
        Mutable kinematic state

    Notes
    -----
    **Step order** (see update):
    forces -> acceleration -> velocity -> position -> time -> ground -> density.

    **Ground contact** fires the ground-hit callback on *every* step that ends
    at or below y = 0, not only on first contact. Consumers that want a single
    landing event must latch it themselves (JumpSimulation does).

    **Threading**: no internal locking. update and update_parameter
    read-modify-write shared arrays and must be serialized by the caller.

    Examples
    --------
    >>> engine = PhysicsEngine()
    >>> engine.on_ground_hit(lambda speed: print(f"landed at {speed:.1f} m/s"))
    >>> for _ in range(600):
    ...     engine.update(1 / 60)
    >>> opened = engine.deploy_parachute()
    """

    def __init__(self, parameters: Mapping[str, Any] | None = None) -> None:
        self.parameters = SimulationParameters.from_mapping(parameters)
        self.state = SimulationState()
        self._on_ground_hit: GroundHitCallback | None = None
        self._on_parameter_change: ParameterChangeCallback | None = None

    # --- Configuration ---

    def update_parameter(self, name: str, value: Any) -> None:
        """
        Overwrite one configuration field.

        Unknown names are ignored. The value is parsed to float, and the
        deployment flag is stored back as bool. Non-numeric or non-finite
        values are rejected with a RuntimeWarning and leave the parameter
        unchanged. On success the parameter-changed callback
        receives ``(name, value)`` with the raw value.
        """
        attr = resolve_parameter(name)
        if attr is None:
            return

        parsed = parse_parameter_value(value, name)
        if parsed is None:
            return

        if attr == "parachute_deployed":
            setattr(self.parameters, attr, bool(parsed))
        else:
            setattr(self.parameters, attr, parsed)
        if self._on_parameter_change is not None:
            self._on_parameter_change(name, value)

    def apply_preset(self, name: str) -> None:
        """
        Push every value of a named preset through update_parameter.

        Raises
        ------
        KeyError
            If the preset does not exist.
        """
        for param, value in get_preset(name).items():
            self.update_parameter(param, value)
        print(f"[PhysicsEngine] Applied preset '{name}'")

    # --- Event callbacks ---

    def on_ground_hit(self, callback: GroundHitCallback | None) -> None:
        """Register the ground-hit handler, replacing any previous one."""
        self._on_ground_hit = callback

    def on_parameter_change(self, callback: ParameterChangeCallback | None) -> None:
        """Register the parameter-changed handler, replacing any previous one."""
        self._on_parameter_change = callback

    # --- Integration ---

    def compute_forces(self) -> NDArray[np.float64]:
        """
        Evaluate all force models, record each one, and return their sum [N].
        """
        forces = self.state.forces
        for model in FORCE_MODELS:
            forces[model.name] = model.compute(self.parameters, self.state)
        return forces.total()

    def update(self, delta_time: float) -> None:
        """
        Advance the simulation by one step.

        Parameters
        ----------
        delta_time : float
            Frame time [s]. Clamped to [0, MAX_TIME_STEP]; larger values are
            silently truncated. NaN and infinite values count as 0.

        Notes
        -----
        Position uses the post-update velocity together with the same-step
        acceleration:
            v' = v + a·dt
            p' = p + v'·dt + 0.5·a·dt²
        """
        dt = float(delta_time)
        if not math.isfinite(dt):
            dt = 0.0
        dt = min(max(dt, 0.0), MAX_TIME_STEP)
        p = self.parameters
        s = self.state

        total = self.compute_forces()
        s.acceleration[:] = total / p.mass
        s.velocity += s.acceleration * dt
        s.position += s.velocity * dt + 0.5 * s.acceleration * dt * dt
        s.time += dt

        if s.position[1] <= 0.0:
            s.position[1] = 0.0
            s.velocity[1] = max(0.0, s.velocity[1])
            if self._on_ground_hit is not None:
                self._on_ground_hit(s.speed)

        p.air_density = air_density(s.position[1])

    # --- Actions ---

    def deploy_parachute(self) -> bool:
        """
        Open the canopy.

        Succeeds only if the canopy is still stowed and altitude is above
        MIN_DEPLOY_ALTITUDE. On success the speed drops by
        min(0.3·speed, 20 m/s) against the direction of motion (opening shock).

        Returns
        -------
        bool
            True if the canopy was opened, False if the call had no effect.
        """
        s = self.state
        if self.parameters.deployed or s.position[1] <= MIN_DEPLOY_ALTITUDE:
            return False

        self.parameters.parachute_deployed = True

        speed = s.speed
        shock = min(speed * DEPLOYMENT_SHOCK_FRACTION, MAX_DEPLOYMENT_SHOCK)
        if speed > EPSILON_VELOCITY:
            s.velocity -= (s.velocity / speed) * shock

        print(
            f"[PhysicsEngine] Parachute deployed at t={s.time:.3f}s, "
            f"alt={s.altitude:.1f}m, vel={speed:.1f}->{s.speed:.1f}m/s"
        )
        return True

    def reset(self) -> None:
        """
        Return to the exit condition.

        Position (0, 1500, 0), zero velocity, acceleration, forces and time,
        canopy stowed, sea-level air density. Other parameters are kept.
        """
        self.state.reset()
        self.parameters.parachute_deployed = False
        self.parameters.air_density = AIR_DENSITY_SEA_LEVEL

    # --- Derived quantities (no mutation) ---

    def terminal_velocity(self) -> float:
        """Vt = sqrt(2·m·g / (ρ·Cd·A)) for the current deployment state [m/s]."""
        p = self.parameters
        area, cd = drag_configuration(p)
        return float(np.sqrt(2.0 * p.mass * p.gravity / (p.air_density * cd * area)))

    def kinetic_energy(self) -> float:
        """KE = 0.5·m·v² [J]."""
        speed = self.state.speed
        return 0.5 * self.parameters.mass * speed * speed

    def reynolds_number(self) -> float:
        return reynolds_number(self.state.speed, self.parameters.body_area)

    def mach_number(self) -> float:
        return mach_number(self.state.speed)

    def torque(self) -> NDArray[np.float64]:
        """Decorative line torque readout [N·m]; see line_torque."""
        return line_torque(self.parameters, self.state)

    def get_physics_data(self) -> PhysicsData:
        """Snapshot of the current state for display."""
        s = self.state
        return PhysicsData(
            velocity=s.speed,
            altitude=max(0.0, s.altitude),
            acceleration=float(np.linalg.norm(s.acceleration)),
            drag_force=s.forces.magnitude("drag"),
            gravity_force=s.forces.magnitude("gravity"),
            wind_force=s.forces.magnitude("wind"),
            terminal_velocity=self.terminal_velocity(),
            kinetic_energy=self.kinetic_energy(),
            position=s.position.copy(),
            parachute_deployed=self.parameters.deployed,
            time=s.time,
        )
