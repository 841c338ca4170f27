"""
Force models for the point-mass parachutist.

Each force class follows the Force protocol: ``compute(params, state)``
returns the force vector in world frame without mutating anything. The
engine evaluates them in FORCE_MODELS order and records the results.

World frame is y-up. Physical units:
- Forces: Newtons [N]
- Velocities: meters per second [m/s]
- Areas: square meters [m²]
- Densities: kilograms per cubic meter [kg/m³]
"""
from __future__ import annotations

from typing import Protocol

import numpy as np
from numpy.typing import NDArray

from parasim.config import (
    LIFT_COEFFICIENT,
    LIFT_DIRECTION_SCALE,
    LIFT_OSCILLATION_RATE,
    UNDEPLOYED_DRAG_COEFFICIENT,
)

from .state import SimulationParameters, SimulationState

EPSILON_VELOCITY = 1e-12  # Below this speed the velocity direction is undefined

UP = np.array([0.0, 1.0, 0.0], dtype=np.float64)


def zero_vector() -> NDArray[np.float64]:
    return np.zeros(3, dtype=np.float64)


def drag_configuration(params: SimulationParameters) -> tuple[float, float]:
    """
    Reference area and drag coefficient for the current deployment state.

    Returns
    -------
    tuple[float, float]
        (area [m²], Cd [-]). Canopy values when deployed, body values otherwise.
    """
    if params.deployed:
        return float(params.parachute_area), float(params.drag_coefficient)
    return float(params.body_area), UNDEPLOYED_DRAG_COEFFICIENT


class Force(Protocol):
    """Protocol for force contributions."""
    name: str

    def compute(self, params: SimulationParameters, state: SimulationState) -> NDArray[np.float64]:
        """
        Evaluate the force for the current parameters and state.

        Parameters
        ----------
        params : SimulationParameters
            Current configuration
        state : SimulationState
            Current kinematic state. ``state.forces`` holds forces already
            computed earlier in the same step.
        """
        ...


class Gravity:
    """
    Weight of the jumper: F = (0, -m·g, 0).
    """
    name = "gravity"

    def compute(self, params: SimulationParameters, state: SimulationState) -> NDArray[np.float64]:
        return np.array([0.0, -params.mass * params.gravity, 0.0], dtype=np.float64)


class Drag:
    """
    Quadratic aerodynamic drag opposing the velocity.

    F = -0.5 · Cd · ρ · A · |v|² · v̂

    Area and Cd switch between body and canopy values on deployment
    (see drag_configuration). Zero velocity yields the zero vector.
    """
    name = "drag"

    def compute(self, params: SimulationParameters, state: SimulationState) -> NDArray[np.float64]:
        v = state.velocity
        speed = np.linalg.norm(v)
        if speed < EPSILON_VELOCITY:
            return zero_vector()

        area, cd = drag_configuration(params)
        magnitude = 0.5 * cd * params.air_density * area * speed * speed
        return -(v / speed) * magnitude


class Buoyancy:
    """
    Archimedes force of the displaced air: F = (0, V·ρ·g, 0).

    Always upward, independent of deployment.
    """
    name = "buoyancy"

    def compute(self, params: SimulationParameters, state: SimulationState) -> NDArray[np.float64]:
        return UP * (params.body_volume * params.air_density * params.gravity)


class Tension:
    """
    Suspension line tension.

    Once the canopy is open the lines carry whatever part of the weight the
    drag does not balance: T = max(0, m·g - |F_drag|), acting straight up.
    Reads the drag computed earlier in the same step, so it must be
    evaluated after Drag.
    """
    name = "tension"

    def compute(self, params: SimulationParameters, state: SimulationState) -> NDArray[np.float64]:
        if not params.deployed:
            return zero_vector()

        weight = params.mass * params.gravity
        drag = state.forces.magnitude("drag")
        return UP * max(0.0, weight - drag)


class Lift:
    """
    Horizontal canopy lift placeholder.

    L = 0.1 · ρ · A_canopy · |v|²
    F = 0.1 · L · (sin(0.5·t), 0, cos(0.5·t))

    The direction rotates with simulation time and ignores the velocity
    heading. This is not an aerodynamic lift model; it gives the canopy a
    slow horizontal drift for display.
    """
    name = "lift"

    def compute(self, params: SimulationParameters, state: SimulationState) -> NDArray[np.float64]:
        if not params.deployed:
            return zero_vector()

        speed = np.linalg.norm(state.velocity)
        if speed < EPSILON_VELOCITY:
            return zero_vector()

        magnitude = LIFT_COEFFICIENT * params.air_density * params.parachute_area * speed * speed
        phase = state.time * LIFT_OSCILLATION_RATE
        return np.array(
            [np.sin(phase), 0.0, np.cos(phase)], dtype=np.float64
        ) * (magnitude * LIFT_DIRECTION_SCALE)


class Wind:
    """
    Horizontal wind load on the jumper's body.

    Wind blows along +x at ``wind_speed``. Relative wind is the wind minus
    the horizontal velocity; the force acts along it:
        F = 0.5 · ρ · A_body · |w_rel|² · ŵ_rel
    Zero relative wind yields the zero vector.
    """
    name = "wind"

    def compute(self, params: SimulationParameters, state: SimulationState) -> NDArray[np.float64]:
        v = state.velocity
        relative = np.array(
            [params.wind_speed - v[0], 0.0, -v[2]], dtype=np.float64
        )
        speed = np.linalg.norm(relative)
        if speed < EPSILON_VELOCITY:
            return zero_vector()

        magnitude = 0.5 * params.air_density * params.body_area * speed * speed
        return (relative / speed) * magnitude


# Evaluation order matters: Tension reads the drag of the same step.
FORCE_MODELS: tuple[Force, ...] = (
    Gravity(),
    Drag(),
    Buoyancy(),
    Tension(),
    Lift(),
    Wind(),
)


def line_torque(params: SimulationParameters, state: SimulationState) -> NDArray[np.float64]:
    """
    Torque of the canopy drag about the harness, τ = r × F_drag [N·m].

    r = (0, -rope_length, 0). Zero while the canopy is stowed. Readout only;
    no rotational dynamics are integrated.
    """
    if not params.deployed:
        return zero_vector()
    r = np.array([0.0, -float(params.rope_length), 0.0], dtype=np.float64)
    return np.cross(r, state.forces.drag)
