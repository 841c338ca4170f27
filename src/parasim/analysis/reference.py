"""
Continuous-time reference solution for verifying the stepped engine.

Integrates the same force models as PhysicsEngine with an adaptive scipy
integrator, with air density evaluated continuously from altitude. The
engine's fixed-step results should converge to this solution as the step
size shrinks.
"""
from __future__ import annotations

from typing import Any, Mapping

import numpy as np

from parasim.config import INITIAL_ALTITUDE
from parasim.dynamics.forces import FORCE_MODELS
from parasim.dynamics.state import SimulationParameters, SimulationState
from parasim.models.atmosphere import air_density


def reference_descent(
    parameters: Mapping[str, Any] | SimulationParameters | None = None,
    altitude: float = INITIAL_ALTITUDE,
    velocity: np.ndarray | None = None,
    t_end: float = 600.0,
    method: str = "RK45",
    rtol: float = 1e-8,
    atol: float = 1e-10,
    max_step: float = np.inf,
):
    """
    Integrate the jump from ``altitude`` until ground contact or ``t_end``.

    Parameters
    ----------
    parameters : Mapping | SimulationParameters | None
        Jump configuration. The deployment flag is held fixed for the whole
        integration.
    altitude : float
        Initial altitude [m]
    velocity : np.ndarray | None
        Initial velocity [m/s] (3,). Defaults to rest.
    t_end : float
        Final time if the ground is not reached [s]
    method, rtol, atol, max_step
        Passed through to scipy.integrate.solve_ivp

    Returns
    -------
    OdeResult
        scipy result. ``y`` rows are [p_x, p_y, p_z, v_x, v_y, v_z];
        ``t_events[0]`` holds the touchdown time if reached.
    """
    try:
        from scipy.integrate import solve_ivp
    except Exception as e:
        raise ImportError("SciPy is required for reference_descent. Install scipy>=1.8.") from e

    if isinstance(parameters, SimulationParameters):
        params = parameters.copy()
    else:
        params = SimulationParameters.from_mapping(parameters)
    state = SimulationState()

    y0 = np.zeros(6)
    y0[1] = float(altitude)
    if velocity is not None:
        y0[3:6] = np.asarray(velocity, dtype=np.float64)

    def rhs(t: float, y: np.ndarray) -> np.ndarray:
        state.position[:] = y[0:3]
        state.velocity[:] = y[3:6]
        state.time = float(t)
        params.air_density = air_density(max(0.0, y[1]))

        for model in FORCE_MODELS:
            state.forces[model.name] = model.compute(params, state)

        ydot = np.empty(6)
        ydot[0:3] = y[3:6]
        ydot[3:6] = state.forces.total() / params.mass
        return ydot

    def touchdown_event(t: float, y: np.ndarray) -> float:
        return float(y[1])
    touchdown_event.terminal = True   # type: ignore[attr-defined]
    touchdown_event.direction = -1.0  # type: ignore[attr-defined]

    return solve_ivp(
        rhs,
        t_span=(0.0, float(t_end)),
        y0=y0,
        method=method,
        rtol=rtol,
        atol=atol,
        max_step=max_step,
        events=touchdown_event,
        dense_output=True,
    )
