"""
Verification Test Suite for parasim.

These tests compare the stepped engine against analytical solutions and
against an adaptive-step reference integration of the same force models.

Test Categories:
- Kinematic: Vacuum free fall, constant horizontal velocity, step-size convergence
- Aerodynamic: Terminal velocity, drag equilibrium, canopy force balance
- Reference: Engine vs scipy solve_ivp descent
"""

import numpy as np
import pytest


# -----------------------------------------------------------------------------
# Test Configuration
# -----------------------------------------------------------------------------

# Tolerances for analytical comparisons
POSITION_TOLERANCE = 1e-9  # meters, closed-form Euler sums
ACCELERATION_TOLERANCE = 1e-9  # m/s²
REFERENCE_TOLERANCE = 0.02  # relative, engine vs adaptive integration
TERMINAL_EXCESS_TOLERANCE = 0.6  # m/s, speed above the local v_t while density rises


@pytest.fixture
def tol():
    """Tolerances by quantity."""
    return {
        "position": POSITION_TOLERANCE,
        "acceleration": ACCELERATION_TOLERANCE,
        "reference": REFERENCE_TOLERANCE,
        "terminal_excess": TERMINAL_EXCESS_TOLERANCE,
    }


# -----------------------------------------------------------------------------
# Common Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture
def vacuum():
    """Parameters with every aerodynamic force switched off."""
    return {"bodyArea": 0.0, "bodyVolume": 0.0}


@pytest.fixture
def g():
    """Standard gravity magnitude."""
    return 9.81


@pytest.fixture
def dt():
    """Engine frame step."""
    return 1.0 / 60.0


def euler_free_fall(y0: float, g: float, dt: float, n: int) -> tuple[float, float]:
    """
    Closed form of the engine's update after n steps of constant -g.

        v_n = -g·n·dt
        y_n = y0 - g·dt²·(n²/2 + n)
    """
    v = -g * n * dt
    y = y0 - g * dt * dt * (0.5 * n * n + n)
    return y, v


@pytest.fixture
def free_fall_closed_form():
    return euler_free_fall
