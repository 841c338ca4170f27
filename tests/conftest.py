import os
import sys

import numpy as np
import pytest

# Get the path to the project root (one level up from 'tests')
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
src_path = os.path.join(project_root, 'src')

# Add 'src' to sys.path
sys.path.insert(0, src_path)

from parasim.core.engine import PhysicsEngine  # noqa: E402


@pytest.fixture
def engine():
    """Default engine at the exit condition (1500 m, at rest)."""
    return PhysicsEngine()


@pytest.fixture
def falling_engine():
    """Engine at 1000 m descending at 50 m/s, canopy stowed."""
    e = PhysicsEngine()
    e.state.position[:] = (0.0, 1000.0, 0.0)
    e.state.velocity[:] = (0.0, -50.0, 0.0)
    return e


@pytest.fixture
def deployed_engine():
    """Engine at 1000 m with the canopy open, at rest."""
    e = PhysicsEngine()
    e.state.position[:] = (0.0, 1000.0, 0.0)
    e.parameters.parachute_deployed = True
    return e


def _state_snapshot(e: PhysicsEngine) -> dict:
    """Comparable copy of everything reset() is expected to restore."""
    s = e.state
    return {
        "position": s.position.copy(),
        "velocity": s.velocity.copy(),
        "acceleration": s.acceleration.copy(),
        "angular_velocity": s.angular_velocity.copy(),
        "time": s.time,
        "forces": {name: vec.copy() for name, vec in s.forces.items()},
        "parameters": e.parameters.as_dict(),
    }


def _assert_snapshots_equal(a: dict, b: dict) -> None:
    for key in ("position", "velocity", "acceleration", "angular_velocity"):
        assert np.allclose(a[key], b[key]), key
    assert a["time"] == pytest.approx(b["time"])
    for name in a["forces"]:
        assert np.allclose(a["forces"][name], b["forces"][name]), name
    assert a["parameters"] == b["parameters"]


@pytest.fixture
def snapshot():
    return _state_snapshot


@pytest.fixture
def assert_same_state():
    return _assert_snapshots_equal
