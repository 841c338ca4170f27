"""
Reference Solution Verification Tests.

The stepped engine is compared with an adaptive scipy integration of the
same force models:
- Touchdown time and velocity history in free fall
- First-order convergence as the frame step shrinks
"""

import numpy as np
import pytest

from parasim.analysis import reference_descent
from parasim.core.engine import PhysicsEngine
from parasim.dynamics.state import SimulationParameters


def _step(engine: PhysicsEngine, dt: float, n: int) -> None:
    for _ in range(n):
        engine.update(dt)


@pytest.fixture(scope="module")
def free_fall_reference():
    return reference_descent(altitude=1500.0, t_end=120.0)


class TestFreeFallReference:

    def test_reference_reaches_ground(self, free_fall_reference):
        sol = free_fall_reference
        assert sol.success
        assert sol.status == 1  # terminated by touchdown event
        assert len(sol.t_events[0]) == 1
        assert sol.y[1, -1] == pytest.approx(0.0, abs=1e-6)

    def test_touchdown_time(self, free_fall_reference, tol):
        engine = PhysicsEngine()
        hits = []
        engine.on_ground_hit(hits.append)
        while not hits:
            engine.update(1.0 / 60.0)

        t_ref = free_fall_reference.t_events[0][0]
        assert engine.state.time == pytest.approx(t_ref, rel=tol["reference"])

    def test_velocity_history(self, free_fall_reference, tol):
        engine = PhysicsEngine()
        for _ in range(5):
            _step(engine, 1.0 / 60.0, 300)
            v_ref = free_fall_reference.sol(engine.state.time)[3:6]
            assert engine.state.velocity[1] == pytest.approx(v_ref[1], rel=tol["reference"])

    def test_first_order_convergence(self, free_fall_reference):
        """Refining the step four times cuts the velocity error by more than half."""
        errors = []
        for dt, n in ((1.0 / 60.0, 300), (1.0 / 240.0, 1200)):
            engine = PhysicsEngine()
            _step(engine, dt, n)
            v_ref = free_fall_reference.sol(engine.state.time)[4]
            errors.append(abs(engine.state.velocity[1] - v_ref))

        assert errors[1] < 0.5 * errors[0]


class TestReferenceInterface:

    def test_no_touchdown_before_t_end(self):
        sol = reference_descent(altitude=1500.0, t_end=5.0)
        assert sol.status == 0
        assert len(sol.t_events[0]) == 0
        assert sol.t[-1] == pytest.approx(5.0)

    def test_initial_velocity(self):
        sol = reference_descent(altitude=500.0, velocity=np.array([0.0, -50.0, 0.0]), t_end=1e-3)
        assert np.allclose(sol.y[3:6, 0], [0.0, -50.0, 0.0])
        assert sol.y[1, 0] == 500.0

    def test_parameters_not_mutated(self):
        params = SimulationParameters(mass=90.0)
        reference_descent(params, altitude=200.0, t_end=2.0)
        assert params.air_density == 1.225
        assert params.mass == 90.0

    def test_heavier_jumper_lands_sooner(self):
        light = reference_descent({"mass": 60.0}, altitude=500.0, t_end=120.0)
        heavy = reference_descent({"mass": 120.0}, altitude=500.0, t_end=120.0)
        assert heavy.t_events[0][0] < light.t_events[0][0]

    def test_matches_engine_under_canopy(self, tol):
        """Open canopy from a stable descent: both land at the same time."""
        v0 = np.array([0.0, -4.5, 0.0])
        sol = reference_descent(
            {"parachuteDeployed": True}, altitude=100.0, velocity=v0, t_end=120.0, max_step=0.1
        )
        assert sol.status == 1

        engine = PhysicsEngine({"parachuteDeployed": True})
        engine.state.position[1] = 100.0
        engine.state.velocity[:] = v0
        hits = []
        engine.on_ground_hit(hits.append)
        while not hits:
            engine.update(1.0 / 60.0)

        assert engine.state.time == pytest.approx(sol.t_events[0][0], rel=tol["reference"])
