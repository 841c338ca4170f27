"""
Kinematic Verification Tests.

With every aerodynamic force switched off the engine reduces to constant
acceleration, so its output can be checked against closed forms:
- Vacuum free fall (exact Euler sums and first-order convergence)
- Constant horizontal velocity
"""

import numpy as np
import pytest

from parasim.core.engine import PhysicsEngine


class TestVacuumFreeFall:
    """
    Free fall under gravity only.

    Analytical solution:
        y(t) = y0 - ½gt²
        v(t) = -gt

    The engine's semi-implicit update adds a first-order position error
    of g·dt·t.
    """

    def test_matches_euler_closed_form(self, vacuum, g, dt, tol, free_fall_closed_form):
        engine = PhysicsEngine(vacuum)
        n = 600
        for _ in range(n):
            engine.update(dt)

        y_expected, v_expected = free_fall_closed_form(1500.0, g, dt, n)
        assert engine.state.position[1] == pytest.approx(y_expected, abs=tol["position"])
        assert engine.state.velocity[1] == pytest.approx(v_expected, abs=tol["position"])
        assert np.allclose(engine.state.acceleration, [0.0, -g, 0.0])

    def test_velocity_exact(self, vacuum, g, dt):
        engine = PhysicsEngine(vacuum)
        for _ in range(300):
            engine.update(dt)
        t = engine.state.time
        assert engine.state.velocity[1] == pytest.approx(-g * t, rel=1e-10)

    def test_first_order_position_error(self, vacuum, g):
        """Halving the step halves the position error at fixed time."""
        errors = []
        for dt, n in ((1.0 / 60.0, 300), (1.0 / 120.0, 600)):
            engine = PhysicsEngine(vacuum)
            for _ in range(n):
                engine.update(dt)
            t = n * dt
            y_exact = 1500.0 - 0.5 * g * t * t
            errors.append(abs(engine.state.position[1] - y_exact))

            # Leading error term is g·dt·t
            assert errors[-1] == pytest.approx(g * dt * t, rel=1e-6)

        assert errors[0] / errors[1] == pytest.approx(2.0, rel=1e-6)

    def test_ground_reached_at_expected_time(self, vacuum, g, dt):
        engine = PhysicsEngine(vacuum)
        engine.state.position[1] = 100.0
        hits = []
        engine.on_ground_hit(hits.append)

        steps = 0
        while not hits:
            engine.update(dt)
            steps += 1

        t_exact = np.sqrt(2.0 * 100.0 / g)
        # Euler lands slightly early; within a handful of frames
        assert steps * dt <= t_exact + dt
        assert steps * dt == pytest.approx(t_exact, abs=5 * dt)
        assert engine.state.position[1] == 0.0


class TestConstantVelocity:

    def test_horizontal_velocity_preserved(self, vacuum, dt):
        engine = PhysicsEngine(vacuum)
        engine.state.velocity[:] = (3.0, 0.0, -2.0)
        for _ in range(120):
            engine.update(dt)

        t = engine.state.time
        assert engine.state.velocity[0] == pytest.approx(3.0)
        assert engine.state.velocity[2] == pytest.approx(-2.0)
        assert engine.state.position[0] == pytest.approx(3.0 * t)
        assert engine.state.position[2] == pytest.approx(-2.0 * t)
