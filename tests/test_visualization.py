"""
Tests for the visualization module.

Plots are generated from a real telemetry log of a short canopy jump.
"""
import matplotlib
matplotlib.use('Agg')  # Non-interactive backend for testing
import matplotlib.pyplot as plt

import numpy as np
import pytest
from matplotlib.figure import Figure

from parasim.core.engine import PhysicsEngine
from parasim.logger import TelemetryLogger
from parasim.visualization import plotting


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def telemetry_csv(tmp_path):
    """Log 6 s of a jump that opens the canopy after 3 s."""
    fn = tmp_path / "telemetry.csv"
    engine = PhysicsEngine({"windSpeed": 4.0})
    with TelemetryLogger(fn) as logger:
        logger.log(engine)
        for i in range(360):
            if i == 180:
                engine.deploy_parachute()
            engine.update(1.0 / 60.0)
            logger.log(engine)
    return fn


@pytest.fixture(autouse=True)
def close_figures():
    yield
    plt.close("all")


# =============================================================================
# Loading
# =============================================================================

def test_load_csv(telemetry_csv):
    t, cols, headers = plotting._load_csv(str(telemetry_csv))
    assert headers[0] == "t"
    assert t.shape == (361,)
    assert cols["p_y"][0] == 1500.0


def test_load_csv_requires_time_column(tmp_path):
    fn = tmp_path / "bad.csv"
    fn.write_text("x,p_y\n0.0,1.0\n1.0,2.0\n")
    with pytest.raises(ValueError, match="time"):
        plotting._load_csv(str(fn))


def test_missing_column(telemetry_csv):
    _, cols, _ = plotting._load_csv(str(telemetry_csv))
    with pytest.raises(KeyError, match="not found"):
        plotting._get_components(cols, ["q_x"])


def test_deployment_time(telemetry_csv):
    t, cols, _ = plotting._load_csv(str(telemetry_csv))
    assert plotting._deployment_time(t, cols) == pytest.approx(3.0, abs=0.05)

    cols.pop("deployed")
    assert plotting._deployment_time(t, cols) is None


# =============================================================================
# Plots
# =============================================================================

def test_plot_trajectory_3d(telemetry_csv, tmp_path):
    out = tmp_path / "plots" / "trajectory.png"
    fig = plotting.plot_trajectory_3d(str(telemetry_csv), save_path=str(out), show=False)
    assert isinstance(fig, Figure)
    assert out.exists()
    assert len(fig.axes) == 2


def test_plot_velocity_and_acceleration(telemetry_csv, tmp_path):
    out = tmp_path / "kin.png"
    fig = plotting.plot_velocity_and_acceleration(
        str(telemetry_csv), save_path=str(out), show=False, terminal_velocity=5.0
    )
    assert out.exists()
    labels = [line.get_label() for line in fig.axes[0].get_lines()]
    assert {"v_x", "v_y", "v_z", "|v|", "-v_t", "deploy"} <= set(labels)


def test_plot_velocity_without_magnitude(telemetry_csv):
    fig = plotting.plot_velocity_and_acceleration(str(telemetry_csv), show=False, magnitude=False)
    labels = [line.get_label() for line in fig.axes[0].get_lines()]
    assert "|v|" not in labels


def test_plot_force_breakdown_subset(telemetry_csv):
    fig = plotting.plot_force_breakdown(str(telemetry_csv), show=False, forces=["drag", "wind"])
    labels = [line.get_label() for line in fig.axes[0].get_lines()]
    assert "|drag|" in labels
    assert "|wind|" in labels
    assert "|gravity|" not in labels
    assert "|F_total|" in labels


def test_force_total_matches_acceleration(telemetry_csv):
    _, cols, _ = plotting._load_csv(str(telemetry_csv))
    total = sum(plotting._vector(cols, name) for name in ("gravity", "drag", "buoyancy", "tension", "lift", "wind"))
    accel = plotting._vector(cols, "a")
    assert np.allclose(total[1:], accel[1:] * 80.0, rtol=1e-6, atol=1e-6)
