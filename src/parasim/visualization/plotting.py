from __future__ import annotations
import os
from typing import Dict, Tuple, List, Iterable
import numpy as np
import pandas as pd
import matplotlib.pyplot as plt
from matplotlib.figure import Figure
from mpl_toolkits.mplot3d import Axes3D  # noqa: F401  (registers 3D projection)

from parasim.dynamics.state import FORCE_NAMES

FORCE_COLORS = {
    "gravity": "#5f6368",
    "drag": "#1a73e8",
    "buoyancy": "#34a853",
    "tension": "#fbbc05",
    "lift": "#a142f4",
    "wind": "#ea4335",
}


def _load_csv(filepath: str) -> Tuple[np.ndarray, Dict[str, np.ndarray], List[str]]:
    """
    Read a TelemetryLogger CSV into per-column arrays.

    Returns
    -------
    t : (N,) array
        Frame times [s]
    cols : dict[str, np.ndarray]
        Every column by header name, including "t"
    headers : list[str]
        Header order as written by the logger
    """
    df = pd.read_csv(filepath)
    headers = [str(c) for c in df.columns]
    if not headers or headers[0] != "t":
        raise ValueError(f"Telemetry must start with the time column 't', got {headers[:1]}")
    cols = {name: df[name].to_numpy(dtype=float) for name in headers}
    return cols["t"], cols, headers


def _get_components(cols: Dict[str, np.ndarray], names: Iterable[str]) -> List[np.ndarray]:
    missing = [name for name in names if name not in cols]
    if missing:
        raise KeyError(f"Columns {missing} not found in telemetry.")
    return [cols[name] for name in names]


def _vector(cols: Dict[str, np.ndarray], prefix: str) -> np.ndarray:
    """Stack <prefix>_x/_y/_z columns into an (N,3) array."""
    return np.column_stack(_get_components(cols, [f"{prefix}_{c}" for c in "xyz"]))


def _deployment_time(t: np.ndarray, cols: Dict[str, np.ndarray]) -> float | None:
    if "deployed" not in cols:
        return None
    idx = np.flatnonzero(cols["deployed"] > 0.5)
    return float(t[idx[0]]) if idx.size else None


def _mark_deployment(ax, t_deploy: float | None) -> None:
    if t_deploy is not None:
        ax.axvline(t_deploy, color="#ea4335", ls="--", lw=1.0, alpha=0.7, label="deploy")


def _finish(fig: Figure, save_path: str | None, show: bool) -> Figure:
    fig.tight_layout()
    if save_path:
        os.makedirs(os.path.dirname(save_path) or ".", exist_ok=True)
        fig.savefig(save_path, dpi=180, bbox_inches="tight")
    if show:
        plt.show()
    return fig


def plot_trajectory_3d(
    csv_path: str,
    save_path: str | None = None,
    show: bool = True,
) -> Figure:
    """
    Plot the 3D jump path and altitude y(t).

    The engine frame is y-up; the 3D axes show (x, z) horizontally and
    altitude vertically.

    Parameters
    ----------
    csv_path : str
        Path to logger CSV.
    save_path : str | None
        If given, save the figure to this path (png/svg).
    show : bool
        Whether to call plt.show().

    Returns
    -------
    fig : Figure
    """
    t, cols, _ = _load_csv(csv_path)
    px, py, pz = _get_components(cols, ["p_x", "p_y", "p_z"])

    fig = plt.figure(figsize=(10, 6))
    gs = fig.add_gridspec(2, 2, height_ratios=[2.0, 1.0])
    ax3d = fig.add_subplot(gs[0, :], projection="3d")
    axy = fig.add_subplot(gs[1, :])

    ax3d.plot(px, pz, py, lw=2.0, color="#1a73e8")
    ax3d.scatter(px[0], pz[0], py[0], color="#34a853", s=40, label="exit")
    ax3d.scatter(px[-1], pz[-1], py[-1], color="#ea4335", s=40, label="end")
    ax3d.set_xlabel("x [m]"); ax3d.set_ylabel("z [m]"); ax3d.set_zlabel("altitude [m]")
    ax3d.set_title("Jump trajectory")
    ax3d.legend(loc="best")

    axy.plot(t, py, color="#1a73e8", lw=2)
    _mark_deployment(axy, _deployment_time(t, cols))
    axy.set_xlabel("t [s]"); axy.set_ylabel("altitude [m]")
    axy.grid(True, alpha=0.3)
    axy.set_title("Altitude vs time")

    return _finish(fig, save_path, show)


def plot_velocity_and_acceleration(
    csv_path: str,
    save_path: str | None = None,
    show: bool = True,
    magnitude: bool = True,
    terminal_velocity: float | None = None,
) -> Figure:
    """
    Plot velocity and acceleration components and magnitudes.

    Acceleration is read from the logged per-step values rather than
    differentiated.

    Parameters
    ----------
    csv_path : str
    save_path : str | None
    show : bool
    magnitude : bool
        Also draw |v| and |a|.
    terminal_velocity : float | None
        If given, draw a reference line at -terminal_velocity on the v_y axis.

    Returns
    -------
    fig : Figure
    """
    t, cols, _ = _load_csv(csv_path)
    V = _vector(cols, "v")
    A = _vector(cols, "a")
    t_deploy = _deployment_time(t, cols)

    fig, axes = plt.subplots(2, 1, figsize=(10, 7), sharex=True)

    for k, (label, color) in enumerate(zip("xyz", ("#1a73e8", "#34a853", "#fbbc05"))):
        axes[0].plot(t, V[:, k], label=f"v_{label}", color=color)
        axes[1].plot(t, A[:, k], label=f"a_{label}", color=color)
    if magnitude:
        axes[0].plot(t, np.linalg.norm(V, axis=1), label="|v|", color="#ea4335", lw=2.0, alpha=0.8)
        axes[1].plot(t, np.linalg.norm(A, axis=1), label="|a|", color="#ea4335", lw=2.0, alpha=0.8)
    if terminal_velocity is not None:
        axes[0].axhline(-terminal_velocity, color="#5f6368", ls=":", label="-v_t")

    for ax in axes:
        _mark_deployment(ax, t_deploy)
        ax.grid(True, alpha=0.3)
        ax.legend(loc="best")

    axes[0].set_ylabel("velocity [m/s]")
    axes[0].set_title("Velocity")
    axes[1].set_xlabel("t [s]"); axes[1].set_ylabel("accel [m/s²]")
    axes[1].set_title("Acceleration")

    return _finish(fig, save_path, show)


def plot_force_breakdown(
    csv_path: str,
    save_path: str | None = None,
    show: bool = True,
    forces: Iterable[str] = FORCE_NAMES,
) -> Figure:
    """
    Plot the magnitude of each force contribution and the resultant.

    Parameters
    ----------
    csv_path : str
    save_path : str | None
    show : bool
    forces : Iterable[str]
        Subset of force names to draw.

    Returns
    -------
    fig : Figure
    """
    t, cols, _ = _load_csv(csv_path)

    fig, ax = plt.subplots(1, 1, figsize=(10, 4))
    total = np.zeros((t.size, 3))
    for name in FORCE_NAMES:
        F = _vector(cols, name)
        total += F
        if name in forces:
            ax.plot(t, np.linalg.norm(F, axis=1), label=f"|{name}|", color=FORCE_COLORS[name])
    ax.plot(t, np.linalg.norm(total, axis=1), label="|F_total|", color="black", lw=2.0, alpha=0.6)
    _mark_deployment(ax, _deployment_time(t, cols))

    ax.set_xlabel("t [s]"); ax.set_ylabel("force [N]")
    ax.grid(True, alpha=0.3)
    ax.legend(loc="best")
    ax.set_title("Force breakdown")

    return _finish(fig, save_path, show)
