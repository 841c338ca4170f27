"""
Headless jump driver.

Steps a PhysicsEngine at a fixed frame rate the way a render loop would,
latches the first ground contact into a LandingReport, polls snapshots for
display, and optionally logs telemetry with automatic output organization.
"""
from __future__ import annotations

from datetime import datetime
from pathlib import Path

from parasim.core.engine import PhysicsData, PhysicsEngine
from parasim.landing import LandingReport, classify_landing
from parasim.logger import TelemetryLogger
from parasim.utils.io import save_simulation_history
from parasim.utils.validation import validate_frame_time, validate_non_negative, validate_positive

# Default output directory
DEFAULT_OUTPUT_DIR = Path("output")


class JumpSimulation:
    """
    Drives a PhysicsEngine from exit to touchdown.

    Parameters
    ----------
    engine : PhysicsEngine | None
        Engine to drive. A default engine is created if None.
    frame_rate : float
        Frames per second of the virtual render loop [Hz]
    deploy_altitude : float | None
        Open the canopy automatically once altitude drops to this value [m].
        None leaves deployment to the caller.
    poll_interval : float
        Interval between snapshots stored in ``history`` [s]. Defaults to
        10 Hz, decoupled from the frame rate.
    simulation_name : str | None
        Name for this run. Used to organize output files. If None, logging
        is disabled by default. Use enable_logging() to activate.
    output_dir : Path | str | None
        Base directory for all outputs. Defaults to "./output".
    auto_timestamp : bool
        Append timestamp to the output folder name to prevent overwrites.

    Attributes
    ----------
    engine : PhysicsEngine
    landing : LandingReport | None
        Report of the first ground contact, or None while airborne
    history : list[PhysicsData]
        Polled snapshots
    logger : TelemetryLogger | None
    output_path : Path | None

    Notes
    -----
    The engine signals ground contact on every step spent on the ground.
    The simulation latches the first signal; later ones are ignored until
    reset(). The ground-hit slot of the engine is owned by the simulation.

    Examples
    --------
    >>> sim = JumpSimulation(deploy_altitude=600.0)
    >>> report = sim.run(duration=600.0)
    >>> print(report.summary())
    """

    def __init__(
        self,
        engine: PhysicsEngine | None = None,
        frame_rate: float = 60.0,
        deploy_altitude: float | None = None,
        poll_interval: float = 0.1,
        simulation_name: str | None = None,
        output_dir: Path | str | None = None,
        auto_timestamp: bool = True,
    ) -> None:
        validate_positive(frame_rate, "frame_rate")
        validate_positive(poll_interval, "poll_interval")
        if deploy_altitude is not None:
            validate_non_negative(deploy_altitude, "deploy_altitude")

        self.engine = engine if engine is not None else PhysicsEngine()
        self.frame_rate = float(frame_rate)
        self.dt = 1.0 / self.frame_rate
        validate_frame_time(self.dt)
        self.deploy_altitude = None if deploy_altitude is None else float(deploy_altitude)
        self.poll_interval = float(poll_interval)

        self.landing: LandingReport | None = None
        self.history: list[PhysicsData] = []
        self._last_poll: float | None = None
        self._approach_speed = 0.0

        self._simulation_name = simulation_name
        self._output_dir = Path(output_dir) if output_dir else DEFAULT_OUTPUT_DIR
        self._auto_timestamp = auto_timestamp
        self.output_path: Path | None = None
        self.logger: TelemetryLogger | None = None

        self.engine.on_ground_hit(self._handle_ground_hit)

        if simulation_name is not None:
            self.enable_logging(simulation_name)

    @property
    def landed(self) -> bool:
        return self.landing is not None

    # --- Logging ---

    def enable_logging(self, name: str | None = None) -> Path:
        """
        Enable telemetry logging with automatic output organization.

        Creates:
            output_dir/name_timestamp/
                logs/telemetry.csv
                plots/

        Raises
        ------
        ValueError
            If no simulation name is available
        """
        if name is not None:
            self._simulation_name = name

        if self._simulation_name is None:
            raise ValueError(
                "Simulation name required for logging. "
                "Either pass name to __init__ or to enable_logging()."
            )

        if self._auto_timestamp:
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            folder_name = f"{self._simulation_name}_{timestamp}"
        else:
            folder_name = self._simulation_name

        self.output_path = self._output_dir / folder_name
        logs_dir = self.output_path / "logs"
        plots_dir = self.output_path / "plots"
        logs_dir.mkdir(parents=True, exist_ok=True)
        plots_dir.mkdir(parents=True, exist_ok=True)

        self.logger = TelemetryLogger(logs_dir / "telemetry.csv")

        print(f"[JumpSimulation] Logging enabled: {self.output_path}")
        return self.output_path

    def disable_logging(self) -> None:
        if self.logger is not None:
            self.logger.close()
            self.logger = None
            print("[JumpSimulation] Logging disabled")

    # --- Stepping ---

    def _handle_ground_hit(self, speed: float) -> None:
        if self.landing is not None:
            return
        impact = max(self._approach_speed, float(speed))
        self.landing = LandingReport(
            speed=impact,
            reported_speed=float(speed),
            quality=classify_landing(impact),
            flight_time=self.engine.state.time,
            parachute_deployed=self.engine.parameters.deployed,
            parameters=self.engine.parameters.as_dict(),
        )
        print(f"[JumpSimulation] {self.landing.summary()}")

    def _poll(self, force: bool = False) -> None:
        t = self.engine.state.time
        if force or self._last_poll is None or (t - self._last_poll) >= self.poll_interval - 1e-12:
            self.history.append(self.engine.get_physics_data())
            self._last_poll = t

    def step(self, dt: float | None = None) -> bool:
        """
        Advance one frame.

        Parameters
        ----------
        dt : float | None
            Frame time [s]. Defaults to 1 / frame_rate. Must be positive; values
            above MAX_TIME_STEP warn and are clamped by the engine.

        Returns
        -------
        bool
            True once the jumper has landed.
        """
        if dt is None:
            dt = self.dt
        else:
            validate_frame_time(dt)

        if self._last_poll is None:
            self._poll(force=True)

        engine = self.engine
        if (
            self.deploy_altitude is not None
            and not engine.parameters.deployed
            and engine.state.altitude <= self.deploy_altitude
        ):
            engine.deploy_parachute()

        was_landed = self.landed
        self._approach_speed = engine.state.speed
        engine.update(dt)

        if self.logger is not None:
            self.logger.log(engine)
        self._poll(force=self.landed and not was_landed)

        return self.landed

    def run(self, duration: float = 600.0, log_interval: float = 1.0) -> LandingReport | None:
        """
        Step until touchdown or until ``duration`` of simulation time elapses.

        Parameters
        ----------
        duration : float
            Maximum simulated time [s]
        log_interval : float
            Interval [s] for printing progress to terminal. Set to <= 0 to disable.

        Returns
        -------
        LandingReport | None
            The landing report, or None if still airborne at the end.
        """
        validate_non_negative(duration, "duration")
        state = self.engine.state
        t_end = state.time + float(duration)
        last_log_time = state.time

        if self.logger is not None:
            self.logger.log(self.engine)

        print(
            f"[JumpSimulation] Starting jump from {state.altitude:.0f}m: "
            f"{duration}s max, {self.frame_rate:g} fps"
        )

        try:
            while state.time < t_end - 1e-12:
                if self.step():
                    break

                if log_interval > 0 and (state.time - last_log_time) >= log_interval:
                    data = self.engine.get_physics_data()
                    print(
                        f"[JumpSimulation] t={data.time:6.2f}s | "
                        f"alt={data.altitude:8.2f}m, v={data.velocity:6.2f}m/s"
                    )
                    last_log_time = state.time
        finally:
            if self.logger:
                self.logger.flush()

        if self.landing is None:
            print(f"[JumpSimulation] Still airborne at t={state.time:.2f}s")
        return self.landing

    def reset(self) -> None:
        """Reset the engine, landing latch and polled history."""
        self.engine.reset()
        self.landing = None
        self.history.clear()
        self._last_poll = None
        self._approach_speed = 0.0

    # --- Output ---

    def save_history(self, filepath: str | Path | None = None) -> Path:
        """
        Write polled snapshots to CSV.

        Defaults to logs/history.csv in the output folder when logging is enabled.
        """
        if filepath is None:
            if self.output_path is None:
                raise RuntimeError(
                    "No output folder. Pass a filepath or call enable_logging()."
                )
            filepath = self.output_path / "logs" / "history.csv"
        return save_simulation_history([d.as_dict() for d in self.history], str(filepath))

    def save_plots(self, show: bool = False) -> None:
        """
        Generate and save the standard plots from logged telemetry.

        Raises
        ------
        RuntimeError
            If logging is not enabled or no data logged yet
        """
        if self.logger is None or self.output_path is None:
            raise RuntimeError(
                "Logging must be enabled to save plots. "
                "Call enable_logging() or pass simulation_name."
            )

        from parasim.visualization.plotting import (
            plot_force_breakdown,
            plot_trajectory_3d,
            plot_velocity_and_acceleration,
        )

        self.logger.flush()
        csv_path = self.logger.filepath
        plots_dir = self.output_path / "plots"
        if not csv_path.exists():
            raise RuntimeError(
                f"No log file found at {csv_path}. "
                "Has the simulation been run yet?"
            )

        plot_trajectory_3d(
            str(csv_path), save_path=str(plots_dir / "trajectory_3d.png"), show=show
        )
        plot_velocity_and_acceleration(
            str(csv_path),
            save_path=str(plots_dir / "velocity_acceleration.png"),
            show=show,
        )
        plot_force_breakdown(
            str(csv_path), save_path=str(plots_dir / "force_breakdown.png"), show=show
        )
        print(f"[JumpSimulation] Plots saved to: {plots_dir}")

    def close(self) -> None:
        if self.logger is not None:
            self.logger.close()
