"""
Example 02: Jump with automatic canopy deployment.

Opens the canopy at 900 m, lands, and grades the touchdown.
"""
import sys
from pathlib import Path

# Setup path for local development (not needed if installed via pip)
sys.path.insert(0, str(Path(__file__).parent.parent.parent / "src"))

from parasim import JumpSimulation, PhysicsEngine
from parasim.config import TERMINAL_VELOCITY_PARACHUTE


def run_example():
    engine = PhysicsEngine()
    engine.on_parameter_change(lambda name, value: print(f"  {name} -> {value}"))
    engine.update_parameter("windSpeed", 4.0)

    sim = JumpSimulation(engine, deploy_altitude=900.0, simulation_name="02_canopy_jump")
    report = sim.run(duration=600.0, log_interval=10.0)
    sim.save_plots()
    sim.close()

    if report is not None:
        print(report.summary())
        print(f"Typical canopy descent rate: {TERMINAL_VELOCITY_PARACHUTE:.1f} m/s")
        print(f"Drift downwind: {engine.state.position[0]:.1f} m")


if __name__ == "__main__":
    run_example()
