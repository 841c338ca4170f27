"""
Example 01: Free fall without opening the canopy.

Drops the default jumper from 1500 m and compares the final descent rate
with the analytical terminal velocity.
"""
import sys
from pathlib import Path

# Setup path for local development (not needed if installed via pip)
sys.path.insert(0, str(Path(__file__).parent.parent.parent / "src"))

from parasim import JumpSimulation, PhysicsEngine
from parasim.config import TERMINAL_VELOCITY_HUMAN


def run_example():
    engine = PhysicsEngine()
    sim = JumpSimulation(engine, simulation_name="01_free_fall")

    report = sim.run(duration=120.0, log_interval=5.0)
    sim.save_plots()
    sim.save_history()
    sim.close()

    print(f"Terminal velocity (analytical): {engine.terminal_velocity():.2f} m/s")
    print(f"Typical belly-to-earth value:    {TERMINAL_VELOCITY_HUMAN:.2f} m/s")
    if report is not None:
        print(report.summary())
    print(f"Results saved to {sim.output_path}")


if __name__ == "__main__":
    run_example()
