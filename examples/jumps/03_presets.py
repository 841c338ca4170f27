"""
Example 03: Compare landing quality across the parameter presets.
"""
import sys
from pathlib import Path

# Setup path for local development (not needed if installed via pip)
sys.path.insert(0, str(Path(__file__).parent.parent.parent / "src"))

from parasim import PRESETS, JumpSimulation, PhysicsEngine


def run_example(deploy_altitude: float = 800.0):
    for name in PRESETS:
        engine = PhysicsEngine()
        engine.apply_preset(name)
        sim = JumpSimulation(engine, deploy_altitude=deploy_altitude)
        report = sim.run(duration=600.0, log_interval=0)
        if report is not None:
            print(f"{name:>12}: {report.quality.label:<9} {report.speed:5.2f} m/s "
                  f"after {report.flight_time:6.1f} s")


if __name__ == "__main__":
    run_example()
