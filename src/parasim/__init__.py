"""
parasim - Point-mass parachute jump physics engine.

Core Components
---------------
PhysicsEngine : Force model, integrator and event callbacks
PhysicsData : Read-only snapshot for display
JumpSimulation : Headless frame-stepping driver with landing latch

Supporting
----------
SimulationParameters : Mutable jump configuration
SimulationState : Kinematic state and force record
TelemetryLogger : Buffered CSV telemetry
classify_landing : Touchdown speed grading

Examples
--------
>>> from parasim import PhysicsEngine, JumpSimulation
>>> engine = PhysicsEngine({"mass": 90.0})
>>> sim = JumpSimulation(engine, deploy_altitude=800.0)
>>> report = sim.run()
"""

__version__ = "0.1.0"

from parasim.config import DEFAULT_PARAMETERS, PRESETS
from parasim.core.engine import PhysicsData, PhysicsEngine
from parasim.core.simulation import JumpSimulation
from parasim.dynamics.state import ForceRecord, SimulationParameters, SimulationState
from parasim.landing import LandingQuality, LandingReport, classify_landing
from parasim.logger import TelemetryLogger

__all__ = [
    # Version
    "__version__",
    # Core
    "PhysicsEngine",
    "PhysicsData",
    "JumpSimulation",
    # Data model
    "SimulationParameters",
    "SimulationState",
    "ForceRecord",
    # Configuration
    "DEFAULT_PARAMETERS",
    "PRESETS",
    # Landing
    "LandingQuality",
    "LandingReport",
    "classify_landing",
    # Logging
    "TelemetryLogger",
]
