from .engine import PhysicsData, PhysicsEngine
from .simulation import JumpSimulation
