from .state import (
    FORCE_NAMES,
    PARAMETER_FIELDS,
    ForceRecord,
    SimulationParameters,
    SimulationState,
    resolve_parameter,
)
from .forces import (
    FORCE_MODELS,
    Buoyancy,
    Drag,
    Force,
    Gravity,
    Lift,
    Tension,
    Wind,
    drag_configuration,
    line_torque,
)
