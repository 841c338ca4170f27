"""
Default configuration, physical constants and parameter presets.

All physical quantities use SI units:
- Gravity: meters per second squared [m/s²]
- Mass: kilograms [kg]
- Areas: square meters [m²]
- Volumes: cubic meters [m³]
- Densities: kilograms per cubic meter [kg/m³]
"""
from __future__ import annotations

# Physical constants
AIR_DENSITY_SEA_LEVEL = 1.225  # [kg/m³]
GRAVITY_EARTH = 9.81  # [m/s²]
SCALE_HEIGHT = 8400.0  # Barometric decay constant [m]
KINEMATIC_VISCOSITY_AIR = 1.5e-5  # Air at 20°C [m²/s]
SPEED_OF_SOUND = 343.0  # Air at 20°C [m/s]

# Reference values for display
TERMINAL_VELOCITY_HUMAN = 56.0  # Free fall, belly-to-earth [m/s]
TERMINAL_VELOCITY_PARACHUTE = 5.0  # Under canopy [m/s]

# Integration
MAX_TIME_STEP = 1.0 / 60.0  # Upper bound on a single step [s]
INITIAL_ALTITUDE = 1500.0  # Exit altitude [m]

# Deployment
MIN_DEPLOY_ALTITUDE = 50.0  # Canopy cannot be opened at or below this [m]
DEPLOYMENT_SHOCK_FRACTION = 0.3  # Fraction of speed lost on opening [-]
MAX_DEPLOYMENT_SHOCK = 20.0  # Cap on the opening speed loss [m/s]

# Drag coefficient of the jumper's body alone [-]
UNDEPLOYED_DRAG_COEFFICIENT = 0.6

# Lift placeholder: oscillation rate [rad/s], magnitude and direction factors [-]
LIFT_OSCILLATION_RATE = 0.5
LIFT_COEFFICIENT = 0.1
LIFT_DIRECTION_SCALE = 0.1

DEFAULT_PARAMETERS: dict[str, float | bool] = {
    "gravity": GRAVITY_EARTH,
    "mass": 80.0,
    "dragCoefficient": 1.3,
    "airDensity": AIR_DENSITY_SEA_LEVEL,
    "parachuteArea": 50.0,
    "bodyArea": 0.7,
    "windSpeed": 0.0,
    "parachuteDeployed": False,
    "ropeLength": 8.0,
    "bodyVolume": 0.07,
}

PRESETS: dict[str, dict[str, float]] = {
    "realistic": {
        "gravity": 9.81,
        "mass": 80.0,
        "dragCoefficient": 1.3,
        "airDensity": 1.225,
        "parachuteArea": 50.0,
        "windSpeed": 0.0,
    },
    "lightweight": {
        "gravity": 9.81,
        "mass": 60.0,
        "dragCoefficient": 1.3,
        "airDensity": 1.225,
        "parachuteArea": 60.0,
        "windSpeed": 0.0,
    },
    "heavyweight": {
        "gravity": 9.81,
        "mass": 120.0,
        "dragCoefficient": 1.3,
        "airDensity": 1.225,
        "parachuteArea": 45.0,
        "windSpeed": 0.0,
    },
    "windy": {
        "gravity": 9.81,
        "mass": 80.0,
        "dragCoefficient": 1.3,
        "airDensity": 1.225,
        "parachuteArea": 50.0,
        "windSpeed": 10.0,
    },
    "highAltitude": {
        "gravity": 9.81,
        "mass": 80.0,
        "dragCoefficient": 1.3,
        "airDensity": 0.9,
        "parachuteArea": 50.0,
        "windSpeed": 0.0,
    },
}


def get_preset(name: str) -> dict[str, float]:
    """
    Return a copy of a named parameter preset.

    Raises
    ------
    KeyError
        If the preset does not exist.
    """
    if name not in PRESETS:
        raise KeyError(
            f"Unknown preset '{name}'. Valid options: {sorted(PRESETS)}"
        )
    return dict(PRESETS[name])
