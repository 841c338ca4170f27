"""
Simplified atmosphere and flow-regime models.

Density uses the isothermal scale-height approximation:
    ρ(h) = ρ₀ · exp(-h / H),   H = 8400 m
"""
from __future__ import annotations

import numpy as np

from parasim.config import (
    AIR_DENSITY_SEA_LEVEL,
    KINEMATIC_VISCOSITY_AIR,
    SCALE_HEIGHT,
    SPEED_OF_SOUND,
)


def air_density(
    altitude: float,
    rho0: float = AIR_DENSITY_SEA_LEVEL,
    scale_height: float = SCALE_HEIGHT,
) -> float:
    """
    Air density at altitude [kg/m³].

    Parameters
    ----------
    altitude : float
        Height above the ground plane [m]
    rho0 : float
        Sea-level density [kg/m³]
    scale_height : float
        Exponential decay constant [m]

    Examples
    --------
    >>> air_density(0.0)
    1.225
    >>> round(air_density(8400.0), 4)
    0.4507
    """
    return float(rho0 * np.exp(-altitude / scale_height))


def characteristic_length(body_area: float) -> float:
    """Diameter of a disc with the given frontal area [m]."""
    return float(np.sqrt(body_area / np.pi) * 2.0)


def reynolds_number(
    speed: float,
    body_area: float,
    kinematic_viscosity: float = KINEMATIC_VISCOSITY_AIR,
) -> float:
    """Reynolds number Re = v·D/ν using the equivalent-disc diameter."""
    return float(speed * characteristic_length(body_area) / kinematic_viscosity)


def mach_number(speed: float, speed_of_sound: float = SPEED_OF_SOUND) -> float:
    return float(speed / speed_of_sound)
