"""
Environment models for parasim.

Available Models
----------------
- air_density: Scale-height density profile
- reynolds_number: Flow regime around the jumper
- mach_number: Compressibility indicator
"""

from .atmosphere import air_density, characteristic_length, mach_number, reynolds_number

__all__ = [
    "air_density",
    "characteristic_length",
    "reynolds_number",
    "mach_number",
]
