"""Stat derivation components.

- stat_deriver.py: Weather observation to combat stats
- weather_mapper.py: Normalization and validation of raw weather input
"""

from .stat_deriver import (
    BaseStats,
    StatDeriver,
    apply_variance,
    calculate_base_stats,
    derive_stats,
    determine_elemental_type,
    get_base_magic,
)
from .weather_mapper import (
    WeatherDataError,
    kelvin_to_celsius,
    normalize_condition,
    observation_from_dict,
    observation_from_openweather,
    validate_observation,
)

__all__ = [
    "BaseStats",
    "StatDeriver",
    "apply_variance",
    "calculate_base_stats",
    "derive_stats",
    "determine_elemental_type",
    "get_base_magic",
    "WeatherDataError",
    "kelvin_to_celsius",
    "normalize_condition",
    "observation_from_dict",
    "observation_from_openweather",
    "validate_observation",
]
