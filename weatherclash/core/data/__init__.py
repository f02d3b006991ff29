"""Core data structures and definitions.

This package contains fundamental data types and game definitions:
- data_structures.py: Immutable records passed between engine stages
- game_enums.py: Centralized enums for conditions, elements, actions, phases
- game_info.py: Static game data and lookup tables
"""

from .data_structures import (
    round_half_up,
    WeatherObservation,
    CombatStats,
    DamageCalculation,
    DamageForecast,
    BattleTurn,
    FinalStats,
    BattleResult,
)
from .game_enums import (
    WeatherCondition,
    ElementalType,
    CombatAction,
    BattlePhase,
    WEATHER_CONDITION_NAMES,
    ELEMENTAL_TYPE_NAMES,
    COMBAT_ACTION_NAMES,
)
from .game_info import (
    BaseInfo,
    WeatherConditionInfo,
    ElementInfo,
    WEATHER_CONDITION_DATA,
    ELEMENT_DATA,
    DEFAULT_BASE_MAGIC,
)

__all__ = [
    "round_half_up",
    "WeatherObservation",
    "CombatStats",
    "DamageCalculation",
    "DamageForecast",
    "BattleTurn",
    "FinalStats",
    "BattleResult",
    "WeatherCondition",
    "ElementalType",
    "CombatAction",
    "BattlePhase",
    "WEATHER_CONDITION_NAMES",
    "ELEMENTAL_TYPE_NAMES",
    "COMBAT_ACTION_NAMES",
    "BaseInfo",
    "WeatherConditionInfo",
    "ElementInfo",
    "WEATHER_CONDITION_DATA",
    "ELEMENT_DATA",
    "DEFAULT_BASE_MAGIC",
]
