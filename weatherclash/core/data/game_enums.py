"""Centralized game enums and constants.

This module contains all core game enums that are used across multiple modules,
eliminating duplication and providing a single source of truth.
"""

from enum import Enum, auto


class WeatherCondition(Enum):
    """Normalized weather conditions accepted by the stat deriver."""
    CLEAR = "Clear"
    CLOUDS = "Clouds"
    RAIN = "Rain"
    DRIZZLE = "Drizzle"
    THUNDERSTORM = "Thunderstorm"
    SNOW = "Snow"
    MIST = "Mist"
    FOG = "Fog"


class ElementalType(Enum):
    """Elemental flavor of a combatant, derived from its weather."""
    FIRE = "Fire"
    WATER = "Water"
    ICE = "Ice"
    WIND = "Wind"
    LIGHTNING = "Lightning"
    SHADOW = "Shadow"


class CombatAction(Enum):
    """Actions a fighter can take on its turn."""
    ATTACK = "attack"
    HEAVY_ATTACK = "heavy_attack"
    DEFEND = "defend"


class BattlePhase(Enum):
    """Lifecycle of a single battle resolution."""
    NOT_STARTED = auto()
    IN_PROGRESS = auto()
    FINISHED = auto()


# Convenience mappings for display
WEATHER_CONDITION_NAMES = {condition: condition.value for condition in WeatherCondition}

ELEMENTAL_TYPE_NAMES = {element: element.value for element in ElementalType}

COMBAT_ACTION_NAMES = {
    CombatAction.ATTACK: "Attack",
    CombatAction.HEAVY_ATTACK: "Heavy Attack",
    CombatAction.DEFEND: "Defend",
}
