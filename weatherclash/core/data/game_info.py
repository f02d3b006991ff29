"""Standardized Info classes for static combat data.

This module keeps the lookup tables the engine relies on (condition magic,
elemental matchups) in one place with a common interface.
"""

from dataclasses import dataclass, field
from abc import ABC, abstractmethod
from typing import Dict, Any, FrozenSet

from .game_enums import ElementalType, WeatherCondition, ELEMENTAL_TYPE_NAMES, WEATHER_CONDITION_NAMES


@dataclass
class BaseInfo(ABC):
    """Base class for all static info classes."""
    name: str
    symbol: str

    @abstractmethod
    def get_display_properties(self) -> Dict[str, Any]:
        """Get properties used for display/rendering."""
        pass

    @abstractmethod
    def get_gameplay_properties(self) -> Dict[str, Any]:
        """Get properties used for game mechanics."""
        pass


@dataclass
class WeatherConditionInfo(BaseInfo):
    """Static information about a weather condition."""
    base_magic: int

    def get_display_properties(self) -> Dict[str, Any]:
        """Get display properties for this condition."""
        return {
            "name": self.name,
            "symbol": self.symbol,
        }

    def get_gameplay_properties(self) -> Dict[str, Any]:
        """Get gameplay properties for this condition."""
        return {
            "base_magic": self.base_magic,
        }


@dataclass
class ElementInfo(BaseInfo):
    """Static information about an elemental type.

    `beats` is the set of types this element deals super effective damage
    to. The relation is one-directional: A beating B says nothing about B
    versus A.
    """
    beats: FrozenSet[ElementalType] = field(default_factory=frozenset)

    def get_display_properties(self) -> Dict[str, Any]:
        """Get display properties for this element."""
        return {
            "name": self.name,
            "symbol": self.symbol,
        }

    def get_gameplay_properties(self) -> Dict[str, Any]:
        """Get gameplay properties for this element."""
        return {
            "beats": sorted(element.value for element in self.beats),
        }


# Magic for conditions the table does not know about
DEFAULT_BASE_MAGIC = 15

# Centralized data for all weather conditions
WEATHER_CONDITION_DATA: Dict[WeatherCondition, WeatherConditionInfo] = {
    WeatherCondition.CLEAR: WeatherConditionInfo(
        WEATHER_CONDITION_NAMES[WeatherCondition.CLEAR], "☀", 10
    ),
    WeatherCondition.CLOUDS: WeatherConditionInfo(
        WEATHER_CONDITION_NAMES[WeatherCondition.CLOUDS], "☁", 15
    ),
    WeatherCondition.DRIZZLE: WeatherConditionInfo(
        WEATHER_CONDITION_NAMES[WeatherCondition.DRIZZLE], "☂", 25
    ),
    WeatherCondition.RAIN: WeatherConditionInfo(
        WEATHER_CONDITION_NAMES[WeatherCondition.RAIN], "☔", 30
    ),
    WeatherCondition.SNOW: WeatherConditionInfo(
        WEATHER_CONDITION_NAMES[WeatherCondition.SNOW], "❄", 40
    ),
    WeatherCondition.THUNDERSTORM: WeatherConditionInfo(
        WEATHER_CONDITION_NAMES[WeatherCondition.THUNDERSTORM], "⚡", 50
    ),
    WeatherCondition.MIST: WeatherConditionInfo(
        WEATHER_CONDITION_NAMES[WeatherCondition.MIST], "≋", 20
    ),
    WeatherCondition.FOG: WeatherConditionInfo(
        WEATHER_CONDITION_NAMES[WeatherCondition.FOG], "≡", 20
    ),
}

# Centralized data for all elemental types
ELEMENT_DATA: Dict[ElementalType, ElementInfo] = {
    ElementalType.FIRE: ElementInfo(
        ELEMENTAL_TYPE_NAMES[ElementalType.FIRE], "F",
        frozenset({ElementalType.ICE, ElementalType.WIND})
    ),
    ElementalType.ICE: ElementInfo(
        ELEMENTAL_TYPE_NAMES[ElementalType.ICE], "I",
        frozenset({ElementalType.WATER, ElementalType.WIND})
    ),
    ElementalType.WATER: ElementInfo(
        ELEMENTAL_TYPE_NAMES[ElementalType.WATER], "W",
        frozenset({ElementalType.FIRE})
    ),
    ElementalType.LIGHTNING: ElementInfo(
        ELEMENTAL_TYPE_NAMES[ElementalType.LIGHTNING], "L",
        frozenset({ElementalType.WATER, ElementalType.WIND})
    ),
    ElementalType.WIND: ElementInfo(
        ELEMENTAL_TYPE_NAMES[ElementalType.WIND], "A",
        frozenset({ElementalType.FIRE})
    ),
    ElementalType.SHADOW: ElementInfo(
        ELEMENTAL_TYPE_NAMES[ElementalType.SHADOW], "S",
        frozenset()
    ),
}
