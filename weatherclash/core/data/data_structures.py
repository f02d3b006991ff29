"""Unified data structures and conversion utilities.

This module provides the value records that flow through the engine.

Data Flow:
1. WeatherObservation (weather source) -> CombatStats (stat deriver)
2. CombatStats x2 -> BattleTurn* -> BattleResult (battle resolver)

Records are immutable once built. Each exposes ``to_dict()`` producing the
camelCase wire shape expected by the transport layer.
"""

import math
from dataclasses import dataclass, field
from typing import Any

from .game_enums import CombatAction, ElementalType, WeatherCondition


def round_half_up(value: float) -> int:
    """Round to the nearest integer, with .5 going towards positive infinity.

    Python's built-in ``round`` uses banker's rounding, which would shift
    stats by one on exact halves (e.g. ``round(40.5) == 40``).
    """
    return int(math.floor(value + 0.5))


@dataclass(frozen=True)
class WeatherObservation:
    """Normalized weather reading for one city."""
    temperature: float      # Celsius
    humidity: float         # 0-100
    pressure: float         # hPa
    wind_speed: float       # m/s
    clouds: float           # 0-100
    condition: WeatherCondition
    visibility: float       # meters
    description: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Convert to the wire format."""
        return {
            "temp": self.temperature,
            "humidity": self.humidity,
            "pressure": self.pressure,
            "windSpeed": self.wind_speed,
            "clouds": self.clouds,
            "condition": self.condition.value,
            "visibility": self.visibility,
            "description": self.description,
        }


@dataclass(frozen=True)
class CombatStats:
    """Combat attributes derived from a weather observation.

    ``hp`` and ``max_hp`` come from separate variance draws, so a freshly
    derived character can start with ``hp`` above ``max_hp``.
    """
    hp: int
    max_hp: int
    attack: int
    defense: int
    magic: int
    speed: int
    crit_chance: float
    elemental_type: ElementalType

    def to_dict(self) -> dict[str, Any]:
        """Convert to the wire format."""
        return {
            "hp": self.hp,
            "maxHp": self.max_hp,
            "attack": self.attack,
            "defense": self.defense,
            "magic": self.magic,
            "speed": self.speed,
            "critChance": self.crit_chance,
            "elementalType": self.elemental_type.value,
        }


@dataclass(frozen=True)
class DamageCalculation:
    """Breakdown of a single damage roll."""
    base_damage: int
    elemental_multiplier: float
    crit_multiplier: float
    action_multiplier: float
    defense_multiplier: float
    final_damage: int
    is_critical: bool

    def to_dict(self) -> dict[str, Any]:
        """Convert to the wire format."""
        return {
            "baseDamage": self.base_damage,
            "elementalMultiplier": self.elemental_multiplier,
            "critMultiplier": self.crit_multiplier,
            "actionMultiplier": self.action_multiplier,
            "defenseMultiplier": self.defense_multiplier,
            "finalDamage": self.final_damage,
            "isCritical": self.is_critical,
        }


@dataclass(frozen=True)
class DamageForecast:
    """Damage preview between two fighters, without any randomness."""
    attacker_name: str
    defender_name: str
    attack_damage: int
    attack_crit_damage: int
    heavy_damage: int
    heavy_crit_damage: int
    crit_chance: float
    elemental_multiplier: float

    @property
    def super_effective(self) -> bool:
        return self.elemental_multiplier > 1.0


@dataclass(frozen=True)
class BattleTurn:
    """Record of one resolved turn."""
    turn: int
    attacker: str
    defender: str
    action: CombatAction
    damage: int
    is_critical: bool
    attacker_hp_remaining: int
    defender_hp_remaining: int
    description: str

    def to_dict(self) -> dict[str, Any]:
        """Convert to the wire format."""
        return {
            "turn": self.turn,
            "attacker": self.attacker,
            "defender": self.defender,
            "action": self.action.value,
            "damage": self.damage,
            "isCritical": self.is_critical,
            "attackerHpRemaining": self.attacker_hp_remaining,
            "defenderHpRemaining": self.defender_hp_remaining,
            "description": self.description,
        }


@dataclass(frozen=True)
class FinalStats:
    """HP of both sides once the battle is over."""
    city1_hp: int
    city2_hp: int

    def to_dict(self) -> dict[str, Any]:
        return {"city1Hp": self.city1_hp, "city2Hp": self.city2_hp}


@dataclass(frozen=True)
class BattleResult:
    """Outcome of a full battle."""
    winner: str
    loser: str
    turns: tuple[BattleTurn, ...] = field(default_factory=tuple)
    final_stats: FinalStats = field(default_factory=lambda: FinalStats(0, 0))
    battle_duration: int = 0  # milliseconds

    @property
    def turn_count(self) -> int:
        return len(self.turns)

    def to_dict(self) -> dict[str, Any]:
        """Convert to the wire format."""
        return {
            "winner": self.winner,
            "loser": self.loser,
            "turns": [turn.to_dict() for turn in self.turns],
            "finalStats": self.final_stats.to_dict(),
            "battleDuration": self.battle_duration,
        }
