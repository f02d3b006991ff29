"""
Stat derivation from weather observations.

Turns a normalized weather reading into the combat attributes of a city:

- HP follows temperature
- Attack follows wind speed and pressure
- Defense follows humidity and cloud cover
- Magic follows how severe the condition is
- Speed follows visibility
- Crit chance follows condition severity, without variance

Every stat except crit chance gets its own multiplicative variance draw.
"""
from dataclasses import dataclass
from typing import Optional, TYPE_CHECKING, Union

from ...core.config.battle_config import BattleConfig, DEFAULT_BATTLE_CONFIG
from ...core.data.data_structures import CombatStats, WeatherObservation, round_half_up
from ...core.data.game_enums import ElementalType, WeatherCondition
from ...core.data.game_info import DEFAULT_BASE_MAGIC, WEATHER_CONDITION_DATA
from ...core.engine.random_source import RandomSource, create_rng, draw
from ...core.events.events import LogMessage, StatsDerived

if TYPE_CHECKING:
    from ...core.events.event_manager import EventManager


# Temperature range considered realistic for HP purposes
MIN_TEMPERATURE = -40
MAX_TEMPERATURE = 50

MAX_BASE_HP = 200
MAX_BASE_SPEED = 100

# Floors applied after variance
MIN_ATTACK = 20
MIN_DEFENSE = 10
MIN_SPEED = 10

MIN_CRIT_CHANCE = 10.0
MAX_CRIT_CHANCE = 20.0


ConditionLike = Union[WeatherCondition, str]


@dataclass(frozen=True)
class BaseStats:
    """Stats as computed from weather, before any variance draw."""
    hp: int
    attack: int
    defense: int
    magic: int
    speed: int
    crit_chance: float


def _coerce_condition(condition: ConditionLike) -> Optional[WeatherCondition]:
    """Map a raw condition to the enum, or None when it is not recognized."""
    if isinstance(condition, WeatherCondition):
        return condition
    try:
        return WeatherCondition(condition)
    except ValueError:
        return None


def determine_elemental_type(condition: ConditionLike, temp: float, wind_speed: float) -> ElementalType:
    """Pick the elemental type for a weather reading.

    Rules are checked in order and the first match wins.
    """
    weather = _coerce_condition(condition)

    if weather is WeatherCondition.CLEAR and temp > 25:
        return ElementalType.FIRE

    if weather is WeatherCondition.THUNDERSTORM:
        return ElementalType.LIGHTNING

    if weather is WeatherCondition.SNOW or (weather is WeatherCondition.CLEAR and temp < 0):
        return ElementalType.ICE

    if weather in (WeatherCondition.RAIN, WeatherCondition.DRIZZLE):
        return ElementalType.WATER

    if weather is WeatherCondition.CLOUDS and wind_speed > 10:
        return ElementalType.WIND

    if weather in (WeatherCondition.FOG, WeatherCondition.MIST):
        return ElementalType.SHADOW

    if weather is WeatherCondition.CLOUDS:
        return ElementalType.WIND
    if weather is WeatherCondition.CLEAR:
        return ElementalType.FIRE
    return ElementalType.SHADOW


def get_base_magic(condition: ConditionLike) -> int:
    """Get the pre-variance magic for a condition."""
    weather = _coerce_condition(condition)
    if weather is None or weather not in WEATHER_CONDITION_DATA:
        return DEFAULT_BASE_MAGIC
    return WEATHER_CONDITION_DATA[weather].base_magic


def calculate_base_stats(observation: WeatherObservation) -> BaseStats:
    """Compute every stat from the weather alone, with no randomness."""
    clamped_temp = max(MIN_TEMPERATURE, min(MAX_TEMPERATURE, observation.temperature))
    hp = min(100 + round_half_up(clamped_temp * 2), MAX_BASE_HP)

    attack = round_half_up(observation.wind_speed * 5 + observation.pressure / 10)
    defense = round_half_up(observation.humidity + observation.clouds)
    magic = get_base_magic(observation.condition)
    speed = min(round_half_up(observation.visibility / 100), MAX_BASE_SPEED)

    # Severer weather (more magic) means more crits
    severity = magic / 10
    crit_chance = min(max(MIN_CRIT_CHANCE + severity, MIN_CRIT_CHANCE), MAX_CRIT_CHANCE)

    return BaseStats(
        hp=hp,
        attack=attack,
        defense=defense,
        magic=magic,
        speed=speed,
        crit_chance=round_half_up(crit_chance * 10) / 10,
    )


def apply_variance(value: float, rng: RandomSource, config: BattleConfig = DEFAULT_BATTLE_CONFIG) -> int:
    """Scale a stat by a fresh draw in [variance_min, variance_min + variance_span)."""
    multiplier = config.variance_min + draw(rng) * config.variance_span
    return round_half_up(value * multiplier)


def derive_stats(
    observation: WeatherObservation,
    rng: Optional[RandomSource] = None,
    config: BattleConfig = DEFAULT_BATTLE_CONFIG,
) -> CombatStats:
    """
    Convert a weather observation into combat stats.

    Args:
        observation: Normalized weather reading
        rng: Random source for the variance draws (fresh generator if None)
        config: Battle rules providing the variance range

    Returns:
        CombatStats for the city
    """
    rng = create_rng(rng)
    base = calculate_base_stats(observation)

    # Draw order matters for seeded replays: hp, max_hp, attack, defense, magic, speed
    hp = apply_variance(base.hp, rng, config)
    max_hp = apply_variance(base.hp, rng, config)
    attack = max(apply_variance(base.attack, rng, config), MIN_ATTACK)
    defense = max(apply_variance(base.defense, rng, config), MIN_DEFENSE)
    magic = apply_variance(base.magic, rng, config)
    speed = max(apply_variance(base.speed, rng, config), MIN_SPEED)

    return CombatStats(
        hp=hp,
        max_hp=max_hp,
        attack=attack,
        defense=defense,
        magic=magic,
        speed=speed,
        crit_chance=base.crit_chance,
        elemental_type=determine_elemental_type(
            observation.condition, observation.temperature, observation.wind_speed
        ),
    )


class StatDeriver:
    """Derives combat stats and reports them on the event bus."""

    def __init__(
        self,
        config: Optional[BattleConfig] = None,
        event_manager: Optional["EventManager"] = None,
    ):
        self.config = config or DEFAULT_BATTLE_CONFIG
        self.event_manager = event_manager

    def derive(
        self,
        city_name: str,
        observation: WeatherObservation,
        rng: Optional[RandomSource] = None,
    ) -> CombatStats:
        """Derive stats for a named city."""
        stats = derive_stats(observation, rng, self.config)
        if self.event_manager is None:
            return stats

        self._emit_log(
            f"{city_name}: {observation.condition.value} {observation.temperature}°C -> "
            f"{stats.elemental_type.value} HP {stats.hp}/{stats.max_hp} ATK {stats.attack} "
            f"DEF {stats.defense} MAG {stats.magic} SPD {stats.speed} CRIT {stats.crit_chance}%"
        )
        self.event_manager.publish(
            StatsDerived(turn=0, city_name=city_name, stats=stats),
            source="StatDeriver"
        )
        return stats

    def _emit_log(self, message: str, category: str = "STATS", level: str = "INFO") -> None:
        """Emit a log message event."""
        if self.event_manager is None:
            return
        self.event_manager.publish(
            LogMessage(
                turn=0,
                message=message,
                category=category,
                level=level,
                source="StatDeriver"
            ),
            source="StatDeriver"
        )
