"""
Matchup loading and running.

A matchup file names two cities and gives the weather observed at each. The
weather is either a plain observation mapping (Celsius, wire or snake_case
keys) or a raw OpenWeatherMap "current weather" payload under
``openweather``::

    name: Storm Front
    seed: 7
    city1:
      name: London
      country: GB
      weather: {temperature: 12.5, humidity: 81, pressure: 1009, ...}
    city2:
      name: Cairo
      openweather: {main: {temp: 305.4, ...}, weather: [{main: Clear}], ...}
"""
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, TYPE_CHECKING

import yaml

from ...core.config.battle_config import BattleConfig, DEFAULT_BATTLE_CONFIG
from ...core.data.data_structures import BattleResult, CombatStats, WeatherObservation
from ...core.engine.random_source import RandomSource, create_rng
from ...core.events.events import LogMessage
from ..combat.combat_resolver import BattleResolver
from ..stats.stat_deriver import StatDeriver
from ..stats.weather_mapper import WeatherDataError, observation_from_dict, observation_from_openweather

if TYPE_CHECKING:
    from ...core.events.event_manager import EventManager


@dataclass(frozen=True)
class MatchupCity:
    """One side of a matchup."""
    name: str
    observation: WeatherObservation
    country: Optional[str] = None


@dataclass(frozen=True)
class Matchup:
    """Two cities and the weather to fight with."""
    name: str
    city1: MatchupCity
    city2: MatchupCity
    description: str = ""
    seed: Optional[int] = None


@dataclass(frozen=True)
class MatchupReport:
    """Derived stats for both sides plus the battle result."""
    matchup: Matchup
    city1_stats: CombatStats
    city2_stats: CombatStats
    result: BattleResult

    def to_dict(self) -> dict[str, Any]:
        """Battle result fields plus per-city data, in the wire format."""
        data = self.result.to_dict()
        data["city1Data"] = self._city_data(self.matchup.city1, self.city1_stats)
        data["city2Data"] = self._city_data(self.matchup.city2, self.city2_stats)
        return data

    @staticmethod
    def _city_data(city: MatchupCity, stats: CombatStats) -> dict[str, Any]:
        city_data: dict[str, Any] = {"city": city.name}
        if city.country:
            city_data["country"] = city.country
        city_data["weather"] = city.observation.to_dict()
        city_data["stats"] = stats.to_dict()
        city_data["elementalType"] = stats.elemental_type.value
        return city_data


class MatchupLoader:
    """Handles loading matchups from YAML files."""

    @staticmethod
    def load_from_file(file_path: str, event_manager: Optional["EventManager"] = None) -> Matchup:
        """Load a matchup from a YAML file.

        Raises:
            FileNotFoundError: If the file does not exist
            ValueError: If the YAML cannot be parsed or describes no valid matchup
        """
        try:
            with open(file_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except FileNotFoundError:
            raise FileNotFoundError(f"Matchup file not found: {file_path}")
        except yaml.YAMLError as e:
            raise ValueError(f"Failed to parse YAML matchup: {e}")

        if not isinstance(data, dict):
            raise ValueError(f"Matchup file {file_path} must contain a mapping")

        matchup = MatchupLoader.parse(data, default_name=Path(file_path).stem)

        if event_manager is not None:
            event_manager.publish(
                LogMessage(
                    turn=0,
                    message=f"Loaded matchup '{matchup.name}': {matchup.city1.name} vs {matchup.city2.name}",
                    category="SCENARIO",
                    level="INFO",
                    source="MatchupLoader"
                ),
                source="MatchupLoader"
            )
        return matchup

    @staticmethod
    def parse(data: dict[str, Any], default_name: str = "Unnamed Matchup") -> Matchup:
        """Parse matchup data from a dictionary."""
        for side in ("city1", "city2"):
            if side not in data:
                raise ValueError(f"Matchup is missing '{side}'")

        seed = data.get("seed")
        if seed is not None and (isinstance(seed, bool) or not isinstance(seed, int)):
            raise ValueError(f"Matchup seed must be an integer, got {seed!r}")

        return Matchup(
            name=data.get("name", default_name),
            description=data.get("description", ""),
            city1=MatchupLoader._parse_city(data["city1"], "city1"),
            city2=MatchupLoader._parse_city(data["city2"], "city2"),
            seed=seed,
        )

    @staticmethod
    def _parse_city(city_data: Any, side: str) -> MatchupCity:
        if not isinstance(city_data, dict) or "name" not in city_data:
            raise ValueError(f"'{side}' must be a mapping with a 'name'")

        try:
            if "openweather" in city_data:
                observation = observation_from_openweather(city_data["openweather"])
            elif "weather" in city_data:
                observation = observation_from_dict(city_data["weather"])
            else:
                raise ValueError(f"'{side}' needs either 'weather' or 'openweather'")
        except WeatherDataError as e:
            raise ValueError(f"Invalid weather for {city_data['name']}: {e}")

        country = city_data.get("country")
        return MatchupCity(
            name=str(city_data["name"]),
            observation=observation,
            country=str(country) if country is not None else None,
        )


def run_matchup(
    matchup: Matchup,
    rng: Optional[RandomSource] = None,
    config: Optional[BattleConfig] = None,
    event_manager: Optional["EventManager"] = None,
) -> MatchupReport:
    """
    Derive both sides' stats and fight the battle.

    Args:
        matchup: The matchup to run
        rng: Random source; falls back to the matchup's seed when omitted
        config: Battle rules
        event_manager: Optional bus for log and battle events

    Returns:
        MatchupReport with stats and the battle result
    """
    config = config or DEFAULT_BATTLE_CONFIG
    rng = create_rng(rng if rng is not None else matchup.seed)

    deriver = StatDeriver(config, event_manager)
    city1_stats = deriver.derive(matchup.city1.name, matchup.city1.observation, rng)
    city2_stats = deriver.derive(matchup.city2.name, matchup.city2.observation, rng)

    resolver = BattleResolver(config, event_manager)
    result = resolver.simulate_battle(
        matchup.city1.name, city1_stats, matchup.city2.name, city2_stats, rng
    )

    return MatchupReport(
        matchup=matchup,
        city1_stats=city1_stats,
        city2_stats=city2_stats,
        result=result,
    )
