"""
Configuration loader for battle rules.

This module holds the tunable numbers of the engine (turn cap, variance,
multipliers, AI weights) and loads overrides from YAML files.
"""
import math
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Optional, TYPE_CHECKING

import yaml

from ..data.game_enums import CombatAction
from ..events.events import LogMessage

if TYPE_CHECKING:
    from ..events.event_manager import EventManager


ActionWeights = tuple[tuple[CombatAction, float], ...]

DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent / "assets" / "config" / "battle_rules.yaml"


class BattleConfigError(ValueError):
    """Raised when a battle rules configuration is malformed."""


@dataclass(frozen=True)
class BattleConfig:
    """Tunable battle rules.

    Weight tables are ordered: an action is picked by walking the table and
    stopping at the first entry whose cumulative weight exceeds the draw.
    """
    max_turns: int = 50

    # Stat derivation
    variance_min: float = 0.95
    variance_span: float = 0.10

    # Damage
    min_damage: int = 5
    crit_multiplier: float = 2.0
    heavy_attack_multiplier: float = 1.5
    defend_stance_multiplier: float = 0.5
    elemental_advantage_multiplier: float = 1.5

    # AI
    low_hp_threshold: float = 30.0
    normal_weights: ActionWeights = field(default=(
        (CombatAction.ATTACK, 0.6),
        (CombatAction.HEAVY_ATTACK, 0.3),
        (CombatAction.DEFEND, 0.1),
    ))
    low_hp_weights: ActionWeights = field(default=(
        (CombatAction.DEFEND, 0.3),
        (CombatAction.ATTACK, 0.4),
        (CombatAction.HEAVY_ATTACK, 0.3),
    ))

    def validate(self) -> None:
        """Check the rules are usable.

        Raises:
            BattleConfigError: If any value is out of range
        """
        if self.max_turns <= 0:
            raise BattleConfigError(f"max_turns must be positive, got {self.max_turns}")
        if self.variance_min <= 0 or self.variance_span < 0:
            raise BattleConfigError("variance_min must be positive and variance_span non-negative")
        if self.min_damage < 0:
            raise BattleConfigError(f"min_damage cannot be negative, got {self.min_damage}")
        if not 0 <= self.low_hp_threshold <= 100:
            raise BattleConfigError(f"low_hp_threshold must be a percentage, got {self.low_hp_threshold}")
        for table_name in ("normal_weights", "low_hp_weights"):
            table: ActionWeights = getattr(self, table_name)
            if not table:
                raise BattleConfigError(f"{table_name} cannot be empty")
            if any(weight < 0 for _, weight in table):
                raise BattleConfigError(f"{table_name} contains a negative weight")
            total = sum(weight for _, weight in table)
            if not math.isclose(total, 1.0, abs_tol=1e-9):
                raise BattleConfigError(f"{table_name} must sum to 1.0, got {total}")


DEFAULT_BATTLE_CONFIG = BattleConfig()


class BattleConfigLoader:
    """Loads battle rules from YAML files."""

    def __init__(self, config_path: Optional[str] = None, event_manager: Optional["EventManager"] = None):
        self.config_path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH
        self.event_manager = event_manager
        self._raw: dict[str, Any] = {}

    def load_config(self) -> BattleConfig:
        """
        Load configuration from the YAML file.

        A missing file is not fatal: the default rules are used and a warning
        is logged.

        Returns:
            BattleConfig: The loaded (and validated) rules

        Raises:
            BattleConfigError: If the file exists but is malformed
        """
        if not self.config_path.exists():
            self._warn(f"Battle rules file not found: {self.config_path}, using defaults")
            return DEFAULT_BATTLE_CONFIG

        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                self._raw = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise BattleConfigError(f"Failed to parse battle rules {self.config_path}: {e}")

        config = self.parse(self._raw)
        self._emit_log(f"Loaded battle rules from {self.config_path}")
        return config

    @staticmethod
    def parse(data: dict[str, Any]) -> BattleConfig:
        """Build a BattleConfig from a parsed YAML mapping.

        Sections and keys that are absent keep their default values.
        """
        if not isinstance(data, dict):
            raise BattleConfigError("Battle rules must be a mapping")

        overrides: dict[str, Any] = {}
        try:
            battle = BattleConfigLoader._section(data, 'battle')
            if 'max_turns' in battle:
                overrides['max_turns'] = BattleConfigLoader._parse_int(battle, 'max_turns')

            stats = BattleConfigLoader._section(data, 'stats')
            for key in ('variance_min', 'variance_span'):
                if key in stats:
                    overrides[key] = float(stats[key])

            damage = BattleConfigLoader._section(data, 'damage')
            if 'min_damage' in damage:
                overrides['min_damage'] = BattleConfigLoader._parse_int(damage, 'min_damage')
            for key in ('crit_multiplier', 'heavy_attack_multiplier',
                        'defend_stance_multiplier', 'elemental_advantage_multiplier'):
                if key in damage:
                    overrides[key] = float(damage[key])

            ai = BattleConfigLoader._section(data, 'ai')
            if 'low_hp_threshold' in ai:
                overrides['low_hp_threshold'] = float(ai['low_hp_threshold'])
            for key in ('normal_weights', 'low_hp_weights'):
                if key in ai:
                    overrides[key] = BattleConfigLoader._parse_weights(key, ai[key])
        except BattleConfigError:
            raise
        except (TypeError, ValueError) as e:
            raise BattleConfigError(f"Invalid battle rules: {e}")

        config = replace(DEFAULT_BATTLE_CONFIG, **overrides)
        config.validate()
        return config

    @staticmethod
    def _section(data: dict[str, Any], name: str) -> dict[str, Any]:
        """Return a top-level section, empty when absent."""
        section = data.get(name)
        if section is None:
            return {}
        if not isinstance(section, dict):
            raise BattleConfigError(f"Section '{name}' must be a mapping, got {type(section).__name__}")
        return section

    @staticmethod
    def _parse_int(section: dict[str, Any], key: str) -> int:
        """Read a whole number; bools and fractional values are rejected."""
        value = section[key]
        if isinstance(value, bool) or not isinstance(value, int):
            raise BattleConfigError(f"{key} must be an integer, got {value!r}")
        return value

    @staticmethod
    def _parse_weights(table_name: str, entries: Any) -> ActionWeights:
        """Parse an ordered list of ``{action, weight}`` entries."""
        if not isinstance(entries, list):
            raise BattleConfigError(f"{table_name} must be a list of {{action, weight}} entries")

        weights = []
        for entry in entries:
            if not isinstance(entry, dict):
                raise BattleConfigError(f"{table_name} entry must be a mapping, got {entry!r}")
            if 'action' not in entry or 'weight' not in entry:
                raise BattleConfigError(f"Weight entry needs 'action' and 'weight': {entry!r}")
            try:
                action = CombatAction(entry['action'])
            except ValueError:
                raise BattleConfigError(f"Unknown action in weight table: {entry['action']!r}")
            weights.append((action, float(entry['weight'])))
        return tuple(weights)

    def _warn(self, message: str) -> None:
        if self.event_manager is None:
            print(f"Warning: {message}")
            return
        self._emit_log(message, level="WARNING")

    def _emit_log(self, message: str, level: str = "INFO") -> None:
        """Emit a log message event."""
        if self.event_manager is None:
            return
        self.event_manager.publish(
            LogMessage(
                turn=0,
                message=message,
                category="SYSTEM",
                level=level,
                source="BattleConfigLoader"
            ),
            source="BattleConfigLoader"
        )


def load_battle_config(config_path: Optional[str] = None,
                       event_manager: Optional["EventManager"] = None) -> BattleConfig:
    """Convenience wrapper around BattleConfigLoader."""
    return BattleConfigLoader(config_path, event_manager).load_config()
