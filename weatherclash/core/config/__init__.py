"""Configuration for battle rules.

- battle_config.py: BattleConfig defaults and the YAML loader
"""

from .battle_config import (
    ActionWeights,
    BattleConfig,
    BattleConfigError,
    BattleConfigLoader,
    DEFAULT_BATTLE_CONFIG,
    DEFAULT_CONFIG_PATH,
    load_battle_config,
)

__all__ = [
    "ActionWeights",
    "BattleConfig",
    "BattleConfigError",
    "BattleConfigLoader",
    "DEFAULT_BATTLE_CONFIG",
    "DEFAULT_CONFIG_PATH",
    "load_battle_config",
]
