"""Elemental advantage lookups."""

from ...core.config.battle_config import DEFAULT_BATTLE_CONFIG
from ...core.data.game_enums import ElementalType
from ...core.data.game_info import ELEMENT_DATA

NEUTRAL_MULTIPLIER = 1.0


def beats(attacker_type: ElementalType, defender_type: ElementalType) -> bool:
    """Whether the attacker's element is super effective against the defender's."""
    return defender_type in ELEMENT_DATA[attacker_type].beats


def get_elemental_advantage(
    attacker_type: ElementalType,
    defender_type: ElementalType,
    advantage_multiplier: float = DEFAULT_BATTLE_CONFIG.elemental_advantage_multiplier,
) -> float:
    """Damage multiplier for an attacker/defender element pair."""
    if beats(attacker_type, defender_type):
        return advantage_multiplier
    return NEUTRAL_MULTIPLIER
