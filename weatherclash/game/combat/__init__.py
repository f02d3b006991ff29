"""Combat system components.

This package contains the core combat logic with clear separation of concerns:
- elements.py: Elemental advantage lookups
- fighter.py: Mutable per-battle working copy of a combatant
- battle_calculator.py: Damage rolls and read-only forecasts
- combat_resolver.py: Turn loop, stance handling and the final verdict
"""

from .battle_calculator import BattleCalculator, calculate_damage
from .combat_resolver import BattleResolver, BattleState, generate_description, simulate_battle
from .elements import beats, get_elemental_advantage
from .fighter import Fighter

__all__ = [
    "BattleCalculator",
    "calculate_damage",
    "BattleResolver",
    "BattleState",
    "generate_description",
    "simulate_battle",
    "beats",
    "get_elemental_advantage",
    "Fighter",
]
