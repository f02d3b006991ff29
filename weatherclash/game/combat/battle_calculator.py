"""
Battle calculation system for damage rolls and forecasts.

This module provides the damage formula used during battle resolution, and a
read-only forecast so a UI can preview damage without rolling anything.
HP changes are the resolver's job, never the calculator's.
"""
from typing import Optional, Protocol

from ...core.config.battle_config import BattleConfig, DEFAULT_BATTLE_CONFIG
from ...core.data.data_structures import DamageCalculation, DamageForecast, round_half_up
from ...core.data.game_enums import CombatAction, ElementalType
from ...core.engine.random_source import RandomSource, create_rng, draw
from .elements import get_elemental_advantage
from .fighter import Fighter


class Combatant(Protocol):
    """What the damage formula needs to know about either side."""

    @property
    def attack(self) -> int: ...

    @property
    def defense(self) -> int: ...

    @property
    def crit_chance(self) -> float: ...

    @property
    def elemental_type(self) -> ElementalType: ...


class BattleCalculator:
    """Calculates damage rolls and forecasts."""

    @staticmethod
    def calculate_damage(
        attacker: Combatant,
        defender: Combatant,
        action: CombatAction,
        rng: Optional[RandomSource] = None,
        config: BattleConfig = DEFAULT_BATTLE_CONFIG,
    ) -> DamageCalculation:
        """
        Roll damage for one action.

        Args:
            attacker: The acting side
            defender: The receiving side; an ``is_defending`` attribute is
                honored when present
            action: The chosen action
            rng: Random source for the critical hit roll
            config: Battle rules

        Returns:
            DamageCalculation with every multiplier used
        """
        rng = create_rng(rng)

        base_damage = BattleCalculator._calculate_base_damage(attacker, defender)
        elemental_multiplier = get_elemental_advantage(
            attacker.elemental_type, defender.elemental_type, config.elemental_advantage_multiplier
        )

        # Rolled even for defend so the number of draws per turn is fixed
        is_critical = draw(rng) * 100 < attacker.crit_chance
        crit_multiplier = config.crit_multiplier if is_critical else 1.0

        action_multiplier = BattleCalculator._action_multiplier(action, config)
        defense_multiplier = (
            config.defend_stance_multiplier if getattr(defender, "is_defending", False) else 1.0
        )

        final_damage = BattleCalculator._finalize_damage(
            base_damage * elemental_multiplier * crit_multiplier * action_multiplier * defense_multiplier,
            action,
            config,
        )

        return DamageCalculation(
            base_damage=round_half_up(base_damage),
            elemental_multiplier=elemental_multiplier,
            crit_multiplier=crit_multiplier,
            action_multiplier=action_multiplier,
            defense_multiplier=defense_multiplier,
            final_damage=final_damage,
            is_critical=is_critical,
        )

    @staticmethod
    def calculate_forecast(
        attacker: Fighter,
        defender: Fighter,
        config: BattleConfig = DEFAULT_BATTLE_CONFIG,
    ) -> DamageForecast:
        """
        Preview the damage of each offensive action, with and without a crit.

        Uses the defender's current stance. Nothing is rolled.
        """
        base_damage = BattleCalculator._calculate_base_damage(attacker, defender)
        elemental_multiplier = get_elemental_advantage(
            attacker.elemental_type, defender.elemental_type, config.elemental_advantage_multiplier
        )
        defense_multiplier = config.defend_stance_multiplier if defender.is_defending else 1.0

        def preview(action: CombatAction, crit_multiplier: float) -> int:
            raw = (base_damage * elemental_multiplier * crit_multiplier
                   * BattleCalculator._action_multiplier(action, config) * defense_multiplier)
            return BattleCalculator._finalize_damage(raw, action, config)

        return DamageForecast(
            attacker_name=attacker.name,
            defender_name=defender.name,
            attack_damage=preview(CombatAction.ATTACK, 1.0),
            attack_crit_damage=preview(CombatAction.ATTACK, config.crit_multiplier),
            heavy_damage=preview(CombatAction.HEAVY_ATTACK, 1.0),
            heavy_crit_damage=preview(CombatAction.HEAVY_ATTACK, config.crit_multiplier),
            crit_chance=attacker.crit_chance,
            elemental_multiplier=elemental_multiplier,
        )

    @staticmethod
    def _calculate_base_damage(attacker: Combatant, defender: Combatant) -> float:
        """Attack minus half the defense. May be negative."""
        return attacker.attack - defender.defense * 0.5

    @staticmethod
    def _action_multiplier(action: CombatAction, config: BattleConfig) -> float:
        if action == CombatAction.HEAVY_ATTACK:
            return config.heavy_attack_multiplier
        if action == CombatAction.DEFEND:
            return 0.0
        return 1.0

    @staticmethod
    def _finalize_damage(raw_damage: float, action: CombatAction, config: BattleConfig) -> int:
        """Round and apply the floor: 0 for defend, min_damage for anything else."""
        floor = 0 if action == CombatAction.DEFEND else config.min_damage
        return max(round_half_up(raw_damage), floor)


def calculate_damage(
    attacker: Combatant,
    defender: Combatant,
    action: CombatAction,
    rng: Optional[RandomSource] = None,
    config: BattleConfig = DEFAULT_BATTLE_CONFIG,
) -> DamageCalculation:
    """Module-level shortcut for BattleCalculator.calculate_damage."""
    return BattleCalculator.calculate_damage(attacker, defender, action, rng, config)
