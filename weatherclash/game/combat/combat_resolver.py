"""
Combat resolution system for running a full battle between two cities.

This module owns the turn loop: turn order, action choice, damage
application, defending stances and the final verdict. Damage numbers come
from the BattleCalculator and action choices from the AIController.
"""
import time
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

from ...core.config.battle_config import BattleConfig, DEFAULT_BATTLE_CONFIG
from ...core.data.data_structures import BattleResult, BattleTurn, CombatStats, FinalStats
from ...core.data.game_enums import BattlePhase, CombatAction
from ...core.engine.random_source import RandomSource, create_rng, draw
from ...core.events.events import (
    BattleEnded,
    BattlePhaseChanged,
    BattleStarted,
    LogMessage,
    TurnResolved,
)
from ..ai.ai_controller import AIController
from .battle_calculator import BattleCalculator
from .fighter import Fighter

if TYPE_CHECKING:
    from ...core.events.event_manager import EventManager


ACTION_VERBS = {
    CombatAction.ATTACK: "attacks",
    CombatAction.HEAVY_ATTACK: "unleashes a heavy attack on",
    CombatAction.DEFEND: "defends",
}


def generate_description(
    attacker: str,
    defender: str,
    action: CombatAction,
    damage: int,
    is_critical: bool,
    elemental_multiplier: float,
) -> str:
    """Build the human readable line for one turn."""
    if action == CombatAction.DEFEND:
        return f"{attacker} takes a defensive stance!"

    description = f"{attacker} {ACTION_VERBS[action]} {defender} for {damage} damage"

    if is_critical:
        description += " (CRITICAL HIT!)"

    if elemental_multiplier > 1.0:
        description += " (Super effective!)"

    return description + "!"


@dataclass
class BattleState:
    """Everything that changes during one battle.

    Created fresh for every resolution and never shared, so one resolver can
    run many battles at once.
    """
    fighter1: Fighter
    fighter2: Fighter
    phase: BattlePhase = BattlePhase.NOT_STARTED
    current_turn: int = 1
    city1_turn: bool = True
    turns: list[BattleTurn] = field(default_factory=list)

    @property
    def attacker(self) -> Fighter:
        return self.fighter1 if self.city1_turn else self.fighter2

    @property
    def defender(self) -> Fighter:
        return self.fighter2 if self.city1_turn else self.fighter1

    @property
    def both_standing(self) -> bool:
        return self.fighter1.is_alive and self.fighter2.is_alive


class BattleResolver:
    """Runs battles to completion."""

    def __init__(
        self,
        config: Optional[BattleConfig] = None,
        event_manager: Optional["EventManager"] = None,
        ai_controller: Optional[AIController] = None,
    ):
        self.config = config or DEFAULT_BATTLE_CONFIG
        self.event_manager = event_manager
        self.ai_controller = ai_controller or AIController(self.config, event_manager)

    def simulate_battle(
        self,
        city1_name: str,
        city1_stats: CombatStats,
        city2_name: str,
        city2_stats: CombatStats,
        rng: Optional[RandomSource] = None,
    ) -> BattleResult:
        """
        Fight a full battle between two cities.

        Args:
            city1_name: Name of the first side
            city1_stats: Stats of the first side
            city2_name: Name of the second side
            city2_stats: Stats of the second side
            rng: Random source for turn order, AI choices and crit rolls

        Returns:
            BattleResult with the full turn history
        """
        rng = create_rng(rng)
        start_time = time.perf_counter()

        state = BattleState(
            fighter1=Fighter.from_stats(city1_name, city1_stats),
            fighter2=Fighter.from_stats(city2_name, city2_stats),
        )
        self._set_phase(state, BattlePhase.IN_PROGRESS)

        # Faster side is more likely, not certain, to open
        speed_total = state.fighter1.speed + state.fighter2.speed
        city1_goes_first = draw(rng) * speed_total < state.fighter1.speed
        state.city1_turn = city1_goes_first

        first_name = city1_name if city1_goes_first else city2_name
        self._emit_log(f"Battle started: {city1_name} vs {city2_name}")
        self._emit_log(f"{first_name} goes first!")
        self._publish(BattleStarted(
            turn=0, city1_name=city1_name, city2_name=city2_name, first_attacker=first_name
        ))

        while state.both_standing and state.current_turn <= self.config.max_turns:
            battle_turn = self._resolve_turn(state, rng)
            state.turns.append(battle_turn)
            self._emit_log(f"Turn {battle_turn.turn}: {battle_turn.description}", level="DEBUG")
            self._publish(TurnResolved(turn=battle_turn.turn, battle_turn=battle_turn))

            if not state.defender.is_alive:
                break

            # A stance lapses once its holder attacks again
            if battle_turn.action != CombatAction.DEFEND:
                state.attacker.is_defending = False

            state.city1_turn = not state.city1_turn
            state.current_turn += 1

        self._set_phase(state, BattlePhase.FINISHED)

        winner, loser = self._determine_winner(state)
        battle_duration = int((time.perf_counter() - start_time) * 1000)

        result = BattleResult(
            winner=winner.name,
            loser=loser.name,
            turns=tuple(state.turns),
            final_stats=FinalStats(city1_hp=state.fighter1.hp, city2_hp=state.fighter2.hp),
            battle_duration=battle_duration,
        )

        self._emit_log(f"Battle ended: {result.winner} wins! Duration: {battle_duration}ms")
        self._publish(BattleEnded(turn=len(state.turns), result=result))
        return result

    def _resolve_turn(self, state: BattleState, rng: RandomSource) -> BattleTurn:
        """Play the current attacker's turn and record it."""
        attacker = state.attacker
        defender = state.defender

        decision = self.ai_controller.choose_action(attacker, rng, state.current_turn)
        action = decision.action

        damage = BattleCalculator.calculate_damage(attacker, defender, action, rng, self.config)

        if action != CombatAction.DEFEND:
            defender.take_damage(damage.final_damage)
            # Being hit breaks a defensive stance
            defender.is_defending = False
        else:
            attacker.is_defending = True

        return BattleTurn(
            turn=state.current_turn,
            attacker=attacker.name,
            defender=defender.name,
            action=action,
            damage=damage.final_damage,
            is_critical=damage.is_critical,
            attacker_hp_remaining=attacker.hp,
            defender_hp_remaining=defender.hp,
            description=generate_description(
                attacker.name,
                defender.name,
                action,
                damage.final_damage,
                damage.is_critical,
                damage.elemental_multiplier,
            ),
        )

    @staticmethod
    def _determine_winner(state: BattleState) -> tuple[Fighter, Fighter]:
        """Pick winner and loser.

        A knocked out side always loses. When the turn cap ends the battle
        with both standing, higher HP wins and side 1 takes ties.
        """
        fighter1, fighter2 = state.fighter1, state.fighter2
        if state.both_standing:
            city1_wins = fighter1.hp >= fighter2.hp
        else:
            city1_wins = fighter1.is_alive
        return (fighter1, fighter2) if city1_wins else (fighter2, fighter1)

    def _set_phase(self, state: BattleState, new_phase: BattlePhase) -> None:
        old_phase = state.phase
        state.phase = new_phase
        self._publish(BattlePhaseChanged(
            turn=len(state.turns), old_phase=old_phase, new_phase=new_phase
        ))

    def _publish(self, event) -> None:
        if self.event_manager is not None:
            self.event_manager.publish(event, source="BattleResolver")

    def _emit_log(self, message: str, category: str = "BATTLE", level: str = "INFO") -> None:
        """Emit a log message event."""
        self._publish(
            LogMessage(
                turn=0,
                message=message,
                category=category,
                level=level,
                source="BattleResolver"
            )
        )


def simulate_battle(
    city1_name: str,
    city1_stats: CombatStats,
    city2_name: str,
    city2_stats: CombatStats,
    rng: Optional[RandomSource] = None,
    config: Optional[BattleConfig] = None,
) -> BattleResult:
    """Run a battle with a throwaway resolver and no event reporting."""
    return BattleResolver(config).simulate_battle(city1_name, city1_stats, city2_name, city2_stats, rng)
