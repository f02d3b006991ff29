"""
AI Controller for weather battles.

Both sides of a battle are computer controlled. Each turn the acting side
looks only at its own HP ratio, picks the weight table for its situation and
rolls once against it:

- Normal: mostly attacks, sometimes heavy attacks, rarely defends
- Low HP (under the configured threshold): defends far more often
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING, Optional

from ...core.config.battle_config import ActionWeights, BattleConfig, DEFAULT_BATTLE_CONFIG
from ...core.data.game_enums import CombatAction
from ...core.engine.random_source import RandomSource, create_rng, draw
from ...core.events.events import DebugMessage

if TYPE_CHECKING:
    from ..combat.fighter import Fighter
    from ...core.events.event_manager import EventManager


class ThreatLevel(Enum):
    """Assessment of the acting side's situation"""
    NORMAL = auto()        # Healthy, fight aggressively
    LOW_HP = auto()        # Below the threshold, favor defending


@dataclass(frozen=True)
class AIDecision:
    """Represents an AI decision with reasoning"""
    action: CombatAction
    threat_level: ThreatLevel
    roll: float
    reasoning: str = ""


def hp_percentage(current_hp: int, max_hp: int) -> float:
    """Current HP as a percentage of max HP."""
    if max_hp <= 0:
        return 0.0
    return current_hp / max_hp * 100


def assess_threat(current_hp: int, max_hp: int, config: BattleConfig = DEFAULT_BATTLE_CONFIG) -> ThreatLevel:
    if hp_percentage(current_hp, max_hp) < config.low_hp_threshold:
        return ThreatLevel.LOW_HP
    return ThreatLevel.NORMAL


def pick_weighted(weights: ActionWeights, roll: float) -> CombatAction:
    """Walk an ordered weight table and return the entry the roll lands in."""
    cumulative = 0.0
    for action, weight in weights:
        # Rounded so 0.6 + 0.3 compares as 0.9
        cumulative = round(cumulative + weight, 12)
        if roll < cumulative:
            return action
    return weights[-1][0]


def select_action(
    current_hp: int,
    max_hp: int,
    rng: Optional[RandomSource] = None,
    config: BattleConfig = DEFAULT_BATTLE_CONFIG,
) -> CombatAction:
    """Choose an action from the acting side's own HP ratio."""
    rng = create_rng(rng)
    threat = assess_threat(current_hp, max_hp, config)
    weights = config.low_hp_weights if threat == ThreatLevel.LOW_HP else config.normal_weights
    return pick_weighted(weights, draw(rng))


class AIController:
    """Chooses actions for fighters and reports its reasoning."""

    def __init__(
        self,
        config: Optional[BattleConfig] = None,
        event_manager: Optional[EventManager] = None,
    ):
        self.config = config or DEFAULT_BATTLE_CONFIG
        self.event_manager = event_manager

    def choose_action(self, fighter: Fighter, rng: RandomSource, turn: int = 0) -> AIDecision:
        """Choose the action for this fighter's turn"""
        threat = assess_threat(fighter.hp, fighter.max_hp, self.config)
        weights = self.config.low_hp_weights if threat == ThreatLevel.LOW_HP else self.config.normal_weights
        roll = draw(rng)
        action = pick_weighted(weights, roll)

        decision = AIDecision(
            action=action,
            threat_level=threat,
            roll=roll,
            reasoning=f"{fighter.name} at {fighter.hp_percentage:.0f}% HP ({threat.name.lower()}) rolled {roll:.3f}",
        )

        if self.event_manager is not None:
            self.event_manager.publish(
                DebugMessage(
                    turn=turn,
                    message=f"{decision.reasoning} -> {action.value}",
                    source="AIController",
                    context={"action": action.value, "threat_level": threat.name},
                ),
                source="AIController"
            )
        return decision
