"""Mutable working copy of a combatant for the duration of one battle."""

from dataclasses import dataclass

from ...core.data.data_structures import CombatStats
from ...core.data.game_enums import ElementalType


@dataclass
class Fighter:
    """A city in the middle of a battle.

    Only ``hp`` and ``is_defending`` change while the battle runs; everything
    else reads through to the stats the fighter was created from.
    """
    name: str
    stats: CombatStats
    hp: int
    is_defending: bool = False

    @classmethod
    def from_stats(cls, name: str, stats: CombatStats) -> "Fighter":
        return cls(name=name, stats=stats, hp=stats.hp)

    @property
    def max_hp(self) -> int:
        return self.stats.max_hp

    @property
    def attack(self) -> int:
        return self.stats.attack

    @property
    def defense(self) -> int:
        return self.stats.defense

    @property
    def speed(self) -> int:
        return self.stats.speed

    @property
    def crit_chance(self) -> float:
        return self.stats.crit_chance

    @property
    def elemental_type(self) -> ElementalType:
        return self.stats.elemental_type

    @property
    def is_alive(self) -> bool:
        return self.hp > 0

    @property
    def hp_percentage(self) -> float:
        """Current HP as a percentage of max HP (can exceed 100)."""
        if self.max_hp <= 0:
            return 0.0
        return self.hp / self.max_hp * 100

    def take_damage(self, amount: int) -> None:
        """Lose HP, never dropping below 0."""
        self.hp = max(0, self.hp - amount)
