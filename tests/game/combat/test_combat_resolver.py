"""
Unit tests for the BattleResolver.

Scripted random sources pin down exact battles; seeded generators check the
properties that must hold for any battle.
"""
from dataclasses import replace
from unittest.mock import Mock

import numpy as np
import pytest

from weatherclash.core.config.battle_config import DEFAULT_BATTLE_CONFIG
from weatherclash.core.data.game_enums import BattlePhase, CombatAction, ElementalType, WeatherCondition
from weatherclash.core.events.events import EventType
from weatherclash.game.combat.combat_resolver import BattleResolver, generate_description, simulate_battle
from weatherclash.game.stats.stat_deriver import derive_stats
from tests.test_utils import ConstantRandom, ScriptedRandom, TestDataBuilder

# Draw values
CITY1_FIRST = 0.0
CITY2_FIRST = 0.99
AI_ATTACK = 0.5      # attack in both weight tables
AI_DEFEND = 0.95     # defend in the normal table
NO_CRIT = 0.99


class TestGenerateDescription:
    """Test turn descriptions."""

    def test_attack(self):
        assert generate_description("Oslo", "Lima", CombatAction.ATTACK, 40, False, 1.0) == \
            "Oslo attacks Lima for 40 damage!"

    def test_heavy_attack_with_crit_and_advantage(self):
        """Test both suffixes, crit first."""
        description = generate_description("Oslo", "Lima", CombatAction.HEAVY_ATTACK, 180, True, 1.5)
        assert description == \
            "Oslo unleashes a heavy attack on Lima for 180 damage (CRITICAL HIT!) (Super effective!)!"

    def test_defend_ignores_everything_else(self):
        """Defend produces the stance line only."""
        assert generate_description("Oslo", "Lima", CombatAction.DEFEND, 0, True, 1.5) == \
            "Oslo takes a defensive stance!"

    def test_idempotent(self):
        """The same inputs always give the same text."""
        args = ("Oslo", "Lima", CombatAction.ATTACK, 12, True, 1.0)
        assert generate_description(*args) == generate_description(*args)


class TestScriptedBattles:
    """Exact battles driven by scripted draws."""

    def test_all_attack_battle(self):
        """Two identical fighters trade 40 damage hits until city2 falls."""
        stats = TestDataBuilder.stats()
        scripted = ScriptedRandom([CITY1_FIRST] + [AI_ATTACK, NO_CRIT] * 5)

        result = simulate_battle("Alpha", stats, "Beta", stats, scripted)

        assert scripted.remaining == 0
        assert result.winner == "Alpha"
        assert result.loser == "Beta"
        assert result.turn_count == 5
        assert result.final_stats.city1_hp == 20
        assert result.final_stats.city2_hp == 0

        assert [turn.attacker for turn in result.turns] == ["Alpha", "Beta", "Alpha", "Beta", "Alpha"]
        assert [turn.turn for turn in result.turns] == [1, 2, 3, 4, 5]
        assert all(turn.damage == 40 for turn in result.turns)
        assert [turn.defender_hp_remaining for turn in result.turns] == [60, 60, 20, 20, 0]

        first = result.turns[0]
        assert first.attacker_hp_remaining == 100
        assert first.description == "Alpha attacks Beta for 40 damage!"

    def test_turn_order_from_speed_draw(self):
        """A high draw hands the first turn to city2."""
        stats = TestDataBuilder.stats()
        scripted = ScriptedRandom([CITY2_FIRST] + [AI_ATTACK, NO_CRIT] * 5)

        result = simulate_battle("Alpha", stats, "Beta", stats, scripted)

        assert result.turns[0].attacker == "Beta"
        assert result.winner == "Beta"
        assert result.final_stats.city1_hp == 0
        assert result.final_stats.city2_hp == 20

    def test_turn_order_weighted_by_speed(self):
        """The draw is scaled by total speed, not compared to 0.5."""
        fast = TestDataBuilder.stats(speed=90)
        slow = TestDataBuilder.stats(speed=10)
        config = replace(DEFAULT_BATTLE_CONFIG, max_turns=1)

        # 0.85 * 100 = 85 < 90
        result = simulate_battle("Fast", fast, "Slow", slow, ScriptedRandom([0.85, AI_ATTACK, NO_CRIT]), config)
        assert result.turns[0].attacker == "Fast"

        # 0.85 * 100 = 85 >= 10
        result = simulate_battle("Slow", slow, "Fast", fast, ScriptedRandom([0.85, AI_ATTACK, NO_CRIT]), config)
        assert result.turns[0].attacker == "Fast"

    def test_defend_halves_next_hit_then_breaks(self):
        """A stance halves one incoming hit and is gone afterwards."""
        stats = TestDataBuilder.stats()
        config = replace(DEFAULT_BATTLE_CONFIG, max_turns=4)
        scripted = ScriptedRandom([
            CITY1_FIRST,
            AI_DEFEND, NO_CRIT,   # 1: Alpha defends
            AI_ATTACK, NO_CRIT,   # 2: Beta hits a defending Alpha
            AI_ATTACK, NO_CRIT,   # 3: Alpha hits Beta
            AI_ATTACK, NO_CRIT,   # 4: Beta hits Alpha, stance already broken
        ])

        result = simulate_battle("Alpha", stats, "Beta", stats, scripted, config)

        assert [turn.action for turn in result.turns] == [
            CombatAction.DEFEND, CombatAction.ATTACK, CombatAction.ATTACK, CombatAction.ATTACK
        ]
        assert [turn.damage for turn in result.turns] == [0, 20, 40, 40]
        assert result.turns[0].description == "Alpha takes a defensive stance!"
        assert result.final_stats.city1_hp == 40
        assert result.final_stats.city2_hp == 60

    def test_stance_lapses_when_holder_attacks(self):
        """Defend, then attack: the stance does not carry into the next hit."""
        stats = TestDataBuilder.stats()
        config = replace(DEFAULT_BATTLE_CONFIG, max_turns=4)
        scripted = ScriptedRandom([
            CITY1_FIRST,
            AI_DEFEND, NO_CRIT,   # 1: Alpha defends
            AI_DEFEND, NO_CRIT,   # 2: Beta defends
            AI_ATTACK, NO_CRIT,   # 3: Alpha hits a defending Beta
            AI_ATTACK, NO_CRIT,   # 4: Beta hits Alpha
        ])

        result = simulate_battle("Alpha", stats, "Beta", stats, scripted, config)

        assert [turn.damage for turn in result.turns] == [0, 0, 20, 40]

    def test_low_hp_fighter_uses_low_hp_table(self):
        """Below 30% HP a low draw means defend."""
        hurt = TestDataBuilder.stats(hp=20, max_hp=100)
        healthy = TestDataBuilder.stats()
        config = replace(DEFAULT_BATTLE_CONFIG, max_turns=1)

        result = simulate_battle("Hurt", hurt, "Healthy", healthy, ScriptedRandom([CITY1_FIRST, 0.1, NO_CRIT]), config)

        assert result.turns[0].action == CombatAction.DEFEND

    def test_knockout_ends_battle_immediately(self):
        """No turns are played after a side reaches 0 HP."""
        glass = TestDataBuilder.stats(hp=10, max_hp=100)
        scripted = ScriptedRandom([CITY1_FIRST, AI_ATTACK, NO_CRIT, 0.5, 0.5])

        result = simulate_battle("Hitter", TestDataBuilder.stats(), "Glass", glass, scripted)

        assert result.turn_count == 1
        assert result.winner == "Hitter"
        assert result.final_stats.city2_hp == 0
        assert scripted.remaining == 2


class TestTurnCap:
    """Test battles that run out of turns."""

    def test_cap_of_fifty_turns(self):
        """Endless defending stops at turn 50."""
        stats = TestDataBuilder.stats()
        result = simulate_battle("Alpha", stats, "Beta", stats, ConstantRandom(AI_DEFEND))

        assert result.turn_count == 50
        assert all(turn.action == CombatAction.DEFEND for turn in result.turns)
        assert result.final_stats.city1_hp == 100
        assert result.final_stats.city2_hp == 100

    def test_tie_goes_to_city1(self):
        """Equal HP at the cap means city1 wins."""
        stats = TestDataBuilder.stats()
        result = simulate_battle("Alpha", stats, "Beta", stats, ConstantRandom(AI_DEFEND))

        assert result.winner == "Alpha"
        assert result.loser == "Beta"

    def test_higher_hp_wins_at_cap(self):
        """Strictly more HP at the cap wins, even for city2."""
        result = simulate_battle(
            "Alpha", TestDataBuilder.stats(hp=100),
            "Beta", TestDataBuilder.stats(hp=120),
            ConstantRandom(AI_DEFEND),
        )

        assert result.winner == "Beta"
        assert result.loser == "Alpha"

    def test_configured_cap(self):
        """Test the cap comes from the config."""
        stats = TestDataBuilder.stats()
        config = replace(DEFAULT_BATTLE_CONFIG, max_turns=3)
        result = simulate_battle("Alpha", stats, "Beta", stats, ConstantRandom(AI_DEFEND), config)

        assert result.turn_count == 3


class TestBattleProperties:
    """Properties that hold for every battle."""

    OBSERVATIONS = [
        TestDataBuilder.observation(temperature=32.0, humidity=20.0, clouds=0.0, condition=WeatherCondition.CLEAR),
        TestDataBuilder.observation(temperature=-8.0, humidity=90.0, condition=WeatherCondition.SNOW, visibility=1500.0),
        TestDataBuilder.observation(temperature=24.0, wind_speed=14.0, condition=WeatherCondition.THUNDERSTORM),
        TestDataBuilder.observation(temperature=12.0, humidity=95.0, condition=WeatherCondition.FOG, visibility=600.0),
        TestDataBuilder.observation(temperature=15.0, wind_speed=18.0, condition=WeatherCondition.CLOUDS),
        TestDataBuilder.observation(temperature=9.0, humidity=85.0, condition=WeatherCondition.RAIN),
    ]

    def test_invariants_over_many_seeds(self):
        """Termination, one winner, valid damage and consistent HP for random battles."""
        for seed in range(150):
            rng = np.random.default_rng(seed)
            obs1 = self.OBSERVATIONS[seed % len(self.OBSERVATIONS)]
            obs2 = self.OBSERVATIONS[(seed * 7 + 3) % len(self.OBSERVATIONS)]
            stats1 = derive_stats(obs1, rng)
            stats2 = derive_stats(obs2, rng)

            result = simulate_battle("Home", stats1, "Away", stats2, rng)
            final = result.final_stats

            assert 1 <= result.turn_count <= 50
            assert {result.winner, result.loser} == {"Home", "Away"}
            assert final.city1_hp >= 0 and final.city2_hp >= 0

            if final.city1_hp > 0 and final.city2_hp > 0:
                assert result.turn_count == 50
            else:
                assert min(final.city1_hp, final.city2_hp) == 0
                winner_hp = final.city1_hp if result.winner == "Home" else final.city2_hp
                assert winner_hp > 0

            for index, turn in enumerate(result.turns, start=1):
                assert turn.turn == index
                assert turn.attacker != turn.defender
                if turn.action == CombatAction.DEFEND:
                    assert turn.damage == 0
                else:
                    assert turn.damage >= DEFAULT_BATTLE_CONFIG.min_damage

            attackers = [turn.attacker for turn in result.turns]
            assert all(a != b for a, b in zip(attackers, attackers[1:]))

    def test_same_seed_same_battle(self):
        """Seeded battles replay exactly."""
        stats1 = TestDataBuilder.stats(elemental_type=ElementalType.FIRE)
        stats2 = TestDataBuilder.stats(elemental_type=ElementalType.WATER, speed=70)

        first = simulate_battle("A", stats1, "B", stats2, np.random.default_rng(11))
        second = simulate_battle("A", stats1, "B", stats2, np.random.default_rng(11))

        assert first.turns == second.turns
        assert first.winner == second.winner

    def test_inputs_not_mutated(self):
        """The caller's stats are untouched by the battle."""
        stats = TestDataBuilder.stats()
        simulate_battle("A", stats, "B", stats, np.random.default_rng(3))
        assert stats.hp == 100

    def test_duration_is_non_negative_int(self):
        """Test battle_duration is whole milliseconds."""
        stats = TestDataBuilder.stats()
        result = simulate_battle("A", stats, "B", stats, np.random.default_rng(3))

        assert isinstance(result.battle_duration, int)
        assert result.battle_duration >= 0


class TestBattleResolverEvents:
    """Test what the resolver reports on the event bus."""

    @pytest.fixture
    def resolved(self, event_manager):
        """Run a scripted battle and collect every event."""
        received = []
        event_manager.subscribe_all(received.append)

        stats = TestDataBuilder.stats()
        resolver = BattleResolver(event_manager=event_manager)
        scripted = ScriptedRandom([CITY1_FIRST] + [AI_ATTACK, NO_CRIT] * 5)
        result = resolver.simulate_battle("Alpha", stats, "Beta", stats, scripted)
        event_manager.process_events()
        return result, received

    def test_lifecycle_events(self, resolved):
        """Phase changes bracket the battle."""
        result, received = resolved
        phases = [
            (event.old_phase, event.new_phase)
            for event in received if event.event_type == EventType.BATTLE_PHASE_CHANGED
        ]

        assert phases == [
            (BattlePhase.NOT_STARTED, BattlePhase.IN_PROGRESS),
            (BattlePhase.IN_PROGRESS, BattlePhase.FINISHED),
        ]

        started = [event for event in received if event.event_type == EventType.BATTLE_STARTED]
        assert len(started) == 1
        assert started[0].first_attacker == "Alpha"

        ended = [event for event in received if event.event_type == EventType.BATTLE_ENDED]
        assert len(ended) == 1
        assert ended[0].result is result

    def test_one_event_per_turn(self, resolved):
        """Each played turn is published in order."""
        result, received = resolved
        turn_events = [event.battle_turn for event in received if event.event_type == EventType.TURN_RESOLVED]
        assert tuple(turn_events) == result.turns

    def test_log_messages(self, resolved):
        """Start, first attacker and winner are logged in the BATTLE category."""
        _, received = resolved
        battle_logs = [
            event.message for event in received
            if event.event_type == EventType.LOG_MESSAGE and event.category == "BATTLE"
        ]

        assert battle_logs[0] == "Battle started: Alpha vs Beta"
        assert battle_logs[1] == "Alpha goes first!"
        assert battle_logs[-1].startswith("Battle ended: Alpha wins!")

    def test_ai_decisions_published(self, resolved):
        """The AI explains each choice as a debug message."""
        _, received = resolved
        ai_messages = [
            event for event in received
            if event.event_type == EventType.DEBUG_MESSAGE and event.source == "AIController"
        ]
        assert len(ai_messages) == 5

    def test_injected_ai_controller_used(self, neutral_stats):
        """Test a custom AI controller replaces the default."""
        ai_controller = Mock()
        ai_controller.choose_action.return_value = Mock(action=CombatAction.DEFEND)
        config = replace(DEFAULT_BATTLE_CONFIG, max_turns=2)

        resolver = BattleResolver(config, ai_controller=ai_controller)
        result = resolver.simulate_battle(
            "A", neutral_stats, "B", neutral_stats, ScriptedRandom([CITY1_FIRST, NO_CRIT, NO_CRIT])
        )

        assert ai_controller.choose_action.call_count == 2
        assert all(turn.action == CombatAction.DEFEND for turn in result.turns)
