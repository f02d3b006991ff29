#!/usr/bin/env python3
"""
Run a weather matchup from the command line.

Examples:
  python main.py weatherclash/assets/matchups/london_vs_cairo.yaml
  python main.py matchup.yaml --seed 7 --json
  python main.py matchup.yaml --config my_rules.yaml --debug --save-log
"""

import argparse
import json
import sys
from typing import Optional

from weatherclash.core.config import BattleConfigError, load_battle_config
from weatherclash.core.data import CombatStats
from weatherclash.core.events import EventManager, EventPriority, LogSaveRequested
from weatherclash.game.managers import LogManager
from weatherclash.game.scenarios import MatchupLoader, MatchupReport, run_matchup


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Turn the weather in two cities into a battle",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("matchup", help="Path to a matchup YAML file")
    parser.add_argument("--seed", type=int, help="Seed for the random source (overrides the matchup's seed)")
    parser.add_argument("--config", help="Path to a battle rules YAML file")
    parser.add_argument("--json", action="store_true", help="Print the full report as JSON")
    parser.add_argument("--debug", action="store_true", help="Show debug and AI messages")
    parser.add_argument("--save-log", action="store_true", help="Save the battle log to a file")
    parser.add_argument("--log-dir", default="logs", help="Directory for saved logs (default: logs)")
    return parser.parse_args(argv)


def format_stats(name: str, stats: CombatStats) -> str:
    return (
        f"{name:<16} {stats.elemental_type.value:<10} HP {stats.hp:>3}/{stats.max_hp:<3} "
        f"ATK {stats.attack:>3}  DEF {stats.defense:>3}  MAG {stats.magic:>3}  "
        f"SPD {stats.speed:>3}  CRIT {stats.crit_chance}%"
    )


def print_report(report: MatchupReport) -> None:
    matchup = report.matchup
    result = report.result

    print(f"=== {matchup.name} ===")
    if matchup.description:
        print(matchup.description)
    print()
    print(format_stats(matchup.city1.name, report.city1_stats))
    print(format_stats(matchup.city2.name, report.city2_stats))
    print()

    for turn in result.turns:
        print(f"Turn {turn.turn:>2}: {turn.description}")

    print()
    print(
        f"{result.winner} wins after {result.turn_count} turns "
        f"({matchup.city1.name} {result.final_stats.city1_hp} HP, "
        f"{matchup.city2.name} {result.final_stats.city2_hp} HP)"
    )


def main(argv: Optional[list[str]] = None) -> int:
    args = parse_args(argv)

    event_manager = EventManager()
    log_manager = LogManager(event_manager)
    if args.debug:
        log_manager.toggle_debug()

    try:
        config = load_battle_config(args.config, event_manager)
        matchup = MatchupLoader.load_from_file(args.matchup, event_manager)
    except (FileNotFoundError, ValueError) as e:
        # BattleConfigError is a ValueError too
        kind = "Config error" if isinstance(e, BattleConfigError) else "Error"
        print(f"{kind}: {e}", file=sys.stderr)
        return 1

    report = run_matchup(matchup, rng=args.seed, config=config, event_manager=event_manager)

    if args.save_log:
        # Saved after every battle message has been collected
        event_manager.publish(
            LogSaveRequested(turn=0, log_dir=args.log_dir), priority=EventPriority.LOW, source="main"
        )
    event_manager.process_events()

    if args.json:
        print(json.dumps(report.to_dict(), indent=2))
    else:
        print_report(report)

    if args.debug:
        print()
        for line in log_manager.format_messages():
            print(line)

    if log_manager.last_saved_path:
        print(f"Log saved to {log_manager.last_saved_path}", file=sys.stderr)

    return 0


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print("\n\nBattle interrupted by user")
        sys.exit(130)
