"""Matchup system for battles described in YAML files.

- matchup_loader.py: Matchup parsing, loading and running
"""

from .matchup_loader import Matchup, MatchupCity, MatchupLoader, MatchupReport, run_matchup

__all__ = [
    "Matchup",
    "MatchupCity",
    "MatchupLoader",
    "MatchupReport",
    "run_matchup",
]
