"""AI system components.

This package contains the action selection logic for computer controlled
fighters:
- ai_controller.py: HP-aware weighted action selection
"""

from .ai_controller import (
    AIController,
    AIDecision,
    ThreatLevel,
    assess_threat,
    hp_percentage,
    pick_weighted,
    select_action,
)

__all__ = [
    "AIController",
    "AIDecision",
    "ThreatLevel",
    "assess_threat",
    "hp_percentage",
    "pick_weighted",
    "select_action",
]
