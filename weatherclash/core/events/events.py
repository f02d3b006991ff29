"""Event-driven system events and context.

This module defines the events engine components publish while they work,
so logging and presentation can follow a battle without the engine knowing
about them.

Event Design Principles:
- Events are immutable dataclasses with rich object payloads
- All events carry the battle turn they belong to (0 outside a battle)
- Events use proper enums instead of magic strings
- Keep event types focused and avoid over-granular events
"""

from dataclasses import dataclass, field
from typing import Optional, TYPE_CHECKING
from abc import ABC
from enum import Enum, auto

if TYPE_CHECKING:
    from ..data.data_structures import BattleResult, BattleTurn, CombatStats
    from ..data.game_enums import BattlePhase


class EventType(Enum):
    """Types of events that managers can subscribe to."""
    # Stat Events
    STATS_DERIVED = auto()

    # Battle Events
    BATTLE_PHASE_CHANGED = auto()
    BATTLE_STARTED = auto()
    TURN_RESOLVED = auto()
    BATTLE_ENDED = auto()

    # Logging Events
    LOG_MESSAGE = auto()
    DEBUG_MESSAGE = auto()
    LOG_SAVE_REQUESTED = auto()


@dataclass(frozen=True)
class GameEvent(ABC):
    """Base class for all events."""
    turn: int
    event_type: EventType = field(init=False)


# Stat Events
@dataclass(frozen=True)
class StatsDerived(GameEvent):
    """Event emitted when weather has been turned into combat stats."""
    city_name: str
    stats: "CombatStats"

    def __post_init__(self):
        # Set event_type since dataclass frozen=True prevents normal assignment
        object.__setattr__(self, 'event_type', EventType.STATS_DERIVED)


# Battle Events
@dataclass(frozen=True)
class BattlePhaseChanged(GameEvent):
    """Event emitted when a battle moves to another phase."""
    old_phase: "BattlePhase"
    new_phase: "BattlePhase"

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.BATTLE_PHASE_CHANGED)


@dataclass(frozen=True)
class BattleStarted(GameEvent):
    """Event emitted once turn order has been decided."""
    city1_name: str
    city2_name: str
    first_attacker: str

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.BATTLE_STARTED)


@dataclass(frozen=True)
class TurnResolved(GameEvent):
    """Event emitted after each turn is applied."""
    battle_turn: "BattleTurn"

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.TURN_RESOLVED)


@dataclass(frozen=True)
class BattleEnded(GameEvent):
    """Event emitted with the finished battle result."""
    result: "BattleResult"

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.BATTLE_ENDED)


# Logging Events
@dataclass(frozen=True)
class LogMessage(GameEvent):
    """Event emitted when a log message is created."""
    message: str
    category: str
    level: str  # "DEBUG", "INFO", "WARNING", "ERROR"
    source: str

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.LOG_MESSAGE)


@dataclass(frozen=True)
class DebugMessage(GameEvent):
    """Event emitted for debug-specific messages."""
    message: str
    source: str
    context: Optional[dict] = None

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.DEBUG_MESSAGE)


@dataclass(frozen=True)
class LogSaveRequested(GameEvent):
    """Event emitted when the log should be written to disk."""
    log_dir: str = "logs"

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.LOG_SAVE_REQUESTED)
