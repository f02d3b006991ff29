"""
Log management system for battle messages and debugging.

This module provides centralized logging with categorization, filtering,
and storage. Engine components never log directly; they publish LogMessage
and DebugMessage events that end up here.
"""
import os
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, auto
from typing import Optional, TYPE_CHECKING

from ...core.events.events import DebugMessage, EventType, LogMessage as LogEvent, LogSaveRequested

if TYPE_CHECKING:
    from ...core.events.event_manager import EventManager


class LogCategory(Enum):
    """Categories for log messages."""
    SYSTEM = auto()     # Configuration loading, startup
    BATTLE = auto()     # Battle flow and turn descriptions
    AI = auto()         # AI decision messages
    STATS = auto()      # Stat derivation
    SCENARIO = auto()   # Matchup loading
    DEBUG = auto()      # Debug messages
    WARNING = auto()    # Warning messages
    ERROR = auto()      # Error messages


CATEGORY_TAGS = {
    LogCategory.SYSTEM: "SYS",
    LogCategory.BATTLE: "BTL",
    LogCategory.AI: "AI",
    LogCategory.STATS: "STA",
    LogCategory.SCENARIO: "SCN",
    LogCategory.DEBUG: "DBG",
    LogCategory.WARNING: "WRN",
    LogCategory.ERROR: "ERR",
}


class LogLevel(Enum):
    """Log levels for filtering."""
    DEBUG = 0
    INFO = 1
    WARNING = 2
    ERROR = 3


@dataclass
class LogRecord:
    """A single stored log message with metadata."""
    text: str
    category: LogCategory
    level: LogLevel = LogLevel.INFO
    timestamp: datetime = field(default_factory=datetime.now)

    def format(self, include_timestamp: bool = False, include_category: bool = True) -> str:
        """Format the message for display."""
        parts = []

        if include_timestamp:
            parts.append(f"[{self.timestamp.strftime('%H:%M:%S')}]")

        if include_category:
            parts.append(f"[{CATEGORY_TAGS.get(self.category, '???')}]")

        parts.append(self.text)
        return " ".join(parts)


class LogManager:
    """Collects log events with categorization and filtering."""

    def __init__(
        self,
        event_manager: "EventManager",
        max_messages: int = 1000,
        default_level: LogLevel = LogLevel.INFO
    ):
        """Initialize the log manager.

        Args:
            event_manager: Event manager to collect log events from
            max_messages: Maximum number of messages to store in the buffer
            default_level: Minimum level returned by get_messages
        """
        self.messages: deque[LogRecord] = deque(maxlen=max_messages)
        self.log_level = default_level
        self.enabled_categories = set(LogCategory)
        self.event_manager = event_manager
        self.last_saved_path: Optional[str] = None

        # Categories that are always at least this level
        self.category_levels = {
            LogCategory.DEBUG: LogLevel.DEBUG,
            LogCategory.AI: LogLevel.DEBUG,
            LogCategory.WARNING: LogLevel.WARNING,
            LogCategory.ERROR: LogLevel.ERROR,
        }

        self._setup_event_subscriptions()

    def _setup_event_subscriptions(self) -> None:
        """Set up event subscriptions for centralized logging."""
        self.event_manager.subscribe(
            EventType.LOG_MESSAGE,
            self._handle_log_message_event,
            subscriber_name="LogManager.log_message"
        )
        self.event_manager.subscribe(
            EventType.DEBUG_MESSAGE,
            self._handle_debug_message_event,
            subscriber_name="LogManager.debug_message"
        )
        self.event_manager.subscribe(
            EventType.LOG_SAVE_REQUESTED,
            self._handle_log_save_request,
            subscriber_name="LogManager.log_save_request"
        )

    def _handle_log_message_event(self, event) -> None:
        if isinstance(event, LogEvent):
            try:
                category = LogCategory[event.category.upper()]
            except (KeyError, AttributeError):
                category = LogCategory.SYSTEM

            try:
                level = LogLevel[event.level.upper()]
            except (KeyError, AttributeError):
                level = LogLevel.INFO

            self.log(event.message, category, level)

    def _handle_debug_message_event(self, event) -> None:
        if isinstance(event, DebugMessage):
            # AI reasoning is the main debug traffic; keep it filterable on its own
            category = LogCategory.AI if event.source == "AIController" else LogCategory.DEBUG
            self.log(f"[{event.source}] {event.message}", category, LogLevel.DEBUG)

    def _handle_log_save_request(self, event) -> None:
        if isinstance(event, LogSaveRequested):
            self.save_log_to_file(event.log_dir)

    def log(
        self,
        text: str,
        category: LogCategory = LogCategory.SYSTEM,
        level: LogLevel = LogLevel.INFO
    ) -> None:
        """Add a message to the log.

        Args:
            text: The message text
            category: The category of the message
            level: Severity of the message
        """
        # Category floor, so warnings and errors are never hidden as INFO
        floor = self.category_levels.get(category)
        if floor is not None and floor.value > level.value:
            level = floor
        self.messages.append(LogRecord(text=text, category=category, level=level))

    # Convenience methods for common categories
    def system(self, text: str) -> None:
        """Log a system message."""
        self.log(text, LogCategory.SYSTEM)

    def battle(self, text: str) -> None:
        """Log a battle message."""
        self.log(text, LogCategory.BATTLE)

    def stats(self, text: str) -> None:
        """Log a stat derivation message."""
        self.log(text, LogCategory.STATS)

    def scenario(self, text: str) -> None:
        """Log a matchup loading message."""
        self.log(text, LogCategory.SCENARIO)

    def debug(self, text: str) -> None:
        """Log a debug message."""
        self.log(text, LogCategory.DEBUG, LogLevel.DEBUG)

    def warning(self, text: str) -> None:
        """Log a warning message."""
        self.log(text, LogCategory.WARNING, LogLevel.WARNING)

    def error(self, text: str) -> None:
        """Log an error message."""
        self.log(text, LogCategory.ERROR, LogLevel.ERROR)

    def get_messages(self, count: Optional[int] = None,
                     categories: Optional[set[LogCategory]] = None) -> list[LogRecord]:
        """Get recent messages, optionally filtered by category.

        Args:
            count: Maximum number of messages to return (None for all)
            categories: Set of categories to include (None for all enabled)

        Returns:
            List of recent messages
        """
        if categories:
            filtered = [msg for msg in self.messages
                        if msg.category in categories and msg.category in self.enabled_categories]
        else:
            filtered = [msg for msg in self.messages
                        if msg.category in self.enabled_categories
                        and msg.level.value >= self.log_level.value]

        if count is not None and count < len(filtered):
            return filtered[-count:]
        return filtered

    def format_messages(self, count: Optional[int] = None) -> list[str]:
        """Visible messages formatted for console output."""
        return [msg.format() for msg in self.get_messages(count)]

    def clear(self) -> None:
        """Clear all messages from the log."""
        self.messages.clear()

    def enable_category(self, category: LogCategory) -> None:
        self.enabled_categories.add(category)

    def disable_category(self, category: LogCategory) -> None:
        self.enabled_categories.discard(category)

    def set_log_level(self, level: LogLevel) -> None:
        self.log_level = level

    def is_debug_enabled(self) -> bool:
        """Check if debug messages are currently visible."""
        return (LogCategory.DEBUG in self.enabled_categories and
                self.log_level == LogLevel.DEBUG)

    def toggle_debug(self) -> None:
        """Toggle debug message visibility."""
        if self.is_debug_enabled():
            self.disable_category(LogCategory.DEBUG)
            self.set_log_level(LogLevel.INFO)
        else:
            self.enable_category(LogCategory.DEBUG)
            self.set_log_level(LogLevel.DEBUG)

    def save_log_to_file(self, log_dir: str = "logs") -> Optional[str]:
        """Save all messages to a timestamped log file.

        Filters are ignored; every buffered message is written.

        Returns:
            Path of the written file, or None if it could not be written
        """
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        filepath = os.path.join(log_dir, f"log_{timestamp}.log")

        try:
            os.makedirs(log_dir, exist_ok=True)

            with open(filepath, 'w', encoding='utf-8') as f:
                f.write("Weather Clash - Battle Log\n")
                f.write(f"Generated: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}\n")
                f.write("=" * 60 + "\n\n")

                if not self.messages:
                    f.write("No messages to save.\n")
                else:
                    for msg in self.messages:
                        timestamp_str = msg.timestamp.strftime("%Y-%m-%d %H:%M:%S.%f")[:-3]
                        f.write(f"[{timestamp_str}] [{msg.category.name}] [{msg.level.name}] {msg.text}\n")
        except OSError as e:
            self.error(f"Failed to save log file: {e}")
            return None

        self.last_saved_path = filepath
        self.system(f"Battle log saved to {filepath}")
        return filepath
