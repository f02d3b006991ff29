"""
Unit tests for the Event Manager system.

Tests the publisher-subscriber bus the engine reports through.
"""
from unittest.mock import Mock

from weatherclash.core.data.game_enums import BattlePhase
from weatherclash.core.events.event_manager import EventPriority, QueuedEvent
from weatherclash.core.events.events import (
    BattlePhaseChanged,
    DebugMessage,
    EventType,
    LogMessage,
    StatsDerived,
)
from tests.test_utils import TestDataBuilder


def make_log(message: str = "hello") -> LogMessage:
    return LogMessage(turn=0, message=message, category="SYSTEM", level="INFO", source="test")


class TestEvents:
    """Test event definitions."""

    def test_event_type_is_set_automatically(self):
        """Each event class carries its own type."""
        assert make_log().event_type == EventType.LOG_MESSAGE
        assert DebugMessage(turn=1, message="m", source="s").event_type == EventType.DEBUG_MESSAGE
        assert StatsDerived(
            turn=0, city_name="Oslo", stats=TestDataBuilder.stats()
        ).event_type == EventType.STATS_DERIVED

    def test_phase_change_payload(self):
        """Test events carry rich payloads."""
        event = BattlePhaseChanged(
            turn=0, old_phase=BattlePhase.NOT_STARTED, new_phase=BattlePhase.IN_PROGRESS
        )
        assert event.event_type == EventType.BATTLE_PHASE_CHANGED
        assert event.new_phase == BattlePhase.IN_PROGRESS


class TestQueuedEvent:
    """Test QueuedEvent ordering."""

    def test_higher_priority_sorts_first(self):
        """Test that higher priority events are delivered earlier."""
        low_event = QueuedEvent(make_log(), EventPriority.LOW)
        normal_event = QueuedEvent(make_log(), EventPriority.NORMAL)
        high_event = QueuedEvent(make_log(), EventPriority.HIGH)

        assert high_event < normal_event
        assert normal_event < low_event
        assert sorted([low_event, high_event, normal_event]) == [high_event, normal_event, low_event]

    def test_same_priority_keeps_creation_order(self):
        first = QueuedEvent(make_log(), EventPriority.NORMAL)
        second = QueuedEvent(make_log(), EventPriority.NORMAL)

        assert first < second
        assert not second < first


class TestEventManager:
    """Test EventManager functionality."""

    def test_publish_queues_until_processed(self, event_manager):
        """Subscribers are only called from process_events."""
        subscriber = Mock()
        event_manager.subscribe(EventType.LOG_MESSAGE, subscriber)

        event = make_log()
        event_manager.publish(event, source="test")

        subscriber.assert_not_called()
        assert event_manager.has_queued_events()

        assert event_manager.process_events() == 1
        subscriber.assert_called_once_with(event)
        assert not event_manager.has_queued_events()

    def test_subscribers_only_get_their_type(self, event_manager):
        """Test type filtering."""
        log_subscriber = Mock()
        debug_subscriber = Mock()
        event_manager.subscribe(EventType.LOG_MESSAGE, log_subscriber)
        event_manager.subscribe(EventType.DEBUG_MESSAGE, debug_subscriber)

        event_manager.publish(make_log())
        event_manager.process_events()

        log_subscriber.assert_called_once()
        debug_subscriber.assert_not_called()

    def test_universal_subscriber(self, event_manager):
        """Test subscribe_all receives every event."""
        subscriber = Mock()
        event_manager.subscribe_all(subscriber)

        event_manager.publish(make_log())
        event_manager.publish(DebugMessage(turn=0, message="dbg", source="test"))
        event_manager.process_events()

        assert subscriber.call_count == 2

    def test_events_delivered_in_publish_order(self, event_manager):
        """Equal-priority events keep their publish order."""
        received = []
        event_manager.subscribe(EventType.LOG_MESSAGE, lambda e: received.append(e.message))

        for i in range(5):
            event_manager.publish(make_log(f"message {i}"))
        event_manager.process_events()

        assert received == [f"message {i}" for i in range(5)]

    def test_priority_overrides_publish_order(self, event_manager):
        """Test higher priority events jump the queue and low ones wait."""
        received = []
        event_manager.subscribe(EventType.LOG_MESSAGE, lambda e: received.append(e.message))

        event_manager.publish(make_log("low"), priority=EventPriority.LOW)
        event_manager.publish(make_log("normal"))
        event_manager.publish(make_log("high"), priority=EventPriority.HIGH)
        event_manager.process_events()

        assert received == ["high", "normal", "low"]

    def test_events_published_during_delivery_wait(self, event_manager):
        """Events a subscriber publishes are delivered on the next call."""
        received = []

        def relay(event):
            received.append(event.message)
            if event.message == "first":
                event_manager.publish(make_log("second"))

        event_manager.subscribe(EventType.LOG_MESSAGE, relay)
        event_manager.publish(make_log("first"))

        assert event_manager.process_events() == 1
        assert received == ["first"]
        assert event_manager.process_events() == 1
        assert received == ["first", "second"]

    def test_failing_subscriber_does_not_block_others(self, event_manager):
        """A raising subscriber must not stop delivery to the rest."""
        failing = Mock(side_effect=RuntimeError("boom"))
        healthy = Mock()
        event_manager.subscribe(EventType.LOG_MESSAGE, failing)
        event_manager.subscribe(EventType.LOG_MESSAGE, healthy)

        event_manager.publish(make_log())
        event_manager.process_events()

        healthy.assert_called_once()

    def test_failing_subscriber_reported(self, event_manager):
        """Subscriber failures come back as debug messages naming the subscriber."""
        reports = Mock()
        event_manager.subscribe(EventType.LOG_MESSAGE, Mock(side_effect=RuntimeError("boom")), "broken")
        event_manager.subscribe(EventType.DEBUG_MESSAGE, reports)

        event_manager.publish(make_log())
        event_manager.process_events()
        event_manager.process_events()

        report = reports.call_args[0][0]
        assert report.source == "EventManager"
        assert "broken" in report.message
        assert "LOG_MESSAGE" in report.message
        assert "boom" in report.message

    def test_failing_report_is_not_reported_again(self, event_manager):
        """A subscriber that fails on failure reports cannot loop the bus."""
        event_manager.subscribe_all(Mock(side_effect=RuntimeError("boom")))

        event_manager.publish(make_log())
        event_manager.process_events()

        assert event_manager.process_events() == 1
        assert not event_manager.has_queued_events()
