# ABOUTME: Unit tests for the event bus system
# ABOUTME: Tests pub/sub functionality, event types, and event handling

import logging

import pytest
from typing import List
from statpool.utils.events import EventBus, Event, EventType
from statpool.utils.logging_config import init_logging, reset_logging


class TestEvent:
    """Test the Event class"""

    def test_event_creation(self):
        """Test creating an event"""
        event = Event(
            type=EventType.VALUE_CHANGED,
            data={'old_value': 100, 'new_value': 70, 'increased': False}
        )

        assert event.type == EventType.VALUE_CHANGED
        assert event.data['old_value'] == 100
        assert event.data['increased'] is False

    def test_event_with_no_data(self):
        """Test creating an event without data"""
        event = Event(type=EventType.DEPLETED)

        assert event.type == EventType.DEPLETED
        assert event.data == {}

    def test_event_string_representation(self):
        """Test event string representation"""
        event = Event(type=EventType.RESTORED_FULLY, data={'pool': 'health'})

        assert "RESTORED_FULLY" in str(event)


class TestEventBus:
    """Test the EventBus class"""

    def setup_method(self):
        """Set up test fixtures"""
        self.bus = EventBus()
        self.received_events: List[Event] = []

    def test_subscribe_to_event(self):
        """Test subscribing to an event type"""
        def handler(event: Event):
            self.received_events.append(event)

        self.bus.subscribe(EventType.VALUE_CHANGED, handler)
        self.bus.emit(Event(type=EventType.VALUE_CHANGED, data={'new_value': 5}))

        assert len(self.received_events) == 1
        assert self.received_events[0].type == EventType.VALUE_CHANGED

    def test_handlers_run_in_subscription_order(self):
        """Test multiple subscribers run in the order they subscribed"""
        results = []

        self.bus.subscribe(EventType.DEPLETED, lambda e: results.append('first'))
        self.bus.subscribe(EventType.DEPLETED, lambda e: results.append('second'))

        self.bus.emit(Event(type=EventType.DEPLETED))

        assert results == ['first', 'second']

    def test_subscribe_to_different_events(self):
        """Test subscribing to different event types"""
        depleted_events = []
        restored_events = []

        self.bus.subscribe(EventType.DEPLETED, depleted_events.append)
        self.bus.subscribe(EventType.RESTORED, restored_events.append)

        self.bus.emit(Event(type=EventType.DEPLETED))
        self.bus.emit(Event(type=EventType.RESTORED))
        self.bus.emit(Event(type=EventType.DEPLETED))

        assert len(depleted_events) == 2
        assert len(restored_events) == 1

    def test_unsubscribe_from_event(self):
        """Test unsubscribing from an event"""
        def handler(event: Event):
            self.received_events.append(event)

        self.bus.subscribe(EventType.MAX_VALUE_CHANGED, handler)
        self.bus.emit(Event(type=EventType.MAX_VALUE_CHANGED))
        assert len(self.received_events) == 1

        self.bus.unsubscribe(EventType.MAX_VALUE_CHANGED, handler)
        self.bus.emit(Event(type=EventType.MAX_VALUE_CHANGED))
        assert len(self.received_events) == 1

    def test_unsubscribe_unknown_handler(self):
        """Test unsubscribing a handler that was never added is harmless"""
        self.bus.unsubscribe(EventType.RESTORED, lambda e: None)
        self.bus.subscribe(EventType.RESTORED, self.received_events.append)
        self.bus.unsubscribe(EventType.RESTORED, lambda e: None)

        assert self.bus.subscriber_count(EventType.RESTORED) == 1

    def test_handler_may_unsubscribe_itself(self):
        """Test a handler removing itself during dispatch"""
        results = []

        def once(event: Event):
            results.append('once')
            self.bus.unsubscribe(EventType.DEPLETED, once)

        self.bus.subscribe(EventType.DEPLETED, once)
        self.bus.subscribe(EventType.DEPLETED, lambda e: results.append('always'))

        self.bus.emit(Event(type=EventType.DEPLETED))
        self.bus.emit(Event(type=EventType.DEPLETED))

        assert results == ['once', 'always', 'always']

    def test_emit_to_no_subscribers(self):
        """Test emitting an event with no subscribers (should not error)"""
        self.bus.emit(Event(type=EventType.MIN_VALUE_CHANGED))

    def test_event_data_passed_to_handler(self):
        """Test that event data is correctly passed to handlers"""
        received_data = None

        def handler(event: Event):
            nonlocal received_data
            received_data = event.data

        self.bus.subscribe(EventType.MIN_VALUE_CHANGED, handler)

        test_data = {'old_value': 0, 'new_value': 10, 'increased': True}
        self.bus.emit(Event(type=EventType.MIN_VALUE_CHANGED, data=test_data))

        assert received_data == test_data

    def test_handler_exception_doesnt_break_bus(self, caplog):
        """Test that an exception in one handler doesn't prevent others from running"""
        results = []

        def failing_handler(event: Event):
            raise ValueError("Handler error!")

        def working_handler(event: Event):
            results.append('success')

        self.bus.subscribe(EventType.VALUE_CHANGED, failing_handler)
        self.bus.subscribe(EventType.VALUE_CHANGED, working_handler)

        with caplog.at_level(logging.ERROR, logger="statpool.utils.events"):
            self.bus.emit(Event(type=EventType.VALUE_CHANGED))

        assert results == ['success']
        assert "Handler error!" in caplog.text

    def test_clear_subscribers(self):
        """Test clearing all subscribers for an event type"""
        self.bus.subscribe(EventType.RESTORED_FULLY, self.received_events.append)
        self.bus.subscribe(EventType.RESTORED_FULLY, self.received_events.append)

        self.bus.clear_subscribers(EventType.RESTORED_FULLY)

        self.bus.emit(Event(type=EventType.RESTORED_FULLY))
        assert len(self.received_events) == 0

    def test_get_subscriber_count(self):
        """Test getting the number of subscribers for an event"""
        def handler1(event: Event):
            pass

        def handler2(event: Event):
            pass

        assert self.bus.subscriber_count(EventType.VALUE_CHANGED) == 0

        self.bus.subscribe(EventType.VALUE_CHANGED, handler1)
        assert self.bus.subscriber_count(EventType.VALUE_CHANGED) == 1

        self.bus.subscribe(EventType.VALUE_CHANGED, handler2)
        assert self.bus.subscriber_count(EventType.VALUE_CHANGED) == 2

        self.bus.unsubscribe(EventType.VALUE_CHANGED, handler1)
        assert self.bus.subscriber_count(EventType.VALUE_CHANGED) == 1

    def test_clear_all(self):
        """Test clearing every event type at once"""
        self.bus.subscribe(EventType.DEPLETED, self.received_events.append)
        self.bus.subscribe(EventType.RESTORED, self.received_events.append)

        self.bus.clear_all()

        assert self.bus.subscriber_count(EventType.DEPLETED) == 0
        assert self.bus.subscriber_count(EventType.RESTORED) == 0


class TestEventBusDebugLogging:
    """Test that emitted events reach the debug log"""

    def teardown_method(self):
        reset_logging()

    def test_emit_logs_event_in_debug_mode(self, tmp_path, caplog):
        """Test events are logged with a running counter"""
        init_logging(debug_enabled=True, log_dir=tmp_path / "logs")
        bus = EventBus()

        with caplog.at_level(logging.INFO, logger="statpool.events"):
            bus.emit(Event(type=EventType.DEPLETED, data={'pool': 'health'}))

        assert "[EVENT #001] DEPLETED: {pool=health}" in caplog.text


class TestEventTypes:
    """Test that all notification types are defined"""

    def test_exactly_six_notifications(self):
        """Test the six stat pool notifications exist"""
        assert {e.value for e in EventType} == {
            'min_value_changed',
            'max_value_changed',
            'value_changed',
            'depleted',
            'restored',
            'restored_fully',
        }

    @pytest.mark.parametrize("event_type", list(EventType))
    def test_value_matches_name(self, event_type):
        """Test enum values are the lower-case names"""
        assert event_type.value == event_type.name.lower()
