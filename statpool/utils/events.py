# ABOUTME: Event bus system for stat pool notifications
# ABOUTME: Lets game objects and UI react to bound, value and depletion changes

from enum import Enum
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Any
import logging


logger = logging.getLogger(__name__)


class EventType(Enum):
    """
    Notifications a stat pool can emit.

    The three *_CHANGED events carry old_value, new_value and increased.
    The boundary events carry the pool that crossed the boundary.
    """
    # Bound and value changes
    MIN_VALUE_CHANGED = "min_value_changed"
    MAX_VALUE_CHANGED = "max_value_changed"
    VALUE_CHANGED = "value_changed"

    # Boundary transitions
    DEPLETED = "depleted"
    RESTORED = "restored"
    RESTORED_FULLY = "restored_fully"


@dataclass
class Event:
    """
    Represents a stat pool notification with associated data.
    """
    type: EventType
    data: Dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        """String representation of the event"""
        return f"Event({self.type.name}, data={self.data})"


# Type alias for event handler functions
EventHandler = Callable[[Event], None]


class EventBus:
    """
    Pub/sub channel for stat pool notifications.

    Handlers run synchronously, in subscription order, before emit()
    returns. A failing handler is logged and does not stop the others.
    """

    def __init__(self):
        """Initialize the event bus."""
        self._subscribers: Dict[EventType, List[EventHandler]] = {}

    def subscribe(self, event_type: EventType, handler: EventHandler) -> None:
        """
        Subscribe to an event type.

        Args:
            event_type: The type of event to subscribe to
            handler: Function to call when event is emitted
        """
        if event_type not in self._subscribers:
            self._subscribers[event_type] = []

        self._subscribers[event_type].append(handler)

    def unsubscribe(self, event_type: EventType, handler: EventHandler) -> None:
        """
        Unsubscribe from an event type.

        Args:
            event_type: The type of event to unsubscribe from
            handler: The handler function to remove
        """
        if event_type in self._subscribers:
            try:
                self._subscribers[event_type].remove(handler)
            except ValueError:
                # Handler wasn't in the list, that's okay
                pass

    def emit(self, event: Event) -> None:
        """
        Emit an event to all subscribers.

        Args:
            event: The event to emit
        """
        from statpool.utils.logging_config import get_logging_config
        logging_config = get_logging_config()
        if logging_config and logging_config.debug_enabled:
            logging_config.log_event(event.type.name, event.data)

        if event.type not in self._subscribers:
            return

        # Copy so handlers may unsubscribe themselves mid-dispatch
        for handler in list(self._subscribers[event.type]):
            try:
                handler(event)
            except Exception as e:
                logger.error(
                    f"Error in event handler for {event.type.value}: {e}",
                    exc_info=True
                )

    def clear_subscribers(self, event_type: EventType) -> None:
        """Remove all subscribers for an event type."""
        if event_type in self._subscribers:
            self._subscribers[event_type].clear()

    def subscriber_count(self, event_type: EventType) -> int:
        """
        Get the number of subscribers for an event type.

        Args:
            event_type: The event type to check

        Returns:
            Number of subscribers
        """
        return len(self._subscribers.get(event_type, []))

    def clear_all(self) -> None:
        """Remove all subscribers from all event types."""
        self._subscribers.clear()
