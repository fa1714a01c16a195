# ABOUTME: Bounded integer stat pool (health, mana, stamina) with change notifications
# ABOUTME: Keeps min < max and min <= value <= max, emitting events on every change

import logging
from typing import Any, Dict, Optional

from statpool.utils.events import Event, EventBus, EventHandler, EventType
from statpool.utils.logging_config import get_logging_config


logger = logging.getLogger(__name__)

DEFAULT_MIN_VALUE = 0
DEFAULT_MAX_VALUE = 100
DEFAULT_VALUE = 100


class StatPool:
    """
    A clamped integer resource between a minimum and maximum bound.

    Examples:
    - Health: name="health", min_value=0, max_value=200, value=150
    - Mana: name="mana", min_value=0, max_value=50, value=50

    Nothing is ever rejected: values are clamped into range and bound
    changes that would break min < max push the other bound along,
    always keeping a gap of exactly one.

    Notifications go through the pool's EventBus:
    - MIN_VALUE_CHANGED / MAX_VALUE_CHANGED / VALUE_CHANGED with
      old_value, new_value and increased
    - DEPLETED when value enters the minimum
    - RESTORED when value leaves the minimum upward
    - RESTORED_FULLY when value enters the maximum
    """

    def __init__(
        self,
        min_value: int = DEFAULT_MIN_VALUE,
        max_value: int = DEFAULT_MAX_VALUE,
        value: int = DEFAULT_VALUE,
        name: str = "stat",
        event_bus: Optional[EventBus] = None
    ):
        """
        Initialize a stat pool.

        Starts from (0, 100, 100) and applies the requested bounds and
        value through the regular setters, so any combination of
        arguments ends up in a valid state.

        Args:
            min_value: Lower bound
            max_value: Upper bound
            value: Current level
            name: Label used in logs, display and save data
            event_bus: Bus to emit notifications on (a new one if None)
        """
        self.name = name
        self.event_bus = event_bus if event_bus is not None else EventBus()

        self._min_value = DEFAULT_MIN_VALUE
        self._max_value = DEFAULT_MAX_VALUE
        self._value = DEFAULT_VALUE

        self.set_min_value(min_value)
        self.set_max_value(max_value)
        self.set_value(value)

    # Properties

    @property
    def min_value(self) -> int:
        return self._min_value

    @min_value.setter
    def min_value(self, new_min: int) -> None:
        self.set_min_value(new_min)

    @property
    def max_value(self) -> int:
        return self._max_value

    @max_value.setter
    def max_value(self, new_max: int) -> None:
        self.set_max_value(new_max)

    @property
    def value(self) -> int:
        return self._value

    @value.setter
    def value(self, new_value: int) -> None:
        self.set_value(new_value)

    def get_min_value(self) -> int:
        return self._min_value

    def get_max_value(self) -> int:
        return self._max_value

    def get_value(self) -> int:
        return self._value

    # Value management

    def set_min_value(self, new_min: int) -> None:
        """
        Set the lower bound.

        If the new minimum reaches the maximum, the maximum is pushed to
        new_min + 1. A current value below the new minimum is raised to it.

        Args:
            new_min: New lower bound
        """
        new_min = int(new_min)
        if new_min == self._min_value:
            return

        old_min = self._min_value
        self._min_value = new_min

        if self._min_value >= self._max_value:
            logger.debug(
                f"{self.name}: min {new_min} reached max {self._max_value}, "
                f"raising max to {new_min + 1}"
            )
            self.set_max_value(self._min_value + 1)

        if self._value < self._min_value:
            self.set_value(self._min_value)

        self._emit_change(EventType.MIN_VALUE_CHANGED, old_min, new_min)

    def set_max_value(self, new_max: int) -> None:
        """
        Set the upper bound.

        If the new maximum reaches the minimum, the minimum is pushed to
        new_max - 1. A current value above the new maximum is lowered to it.

        Args:
            new_max: New upper bound
        """
        new_max = int(new_max)
        if new_max == self._max_value:
            return

        old_max = self._max_value
        self._max_value = new_max

        if self._max_value <= self._min_value:
            logger.debug(
                f"{self.name}: max {new_max} reached min {self._min_value}, "
                f"lowering min to {new_max - 1}"
            )
            self.set_min_value(self._max_value - 1)

        if self._value > self._max_value:
            self.set_value(self._max_value)

        self._emit_change(EventType.MAX_VALUE_CHANGED, old_max, new_max)

    def set_value(self, new_value: int) -> None:
        """
        Set the current value, clamped to the bounds.

        Emits VALUE_CHANGED, then at most one of DEPLETED, RESTORED or
        RESTORED_FULLY (checked in that order). Nothing is emitted when
        the clamped value equals the current one, so an out-of-range
        request that clamps back to the current value is silent.
        Non-integer input is truncated with int() first.

        Args:
            new_value: Requested value
        """
        new_value = int(new_value)
        clamped = self._clamp(new_value)
        if clamped == self._value:
            return

        if clamped != new_value:
            logger.debug(f"{self.name}: clamped {new_value} to {clamped}")

        old_value = self._value
        self._value = clamped

        self._emit_change(EventType.VALUE_CHANGED, old_value, clamped)

        if self._value == self._min_value and old_value != self._min_value:
            self._emit_boundary(EventType.DEPLETED)
        elif self._value > self._min_value and old_value == self._min_value:
            self._emit_boundary(EventType.RESTORED)
        elif self._value == self._max_value and old_value != self._max_value:
            self._emit_boundary(EventType.RESTORED_FULLY)

    def increase(self, amount: int) -> None:
        """Raise the value by amount (a negative amount lowers it)."""
        self._log_action("increase", str(amount))
        self.set_value(self._value + amount)

    def decrease(self, amount: int) -> None:
        """Lower the value by amount (a negative amount raises it)."""
        self._log_action("decrease", str(amount))
        self.set_value(self._value - amount)

    def fill(self) -> None:
        """Set the value to the maximum."""
        self._log_action("fill")
        self.set_value(self._max_value)

    def deplete(self) -> None:
        """Set the value to the minimum."""
        self._log_action("deplete")
        self.set_value(self._min_value)

    # State queries

    def is_depleted(self) -> bool:
        """True when the value sits at the minimum."""
        return self._value == self._min_value

    def is_filled(self) -> bool:
        """True when the value sits at the maximum."""
        return self._value == self._max_value

    def get_percentage(self) -> float:
        """
        Get the value's position between the bounds.

        Returns:
            0.0 at the minimum, 1.0 at the maximum, linear in between
        """
        value_range = self._max_value - self._min_value
        return (self._value - self._min_value) / value_range

    # Subscriptions

    def connect(self, event_type: EventType, handler: EventHandler) -> None:
        """Subscribe a handler to one of this pool's notifications."""
        self.event_bus.subscribe(event_type, handler)

    def disconnect(self, event_type: EventType, handler: EventHandler) -> None:
        """Remove a handler previously added with connect()."""
        self.event_bus.unsubscribe(event_type, handler)

    # Serialization

    def to_dict(self) -> Dict[str, Any]:
        """
        Serialize the pool for save files.

        Returns:
            Dictionary with name, min_value, max_value and value
        """
        return {
            "name": self.name,
            "min_value": self._min_value,
            "max_value": self._max_value,
            "value": self._value,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any], event_bus: Optional[EventBus] = None) -> "StatPool":
        """
        Rebuild a pool from to_dict() output.

        Missing keys fall back to the defaults. Inconsistent data is
        normalized the same way the setters normalize runtime input.

        Args:
            data: Serialized pool
            event_bus: Bus for the new pool (a new one if None)

        Returns:
            StatPool instance
        """
        return cls(
            min_value=int(data.get("min_value", DEFAULT_MIN_VALUE)),
            max_value=int(data.get("max_value", DEFAULT_MAX_VALUE)),
            value=int(data.get("value", DEFAULT_VALUE)),
            name=data.get("name", "stat"),
            event_bus=event_bus
        )

    # Internals

    def _clamp(self, val: int) -> int:
        if val < self._min_value:
            return self._min_value
        if val > self._max_value:
            return self._max_value
        return val

    def _emit_change(self, event_type: EventType, old_value: int, new_value: int) -> None:
        self.event_bus.emit(Event(
            type=event_type,
            data={
                "pool": self,
                "old_value": old_value,
                "new_value": new_value,
                "increased": new_value > old_value,
            }
        ))

    def _emit_boundary(self, event_type: EventType) -> None:
        self.event_bus.emit(Event(type=event_type, data={"pool": self}))

    def _log_action(self, action: str, details: str = "") -> None:
        logging_config = get_logging_config()
        if logging_config:
            logging_config.log_pool_action(self.name, action, details)

    def __str__(self) -> str:
        """String representation of the stat pool"""
        return f"{self.name}: {self._value}/{self._max_value}"

    def __repr__(self) -> str:
        return (
            f"StatPool(name={self.name!r}, min_value={self._min_value}, "
            f"max_value={self._max_value}, value={self._value})"
        )
