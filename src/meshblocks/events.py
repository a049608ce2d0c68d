"""Typed publish/subscribe used to surface frames and decoded events."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any

_LOGGER = logging.getLogger(__name__)

Callback = Callable[..., Any]


class EventKind(str, Enum):
    """Every kind of event that can be published on an EventBus."""

    # Transport
    INDICATE = "indicate"
    NOTIFY = "notify"
    DISCONNECT = "disconnect"

    # Base frames (all blocks)
    BLOCK_TYPE = "block_type"
    SERIAL_NUMBER = "serial_number"
    VERSION = "version"
    BATTERY_LEVEL = "battery_level"
    STATUS_BUTTON = "status_button"
    BLOCK_TYPE_DETECTED = "block_type_detected"

    # Button
    BUTTON = "button"

    # Move
    TAP = "tap"
    SHAKE = "shake"
    FLIP = "flip"
    ORIENTATION = "orientation"

    # Motion
    MOTION = "motion"

    # Brightness
    BRIGHTNESS = "brightness"

    # Temperature & humidity
    TEMPHUMID = "temphumid"

    # GPIO
    DIGITAL_CHANGED = "digital_changed"
    ANALOG_CHANGED = "analog_changed"
    DIGITAL_INPUT = "digital_input"
    ANALOG_INPUT = "analog_input"
    POWER_OUTPUT = "power_output"
    DIGITAL_OUTPUT = "digital_output"
    PWM_OUTPUT = "pwm_output"


@dataclass(frozen=True)
class DecodedEvent:
    """One decoded notification: an event kind plus named field values."""

    kind: EventKind
    fields: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))

    def __getitem__(self, name: str) -> Any:
        return self.fields[name]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DecodedEvent):
            return NotImplemented
        return self.kind == other.kind and dict(self.fields) == dict(other.fields)

    def __hash__(self) -> int:
        return hash((self.kind, frozenset(self.fields.items())))

    @property
    def args(self) -> tuple[Any, ...]:
        """Field values in declaration order."""
        return tuple(self.fields.values())


class EventBus:
    """Ordered listener registry with per-listener failure isolation.

    Listeners run synchronously in registration order. A listener raising an
    exception is logged and skipped; the remaining listeners still run.
    """

    def __init__(self) -> None:
        self._listeners: dict[EventKind, list[Callback]] = {}

    def subscribe(self, kind: EventKind | str, callback: Callback) -> Callback:
        """Register ``callback`` for ``kind``; duplicates are allowed.

        Returns:
            The callback, so this can be used as a decorator
        """
        self._listeners.setdefault(EventKind(kind), []).append(callback)
        return callback

    def unsubscribe(self, kind: EventKind | str, callback: Callback) -> None:
        """Remove every registration of ``callback`` for ``kind``."""
        kind = EventKind(kind)
        listeners = self._listeners.get(kind)
        if not listeners:
            return
        self._listeners[kind] = [cb for cb in listeners if cb != callback]

    def listeners(self, kind: EventKind | str) -> list[Callback]:
        """Snapshot of the listeners registered for ``kind``."""
        return list(self._listeners.get(EventKind(kind), ()))

    def publish(self, kind: EventKind | str, *args: Any) -> int:
        """Call every listener of ``kind`` with ``args``.

        Returns:
            Number of listeners that completed without raising
        """
        kind = EventKind(kind)
        listeners = self.listeners(kind)
        if not listeners:
            _LOGGER.debug("No listener for %s %s", kind.value, args)
            return 0

        delivered = 0
        for callback in listeners:
            try:
                callback(*args)
            except Exception:
                _LOGGER.exception("Listener %r for %s failed", callback, kind.value)
            else:
                delivered += 1
        return delivered

    def publish_event(self, event: DecodedEvent) -> int:
        """Publish a decoded event under its own kind."""
        return self.publish(event.kind, event)


class OneShotSignal:
    """Signal that fires at most once until re-armed.

    Used for the one-time "block type detected" notification of a connection.
    """

    def __init__(self, name: str = "signal") -> None:
        self.name = name
        self._callbacks: list[Callback] = []
        self._fired = False
        self._value: Any = None

    @property
    def fired(self) -> bool:
        return self._fired

    @property
    def value(self) -> Any:
        """Value passed to the last fire(), or None if not fired."""
        return self._value

    def connect(self, callback: Callback) -> None:
        self._callbacks.append(callback)

    def disconnect(self, callback: Callback) -> None:
        self._callbacks = [cb for cb in self._callbacks if cb != callback]

    def fire(self, value: Any) -> bool:
        """Call connected callbacks with ``value`` unless already fired.

        Returns:
            True if the signal fired, False if it had already fired
        """
        if self._fired:
            return False
        self._fired = True
        self._value = value
        for callback in list(self._callbacks):
            try:
                callback(value)
            except Exception:
                _LOGGER.exception("Callback %r for %s failed", callback, self.name)
        return True

    def reset(self) -> None:
        """Re-arm the signal (new connection)."""
        self._fired = False
        self._value = None
