"""
Event system for calculator progress reporting.
Lets the console reporter (or anything else) observe operations as they happen.
"""
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Dict, List, Optional
import threading


class EventType(Enum):
    """Types of events emitted by the calculator."""
    # Session lifecycle
    SESSION_START = "session_start"
    SESSION_END = "session_end"

    # Operation lifecycle
    OPERATION_START = "operation_start"
    OPERATION_COMPLETE = "operation_complete"
    OPERATION_ERROR = "operation_error"

    # Division policy
    DIVISION_BY_ZERO = "division_by_zero"


@dataclass
class CalcEvent:
    """An event emitted during a calculation."""
    event_type: EventType
    timestamp: datetime = field(default_factory=datetime.now)
    data: Dict[str, Any] = field(default_factory=dict)
    message: str = ""

    def __str__(self) -> str:
        return f"[{self.event_type.value}] {self.message}"


class EventEmitter:
    """
    Event emitter for calculator operations.
    Allows subscribers to receive real-time updates.
    """

    def __init__(self, max_history: int = 100):
        self._listeners: Dict[EventType, List[Callable[[CalcEvent], None]]] = {}
        self._global_listeners: List[Callable[[CalcEvent], None]] = []
        self._lock = threading.Lock()
        self._event_history: List[CalcEvent] = []
        self._max_history = max_history

    def on(self, event_type: EventType, callback: Callable[[CalcEvent], None]):
        """
        Subscribe to a specific event type.

        Args:
            event_type: The type of event to listen for
            callback: Function to call when event occurs
        """
        with self._lock:
            self._listeners.setdefault(event_type, []).append(callback)

    def on_all(self, callback: Callable[[CalcEvent], None]):
        """Subscribe to all events."""
        with self._lock:
            self._global_listeners.append(callback)

    def off(self, event_type: EventType, callback: Callable[[CalcEvent], None]):
        """Remove a listener for a specific event type."""
        with self._lock:
            if event_type in self._listeners:
                try:
                    self._listeners[event_type].remove(callback)
                except ValueError:
                    pass

    def emit(self, event: CalcEvent):
        """
        Emit an event to all subscribers.

        Args:
            event: The event to emit
        """
        with self._lock:
            self._event_history.append(event)
            if len(self._event_history) > self._max_history:
                self._event_history.pop(0)

            specific_listeners = self._listeners.get(event.event_type, []).copy()
            global_listeners = self._global_listeners.copy()

        # Call listeners outside lock
        for listener in specific_listeners + global_listeners:
            try:
                listener(event)
            except Exception as e:
                print(f"[EventEmitter] Error in listener: {e}")

    def emit_simple(self, event_type: EventType, message: str, **data):
        """Convenience method to emit an event with simple parameters."""
        self.emit(CalcEvent(event_type=event_type, message=message, data=data))

    def get_history(self, limit: int = 50) -> List[CalcEvent]:
        """Get recent event history."""
        with self._lock:
            return self._event_history[-limit:]

    def clear_history(self):
        """Clear event history."""
        with self._lock:
            self._event_history.clear()


# Global event emitter instance
_global_emitter: Optional[EventEmitter] = None


def get_event_emitter() -> EventEmitter:
    """Get the global event emitter instance."""
    global _global_emitter
    if _global_emitter is None:
        _global_emitter = EventEmitter()
    return _global_emitter


def reset_event_emitter():
    """Reset the global event emitter (for testing)."""
    global _global_emitter
    _global_emitter = EventEmitter()
