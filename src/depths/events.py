import logging
from collections import defaultdict
from dataclasses import dataclass
from typing import Any, Callable, DefaultDict, Dict, List

logger = logging.getLogger(__name__)


class EventType:
    """Centralized event names published by the dungeon."""

    # A depth was materialized for the first time
    LEVEL_CREATED = "level.created"

    # The active depth changed through a staircase
    LEVEL_CHANGED = "level.changed"

    # The active depth's floor was rebuilt in place
    LEVEL_REGENERATED = "level.regenerated"

@dataclass(frozen=True)
class Event:
    """A floor change notification: ``name`` is an EventType value, ``payload`` its details."""

    name: str
    payload: Dict[str, Any]


Listener = Callable[[Event], None]


class EventBus:
    """
    Synchronous listener registry owned by a Dungeon.

    Listeners are keyed by event name and called in the order they were added,
    on the caller's thread, before the publishing method returns.
    """

    def __init__(self) -> None:
        self._listeners: DefaultDict[str, List[Listener]] = defaultdict(list)

    def subscribe(self, event_name: str, listener: Listener) -> None:
        if not callable(listener):
            raise TypeError(f"listener for '{event_name}' must be callable, got {listener!r}")
        self._listeners[event_name].append(listener)
        logger.debug("Listener %s added for '%s'", _describe(listener), event_name)

    def unsubscribe(self, event_name: str, listener: Listener) -> None:
        """Remove listener; unknown names or listeners are ignored."""
        listeners = self._listeners.get(event_name)
        if listeners and listener in listeners:
            listeners.remove(listener)
            logger.debug("Listener %s removed from '%s'", _describe(listener), event_name)

    def publish(self, event_name: str, payload: Dict[str, Any]) -> None:
        """
        Deliver an Event to every listener of event_name.

        A listener that raises is logged with its traceback and skipped; the
        remaining listeners still run.
        """
        event = Event(name=event_name, payload=payload)
        listeners = list(self._listeners.get(event_name, ()))
        logger.debug("Event '%s' -> %d listener(s): %s", event_name, len(listeners), payload)
        for listener in listeners:
            try:
                listener(event)
            except Exception:
                logger.exception("Listener %s failed on '%s'", _describe(listener), event_name)


def _describe(listener: Listener) -> str:
    return getattr(listener, "__qualname__", None) or repr(listener)
