"""Typed event dispatch: listeners keyed by an event type."""

from __future__ import annotations

import itertools
from dataclasses import dataclass
from typing import Any, Callable, Generic, Hashable, TypeVar

T = TypeVar("T", bound=Hashable)


@dataclass(frozen=True)
class ListenerHandle:
    """Identifies one registered listener so it can be removed later."""

    event_type: Any
    ident: int


class Event(Generic[T]):
    """A set of callbacks grouped by event type."""

    def __init__(self) -> None:
        self._listeners: dict[T, dict[int, Callable[..., Any]]] = {}
        self._ids = itertools.count()

    def add_listener(self, event_type: T, callback: Callable[..., Any]) -> ListenerHandle:
        """Register a callback for an event type and return its handle."""
        ident = next(self._ids)
        self._listeners.setdefault(event_type, {})[ident] = callback
        return ListenerHandle(event_type, ident)

    def remove_listener(self, handle: ListenerHandle) -> bool:
        """Unregister a listener; returns whether it was registered."""
        callbacks = self._listeners.get(handle.event_type)
        if callbacks is None or handle.ident not in callbacks:
            return False
        del callbacks[handle.ident]
        if not callbacks:
            del self._listeners[handle.event_type]
        return True

    def invoke(self, event_type: T, *args: Any) -> None:
        """Call every listener of the event type with the given arguments."""
        for callback in list(self._listeners.get(event_type, {}).values()):
            callback(*args)

    __call__ = invoke

    def event_types(self) -> list[T]:
        """Event types that currently have at least one listener."""
        return list(self._listeners)