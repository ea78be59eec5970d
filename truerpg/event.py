"""Multicast events holding a list of distinct handlers."""

from __future__ import annotations

from typing import Any, Callable, Iterator, List

Handler = Callable[..., Any]


class Event:
    """A list of handlers that are all called when the event fires.

    A handler is added only once; handlers are compared by equality, so the
    same bound method of the same object counts as one handler.
    """

    def __init__(self) -> None:
        self._handlers: List[Handler] = []

    def add(self, handler: Handler) -> None:
        """Subscribe ``handler`` unless an equal handler is already present."""
        if not callable(handler):
            raise TypeError(f"event handler must be callable, got {handler!r}")
        if handler not in self._handlers:
            self._handlers.append(handler)

    def remove(self, handler: Handler) -> None:
        """Unsubscribe ``handler``; absent handlers are ignored."""
        try:
            self._handlers.remove(handler)
        except ValueError:
            pass

    def __iadd__(self, handler: Handler) -> Event:
        self.add(handler)
        return self

    def __isub__(self, handler: Handler) -> Event:
        self.remove(handler)
        return self

    def __call__(self, *args: Any) -> None:
        for handler in tuple(self._handlers):
            handler(*args)

    def __len__(self) -> int:
        return len(self._handlers)

    def __contains__(self, handler: object) -> bool:
        return handler in self._handlers

    def __iter__(self) -> Iterator[Handler]:
        return iter(tuple(self._handlers))