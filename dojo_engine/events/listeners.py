"""Ordered listener registry shared by the event buses."""

import logging
from collections.abc import Callable
from typing import Generic, TypeVar

logger = logging.getLogger(__name__)

E = TypeVar("E")

Listener = Callable[[E], object]
Unsubscribe = Callable[[], None]


class _Registration(Generic[E]):
    """Identity token for one subscribe call."""

    __slots__ = ("listener",)

    def __init__(self, listener: Listener[E]):
        self.listener = listener


class ListenerList(Generic[E]):
    """
    Listeners in registration order.

    Registering the same callable twice yields two registrations; each
    unsubscribe handle removes only its own.
    """

    def __init__(self, channel: str):
        self.channel = channel
        self._registrations: list[_Registration[E]] = []

    def __len__(self) -> int:
        return len(self._registrations)

    def add(self, listener: Listener[E]) -> Unsubscribe:
        registration = _Registration(listener)
        self._registrations.append(registration)

        def unsubscribe() -> None:
            # Identity match; a second call finds nothing and is a no-op
            for index, existing in enumerate(self._registrations):
                if existing is registration:
                    del self._registrations[index]
                    return

        return unsubscribe

    def dispatch(self, event: E) -> int:
        """
        Call every listener registered when dispatch starts.

        Returns:
            Number of listeners that raised
        """
        failures = 0
        for registration in tuple(self._registrations):
            try:
                registration.listener(event)
            except Exception:
                failures += 1
                logger.exception("Listener %r failed on %s channel", registration.listener, self.channel)
        return failures

    def clear(self) -> None:
        self._registrations.clear()
