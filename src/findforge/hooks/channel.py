"""Ordered handler dispatch for findforge lifecycle events."""

import logging
from typing import Any

from findforge.hooks.types import DefaultAction, Event, Handler, parse_event

logger = logging.getLogger(__name__)


class HookChannel:
    """Ordered multicast dispatcher for one event.

    Handlers run sequentially in registration order, each seeing the
    mutations made by the ones before it. There is no early exit and no
    deduplication: registering the same handler twice runs it twice.
    An exception from a handler aborts the remaining handlers and
    propagates unchanged.
    """

    def __init__(self, event: Event):
        self.event = event
        self._handlers: list[Handler] = []

    @property
    def handlers(self) -> tuple[Handler, ...]:
        return tuple(self._handlers)

    def register(self, handler: Handler) -> "HookChannel":
        """Append a handler. Returns the channel for chaining."""
        if not callable(handler):
            raise TypeError(
                f"Handler for '{self.event.value}' must be callable, "
                f"got {type(handler).__name__}"
            )
        self._handlers.append(handler)
        return self

    def dispatch(self, subject: Any, default_action: DefaultAction | None = None) -> Any:
        """Run the default action (if any), then every handler.

        Args:
            subject: The record the event is about
            default_action: Called with subject before the handlers; its
                return value becomes the value handed to them and returned

        Returns:
            The working value. Handler return values are ignored.
        """
        working = default_action(subject) if default_action is not None else subject

        if self._handlers:
            logger.debug(
                "Dispatching '%s' to %d handler(s)", self.event.value, len(self._handlers)
            )
        for handler in self._handlers:
            handler(working)

        return working

    def __len__(self) -> int:
        return len(self._handlers)

    def __repr__(self) -> str:
        return f"HookChannel({self.event.value!r}, handlers={len(self._handlers)})"


class HookChannels:
    """One HookChannel per event, shared by a resolver and its parts.

    A Locator and a Materializer built from the same HookChannels see the
    same handler lists, so registering through the resolver reaches both.
    """

    def __init__(self) -> None:
        self._channels: dict[Event, HookChannel] = {event: HookChannel(event) for event in Event}

    def channel(self, event: Event | str) -> HookChannel:
        """Get the channel for an event name.

        Raises:
            UnknownEventError: If the event name is not recognized
        """
        return self._channels[parse_event(event)]

    def register(self, event: Event | str, handler: Handler) -> HookChannel:
        return self.channel(event).register(handler)

    def dispatch(
        self,
        event: Event | str,
        subject: Any,
        default_action: DefaultAction | None = None,
    ) -> Any:
        return self.channel(event).dispatch(subject, default_action)

    def counts(self) -> dict[str, int]:
        """Number of handlers per event name."""
        return {event.value: len(channel) for event, channel in self._channels.items()}
