"""Hook system types for findforge.

Events, in the order a creating find_or_create fires them:
- build: after the record is constructed in memory (and customized)
- create: after the record is persisted
- found: after an existing record is located (instead of build/create)
- returned: after the find-or-create decision, on every call
"""

from collections.abc import Callable
from enum import Enum
from typing import Any

from findforge.errors import UnknownEventError

# Handler signature: (record) -> ignored. Handlers mutate the record in place.
Handler = Callable[[Any], Any]

# Default action run before a channel's handlers; its return value
# replaces the dispatched subject (e.g. persist).
DefaultAction = Callable[[Any], Any]


class Event(str, Enum):
    """Lifecycle points a handler can be attached to."""

    BUILD = "build"
    CREATE = "create"
    FOUND = "found"
    RETURNED = "returned"


VALID_EVENTS: tuple[str, ...] = tuple(event.value for event in Event)


def parse_event(event: Event | str) -> Event:
    """Resolve an event name to an Event.

    Raises:
        UnknownEventError: If the name is not one of VALID_EVENTS
    """
    if isinstance(event, Event):
        return event
    try:
        return Event(str(event).strip().lower())
    except ValueError:
        raise UnknownEventError(event, VALID_EVENTS) from None
