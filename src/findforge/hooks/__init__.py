"""findforge lifecycle hooks.

Each registered model gets one HookChannels set with a channel per event:
- build: record constructed in memory, not yet persisted
- create: record persisted
- found: existing record located
- returned: find_or_create is about to return, on every path

Usage:
    from findforge.hooks import HookChannels

    channels = HookChannels()
    channels.register("build", lambda user: setattr(user, "name", "seed"))
    channels.dispatch("build", user)
"""

from findforge.hooks.channel import HookChannel, HookChannels
from findforge.hooks.types import (
    VALID_EVENTS,
    DefaultAction,
    Event,
    Handler,
    parse_event,
)

__all__ = [
    "DefaultAction",
    "Event",
    "Handler",
    "HookChannel",
    "HookChannels",
    "VALID_EVENTS",
    "parse_event",
]
