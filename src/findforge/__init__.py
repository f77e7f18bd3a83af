"""findforge: find-or-create seeding with lifecycle hooks.

Register a model once with the fields that identify it, then ask for
records by key. Existing records are found by those fields; missing ones
are built, persisted and returned.

Usage:
    import findforge

    findforge.register(User, find_by="email").on(
        "build", lambda user: setattr(user, "reference", uuid4().hex)
    )
    user = findforge.find_or_create("user", {"email": "a@x.com", "name": "A"})

The module-level functions delegate to a default Registry created on first
use. Tests call reset() to start from an empty one; applications that want
a specific adapter factory install their own with configure().
"""

import threading
from collections.abc import Iterable, Mapping
from typing import Any

from findforge.errors import (
    EmptyLookupKeysError,
    FindForgeError,
    NotRegisteredError,
    SeedPlanError,
    UnknownEventError,
    UnknownFieldError,
)
from findforge.hooks import VALID_EVENTS, Event, Handler, HookChannel, HookChannels
from findforge.keys import LookupKeySet, derive_key
from findforge.locator import Locator
from findforge.materializer import Customizer, Materializer
from findforge.models import (
    InMemoryModel,
    ModelAdapter,
    SessionModel,
    TableModel,
    session_adapter_factory,
)
from findforge.registry import AdapterFactory, Registry
from findforge.resolver import Resolver

_registry: Registry | None = None
_registry_lock = threading.Lock()


def get_registry() -> Registry:
    """Return the default registry, creating it on first use."""
    global _registry
    with _registry_lock:
        if _registry is None:
            _registry = Registry()
        return _registry


def configure(registry: Registry) -> Registry:
    """Install registry as the default one. Returns it."""
    global _registry
    with _registry_lock:
        _registry = registry
    return registry


def reset() -> None:
    """Discard the default registry. Primarily for testing."""
    global _registry
    with _registry_lock:
        _registry = None


def register(
    target: type | ModelAdapter,
    key: str | None = None,
    *,
    find_by: str | Iterable[str],
) -> Resolver:
    """Register a model on the default registry. See Registry.register."""
    return get_registry().register(target, key, find_by=find_by)


def on(key: Any, event: Event | str, handler: Handler) -> Resolver:
    """Attach a handler on the default registry. See Registry.on."""
    return get_registry().on(key, event, handler)


def find_or_create(
    key: Any,
    attributes: Mapping[Any, Any] | None = None,
    customizer: Customizer | None = None,
) -> Any:
    """Find or create a record through the default registry."""
    return get_registry().find_or_create(key, attributes, customizer)


def resolver_for(key: Any) -> Resolver:
    """Get a resolver from the default registry.

    Raises:
        NotRegisteredError: If nothing is registered under key
    """
    return get_registry().resolver_for(key)


__all__ = [
    "AdapterFactory",
    "Customizer",
    "EmptyLookupKeysError",
    "Event",
    "FindForgeError",
    "Handler",
    "HookChannel",
    "HookChannels",
    "InMemoryModel",
    "Locator",
    "LookupKeySet",
    "Materializer",
    "ModelAdapter",
    "NotRegisteredError",
    "Registry",
    "Resolver",
    "SeedPlanError",
    "SessionModel",
    "TableModel",
    "UnknownEventError",
    "UnknownFieldError",
    "VALID_EVENTS",
    "configure",
    "derive_key",
    "find_or_create",
    "get_registry",
    "on",
    "register",
    "reset",
    "resolver_for",
    "session_adapter_factory",
]
