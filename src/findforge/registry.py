"""Key to resolver directory."""

import logging
import threading
from collections.abc import Callable, Iterable, Mapping
from typing import Any

from findforge.errors import NotRegisteredError
from findforge.hooks import Event, Handler
from findforge.keys import derive_key, normalize_name
from findforge.materializer import Customizer
from findforge.models.adapter import ModelAdapter
from findforge.models.memory import InMemoryModel
from findforge.resolver import Resolver

logger = logging.getLogger(__name__)

# Builds an adapter for a plain model class passed to register().
AdapterFactory = Callable[[type], ModelAdapter]


class Registry:
    """Registry of find-or-create resolvers, keyed by name.

    Models must be registered before they can be seeded. Registering a
    key again replaces its resolver, and with it every handler attached
    to the old one.

    Example:
        registry = Registry()
        registry.register(User, find_by="email")
        registry.on("user", "found", lambda user: ...)
        user = registry.find_or_create("user", {"email": "a@x.com"})

    Args:
        adapter_factory: Wraps plain classes passed to register(). Defaults
            to InMemoryModel; use session_adapter_factory(session) for
            SQLAlchemy mapped classes.
    """

    def __init__(self, adapter_factory: AdapterFactory | None = None):
        self.adapter_factory: AdapterFactory = adapter_factory or InMemoryModel
        self._resolvers: dict[str, Resolver] = {}
        self._lock = threading.RLock()

    def register(
        self,
        target: type | ModelAdapter,
        key: str | None = None,
        *,
        find_by: str | Iterable[str],
    ) -> Resolver:
        """Register a model under a key.

        Args:
            target: A ModelAdapter, or a model class to wrap with the
                adapter factory
            key: Registration key; derived from the model name when omitted
                (UserProfile -> user_profile)
            find_by: Field name(s) used to look up existing records

        Returns:
            The new Resolver

        Raises:
            EmptyLookupKeysError: If find_by names no field
        """
        adapter = self.adapter_factory(target) if isinstance(target, type) else target
        key = normalize_name(key) if key is not None else derive_key(adapter.name)

        resolver = Resolver(adapter, find_by)
        with self._lock:
            replaced = key in self._resolvers
            self._resolvers[key] = resolver

        logger.debug(
            "%s '%s' -> %r", "Re-registered" if replaced else "Registered", key, resolver
        )
        return resolver

    def resolver_for(self, key: Any) -> Resolver:
        """Get the resolver registered under a key.

        Raises:
            NotRegisteredError: If nothing is registered under key
        """
        name = normalize_name(key)
        with self._lock:
            resolver = self._resolvers.get(name)
        if resolver is None:
            raise NotRegisteredError(name)
        return resolver

    def is_registered(self, key: Any) -> bool:
        with self._lock:
            return normalize_name(key) in self._resolvers

    def list_registered(self) -> list[str]:
        """List registered keys, sorted."""
        with self._lock:
            return sorted(self._resolvers)

    def on(self, key: Any, event: Event | str, handler: Handler) -> Resolver:
        """Attach a handler to the resolver under key. Returns that resolver."""
        return self.resolver_for(key).on(event, handler)

    def find_or_create(
        self,
        key: Any,
        attributes: Mapping[Any, Any] | None = None,
        customizer: Customizer | None = None,
    ) -> Any:
        return self.resolver_for(key).find_or_create(attributes, customizer)

    def clear(self) -> None:
        """Drop every registration. Primarily for testing."""
        with self._lock:
            self._resolvers.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._resolvers)
