"""Find-or-create unit for one registered model."""

import logging
from collections.abc import Callable, Iterable, Mapping
from typing import Any

from findforge.hooks import Event, Handler, HookChannels
from findforge.keys import LookupKeySet
from findforge.locator import Locator
from findforge.materializer import Customizer, Materializer
from findforge.models.adapter import ModelAdapter

logger = logging.getLogger(__name__)


class Resolver:
    """Makes sure a record exists, finding it first and creating it otherwise.

    The Locator and Materializer share this resolver's HookChannels, so a
    handler attached with on() is seen by whichever part fires its event.

    Per find_or_create call:
    - found handlers run only when a record is located
    - build and create handlers run only when a record is created
    - returned handlers run exactly once, on both paths

    Example:
        resolver = Resolver(InMemoryModel(User), find_by="email")
        resolver.on("build", lambda user: setattr(user, "reference", "abc"))
        user = resolver.find_or_create({"email": "a@x.com", "name": "A"})

    Handlers receive the bare record. To set fields through the model's
    declared field list (unknown names raise UnknownFieldError), go
    through the adapter:

        resolver.on("found", lambda user: resolver.adapter.assign(user, {"name": "seen"}))
    """

    def __init__(self, adapter: ModelAdapter, find_by: str | Iterable[str]):
        self.adapter = adapter
        self.channels = HookChannels()
        self.locator = Locator(adapter, find_by, self.channels)
        self.materializer = Materializer(adapter, self.channels)

    @property
    def model_type(self) -> type:
        return self.adapter.model_type

    @property
    def lookup_keys(self) -> LookupKeySet:
        return self.locator.keys

    def on(self, event: Event | str, handler: Handler) -> "Resolver":
        """Attach a handler to an event. Returns the resolver for chaining.

        Raises:
            UnknownEventError: If event is not build, create, found or returned
        """
        self.channels.register(event, handler)
        return self

    def hook(self, event: Event | str) -> Callable[[Handler], Handler]:
        """Decorator form of on().

        Usage:
            @resolver.hook("found")
            def touch(user):
                user.seen = True
        """

        def decorator(fn: Handler) -> Handler:
            self.on(event, fn)
            return fn

        return decorator

    def find(self, attributes: Mapping[Any, Any] | None = None) -> Any | None:
        return self.locator.find(attributes)

    def build(
        self,
        attributes: Mapping[Any, Any] | None = None,
        customizer: Customizer | None = None,
    ) -> Any:
        return self.materializer.build(self.lookup_keys.canonicalize(attributes), customizer)

    def create(
        self,
        attributes: Mapping[Any, Any] | None = None,
        customizer: Customizer | None = None,
    ) -> Any:
        """Build and persist a record.

        Keys that match a lookup field in another casing are stored under
        the lookup spelling, so the record is found again by find().
        """
        return self.materializer.create(self.lookup_keys.canonicalize(attributes), customizer)

    def find_or_create(
        self,
        attributes: Mapping[Any, Any] | None = None,
        customizer: Customizer | None = None,
    ) -> Any:
        """Return the record matching the lookup fields, creating it if needed.

        Args:
            attributes: Lookup fields plus the payload used on creation
            customizer: Called with a newly built record before build
                handlers run; not called when the record is found

        Returns:
            The found or created record, after returned handlers ran
        """
        record = self.locator.find(attributes)
        if record is None:
            record = self.create(attributes, customizer)
        return self.channels.dispatch(Event.RETURNED, record)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Resolver):
            return NotImplemented
        return (
            other.model_type == self.model_type
            and other.adapter.name == self.adapter.name
            and other.lookup_keys == self.lookup_keys
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Resolver({self.adapter.name}, find_by={list(self.lookup_keys)!r})"
