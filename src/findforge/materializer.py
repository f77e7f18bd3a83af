"""Record construction and persistence with build/create hooks."""

import logging
from collections.abc import Callable, Mapping
from typing import Any

from findforge.hooks import Event, HookChannels
from findforge.keys import normalize_attributes
from findforge.models.adapter import ModelAdapter

logger = logging.getLogger(__name__)

# Ad hoc mutation applied to a freshly constructed record, before build hooks.
Customizer = Callable[[Any], Any]


class Materializer:
    """Builds and creates records for one model.

    Order of mutation on a new record:
    1. the adapter constructs it from the attributes
    2. the customizer (if given) runs
    3. build handlers run
    4. (create only) the adapter persists it
    5. (create only) create handlers run on the persisted record
    """

    def __init__(self, adapter: ModelAdapter, channels: HookChannels | None = None):
        self.adapter = adapter
        self.channels = channels if channels is not None else HookChannels()

    def build(
        self,
        attributes: Mapping[Any, Any] | None = None,
        customizer: Customizer | None = None,
    ) -> Any:
        """Construct a record in memory without persisting it."""
        record = self.adapter.construct(normalize_attributes(attributes))
        if customizer is not None:
            customizer(record)
        return self.channels.dispatch(Event.BUILD, record)

    def create(
        self,
        attributes: Mapping[Any, Any] | None = None,
        customizer: Customizer | None = None,
    ) -> Any:
        """Build a record, persist it, then run create handlers."""
        record = self.build(attributes, customizer)
        logger.debug("Creating %s", self.adapter.name)
        return self.channels.dispatch(Event.CREATE, record, default_action=self.adapter.persist)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Materializer):
            return NotImplemented
        return (
            other.adapter.model_type == self.adapter.model_type
            and other.adapter.name == self.adapter.name
        )

    __hash__ = None  # type: ignore[assignment]
