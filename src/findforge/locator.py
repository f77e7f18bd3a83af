"""Lookup of existing records by a subset of their attributes."""

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from findforge.hooks import Event, HookChannels
from findforge.keys import LookupKeySet
from findforge.models.adapter import ModelAdapter

logger = logging.getLogger(__name__)


class Locator:
    """Finds a record by the lookup fields of an attribute bag.

    Only the lookup fields take part in the query; everything else in the
    bag is creation payload and is ignored here. Found handlers run only
    on a hit.

    Raises:
        EmptyLookupKeysError: If no lookup field is given
    """

    def __init__(
        self,
        adapter: ModelAdapter,
        keys: str | Iterable[str] | LookupKeySet,
        channels: HookChannels | None = None,
    ):
        self.adapter = adapter
        self.keys = keys if isinstance(keys, LookupKeySet) else LookupKeySet(keys)
        self.channels = channels if channels is not None else HookChannels()

    def query_from(self, attributes: Mapping[Any, Any] | None) -> dict[str, Any]:
        """The equality filter a lookup with these attributes would run."""
        return self.keys.project(attributes)

    def find(self, attributes: Mapping[Any, Any] | None = None) -> Any | None:
        query = self.query_from(attributes)
        record = self.adapter.find_by(query)
        if record is None:
            logger.debug("No %s matching %s", self.adapter.name, query)
            return None

        logger.debug("Found %s matching %s", self.adapter.name, query)
        return self.channels.dispatch(Event.FOUND, record)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Locator):
            return NotImplemented
        return (
            other.adapter.model_type == self.adapter.model_type
            and other.adapter.name == self.adapter.name
            and other.keys == self.keys
        )

    __hash__ = None  # type: ignore[assignment]
