"""In-process model adapter.

Keeps constructed objects in a list. Useful for unit tests and for
seeding plain Python objects (dataclasses, attrs classes, anything that
accepts its fields as keyword arguments).
"""

import dataclasses
import inspect
import logging
from collections.abc import Mapping
from typing import Any

from findforge.errors import UnknownFieldError

logger = logging.getLogger(__name__)

_MISSING = object()


def _declared_fields(model_type: type) -> frozenset[str] | None:
    """Field names a model accepts, from dataclass fields or __init__.

    None when __init__ takes **kwargs: any field name is accepted.
    """
    if dataclasses.is_dataclass(model_type):
        return frozenset(f.name for f in dataclasses.fields(model_type))

    params = inspect.signature(model_type).parameters.values()
    if any(p.kind is p.VAR_KEYWORD for p in params):
        return None
    return frozenset(
        p.name
        for p in params
        if p.kind in (p.POSITIONAL_OR_KEYWORD, p.KEYWORD_ONLY)
    )


class InMemoryModel:
    """Model adapter storing records in memory.

    Args:
        model_type: Class to instantiate with the attributes as kwargs
        id_field: Attribute set to a sequential integer on persist when it
            is None. Ignored when the model declares no such field.
    """

    def __init__(self, model_type: type, id_field: str | None = "id"):
        self.model_type = model_type
        self.name = model_type.__qualname__
        self.id_field = id_field
        self._fields = _declared_fields(model_type)
        self._records: list[Any] = []
        self._next_id = 1

    def accepts(self, field: str) -> bool:
        """Whether the model declares field (always true for **kwargs models)."""
        return self._fields is None or field in self._fields

    @property
    def records(self) -> list[Any]:
        """Persisted records, oldest first (a copy)."""
        return list(self._records)

    def count(self) -> int:
        return len(self._records)

    def clear(self) -> None:
        self._records.clear()
        self._next_id = 1

    def construct(self, attributes: Mapping[str, Any]) -> Any:
        unknown = [key for key in attributes if not self.accepts(key)]
        if unknown:
            raise UnknownFieldError(self.name, unknown[0])
        return self.model_type(**attributes)

    def find_by(self, filter: Mapping[str, Any]) -> Any | None:
        for record in self._records:
            if all(
                getattr(record, field, _MISSING) == value
                for field, value in filter.items()
            ):
                return record
        return None

    def persist(self, record: Any) -> Any:
        id_field = self.id_field
        if id_field and self.accepts(id_field) and getattr(record, id_field, None) is None:
            setattr(record, self.id_field, self._next_id)
            self._next_id += 1

        if not any(stored is record for stored in self._records):
            self._records.append(record)
            logger.debug("Stored %s #%d", self.name, len(self._records))
        return record

    def assign(self, record: Any, values: Mapping[str, Any]) -> Any:
        for field, value in values.items():
            if not self.accepts(field):
                raise UnknownFieldError(self.name, field)
            setattr(record, field, value)
        return record

    def __repr__(self) -> str:
        return f"InMemoryModel({self.name}, records={len(self._records)})"
