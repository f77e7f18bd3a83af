"""Key and attribute normalization.

Attribute bags may arrive with str or Enum keys, with stray whitespace,
and with casing that differs from the declared lookup fields. Everything
is reduced to plain strings before it reaches a model adapter.
"""

import re
from collections.abc import Iterable, Iterator, Mapping
from enum import Enum
from typing import Any

from findforge.errors import EmptyLookupKeysError

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")


def normalize_name(name: Any) -> str:
    """Reduce a field name or registration key to a plain string."""
    if isinstance(name, Enum):
        name = name.value
    if not isinstance(name, str):
        raise TypeError(f"Expected a string name, got {type(name).__name__}")
    return str(name).strip()


def normalize_attributes(attributes: Mapping[Any, Any] | None) -> dict[str, Any]:
    """Return a copy of attributes with every key normalized.

    Later keys win when two spellings normalize to the same name.
    """
    if not attributes:
        return {}
    return {normalize_name(key): value for key, value in attributes.items()}


def derive_key(model: Any) -> str:
    """Derive a registration key from a model's name.

    Examples:
        UserProfile -> user_profile
        Admin.User  -> admin_user (nested classes)
        users       -> users (table models pass their table name)
        make.<locals>.Widget -> widget (classes defined in a function)
    """
    if isinstance(model, str):
        name = model
    else:
        name = getattr(model, "__qualname__", None) or type(model).__qualname__
    segments = name.split(".")
    if "<locals>" in segments:
        last_local = len(segments) - 1 - segments[::-1].index("<locals>")
        segments = segments[last_local + 1 :]
    parts = [_CAMEL_BOUNDARY.sub("_", part) for part in segments]
    return "_".join(parts).lower()


class LookupKeySet:
    """Ordered, deduplicated set of field names used to find a record.

    Duplicates are detected case-insensitively and the first spelling is
    kept. That spelling is what ends up in the query filter.
    """

    __slots__ = ("_names", "_by_fold")

    def __init__(self, names: str | Iterable[str]):
        if isinstance(names, (str, Enum)):
            names = [names]

        ordered: list[str] = []
        by_fold: dict[str, str] = {}
        for raw in names:
            name = normalize_name(raw)
            if not name:
                continue
            folded = name.casefold()
            if folded in by_fold:
                continue
            by_fold[folded] = name
            ordered.append(name)

        if not ordered:
            raise EmptyLookupKeysError(
                "At least one lookup field is required (find_by=...); "
                "an empty lookup would match any record."
            )

        self._names = tuple(ordered)
        self._by_fold = by_fold

    @property
    def names(self) -> tuple[str, ...]:
        return self._names

    def canonical(self, name: str) -> str | None:
        """Return the declared spelling of name, or None if not a lookup field."""
        return self._by_fold.get(name.casefold())

    def project(self, attributes: Mapping[Any, Any] | None) -> dict[str, Any]:
        """Build the equality filter for a lookup.

        Attributes outside the key set are dropped. Lookup fields missing
        from the attributes are queried as None so a partial bag never
        widens the query.
        """
        query: dict[str, Any] = dict.fromkeys(self._names)
        for key, value in normalize_attributes(attributes).items():
            canonical = self.canonical(key)
            if canonical is not None:
                query[canonical] = value
        return query

    def canonicalize(self, attributes: Mapping[Any, Any] | None) -> dict[str, Any]:
        """Normalize attributes, rewriting lookup fields to their declared spelling.

        Keys that are not lookup fields keep the caller's spelling. This is
        the payload a new record is constructed from, so it stores the same
        field names a later lookup queries.
        """
        payload: dict[str, Any] = {}
        for key, value in normalize_attributes(attributes).items():
            payload[self.canonical(key) or key] = value
        return payload

    def __iter__(self) -> Iterator[str]:
        return iter(self._names)

    def __len__(self) -> int:
        return len(self._names)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.canonical(name) is not None

    def __eq__(self, other: object) -> bool:
        if isinstance(other, LookupKeySet):
            return self._names == other._names
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._names)

    def __repr__(self) -> str:
        return f"LookupKeySet({list(self._names)!r})"
