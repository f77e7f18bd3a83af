"""SQLAlchemy ORM model adapter.

Wraps a mapped class and a Session. Records are instances of the mapped
class; persistence is add + flush, so the surrounding transaction stays
under the caller's control unless commit=True.
"""

import logging
from collections.abc import Callable, Mapping
from typing import Any

from sqlalchemy import inspect, select
from sqlalchemy.orm import Session

from findforge.errors import UnknownFieldError

logger = logging.getLogger(__name__)


class SessionModel:
    """Model adapter for an ORM mapped class.

    Args:
        model_class: Declaratively mapped class
        session: Session used for queries and persistence
        commit: Commit after every persist instead of only flushing
    """

    def __init__(self, model_class: type, session: Session, commit: bool = False):
        self.model_type = model_class
        self.name = model_class.__qualname__
        self.session = session
        self.commit = commit
        self._attributes = frozenset(inspect(model_class).attrs.keys())

    def _attribute(self, field: str) -> Any:
        if field not in self._attributes:
            raise UnknownFieldError(self.name, field)
        return getattr(self.model_type, field)

    def construct(self, attributes: Mapping[str, Any]) -> Any:
        for field in attributes:
            self._attribute(field)
        return self.model_type(**attributes)

    def find_by(self, filter: Mapping[str, Any]) -> Any | None:
        conditions = []
        for field, value in filter.items():
            attribute = self._attribute(field)
            conditions.append(attribute.is_(None) if value is None else attribute == value)

        stmt = select(self.model_type).where(*conditions).limit(1)
        return self.session.scalars(stmt).first()

    def persist(self, record: Any) -> Any:
        self.session.add(record)
        if self.commit:
            self.session.commit()
        else:
            self.session.flush()
        logger.debug("Persisted %s", self.name)
        return record

    def assign(self, record: Any, values: Mapping[str, Any]) -> Any:
        for field, value in values.items():
            self._attribute(field)
            setattr(record, field, value)
        return record

    def __repr__(self) -> str:
        return f"SessionModel({self.name})"


def session_adapter_factory(
    session: Session, commit: bool = False
) -> Callable[[type], SessionModel]:
    """Adapter factory for Registry: wraps plain mapped classes in SessionModels.

    Usage:
        registry = Registry(adapter_factory=session_adapter_factory(session))
        registry.register(User, find_by="email")
    """

    def factory(model_class: type) -> SessionModel:
        return SessionModel(model_class, session, commit=commit)

    return factory
