"""Table model adapter.

Records are plain dicts backed by a relational table. The table is
reflected from the database, so it must exist before the adapter is
built. Dialect-neutral via SQLAlchemy Core.
"""

import logging
from collections.abc import Mapping
from typing import Any

from sqlalchemy import Engine, MetaData, Table, create_engine, func, insert, select, update

from findforge.errors import UnknownFieldError

logger = logging.getLogger(__name__)


class TableModel:
    """Model adapter for dict records stored in one table.

    Args:
        engine: SQLAlchemy engine, or a database URL to create one from
        table_name: Name of an existing table
        primary_key: Column filled in after insert and used to refresh
            the record from the database
    """

    model_type = dict

    def __init__(self, engine: Engine | str, table_name: str, primary_key: str = "id"):
        if isinstance(engine, str):
            engine = create_engine(engine)
        self._engine = engine
        self.name = table_name
        self.primary_key = primary_key
        self.table = Table(table_name, MetaData(), autoload_with=engine)
        if primary_key not in self.table.c:
            raise UnknownFieldError(table_name, primary_key)

    @property
    def columns(self) -> list[str]:
        return [column.name for column in self.table.c]

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _column(self, field: str):
        if field not in self.table.c:
            raise UnknownFieldError(self.name, field)
        return self.table.c[field]

    def _storable(self, record: Mapping[str, Any]) -> dict[str, Any]:
        """Values for columns that exist; other keys are not stored."""
        return {key: value for key, value in record.items() if key in self.table.c}

    def _fetch(self, conn: Any, id: Any) -> dict[str, Any] | None:
        pk = self.table.c[self.primary_key]
        row = conn.execute(select(self.table).where(pk == id)).first()
        return dict(row._mapping) if row else None

    # ------------------------------------------------------------------
    # ModelAdapter
    # ------------------------------------------------------------------

    def construct(self, attributes: Mapping[str, Any]) -> dict[str, Any]:
        return dict(attributes)

    def find_by(self, filter: Mapping[str, Any]) -> dict[str, Any] | None:
        conditions = []
        for field, value in filter.items():
            column = self._column(field)
            conditions.append(column.is_(None) if value is None else column == value)

        stmt = select(self.table).where(*conditions).limit(1)
        with self._engine.connect() as conn:
            row = conn.execute(stmt).first()
        return dict(row._mapping) if row else None

    def persist(self, record: dict[str, Any]) -> dict[str, Any]:
        """Insert the record, or update it when its primary key row exists.

        The dict is refreshed in place from the stored row, so defaults
        and generated ids become visible to the caller.
        """
        values = self._storable(record)
        pk = self.table.c[self.primary_key]

        with self._engine.begin() as conn:
            existing = None
            if values.get(self.primary_key) is not None:
                existing = self._fetch(conn, values[self.primary_key])

            if existing is not None:
                id = values.pop(self.primary_key)
                if values:
                    conn.execute(update(self.table).where(pk == id).values(**values))
                logger.debug("Updated %s %s=%s", self.name, self.primary_key, id)
            else:
                if values.get(self.primary_key, 0) is None:
                    del values[self.primary_key]
                result = conn.execute(insert(self.table).values(**values))
                id = result.inserted_primary_key[0]
                logger.debug("Inserted %s %s=%s", self.name, self.primary_key, id)

            stored = self._fetch(conn, id)

        if stored is not None:
            record.update(stored)
        return record

    def assign(self, record: dict[str, Any], values: Mapping[str, Any]) -> dict[str, Any]:
        for field in values:
            self._column(field)
        record.update(values)
        return record

    def count(self) -> int:
        with self._engine.connect() as conn:
            return conn.execute(select(func.count()).select_from(self.table)).scalar_one()

    def __repr__(self) -> str:
        return f"TableModel({self.name!r})"
