"""Model adapters: how findforge constructs, queries and persists records."""

from findforge.models.adapter import ModelAdapter
from findforge.models.memory import InMemoryModel
from findforge.models.orm import SessionModel, session_adapter_factory
from findforge.models.table import TableModel

__all__ = [
    "InMemoryModel",
    "ModelAdapter",
    "SessionModel",
    "TableModel",
    "session_adapter_factory",
]
