"""ModelAdapter Protocol, the capability set findforge needs from a model."""

from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class ModelAdapter(Protocol):
    """Interface every model adapter must implement.

    The find-or-create core never touches a record directly. It constructs,
    queries and persists through this protocol and hands the resulting
    records to user handlers.
    """

    # Python type of the records this adapter produces.
    model_type: type

    # Name used to derive a registration key (class name, table name).
    name: str

    def construct(self, attributes: Mapping[str, Any]) -> Any: ...

    def find_by(self, filter: Mapping[str, Any]) -> Any | None: ...

    def persist(self, record: Any) -> Any: ...

    def assign(self, record: Any, values: Mapping[str, Any]) -> Any: ...
