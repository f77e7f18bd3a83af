"""Exceptions raised by findforge.

Handler, customizer and adapter exceptions are never wrapped: they reach
the caller of find_or_create/build/create/find unchanged. Work already done
(e.g. a persisted row before a failing create hook) is not rolled back here;
run the call inside a transaction when that matters.
"""

from typing import Any


class FindForgeError(Exception):
    """Base class for findforge errors."""


class NotRegisteredError(FindForgeError, KeyError):
    """Raised when a key has no registered resolver."""

    def __init__(self, key: Any):
        self.key = key
        super().__init__(key)

    def __str__(self) -> str:
        return (
            f"No model registered under '{self.key}'. "
            "Register it with register(model, key, find_by=...) first."
        )


class UnknownEventError(FindForgeError, ValueError):
    """Raised when a handler is attached to an event that does not exist."""

    def __init__(self, event: Any, valid: tuple[str, ...]):
        self.event = event
        self.valid = valid
        super().__init__(
            f"Unknown event '{event}'. Valid events: {', '.join(valid)}"
        )


class EmptyLookupKeysError(FindForgeError, ValueError):
    """Raised when a model is registered without any lookup field."""


class UnknownFieldError(FindForgeError, AttributeError):
    """Raised when assigning a field the model does not declare."""

    def __init__(self, model_name: str, field: str):
        self.model_name = model_name
        self.field = field
        super().__init__(f"{model_name} has no field '{field}'")


class SeedPlanError(FindForgeError, ValueError):
    """Raised when a seed plan file is malformed."""
