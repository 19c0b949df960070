"""Error shapes a backend operation may raise.

Backends are free to raise anything; these classes are the shapes the
translator understands precisely. Not-found detection is by class name
(any exception whose class name contains ``NotFound``), so third-party
lookup errors are recognised without subclassing.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class FieldError(BaseModel):
    """A single field-level validation failure."""

    model_config = ConfigDict(frozen=True)

    field: str
    message: str = ""
    missing: bool = False

    def describe(self) -> str:
        """User-facing text for this field error.

        Examples:
            >>> FieldError(field="title", message="is too long").describe()
            'title: is too long'
            >>> FieldError(field="title", missing=True).describe()
            'title is required'
            >>> FieldError(field="title").describe()
            'title is invalid'
        """
        if self.missing:
            return f"{self.field} is required"
        if not self.message:
            return f"{self.field} is invalid"
        return f"{self.field}: {self.message}"


class BackendError(Exception):
    """Base class for errors raised by backend operations."""

    def __init__(self, message: str = "") -> None:
        super().__init__(message)
        self.message = message


class InvalidInput(BackendError):
    """Input rejected by the backend, with per-field detail."""

    def __init__(self, errors: list[FieldError], message: str = "Invalid input") -> None:
        super().__init__(message)
        self.errors = list(errors)


class Forbidden(BackendError):
    """The actor may not perform the operation."""


class RecordNotFound(BackendError):
    """The operation's target does not exist."""
