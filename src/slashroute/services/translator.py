"""ErrorTranslator: backend failures to a fixed, user-safe taxonomy.

User messages are short and never reveal implementation detail; the
developer message carries the full representation and is only logged.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from slashroute.domain.errors import FieldError, Forbidden
from slashroute.domain.types import ErrorKind
from slashroute.services.result import ServiceError

FORBIDDEN_MESSAGE = "You don't have permission to perform this action"
NOT_FOUND_MESSAGE = "The requested resource was not found"
FAILED_MESSAGE = "Command failed to execute"
UNEXPECTED_MESSAGE = "An unexpected error occurred"
INVALID_MESSAGE = "Invalid input provided"


class TranslatedError(BaseModel):
    """A backend failure as the router reports it."""

    model_config = ConfigDict(frozen=True)

    user_message: str
    developer_message: str
    kind: ErrorKind
    field_errors: tuple[str, ...] = ()
    context: dict[str, Any] = Field(default_factory=dict)

    def to_service_error(self, cause: Any = None) -> ServiceError:
        detail: dict[str, Any] = {"developer_message": self.developer_message, **self.context}
        if self.field_errors:
            detail["field_errors"] = list(self.field_errors)
        return ServiceError(code=self.kind, message=self.user_message, detail=detail, cause=cause)


def translate(error: Any, context: dict[str, Any] | None = None) -> TranslatedError:
    """Classify *error* and produce user and developer messages.

    Examples:
        >>> translate(ValueError("boom")).user_message
        'Command failed to execute'
        >>> translate("boom").user_message
        'An unexpected error occurred'
    """
    context = dict(context or {})
    field_errors = validation_errors_of(error)
    if field_errors is not None:
        messages = tuple(describe_field_error(e) for e in field_errors) or (INVALID_MESSAGE,)
        if len(messages) == 1:
            user_message = messages[0]
        else:
            user_message = "Multiple validation errors: " + "; ".join(messages)
        return TranslatedError(
            user_message=user_message,
            developer_message=_developer_message(error),
            kind=ErrorKind.VALIDATION,
            field_errors=messages,
            context=context,
        )

    name = type(error).__name__
    if isinstance(error, Forbidden) or "Forbidden" in name:
        return TranslatedError(
            user_message=FORBIDDEN_MESSAGE,
            developer_message="Authorization failed for the requested action",
            kind=ErrorKind.FORBIDDEN,
            context=context,
        )
    if "NotFound" in name:
        return TranslatedError(
            user_message=NOT_FOUND_MESSAGE,
            developer_message=f"Resource lookup failed: {error!r}",
            kind=ErrorKind.NOT_FOUND,
            context=context,
        )
    return TranslatedError(
        user_message=FAILED_MESSAGE if isinstance(error, Exception) else UNEXPECTED_MESSAGE,
        developer_message=repr(error),
        kind=ErrorKind.UNKNOWN,
        context=context,
    )


def validation_errors_of(error: Any) -> list[Any] | None:
    """The field-error list carried by *error*, or None if it is not a validation error."""
    errors = error.get("errors") if isinstance(error, dict) else getattr(error, "errors", None)
    if isinstance(errors, (list, tuple)):
        return list(errors)
    return None


def describe_field_error(error: Any) -> str:
    """User text for one field error, whatever shape the backend used."""
    if isinstance(error, FieldError):
        return error.describe()
    if isinstance(error, dict) and error.get("field") is not None:
        message = error.get("message")
        return FieldError(
            field=str(error["field"]),
            message="" if message is None else str(message),
            missing=error.get("missing") is True,
        ).describe()
    if isinstance(error, str):
        return error
    message = getattr(error, "message", None)
    if isinstance(message, str) and message:
        return message
    return str(error)


def _developer_message(error: Any) -> str:
    if isinstance(error, Exception):
        return f"{type(error).__name__}: {error}"
    return repr(error)
