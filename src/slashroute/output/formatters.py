"""Response formatters: pipeline outcomes to interaction envelopes.

A command may carry its own :class:`ResponseFormatter`; otherwise the
router's formatter (by default :class:`DefaultResponseFormatter`) is used.
:func:`format_response` picks the formatter method from the outcome:

* successful ServiceResult, or any bare value -> ``format_success``
* failure carrying field errors               -> ``format_validation_errors``
* any other failure                           -> ``format_error``
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

import structlog
from pydantic import BaseModel, ConfigDict

from slashroute.domain.commands import Command
from slashroute.domain.invocation import Invocation
from slashroute.domain.types import ErrorKind
from slashroute.output.envelope import Envelope
from slashroute.services.result import ServiceError, ServiceResult
from slashroute.services.translator import (
    INVALID_MESSAGE,
    describe_field_error,
    translate,
    validation_errors_of,
)

log = structlog.get_logger(__name__)


class FormatContext(BaseModel):
    """What a formatter knows about the invocation it is answering."""

    model_config = ConfigDict(frozen=True)

    invocation: Invocation
    command: Command | None = None
    user_id: str | None = None
    guild_id: str | None = None
    channel_id: str | None = None

    @classmethod
    def build(cls, invocation: Invocation, command: Command | None = None) -> FormatContext:
        return cls(
            invocation=invocation,
            command=command,
            user_id=invocation.user_id,
            guild_id=invocation.guild_id,
            channel_id=invocation.channel_id,
        )


class ResponseFormatter(ABC):
    """Formatter interface: three required operations."""

    @abstractmethod
    def format_success(self, result: Any, context: FormatContext) -> Envelope: ...

    @abstractmethod
    def format_error(self, error: Any, context: FormatContext) -> Envelope: ...

    @abstractmethod
    def format_validation_errors(self, errors: list[Any], context: FormatContext) -> Envelope: ...


class DefaultResponseFormatter(ResponseFormatter):
    """Plain-text, caller-only responses."""

    def format_success(self, result: Any, context: FormatContext) -> Envelope:
        return Envelope.message(self._success_content(result, context))

    def format_error(self, error: Any, context: FormatContext) -> Envelope:
        return Envelope.message(f"Error: {self._error_content(error)}")

    def format_validation_errors(self, errors: list[Any], context: FormatContext) -> Envelope:
        if errors:
            content = "\n".join(f"• {describe_field_error(e)}" for e in errors)
        else:
            content = INVALID_MESSAGE
        return Envelope.message(f"Validation errors:\n{content}")

    @staticmethod
    def _success_content(result: Any, context: FormatContext) -> str:
        if isinstance(result, str):
            return result
        if isinstance(result, (list, tuple)):
            return f"Found {len(result)} items"
        if result is None or isinstance(result, (bool, int, float)):
            return "Command completed successfully!"
        if context.command is not None:
            return f"{context.command.operation.name} completed successfully!"
        return "Command completed successfully!"

    @staticmethod
    def _error_content(error: Any) -> str:
        if isinstance(error, ServiceError):
            return error.message
        if isinstance(error, str):
            return error
        return translate(error).user_message


def format_response(
    outcome: Any,
    context: FormatContext,
    formatter: ResponseFormatter,
) -> Envelope:
    """Dispatch *outcome* to the matching *formatter* operation."""
    if isinstance(outcome, ServiceResult):
        if outcome.ok:
            return formatter.format_success(outcome.data, context)
        error = outcome.error
        if error is not None and error.code == ErrorKind.VALIDATION:
            field_errors = validation_errors_of(error.cause)
            return formatter.format_validation_errors(
                field_errors if field_errors is not None else error.field_errors, context
            )
        return formatter.format_error(error, context)

    if isinstance(outcome, BaseException):
        field_errors = validation_errors_of(outcome)
        if field_errors is not None:
            return formatter.format_validation_errors(field_errors, context)
        return formatter.format_error(outcome, context)

    return formatter.format_success(outcome, context)


def formatter_for(command: Command | None, fallback: ResponseFormatter) -> ResponseFormatter:
    """The command's own formatter if it declares one, else *fallback*.

    A declared formatter that is not a :class:`ResponseFormatter` is
    ignored with a warning.
    """
    if command is None or command.formatter is None:
        return fallback
    if isinstance(command.formatter, ResponseFormatter):
        return command.formatter
    log.warning(
        "formatter.ignored",
        command=command.name,
        formatter=type(command.formatter).__name__,
    )
    return fallback
