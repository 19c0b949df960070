"""ServiceResult and ServiceError: the universal service contract.

INVARIANT: Pipeline stages (actor resolution, execution) return
ServiceResult. The router, formatters, and CLI consume this type.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from slashroute.domain.types import ErrorKind


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult.

    Attributes:
        code: Position in the error taxonomy.
        message: Short user-facing message. Safe to echo to the platform.
        detail: Developer-facing diagnostics. Logged, never echoed.
        cause: The underlying reason (backend exception, strategy result).
    """

    model_config = {"frozen": True}

    code: ErrorKind
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)
    cause: Any = Field(default=None, exclude=True)

    @property
    def field_errors(self) -> list[str]:
        return list(self.detail.get("field_errors", []))


class ServiceResult(BaseModel):
    """Universal return type for pipeline operations.

    Attributes:
        ok: Whether the operation succeeded.
        op: Name of the operation (e.g. ``"resolve_actor"``).
        data: Operation-specific payload on success (opaque backend value).
        warnings: Non-fatal issues encountered during the operation.
        error: Structured error if ``ok`` is False.
        meta: Optional metadata (timing, counts, etc.).
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: Any = None
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None

    @classmethod
    def success(cls, op: str, data: Any = None, **kwargs: Any) -> ServiceResult:
        return cls(ok=True, op=op, data=data, **kwargs)

    @classmethod
    def failure(
        cls,
        op: str,
        code: ErrorKind,
        message: str,
        *,
        detail: dict[str, Any] | None = None,
        cause: Any = None,
        **kwargs: Any,
    ) -> ServiceResult:
        error = ServiceError(code=code, message=message, detail=detail or {}, cause=cause)
        return cls(ok=False, op=op, error=error, **kwargs)
