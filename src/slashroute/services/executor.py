"""ActionExecutor: one backend call per routed invocation.

Dispatch is over the closed :class:`OperationKind` set. Create, read and
generic actions go to the injected backend runner; update and destroy
are reported as unsupported without touching the backend. A failing
runner raises; the exception is translated into the error taxonomy and
returned as a failed ServiceResult. No retries, no queuing.
"""

from __future__ import annotations

import time
from typing import Any, Protocol

import structlog
from pydantic import BaseModel, ConfigDict

from slashroute.domain.commands import Command, OperationDescriptor
from slashroute.domain.invocation import Invocation
from slashroute.domain.types import ErrorKind, OperationKind
from slashroute.services.result import ServiceResult
from slashroute.services.telemetry import log_slow_operation, trace_span
from slashroute.services.translator import translate

log = structlog.get_logger(__name__)

OP = "execute"

SUPPORTED_KINDS: frozenset[OperationKind] = frozenset(
    {OperationKind.CREATE, OperationKind.READ, OperationKind.GENERIC_ACTION}
)


class ExecutionContext(BaseModel):
    """Context handed to the backend alongside input and actor."""

    model_config = ConfigDict(frozen=True)

    invocation: Invocation
    command_name: str
    guild_id: str | None = None
    channel_id: str | None = None

    @classmethod
    def for_invocation(cls, invocation: Invocation, command: Command) -> ExecutionContext:
        return cls(
            invocation=invocation,
            command_name=command.name,
            guild_id=invocation.guild_id,
            channel_id=invocation.channel_id,
        )


class BackendRunner(Protocol):
    """Runs a backend operation; returns its value or raises on failure.

    For ``READ`` the input is passed as query arguments and a collection
    is expected back; ``GENERIC_ACTION`` results are opaque.
    """

    def __call__(
        self,
        kind: OperationKind,
        operation: OperationDescriptor,
        input: dict[str, Any],
        actor: Any,
        context: ExecutionContext,
    ) -> Any: ...


class ActionExecutor:
    """Executes a command's backend operation for a resolved actor."""

    def __init__(self, runner: BackendRunner, *, slow_threshold_ms: float = 50) -> None:
        self._runner = runner
        self._slow_threshold_ms = slow_threshold_ms

    def execute(
        self,
        command: Command,
        input: dict[str, Any],
        actor: Any,
        context: ExecutionContext,
    ) -> ServiceResult:
        operation = command.operation
        kind = operation.kind
        if kind not in SUPPORTED_KINDS:
            log.warning(
                "action.unsupported_kind",
                command=command.name,
                operation=operation.ref,
                kind=str(kind),
            )
            return ServiceResult.failure(
                OP,
                ErrorKind.UNSUPPORTED_OPERATION_KIND,
                f"{kind.value.capitalize()} operations are not yet supported",
                detail={"operation": operation.ref, "kind": str(kind)},
            )

        log.debug(
            "action.start",
            command=command.name,
            operation=operation.ref,
            kind=str(kind),
            input_keys=sorted(input),
            has_actor=actor is not None,
            interaction_id=context.invocation.id,
        )

        start = time.perf_counter()
        with trace_span(f"backend.{operation.ref}") as span:
            try:
                value = self._runner(kind, operation, input, actor, context)
            except Exception as exc:
                duration_ms = (time.perf_counter() - start) * 1000
                if span is not None:
                    span.annotate("error", type(exc).__name__)
                return self._failed(command, exc, duration_ms, context)
        duration_ms = (time.perf_counter() - start) * 1000

        log.debug(
            "action.succeeded",
            command=command.name,
            operation=operation.ref,
            duration_ms=round(duration_ms, 2),
            interaction_id=context.invocation.id,
        )
        log_slow_operation(
            "backend",
            operation.ref,
            duration_ms,
            threshold_ms=self._slow_threshold_ms,
            interaction_id=context.invocation.id,
        )
        return ServiceResult.success(OP, value, meta={"duration_ms": round(duration_ms, 2)})

    def _failed(
        self,
        command: Command,
        exc: Exception,
        duration_ms: float,
        context: ExecutionContext,
    ) -> ServiceResult:
        translated = translate(
            exc,
            {"operation": command.operation.ref, "interaction_id": context.invocation.id},
        )
        log.error(
            "action.failed",
            command=command.name,
            operation=command.operation.ref,
            error_kind=str(translated.kind),
            developer_message=translated.developer_message,
            duration_ms=round(duration_ms, 2),
            interaction_id=context.invocation.id,
        )
        return ServiceResult(
            ok=False,
            op=OP,
            error=translated.to_service_error(cause=exc),
            meta={"duration_ms": round(duration_ms, 2)},
        )
