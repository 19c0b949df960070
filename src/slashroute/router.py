"""Router: the single entry point from invocation to sent response.

Pipeline (linear, short-circuiting on the first failure)::

    lookup -> filter -> resolve actor -> build input -> execute -> format -> send

Every failure branch still goes through a formatter, so each invocation
produces exactly one outbound response. An exception escaping a stage
becomes an ``UNKNOWN`` failure rather than propagating. The router keeps
no per-call state on the instance; concurrent calls share only immutable
collaborators.
"""

from __future__ import annotations

import time
from typing import Any, Protocol

import structlog

from slashroute.domain.commands import Command
from slashroute.domain.invocation import Invocation
from slashroute.domain.types import ErrorKind
from slashroute.output.envelope import Envelope
from slashroute.output.formatters import (
    DefaultResponseFormatter,
    FormatContext,
    ResponseFormatter,
    format_response,
    formatter_for,
)
from slashroute.plugins.manager import PluginManager
from slashroute.services.actors import ActorResolver, CreationStrategy
from slashroute.services.executor import ActionExecutor, BackendRunner, ExecutionContext
from slashroute.services.filters import command_allowed
from slashroute.services.inputs import build_input
from slashroute.services.registry import CommandRegistry
from slashroute.services.result import ServiceResult
from slashroute.services.telemetry import log_slow_operation
from slashroute.services.translator import UNEXPECTED_MESSAGE

log = structlog.get_logger(__name__)

OP = "route"
FALLBACK_ERROR_CONTENT = "Error: An error occurred while processing your command."


class Sender(Protocol):
    """Delivers a response envelope to the platform. Raises on failure."""

    def send(self, invocation_id: str, token: str, envelope: Envelope) -> Any: ...


class Router:
    """Routes invocations to backend operations and answers them.

    Args:
        registry: Read-only command lookup.
        runner: Executes backend operations.
        sender: Delivers the response; failures are logged, never retried.
        creation_strategy: Optional find-or-create hook for the caller's
            principal. Without it the raw caller payload is the actor.
        formatter: Formatter for commands that do not declare their own.
        plugin_manager: Supplies command filters and post-route hooks.
        slow_threshold_ms: Whole-route duration above which a slow
            operation is logged.
    """

    def __init__(
        self,
        registry: CommandRegistry,
        runner: BackendRunner,
        sender: Sender,
        *,
        creation_strategy: CreationStrategy | None = None,
        formatter: ResponseFormatter | None = None,
        plugin_manager: PluginManager | None = None,
        slow_threshold_ms: float = 1000,
    ) -> None:
        self._registry = registry
        self._sender = sender
        self._actors = ActorResolver(creation_strategy)
        self._executor = ActionExecutor(runner)
        self._formatter = formatter or DefaultResponseFormatter()
        self._plugin_manager = plugin_manager
        self._slow_threshold_ms = slow_threshold_ms

    def route(self, invocation: Invocation) -> Envelope:
        """Look up the invoked command and route to it."""
        return self.route_command(invocation, self._registry.lookup(invocation.command_name))

    def route_command(self, invocation: Invocation, command: Command | None) -> Envelope:
        """Route *invocation* to an already-matched *command* (None means unknown)."""
        start = time.perf_counter()
        with structlog.contextvars.bound_contextvars(
            interaction_id=invocation.id,
            command=invocation.command_name,
            user_id=invocation.user_id,
            guild_id=invocation.guild_id,
        ):
            log.debug("route.start")
            outcome = self._run(invocation, command)
            envelope = self._format(outcome, invocation, command)
            self._send(invocation, envelope)

            duration_ms = (time.perf_counter() - start) * 1000
            self._log_completion(invocation, outcome, duration_ms)
            self._post_route(invocation, outcome, duration_ms)
        return envelope

    # ------------------------------------------------------------------
    # Pipeline stages
    # ------------------------------------------------------------------

    def _run(self, invocation: Invocation, command: Command | None) -> ServiceResult:
        try:
            return self._pipeline(invocation, command)
        except Exception as exc:
            log.exception("route.unexpected_error")
            return ServiceResult.failure(
                OP,
                ErrorKind.UNKNOWN,
                UNEXPECTED_MESSAGE,
                detail={"reason": repr(exc)},
                cause=exc,
            )

    def _pipeline(self, invocation: Invocation, command: Command | None) -> ServiceResult:
        if command is None:
            return ServiceResult.failure(
                OP,
                ErrorKind.UNKNOWN_COMMAND,
                "Unknown command",
                detail={"command": invocation.command_name},
            )

        if not command_allowed(self._plugin_manager, command, invocation.guild_id):
            return ServiceResult.failure(
                OP,
                ErrorKind.COMMAND_NOT_ALLOWED,
                "This command is not available here",
                detail={"command": command.name, "guild_id": invocation.guild_id},
            )

        actor = self._actors.resolve(invocation)
        if not actor.ok:
            return actor

        action_input = build_input(command.operation, invocation.options)
        context = ExecutionContext.for_invocation(invocation, command)
        return self._executor.execute(command, action_input, actor.data, context)

    def _format(
        self,
        outcome: ServiceResult,
        invocation: Invocation,
        command: Command | None,
    ) -> Envelope:
        formatter = formatter_for(command, self._formatter)
        context = FormatContext.build(invocation, command)
        try:
            return format_response(outcome, context, formatter)
        except Exception:
            log.exception("route.format_failed", formatter=type(formatter).__name__)
            return Envelope.message(FALLBACK_ERROR_CONTENT)

    def _send(self, invocation: Invocation, envelope: Envelope) -> None:
        try:
            self._sender.send(invocation.id, invocation.token, envelope)
        except Exception:
            log.exception("route.send_failed")

    # ------------------------------------------------------------------
    # Observability
    # ------------------------------------------------------------------

    def _log_completion(
        self, invocation: Invocation, outcome: ServiceResult, duration_ms: float
    ) -> None:
        if outcome.ok:
            log.info("route.succeeded", duration_ms=round(duration_ms, 2))
        else:
            assert outcome.error is not None
            log.warning(
                "route.failed",
                error_kind=str(outcome.error.code),
                reason=outcome.error.detail,
                duration_ms=round(duration_ms, 2),
            )
        log_slow_operation(
            "command",
            invocation.command_name,
            duration_ms,
            threshold_ms=self._slow_threshold_ms,
        )

    def _post_route(
        self, invocation: Invocation, outcome: ServiceResult, duration_ms: float
    ) -> None:
        """Dispatch the post-route hook. Plugin failures are warnings, never errors."""
        if self._plugin_manager is None:
            return
        try:
            self._plugin_manager.hook.post_route(
                command_name=invocation.command_name,
                interaction_id=invocation.id,
                ok=outcome.ok,
                error_kind=str(outcome.error.code) if outcome.error else None,
                duration_ms=round(duration_ms, 2),
            )
        except Exception:
            log.warning("route.post_route_hook_failed", exc_info=True)
