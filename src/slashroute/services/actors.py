"""ActorResolver: who is the backend operation performed on behalf of.

Without a creation strategy the raw caller payload is the actor. With
one, the strategy is called exactly once to find or create the backing
principal; a ``None`` return or a raised exception stops routing with
``USER_RESOLUTION_FAILED``, and the underlying reason is preserved in
``ServiceError.cause`` / ``detail["reason"]``.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import structlog

from slashroute.domain.invocation import Invocation
from slashroute.domain.types import ErrorKind
from slashroute.services.result import ServiceResult

log = structlog.get_logger(__name__)

CreationStrategy = Callable[[dict[str, Any]], Any]
"""Find-or-create hook: raw caller payload in, principal (or None) out."""

OP = "resolve_actor"


def extract_caller(invocation: Invocation) -> dict[str, Any] | None:
    """Top-level caller if present, else the one nested under ``member``.

    Only a non-empty mapping counts as a caller.
    """
    if isinstance(invocation.user, dict) and invocation.user:
        return invocation.user
    member = invocation.member
    nested = member.get("user") if isinstance(member, dict) else None
    if isinstance(nested, dict) and nested:
        return nested
    return None


class ActorResolver:
    """Resolves the actor for an invocation.

    Holds only its (immutable) strategy reference, so one instance may
    be shared by concurrent routing calls.
    """

    def __init__(self, creation_strategy: CreationStrategy | None = None) -> None:
        self._creation_strategy = creation_strategy

    def resolve(self, invocation: Invocation) -> ServiceResult:
        caller = extract_caller(invocation)
        if caller is None:
            log.debug("actor.missing", interaction_id=invocation.id)
            return ServiceResult.failure(
                OP,
                ErrorKind.AUTHENTICATION_REQUIRED,
                "Authentication required",
                detail={"reason": "no caller found on invocation"},
            )

        if self._creation_strategy is None:
            return ServiceResult.success(OP, caller, meta={"mode": "raw"})

        try:
            principal = self._creation_strategy(caller)
        except Exception as exc:
            log.error(
                "actor.creation_failed",
                interaction_id=invocation.id,
                caller_id=caller.get("id"),
                error=repr(exc),
            )
            return self._failed(exc)

        if principal is None:
            log.error(
                "actor.creation_failed",
                interaction_id=invocation.id,
                caller_id=caller.get("id"),
                error="strategy returned no principal",
            )
            return self._failed(None)

        log.debug("actor.resolved", interaction_id=invocation.id, caller_id=caller.get("id"))
        return ServiceResult.success(OP, principal, meta={"mode": "strategy"})

    @staticmethod
    def _failed(reason: Any) -> ServiceResult:
        return ServiceResult.failure(
            OP,
            ErrorKind.USER_RESOLUTION_FAILED,
            "Could not resolve your user account",
            detail={"reason": repr(reason) if reason is not None else "no principal returned"},
            cause=reason,
        )
