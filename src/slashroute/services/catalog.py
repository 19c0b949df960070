"""Catalog services behind the CLI: callback resolution and command files.

Both wrap library calls in the ServiceResult contract so the CLI can emit
them uniformly. Configuration problems become failed results that carry
the full diagnostics plus their rendered text.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

from slashroute.config.callbacks import resolve_callback_config
from slashroute.config.errors import ConfigurationError
from slashroute.domain.callbacks import (
    CATEGORIES,
    CORE_EVENT_ORDER,
    CUSTOM_PROFILE,
    EXTENDED_EVENT_ORDER,
    PROFILES,
)
from slashroute.domain.types import ErrorKind
from slashroute.services.registry import StaticCommandRegistry
from slashroute.services.result import ServiceResult
from slashroute.services.telemetry import traced

_EVENT_RANK: dict[str, int] = {
    event: i for i, event in enumerate(CORE_EVENT_ORDER + EXTENDED_EVENT_ORDER)
}


def ordered_events(events: frozenset[str] | set[str]) -> list[str]:
    """Events in catalogue order (core first); unknown names sort last."""
    return sorted(events, key=lambda e: (_EVENT_RANK.get(e, len(_EVENT_RANK)), e))


def configuration_failure(op: str, error: ConfigurationError) -> ServiceResult:
    """Failed result carrying every diagnostic of *error*."""
    return ServiceResult.failure(
        op,
        error.diagnostics[0].code,
        error.message,
        detail={
            "diagnostics": [d.model_dump(mode="json") for d in error.diagnostics],
            "rendered": error.render(),
        },
        cause=error,
    )


class CallbackService:
    """Resolves and describes callback configuration."""

    @traced
    def resolve(
        self,
        config: Mapping[str, Any],
        *,
        environment: str | None = None,
    ) -> ServiceResult:
        op = "resolve_callbacks"
        try:
            resolved = resolve_callback_config(config, environment=environment)
        except ConfigurationError as exc:
            return configuration_failure(op, exc)
        return ServiceResult.success(
            op,
            {
                "profile": resolved.profile,
                "environment": environment,
                "options": resolved.options(),
                "enabled": ordered_events(resolved.enabled),
            },
        )

    def profiles(self) -> ServiceResult:
        items = [
            {
                "name": profile.name,
                "base_callbacks": list(profile.base_callbacks),
                "enhanced_logging": profile.enhanced_logging,
                "performance_optimized": profile.performance_optimized,
            }
            for profile in PROFILES.values()
        ]
        items.append(
            {
                "name": CUSTOM_PROFILE,
                "base_callbacks": list(CORE_EVENT_ORDER),
                "enhanced_logging": False,
                "performance_optimized": False,
            }
        )
        return ServiceResult.success("list_profiles", {"count": len(items), "items": items})

    def categories(self) -> ServiceResult:
        items = [
            {"name": name, "events": ordered_events(events)} for name, events in CATEGORIES.items()
        ]
        return ServiceResult.success("list_categories", {"count": len(items), "items": items})


class CommandCatalogService:
    """Loads a command definition file and produces registration payloads."""

    def __init__(self, path: Path) -> None:
        self._path = path

    @traced
    def show(self, name: str | None = None) -> ServiceResult:
        op = "show_commands"
        try:
            registry = StaticCommandRegistry.from_toml(self._path)
        except ValueError as exc:
            return ServiceResult.failure(
                op,
                ErrorKind.CONFIGURATION,
                f"Invalid command definition file {self._path}",
                detail={"path": str(self._path), "reason": str(exc)},
                cause=exc,
            )

        if name is not None:
            command = registry.lookup(name)
            if command is None:
                return ServiceResult.failure(
                    op,
                    ErrorKind.NOT_FOUND,
                    f"No command named {name!r}",
                    detail={"path": str(self._path), "available": registry.names()},
                )
            commands = [command]
        else:
            commands = sorted(registry, key=lambda c: c.name)

        items = [c.to_wire() for c in commands]
        return ServiceResult.success(op, {"count": len(items), "items": items})
