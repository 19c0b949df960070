"""Startup-time configuration errors with rich diagnostics.

Validation itself is pure and returns :class:`ConfigDiagnostic` values;
only the resolution boundary turns them into a raised
:class:`ConfigurationError`. The offending values, the valid choices and
example configurations always travel with the error.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from slashroute.domain.types import ErrorKind


class ConfigDiagnostic(BaseModel):
    """One configuration problem, with guidance on how to fix it."""

    model_config = ConfigDict(frozen=True)

    code: ErrorKind = ErrorKind.CONFIGURATION
    message: str
    context: dict[str, Any] = Field(default_factory=dict)
    suggestions: tuple[str, ...] = ()
    examples: tuple[str, ...] = ()

    def render(self) -> str:
        """Multi-line human rendering: message, context, fixes, examples."""
        lines = [f"Configuration error: {self.message}"]
        if self.context:
            lines.append("")
            lines.append("Context:")
            lines.extend(f"  {key}: {value!r}" for key, value in self.context.items())
        if self.suggestions:
            lines.append("")
            lines.append("Suggested fixes:")
            lines.extend(f"  {i}. {s}" for i, s in enumerate(self.suggestions, 1))
        if self.examples:
            lines.append("")
            lines.append("Examples:")
            lines.extend(f"  {i}. {e}" for i, e in enumerate(self.examples, 1))
        return "\n".join(lines)


class ConfigurationError(Exception):
    """Raised when configuration prevents the consumer from starting."""

    def __init__(self, diagnostics: Sequence[ConfigDiagnostic]) -> None:
        if not diagnostics:
            msg = "ConfigurationError requires at least one diagnostic"
            raise ValueError(msg)
        self.diagnostics: tuple[ConfigDiagnostic, ...] = tuple(diagnostics)
        super().__init__(self.render())

    @property
    def message(self) -> str:
        return self.diagnostics[0].message

    @property
    def context(self) -> dict[str, Any]:
        return self.diagnostics[0].context

    @property
    def suggestions(self) -> tuple[str, ...]:
        return self.diagnostics[0].suggestions

    @property
    def examples(self) -> tuple[str, ...]:
        return self.diagnostics[0].examples

    def render(self) -> str:
        return "\n\n".join(d.render() for d in self.diagnostics)


class CoreCallbackDisableConflict(ConfigurationError):
    """Raised when configuration tries to disable a core callback."""


def raise_for_diagnostics(diagnostics: Sequence[ConfigDiagnostic]) -> None:
    """Raise the matching error class if *diagnostics* is non-empty.

    A core-callback conflict takes precedence and is reported first.
    """
    if not diagnostics:
        return
    conflicts = [d for d in diagnostics if d.code == ErrorKind.CORE_CALLBACK_DISABLE_CONFLICT]
    if conflicts:
        others = [d for d in diagnostics if d not in conflicts]
        raise CoreCallbackDisableConflict([*conflicts, *others])
    raise ConfigurationError(diagnostics)
