"""InputBuilder: raw platform options to backend input.

This is the input allow-list boundary: only names the operation declares
(its arguments, plus accepted attributes for create/update) are copied.
Absent (or null) values are omitted rather than defaulted; required-field checks
belong to the backend.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from slashroute.domain.commands import OperationDescriptor
from slashroute.domain.invocation import RawOption


def parse_options(options: Iterable[RawOption] | None) -> dict[str, Any]:
    """Map option name to value. Later duplicates win."""
    return {option.name: option.value for option in options or ()}


def build_input(
    operation: OperationDescriptor, options: Iterable[RawOption] | None
) -> dict[str, Any]:
    """Backend-ready input for *operation*; undeclared options are dropped."""
    raw = parse_options(options)
    return {
        name: raw[name]
        for name in operation.allowed_inputs()
        if raw.get(name) is not None
    }
