"""Incoming command invocations.

An Invocation lives for exactly one routing call. The caller may sit at
the top level (direct messages) or nested under a ``member`` wrapper
(guild interactions), mirroring the gateway payload.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

from slashroute.domain.types import OptionType


class RawOption(BaseModel):
    """One platform-supplied argument, before any filtering."""

    model_config = ConfigDict(frozen=True)

    name: str
    type: OptionType | None = None
    value: Any = None

    @field_validator("type", mode="before")
    @classmethod
    def _accept_wire_code(cls, value: Any) -> Any:
        if isinstance(value, int) and not isinstance(value, bool):
            return OptionType.from_wire(value)
        return value


class Invocation(BaseModel):
    """A single incoming command request."""

    model_config = ConfigDict(frozen=True)

    id: str
    token: str
    command_name: str
    user: dict[str, Any] | None = None
    member: dict[str, Any] | None = None
    options: tuple[RawOption, ...] = ()
    guild_id: str | None = None
    channel_id: str | None = None

    @field_validator("id", "guild_id", "channel_id", mode="before")
    @classmethod
    def _snowflake_to_str(cls, value: Any) -> Any:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @property
    def user_id(self) -> str | None:
        """Caller id from the top-level user or the member wrapper, if any."""
        for candidate in (self.user, (self.member or {}).get("user")):
            if isinstance(candidate, dict) and candidate.get("id") is not None:
                return str(candidate["id"])
        return None

    @classmethod
    def from_gateway(cls, payload: dict[str, Any]) -> Invocation:
        """Build an Invocation from a raw interaction payload.

        Example payload shape::

            {"id": "1", "token": "t", "member": {"user": {"id": "42"}},
             "data": {"name": "echo", "options": [{"name": "message", "type": 3, "value": "hi"}]},
             "guild_id": "7", "channel_id": "9"}
        """
        data = payload.get("data") or {}
        return cls(
            id=payload["id"],
            token=payload["token"],
            command_name=data.get("name", ""),
            user=payload.get("user"),
            member=payload.get("member"),
            options=tuple(RawOption.model_validate(o) for o in data.get("options") or ()),
            guild_id=payload.get("guild_id"),
            channel_id=payload.get("channel_id"),
        )
