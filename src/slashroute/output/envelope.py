"""Interaction response envelope handed to the sender.

Wire shape: ``{"type": <response type>, "data": {"content": str,
"flags"?: int, "embeds"?: [...], "components"?: [...]}}``. Bit 6 of
``flags`` (value 64) marks a response visible only to the caller.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

EPHEMERAL_FLAG = 1 << 6


class ResponseType(IntEnum):
    """Interaction callback types."""

    PONG = 1
    CHANNEL_MESSAGE_WITH_SOURCE = 4
    DEFERRED_CHANNEL_MESSAGE_WITH_SOURCE = 5
    DEFERRED_UPDATE_MESSAGE = 6
    UPDATE_MESSAGE = 7


class EnvelopeData(BaseModel):
    model_config = ConfigDict(frozen=True)

    content: str = ""
    flags: int | None = None
    embeds: tuple[dict[str, Any], ...] | None = None
    components: tuple[dict[str, Any], ...] | None = None


class Envelope(BaseModel):
    """A complete interaction response."""

    model_config = ConfigDict(frozen=True)

    type: int = ResponseType.CHANNEL_MESSAGE_WITH_SOURCE
    data: EnvelopeData = Field(default_factory=EnvelopeData)

    @classmethod
    def message(
        cls,
        content: str,
        *,
        ephemeral: bool = True,
        embeds: list[dict[str, Any]] | None = None,
        components: list[dict[str, Any]] | None = None,
    ) -> Envelope:
        return cls(
            type=ResponseType.CHANNEL_MESSAGE_WITH_SOURCE,
            data=EnvelopeData(
                content=content,
                flags=EPHEMERAL_FLAG if ephemeral else None,
                embeds=tuple(embeds) if embeds is not None else None,
                components=tuple(components) if components is not None else None,
            ),
        )

    @property
    def ephemeral(self) -> bool:
        return bool((self.data.flags or 0) & EPHEMERAL_FLAG)

    def to_payload(self) -> dict[str, Any]:
        """Plain dict for the platform API, omitting unset optional fields."""
        return self.model_dump(mode="json", exclude_none=True)
