"""Command and option definitions as held by the command registry.

Commands are created once by the registry builder and never mutated.
The per-command response formatter lives on the output layer, so it is
typed loosely here to keep the domain free of output imports.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from slashroute.domain.types import CommandScope, CommandType, OperationKind, OptionType


class Choice(BaseModel):
    """A fixed value the platform offers for an option."""

    model_config = ConfigDict(frozen=True)

    name: str
    value: Any


class Option(BaseModel):
    """A declared command parameter."""

    model_config = ConfigDict(frozen=True)

    name: str
    type: OptionType
    description: str = ""
    required: bool = False
    choices: tuple[Choice, ...] | None = None

    def to_wire(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "name": self.name,
            "type": self.type.wire_code,
            "description": self.description,
            "required": self.required,
        }
        if self.choices:
            payload["choices"] = [c.model_dump() for c in self.choices]
        return payload


class OperationDescriptor(BaseModel):
    """The backend operation a command targets.

    Attributes:
        resource: Backend resource that owns the operation.
        name: Operation name on that resource.
        kind: Operation shape used for executor dispatch.
        arguments: Declared argument names.
        accept: Attribute names accepted as input (create/update only).
    """

    model_config = ConfigDict(frozen=True)

    resource: str
    name: str
    kind: OperationKind
    arguments: tuple[str, ...] = ()
    accept: tuple[str, ...] = ()

    @property
    def ref(self) -> str:
        """``resource.name`` reference used in logs."""
        return f"{self.resource}.{self.name}"

    def allowed_inputs(self) -> frozenset[str]:
        """Input keys this operation declares it will accept."""
        allowed = set(self.arguments)
        if self.kind.accepts_attributes:
            allowed.update(self.accept)
        return frozenset(allowed)


class Command(BaseModel):
    """A registered slash command routed to a backend operation."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str
    operation: OperationDescriptor
    description: str = ""
    type: CommandType = CommandType.CHAT_INPUT
    options: tuple[Option, ...] = ()
    scope: CommandScope = CommandScope.GUILD
    formatter: Any = Field(default=None, exclude=True)
    domain: str | None = None

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, value: str) -> str:
        if not value.strip():
            msg = "Command name must not be blank"
            raise ValueError(msg)
        return value

    @property
    def operation_kind(self) -> OperationKind:
        return self.operation.kind

    def wire_options(self) -> list[Option]:
        """Options as exposed to the platform: required first, order otherwise kept."""
        return sorted(self.options, key=lambda o: not o.required)

    def to_wire(self) -> dict[str, Any]:
        """Registration payload for the platform's command API."""
        return {
            "name": self.name,
            "description": self.description,
            "type": self.type.wire_code,
            "options": [o.to_wire() for o in self.wire_options()],
        }
