"""Classification enums shared by every layer.

Operation kinds, option types, command scopes and the routing error
taxonomy are closed sets: dispatch is done over these values, never over
dynamically looked-up modules.
"""

from __future__ import annotations

from enum import StrEnum


class OperationKind(StrEnum):
    """Backend operation shapes a command can target."""

    CREATE = "create"
    READ = "read"
    GENERIC_ACTION = "action"
    UPDATE = "update"
    DESTROY = "destroy"

    @property
    def accepts_attributes(self) -> bool:
        """Whether the operation accepts attribute input besides its arguments."""
        return self in (OperationKind.CREATE, OperationKind.UPDATE)


class OptionType(StrEnum):
    """Platform option (parameter) types."""

    STRING = "string"
    INTEGER = "integer"
    BOOLEAN = "boolean"
    USER = "user"
    CHANNEL = "channel"
    ROLE = "role"
    MENTIONABLE = "mentionable"
    NUMBER = "number"
    ATTACHMENT = "attachment"

    @property
    def wire_code(self) -> int:
        return _OPTION_WIRE_CODES[self]

    @classmethod
    def from_wire(cls, code: int) -> OptionType:
        for option_type, wire in _OPTION_WIRE_CODES.items():
            if wire == code:
                return option_type
        msg = f"Unknown option type code: {code}"
        raise ValueError(msg)


_OPTION_WIRE_CODES: dict[OptionType, int] = {
    OptionType.STRING: 3,
    OptionType.INTEGER: 4,
    OptionType.BOOLEAN: 5,
    OptionType.USER: 6,
    OptionType.CHANNEL: 7,
    OptionType.ROLE: 8,
    OptionType.MENTIONABLE: 9,
    OptionType.NUMBER: 10,
    OptionType.ATTACHMENT: 11,
}


class CommandScope(StrEnum):
    """Where a command is registered."""

    GUILD = "guild"
    GLOBAL = "global"


class CommandType(StrEnum):
    """Platform command flavours, with their wire codes as ``.wire_code``."""

    CHAT_INPUT = "chat_input"
    USER = "user"
    MESSAGE = "message"

    @property
    def wire_code(self) -> int:
        return {"chat_input": 1, "user": 2, "message": 3}[self.value]


class ErrorKind(StrEnum):
    """Routing and configuration error taxonomy."""

    UNKNOWN_COMMAND = "unknown_command"
    COMMAND_NOT_ALLOWED = "command_not_allowed"
    AUTHENTICATION_REQUIRED = "authentication_required"
    USER_RESOLUTION_FAILED = "user_resolution_failed"
    UNSUPPORTED_OPERATION_KIND = "unsupported_operation_kind"
    VALIDATION = "validation"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"
    UNKNOWN = "unknown"
    CONFIGURATION = "configuration"
    CORE_CALLBACK_DISABLE_CONFLICT = "core_callback_disable_conflict"
