"""Tests for the shared classification enums."""

from __future__ import annotations

import pytest

from slashroute.domain.types import CommandType, ErrorKind, OperationKind, OptionType


class TestOperationKind:
    def test_generic_action_value(self) -> None:
        assert OperationKind.GENERIC_ACTION == "action"

    @pytest.mark.parametrize(
        ("kind", "expected"),
        [
            (OperationKind.CREATE, True),
            (OperationKind.UPDATE, True),
            (OperationKind.READ, False),
            (OperationKind.GENERIC_ACTION, False),
            (OperationKind.DESTROY, False),
        ],
    )
    def test_accepts_attributes(self, kind: OperationKind, expected: bool) -> None:
        assert kind.accepts_attributes is expected


class TestOptionType:
    @pytest.mark.parametrize(
        ("option_type", "code"),
        [
            (OptionType.STRING, 3),
            (OptionType.INTEGER, 4),
            (OptionType.BOOLEAN, 5),
            (OptionType.USER, 6),
            (OptionType.CHANNEL, 7),
            (OptionType.ROLE, 8),
            (OptionType.MENTIONABLE, 9),
            (OptionType.NUMBER, 10),
            (OptionType.ATTACHMENT, 11),
        ],
    )
    def test_wire_codes(self, option_type: OptionType, code: int) -> None:
        assert option_type.wire_code == code
        assert OptionType.from_wire(code) is option_type

    def test_unknown_wire_code(self) -> None:
        with pytest.raises(ValueError, match="Unknown option type code"):
            OptionType.from_wire(99)


class TestCommandType:
    def test_wire_codes(self) -> None:
        assert CommandType.CHAT_INPUT.wire_code == 1
        assert CommandType.USER.wire_code == 2
        assert CommandType.MESSAGE.wire_code == 3


class TestErrorKind:
    def test_values_are_snake_case(self) -> None:
        for kind in ErrorKind:
            assert kind.value == kind.value.lower()
            assert " " not in kind.value
