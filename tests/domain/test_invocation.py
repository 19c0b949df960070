"""Tests for Invocation and RawOption parsing."""

from __future__ import annotations

from slashroute.domain.invocation import Invocation, RawOption
from slashroute.domain.types import OptionType


class TestRawOption:
    def test_wire_code_type(self) -> None:
        assert RawOption(name="n", type=4, value=1).type is OptionType.INTEGER

    def test_named_type(self) -> None:
        assert RawOption(name="n", type="boolean", value=True).type is OptionType.BOOLEAN

    def test_type_optional(self) -> None:
        assert RawOption(name="n", value="v").type is None


class TestInvocation:
    def test_user_id_from_member(self) -> None:
        inv = Invocation(id="1", token="t", command_name="c", member={"user": {"id": 42}})
        assert inv.user_id == "42"

    def test_user_id_prefers_top_level_user(self) -> None:
        inv = Invocation(
            id="1",
            token="t",
            command_name="c",
            user={"id": "5"},
            member={"user": {"id": "6"}},
        )
        assert inv.user_id == "5"

    def test_user_id_absent(self) -> None:
        assert Invocation(id="1", token="t", command_name="c").user_id is None

    def test_snowflakes_coerced_to_str(self) -> None:
        inv = Invocation(id=123, token="t", command_name="c", guild_id=7, channel_id=9)
        assert (inv.id, inv.guild_id, inv.channel_id) == ("123", "7", "9")


class TestFromGateway:
    def test_guild_payload(self) -> None:
        inv = Invocation.from_gateway(
            {
                "id": "1",
                "token": "t",
                "member": {"user": {"id": "42"}},
                "data": {
                    "name": "echo",
                    "options": [{"name": "message", "type": 3, "value": "hi"}],
                },
                "guild_id": "7",
                "channel_id": "9",
            }
        )
        assert inv.command_name == "echo"
        assert inv.user_id == "42"
        assert inv.options == (RawOption(name="message", type=OptionType.STRING, value="hi"),)
        assert inv.guild_id == "7"

    def test_missing_options(self) -> None:
        inv = Invocation.from_gateway(
            {"id": "1", "token": "t", "user": {"id": "3"}, "data": {"name": "ping"}}
        )
        assert inv.options == ()
        assert inv.guild_id is None

    def test_null_options(self) -> None:
        inv = Invocation.from_gateway(
            {"id": "1", "token": "t", "data": {"name": "ping", "options": None}}
        )
        assert inv.options == ()
