"""Shared pytest fixtures and test doubles for slashroute tests."""

from __future__ import annotations

from collections.abc import Callable, Generator
from typing import Any

import pytest
from click.testing import CliRunner

from slashroute.domain.commands import Command, OperationDescriptor, Option
from slashroute.domain.invocation import Invocation, RawOption
from slashroute.domain.types import OperationKind, OptionType
from slashroute.services.registry import StaticCommandRegistry
from slashroute.services.telemetry import disable_telemetry


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def _reset_telemetry() -> Generator[None]:
    """Telemetry is a ContextVar; never let one test's -v leak into the next."""
    yield
    disable_telemetry()


@pytest.fixture(autouse=True)
def _isolated_config(tmp_path_factory: pytest.TempPathFactory, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep settings discovery away from the developer's real config and env."""
    monkeypatch.delenv("SLASHROUTE_CONFIG", raising=False)
    monkeypatch.delenv("SLASHROUTE_ENVIRONMENT", raising=False)
    monkeypatch.chdir(tmp_path_factory.mktemp("cwd"))


# ---------------------------------------------------------------------------
# Test doubles
# ---------------------------------------------------------------------------


class FakeRunner:
    """Backend runner that records every call and returns or raises on demand."""

    def __init__(self, result: Any = None, error: BaseException | None = None) -> None:
        self.result = result
        self.error = error
        self.calls: list[dict[str, Any]] = []

    def __call__(
        self,
        kind: OperationKind,
        operation: OperationDescriptor,
        input: dict[str, Any],
        actor: Any,
        context: Any,
    ) -> Any:
        self.calls.append(
            {
                "kind": kind,
                "operation": operation,
                "input": input,
                "actor": actor,
                "context": context,
            }
        )
        if self.error is not None:
            raise self.error
        return self.result


class FakeSender:
    """Sender that records envelopes; optionally fails every send."""

    def __init__(self, *, fail: bool = False) -> None:
        self.fail = fail
        self.sent: list[tuple[str, str, Any]] = []

    def send(self, invocation_id: str, token: str, envelope: Any) -> None:
        if self.fail:
            msg = "gateway unavailable"
            raise ConnectionError(msg)
        self.sent.append((invocation_id, token, envelope))


# ---------------------------------------------------------------------------
# Domain fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def echo_command() -> Command:
    """Generic action taking a single ``message`` argument."""
    return Command(
        name="echo",
        description="Echo a message back",
        operation=OperationDescriptor(
            resource="messages",
            name="echo",
            kind=OperationKind.GENERIC_ACTION,
            arguments=("message",),
        ),
        options=(Option(name="message", type=OptionType.STRING, required=True),),
    )


@pytest.fixture
def list_notes_command() -> Command:
    return Command(
        name="notes",
        description="List notes",
        operation=OperationDescriptor(
            resource="notes",
            name="list_notes",
            kind=OperationKind.READ,
            arguments=("tag",),
        ),
        options=(Option(name="tag", type=OptionType.STRING),),
    )


@pytest.fixture
def create_note_command() -> Command:
    return Command(
        name="note",
        description="Create a note",
        operation=OperationDescriptor(
            resource="notes",
            name="create_note",
            kind=OperationKind.CREATE,
            accept=("title", "body"),
        ),
        options=(
            Option(name="body", type=OptionType.STRING),
            Option(name="title", type=OptionType.STRING, required=True),
        ),
    )


@pytest.fixture
def registry(
    echo_command: Command, list_notes_command: Command, create_note_command: Command
) -> StaticCommandRegistry:
    return StaticCommandRegistry([echo_command, list_notes_command, create_note_command])


@pytest.fixture
def make_invocation() -> Callable[..., Invocation]:
    """Factory for invocations; the caller sits under ``member`` by default."""

    def _make(
        command_name: str = "echo",
        options: dict[str, Any] | None = None,
        *,
        user: dict[str, Any] | None = None,
        member: dict[str, Any] | None = None,
        anonymous: bool = False,
        guild_id: str | None = "7",
    ) -> Invocation:
        if member is None and user is None and not anonymous:
            member = {"user": {"id": "42", "username": "ada"}}
        return Invocation(
            id="1001",
            token="tok",
            command_name=command_name,
            user=user,
            member=member,
            options=tuple(RawOption(name=k, value=v) for k, v in (options or {}).items()),
            guild_id=guild_id,
            channel_id="9",
        )

    return _make


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner(result="hi")


@pytest.fixture
def fake_sender() -> FakeSender:
    return FakeSender()


@pytest.fixture
def runner_factory() -> type[FakeRunner]:
    return FakeRunner


@pytest.fixture
def sender_factory() -> type[FakeSender]:
    return FakeSender
