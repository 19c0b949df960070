"""Command group: command definition files."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from slashroute.commands._base import SrGroup
from slashroute.services.catalog import CommandCatalogService

if TYPE_CHECKING:
    from slashroute.commands._context import AppContext


@click.group(
    "commands",
    cls=SrGroup,
    examples="""\
  slashroute commands show commands.toml
  slashroute commands show commands.toml ping""",
)
@click.pass_obj
def commands_group(app: AppContext) -> None:
    """Inspect command definition files."""


@commands_group.command(
    examples="""\
  slashroute commands show commands.toml
  slashroute commands show commands.toml ping
  slashroute --json commands show commands.toml"""
)
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("name", required=False)
@click.pass_obj
def show(app: AppContext, file: Path, name: str | None) -> None:
    """Print platform registration payloads, options in wire order."""
    app.emit(CommandCatalogService(file).show(name))
