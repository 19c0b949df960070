"""Root CLI group for slashroute with global flags and command registration."""

from __future__ import annotations

import click

from slashroute import __version__
from slashroute.commands import register_commands
from slashroute.commands._context import AppContext
from slashroute.config.errors import ConfigurationError
from slashroute.config.settings import RouterSettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="slashroute")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug info.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
) -> None:
    """slashroute: slash-command routing and callback configuration."""
    ctx.ensure_object(dict)
    try:
        settings = RouterSettings.from_cli(
            config_path=config_path,
            json_output=json_output,
            verbose=verbose,
            log_json=log_json,
        )
    except ConfigurationError as exc:
        raise click.ClickException(exc.render()) from exc
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
