"""AppContext: shared Click context for all commands.

Created once by the root CLI group and passed to subcommands via
``@click.pass_obj``. Owns logging setup and result emission
(stdout/stderr routing plus exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from slashroute.config.errors import ConfigurationError
from slashroute.config.logging import configure_logging, set_enhanced_logging
from slashroute.output.renderers import format_result
from slashroute.services.telemetry import enable_telemetry

if TYPE_CHECKING:
    from slashroute.config.settings import RouterSettings
    from slashroute.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy."""

    def __init__(self, settings: RouterSettings) -> None:
        self.settings = settings
        configure_logging(verbose=settings.verbose, log_json=settings.log_json)
        try:
            callbacks = settings.callback_config
        except ConfigurationError as exc:
            raise click.ClickException(exc.render()) from exc
        set_enhanced_logging(callbacks.enhanced_logging)
        if settings.verbose:
            enable_telemetry()

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success: writes to stdout. Warnings go to stderr unless in
          JSON mode, where they are already part of the payload.
        * Failure: writes to stderr and exits with code 1.
        """
        output = format_result(
            result,
            json_output=self.settings.json_output,
            verbose=self.settings.verbose,
        )
        if result.ok:
            click.echo(output)
            if not self.settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
