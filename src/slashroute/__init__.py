"""slashroute: command-interaction router for chat-platform bots."""

from slashroute.config.callbacks import resolve_callback_config
from slashroute.config.errors import ConfigurationError, CoreCallbackDisableConflict
from slashroute.domain.commands import Command, OperationDescriptor, Option
from slashroute.domain.invocation import Invocation, RawOption
from slashroute.output.envelope import EPHEMERAL_FLAG, Envelope
from slashroute.output.formatters import DefaultResponseFormatter, ResponseFormatter
from slashroute.services.registry import StaticCommandRegistry
from slashroute.router import Router

__version__ = "0.3.0"

__all__ = [
    "EPHEMERAL_FLAG",
    "Command",
    "ConfigurationError",
    "CoreCallbackDisableConflict",
    "DefaultResponseFormatter",
    "Envelope",
    "Invocation",
    "OperationDescriptor",
    "Option",
    "RawOption",
    "ResponseFormatter",
    "Router",
    "StaticCommandRegistry",
    "__version__",
    "resolve_callback_config",
]
