"""PluginManager: where command filters and route observers come from.

Three sources, all ending up as pluggy registrations against
:class:`~slashroute.plugins.hookspecs.SlashrouteHookSpec`:

- installed packages exposing a ``slashroute.plugins`` entry point,
- single-file plugins in a local directory (``*.py``, ``_``-prefixed skipped),
- plain callables handed to :meth:`PluginManager.add_command_filter`.

A plugin that fails to import or instantiate is logged and skipped; the
router must still start.
"""

from __future__ import annotations

import importlib.util
import inspect
import logging
import sys
from collections.abc import Callable, Iterator
from pathlib import Path
from types import ModuleType
from typing import TYPE_CHECKING

import pluggy

from slashroute.plugins.hookspecs import PROJECT_NAME, SlashrouteHookSpec, hookimpl

if TYPE_CHECKING:
    from slashroute.domain.commands import Command

ENTRY_POINT_GROUP = "slashroute.plugins"
LOCAL_MODULE_PREFIX = "slashroute_local_plugin_"

CommandFilter = Callable[["Command", "str | None"], "bool | None"]
"""``(command, guild_id) -> bool | None``; only False blocks."""

logger = logging.getLogger(__name__)


def has_hook_impls(obj: object) -> bool:
    """Whether *obj* (class or instance) carries any ``@hookimpl`` method."""
    marker = f"{PROJECT_NAME}_impl"
    return any(
        getattr(getattr(obj, name, None), marker, None)
        for name in dir(obj)
        if not name.startswith("_")
    )


def _import_file(path: Path) -> ModuleType | None:
    module_name = f"{LOCAL_MODULE_PREFIX}{path.stem}"
    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        logger.warning("Could not create module spec for %s", path)
        return None
    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
    except Exception:
        sys.modules.pop(module_name, None)
        logger.warning("Failed to load local plugin %s", path, exc_info=True)
        return None
    return module


def iter_local_plugins(local_dir: Path) -> Iterator[tuple[str, object]]:
    """Yield ``(name, instance)`` for every hook-carrying class in *local_dir*.

    Only classes defined in the scanned file count; imported ones are
    ignored. Names are ``<module>.<class>``.
    """
    if not local_dir.is_dir():
        return
    for path in sorted(local_dir.glob("*.py")):
        if path.name.startswith("_"):
            continue
        module = _import_file(path)
        if module is None:
            continue
        for _, cls in inspect.getmembers(module, inspect.isclass):
            if cls.__module__ != module.__name__ or not has_hook_impls(cls):
                continue
            try:
                instance = cls()
            except Exception:
                logger.warning(
                    "Failed to instantiate plugin class %s from %s",
                    cls.__name__,
                    path,
                    exc_info=True,
                )
                continue
            yield f"{module.__name__}.{cls.__name__}", instance


class _FilterPlugin:
    """Adapts a plain filter callable to the ``command_allowed`` hook."""

    def __init__(self, check: CommandFilter) -> None:
        self._check = check

    @hookimpl
    def command_allowed(self, command: Command, guild_id: str | None) -> bool | None:
        return self._check(command, guild_id)


class PluginManager:
    """Registers plugins and exposes the hook relay the router dispatches on."""

    def __init__(self) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(SlashrouteHookSpec)
        self._loaded = False

    def discover_and_load(
        self, *, local_dir: Path | None = None, entry_points: bool = True
    ) -> list[str]:
        """Load entry-point plugins (unless disabled) and *local_dir* plugins.

        Returns the names of all registered plugins afterwards.
        """
        if entry_points:
            self._pm.load_setuptools_entrypoints(ENTRY_POINT_GROUP)
            self._instantiate_registered_classes()
        if local_dir is not None:
            for name, plugin in iter_local_plugins(local_dir):
                self.register_plugin(plugin, name=name)
        self._loaded = True
        return self.list_plugin_names()

    def register_plugin(self, plugin: object, name: str | None = None) -> None:
        resolved = name or type(plugin).__name__
        self._pm.register(plugin, name=resolved)
        logger.debug("Registered plugin: %s", resolved)

    def add_command_filter(self, check: CommandFilter, name: str | None = None) -> object:
        """Register *check* as a command filter and return its plugin handle.

        Pass the handle to :meth:`unregister` to remove the filter again.
        """
        plugin = _FilterPlugin(check)
        # Unnamed filters take pluggy's id-based name.
        self._pm.register(plugin, name=name)
        return plugin

    def unregister(self, plugin: object) -> None:
        self._pm.unregister(plugin)

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    @property
    def hook(self) -> pluggy.HookRelay:
        return self._pm.hook

    def get_plugins(self) -> list[object]:
        return list(self._pm.get_plugins())

    def list_plugin_names(self) -> list[str]:
        return [self._pm.get_name(p) or type(p).__name__ for p in self._pm.get_plugins()]

    def _instantiate_registered_classes(self) -> None:
        # Entry points may name a class rather than an instance; hook calls
        # against an unbound class would fail at dispatch time.
        for plugin in list(self._pm.get_plugins()):
            if not inspect.isclass(plugin) or not has_hook_impls(plugin):
                continue
            name = self._pm.get_name(plugin) or plugin.__name__
            self._pm.unregister(plugin)
            try:
                instance = plugin()
            except Exception:
                logger.warning("Failed to instantiate entry-point plugin %s", name, exc_info=True)
                continue
            self._pm.register(instance, name=name)
