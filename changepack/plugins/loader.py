"""JSON plugin configuration loader.

Config shape::

    {
      "config_version": 1,
      "plugins": [
        {"entrypoint": "package.module:Factory", "options": {}, "enabled": true}
      ]
    }
"""

from __future__ import annotations

import importlib
import json
from pathlib import Path
from typing import Any

from changepack.plugins.base import PLUGIN_API_VERSION, PLUGIN_CONFIG_VERSION
from changepack.plugins.exceptions import PluginConfigError, PluginLoadError
from changepack.plugins.manager import PluginManager

_ENTRY_KEYS = frozenset({"entrypoint", "options", "enabled"})


def load_plugin_manager_from_file(path: str | Path) -> PluginManager:
    config_path = Path(path)
    try:
        raw = json.loads(config_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as error:
        raise PluginConfigError(f"Invalid plugin config JSON ({config_path}): {error}") from error
    return load_plugin_manager(raw, source=str(config_path))


def load_plugin_manager(raw: Any, *, source: str = "<memory>") -> PluginManager:
    """Build a plugin manager from an already-parsed config document."""
    if not isinstance(raw, dict):
        raise PluginConfigError(f"Plugin config must be a JSON object ({source}).")

    version = raw.get("config_version")
    if version != PLUGIN_CONFIG_VERSION:
        raise PluginConfigError(
            f"Unsupported plugin config version {version!r} in {source}; "
            f"expected {PLUGIN_CONFIG_VERSION}."
        )

    entries = raw.get("plugins")
    if not isinstance(entries, list):
        raise PluginConfigError(f"Plugin config key 'plugins' must be a JSON array ({source}).")

    plugins: list[object] = []
    for index, entry in enumerate(entries, start=1):
        plugin = _load_entry(entry, index=index)
        if plugin is not None:
            plugins.append(plugin)

    return PluginManager(plugins=tuple(plugins))


def _load_entry(entry: Any, *, index: int) -> object | None:
    if not isinstance(entry, dict):
        raise PluginConfigError(f"Plugin entry #{index} must be a JSON object.")

    unknown = sorted(set(entry) - _ENTRY_KEYS)
    if unknown:
        raise PluginConfigError(
            f"Plugin entry #{index} contains unsupported keys: {', '.join(unknown)}"
        )

    enabled = entry.get("enabled", True)
    if not isinstance(enabled, bool):
        raise PluginConfigError(f"Plugin entry #{index} key 'enabled' must be boolean.")
    if not enabled:
        return None

    entrypoint = entry.get("entrypoint")
    if not isinstance(entrypoint, str) or ":" not in entrypoint:
        raise PluginConfigError(
            f"Plugin entry #{index} key 'entrypoint' must be 'module:attribute'."
        )

    options = entry.get("options", {})
    if not isinstance(options, dict):
        raise PluginConfigError(f"Plugin entry #{index} key 'options' must be a JSON object.")

    target = _resolve_entrypoint(entrypoint, index=index)
    plugin = _build_plugin(target, entrypoint=entrypoint, options=options, index=index)

    version = str(getattr(plugin, "api_version", PLUGIN_API_VERSION))
    if _major(version) != _major(PLUGIN_API_VERSION):
        raise PluginLoadError(
            f"Plugin entry #{index} '{entrypoint}' declares unsupported api_version "
            f"{version!r}; supported major version is {_major(PLUGIN_API_VERSION)}."
        )
    return plugin


def _resolve_entrypoint(entrypoint: str, *, index: int) -> object:
    module_name, _, attribute = entrypoint.partition(":")
    try:
        module = importlib.import_module(module_name)
    except Exception as error:
        raise PluginLoadError(
            f"Plugin entry #{index} failed to import module '{module_name}': {error}"
        ) from error

    try:
        return getattr(module, attribute)
    except AttributeError as error:
        raise PluginLoadError(
            f"Plugin entry #{index} could not find attribute '{attribute}' in '{module_name}'."
        ) from error


def _build_plugin(
    target: object,
    *,
    entrypoint: str,
    options: dict[str, Any],
    index: int,
) -> object:
    if callable(target):
        try:
            return target(**options)
        except Exception as error:
            raise PluginLoadError(
                f"Plugin entry #{index} failed to instantiate '{entrypoint}' "
                f"with options {sorted(options)}: {error}"
            ) from error

    if options:
        raise PluginLoadError(
            f"Plugin entry #{index} uses non-callable '{entrypoint}' and cannot accept options."
        )
    return target


def _major(version: str) -> str:
    return version.split(".", 1)[0]
