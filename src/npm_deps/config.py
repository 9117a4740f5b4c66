"""Settings loader for the dependency parser.

Reads optional settings from a JSON file and validates the structure. Both
keys are optional; missing keys keep the built-in defaults:

- ``defaultRegistryHosts``: hosts whose packages report no source
- ``dependencyGroups``: which package.json groups to read, in order
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .errors import ConfigError
from .parsers.package_json import DEPENDENCY_GROUPS
from .sources import DEFAULT_REGISTRY_HOSTS

CONFIG_PATH_ENV_VAR = "NPM_DEPS_CONFIG"
REGISTRY_HOSTS_ENV_VAR = "NPM_DEPS_DEFAULT_REGISTRY_HOSTS"


@dataclass(slots=True, frozen=True)
class Settings:
    """Top-level settings container."""

    default_registry_hosts: tuple[str, ...] = field(default=DEFAULT_REGISTRY_HOSTS)
    dependency_groups: tuple[str, ...] = field(default=DEPENDENCY_GROUPS)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Settings:
        """Create Settings from a dictionary, validating known fields."""
        hosts = data.get("defaultRegistryHosts", list(DEFAULT_REGISTRY_HOSTS))
        if (
            not isinstance(hosts, list)
            or not hosts
            or not all(isinstance(h, str) and h for h in hosts)
        ):
            raise ConfigError("'defaultRegistryHosts' must be a non-empty array of strings")

        groups = data.get("dependencyGroups", list(DEPENDENCY_GROUPS))
        if not isinstance(groups, list) or not groups:
            raise ConfigError("'dependencyGroups' must be a non-empty array")
        unknown = [g for g in groups if g not in DEPENDENCY_GROUPS]
        if unknown:
            known = ", ".join(DEPENDENCY_GROUPS)
            raise ConfigError(f"Unknown dependency group(s): {unknown}. Known groups: {known}")
        if len(set(groups)) != len(groups):
            raise ConfigError("'dependencyGroups' must not repeat a group")

        return cls(
            default_registry_hosts=tuple(h.lower() for h in hosts),
            dependency_groups=tuple(groups),
        )


def _resolve_config_path(path: Path | str | None = None) -> Path | None:
    """Resolve the settings file path.

    Priority:
    1. Explicit path argument
    2. NPM_DEPS_CONFIG environment variable
    3. None (built-in defaults)
    """
    if path is not None:
        return Path(path)

    env_path = os.environ.get(CONFIG_PATH_ENV_VAR)
    if env_path:
        return Path(env_path)

    return None


def _apply_env_overrides(settings: Settings) -> Settings:
    hosts_env = os.environ.get(REGISTRY_HOSTS_ENV_VAR, "")
    hosts = tuple(h.strip().lower() for h in hosts_env.split(",") if h.strip())
    if not hosts:
        return settings
    return Settings(default_registry_hosts=hosts, dependency_groups=settings.dependency_groups)


def load_settings(path: Path | str | None = None) -> Settings:
    """Load and validate settings.

    Args:
        path: Optional path to a JSON settings file. If not provided, uses the
            NPM_DEPS_CONFIG env var or falls back to the built-in defaults.

    Returns:
        A Settings object. NPM_DEPS_DEFAULT_REGISTRY_HOSTS, when set,
        overrides the registry hosts.

    Raises:
        ConfigError: If the file cannot be read or contains invalid data.
    """
    config_path = _resolve_config_path(path)
    if config_path is None:
        return _apply_env_overrides(Settings())

    if not config_path.exists():
        raise ConfigError(f"Configuration file not found: {config_path}")

    try:
        content = config_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read configuration file: {exc}") from exc

    try:
        data = json.loads(content)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON in configuration file: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError("Configuration must be a JSON object")

    return _apply_env_overrides(Settings.from_dict(data))
