"""Runtime settings: defaults, config file, environment and CLI overrides.

Precedence, lowest to highest: built-in defaults, the YAML (or JSON) config
file, ``LOCKSTEP_*`` environment variables, then CLI flags.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

import yaml

from constants import Constants, Ecosystems
from errors import ConfigError

logger = logging.getLogger(__name__)

_ENV_UPDATE_COMMANDS = {
    Ecosystems.RUBYGEM.value: Constants.ENV_BUNDLE_UPDATE_CMD,
    Ecosystems.NPM.value: Constants.ENV_NPM_UPDATE_CMD,
}


@dataclass
class Settings:
    """Resolved configuration for one invocation."""

    project_dir: str = "."
    api_url: str = Constants.API_URL
    api_token: Optional[str] = None
    project_slug: Optional[str] = None
    ignored_paths: List[str] = field(default_factory=list)
    update_commands: Dict[str, str] = field(default_factory=dict)
    patch_command: str = Constants.PATCH_CMD


def _read_config_file(path: str) -> Dict[str, Any]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            if path.endswith(".json"):
                data = json.load(f)
            else:
                data = yaml.safe_load(f)
    except OSError as exc:
        raise ConfigError(f"Unable to read config file {path}: {exc}") from exc
    except (yaml.YAMLError, json.JSONDecodeError) as exc:
        raise ConfigError(f"Invalid config file {path}: {exc}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")
    return data


def _as_list(value: Any, key: str) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [v.strip() for v in value.split(",") if v.strip()]
    if isinstance(value, list):
        return [str(v) for v in value]
    raise ConfigError(f"'{key}' must be a list or a comma separated string")


def apply_file_config(settings: Settings, data: Mapping[str, Any]) -> None:
    """Copy recognized keys of a config mapping onto ``settings``."""
    if data.get("api_url"):
        settings.api_url = str(data["api_url"])
    if data.get("api_token"):
        settings.api_token = str(data["api_token"])
    if data.get("project_slug"):
        settings.project_slug = str(data["project_slug"])
    if "ignored_paths" in data:
        settings.ignored_paths = _as_list(data["ignored_paths"], "ignored_paths")
    if data.get("patch_command"):
        settings.patch_command = str(data["patch_command"])

    commands = data.get("update_commands") or {}
    if not isinstance(commands, dict):
        raise ConfigError("'update_commands' must map ecosystems to commands")
    for ecosystem, command in commands.items():
        if command:
            settings.update_commands[str(ecosystem)] = str(command)


def apply_env_overrides(settings: Settings, environ: Mapping[str, str]) -> None:
    """Apply ``LOCKSTEP_*`` variables; empty values are ignored."""
    if environ.get(Constants.ENV_API_URL):
        settings.api_url = environ[Constants.ENV_API_URL]
    if environ.get(Constants.ENV_API_TOKEN):
        settings.api_token = environ[Constants.ENV_API_TOKEN]
    if environ.get(Constants.ENV_PROJECT_SLUG):
        settings.project_slug = environ[Constants.ENV_PROJECT_SLUG]
    if environ.get(Constants.ENV_IGNORED_PATHS):
        settings.ignored_paths = _as_list(
            environ[Constants.ENV_IGNORED_PATHS], Constants.ENV_IGNORED_PATHS
        )
    for ecosystem, var in _ENV_UPDATE_COMMANDS.items():
        value = environ.get(var, "").strip()
        if value:
            settings.update_commands[ecosystem] = value


def load_settings(
    config_path: Optional[str] = None,
    directory: str = ".",
    environ: Optional[Mapping[str, str]] = None,
) -> Settings:
    """Build ``Settings`` for a project directory.

    Args:
        config_path: Explicit config file; it must exist.
        directory: Project directory. Its ``.lockstep.yml`` is read when no
            explicit path is given and the file exists.
        environ: Environment mapping, ``os.environ`` by default.

    Raises:
        ConfigError: If the config file is unreadable or malformed.
    """
    settings = Settings(project_dir=directory)

    path = config_path
    if path is None:
        default_path = os.path.join(directory, Constants.CONFIG_FILE)
        if os.path.isfile(default_path):
            path = default_path
    if path:
        apply_file_config(settings, _read_config_file(path))
        logger.debug("Loaded config from: %s", path)

    apply_env_overrides(settings, os.environ if environ is None else environ)
    return settings


def apply_cli_overrides(settings: Settings, args: Any) -> None:
    """CLI flags have the highest precedence."""
    if getattr(args, "API_TOKEN", None):
        settings.api_token = args.API_TOKEN
    if getattr(args, "PROJECT_SLUG", None):
        settings.project_slug = args.PROJECT_SLUG
    if getattr(args, "UPDATE_COMMAND", None):
        settings.update_commands[args.ECOSYSTEM] = args.UPDATE_COMMAND
    if getattr(args, "PATCH_COMMAND", None):
        settings.patch_command = args.PATCH_COMMAND
    for pattern in getattr(args, "IGNORE", None) or []:
        settings.ignored_paths.append(pattern)
