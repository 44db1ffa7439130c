"""Run configuration for feed validation.

Settings are resolved with the following precedence (highest to lowest):
1. CLI argument
2. Environment variable (PODFEED_<KEY>, then the conventional alias if any)
3. Config file (`podfeed.yaml` in the working directory, or --config)
4. Built-in default

The resolved values are frozen into a RunConfig that is passed explicitly
through a validation run. Nothing below the CLI reads the environment.

Usage:
    from podfeed_cli.config import resolve_run_config

    config = resolve_run_config(strict=cli_strict, config_file=cli_config)
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from podfeed_cli.errors import ConfigInvalidValueError, ConfigParseError

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "podfeed.yaml"

# Settings understood by RunConfig, with their built-in defaults
DEFAULTS: dict[str, Any] = {
    "strict": False,
    "ci": False,
    "public_url_base": None,
    "offline": False,
}

BOOLEAN_SETTINGS: frozenset[str] = frozenset({"strict", "ci", "offline"})

# Environment variables commonly set by CI runners and deploy pipelines
ENV_ALIASES: dict[str, str] = {
    "ci": "CI",
    "public_url_base": "PUBLIC_URL_BASE",
}

_TRUE_STRINGS = frozenset({"1", "true", "yes", "on"})
_FALSE_STRINGS = frozenset({"0", "false", "no", "off", ""})


@dataclass(frozen=True)
class RunConfig:
    """Options for one validation run.

    Attributes:
        strict: Escalate strict-only violations (unexpected tags) to failures.
        ci_mode: Running inside a CI pipeline; enables the public-base bypass.
        public_url_base: URLs under this prefix are not probed in CI mode,
            since they point at the deployment being validated.
        offline: Never probe remote URLs.
    """

    strict: bool = False
    ci_mode: bool = False
    public_url_base: str | None = None
    offline: bool = False


def load_config(config_file: Path) -> dict[str, Any]:
    """Load settings from a YAML config file.

    Args:
        config_file: Path to the YAML file.

    Returns:
        Settings dictionary. Returns empty dict if the file doesn't exist
        or is empty.

    Raises:
        ConfigParseError: If the file is not valid YAML or not a mapping.
    """
    if not config_file.exists():
        return {}

    content = config_file.read_text()
    if not content.strip():
        return {}

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as err:
        raise ConfigParseError(str(config_file), str(err)) from err

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigParseError(str(config_file), "top level must be a mapping")
    return data


def _get_env_var_name(key: str) -> str:
    """Convert a setting key to environment variable name.

    Args:
        key: Setting key (e.g., "public_url_base")

    Returns:
        Environment variable name (e.g., "PODFEED_PUBLIC_URL_BASE")
    """
    return f"PODFEED_{key.upper()}"


def _env_value(key: str) -> str | None:
    value = os.environ.get(_get_env_var_name(key))
    if value is not None:
        return value
    alias = ENV_ALIASES.get(key)
    if alias is None or alias not in os.environ:
        return None
    value = os.environ[alias]
    # CI runners set CI to arbitrary non-empty markers
    if key in BOOLEAN_SETTINGS and value.strip().lower() not in _FALSE_STRINGS:
        return "true"
    return value


def parse_bool(key: str, value: Any) -> bool:
    """Interpret a setting value as a boolean.

    Args:
        key: Setting key, used in the error message.
        value: A bool, or a string such as "true", "1", "no".

    Returns:
        The boolean value.

    Raises:
        ConfigInvalidValueError: If the value cannot be read as a boolean.
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
    raise ConfigInvalidValueError(key, value, "a boolean")


def get_setting(
    key: str,
    cli_value: Any | None = None,
    file_config: dict[str, Any] | None = None,
) -> Any | None:
    """Resolve a setting with full precedence.

    Args:
        key: Setting key (e.g., "strict", "public_url_base")
        cli_value: Value passed via CLI argument (highest precedence)
        file_config: Settings loaded from the config file

    Returns:
        Resolved value, or the built-in default.
    """
    if cli_value is not None:
        return cli_value

    env_value = _env_value(key)
    if env_value is not None:
        return env_value

    if file_config and key in file_config:
        return file_config[key]

    return DEFAULTS.get(key)


def resolve_run_config(
    *,
    strict: bool | None = None,
    ci: bool | None = None,
    public_url_base: str | None = None,
    offline: bool | None = None,
    config_file: Path | None = None,
) -> RunConfig:
    """Build a RunConfig from CLI values, environment and config file.

    Args:
        strict: --strict flag, or None when not given.
        ci: --ci/--no-ci flag, or None when not given.
        public_url_base: --public-url-base value, or None.
        offline: --offline flag, or None when not given.
        config_file: Explicit config file. Defaults to ./podfeed.yaml.

    Returns:
        Frozen RunConfig for one validation run.

    Raises:
        ConfigParseError: If the config file is unreadable.
        ConfigInvalidValueError: If a boolean setting has a non-boolean value.
    """
    path = config_file if config_file is not None else Path.cwd() / CONFIG_FILENAME
    file_config = load_config(path)

    cli_values: dict[str, Any] = {
        "strict": strict,
        "ci": ci,
        "public_url_base": public_url_base,
        "offline": offline,
    }
    resolved: dict[str, Any] = {}
    for key, cli_value in cli_values.items():
        value = get_setting(key, cli_value=cli_value, file_config=file_config)
        if key in BOOLEAN_SETTINGS:
            value = parse_bool(key, value)
        elif value is not None:
            value = str(value)
        resolved[key] = value

    logger.debug("Resolved run config: %s", resolved)
    return RunConfig(
        strict=resolved["strict"],
        ci_mode=resolved["ci"],
        public_url_base=resolved["public_url_base"] or None,
        offline=resolved["offline"],
    )
