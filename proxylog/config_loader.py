"""Configuration loading from YAML files with environment variable support."""

import logging
import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

import yaml
from dotenv import dotenv_values

from .exceptions import ConfigurationError

logger = logging.getLogger("proxylog")

# Default path to the config file (relative to project root)
DEFAULT_CONFIG_PATH = "configs/config_default.yaml"

# Environment variable to override the config path
CONFIG_DEFAULT_PATH = os.getenv("PROXYLOG_CONFIG") or DEFAULT_CONFIG_PATH

# Environment variables that take priority over log_settings
LOG_FILE_ENV = "PROXYLOG_LOG_FILE"
HISTORY_FILE_ENV = "PROXYLOG_HISTORY_FILE"

_ENV_PATTERN = re.compile(r"\$\{([^}]+)\}|\$([A-Za-z_][A-Za-z0-9_]*)")


@dataclass
class LogPaths:
    """Log destinations taken from the config."""

    log_file: str = ""  # empty means stdout
    history_file: str = ""


def resolve_config_path(path: str) -> Path:
    """Resolve config path relative to project root if needed."""
    if Path(path).is_absolute():
        return Path(path)
    project_root = Path(__file__).parent.parent
    return project_root / path


def resolve_env_path(config_path: Path, env_path: str | None = None) -> Path:
    """Resolve the env file path for a config file."""
    if env_path:
        return resolve_config_path(env_path)
    stem = config_path.stem
    if stem.startswith("config_"):
        suffix = stem[len("config_"):]
        return config_path.with_name(f".env_{suffix}")
    return config_path.with_name(".env")


def load_env_values(env_path: Path) -> dict[str, str]:
    """Load environment values from a .env file without mutating os.environ."""
    if not env_path.exists():
        return {}
    raw_values = dotenv_values(env_path)
    return {key: value for key, value in raw_values.items() if value is not None}


def load_config(
    path: str | None = None,
    env_path: str | None = None,
    substitute_env: bool = True,
) -> dict:
    """Load configuration from a YAML file.

    Args:
        path: Path to the config file. Defaults to PROXYLOG_CONFIG,
              or configs/config_default.yaml in the project root.
        env_path: Optional .env path override for env substitution.
        substitute_env: Whether to substitute environment variables in the config.

    Returns:
        Parsed configuration dictionary.

    Raises:
        ConfigurationError: If the file does not exist or is not a mapping.
    """
    if path is None:
        path = CONFIG_DEFAULT_PATH

    config_path = resolve_config_path(path)

    logger.info(f"Loading configuration from {config_path}")

    if not config_path.exists():
        raise ConfigurationError(f"Config file not found: {config_path}")

    env_values: dict[str, str] = {}
    if substitute_env:
        env_file = resolve_env_path(config_path, env_path)
        if env_file.exists():
            logger.info(f"Loading environment variables from {env_file}")
            env_values = load_env_values(env_file)

    with config_path.open("r", encoding="utf-8") as fh:
        data = yaml.safe_load(fh) or {}

    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file must contain a mapping: {config_path}")

    if substitute_env:
        data = _substitute_env_vars(data, env_values)

    return data


def get_log_paths(config: Mapping[str, Any]) -> LogPaths:
    """Extract the log and history file paths from a loaded config.

    Environment variables PROXYLOG_LOG_FILE and PROXYLOG_HISTORY_FILE take
    priority over the ``log_settings`` section.
    """
    settings = config.get("log_settings") or {}
    if not isinstance(settings, Mapping):
        raise ConfigurationError("log_settings must be a mapping")

    log_file = os.getenv(LOG_FILE_ENV)
    if log_file is None:
        log_file = _to_str(settings.get("log_file"))

    history_file = os.getenv(HISTORY_FILE_ENV)
    if history_file is None:
        history_file = _to_str(settings.get("history_file"))

    return LogPaths(log_file=log_file, history_file=history_file)


def _to_str(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def _substitute_env_vars(
    obj: Any, env_values: Mapping[str, str] | None = None
) -> Any:
    """Recursively substitute environment variables in configuration values.

    Supports two formats:
    - ${VAR_NAME}: Braced format
    - $VAR_NAME: Simple format

    Values from ``env_values`` win over os.environ. Unset variables are
    left in place and reported with a warning.
    """
    env_values = env_values or {}

    if isinstance(obj, dict):
        return {k: _substitute_env_vars(v, env_values) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_substitute_env_vars(item, env_values) for item in obj]
    if isinstance(obj, str):

        def replace_var(match):
            var_name = match.group(1) or match.group(2)
            value = env_values.get(var_name)
            if value is None:
                value = os.getenv(var_name)
            if value is None:
                logger.warning(
                    f"CONFIG ERROR: Environment variable '${var_name}' is not set! "
                    f"The literal placeholder will be used."
                )
                return match.group(0)
            return value

        return _ENV_PATTERN.sub(replace_var, obj)
    return obj
