"""Configuration loading for the dits shim.

Handles loading configuration with:
- An optional YAML file ($DITS_SHIM_CONFIG or ~/.dits/config/shim.yml)
- Environment variable expansion (${VAR}, ${VAR:-default})
- Environment overrides (DITS_INSTALL_ROOT, DITS_DEBUG)
"""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import yaml

from dits.bootstrap.paths import get_dits_home
from dits.config.models import ShimConfig
from dits.config.validation import VALID_TOP_LEVEL_KEYS, validate_config
from dits.core.logging import get_logger

LOGGER = get_logger(__name__)

CONFIG_PATH_ENV = "DITS_SHIM_CONFIG"
INSTALL_ROOT_ENV = "DITS_INSTALL_ROOT"
DEBUG_ENV = "DITS_DEBUG"
GLOBAL_CONFIG_NAME = "shim.yml"

_TRUTHY = {"1", "true", "yes", "on"}

# Environment variable pattern: ${VAR} or ${VAR:-default}
ENV_VAR_PATTERN = re.compile(r"\$\{([^}:]+)(?::-([^}]*))?\}")


class ConfigError(Exception):
    """Configuration loading or parsing error."""

    pass


def expand_env_vars(value: Any) -> Any:
    """Expand ${VAR} references in strings, lists and dicts."""
    if isinstance(value, str):
        return ENV_VAR_PATTERN.sub(
            lambda m: os.environ.get(m.group(1), m.group(2) or ""),
            value,
        )
    if isinstance(value, dict):
        return {k: expand_env_vars(v) for k, v in value.items()}
    if isinstance(value, list):
        return [expand_env_vars(v) for v in value]
    return value


def find_config_file(environ: Optional[Mapping[str, str]] = None) -> Optional[Path]:
    """Find the shim config file.

    An unreadable ``$DITS_HOME`` is logged and treated as "no config".

    Returns:
        Path to the config file if one exists, None otherwise.

    Raises:
        ConfigError: If $DITS_SHIM_CONFIG points to a missing or
            inaccessible file.
    """
    env = os.environ if environ is None else environ
    explicit = env.get(CONFIG_PATH_ENV)
    if explicit:
        path = Path(explicit)
        try:
            found = path.is_file()
        except OSError as e:
            raise ConfigError(f"Cannot access config file {path}: {e}") from e
        if not found:
            raise ConfigError(f"Config file not found: {path}")
        return path

    path = get_dits_home(env) / "config" / GLOBAL_CONFIG_NAME
    try:
        if path.is_file():
            return path
    except OSError as e:
        LOGGER.warning(f"Cannot access global config {path}: {e}")
    return None


def load_yaml_file(path: Path) -> Dict[str, Any]:
    """Load and env-expand a YAML file. An empty file yields ``{}``."""
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f)
    if data is None:
        return {}
    return expand_env_vars(data)


def read_config_file(path: Path) -> Any:
    """Load a config file, mapping every read or parse failure to ConfigError."""
    try:
        return load_yaml_file(path)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    except UnicodeDecodeError as e:
        raise ConfigError(f"Config file {path} is not valid UTF-8: {e}") from e
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e


def dict_to_config(data: Dict[str, Any], sources: Optional[List[str]] = None) -> ShimConfig:
    """Convert a validated config dict into ShimConfig.

    Values of the wrong type are dropped; validation has already warned.
    """
    config = ShimConfig()
    log_level = data.get("log_level")
    if isinstance(log_level, str) and log_level:
        config.log_level = log_level.lower()
    install_root = data.get("install_root")
    if isinstance(install_root, str) and install_root:
        config.install_root = Path(install_root).expanduser()
    config._config_sources = list(sources or [])
    return config


def load_config(environ: Optional[Mapping[str, str]] = None) -> ShimConfig:
    """Load shim configuration.

    Precedence (highest to lowest):
    1. Environment overrides (DITS_INSTALL_ROOT, DITS_DEBUG)
    2. Config file
    3. Built-in defaults

    A broken global config file is logged and skipped; a broken file
    named by $DITS_SHIM_CONFIG raises.

    Raises:
        ConfigError: If the explicit config file is missing, unreadable
            or not valid YAML.
    """
    env = os.environ if environ is None else environ
    sources: List[str] = []
    merged: Dict[str, Any] = {}

    path = find_config_file(env)
    if path is not None:
        try:
            data = read_config_file(path)
        except ConfigError as e:
            if env.get(CONFIG_PATH_ENV):
                raise
            LOGGER.warning(f"Ignoring global config: {e}")
        else:
            validate_config(data, source=str(path))
            if isinstance(data, dict):
                merged.update({k: v for k, v in data.items() if k in VALID_TOP_LEVEL_KEYS})
            sources.append(f"file:{path}")

    install_root = env.get(INSTALL_ROOT_ENV)
    if install_root:
        merged["install_root"] = install_root
        sources.append(f"env:{INSTALL_ROOT_ENV}")

    if env.get(DEBUG_ENV, "").strip().lower() in _TRUTHY:
        merged["log_level"] = "debug"
        sources.append(f"env:{DEBUG_ENV}")

    return dict_to_config(merged, sources)
