"""Configuration module for the dits shim.

Provides configuration loading and validation with support for:
- An optional YAML config file
- Environment variable expansion and overrides
"""

from dits.config.models import ShimConfig
from dits.config.loader import ConfigError, find_config_file, load_config
from dits.config.validation import validate_config, ConfigValidationWarning

__all__ = [
    "ShimConfig",
    "ConfigError",
    "find_config_file",
    "load_config",
    "validate_config",
    "ConfigValidationWarning",
]
