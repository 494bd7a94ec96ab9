"""Pack configuration: YAML loading, validation and models."""

from .config_loader import ConfigLoader, DEFAULT_CONFIG_PATH
from .errors import ConfigurationError, ConfigError, ConfigFileError
from .models import ExportSettings, PackConfig

__all__ = [
    'ConfigLoader',
    'DEFAULT_CONFIG_PATH',
    'ConfigurationError',
    'ConfigError',
    'ConfigFileError',
    'ExportSettings',
    'PackConfig',
]
