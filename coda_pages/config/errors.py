"""Errors raised while loading or saving .coda-pages/config.yaml."""

from typing import Optional

from coda_pages.coda_client.errors import PackError


class ConfigurationError(PackError):
    """Base exception for config file problems."""
    pass


class ConfigFileError(ConfigurationError):
    """The config file or its directory could not be read or written.

    ``operation`` is one of ``read``, ``write`` or ``create_directory``.
    """

    def __init__(self, config_path: str, operation: str, reason: Optional[str] = None):
        verb = operation.replace('_', ' ')
        message = f"Cannot {verb} config at {config_path}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)
        self.config_path = config_path
        self.operation = operation
        self.reason = reason


class ConfigError(ConfigurationError):
    """A config value is missing, malformed or out of range."""

    def __init__(self, message: str, config_field: Optional[str] = None):
        if config_field:
            full_message = f"Invalid '{config_field}' in config: {message}"
        else:
            full_message = f"Invalid config: {message}"
        super().__init__(full_message)
        self.config_field = config_field
        self.detail = message
