"""YAML configuration loading and validation.

This module handles loading and saving the pack configuration. A missing
config file is not an error: every field has a default, so a fresh
checkout works with only CODA_API_TOKEN and --doc.
"""

import os
from typing import Any, Dict, Optional

import yaml

from .errors import ConfigError, ConfigFileError
from .models import ExportSettings, PackConfig

DEFAULT_CONFIG_PATH = '.coda-pages/config.yaml'


class ConfigLoader:
    """Handles configuration file loading, validation, and saving.

    Configuration file structure:
        api_base_url: https://coda.io/apis/v1
        icons_url: https://coda.io/api/icons
        auth_mode: system
        doc_id: AbCDeFGH
        endpoint: null
        request_timeout: 30
        list_limit: 100
        page_search_limit: 100
        icon_search_limit: 50
        export:
          format: html
          poll_interval: 1.0
          backoff: fixed
          max_interval: 30.0
          max_attempts: 120
          timeout: null
    """

    AUTH_MODES = {'system', 'connection'}
    EXPORT_FORMATS = {'html', 'markdown'}
    BACKOFFS = {'fixed', 'exponential'}

    @classmethod
    def load(cls, config_path: str = DEFAULT_CONFIG_PATH) -> PackConfig:
        """Load and parse configuration from a YAML file.

        Args:
            config_path: Path to the YAML configuration file

        Returns:
            PackConfig (defaults if the file does not exist or is empty)

        Raises:
            ConfigFileError: If the file exists but cannot be read
            ConfigError: If configuration is invalid or malformed
        """
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                content = f.read()
        # A missing file means defaults
        except FileNotFoundError:
            return PackConfig()
        except PermissionError:
            raise ConfigFileError(
                config_path,
                'read',
                'Permission denied'
            )
        except OSError as e:
            raise ConfigFileError(
                config_path,
                'read',
                str(e)
            )

        try:
            config_dict = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ConfigError(
                f"Invalid YAML syntax: {str(e)}"
            )

        if config_dict is None:
            return PackConfig()

        if not isinstance(config_dict, dict):
            raise ConfigError(
                f"Configuration must be a YAML dictionary, got {type(config_dict).__name__}"
            )

        return cls._parse_config(config_dict)

    @classmethod
    def save(cls, config_path: str, config: PackConfig) -> None:
        """Save configuration to a YAML file.

        Raises:
            ConfigFileError: If file cannot be written
        """
        config_dict = {
            'api_base_url': config.api_base_url,
            'icons_url': config.icons_url,
            'auth_mode': config.auth_mode,
            'doc_id': config.doc_id,
            'endpoint': config.endpoint,
            'request_timeout': config.request_timeout,
            'list_limit': config.list_limit,
            'page_search_limit': config.page_search_limit,
            'icon_search_limit': config.icon_search_limit,
            'export': {
                'format': config.export.format,
                'poll_interval': config.export.poll_interval,
                'backoff': config.export.backoff,
                'max_interval': config.export.max_interval,
                'max_attempts': config.export.max_attempts,
                'timeout': config.export.timeout,
            },
        }

        yaml_str = yaml.safe_dump(
            config_dict,
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=False
        )

        # Create directory if it doesn't exist
        config_dir = os.path.dirname(config_path)
        if config_dir:
            try:
                os.makedirs(config_dir, exist_ok=True)
            except OSError as e:
                raise ConfigFileError(
                    config_dir,
                    'create_directory',
                    str(e)
                )

        try:
            with open(config_path, 'w', encoding='utf-8') as f:
                f.write(yaml_str)
        except PermissionError:
            raise ConfigFileError(
                config_path,
                'write',
                'Permission denied'
            )
        except OSError as e:
            raise ConfigFileError(
                config_path,
                'write',
                str(e)
            )

    @staticmethod
    def _optional_str(value: Any) -> Optional[str]:
        if value is None:
            return None
        value = str(value).strip()
        return value or None

    @staticmethod
    def _positive(value: Any, field_name: str, cast=int, allow_none: bool = False):
        if value is None and allow_none:
            return None
        try:
            number = cast(value)
        except (ValueError, TypeError):
            raise ConfigError(
                f"must be a number, got {value!r}",
                field_name
            )
        if number <= 0:
            raise ConfigError(
                f"must be greater than 0, got {number}",
                field_name
            )
        return number

    @classmethod
    def _parse_export(cls, export_dict: Any) -> ExportSettings:
        defaults = ExportSettings()
        if export_dict is None:
            return defaults
        if not isinstance(export_dict, dict):
            raise ConfigError(
                "Field 'export' must be a dictionary",
                'export'
            )

        fmt = str(export_dict.get('format', defaults.format)).lower()
        if fmt not in cls.EXPORT_FORMATS:
            raise ConfigError(
                f"must be one of {', '.join(sorted(cls.EXPORT_FORMATS))}, got {fmt!r}",
                'export.format'
            )

        backoff = str(export_dict.get('backoff', defaults.backoff)).lower()
        if backoff not in cls.BACKOFFS:
            raise ConfigError(
                f"must be one of {', '.join(sorted(cls.BACKOFFS))}, got {backoff!r}",
                'export.backoff'
            )

        poll_interval = export_dict.get('poll_interval', defaults.poll_interval)
        try:
            poll_interval = float(poll_interval)
        except (ValueError, TypeError):
            raise ConfigError(
                f"must be a number, got {poll_interval!r}",
                'export.poll_interval'
            )
        if poll_interval < 0:
            raise ConfigError(
                f"cannot be negative, got {poll_interval}",
                'export.poll_interval'
            )

        max_interval = cls._positive(
            export_dict.get('max_interval', defaults.max_interval),
            'export.max_interval',
            cast=float,
        )
        max_attempts = cls._positive(
            export_dict.get('max_attempts', defaults.max_attempts),
            'export.max_attempts',
            allow_none=True,
        )
        timeout = cls._positive(
            export_dict.get('timeout', defaults.timeout),
            'export.timeout',
            cast=float,
            allow_none=True,
        )

        # Polling must stop eventually
        if max_attempts is None and timeout is None:
            raise ConfigError(
                "Export polling needs a bound: set max_attempts or timeout",
                'export'
            )

        return ExportSettings(
            format=fmt,
            poll_interval=poll_interval,
            backoff=backoff,
            max_interval=max_interval,
            max_attempts=max_attempts,
            timeout=timeout,
        )

    @classmethod
    def _parse_config(cls, config_dict: Dict[str, Any]) -> PackConfig:
        """Parse and validate configuration dictionary.

        Raises:
            ConfigError: If configuration is invalid
        """
        defaults = PackConfig()

        # Validate auth_mode
        auth_mode = str(config_dict.get('auth_mode', defaults.auth_mode)).lower()
        if auth_mode not in cls.AUTH_MODES:
            raise ConfigError(
                f"must be one of {', '.join(sorted(cls.AUTH_MODES))}, got {auth_mode!r}",
                'auth_mode'
            )

        # Validate URLs
        api_base_url = cls._optional_str(config_dict.get('api_base_url')) or defaults.api_base_url
        icons_url = cls._optional_str(config_dict.get('icons_url')) or defaults.icons_url
        for field_name, url in (('api_base_url', api_base_url), ('icons_url', icons_url)):
            if not url.startswith(('http://', 'https://')):
                raise ConfigError(
                    f"must start with http:// or https://, got {url!r}",
                    field_name
                )

        return PackConfig(
            api_base_url=api_base_url.rstrip('/'),
            icons_url=icons_url,
            auth_mode=auth_mode,
            doc_id=cls._optional_str(config_dict.get('doc_id')),
            endpoint=cls._optional_str(config_dict.get('endpoint')),
            request_timeout=cls._positive(
                config_dict.get('request_timeout', defaults.request_timeout),
                'request_timeout',
                cast=float,
            ),
            list_limit=cls._positive(config_dict.get('list_limit', defaults.list_limit), 'list_limit'),
            page_search_limit=cls._positive(
                config_dict.get('page_search_limit', defaults.page_search_limit),
                'page_search_limit',
            ),
            icon_search_limit=cls._positive(
                config_dict.get('icon_search_limit', defaults.icon_search_limit),
                'icon_search_limit',
            ),
            export=cls._parse_export(config_dict.get('export')),
        )
