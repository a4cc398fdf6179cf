"""Backend settings loading and validation.

This module handles loading and saving BackendSettings from YAML files.
A missing or empty file is not an error: it means "use the defaults".

Settings file structure:
    debounce_ms: 300
    flush_sync_turns: 2
    breakpoints: [xl, lg, md, sm, xs]
    new_page_label: "Page {n}"
"""

import os
from typing import Any, Dict

import yaml

from .errors import ConfigError, ConfigFilesystemError
from .models import BackendSettings


class SettingsLoader:
    """Handles settings file loading, validation, and saving."""

    DEFAULT_CONFIG_DIR = '.canvas-sync'
    DEFAULT_CONFIG_FILE = 'config.yaml'

    KNOWN_FIELDS = {'debounce_ms', 'flush_sync_turns', 'breakpoints', 'new_page_label'}

    @classmethod
    def default_path(cls) -> str:
        """Get the default settings file path, relative to the working directory."""
        return os.path.join(cls.DEFAULT_CONFIG_DIR, cls.DEFAULT_CONFIG_FILE)

    @classmethod
    def load(cls, config_path: str) -> BackendSettings:
        """Load and parse settings from a YAML file.

        Args:
            config_path: Path to the YAML settings file

        Returns:
            BackendSettings with parsed values (defaults for missing fields)

        Raises:
            ConfigFilesystemError: If file cannot be read (except FileNotFoundError)
            ConfigError: If settings are invalid or malformed
        """
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                content = f.read()
        except FileNotFoundError:
            return BackendSettings()
        except PermissionError:
            raise ConfigFilesystemError(config_path, 'read', 'Permission denied')
        except OSError as e:
            raise ConfigFilesystemError(config_path, 'read', str(e))

        if not content.strip():
            return BackendSettings()

        try:
            config_dict = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML syntax: {str(e)}")

        if config_dict is None:
            return BackendSettings()

        if not isinstance(config_dict, dict):
            raise ConfigError(
                f"Settings must be a YAML dictionary, got {type(config_dict).__name__}"
            )

        return cls._parse_settings(config_dict)

    @classmethod
    def save(cls, config_path: str, settings: BackendSettings) -> None:
        """Save settings to a YAML file.

        Args:
            config_path: Path to the YAML settings file
            settings: BackendSettings to save

        Raises:
            ConfigFilesystemError: If file cannot be written
        """
        config_dict = {
            'debounce_ms': settings.debounce_ms,
            'flush_sync_turns': settings.flush_sync_turns,
            'breakpoints': list(settings.breakpoints),
            'new_page_label': settings.new_page_label,
        }

        yaml_str = yaml.safe_dump(
            config_dict,
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=False
        )

        config_dir = os.path.dirname(config_path)
        if config_dir:
            try:
                os.makedirs(config_dir, exist_ok=True)
            except OSError as e:
                raise ConfigFilesystemError(config_dir, 'create_directory', str(e))

        try:
            with open(config_path, 'w', encoding='utf-8') as f:
                f.write(yaml_str)
        except PermissionError:
            raise ConfigFilesystemError(config_path, 'write', 'Permission denied')
        except OSError as e:
            raise ConfigFilesystemError(config_path, 'write', str(e))

    @classmethod
    def _parse_settings(cls, config_dict: Dict[str, Any]) -> BackendSettings:
        """Parse and validate a settings dictionary.

        Args:
            config_dict: Raw settings dictionary from YAML

        Returns:
            Validated BackendSettings

        Raises:
            ConfigError: If a field has the wrong type or value
        """
        unknown = set(config_dict) - cls.KNOWN_FIELDS
        if unknown:
            raise ConfigError(f"Unknown settings: {', '.join(sorted(unknown))}")

        defaults = BackendSettings()

        debounce_ms = config_dict.get('debounce_ms', defaults.debounce_ms)
        if isinstance(debounce_ms, bool) or not isinstance(debounce_ms, int):
            raise ConfigError(
                f"Field 'debounce_ms' must be an integer, got {type(debounce_ms).__name__}",
                'debounce_ms'
            )
        if debounce_ms < 0:
            raise ConfigError("Field 'debounce_ms' cannot be negative", 'debounce_ms')

        turns = config_dict.get('flush_sync_turns', defaults.flush_sync_turns)
        if isinstance(turns, bool) or not isinstance(turns, int):
            raise ConfigError(
                f"Field 'flush_sync_turns' must be an integer, got {type(turns).__name__}",
                'flush_sync_turns'
            )
        if turns < 0:
            raise ConfigError("Field 'flush_sync_turns' cannot be negative", 'flush_sync_turns')

        breakpoints = config_dict.get('breakpoints', list(defaults.breakpoints))
        if not isinstance(breakpoints, list) or not breakpoints:
            raise ConfigError(
                "Field 'breakpoints' must be a non-empty list",
                'breakpoints'
            )
        for breakpoint in breakpoints:
            if not isinstance(breakpoint, str) or not breakpoint.strip():
                raise ConfigError(
                    "Field 'breakpoints' entries must be non-empty strings",
                    'breakpoints'
                )
        if len(set(breakpoints)) != len(breakpoints):
            raise ConfigError("Field 'breakpoints' contains duplicates", 'breakpoints')

        label = config_dict.get('new_page_label', defaults.new_page_label)
        if not isinstance(label, str) or not label.strip():
            raise ConfigError(
                "Field 'new_page_label' must be a non-empty string",
                'new_page_label'
            )

        return BackendSettings(
            debounce_ms=debounce_ms,
            flush_sync_turns=turns,
            breakpoints=tuple(breakpoints),
            new_page_label=label,
        )
