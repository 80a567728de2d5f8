# ============================================================================
# FILE: config.py
# RELPATH: namesafe/src/namesafe/config.py
# PROJECT: NameSafe Download Filename Sanitizer
# VERSION: 1.0.0
# LIFECYCLE: Proposed
# DESCRIPTION: JSON configuration manager for CLI defaults
# ============================================================================

"""
Configuration Manager for NameSafe.

Handles loading, saving and validating the JSON configuration file that
holds CLI defaults (log directory, output format, separator policy).
Unknown keys are kept as they are.
"""

import json
from pathlib import Path
from typing import Any, Dict

from namesafe.exceptions import (
    ConfigError,
    ConfigLoadError,
    ConfigValidationError
)
from namesafe.validators import SEPARATOR_POLICIES

OUTPUT_FORMATS = ('text', 'json')


class ConfigManager:
    """
    Manages application configuration.

    A missing file is created with DEFAULT_CONFIG on first use. Values are
    addressed with dot-separated paths such as 'app_defaults.output_format'.
    """

    DEFAULT_CONFIG = {
        "global_settings": {
            "log_dir": "logs",
            "logging_enabled": True
        },
        "app_defaults": {
            "output_format": "text",
            "separator_policy": "split"
        }
    }

    def __init__(self, config_file: str = "namesafe_config.json", create: bool = True):
        """
        Initialize configuration manager.

        Args:
            config_file: Path to configuration file
            create: If False, a missing file is not written to disk
        """
        self.config_file = Path(config_file)
        self.config: Dict = {}
        self._load_or_create(create)

    def _load_or_create(self, create: bool) -> None:
        """Load existing config or fall back to defaults."""
        if self.config_file.exists():
            self.load()
        else:
            self.config = self._deep_copy(self.DEFAULT_CONFIG)
            if create:
                self.save()

    def load(self) -> Dict:
        """
        Load configuration from file.

        Sections missing from the file are filled in from the defaults.

        Returns:
            Loaded configuration dictionary

        Raises:
            ConfigLoadError: If file cannot be loaded or parsed
        """
        try:
            text = self.config_file.read_text(encoding='utf-8')
            data = json.loads(text)
        except FileNotFoundError:
            raise ConfigLoadError(str(self.config_file), "File not found")
        except json.JSONDecodeError as e:
            raise ConfigLoadError(str(self.config_file), f"Invalid JSON: {e}")
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigLoadError(str(self.config_file), str(e))

        if not isinstance(data, dict):
            raise ConfigLoadError(str(self.config_file), "Top-level value must be an object")

        self.config = self._merge_defaults(data)
        return self.config

    def save(self) -> None:
        """
        Save configuration to file.

        Raises:
            ConfigError: If file cannot be written
        """
        try:
            text = json.dumps(self.config, indent=2, ensure_ascii=False)
            self.config_file.write_text(text, encoding='utf-8')
        except OSError as e:
            raise ConfigError(f"Failed to save config: {e}")

    def _merge_defaults(self, data: Dict) -> Dict:
        merged = self._deep_copy(self.DEFAULT_CONFIG)
        for key, value in data.items():
            if isinstance(value, dict) and isinstance(merged.get(key), dict):
                merged[key].update(value)
            else:
                merged[key] = value
        return merged

    def get(self, key_path: str, default: Any = None) -> Any:
        """
        Get configuration value using dot-notation path.

        Args:
            key_path: Dot-separated path (e.g., 'global_settings.log_dir')
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        value = self.config
        for key in key_path.split('.'):
            if isinstance(value, dict) and key in value:
                value = value[key]
            else:
                return default
        return value

    def set(self, key_path: str, value: Any) -> None:
        """
        Set configuration value using dot-notation path.

        Args:
            key_path: Dot-separated path
            value: Value to set
        """
        keys = key_path.split('.')
        target = self.config
        for key in keys[:-1]:
            if not isinstance(target.get(key), dict):
                target[key] = {}
            target = target[key]
        target[keys[-1]] = value

    def validate(self) -> bool:
        """
        Validate configuration against schema.

        Returns:
            True if valid

        Raises:
            ConfigValidationError: If validation fails
        """
        for section in ("global_settings", "app_defaults"):
            if not isinstance(self.config.get(section), dict):
                raise ConfigValidationError(
                    section,
                    None,
                    f"Required section '{section}' missing"
                )

        self._validate_choice('app_defaults.output_format', OUTPUT_FORMATS)
        self._validate_choice('app_defaults.separator_policy', SEPARATOR_POLICIES)
        self._validate_logging_enabled()
        self._validate_log_dir()

        return True

    def _validate_choice(self, key_path: str, choices) -> None:
        value = self.get(key_path)
        if value not in choices:
            raise ConfigValidationError(
                key_path,
                value,
                f"Must be one of: {', '.join(choices)}"
            )

    def _validate_logging_enabled(self) -> None:
        value = self.get('global_settings.logging_enabled')
        if not isinstance(value, bool):
            raise ConfigValidationError(
                'global_settings.logging_enabled',
                value,
                "Must be true or false"
            )

    def _validate_log_dir(self) -> None:
        value = self.get('global_settings.log_dir')
        if not isinstance(value, str) or not value.strip():
            raise ConfigValidationError(
                'global_settings.log_dir',
                value,
                "Must be a non-empty string"
            )

    def _deep_copy(self, obj: Any) -> Any:
        if isinstance(obj, dict):
            return {k: self._deep_copy(v) for k, v in obj.items()}
        elif isinstance(obj, list):
            return [self._deep_copy(item) for item in obj]
        else:
            return obj

    def reset_to_defaults(self) -> None:
        """Reset configuration to default values."""
        self.config = self._deep_copy(self.DEFAULT_CONFIG)
        self.save()

    def export_dict(self) -> Dict:
        return self._deep_copy(self.config)


# ============================================================================
# LIFECYCLE STATUS: Proposed
# DEPENDENCIES: exceptions.py
# TESTS: tests/unit/test_config.py
# ============================================================================
