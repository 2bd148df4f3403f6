"""
Configuration management for code generation.

Handles loading and merging configuration from JSON files,
providing defaults and validation for renderer settings.
"""

import json
from pathlib import Path
from typing import Dict, Any, List, Optional, Union
from dataclasses import dataclass, field, fields


class ConfigError(Exception):
    """Exception raised for configuration-related errors."""
    pass


@dataclass
class GeneratorConfig:
    """Base configuration for renderers."""

    # Output settings
    output_name: Optional[str] = None

    # Code style settings
    indent_size: int = 4
    line_ending: str = "\n"

    # Additional metadata
    add_comments: bool = True
    header_comment: str = "Auto-generated by event-codegen - DO NOT EDIT"

    # Custom settings (target-specific)
    custom: Dict[str, Any] = field(default_factory=dict)

    def get(self, key: str, default: Any = None) -> Any:
        """Look up a setting on the config or in its custom settings."""
        if key in self.custom:
            return self.custom[key]
        return getattr(self, key, default) if key in _KNOWN_FIELDS else default


_KNOWN_FIELDS = {f.name for f in fields(GeneratorConfig)}


class ConfigManager:
    """Manages configuration loading and merging."""

    def __init__(self):
        """Initialize configuration manager."""
        self._configs: Dict[str, Dict[str, Any]] = {}
        self._load_defaults()

    def _load_defaults(self):
        """Load default configurations for supported targets."""
        # Emission module defaults
        self._configs["cpp"] = {
            "output_name": "Events.hpp",
            "indent_size": 4,
            "add_comments": True,
            "custom": {
                "namespace": "Events",
                "transport_include": "../SSE.hpp",
                "broadcast_call": "SSE::Broadcast",
                "int_type": "int",
                "json_type": "nlohmann::json",
                "json_include": "nlohmann/json.hpp",
            },
        }

        # Consumption module defaults
        self._configs["typescript"] = {
            "output_name": "events.ts",
            "indent_size": 2,
            "add_comments": True,
            "custom": {
                "config_import": "../config",
                "client_class": "SSEClient",
                "reconnect_base_delay_ms": 3000,
                "max_reconnect_attempts": 10,
                "mock_guard": True,
            },
        }

    def get_config(self, language: Optional[str] = None,
                   custom_config: Optional[Dict[str, Any]] = None,
                   config_file: Optional[Union[str, Path]] = None) -> GeneratorConfig:
        """
        Get complete configuration for a target.

        Args:
            language: Target name
            custom_config: Custom configuration overrides
            config_file: Path to JSON configuration file

        Returns:
            Merged configuration for the target
        """
        base_config = self._copy_defaults(language)

        if config_file:
            file_config = self.load_config_file(config_file)
            self._merge_into(base_config, self._section_for(file_config, language))

        if custom_config:
            self._merge_into(base_config, self._section_for(custom_config, language))

        return self._dict_to_config(base_config)

    def _copy_defaults(self, language: Optional[str]) -> Dict[str, Any]:
        defaults = self._configs.get((language or "").lower(), {})
        config = dict(defaults)
        config["custom"] = dict(defaults.get("custom", {}))
        return config

    def _section_for(self, file_config: Dict[str, Any], language: Optional[str]) -> Dict[str, Any]:
        """
        Pick the settings that apply to one target from a config file.

        Top-level keys apply to every target; a nested object keyed by the
        target name (e.g. ``"cpp": {...}``) applies to that target only.
        """
        shared = {k: v for k, v in file_config.items() if k not in self._configs}
        if language and isinstance(file_config.get(language.lower()), dict):
            shared.update(file_config[language.lower()])
        return shared

    def _merge_into(self, base: Dict[str, Any], overrides: Dict[str, Any]) -> None:
        for key, value in overrides.items():
            if key == "custom" and isinstance(value, dict):
                base.setdefault("custom", {}).update(value)
            else:
                base[key] = value

    def load_config_file(self, config_path: Union[str, Path]) -> Dict[str, Any]:
        """Load configuration from JSON file."""
        path = Path(config_path)

        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")

        if not path.suffix.lower() == '.json':
            raise ConfigError(f"Configuration file must be JSON: {path}")

        try:
            with open(path, 'r', encoding='utf-8') as f:
                config = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in configuration file {path}: {str(e)}") from e
        except OSError as e:
            raise ConfigError(f"Failed to load configuration file {path}: {str(e)}") from e

        if not isinstance(config, dict):
            raise ConfigError(f"Configuration file must contain a JSON object: {path}")

        return config

    def _dict_to_config(self, config_dict: Dict[str, Any]) -> GeneratorConfig:
        """Convert dictionary to GeneratorConfig instance."""
        config_args = {}
        custom_args = {}

        for key, value in config_dict.items():
            if key in _KNOWN_FIELDS:
                config_args[key] = value
            else:
                custom_args[key] = value

        if custom_args:
            existing_custom = dict(config_args.get('custom', {}))
            existing_custom.update(custom_args)
            config_args['custom'] = existing_custom

        return GeneratorConfig(**config_args)

    def list_languages(self) -> List[str]:
        """Get list of targets with default settings."""
        return list(self._configs.keys())

    def validate_config(self, config: GeneratorConfig, language: str) -> List[str]:
        """
        Validate configuration for a target.

        Returns:
            List of validation warnings/errors
        """
        warnings = []

        if config.indent_size < 0:
            warnings.append(f"Invalid indent_size: {config.indent_size}")

        if language == "cpp":
            namespace = config.get("namespace", "")
            if namespace and not all(part.isidentifier() for part in namespace.split("::")):
                warnings.append(f"Invalid C++ namespace: {namespace}")

        elif language == "typescript":
            delay = config.get("reconnect_base_delay_ms", 0)
            attempts = config.get("max_reconnect_attempts", 0)
            if not isinstance(delay, int) or delay < 0:
                warnings.append(f"Invalid reconnect_base_delay_ms: {delay}")
            if not isinstance(attempts, int) or attempts < 0:
                warnings.append(f"Invalid max_reconnect_attempts: {attempts}")

        return warnings


# Global configuration manager instance
_config_manager = None

def get_config_manager() -> ConfigManager:
    """Get the global configuration manager instance."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager


def load_config(language: Optional[str] = None,
                custom_config: Optional[Dict[str, Any]] = None,
                config_file: Optional[Union[str, Path]] = None) -> GeneratorConfig:
    """
    Convenience function to load configuration.

    Args:
        language: Target name
        custom_config: Custom configuration overrides
        config_file: Path to JSON configuration file

    Returns:
        Merged configuration for the target
    """
    manager = get_config_manager()
    return manager.get_config(language, custom_config, config_file)
