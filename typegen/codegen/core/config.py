"""
Configuration management for code generation.

Handles loading and merging configuration from JSON files,
providing per-language defaults for generator settings.
"""

import json
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Optional, Union

from ...logging_config import get_logger

logger = get_logger(__name__)


class ConfigError(Exception):
    """Exception raised for configuration-related errors."""

    pass


@dataclass
class GeneratorConfig:
    """Base configuration for code generators."""

    # Module/namespace the generated files live in (used for imports)
    module_name: str = ""

    # Code style settings
    indent_size: int = 4
    use_tabs: bool = False

    # Custom settings (language-specific)
    custom: Dict[str, Any] = field(default_factory=dict)

    @property
    def indent(self) -> str:
        """One level of indentation."""
        return "\t" if self.use_tabs else " " * self.indent_size

    def to_dict(self) -> Dict[str, Any]:
        """Flatten into the JSON file layout (custom keys at top level)."""
        data = {
            "module_name": self.module_name,
            "indent_size": self.indent_size,
            "use_tabs": self.use_tabs,
        }
        data.update(self.custom)
        return data


KNOWN_FIELDS = {f.name for f in fields(GeneratorConfig)}


class ConfigManager:
    """Manages configuration loading and merging."""

    def __init__(self):
        """Initialize configuration manager."""
        self._configs: Dict[str, Dict[str, Any]] = {}
        self._load_defaults()

    def _load_defaults(self):
        """Load default configurations for supported languages."""
        self._configs["gleam"] = {
            "module_name": "",
            "indent_size": 2,
            "use_tabs": False,
        }

        self._configs["rust"] = {
            "module_name": "",
            "indent_size": 4,
            "use_tabs": False,
        }

    def get_config(
        self,
        language: Optional[str] = None,
        custom_config: Optional[Dict[str, Any]] = None,
        config_file: Optional[Union[str, Path]] = None,
    ) -> GeneratorConfig:
        """
        Get complete configuration for a language.

        Args:
            language: Target language name (None for bare defaults)
            custom_config: Custom configuration overrides
            config_file: Path to JSON configuration file

        Returns:
            Merged configuration for the language
        """
        base_config = self._copy_defaults(language)

        if config_file:
            self._merge(base_config, self._load_config_file(config_file))

        if custom_config:
            self._merge(base_config, custom_config)

        return self._dict_to_config(base_config)

    def _copy_defaults(self, language: Optional[str]) -> Dict[str, Any]:
        defaults = self._configs.get((language or "").lower(), {})
        copied = dict(defaults)
        copied["custom"] = dict(defaults.get("custom", {}))
        return copied

    def _merge(self, base: Dict[str, Any], overrides: Dict[str, Any]):
        """Merge overrides into base; unknown keys land in ``custom``."""
        for key, value in overrides.items():
            if key == "custom":
                base["custom"].update(value)
            elif key in KNOWN_FIELDS:
                base[key] = value
            else:
                base["custom"][key] = value

    def _load_config_file(self, config_path: Union[str, Path]) -> Dict[str, Any]:
        """Load configuration from JSON file."""
        path = Path(config_path)

        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")

        if not path.suffix.lower() == ".json":
            raise ConfigError(f"Configuration file must be JSON: {path}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                config = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in configuration file {path}: {e}") from e
        except OSError as e:
            raise ConfigError(f"Failed to load configuration file {path}: {e}") from e

        if not isinstance(config, dict):
            raise ConfigError(f"Configuration file must contain a JSON object: {path}")

        logger.debug("Loaded configuration from %s", path)
        return config

    def _dict_to_config(self, config_dict: Dict[str, Any]) -> GeneratorConfig:
        """Convert dictionary to GeneratorConfig instance."""
        config_args = {k: v for k, v in config_dict.items() if k in KNOWN_FIELDS}
        return GeneratorConfig(**config_args)

    def list_languages(self) -> list[str]:
        """Get list of languages with built-in defaults."""
        return list(self._configs.keys())


# Global configuration manager instance
_config_manager = None


def get_config_manager() -> ConfigManager:
    """Get the global configuration manager instance."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager


def load_config(
    language: Optional[str] = None,
    custom_config: Optional[Dict[str, Any]] = None,
    config_file: Optional[Union[str, Path]] = None,
) -> GeneratorConfig:
    """
    Convenience function to load configuration.

    Args:
        language: Target language name
        custom_config: Custom configuration overrides
        config_file: Path to JSON configuration file

    Returns:
        Merged configuration for the language
    """
    manager = get_config_manager()
    return manager.get_config(language, custom_config, config_file)
