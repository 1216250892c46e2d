"""
modkit Configuration - TOML-based configuration for the host and its modules.

This package provides:
- Host settings (``modkit.toml``) with schema validation
- Per-module configuration files (``modules/<name>/<file>.toml``)
- Comment-preserving writes

Example usage:
    config = Config(Path("config"))
    config.settings.enabled_modules

    cfg = config.module("monitoring", "backends")
    cfg.get("icinga", "host", "localhost")
    cfg.set("icinga", "port", 5665)
    cfg.save()
"""

from pathlib import Path
from typing import Any

from modkit.config.settings import SETTINGS_FILE, Settings, load_settings
from modkit.config.toml_handler import read_toml, update_toml, write_toml

DEFAULT_MODULE_CONFIG = "config"


class ConfigError(Exception):
    """Base exception for config API errors."""

    pass


class ModuleConfig:
    """
    Sectioned configuration of a single module file.

    Sections are TOML tables. A missing file behaves as an empty config until
    saved.
    """

    def __init__(self, file_path: Path):
        self.file_path = file_path
        self._data: dict[str, dict[str, Any]] = {}
        if file_path.exists():
            data = read_toml(file_path)
            for section, values in data.items():
                if not isinstance(values, dict):
                    raise ConfigError(
                        f"Top-level key '{section}' in {file_path} is not a section"
                    )
                self._data[section] = dict(values)

    def exists(self) -> bool:
        return self.file_path.exists()

    def sections(self) -> list[str]:
        return list(self._data)

    def section(self, name: str) -> dict[str, Any]:
        """Get a copy of a section, empty if absent."""
        return dict(self._data.get(name, {}))

    def get(self, section: str, key: str, default: Any = None) -> Any:
        return self._data.get(section, {}).get(key, default)

    def set(self, section: str, key: str, value: Any) -> "ModuleConfig":
        self._data.setdefault(section, {})[key] = value
        return self

    def save(self) -> None:
        """Write the configuration back to its file."""
        write_toml(self.file_path, self._data)

    def __contains__(self, section: str) -> bool:
        return section in self._data

    def __repr__(self) -> str:
        return f"ModuleConfig({self.file_path}, {self._data})"


class Config:
    """Host configuration rooted at a configuration directory."""

    def __init__(self, config_dir: Path):
        self.config_dir = Path(config_dir)
        self._settings: Settings | None = None

    @property
    def settings_file(self) -> Path:
        return self.config_dir / SETTINGS_FILE

    @property
    def settings(self) -> Settings:
        """Host settings, loaded on first access."""
        if self._settings is None:
            self._settings = load_settings(self.config_dir)
        return self._settings

    def module(self, name: str, file: str | None = None) -> ModuleConfig:
        """
        Get a module's configuration.

        Args:
            name: Module name
            file: Config file name without extension (default: "config")

        Returns:
            ModuleConfig instance
        """
        file_name = f"{file or DEFAULT_MODULE_CONFIG}.toml"
        return ModuleConfig(self.config_dir / "modules" / name / file_name)

    def save_enabled_modules(self, names: list[str]) -> None:
        """
        Persist the list of enabled modules into the settings file.

        Comments and unrelated settings in the file are kept.

        Args:
            names: Enabled module names
        """
        update_toml(self.settings_file, "modules", "enabled", list(names))
        self._settings = None


__all__ = ["Config", "ConfigError", "ModuleConfig", "Settings"]
