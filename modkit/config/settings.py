"""
Application Settings.

This module declares and validates the host settings read from
``modkit.toml``.

Key features:
- Typed setting fields with defaults and allowed choices
- Validation per section with readable error messages
- Relative module paths resolved against the config directory
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from modkit.config.toml_handler import read_toml

SETTINGS_FILE = "modkit.toml"

LOG_LEVELS = ["debug", "info", "warning", "error", "critical"]
LOG_FORMATS = ["console", "json"]


class SettingsError(Exception):
    """Raised when settings fail validation."""

    pass


@dataclass
class SettingField:
    """
    A typed setting with a default value.

    Attributes:
        type_: Expected type of the value
        default: Value used when the setting is absent
        description: Human-readable description
        choices: Allowed values (optional)
        item_type: Expected type of list items (optional)
    """

    type_: type
    default: Any
    description: str = ""
    choices: list[Any] | None = None
    item_type: type | None = None

    def validate(self, name: str, value: Any) -> None:
        """
        Validate a value for this field.

        Args:
            name: Dotted setting name, used in error messages
            value: The value to validate

        Raises:
            SettingsError: If validation fails
        """
        if not isinstance(value, self.type_):
            raise SettingsError(
                f"Setting '{name}': expected {self.type_.__name__}, "
                f"got {type(value).__name__}"
            )
        if self.choices is not None and value not in self.choices:
            raise SettingsError(
                f"Setting '{name}': {value!r} not in allowed choices {self.choices}"
            )
        if self.item_type is not None:
            for item in value:
                if not isinstance(item, self.item_type):
                    raise SettingsError(
                        f"Setting '{name}': items must be {self.item_type.__name__}, "
                        f"got {item!r}"
                    )


SCHEMA: dict[str, dict[str, SettingField]] = {
    "modules": {
        "paths": SettingField(list, ["modules"], "Module search paths", item_type=str),
        "enabled": SettingField(list, [], "Enabled module names", item_type=str),
    },
    "web": {
        "enabled": SettingField(bool, False, "Run with web integration"),
    },
    "logging": {
        "level": SettingField(str, "info", "Log level", choices=LOG_LEVELS),
        "format": SettingField(str, "console", "Log output format", choices=LOG_FORMATS),
    },
}


@dataclass
class Settings:
    """
    Validated host settings.

    Attributes:
        module_paths: Directories searched for modules, in priority order
        enabled_modules: Names of enabled modules
        web: Whether web integration is active
        log_level: Log level name
        log_format: Log output format
    """

    module_paths: list[Path] = field(default_factory=list)
    enabled_modules: list[str] = field(default_factory=list)
    web: bool = False
    log_level: str = "info"
    log_format: str = "console"


def validate_settings(data: dict[str, Any]) -> dict[str, dict[str, Any]]:
    """
    Validate raw settings against the schema and fill in defaults.

    Unknown sections are ignored; unknown keys in known sections are errors.

    Args:
        data: Parsed TOML data

    Returns:
        Section -> key -> value, with defaults for absent keys

    Raises:
        SettingsError: If validation fails
    """
    result: dict[str, dict[str, Any]] = {}
    for section, fields in SCHEMA.items():
        raw = data.get(section, {})
        if not isinstance(raw, dict):
            raise SettingsError(f"Section '{section}' must be a table")

        for key in raw:
            if key not in fields:
                raise SettingsError(f"Unknown setting: {section}.{key}")

        values = {}
        for key, setting in fields.items():
            if key in raw:
                setting.validate(f"{section}.{key}", raw[key])
                values[key] = raw[key]
            elif isinstance(setting.default, list):
                values[key] = list(setting.default)
            else:
                values[key] = setting.default
        result[section] = values
    return result


def load_settings(config_dir: Path) -> Settings:
    """
    Load settings from ``<config_dir>/modkit.toml``.

    A missing file yields default settings.

    Args:
        config_dir: Configuration directory

    Returns:
        Settings object

    Raises:
        SettingsError: If the file is invalid
        TOMLError: If the file cannot be parsed
    """
    settings_file = config_dir / SETTINGS_FILE
    data = read_toml(settings_file) if settings_file.exists() else {}
    values = validate_settings(data)

    module_paths = []
    for path in values["modules"]["paths"]:
        module_path = Path(path)
        if not module_path.is_absolute():
            module_path = config_dir / module_path
        module_paths.append(module_path)

    return Settings(
        module_paths=module_paths,
        enabled_modules=list(values["modules"]["enabled"]),
        web=values["web"]["enabled"],
        log_level=values["logging"]["level"],
        log_format=values["logging"]["format"],
    )
