"""
Module Metadata.

This module parses the ``module.info`` descriptor shipped with a module.

Key features:
- Line-oriented ``Key: value`` format
- Indented continuation lines for the description
- Dependency list parsing (``foo`` or ``foo (>=1.0), bar (1.2)``)
- Unknown keys kept verbatim in ``extra``
- Read-only ``depends`` and ``extra`` views
"""

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType

DEFAULT_VERSION = "0.0.0"

_KEY_LINE = re.compile(r"^(?P<key>\S.*?):(?:\s+(?P<value>.*))?$")
_DEPENDS_SEPARATOR = re.compile(r",\s+")
_DEPENDS_ENTRY = re.compile(r"^(\w+)\s+\((.+)\)$")


class MetadataError(Exception):
    """Raised when a metadata file exists but cannot be read."""

    pass


@dataclass(frozen=True)
class ModuleMetadata:
    """
    Parsed module metadata.

    Attributes:
        name: Module name
        version: Module version
        short_description: First line of the description
        description: Full description, continuation lines joined by newlines
        depends: Dependency name -> version constraint, True means any version
        extra: Unknown keys, stored verbatim
    """

    name: str
    version: str = DEFAULT_VERSION
    short_description: str = ""
    description: str = ""
    depends: Mapping[str, str | bool] = field(default_factory=lambda: MappingProxyType({}))
    extra: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))


def lcfirst(value: str) -> str:
    """Lower the first character of *value*."""
    return value[:1].lower() + value[1:]


def parse_depends(value: str, depends: dict[str, str | bool]) -> None:
    """
    Parse a ``depends`` value into *depends*.

    A value without spaces names a single dependency on any version. Anything
    else is a comma separated list of ``name (constraint)`` entries; entries
    which do not match that form are skipped.

    Args:
        value: Raw value of the depends line
        depends: Mapping to update in place
    """
    if not value:
        return

    if " " not in value:
        depends[value] = True
        return

    for part in _DEPENDS_SEPARATOR.split(value):
        match = _DEPENDS_ENTRY.match(part)
        if match is None:
            continue
        depends[match.group(1)] = match.group(2)


def parse_metadata(metadata_file: Path, name: str) -> ModuleMetadata:
    """
    Parse a module.info file.

    A missing file is not an error; it yields default metadata.

    Args:
        metadata_file: Path to the metadata file
        name: Module name, used unless the file sets its own

    Returns:
        ModuleMetadata object

    Raises:
        MetadataError: If the file exists but cannot be read
    """
    values: dict[str, str] = {"name": name, "version": DEFAULT_VERSION}
    short_description = ""
    description = ""
    depends: dict[str, str | bool] = {}
    extra: dict[str, str] = {}

    if not metadata_file.is_file():
        return ModuleMetadata(**values)

    try:
        with open(metadata_file, encoding="utf-8") as f:
            lines = f.readlines()
    except (OSError, UnicodeDecodeError) as e:
        raise MetadataError(f"Failed to read metadata file {metadata_file}: {e}") from e

    key: str | None = None
    for raw_line in lines:
        line = raw_line.rstrip()

        if not line:
            key = None
            continue

        if line[0] in " \t":
            # Only the description accepts continuation lines
            if key == "description":
                description += "\n" + line.lstrip()
            continue

        match = _KEY_LINE.match(line)
        if match is None:
            key = None
            continue

        key = lcfirst(match.group("key").strip())
        value = match.group("value") or ""

        if key == "depends":
            parse_depends(value, depends)
        elif key == "description":
            short_description = value
            description = value
        elif key == "shortDescription":
            short_description = value
        elif key in ("name", "version"):
            values[key] = value
        else:
            extra[key] = value

    return ModuleMetadata(
        name=values["name"],
        version=values["version"],
        short_description=short_description,
        description=description,
        depends=MappingProxyType(depends),
        extra=MappingProxyType(extra),
    )
