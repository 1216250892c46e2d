"""
modkit Module System - Module descriptors and their lifecycle.

This package handles:
- module.info metadata parsing
- Configuration and run script execution
- Permission/restriction declarations
- Web integration (controllers, locales, routes) and autoloading
- Module discovery and loading
"""

from modkit.module.manager import ModuleManager, ModuleState, ProgrammingError
from modkit.module.metadata import MetadataError, ModuleMetadata, parse_metadata
from modkit.module.module import (
    Capability,
    DuplicateCapabilityError,
    Module,
    ModuleError,
)

__all__ = [
    "Capability",
    "DuplicateCapabilityError",
    "MetadataError",
    "Module",
    "ModuleError",
    "ModuleManager",
    "ModuleMetadata",
    "ModuleState",
    "ProgrammingError",
    "parse_metadata",
]
