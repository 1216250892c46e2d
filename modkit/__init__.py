"""
modkit - Module descriptors and registry for pluggable applications.

This is the main package that exports the public API.
"""

__version__ = "0.1.0"

from modkit.application import Application
from modkit.module import Capability, Module, ModuleManager, ModuleMetadata
from modkit.web import Route

__all__ = [
    "__version__",
    "Application",
    "Capability",
    "Module",
    "ModuleManager",
    "ModuleMetadata",
    "Route",
]
