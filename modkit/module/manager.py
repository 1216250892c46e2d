"""
Module Manager.

This module provides discovery and loading of modules.

Key features:
- Module discovery across several search paths (first path wins)
- Enabled/loaded/failed state tracking
- Fail-soft loading: one failing module never stops the others
- Merged permission and restriction listings for the authorization layer
"""

import re
from collections.abc import Mapping
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING

from modkit.logging import get_logger
from modkit.module.module import Capability, Module, ModuleError

if TYPE_CHECKING:
    from modkit.application import Application

log = get_logger(__name__)

_MODULE_NAME = re.compile(r"^[A-Za-z0-9_]+$")


class ProgrammingError(ModuleError):
    """Raised when a module is used before it has been loaded."""

    pass


class ModuleState(Enum):
    """Module state enumeration."""

    INSTALLED = "installed"
    LOADED = "loaded"
    FAILED = "failed"


class ModuleManager:
    """
    Module lifecycle manager.

    Discovers module directories, keeps track of enabled modules and loads
    them by creating and registering their descriptors.
    """

    def __init__(
        self,
        app: "Application",
        module_paths: list[Path],
        enabled: list[str] | None = None,
    ):
        """
        Initialize ModuleManager.

        Args:
            app: Host application passed to every descriptor
            module_paths: Directories containing module directories
            enabled: Names of enabled modules
        """
        self._app = app
        self.module_paths = [Path(path) for path in module_paths]
        self._enabled: list[str] = list(enabled or [])
        self._installed: dict[str, Path] | None = None
        self._loaded: dict[str, Module] = {}
        self._failed: dict[str, Module] = {}

    def list_installed_modules(self) -> list[str]:
        """
        Discover installed modules.

        Returns:
            Sorted list of installed module names
        """
        if self._installed is None:
            installed: dict[str, Path] = {}
            for module_path in self.module_paths:
                if not module_path.is_dir():
                    log.debug("module_path_missing", path=str(module_path))
                    continue
                for module_dir in sorted(module_path.iterdir()):
                    if not module_dir.is_dir():
                        continue
                    name = module_dir.name
                    if not _MODULE_NAME.match(name):
                        log.debug("module_name_invalid", path=str(module_dir))
                        continue
                    if name in installed:
                        log.debug(
                            "module_shadowed",
                            module=name,
                            path=str(module_dir),
                            used=str(installed[name]),
                        )
                        continue
                    installed[name] = module_dir
            self._installed = installed
        return sorted(self._installed)

    def rescan(self) -> list[str]:
        """Forget discovered modules and scan the search paths again."""
        self._installed = None
        return self.list_installed_modules()

    def get_module_dir(self, name: str) -> Path:
        """
        Get the base directory of an installed module.

        Raises:
            ModuleError: If the module is not installed
        """
        self.list_installed_modules()
        if name not in self._installed:
            raise ModuleError(f"Module not installed: {name}")
        return self._installed[name]

    def has_installed(self, name: str) -> bool:
        return name in self.list_installed_modules()

    def has_enabled(self, name: str) -> bool:
        return name in self._enabled

    def has_loaded(self, name: str) -> bool:
        return name in self._loaded

    def list_enabled_modules(self) -> list[str]:
        return list(self._enabled)

    def list_loaded_modules(self) -> list[str]:
        return list(self._loaded)

    @property
    def failed_modules(self) -> list[str]:
        return list(self._failed)

    def get_state(self, name: str) -> ModuleState:
        """
        Get the state of an installed module.

        Raises:
            ModuleError: If the module is not installed
        """
        self.get_module_dir(name)
        if name in self._loaded:
            return ModuleState.LOADED
        if name in self._failed:
            return ModuleState.FAILED
        return ModuleState.INSTALLED

    def enable_module(self, name: str) -> None:
        """
        Enable an installed module.

        Raises:
            ModuleError: If the module is not installed
        """
        if not self.has_installed(name):
            raise ModuleError(f"Cannot enable module {name}: not installed")
        if name not in self._enabled:
            self._enabled.append(name)

    def disable_module(self, name: str) -> None:
        if name in self._enabled:
            self._enabled.remove(name)

    def get_descriptor(self, name: str) -> Module:
        """
        Get a descriptor for an installed module without registering it.

        Loaded modules return their registered descriptor.

        Raises:
            ModuleError: If the module is not installed
        """
        if name in self._loaded:
            return self._loaded[name]
        return Module(self._app, name, self.get_module_dir(name))

    def load_module(self, name: str) -> Module:
        """
        Load a module: create its descriptor and register it.

        A failing registration is logged and recorded in failed_modules.

        Args:
            name: Module name

        Returns:
            The module descriptor

        Raises:
            ModuleError: If the module is not installed
        """
        if name in self._loaded:
            return self._loaded[name]

        module = Module(self._app, name, self.get_module_dir(name))
        if module.register():
            self._loaded[name] = module
            self._failed.pop(name, None)
            log.info("module_loaded", module=name, version=module.version)
        else:
            self._failed[name] = module
            log.error("module_load_failed", module=name)
        return module

    def load_enabled_modules(self) -> list[str]:
        """
        Load all enabled modules.

        Modules which are not installed or fail to register are skipped.

        Returns:
            Names of the modules loaded by this call
        """
        loaded = []
        for name in self._enabled:
            if name in self._loaded:
                continue
            if not self.has_installed(name):
                log.warning("enabled_module_missing", module=name)
                continue
            self.load_module(name)
            if name in self._loaded:
                loaded.append(name)
        return loaded

    def get_module(self, name: str, autoload: bool = False) -> Module:
        """
        Get a loaded module.

        Args:
            name: Module name
            autoload: Load the module if it is enabled but not loaded yet

        Returns:
            The module descriptor

        Raises:
            ProgrammingError: If the module is not loaded
        """
        if name not in self._loaded and autoload and self.has_enabled(name):
            self.load_module(name)
        if name not in self._loaded:
            raise ProgrammingError(f"Cannot access module {name}: not loaded")
        return self._loaded[name]

    def get_permissions(self) -> dict[str, Capability]:
        """
        Get all permissions provided by loaded modules.

        Modules whose configuration script fails are logged and skipped.
        """
        permissions: dict[str, Capability] = {}
        for module in self._loaded.values():
            permissions.update(self._provided(module, "permissions"))
        return permissions

    def get_restrictions(self) -> dict[str, Capability]:
        """Get all restrictions provided by loaded modules, skipping failing ones."""
        restrictions: dict[str, Capability] = {}
        for module in self._loaded.values():
            restrictions.update(self._provided(module, "restrictions"))
        return restrictions

    def _provided(self, module: Module, kind: str) -> Mapping[str, Capability]:
        try:
            if kind == "permissions":
                return module.get_provided_permissions()
            return module.get_provided_restrictions()
        except Exception as e:
            log.warning(
                "config_script_failed",
                module=module.name,
                script=str(module.config_script),
                error=str(e),
            )
            return {}
