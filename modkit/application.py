"""
Host Application.

Owns the collaborators modules integrate with: configuration, class loader,
front controller (web mode only) and the module manager.
"""

from pathlib import Path

from modkit.config import Config
from modkit.loader import ClassLoader
from modkit.logging import get_logger
from modkit.module.manager import ModuleManager
from modkit.web.controller import FrontController

log = get_logger(__name__)


class ApplicationError(Exception):
    """Base exception for application errors."""

    pass


class Application:
    """
    Minimal host application for modules.

    Example:
        app = Application(Path("config")).bootstrap()
        app.get_module_manager().get_module("monitoring")
    """

    def __init__(self, config_dir: Path, web: bool | None = None):
        """
        Initialize Application.

        Args:
            config_dir: Configuration directory holding modkit.toml
            web: Force web mode on or off, defaults to the web.enabled setting
        """
        self._config = Config(config_dir)
        settings = self._config.settings
        self._web = settings.web if web is None else web
        self._loader = ClassLoader()
        self._front_controller = FrontController() if self._web else None
        self._module_manager = ModuleManager(
            self, settings.module_paths, settings.enabled_modules
        )

    def is_web(self) -> bool:
        return self._web

    def get_config(self) -> Config:
        return self._config

    def get_loader(self) -> ClassLoader:
        return self._loader

    def get_front_controller(self) -> FrontController:
        """
        Get the front controller.

        Raises:
            ApplicationError: If the application does not run in web mode
        """
        if self._front_controller is None:
            raise ApplicationError("Front controller is only available in web mode")
        return self._front_controller

    def get_module_manager(self) -> ModuleManager:
        return self._module_manager

    def bootstrap(self) -> "Application":
        """
        Install the class loader and load all enabled modules.

        Returns:
            self
        """
        self._loader.install()
        loaded = self._module_manager.load_enabled_modules()
        log.info(
            "application_bootstrapped",
            web=self._web,
            loaded=loaded,
            failed=self._module_manager.failed_modules,
        )
        return self
