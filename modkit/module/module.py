"""
Module Descriptor.

This module provides the in-memory descriptor of one installed module.

Key features:
- Filesystem layout derived once from the base directory
- Lazily parsed, cached metadata
- One-shot configuration script declaring permissions, restrictions and routes
- Registration of autoloader namespaces, controllers, locales and routes
- Fail-soft run script execution
"""

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import TYPE_CHECKING

from modkit import hooks, i18n
from modkit.logging import get_logger
from modkit.module.metadata import ModuleMetadata, parse_metadata
from modkit.module.scripts import include_script
from modkit.web.router import Route

if TYPE_CHECKING:
    from modkit.application import Application
    from modkit.config import ModuleConfig

log = get_logger(__name__)

# Root namespace module libraries are registered under
NAMESPACE_PREFIX = "modkit_modules"

# Controller serving module assets for the implicit routes
STATIC_CONTROLLER = "static"


class ModuleError(Exception):
    """Base exception for module-related errors."""

    pass


class DuplicateCapabilityError(ModuleError):
    """Raised when a permission or restriction is provided twice."""

    pass


@dataclass(frozen=True)
class Capability:
    """
    A named permission or restriction a module understands.

    Attributes:
        name: Unique capability name
        description: Human-readable description
    """

    name: str
    description: str


def ucfirst(value: str) -> str:
    return value[:1].upper() + value[1:]


class Module:
    """
    Descriptor of one module.

    Configuration scripts use the ``provide_*``, ``add_route`` and
    ``register_hook`` methods on the descriptor bound to their ``module``
    global.
    """

    def __init__(self, app: "Application", name: str, base_dir: Path):
        """
        Initialize Module.

        Args:
            app: Host application
            name: Module name
            base_dir: Module base directory
        """
        base_dir = Path(base_dir)

        self._app = app
        self._name = name
        self._base_dir = base_dir
        self._css_dir = base_dir / "public" / "css"
        self._js_dir = base_dir / "public" / "js"
        self._lib_dir = base_dir / "library"
        self._config_dir = base_dir / "config"
        self._locale_dir = base_dir / "application" / "locale"
        self._form_dir = base_dir / "application" / "forms"
        self._controller_dir = base_dir / "application" / "controllers"
        self._run_script = base_dir / "run.py"
        self._config_script = base_dir / "configuration.py"
        self._metadata_file = base_dir / "module.info"

        self._metadata: ModuleMetadata | None = None
        self._tried_to_launch_config_script = False
        self._permissions: dict[str, Capability] = {}
        self._restrictions: dict[str, Capability] = {}
        self._routes: dict[str, Route] = {}

    def __repr__(self) -> str:
        return f"Module({self._name!r}, {str(self._base_dir)!r})"

    def register(self) -> bool:
        """
        Register the module with the host application.

        Binds autoloader namespaces, adds web integration and launches the run
        script. A failing run script is logged and reported, never raised.

        Returns:
            True on success, False if the run script raised
        """
        self.register_autoloader().register_web_integration()
        try:
            self.launch_run_script()
        except Exception as e:
            log.warning(
                "run_script_failed",
                module=self._name,
                script=str(self._run_script),
                error=str(e),
            )
            return False
        return True

    # Layout

    @property
    def name(self) -> str:
        return self._name

    @property
    def base_dir(self) -> Path:
        return self._base_dir

    @property
    def css_dir(self) -> Path:
        return self._css_dir

    @property
    def js_dir(self) -> Path:
        return self._js_dir

    @property
    def lib_dir(self) -> Path:
        return self._lib_dir

    @property
    def config_dir(self) -> Path:
        return self._config_dir

    @property
    def locale_dir(self) -> Path:
        return self._locale_dir

    @property
    def form_dir(self) -> Path:
        return self._form_dir

    @property
    def controller_dir(self) -> Path:
        return self._controller_dir

    @property
    def run_script(self) -> Path:
        return self._run_script

    @property
    def config_script(self) -> Path:
        return self._config_script

    @property
    def metadata_file(self) -> Path:
        return self._metadata_file

    @property
    def css_filename(self) -> Path:
        return self._css_dir / "module.less"

    @property
    def js_filename(self) -> Path:
        return self._js_dir / "module.js"

    def has_css(self) -> bool:
        return self.css_filename.exists()

    def has_js(self) -> bool:
        return self.js_filename.exists()

    # Metadata

    def metadata(self) -> ModuleMetadata:
        """
        Get the module metadata, parsing module.info on first access.

        Returns:
            ModuleMetadata object
        """
        if self._metadata is None:
            self._metadata = parse_metadata(self._metadata_file, self._name)
        return self._metadata

    @property
    def version(self) -> str:
        return self.metadata().version

    @property
    def short_description(self) -> str:
        return self.metadata().short_description

    @property
    def description(self) -> str:
        return self.metadata().description

    @property
    def dependencies(self) -> Mapping[str, str | bool]:
        return self.metadata().depends

    def get_config(self, file: str | None = None) -> "ModuleConfig":
        """
        Get this module's configuration from the host config.

        Args:
            file: Config file name without extension (default: "config")
        """
        return self._app.get_config().module(self._name, file)

    # Permissions and restrictions

    def get_provided_permissions(self) -> MappingProxyType:
        """Get the permissions this module provides, name -> Capability."""
        self.launch_config_script()
        return MappingProxyType(self._permissions)

    def get_provided_restrictions(self) -> MappingProxyType:
        """Get the restrictions this module provides, name -> Capability."""
        self.launch_config_script()
        return MappingProxyType(self._restrictions)

    def provides_permission(self, name: str) -> bool:
        self.launch_config_script()
        return name in self._permissions

    def provides_restriction(self, name: str) -> bool:
        self.launch_config_script()
        return name in self._restrictions

    def provide_permission(self, name: str, description: str) -> "Module":
        """
        Provide a named permission.

        Args:
            name: Unique permission name
            description: Permission description

        Returns:
            self

        Raises:
            DuplicateCapabilityError: If the permission is already provided
        """
        if self.provides_permission(name):
            raise DuplicateCapabilityError(f'Cannot provide permission "{name}" twice')
        self._permissions[name] = Capability(name=name, description=description)
        return self

    def provide_restriction(self, name: str, description: str) -> "Module":
        """
        Provide a named restriction.

        Args:
            name: Unique restriction name
            description: Restriction description

        Returns:
            self

        Raises:
            DuplicateCapabilityError: If the restriction is already provided
        """
        if self.provides_restriction(name):
            raise DuplicateCapabilityError(f'Cannot provide restriction "{name}" twice')
        self._restrictions[name] = Capability(name=name, description=description)
        return self

    # Registration

    def register_autoloader(self) -> "Module":
        """
        Register the module library and forms with the class loader.

        Returns:
            self
        """
        module_name = ucfirst(self._name)
        module_library_dir = self._lib_dir / module_name
        if (
            self._base_dir.is_dir()
            and self._lib_dir.is_dir()
            and module_library_dir.is_dir()
        ):
            namespace = f"{NAMESPACE_PREFIX}.{module_name}"
            loader = self._app.get_loader()
            loader.register_namespace(namespace, module_library_dir)
            if self._form_dir.is_dir():
                loader.register_namespace(f"{namespace}.Form", self._form_dir)
        return self

    def register_locales(self) -> "Module":
        """Bind the module's translation domain if it ships a locale directory."""
        if self._locale_dir.is_dir():
            i18n.register_domain(self._name, self._locale_dir)
        return self

    def register_web_integration(self) -> "Module":
        """
        Add controllers, locales and routes to the host's web layer.

        Does nothing unless the host runs in web mode.

        Returns:
            self
        """
        if not self._app.is_web():
            return self

        if self._controller_dir.is_dir():
            self._app.get_front_controller().add_controller_directory(
                self._controller_dir, self._name
            )

        self.register_locales().register_routes()
        return self

    def register_routes(self) -> "Module":
        """
        Add routes from add_route() plus the static asset routes to the router.

        Returns:
            self
        """
        router = self._app.get_front_controller().get_router()
        for name, route in self._routes.items():
            router.add_route(name, route)
        router.add_route(
            f"{self._name}_jsprovider",
            Route(
                f"js/{self._name}/:file",
                {
                    "controller": STATIC_CONTROLLER,
                    "action": "javascript",
                    "module_name": self._name,
                },
            ),
        )
        router.add_route(
            f"{self._name}_img",
            Route(
                f"img/{self._name}/:file",
                {
                    "controller": STATIC_CONTROLLER,
                    "action": "img",
                    "module_name": self._name,
                },
            ),
        )
        return self

    def add_route(self, name: str, route: Route) -> "Module":
        """
        Add a route which is added to the router on registration.

        Args:
            name: Route name
            route: Route instance

        Returns:
            self
        """
        self._routes[name] = route
        return self

    @property
    def routes(self) -> dict[str, Route]:
        return dict(self._routes)

    def register_hook(
        self, name: str, implementation: type | str, key: str | None = None
    ) -> "Module":
        """
        Register a hook implementation.

        Args:
            name: Hook name
            implementation: Class or ``package.module:Class`` path
            key: Implementation key, defaults to the module name

        Returns:
            self
        """
        hooks.register(name, self._name if key is None else key, implementation)
        return self

    # Scripts

    def launch_run_script(self) -> "Module":
        """Run the module's run script, if any."""
        include_script(self._run_script, self, "run")
        return self

    def launch_config_script(self) -> None:
        """Run the module's configuration script, at most once."""
        if self._tried_to_launch_config_script:
            return
        self._tried_to_launch_config_script = True
        include_script(self._config_script, self, "configure")
