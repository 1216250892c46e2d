"""
Front Controller.

Keeps track of the controller directories contributed by modules and owns the
router.
"""

from pathlib import Path

from modkit.web.router import Router

# Controller directory key of the host application itself
DEFAULT_MODULE = "default"


class FrontController:
    """Dispatch layer: controller directories per module plus the router."""

    def __init__(self, router: Router | None = None):
        self._router = router or Router()
        self._controller_dirs: dict[str, Path] = {}

    def add_controller_directory(
        self, directory: Path, module: str = DEFAULT_MODULE
    ) -> "FrontController":
        """
        Register the controller directory of a module.

        Args:
            directory: Directory containing the controllers
            module: Module namespace the controllers are dispatched under

        Returns:
            self
        """
        self._controller_dirs[module] = Path(directory)
        return self

    def get_controller_directory(self, module: str = DEFAULT_MODULE) -> Path | None:
        return self._controller_dirs.get(module)

    def get_controller_directories(self) -> dict[str, Path]:
        return dict(self._controller_dirs)

    def get_router(self) -> Router:
        return self._router
