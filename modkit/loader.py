"""
Namespace Class Loader.

This module maps Python namespaces onto module library directories.

Key features:
- Namespace -> directory registration
- Longest-prefix resolution of dotted names to files
- importlib meta path finder, so registered namespaces are importable
- Parent namespaces of registered ones become namespace packages
"""

import importlib.machinery
import importlib.util
import sys
from pathlib import Path


class LoaderError(Exception):
    """Base exception for loader-related errors."""

    pass


class ClassLoader:
    """
    Namespace to directory mapping, usable as a ``sys.meta_path`` finder.

    Example:
        loader = ClassLoader()
        loader.register_namespace("modkit_modules.Monitoring", lib_dir)
        loader.install()
        import modkit_modules.Monitoring.backend
    """

    def __init__(self):
        self._namespaces: dict[str, Path] = {}

    def register_namespace(self, namespace: str, directory: Path) -> "ClassLoader":
        """
        Register a directory for a namespace.

        Args:
            namespace: Dotted namespace, e.g. ``modkit_modules.Monitoring``
            directory: Directory holding the namespace's modules

        Returns:
            self

        Raises:
            LoaderError: If the namespace is not a dotted identifier
        """
        if not all(part.isidentifier() for part in namespace.split(".")):
            raise LoaderError(f"Invalid namespace: {namespace}")
        self._namespaces[namespace] = Path(directory)
        return self

    def has_namespace(self, namespace: str) -> bool:
        return namespace in self._namespaces

    def get_namespace_dir(self, namespace: str) -> Path | None:
        return self._namespaces.get(namespace)

    @property
    def namespaces(self) -> dict[str, Path]:
        return dict(self._namespaces)

    def _longest_namespace(self, fullname: str) -> str | None:
        best = None
        for namespace in self._namespaces:
            if fullname == namespace or fullname.startswith(namespace + "."):
                if best is None or len(namespace) > len(best):
                    best = namespace
        return best

    def _is_parent_namespace(self, fullname: str) -> bool:
        prefix = fullname + "."
        return any(namespace.startswith(prefix) for namespace in self._namespaces)

    def resolve(self, fullname: str) -> Path | None:
        """
        Resolve a dotted name to a file or package directory.

        Args:
            fullname: Dotted module name

        Returns:
            Path of the ``.py`` file or package directory, or None
        """
        namespace = self._longest_namespace(fullname)
        if namespace is None:
            return None

        base = self._namespaces[namespace]
        relative = fullname[len(namespace) :].lstrip(".")
        if not relative:
            return base if base.is_dir() else None

        target = base.joinpath(*relative.split("."))
        if target.is_dir():
            return target
        source = target.with_suffix(".py")
        if source.is_file():
            return source
        return None

    # importlib finder protocol

    def find_spec(self, fullname, path=None, target=None):
        resolved = self.resolve(fullname)

        if resolved is None:
            if self._is_parent_namespace(fullname):
                return importlib.machinery.ModuleSpec(fullname, None, is_package=True)
            return None

        if resolved.is_file():
            return importlib.util.spec_from_file_location(fullname, resolved)

        init_file = resolved / "__init__.py"
        if init_file.is_file():
            return importlib.util.spec_from_file_location(
                fullname, init_file, submodule_search_locations=[str(resolved)]
            )

        spec = importlib.machinery.ModuleSpec(fullname, None, is_package=True)
        spec.submodule_search_locations.append(str(resolved))
        return spec

    def invalidate_caches(self) -> None:
        pass

    def install(self) -> "ClassLoader":
        """Insert this loader at the front of ``sys.meta_path``."""
        if self not in sys.meta_path:
            sys.meta_path.insert(0, self)
        return self

    def uninstall(self) -> "ClassLoader":
        """Remove this loader from ``sys.meta_path``."""
        if self in sys.meta_path:
            sys.meta_path.remove(self)
        return self
