"""
Capability Hooks.

This module provides the hook registry modules use to plug implementations
into named extension points of the host.

Key features:
- Hooks keyed by name, implementations keyed by provider (usually a module)
- Implementations given as classes or ``package.module:Class`` strings
- Lazy instantiation, one instance per implementation
"""

import importlib
from typing import Any


class HookError(Exception):
    """Base exception for hook-related errors."""

    pass


# Global registry: hook name -> key -> implementation
_hooks: dict[str, dict[str, type | str]] = {}

# Instantiated implementations: hook name -> key -> instance
_instances: dict[str, dict[str, Any]] = {}


def register(name: str, key: str, implementation: type | str) -> None:
    """
    Register an implementation for a hook.

    Registering the same key twice replaces the previous implementation.

    Args:
        name: Hook name
        key: Implementation key, usually the module name
        implementation: Class, or dotted ``module:Class`` path
    """
    _hooks.setdefault(name, {})[key] = implementation
    _instances.get(name, {}).pop(key, None)


def has(name: str) -> bool:
    """Check whether any implementation is registered for *name*."""
    return bool(_hooks.get(name))


def _resolve(implementation: type | str) -> type:
    if not isinstance(implementation, str):
        return implementation

    module_path, _, class_name = implementation.partition(":")
    if not module_path or not class_name:
        raise HookError(
            f"Invalid hook implementation: {implementation}. "
            f"Expected format: 'package.module:Class'"
        )
    try:
        module = importlib.import_module(module_path)
        return getattr(module, class_name)
    except (ImportError, AttributeError) as e:
        raise HookError(f"Failed to import hook implementation {implementation}: {e}") from e


def get(name: str, key: str) -> Any:
    """
    Get the instance registered for *name* under *key*.

    Args:
        name: Hook name
        key: Implementation key

    Returns:
        Hook instance

    Raises:
        HookError: If nothing is registered or instantiation fails
    """
    implementations = _hooks.get(name, {})
    if key not in implementations:
        raise HookError(f"No implementation '{key}' registered for hook {name}")

    instances = _instances.setdefault(name, {})
    if key not in instances:
        cls = _resolve(implementations[key])
        try:
            instances[key] = cls()
        except Exception as e:
            raise HookError(f"Failed to instantiate hook {name}/{key}: {e}") from e
    return instances[key]


def all(name: str) -> dict[str, Any]:
    """
    Get all instances registered for *name*.

    Returns:
        Dict of key -> instance, in registration order
    """
    return {key: get(name, key) for key in _hooks.get(name, {})}


def first(name: str) -> Any | None:
    """Get the first registered instance for *name*, or None."""
    for key in _hooks.get(name, {}):
        return get(name, key)
    return None


def clear() -> None:
    """Remove all registered hooks."""
    _hooks.clear()
    _instances.clear()
