"""
Module Script Execution.

This module runs the optional Python scripts shipped with a module
(``run.py`` and ``configuration.py``).

Key features:
- importlib integration for executing script files
- The module descriptor is bound to the global name ``module``
- Optional entry point function called with the descriptor
- Missing or unreadable scripts are skipped
"""

import importlib.util
import os
from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from modkit.module.module import Module

# Global name under which scripts see their module descriptor
SCRIPT_MODULE_GLOBAL = "module"


class ScriptError(Exception):
    """Raised when a script file cannot be prepared for execution."""

    pass


def is_script_readable(script: Path) -> bool:
    """
    Check whether *script* exists and can be read.

    Args:
        script: Script file path

    Returns:
        True if the script can be executed
    """
    return script.is_file() and os.access(script, os.R_OK)


def include_script(
    script: Path, module: "Module", entry_point: str | None = None
) -> bool:
    """
    Execute a module script if it is readable.

    The script body runs in a fresh namespace on every call. Exceptions raised
    by the script propagate unchanged to the caller.

    Args:
        script: Script file path
        module: Descriptor of the module the script belongs to
        entry_point: Name of an optional function the script may define;
            it is called with the descriptor after the body ran

    Returns:
        True if the script was executed, False if it was skipped

    Raises:
        ScriptError: If no loader can be created for the script
    """
    if not is_script_readable(script):
        return False

    script_name = f"modkit_script_{module.name}_{script.stem}"
    spec = importlib.util.spec_from_file_location(script_name, script)
    if spec is None or spec.loader is None:
        raise ScriptError(f"Failed to create module spec for {script}")

    namespace = importlib.util.module_from_spec(spec)
    setattr(namespace, SCRIPT_MODULE_GLOBAL, module)
    spec.loader.exec_module(namespace)

    if entry_point is not None:
        hook: Any = getattr(namespace, entry_point, None)
        if callable(hook):
            hook(module)

    return True
