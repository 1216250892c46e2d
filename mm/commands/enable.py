"""
mm enable/disable commands (-E, -D).

Persist the set of enabled modules in modkit.toml.
"""

import sys
from typing import Any

from modkit.application import Application


def enable_command(args: Any) -> int:
    """
    Execute enable command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    if not args.targets:
        print("Error: No targets specified", file=sys.stderr)
        print("Usage: mm -E <module>", file=sys.stderr)
        return 1

    app = Application(args.config, web=False)
    manager = app.get_module_manager()

    for name in args.targets:
        manager.enable_module(name)
        if args.verbose:
            print(f"Enabled {name}")

    app.get_config().save_enabled_modules(manager.list_enabled_modules())
    return 0


def disable_command(args: Any) -> int:
    """Execute disable command."""
    if not args.targets:
        print("Error: No targets specified", file=sys.stderr)
        print("Usage: mm -D <module>", file=sys.stderr)
        return 1

    app = Application(args.config, web=False)
    manager = app.get_module_manager()

    for name in args.targets:
        manager.disable_module(name)
        if args.verbose:
            print(f"Disabled {name}")

    app.get_config().save_enabled_modules(manager.list_enabled_modules())
    return 0
