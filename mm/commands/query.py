"""
mm query command (-Q).

List modules, show module metadata and declared permissions.
"""

import sys
from typing import Any

from modkit.application import Application
from modkit.module import Module


def query_command(args: Any) -> int:
    """
    Execute query command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    app = Application(args.config, web=False)

    if args.info:
        if not args.targets:
            print("Error: No targets specified", file=sys.stderr)
            print("Usage: mm -Qi <module>", file=sys.stderr)
            return 1
        return query_info(app, args.targets)

    if args.permissions:
        return query_permissions(app, args.targets)

    return query_list(app)


def query_list(app: Application) -> int:
    """Print installed modules with their state."""
    manager = app.get_module_manager()
    for name in manager.list_installed_modules():
        module = manager.get_descriptor(name)
        state = "enabled" if manager.has_enabled(name) else "disabled"
        print(f"{name} {module.version} [{state}]")
    return 0


def format_info(module: Module) -> str:
    """Render module metadata as text."""
    depends = ", ".join(
        name if constraint is True else f"{name} ({constraint})"
        for name, constraint in module.dependencies.items()
    )
    lines = [
        f"Name            : {module.name}",
        f"Version         : {module.version}",
        f"Description     : {module.short_description}",
        f"Depends On      : {depends or 'None'}",
        f"Path            : {module.base_dir}",
    ]
    extra_lines = module.description.split("\n")[1:]
    if extra_lines:
        lines.append("")
        lines.extend(f"    {line}" for line in extra_lines)
    return "\n".join(lines)


def query_info(app: Application, targets: list[str]) -> int:
    """Print metadata of the given modules."""
    manager = app.get_module_manager()
    status = 0
    for name in targets:
        if not manager.has_installed(name):
            print(f"Error: Module not installed: {name}", file=sys.stderr)
            status = 1
            continue
        print(format_info(manager.get_descriptor(name)))
        print()
    return status


def query_permissions(app: Application, targets: list[str]) -> int:
    """Print permissions and restrictions of the given or enabled modules."""
    manager = app.get_module_manager()
    names = targets or manager.list_enabled_modules()
    status = 0
    for name in names:
        if not manager.has_installed(name):
            print(f"Error: Module not installed: {name}", file=sys.stderr)
            status = 1
            continue
        module = manager.get_descriptor(name)
        for capability in module.get_provided_permissions().values():
            print(f"{name} permission {capability.name}: {capability.description}")
        for capability in module.get_provided_restrictions().values():
            print(f"{name} restriction {capability.name}: {capability.description}")
    return status
