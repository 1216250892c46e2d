"""
mm CLI - modkit Module Manager.

Pacman-style interface for inspecting and enabling modules.

Usage:
    mm -Q                        List installed modules
    mm -Qi <module>              Show module metadata
    mm -Qp                       List permissions and restrictions
    mm -E <module>               Enable module(s)
    mm -D <module>               Disable module(s)
"""

import argparse
import sys
from pathlib import Path

from modkit.config.settings import SettingsError
from modkit.config.toml_handler import TOMLError
from modkit.logging import configure_logging
from modkit.module import ModuleError


class MMError(Exception):
    """Base exception for mm errors."""

    pass


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser with pacman-style flags."""
    parser = argparse.ArgumentParser(
        prog="mm",
        description="modkit Module Manager - Pacman-style module manager",
        add_help=False,
    )

    # Operation flags (mutually exclusive)
    ops = parser.add_mutually_exclusive_group()
    ops.add_argument("-Q", "--query", action="store_true", help="Query modules")
    ops.add_argument("-E", "--enable", action="store_true", help="Enable module(s)")
    ops.add_argument("-D", "--disable", action="store_true", help="Disable module(s)")
    ops.add_argument("-h", "--help", action="store_true", help="Show help")

    # Query sub-flags
    parser.add_argument("-i", "--info", action="store_true", help="Show info (-Qi)")
    parser.add_argument(
        "-p", "--permissions", action="store_true", help="List permissions (-Qp)"
    )

    # Common options
    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        default=Path("config"),
        help="Configuration directory (default: ./config)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")

    # Positional arguments
    parser.add_argument("targets", nargs="*", help="Module names")

    return parser


def print_help():
    """Print help message."""
    help_text = """
mm - modkit Module Manager

Usage:
    mm -Q                        List installed modules
    mm -Qi <module>              Show module metadata
    mm -Qp                       List permissions and restrictions
    mm -E <module>               Enable module(s)
    mm -D <module>               Disable module(s)

Options:
    -c, --config DIR             Configuration directory (default: ./config)
    -v, --verbose                Verbose output
    -h, --help                   Show this help
"""
    print(help_text.strip())


def main(argv: list[str] | None = None) -> int:
    """Main entry point for mm CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    try:
        # Show help
        if args.help or not (args.query or args.enable or args.disable):
            print_help()
            return 0

        configure_logging(level="debug" if args.verbose else "warning")

        if args.query:
            # -Q: Query
            from mm.commands.query import query_command

            return query_command(args)

        elif args.enable:
            # -E: Enable
            from mm.commands.enable import enable_command

            return enable_command(args)

        elif args.disable:
            # -D: Disable
            from mm.commands.enable import disable_command

            return disable_command(args)

    except (MMError, ModuleError, SettingsError, TOMLError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nInterrupted", file=sys.stderr)
        return 130
    except Exception as e:
        print(f"Unexpected error: {e}", file=sys.stderr)
        if args.verbose:
            import traceback

            traceback.print_exc()
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
