#!/usr/bin/env python3
"""
todostore - Main entry point

This module provides the Command base class and manages the command lifecycle.
"""
import argparse
import sys
import logging
from abc import ABC, abstractmethod
from typing import Optional, Dict

from todostore.config import configure_logging

logger = logging.getLogger(__name__)


class Command(ABC):
    """
    Base class for all commands.

    Commands follow a lifecycle:
    1. init() - Initialize resources, parse arguments
    2. run() - Execute the command
    3. cleanup() - Clean up resources

    Commands can declare arguments using add_arguments().
    """

    def __init__(self, args: Optional[argparse.Namespace] = None):
        """
        Initialize command with parsed arguments.

        Args:
            args: Parsed command-line arguments (None if not yet parsed)
        """
        self.args = args
        self._initialized = False
        self._cleaned_up = False

    @classmethod
    def get_name(cls) -> str:
        """Get the command name (used in CLI)."""
        # Convert class name like "ShellCommand" to "shell"
        name = cls.__name__.replace("Command", "").lower()
        return name

    @classmethod
    def get_description(cls) -> str:
        """Get command description for help text."""
        return cls.__doc__ or f"{cls.__name__} command"

    @classmethod
    def add_arguments(cls, parser: argparse.ArgumentParser) -> None:
        """
        Add command-specific arguments to the parser.

        Override this method in subclasses to add arguments.

        Args:
            parser: ArgumentParser instance for this command
        """
        pass

    def init(self) -> None:
        """
        Initialize the command.

        Called before run(). Override to set up resources, validate arguments, etc.
        """
        if self._initialized:
            return

        self._initialized = True
        logger.debug(f"Initialized {self.__class__.__name__}")

    @abstractmethod
    def run(self) -> int:
        """
        Execute the command.

        Returns:
            Exit code (0 for success, non-zero for failure)
        """
        pass

    def cleanup(self) -> None:
        """
        Clean up resources.

        Called after run() (even if run() raises an exception).
        Override to close connections, clean up files, etc.
        """
        if self._cleaned_up:
            return

        self._cleaned_up = True
        logger.debug(f"Cleaned up {self.__class__.__name__}")

    def __enter__(self):
        """Context manager entry."""
        self.init()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.cleanup()
        return False  # Don't suppress exceptions


_COMMANDS: Dict[str, type] = {}


def register_command(command_class: type) -> None:
    """Register a command class."""
    name = command_class.get_name()
    _COMMANDS[name] = command_class


def get_command(name: str) -> Optional[type]:
    """Get a registered command class by name."""
    return _COMMANDS.get(name)


def build_parser() -> argparse.ArgumentParser:
    """Register the built-in commands and build the top-level parser."""
    # Imported here to avoid circular imports (commands import Command)
    from todostore.commands.cli import CLICommand
    from todostore.commands.initialize import InitializeCommand

    register_command(CLICommand)
    register_command(InitializeCommand)

    parser = argparse.ArgumentParser(
        prog="todostore",
        description="todostore - todo storage on MySQL, PostgreSQL, MongoDB or SQLite",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Log level (default: LOG_LEVEL setting or INFO)"
    )

    subparsers = parser.add_subparsers(
        dest="command",
        help="Command to run",
        metavar="COMMAND"
    )

    # Create subparsers for each command
    for name, cmd_class in _COMMANDS.items():
        subparser = subparsers.add_parser(
            name,
            help=cmd_class.get_description(),
            description=cmd_class.get_description()
        )
        cmd_class.add_arguments(subparser)

    return parser


def main(argv: Optional[list] = None) -> int:
    """Main entry point for the todostore package."""
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(args.log_level)

    if not args.command:
        parser.print_help()
        return 1

    # Get command class
    cmd_class = get_command(args.command)
    if not cmd_class:
        print(f"Unknown command: {args.command}", file=sys.stderr)
        return 1

    # Create and run command
    try:
        cmd = cmd_class(args)
        with cmd:
            exit_code = cmd.run()
            return exit_code
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    except Exception as e:
        logger.exception(f"Command failed: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
