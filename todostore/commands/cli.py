"""
CLI command - Run the command-line interface tool.

This wraps the click-based CLI in todostore.cli.
"""
import argparse
import logging
from todostore.__main__ import Command

logger = logging.getLogger(__name__)


class CLICommand(Command):
    """Command to run the todostore CLI tool."""

    @classmethod
    def add_arguments(cls, parser):
        """Add CLI-specific arguments."""
        # The CLI uses click internally, so we just pass through remaining args
        parser.add_argument(
            "cli_args",
            nargs=argparse.REMAINDER,
            help="Arguments to pass to the CLI tool"
        )

    def run(self) -> int:
        """Run the CLI tool."""
        # Import here to avoid circular dependencies
        from todostore.cli import cli

        click_args = getattr(self.args, "cli_args", None) or []
        try:
            cli.main(args=click_args, prog_name="todostore cli", standalone_mode=False)
            return 0
        except SystemExit as e:
            # Commands report failures with sys.exit
            return e.code if isinstance(e.code, int) else 1
