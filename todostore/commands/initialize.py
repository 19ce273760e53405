"""
Initialize command - Create the todo table/collection without doing anything else.
"""
import logging
from todostore.__main__ import Command
from todostore.config import get_settings
from todostore.exceptions import TodoStoreError
from todostore.storage import EngineFactory, build_engine

logger = logging.getLogger(__name__)


class InitializeCommand(Command):
    """Command to bootstrap the storage backend and validate that it is usable."""

    @classmethod
    def get_name(cls) -> str:
        """Override to return 'init' instead of 'initialize'."""
        return "init"

    @classmethod
    def get_description(cls) -> str:
        """Get command description."""
        return "Create the todo table or collection on the chosen backend and validate it"

    @classmethod
    def add_arguments(cls, parser):
        """Add initialize-specific arguments."""
        parser.add_argument(
            "--backend",
            type=str,
            default=None,
            choices=EngineFactory.supported_tags(),
            help="Storage backend (overrides STORAGE_BACKEND)"
        )

    def init(self):
        """Initialize the initialize command."""
        super().init()
        self.engine = None
        self.backend = self.args.backend or get_settings().storage_backend
        logger.info(f"Storage backend: {self.backend}")

    def run(self) -> int:
        """Run storage initialization."""
        try:
            # Building the engine creates the table/collection if needed
            self.engine = build_engine(self.backend, get_settings())
            todos = self.engine.retrieve_all()
        except TodoStoreError as e:
            logger.error(f"Initialization failed: {e.message}", exc_info=True)
            return 1

        logger.info(f"✅ {self.backend} storage ready ({len(todos)} todos stored)")
        return 0

    def cleanup(self):
        """Close the engine if one was built."""
        if getattr(self, "engine", None) is not None:
            self.engine.close()
        super().cleanup()
