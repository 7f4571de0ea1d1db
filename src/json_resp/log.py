import logging

from rich.console import Console
from rich.logging import RichHandler

LOG_FORMAT = "%(name)s | %(message)s"


def configure_logging(level: str = "WARNING") -> None:
    """Route log records to stderr through rich.

    Leaves the root logger alone when the host process already configured it.
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format=LOG_FORMAT,
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )
