"""Console logging for the gql-coords CLI."""

import logging

from rich.console import Console
from rich.logging import RichHandler


def configure_logging(verbose: bool = False) -> logging.Logger:
    """Attach a RichHandler to the package logger.

    Library code never configures logging itself; only the CLI calls this.
    """
    logger = logging.getLogger("gql_coords")
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)

    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(
            console=Console(stderr=True),
            rich_tracebacks=True,
            show_time=False,
            show_path=False,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)
        logger.propagate = False
    return logger
