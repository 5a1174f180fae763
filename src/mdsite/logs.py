"""Logging setup for the command-line entrypoint"""

import logging
import sys


LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str = "WARNING") -> None:
    """Route mdsite logs to stderr at the given level, replacing earlier handlers."""
    logger = logging.getLogger("mdsite")
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    logger.addHandler(handler)
    logger.setLevel(level.upper())
    logger.propagate = False

    # markdown-it logs rule chatter at DEBUG
    logging.getLogger("markdown_it").setLevel(logging.WARNING)
