import logging
from typing import Optional, Union

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "samplerkit"


def configure_logging(
    level: Union[int, str] = "INFO", console: Optional[Console] = None
) -> logging.Logger:
    """
    Route samplerkit log records to a Rich handler.
    Calling it again only updates the level and console.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(console=console or Console(stderr=True), show_path=False)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    return logger
