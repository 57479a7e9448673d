# SPDX-License-Identifier: MIT

import logging

from rich.console import Console
from rich.logging import RichHandler

from archideck.configuration import APP_NAME

_HANDLER_NAME = "archideck-rich"


def configure_logging(level: str = "WARNING") -> None:
    """Attach a rich handler to the application logger.

    Safe to call more than once; the level is updated and the handler is
    only installed the first time.
    """
    logger = logging.getLogger(APP_NAME)
    logger.setLevel(level.upper())

    if any(handler.get_name() == _HANDLER_NAME for handler in logger.handlers):
        return

    handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.propagate = False
