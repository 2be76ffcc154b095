"""
Logging setup for the API.

``setup_logging`` attaches a console handler to the root logger the
first time it is called and does nothing afterwards, so importing the
app repeatedly (for example from tests) does not duplicate output.
"""

import logging


def setup_logging(level: str = "INFO") -> None:
    """Configure the root logger.

    :param level: Level name such as ``"DEBUG"`` or ``"INFO"``.
        Unknown names fall back to ``INFO``.
    """
    logger = logging.getLogger()
    if logger.handlers:
        return

    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    formatter = logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)
