"""Logging setup for the server process.

``setup_logging`` attaches a console handler, and optionally a file
handler, to the root logger. It does nothing if the root logger already
has handlers, so calling it again from tests or a second app is safe.
"""

import logging
from pathlib import Path
from typing import Optional

LOG_FORMAT = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def setup_logging(level: str = 'INFO', logfile: Optional[str] = None) -> None:
    """Configure the root logger.

    Args:
        level: Logging level name, case insensitive
        logfile: Optional path of a file to log to as well
    """
    logger = logging.getLogger()
    if logger.handlers:
        return

    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if logfile:
        file_handler = logging.FileHandler(Path(logfile).resolve(), encoding='utf-8')
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)
