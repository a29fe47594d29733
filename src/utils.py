from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: int | str = "INFO") -> None:
    """Configure stdlib logging once with the project-wide format.

    Later calls only adjust the root level so repeated recommender construction
    (tests, notebooks) does not stack handlers.
    """
    if isinstance(level, str):
        level = level.upper()

    root_logger = logging.getLogger()
    if root_logger.handlers:
        root_logger.setLevel(level)
        return

    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt=LOG_DATEFMT)
