"""Logging configuration."""

import logging
import sys

LOG_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str | int = logging.INFO) -> None:
    """Configure the root logger with a single stderr handler.

    Safe to call more than once; previously installed handlers are replaced.
    """
    root = logging.getLogger()
    root.setLevel(level)

    for handler in list(root.handlers):
        root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
    root.addHandler(handler)

    # uvicorn access logs already cover request lines
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
