"""Logging configuration for argocd-diff."""

import logging
import os
import sys

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)-20s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

EXTERNAL_LOGGERS = {
    "urllib3": logging.WARNING,
    "requests": logging.WARNING,
}


def setup_logging(log_level: str | None = None) -> None:
    """Configure the root logger once per process.

    The level comes from the argument, then ``LOG_LEVEL``, then INFO.
    """
    if log_level is None:
        log_level = os.getenv("LOG_LEVEL", "INFO")

    level = getattr(logging, log_level.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    for logger_name, external_level in EXTERNAL_LOGGERS.items():
        logging.getLogger(logger_name).setLevel(external_level)
