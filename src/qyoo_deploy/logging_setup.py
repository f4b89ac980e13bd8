"""Logging configuration for the qyoo-deploy command line."""

import logging
import sys
from typing import Optional, TextIO

LOGGER_NAME = "qyoo_deploy"


class _BelowLevelFilter(logging.Filter):
    def __init__(self, level: int):
        super().__init__()
        self.level = level

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno < self.level


def configure_logging(
    verbose: bool = False,
    stdout: Optional[TextIO] = None,
    stderr: Optional[TextIO] = None,
) -> logging.Logger:
    """
    Route package log records to the console.

    Progress (below WARNING) goes to stdout, warnings and errors to stderr.
    Messages are printed without level or logger prefixes.

    Args:
        verbose: Also show DEBUG records (RPC methods, nonces, gas)
        stdout: Stream for progress (defaults to sys.stdout)
        stderr: Stream for warnings and errors (defaults to sys.stderr)

    Returns:
        The configured package logger
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    formatter = logging.Formatter("%(message)s")

    out_handler = logging.StreamHandler(stdout or sys.stdout)
    out_handler.setLevel(logging.DEBUG)
    out_handler.addFilter(_BelowLevelFilter(logging.WARNING))
    out_handler.setFormatter(formatter)

    err_handler = logging.StreamHandler(stderr or sys.stderr)
    err_handler.setLevel(logging.WARNING)
    err_handler.setFormatter(formatter)

    logger.addHandler(out_handler)
    logger.addHandler(err_handler)
    return logger
