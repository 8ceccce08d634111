# Copyright 2026 reflectgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Logging helpers for the reflectgen package."""

from __future__ import annotations

import logging

_LOGGER_NAME = "reflectgen"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a logger under the ``reflectgen`` hierarchy.

    Module names that already start with ``reflectgen`` are used as-is.
    """
    if not name:
        return logging.getLogger(_LOGGER_NAME)
    if name == _LOGGER_NAME or name.startswith(_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{_LOGGER_NAME}.{name}")


def configure_logging(*, verbose: bool = False) -> logging.Logger:
    """Configure console output for the ``reflectgen`` logger."""
    level = logging.DEBUG if verbose else logging.WARNING
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    # Reset handlers to avoid duplicate output when the CLI runs more than once.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("[reflectgen] %(levelname)s %(message)s"))
    logger.addHandler(handler)
    return logger


__all__ = ["configure_logging", "get_logger"]
