#!/usr/bin/env python3
# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
"""Logging setup shared by the mountinfo commands."""
from __future__ import annotations

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional, Tuple

DEFAULT_FORMATTER = logging.Formatter(
    "[%(asctime)s] - [%(levelname)s] - [%(name)s] - %(message)s"
)


def init_logger(
    logger_name: str,
    log_dir: str,
    log_name: str,
    log_formatter: Optional[logging.Formatter] = DEFAULT_FORMATTER,
    log_level: int = logging.INFO,
    max_bytes: int = 1024 * 1024,
    backup_count: int = 2,
    log_stdout: bool = False,
) -> Tuple[logging.Logger, logging.Handler]:
    """Set up logging for a command.

    Logs go to stdout when `log_stdout` is set, otherwise to {log_dir}/{log_name}.
    The library loggers under "mountinfo" are attached to the same handler so their
    debug records show up next to the command's own.
    """
    handler: logging.Handler
    if log_stdout:
        handler = logging.StreamHandler(sys.stdout)
    else:
        file_path = os.path.join(log_dir, log_name)
        os.makedirs(os.path.dirname(file_path), exist_ok=True)
        handler = RotatingFileHandler(
            file_path, mode="a", maxBytes=max_bytes, backupCount=backup_count
        )

    if log_formatter:
        handler.setFormatter(log_formatter)

    logger = logging.getLogger(logger_name)
    logger.setLevel(log_level)
    logger.addHandler(handler)

    library_logger = logging.getLogger("mountinfo")
    if library_logger is not logger:
        library_logger.setLevel(log_level)
        library_logger.addHandler(handler)

    return logger, handler
