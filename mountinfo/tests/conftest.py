# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
import logging
from typing import Iterator

import pytest

from mountinfo.cli.mountinfo import LOGGER_NAME


@pytest.fixture(autouse=True)
def reset_loggers() -> Iterator[None]:
    """Undo the handlers and levels `init_logger` set during a test."""
    yield
    for name in (LOGGER_NAME, "mountinfo"):
        logger = logging.getLogger(name)
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()
        logger.setLevel(logging.NOTSET)

