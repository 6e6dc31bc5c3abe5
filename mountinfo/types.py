# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
from enum import Enum
from typing import Literal

LOG_LEVEL = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
OUTPUT_FORMAT = Literal["json", "text"]


class ExitCode(Enum):
    """Exit codes of `mountinfo check`, following the Nagios plugin API
    https://assets.nagios.com/downloads/nagioscore/docs/nagioscore/3/en/pluginapi.html
    """

    OK = 0
    WARN = 1
    CRITICAL = 2
    UNKNOWN = 3
