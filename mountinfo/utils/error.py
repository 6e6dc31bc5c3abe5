#!/usr/bin/env python3
# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
"""Errors raised while reading the mount table or querying mount points.

All errors derive from `MountInfoError` so callers can catch the whole family, and
each kind carries its context as attributes rather than only in the message.
"""

import errno as _errno
from typing import Optional


class MountInfoError(Exception):
    """Base class for every error raised by mountinfo."""


class SourceOpenError(MountInfoError):
    """The mount table source could not be opened."""

    def __init__(self, path: str, cause: OSError):
        super().__init__(f"failed to open mount information at {path}: {cause}")
        self.path = path
        self.cause = cause


class ParseError(MountInfoError, ValueError):
    """A mount table line does not follow the mountinfo grammar."""

    def __init__(self, line: str, reason: str):
        super().__init__(f"{reason}: {line!r}")
        self.line = line
        self.reason = reason


class StreamReadError(MountInfoError):
    """Reading the underlying stream failed part way through."""

    def __init__(self, cause: OSError):
        super().__init__(f"failed to read mount information: {cause}")
        self.cause = cause


class StatusQueryError(MountInfoError):
    """A file status (lstat) or filesystem status (statfs) query failed.

    `is_mount_point` is True when the failure happened after the path was already
    found to be a mount point.
    """

    def __init__(
        self,
        op: str,
        path: str,
        cause: OSError,
        is_mount_point: bool = False,
    ):
        super().__init__(f"{op} {path}: {cause.strerror or cause}")
        self.op = op
        self.path = path
        self.cause = cause
        self.is_mount_point = is_mount_point

    @property
    def errno(self) -> Optional[int]:
        return self.cause.errno

    @property
    def errorcode(self) -> Optional[str]:
        """Symbolic name of the errno, e.g. 'EACCES'."""
        if self.cause.errno is None:
            return None
        return _errno.errorcode.get(self.cause.errno)
