# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
import logging
import os
from typing import IO, Iterator, List, Protocol, Union

from mountinfo.schemas.mount import MountInfo
from mountinfo.utils.error import ParseError, SourceOpenError, StreamReadError

MOUNT_INFO_PATH = "/proc/self/mountinfo"

# fields before the optional fields: mount ID, parent ID, major:minor, root,
# mount point, mount options
_LEFT_FIXED_FIELDS = 6
# fields after the separator: filesystem type, mount source, super options
_RIGHT_FIELDS = 3
_SEPARATOR = " - "
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1

logger = logging.getLogger(__name__)


class MountTableClient(Protocol):
    """A low-level source of mount table data."""

    def get_mount_info(self) -> List[MountInfo]:
        """Get /proc/self/mountinfo data"""


def _parse_id(value: str, name: str, line: str) -> int:
    # int() would also accept "1_0" and surrounding whitespace
    digits = value[1:] if value.startswith(("+", "-")) else value
    if not digits.isdecimal() or not digits.isascii():
        raise ParseError(line, f"invalid {name} {value!r} in mountinfo entry")
    n = int(value)
    if not _INT64_MIN <= n <= _INT64_MAX:
        raise ParseError(line, f"{name} {value!r} out of range in mountinfo entry")
    return n


def as_mount_info(line: str) -> MountInfo:
    """Parse a single mountinfo line (without its line terminator).

    Raises `ParseError` if the line is malformed.
    """
    # optional fields are terminated by a lone hyphen, so " - " splits the fixed
    # fields on the left from the filesystem specific ones on the right
    separated = line.split(_SEPARATOR)
    if len(separated) != 2:
        raise ParseError(
            line,
            f"invalid mountinfo entry with {len(separated) - 1} "
            f"'{_SEPARATOR.strip()}' separators, expected exactly one",
        )

    left = separated[0].split(" ")
    right = separated[1].split(" ")
    if len(left) < _LEFT_FIXED_FIELDS:
        raise ParseError(
            line,
            f"invalid mountinfo entry with {len(left)} fields before the separator, "
            f"expected at least {_LEFT_FIXED_FIELDS}",
        )
    if len(right) != _RIGHT_FIELDS:
        raise ParseError(
            line,
            f"invalid mountinfo entry with {len(right)} fields after the separator, "
            f"expected {_RIGHT_FIELDS}",
        )

    return MountInfo(
        mount_id=_parse_id(left[0], "mount ID", line),
        parent_id=_parse_id(left[1], "parent ID", line),
        device_id=left[2],
        root=left[3],
        mount_point=left[4],
        mount_options=left[5],
        optional_fields=tuple(left[_LEFT_FIXED_FIELDS:]),
        filesystem_type=right[0],
        mount_source=right[1],
        super_options=right[2],
    )


def _read_lines(stream: Union[IO[bytes], IO[str]]) -> Iterator[str]:
    while True:
        try:
            raw = stream.readline()
        except OSError as e:
            raise StreamReadError(e) from e
        if not raw:
            return
        line = os.fsdecode(raw) if isinstance(raw, bytes) else raw
        if line.endswith("\n"):
            line = line[:-1]
        if line.endswith("\r"):
            line = line[:-1]
        yield line


def parse_mount_info(stream: Union[IO[bytes], IO[str]]) -> List[MountInfo]:
    """Parse every line of a mountinfo formatted stream, in order.

    The first malformed line aborts the whole parse with `ParseError`; read failures
    are raised as `StreamReadError`. An empty stream yields an empty list.
    """
    return [as_mount_info(line) for line in _read_lines(stream)]


def get_mount_info(path: str = MOUNT_INFO_PATH) -> List[MountInfo]:
    """Parse the mount table of the calling process."""
    logger.debug("reading mount table from %s", path)
    try:
        f = open(path, "rb")
    except OSError as e:
        raise SourceOpenError(path, e) from e
    with f:
        return parse_mount_info(f)


class MountTableCliClient(MountTableClient):
    def __init__(self, path: str = MOUNT_INFO_PATH):
        self.path = path

    def get_mount_info(self) -> List[MountInfo]:
        return get_mount_info(self.path)
