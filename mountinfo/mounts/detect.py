# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
"""Mount point detection based on device IDs.

A path is a mount point when its device ID differs from the one of its parent
directory. This can not detect bind mounts of a directory from the same filesystem,
and the result for "/" is meaningless since it is its own parent.
"""

import logging
import os
from typing import Protocol

from mountinfo.mounts import libc
from mountinfo.schemas.mount import MountStatus
from mountinfo.utils.error import StatusQueryError

logger = logging.getLogger(__name__)


class FilesystemClient(Protocol):
    """Low-level status queries used for mount point detection."""

    def lstat(self, path: str) -> os.stat_result:
        """File status of `path`, not following symlinks."""

    def statfs_type(self, path: str) -> int:
        """Superblock magic number of the filesystem containing `path`."""


class FilesystemClientImpl:
    def lstat(self, path: str) -> os.stat_result:
        return os.lstat(path)

    def statfs_type(self, path: str) -> int:
        return libc.statfs(path).magic


def is_mount_fs(
    expected_type: int,
    path: str,
    *,
    client: FilesystemClient = FilesystemClientImpl(),
) -> MountStatus:
    """Check whether `path` is a mount point and, if it is, whether its filesystem
    type is `expected_type`.

    A path that does not exist is not a mount point. Raises `StatusQueryError` if a
    status query fails; when the failing query is the `statfs` of an established
    mount point the error has `is_mount_point` set.
    """
    try:
        st = client.lstat(path)
    except FileNotFoundError:
        return MountStatus(is_mount_point=False, type_matches=False)
    except OSError as e:
        raise StatusQueryError("lstat", path, e) from e

    parent = os.path.dirname(path) or "."
    try:
        parent_st = client.lstat(parent)
    except OSError as e:
        raise StatusQueryError("lstat", parent, e) from e

    if st.st_dev == parent_st.st_dev:
        logger.debug("%s is on the same device as %s", path, parent)
        return MountStatus(is_mount_point=False, type_matches=False)

    try:
        fs_type = client.statfs_type(path)
    except OSError as e:
        raise StatusQueryError("statfs", path, e, is_mount_point=True) from e

    logger.debug("%s is a mount point with filesystem magic %#x", path, fs_type)
    return MountStatus(is_mount_point=True, type_matches=fs_type == expected_type)
