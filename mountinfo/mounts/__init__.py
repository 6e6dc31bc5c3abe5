# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
from mountinfo.mounts.detect import (
    FilesystemClient,
    FilesystemClientImpl,
    is_mount_fs,
)
from mountinfo.mounts.magic import (
    FILESYSTEM_MAGIC,
    FILESYSTEM_TYPE_BPFFS,
    FILESYSTEM_TYPE_CGROUP2,
)
from mountinfo.mounts.table import (
    as_mount_info,
    get_mount_info,
    MOUNT_INFO_PATH,
    MountTableCliClient,
    MountTableClient,
    parse_mount_info,
)
from mountinfo.schemas.mount import MountInfo, MountStatus

__all__ = [
    "FILESYSTEM_MAGIC",
    "FILESYSTEM_TYPE_BPFFS",
    "FILESYSTEM_TYPE_CGROUP2",
    "FilesystemClient",
    "FilesystemClientImpl",
    "MOUNT_INFO_PATH",
    "MountInfo",
    "MountStatus",
    "MountTableCliClient",
    "MountTableClient",
    "as_mount_info",
    "get_mount_info",
    "is_mount_fs",
    "parse_mount_info",
]
