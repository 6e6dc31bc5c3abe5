# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
"""Superblock magic numbers reported in `statfs(2)` `f_type`.

Values from /usr/include/linux/magic.h.
"""

from typing import Dict, Final, Optional

FILESYSTEM_TYPE_BPFFS: Final = 0xCAFE4A11
FILESYSTEM_TYPE_CGROUP2: Final = 0x63677270

FILESYSTEM_MAGIC: Final[Dict[str, int]] = {
    "bpf": FILESYSTEM_TYPE_BPFFS,
    "cgroup2": FILESYSTEM_TYPE_CGROUP2,
    "cgroup": 0x27E0EB,
    "tmpfs": 0x01021994,
    "proc": 0x9FA0,
    "sysfs": 0x62656572,
    "devpts": 0x1CD1,
    "debugfs": 0x64626720,
    "tracefs": 0x74726163,
    "securityfs": 0x73636673,
    "nsfs": 0x6E736673,
    "overlay": 0x794C7630,
    "squashfs": 0x73717368,
    "ext4": 0xEF53,
    "xfs": 0x58465342,
    "btrfs": 0x9123683E,
    "nfs": 0x6969,
    "fuse": 0x65735546,
}


def magic_name(magic: int) -> Optional[str]:
    """Reverse lookup of `FILESYSTEM_MAGIC`. ext2/3/4 share a magic and map to ext4."""
    for name, value in FILESYSTEM_MAGIC.items():
        if value == magic:
            return name
    return None
