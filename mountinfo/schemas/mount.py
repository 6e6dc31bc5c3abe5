# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
from dataclasses import dataclass
from typing import Dict, List, NamedTuple, Optional, Tuple


@dataclass(frozen=True)
class MountInfo:
    """One line of /proc/<pid>/mountinfo.

    https://man7.org/linux/man-pages/man5/proc_pid_mountinfo.5.html
    """

    mount_id: int
    parent_id: int
    device_id: str
    root: str
    mount_point: str
    mount_options: str
    optional_fields: Tuple[str, ...]
    filesystem_type: str
    mount_source: str
    super_options: str

    @property
    def mount_option_list(self) -> List[str]:
        return _split_options(self.mount_options)

    @property
    def super_option_list(self) -> List[str]:
        return _split_options(self.super_options)

    @property
    def fs_type(self) -> str:
        """Main filesystem type, e.g. 'fuse' for 'fuse.sshfs'."""
        return self.filesystem_type.partition(".")[0]

    @property
    def fs_subtype(self) -> Optional[str]:
        _, sep, subtype = self.filesystem_type.partition(".")
        return subtype if sep else None

    @property
    def propagation(self) -> Dict[str, str]:
        """Optional fields as a tag to value mapping.

        >>> MountInfo(1, 1, "0:1", "/", "/", "rw", ("shared:1", "unbindable"),
        ...           "tmpfs", "tmpfs", "rw").propagation
        {'shared': '1', 'unbindable': ''}
        """
        tags = {}
        for optional_field in self.optional_fields:
            tag, _, value = optional_field.partition(":")
            tags[tag] = value
        return tags

    def __str__(self) -> str:
        left = [
            str(self.mount_id),
            str(self.parent_id),
            self.device_id,
            self.root,
            self.mount_point,
            self.mount_options,
            *self.optional_fields,
        ]
        right = [self.filesystem_type, self.mount_source, self.super_options]
        return " ".join(left) + " - " + " ".join(right)


class MountStatus(NamedTuple):
    is_mount_point: bool
    type_matches: bool


def _split_options(options: str) -> List[str]:
    return options.split(",") if options else []
