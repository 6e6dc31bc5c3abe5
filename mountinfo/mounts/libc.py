# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
"""Thin ctypes binding for statfs(2), which the os module does not expose."""

import ctypes
import os
from typing import Union

_libc = ctypes.CDLL(None, use_errno=True)

_fsword_t = ctypes.c_long


class Statfs(ctypes.Structure):
    # struct statfs from <bits/statfs.h> with _FILE_OFFSET_BITS=64
    _fields_ = [
        ("f_type", _fsword_t),
        ("f_bsize", _fsword_t),
        ("f_blocks", ctypes.c_uint64),
        ("f_bfree", ctypes.c_uint64),
        ("f_bavail", ctypes.c_uint64),
        ("f_files", ctypes.c_uint64),
        ("f_ffree", ctypes.c_uint64),
        ("f_fsid", ctypes.c_int * 2),
        ("f_namelen", _fsword_t),
        ("f_frsize", _fsword_t),
        ("f_flags", _fsword_t),
        ("f_spare", _fsword_t * 4),
    ]

    @property
    def magic(self) -> int:
        # f_type is a signed word; magics such as BPF_FS_MAGIC have the top bit set
        return self.f_type & 0xFFFFFFFF


# $ man 2 statfs
# int statfs(const char *path, struct statfs *buf);
_statfs = getattr(_libc, "statfs64", None) or _libc.statfs
_statfs.restype = ctypes.c_int
_statfs.argtypes = (ctypes.c_char_p, ctypes.POINTER(Statfs))


def statfs(path: Union[str, "os.PathLike[str]"]) -> Statfs:
    """Return filesystem statistics for `path`; raises `OSError` on failure."""
    buf = Statfs()
    if _statfs(os.fsencode(path), ctypes.byref(buf)) != 0:
        err = ctypes.get_errno()
        raise OSError(err, os.strerror(err), os.fspath(path))
    return buf
