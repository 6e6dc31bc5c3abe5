# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
import errno
import os
from pathlib import Path

import pytest

from mountinfo.mounts.detect import FilesystemClientImpl, is_mount_fs
from mountinfo.mounts.magic import (
    FILESYSTEM_MAGIC,
    FILESYSTEM_TYPE_BPFFS,
    FILESYSTEM_TYPE_CGROUP2,
)
from mountinfo.schemas.mount import MountStatus
from mountinfo.tests.fakes import FakeFilesystemClient
from mountinfo.utils.error import StatusQueryError
from typeguard import typechecked


@pytest.fixture
def client() -> FakeFilesystemClient:
    return FakeFilesystemClient(
        devices={
            "/sys": 5,
            "/sys/fs": 5,
            "/sys/fs/bpf": 31,
            "/sys/fs/cgroup": 26,
            "/sys/fs/cgroup/system.slice": 26,
        },
        fs_types={
            "/sys/fs/bpf": FILESYSTEM_TYPE_BPFFS,
            "/sys/fs/cgroup": FILESYSTEM_TYPE_CGROUP2,
        },
    )


@pytest.mark.parametrize(
    "expected_type, path, expected",
    [
        (FILESYSTEM_TYPE_BPFFS, "/sys/fs/bpf", MountStatus(True, True)),
        (FILESYSTEM_TYPE_CGROUP2, "/sys/fs/bpf", MountStatus(True, False)),
        (FILESYSTEM_TYPE_CGROUP2, "/sys/fs/cgroup", MountStatus(True, True)),
        # same device as the parent
        (
            FILESYSTEM_TYPE_CGROUP2,
            "/sys/fs/cgroup/system.slice",
            MountStatus(False, False),
        ),
        (FILESYSTEM_TYPE_BPFFS, "/sys/fs", MountStatus(False, False)),
        # does not exist
        (FILESYSTEM_TYPE_BPFFS, "/sys/fs/missing", MountStatus(False, False)),
    ],
)
@typechecked
def test_is_mount_fs(
    client: FakeFilesystemClient,
    expected_type: int,
    path: str,
    expected: MountStatus,
) -> None:
    assert is_mount_fs(expected_type, path, client=client) == expected


def test_status_unpacks_as_pair(client: FakeFilesystemClient) -> None:
    is_mount_point, type_matches = is_mount_fs(
        FILESYSTEM_TYPE_BPFFS, "/sys/fs/bpf", client=client
    )

    assert is_mount_point is True
    assert type_matches is True


def test_missing_path_skips_parent_query(client: FakeFilesystemClient) -> None:
    is_mount_fs(FILESYSTEM_TYPE_BPFFS, "/sys/fs/missing", client=client)

    assert client.queries == ["lstat /sys/fs/missing"]


def test_same_device_skips_statfs(client: FakeFilesystemClient) -> None:
    is_mount_fs(FILESYSTEM_TYPE_CGROUP2, "/sys/fs/cgroup/system.slice", client=client)

    assert client.queries == [
        "lstat /sys/fs/cgroup/system.slice",
        "lstat /sys/fs/cgroup",
    ]


def test_parent_is_lexical(client: FakeFilesystemClient) -> None:
    client.devices["/sys/fs/bpf/"] = 31

    # the parent of "/sys/fs/bpf/" is "/sys/fs/bpf" itself
    assert is_mount_fs(FILESYSTEM_TYPE_BPFFS, "/sys/fs/bpf/", client=client) == (
        False,
        False,
    )


def test_relative_path_parent_is_cwd() -> None:
    client = FakeFilesystemClient(devices={"bpf": 31, ".": 5}, fs_types={"bpf": 7})

    assert is_mount_fs(7, "bpf", client=client) == (True, True)
    assert "lstat ." in client.queries


def test_lstat_failure(client: FakeFilesystemClient) -> None:
    client.lstat_errors["/sys/fs/bpf"] = errno.EACCES

    with pytest.raises(StatusQueryError) as exc_info:
        is_mount_fs(FILESYSTEM_TYPE_BPFFS, "/sys/fs/bpf", client=client)

    e = exc_info.value
    assert (e.op, e.path, e.is_mount_point) == ("lstat", "/sys/fs/bpf", False)
    assert e.errno == errno.EACCES
    assert e.errorcode == "EACCES"
    assert isinstance(e.__cause__, PermissionError)


def test_parent_lstat_failure_is_fatal(client: FakeFilesystemClient) -> None:
    del client.devices["/sys/fs"]

    with pytest.raises(StatusQueryError) as exc_info:
        is_mount_fs(FILESYSTEM_TYPE_BPFFS, "/sys/fs/bpf", client=client)

    assert (exc_info.value.op, exc_info.value.path) == ("lstat", "/sys/fs")
    assert exc_info.value.errno == errno.ENOENT


def test_statfs_failure_reports_mount_point(client: FakeFilesystemClient) -> None:
    client.statfs_errors["/sys/fs/bpf"] = errno.EIO

    with pytest.raises(StatusQueryError) as exc_info:
        is_mount_fs(FILESYSTEM_TYPE_BPFFS, "/sys/fs/bpf", client=client)

    assert exc_info.value.op == "statfs"
    assert exc_info.value.is_mount_point is True


def test_magic_table() -> None:
    assert FILESYSTEM_MAGIC["bpf"] == 0xCAFE4A11
    assert FILESYSTEM_MAGIC["cgroup2"] == 0x63677270
    assert len(set(FILESYSTEM_MAGIC.values())) == len(FILESYSTEM_MAGIC)


@pytest.mark.skipif(not Path("/proc/self").is_dir(), reason="requires procfs")
def test_proc_is_mounted() -> None:
    assert is_mount_fs(FILESYSTEM_MAGIC["proc"], "/proc") == (True, True)


def test_real_directory_is_not_a_mount_point(tmp_path: Path) -> None:
    (tmp_path / "child").mkdir()

    assert is_mount_fs(FILESYSTEM_TYPE_BPFFS, str(tmp_path / "child")) == (
        False,
        False,
    )


def test_real_missing_path(tmp_path: Path) -> None:
    client = FilesystemClientImpl()

    assert is_mount_fs(
        FILESYSTEM_TYPE_BPFFS, os.path.join(tmp_path, "nope"), client=client
    ) == (False, False)
