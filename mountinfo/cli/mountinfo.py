# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
"""Command line access to the mount table and to mount point detection."""

import json
import logging
import re
import sys
from dataclasses import asdict, dataclass, field
from typing import (
    Collection,
    Iterable,
    Iterator,
    List,
    Optional,
    Protocol,
    runtime_checkable,
    Tuple,
)

import click

from mountinfo._version import __version__
from mountinfo.click import FilesystemMagic, log_arguments, toml_config_option
from mountinfo.mounts.detect import FilesystemClient, FilesystemClientImpl, is_mount_fs
from mountinfo.mounts.magic import magic_name
from mountinfo.mounts.table import get_mount_info, MOUNT_INFO_PATH
from mountinfo.schemas.mount import MountInfo
from mountinfo.types import ExitCode, LOG_LEVEL, OUTPUT_FORMAT
from mountinfo.utils.error import MountInfoError, StatusQueryError
from mountinfo.utils.monitor import init_logger
from typeguard import typechecked

LOGGER_NAME = "mountinfo_cli"


@runtime_checkable
class CliObject(Protocol):
    @property
    def filesystem_client(self) -> FilesystemClient: ...

    def get_mount_info(self, path: str) -> List[MountInfo]: ...


@dataclass
class CliObjectImpl:
    filesystem_client: FilesystemClient = field(default_factory=FilesystemClientImpl)

    def get_mount_info(self, path: str) -> List[MountInfo]:
        return get_mount_info(path)


# construct at module-scope so that tests can replace it through `obj=`
_default_obj: CliObject = CliObjectImpl()

def _init_logger(log_level: str, log_folder: str, stdout: bool) -> logging.Logger:
    logger, _ = init_logger(
        logger_name=LOGGER_NAME,
        log_dir=log_folder,
        log_name=LOGGER_NAME + ".log",
        log_level=getattr(logging, log_level),
        log_stdout=stdout,
    )
    return logger


def filter_mounts(
    mounts: Iterable[MountInfo],
    fs_types: Collection[str],
    mount_point_pattern: Optional[str],
) -> Iterator[MountInfo]:
    """Select entries by filesystem type (either 'type' or 'type.subtype' matches)
    and by a regex matched against the mount point."""
    for mount in mounts:
        if fs_types and not (
            mount.filesystem_type in fs_types or mount.fs_type in fs_types
        ):
            continue
        if mount_point_pattern is not None and not re.match(
            mount_point_pattern, mount.mount_point
        ):
            continue
        yield mount


def format_mount(mount: MountInfo, output_format: OUTPUT_FORMAT) -> str:
    if output_format == "json":
        return json.dumps(asdict(mount))
    return str(mount)


def describe_status(
    path: str, expected_type: int, is_mount_point: bool, type_matches: bool
) -> Tuple[ExitCode, str]:
    expected = magic_name(expected_type) or hex(expected_type)
    if not is_mount_point:
        return ExitCode.CRITICAL, f"{path} is not a mount point."
    if not type_matches:
        return ExitCode.WARN, f"{path} is a mount point, but not of type {expected}."
    return ExitCode.OK, f"{path} is a mount point of type {expected}."


@click.group(
    epilog=f"mountinfo Version: {__version__}",
    context_settings={"obj": _default_obj},
)
@toml_config_option("mountinfo")
@click.version_option(__version__)
def main() -> None:
    """Inspect the mount table and detect mount points."""


@main.command()
@log_arguments
@click.option(
    "--mountinfo-file",
    type=click.Path(dir_okay=False),
    default=MOUNT_INFO_PATH,
    show_default=True,
    help="Mount table to read, in /proc/<pid>/mountinfo format.",
)
@click.option(
    "--fs-type",
    "fs_types",
    multiple=True,
    help="Only show mounts of this filesystem type. May be repeated.",
)
@click.option(
    "--mount-point-pattern",
    default=None,
    help="Regex pattern for selecting mount points.",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["json", "text"]),
    default="text",
    show_default=True,
)
@click.pass_obj
@typechecked
def table(
    obj: CliObject,
    log_level: LOG_LEVEL,
    log_folder: str,
    stdout: bool,
    mountinfo_file: str,
    fs_types: Tuple[str, ...],
    mount_point_pattern: Optional[str],
    output_format: OUTPUT_FORMAT,
) -> None:
    """Print the parsed mount table."""
    logger = _init_logger(log_level, log_folder, stdout)
    try:
        mounts = obj.get_mount_info(mountinfo_file)
    except MountInfoError as e:
        logger.error("could not read the mount table: %s", e)
        raise click.ClickException(str(e)) from e

    logger.info("read %d mounts from %s", len(mounts), mountinfo_file)
    for mount in filter_mounts(mounts, fs_types, mount_point_pattern):
        click.echo(format_mount(mount, output_format))


@main.command()
@log_arguments
@click.argument("path", type=click.Path())
@click.option(
    "--fs-type",
    type=FilesystemMagic(),
    required=True,
    help="Expected filesystem type: a known name (e.g. bpf, cgroup2) or a magic number.",
)
@click.pass_obj
@typechecked
def check(
    obj: CliObject,
    log_level: LOG_LEVEL,
    log_folder: str,
    stdout: bool,
    path: str,
    fs_type: int,
) -> None:
    """Check that PATH is a mount point of the given filesystem type.

    Bind mounts are not detected, and the result for / is not meaningful.
    """
    logger = _init_logger(log_level, log_folder, stdout)
    try:
        status = is_mount_fs(fs_type, path, client=obj.filesystem_client)
    except StatusQueryError as e:
        logger.error("could not check %s: %s", path, e)
        click.echo(f"{e}")
        sys.exit(ExitCode.UNKNOWN.value)

    exit_code, msg = describe_status(
        path, fs_type, status.is_mount_point, status.type_matches
    )
    logger.info(msg)
    click.echo(msg)
    sys.exit(exit_code.value)


if __name__ == "__main__":
    main()
