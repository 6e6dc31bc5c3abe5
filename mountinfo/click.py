# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
"""Helper functionality for click commands"""

import logging
from functools import wraps
from pathlib import Path
from typing import Any, Callable, Dict, get_args, Optional, TypeVar, Union

import click
import tomli
from mountinfo.mounts.magic import FILESYSTEM_MAGIC
from mountinfo.types import LOG_LEVEL
from typeguard import typechecked
from typing_extensions import ParamSpec

logger = logging.getLogger(__name__)

P = ParamSpec("P")
R = TypeVar("R")

DEFAULT_CONFIG_PATH = "/etc/mountinfo/config.toml"


def log_arguments(f: Callable[P, R]) -> Callable[P, R]:
    @click.option(
        "--log-level",
        type=click.Choice(get_args(LOG_LEVEL)),
        default="INFO",
        show_default=True,
        help="Logging verbosity level.",
    )
    @click.option(
        "--log-folder",
        type=click.Path(file_okay=False),
        default="mountinfo_logs",
        help="The directory where logs will be stored.",
    )
    @click.option(
        "--stdout",
        is_flag=True,
        default=False,
        help="Whether to display logs to stdout.",
    )
    @wraps(f)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        return f(*args, **kwargs)

    return wrapper


class FilesystemMagic(click.ParamType):
    """A filesystem type given by name (see `FILESYSTEM_MAGIC`) or as a decimal or
    0x prefixed hexadecimal superblock magic number."""

    name = "fs_type"

    def convert(
        self,
        value: Union[str, int],
        param: Optional[click.Parameter],
        ctx: Optional[click.Context],
    ) -> int:
        if isinstance(value, int):
            return value
        if value in FILESYSTEM_MAGIC:
            return FILESYSTEM_MAGIC[value]
        try:
            return int(value, 16) if value.lower().startswith("0x") else int(value)
        except ValueError:
            allowed = ", ".join(FILESYSTEM_MAGIC)
            self.fail(
                f"{value!r} is neither a magic number nor a known filesystem type. "
                f"Known types are: {allowed}",
                param,
                ctx,
            )


def ensure_dict(value: Any) -> Dict[str, Any]:
    if not isinstance(value, dict):
        raise TypeError(f"Expected a table, but got {type(value).__name__}")
    return value


_Tv = TypeVar("_Tv")
_ClickCallback = Callable[[click.Context, click.Parameter, _Tv], None]


def _set_default_map(name: str) -> _ClickCallback[Path]:
    @typechecked
    def cb(ctx: click.Context, param: click.Parameter, path: Path) -> None:
        if not path.exists() or path == Path("/dev/null"):
            return

        logger.info(f"Reading config from {path}...")
        with path.open("rb") as f:
            try:
                conf = tomli.load(f)
            except tomli.TOMLDecodeError as e:
                raise click.BadParameter(
                    f"{path} does not contain valid TOML.",
                    ctx=ctx,
                    param=param,
                ) from e
        try:
            default_map = ensure_dict(conf[name])
        except KeyError as e:
            raise click.BadParameter(
                f"'{name}' is not a top-level table name in {path}. Valid names: {list(conf.keys())}",
                ctx=ctx,
                param=param,
            ) from e
        except TypeError as e:
            raise click.BadParameter(
                f"'{name}' in {path} is not a table.", ctx=ctx, param=param
            ) from e
        logger.info(f"Loaded table '{name}'.")

        ctx.default_map = {**(ctx.default_map or {}), **default_map}

    return cb


def toml_config_option(
    name: str,
    *,
    default_config_path: Union[str, Path] = DEFAULT_CONFIG_PATH,
) -> Callable[[Callable[P, R]], Callable[P, R]]:
    """Add a `--config` option which loads default option values from table `name`
    of a TOML file. A non-existent path or `/dev/null` is treated as an empty table.

    Precedence (lowest to highest):
    * `default` argument to `click.option`
    * the value in the config file
    * value passed at the command line

    On a command group, subtables configure the subcommands, e.g.

        [mountinfo.check]
        fs_type = "cgroup2"
    """

    def decorator(f: Callable[P, R]) -> Callable[P, R]:
        return click.option(
            "--config",
            type=click.Path(dir_okay=False, path_type=Path),
            callback=_set_default_map(name),
            default=default_config_path,
            show_default=True,
            is_eager=True,
            expose_value=False,
            help=(
                f"Load option values from table '{name}' in the given TOML config file. "
                "A non-existent path or '/dev/null' are ignored and treated as empty tables."
            ),
        )(f)

    return decorator
