import logging
import os
from importlib import metadata
from pathlib import Path

logger = logging.getLogger(__name__)


def get_version() -> str:
    env_version = os.environ.get("MOUNTINFO_VERSION")
    if env_version is not None:
        return env_version

    version_file = Path(__file__).absolute().parent / "version.txt"
    if version_file.exists():
        return version_file.read_text().strip()

    try:
        return metadata.version("mountinfo")
    except metadata.PackageNotFoundError:
        logger.info("mountinfo is not installed as a distribution", exc_info=True)

    return "unknown"


__version__ = get_version()
