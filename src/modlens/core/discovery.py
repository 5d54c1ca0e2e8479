"""
Directory scan.

Lists the archives modlens inspects: regular files with an archive suffix
directly inside one directory. Subdirectories are not descended into.
"""

import logging
from pathlib import Path
from typing import Iterable, List

from ..config import ARCHIVE_SUFFIXES
from .errors import DirectoryScanError

logger = logging.getLogger(__name__)


def discover_archives(directory: Path, suffixes: Iterable[str] = ARCHIVE_SUFFIXES) -> List[Path]:
    """
    Find the archives in ``directory``, sorted by file name.

    Raises:
        DirectoryScanError: The directory does not exist or cannot be listed.
    """
    wanted = {suffix.lower() for suffix in suffixes}
    try:
        children = list(directory.iterdir())
    except OSError as e:
        raise DirectoryScanError(f"cannot list directory: {e}", path=str(directory)) from e

    archives = sorted(
        (child for child in children if child.suffix.lower() in wanted and child.is_file()),
        key=lambda p: p.name,
    )
    logger.debug(f"Discovered {len(archives)} archive(s) in {directory}")
    return archives
