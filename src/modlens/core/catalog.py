"""
Archive Catalog.

Maps every discovered archive to the mods its manifest declares. Archives
are read in parallel, but the catalog always lists them in discovery order
so output does not depend on thread scheduling.
"""

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from os import PathLike
from typing import Dict, List, Optional, Sequence, Union

from ..config import DEFAULT_WORKERS, MANIFEST_FILE
from ..parsing.archive import ByteSource, ZipByteSource
from ..parsing.manifest import parse_manifest
from .errors import ArchiveOpenError, EntryNotFoundError, ManifestParseError, ModlensError
from .result import Err, Ok, Result
from .types import ArchiveEntry, ScanIssue

logger = logging.getLogger(__name__)

ArchivePath = Union[str, PathLike]


@dataclass
class ArchiveCatalog:
    """
    Result of reading a batch of archives.

    Attributes:
        entries: Archives that declared at least one mod, in discovery order.
        issues: Archives that could not be opened or whose manifest is
            malformed.
        skipped: Archives that opened fine but declare no mod (no manifest,
            or an empty manifest bundle).
    """

    entries: List[ArchiveEntry] = field(default_factory=list)
    issues: List[ScanIssue] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.entries)


def load_archive(
    archive_path: str,
    source: ByteSource,
    parent_path: Optional[str] = None,
) -> Result[Optional[ArchiveEntry], ModlensError]:
    """
    Read and decode the manifest of a single archive.

    Returns:
        Ok(ArchiveEntry) for a mod archive, Ok(None) for an archive without
        a manifest or with an empty manifest bundle, Err(...) when the
        archive cannot be opened or the manifest is malformed.
    """
    try:
        payload = source.read(archive_path, MANIFEST_FILE)
    except EntryNotFoundError:
        return Ok(None)
    except ArchiveOpenError as e:
        return Err(e)

    try:
        records = parse_manifest(payload, archive_path)
    except ManifestParseError as e:
        return Err(e)

    if not records:
        # an empty bundle declares no mod
        return Ok(None)

    return Ok(ArchiveEntry(
        archive_path=archive_path,
        manifests=tuple(records),
        parent_path=parent_path,
    ))


def build_catalog(
    paths: Sequence[ArchivePath],
    source: ByteSource | None = None,
    max_workers: int = DEFAULT_WORKERS,
) -> ArchiveCatalog:
    """
    Build the catalog for an ordered list of archive paths.

    Args:
        paths: Archive paths in discovery order.
        source: Byte source used for every read (defaults to the zipfile one).
        max_workers: Thread count for reading archives; 1 reads sequentially.

    Returns:
        An ArchiveCatalog whose entries follow the order of ``paths``.
    """
    source = source or ZipByteSource()
    archive_paths = [str(p) for p in paths]
    results: Dict[int, Result[Optional[ArchiveEntry], ModlensError]] = {}

    if max_workers <= 1 or len(archive_paths) <= 1:
        for index, path in enumerate(archive_paths):
            results[index] = load_archive(path, source)
    else:
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            futures = {
                executor.submit(load_archive, path, source): index
                for index, path in enumerate(archive_paths)
            }
            for future in as_completed(futures):
                results[futures[future]] = future.result()

    catalog = ArchiveCatalog()
    for index, path in enumerate(archive_paths):
        result = results[index]
        if isinstance(result, Err):
            logger.warning(f"Skipping {result.error}")
            catalog.issues.append(ScanIssue.from_error(result.error, path))
        elif result.value is None:
            logger.debug(f"No {MANIFEST_FILE} in {path}, skipping")
            catalog.skipped.append(path)
        else:
            catalog.entries.append(result.value)

    logger.debug(
        f"Catalog: {len(catalog.entries)} mod archive(s), "
        f"{len(catalog.skipped)} without manifest, {len(catalog.issues)} failed"
    )
    return catalog
