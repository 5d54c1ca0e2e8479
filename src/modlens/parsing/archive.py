"""
Archive byte access.

The core never touches ZIP handles directly: it asks a ByteSource for the
bytes of one entry inside one archive. Nested archives are addressed with
the ``outer.jar!/inner/path.jar`` notation, so an embedded jar is just
another archive path fed back through the same interface.
"""

import io
import logging
import zipfile
import zlib
from contextlib import ExitStack
from pathlib import Path
from typing import List, Protocol

from ..config import NESTED_SEPARATOR
from ..core.errors import ArchiveOpenError, EntryNotFoundError

logger = logging.getLogger(__name__)


class ByteSource(Protocol):
    """Byte-retrieval capability consumed by the catalog, graph and listers."""

    def read(self, archive_path: str, entry: str) -> bytes:
        """
        Return the raw bytes of ``entry`` inside ``archive_path``.

        Raises:
            ArchiveOpenError: The archive (or a nested archive on the way)
                cannot be opened or does not exist.
            EntryNotFoundError: The archive opened but has no such entry.
        """
        ...


def nested_path(archive_path: str, ref: str) -> str:
    """Address of an archive stored at ``ref`` inside ``archive_path``."""
    return f"{archive_path}{NESTED_SEPARATOR}{ref.lstrip('/')}"


def split_nested(archive_path: str) -> List[str]:
    """Split ``a.jar!/b.jar!/c.jar`` into its outer file and inner entries."""
    return archive_path.split(NESTED_SEPARATOR)


def decode_text(payload: bytes) -> str:
    """Decode a text entry, tolerating a UTF-8 byte order mark."""
    return payload.decode("utf-8-sig")


class ZipByteSource:
    """
    ByteSource backed by the local filesystem and ``zipfile``.

    Every call opens the archives it needs and closes them before
    returning, including when the read fails.
    """

    def __init__(self, root: Path | None = None):
        self.root = root

    def _resolve(self, outer: str) -> Path:
        path = Path(outer)
        if self.root is not None and not path.is_absolute():
            path = self.root / path
        return path

    def read(self, archive_path: str, entry: str) -> bytes:
        outer, *inner_refs = split_nested(archive_path)

        with ExitStack() as stack:
            try:
                archive = stack.enter_context(zipfile.ZipFile(self._resolve(outer)))
            except (zipfile.BadZipFile, OSError) as e:
                raise ArchiveOpenError(f"cannot open archive: {e}", path=archive_path) from e

            for depth, ref in enumerate(inner_refs):
                current = NESTED_SEPARATOR.join([outer, *inner_refs[:depth + 1]])
                try:
                    payload = archive.read(ref)
                except KeyError as e:
                    raise ArchiveOpenError(
                        f"embedded archive '{ref}' not found", path=current
                    ) from e
                except (zipfile.BadZipFile, zlib.error, EOFError, OSError, RuntimeError) as e:
                    raise ArchiveOpenError(f"cannot read '{ref}': {e}", path=current) from e

                try:
                    archive = stack.enter_context(zipfile.ZipFile(io.BytesIO(payload)))
                except zipfile.BadZipFile as e:
                    raise ArchiveOpenError(f"'{ref}' is not a zip archive", path=current) from e

            try:
                return archive.read(entry)
            except KeyError as e:
                raise EntryNotFoundError(f"no entry '{entry}'", path=archive_path) from e
            except (zipfile.BadZipFile, zlib.error, EOFError, OSError, RuntimeError) as e:
                raise ArchiveOpenError(f"cannot read '{entry}': {e}", path=archive_path) from e
