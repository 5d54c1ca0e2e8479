"""
Error taxonomy for modlens.

Every per-archive failure maps to one of these classes. None of them is
fatal to a scan except DirectoryScanError: the others are collected as
ScanIssue annotations and shown next to the listing.
"""

from typing import Optional


class ModlensError(Exception):
    """Base class for all modlens errors."""

    kind = "error"

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.path = path

    def __str__(self) -> str:
        if self.path:
            return f"{self.path}: {self.message}"
        return self.message


class DirectoryScanError(ModlensError):
    """The working directory could not be enumerated at all."""

    kind = "directory"


class ArchiveOpenError(ModlensError):
    """The file is corrupt, unreadable or not a ZIP archive."""

    kind = "archive"


class EntryNotFoundError(ModlensError):
    """The requested entry does not exist inside the archive."""

    kind = "missing_entry"


class ManifestParseError(ModlensError):
    """fabric.mod.json is not well-formed per its schema."""

    kind = "manifest"


class MixinConfigError(ModlensError):
    """A referenced mixin config is missing or malformed."""

    kind = "mixin_config"


class AccessWidenerParseError(ModlensError):
    """An access-widener file has an invalid header or cannot be read."""

    kind = "access_widener"


class UnresolvedEmbedError(ModlensError):
    """A declared embedded jar could not be located or parsed."""

    kind = "unresolved_embed"

    def __init__(self, message: str, path: Optional[str] = None, ref: str = ""):
        super().__init__(message, path)
        self.ref = ref


class CycleDetectedError(ModlensError):
    """
    Traversal reached a node already on the current path.

    Not a real failure: the tree renderer uses it to stop descending and
    marks the revisited node as a leaf.
    """

    kind = "cycle"
