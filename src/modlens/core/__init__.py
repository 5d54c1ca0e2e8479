"""
Core modules for modlens.

This package contains the fundamental building blocks:
- types: Data structures (ManifestRecord, ArchiveEntry, TreeNode, ...)
- errors: Error taxonomy for per-archive failures
- result: Ok/Err result type for per-archive work
- catalog: Archive Catalog built from a list of archive paths
- graph: Containment graph of embedded archives
- discovery: Directory scan
"""

from .types import (
    AccessKind, AccessRule, AccessTarget, AccessWidenerEntry,
    ArchiveEntry, ArchiveKey, Environment, ManifestRecord,
    MixinConfigRef, MixinEntry, NodeMarker, ScanIssue, TreeNode,
)
from .errors import (
    AccessWidenerParseError, ArchiveOpenError, CycleDetectedError,
    DirectoryScanError, EntryNotFoundError, ManifestParseError,
    MixinConfigError, ModlensError, UnresolvedEmbedError,
)
from .result import Err, Ok, Result

__all__ = [
    # Types
    "AccessKind", "AccessRule", "AccessTarget", "AccessWidenerEntry",
    "ArchiveEntry", "ArchiveKey", "Environment", "ManifestRecord",
    "MixinConfigRef", "MixinEntry", "NodeMarker", "ScanIssue", "TreeNode",
    # Errors
    "AccessWidenerParseError", "ArchiveOpenError", "CycleDetectedError",
    "DirectoryScanError", "EntryNotFoundError", "ManifestParseError",
    "MixinConfigError", "ModlensError", "UnresolvedEmbedError",
    # Result
    "Err", "Ok", "Result",
]
