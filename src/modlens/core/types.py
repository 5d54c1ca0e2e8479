"""
Core type definitions for modlens.

Every record here is created once from archive bytes and never mutated
afterwards, hence frozen pydantic models with tuple sequences.
"""

from enum import StrEnum
from pathlib import PurePosixPath
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict

from .errors import ModlensError


class Environment(StrEnum):
    """Side of the game a mod or mixin applies to."""
    COMMON = "common"
    CLIENT = "client"
    SERVER = "server"


class AccessKind(StrEnum):
    """Access-widener rule kinds."""
    ACCESSIBLE = "accessible"
    EXTENDABLE = "extendable"
    MUTABLE = "mutable"


class AccessTarget(StrEnum):
    """What an access-widener rule applies to."""
    CLASS = "class"
    METHOD = "method"
    FIELD = "field"


class NodeMarker(StrEnum):
    """Why a tree node is a leaf that does not stand for a parsed mod."""
    CYCLE = "cycle"
    UNRESOLVED = "unresolved"
    NOT_A_MOD = "not_a_mod"


def archive_name(archive_path: str) -> str:
    """Last path segment of a (possibly nested) archive path."""
    return PurePosixPath(archive_path.replace("\\", "/")).name or archive_path


class ArchiveKey(BaseModel):
    """
    Identity of a mod inside the scan.

    Two archives with the same file name declaring the same mod id are the
    same identity (e.g. a top-level B.jar and META-INF/jars/B.jar inside A).
    Different file names declaring the same id stay distinct.
    """
    archive_name: str
    mod_id: str

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"{self.mod_id} ({self.archive_name})"


class MixinConfigRef(BaseModel):
    """A mixin config path as declared in the manifest."""
    path: str
    environment: Optional[Environment] = None

    model_config = ConfigDict(frozen=True)


class ManifestRecord(BaseModel):
    """One mod as declared by a fabric.mod.json inside an archive."""
    id: str
    version: Optional[str] = None
    display_name: Optional[str] = None
    environment: Environment = Environment.COMMON
    source_archive: str
    embedded_refs: Tuple[str, ...] = ()
    mixin_configs: Tuple[MixinConfigRef, ...] = ()
    access_widener_path: Optional[str] = None

    model_config = ConfigDict(frozen=True)

    @property
    def mixin_config_paths(self) -> Tuple[str, ...]:
        return tuple(ref.path for ref in self.mixin_configs)

    @property
    def key(self) -> ArchiveKey:
        return ArchiveKey(archive_name=archive_name(self.source_archive), mod_id=self.id)


class ArchiveEntry(BaseModel):
    """
    A discovered archive together with the mods it declares.

    Nested archives use the ``outer.jar!/inner/path.jar`` notation for
    archive_path and keep a pointer to their parent archive.
    """
    archive_path: str
    manifests: Tuple[ManifestRecord, ...] = ()
    parent_path: Optional[str] = None

    model_config = ConfigDict(frozen=True)

    @property
    def archive_name(self) -> str:
        return archive_name(self.archive_path)


class MixinEntry(BaseModel):
    """A single mixin class declared by a mod."""
    owning_mod: str
    environment_side: Environment
    class_name: str

    model_config = ConfigDict(frozen=True)


class AccessRule(BaseModel):
    """One line of an access-widener file."""
    kind: AccessKind
    target: AccessTarget
    class_ref: str
    member_name: Optional[str] = None
    descriptor: Optional[str] = None
    transitive: bool = False

    model_config = ConfigDict(frozen=True)

    def render(self) -> str:
        """Format the rule back into access-widener syntax."""
        kind = f"transitive-{self.kind}" if self.transitive else str(self.kind)
        parts = [kind, str(self.target), self.class_ref]
        if self.member_name is not None:
            parts.append(self.member_name)
        if self.descriptor is not None:
            parts.append(self.descriptor)
        return " ".join(parts)


class AccessWidenerEntry(BaseModel):
    """Parsed contents of one mod's access-widener file."""
    owning_mod: str
    namespace: str
    version_tag: str
    rules: Tuple[AccessRule, ...] = ()

    model_config = ConfigDict(frozen=True)


class TreeNode(BaseModel):
    """
    Render-ready projection of the containment graph.

    Holds display data only; it does not own the ManifestRecord it was
    built from.
    """
    label: str
    children: Tuple["TreeNode", ...] = ()
    depth: int = 0
    mod_id: Optional[str] = None
    display_name: Optional[str] = None
    archive_name: Optional[str] = None
    marker: Optional[NodeMarker] = None
    detail: Optional[str] = None

    model_config = ConfigDict(frozen=True)

    def iter_edges(self):
        """Yield (parent_label, child_label) pairs for this subtree."""
        for child in self.children:
            yield (self.label, child.label)
            yield from child.iter_edges()


TreeNode.model_rebuild()


class ScanIssue(BaseModel):
    """A recoverable per-item problem surfaced next to the output."""
    path: str
    message: str
    kind: str = "error"

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_error(cls, error: ModlensError, path: Optional[str] = None) -> "ScanIssue":
        return cls(path=path or error.path or "", message=error.message, kind=error.kind)

    def __str__(self) -> str:
        return f"{self.path}: {self.message}"
