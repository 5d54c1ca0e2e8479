"""
Flat Listers.

Per archive and per declaring mod, collect the mixin classes of every
referenced mixin config, or the rules of the referenced access widener.
Unreadable files are reported as ScanIssue annotations and skipped.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from ..config import NESTED_SEPARATOR
from ..core.errors import (
    AccessWidenerParseError,
    ArchiveOpenError,
    EntryNotFoundError,
    MixinConfigError,
)
from ..core.types import (
    AccessRule,
    AccessWidenerEntry,
    ArchiveEntry,
    Environment,
    ManifestRecord,
    MixinEntry,
    ScanIssue,
    archive_name,
)
from ..parsing.access_widener import parse_access_widener
from ..parsing.archive import ByteSource, ZipByteSource, decode_text
from ..parsing.mixins import parse_mixin_config

logger = logging.getLogger(__name__)

SIDE_ORDER = (Environment.COMMON, Environment.CLIENT, Environment.SERVER)


@dataclass
class MixinGroup:
    """Mixins declared by one mod inside one archive."""

    archive_path: str
    owning_mod: str
    entries: List[MixinEntry] = field(default_factory=list)
    plugins: List[str] = field(default_factory=list)

    @property
    def header(self) -> str:
        return f"{self.owning_mod} ({archive_name(self.archive_path)})"

    def by_side(self) -> Dict[Environment, List[MixinEntry]]:
        """Entries grouped by side, sides in common/client/server order."""
        grouped: Dict[Environment, List[MixinEntry]] = {side: [] for side in SIDE_ORDER}
        for entry in self.entries:
            grouped[entry.environment_side].append(entry)
        return grouped


@dataclass
class MixinListing:
    groups: List[MixinGroup] = field(default_factory=list)
    issues: List[ScanIssue] = field(default_factory=list)


@dataclass
class AccessWidenerGroup:
    """The access widener of one mod inside one archive."""

    archive_path: str
    widener: AccessWidenerEntry
    source_path: str

    @property
    def header(self) -> str:
        return f"{self.widener.owning_mod} ({archive_name(self.archive_path)})"


@dataclass
class AccessWidenerListing:
    groups: List[AccessWidenerGroup] = field(default_factory=list)
    issues: List[ScanIssue] = field(default_factory=list)


def _contains(needle: str, *values: Optional[str]) -> bool:
    wanted = needle.casefold()
    return any(wanted in value.casefold() for value in values if value)


def rule_matches(rule: AccessRule, needle: str) -> bool:
    return _contains(needle, rule.class_ref, rule.member_name, rule.descriptor)


def _read(source: ByteSource, record: ManifestRecord, entry_path: str) -> bytes:
    return source.read(record.source_archive, entry_path)


def _mixins_of(
    record: ManifestRecord, source: ByteSource, issues: List[ScanIssue]
) -> MixinGroup:
    group = MixinGroup(archive_path=record.source_archive, owning_mod=record.id)
    for ref in record.mixin_configs:
        location = f"{record.source_archive}{NESTED_SEPARATOR}{ref.path}"
        try:
            config = parse_mixin_config(_read(source, record, ref.path), location)
        except (EntryNotFoundError, ArchiveOpenError) as e:
            error = MixinConfigError(f"cannot read mixin config: {e.message}", path=location)
            logger.warning(str(error))
            issues.append(ScanIssue.from_error(error))
            continue
        except MixinConfigError as e:
            logger.warning(str(e))
            issues.append(ScanIssue.from_error(e))
            continue

        group.entries.extend(config.entries(record.id, ref.environment))
        if config.plugin:
            group.plugins.append(config.plugin)
    return group


def list_mixins(
    entries: Iterable[ArchiveEntry],
    source: ByteSource | None = None,
    needle: Optional[str] = None,
) -> MixinListing:
    """
    List mixin classes per archive and mod.

    Args:
        entries: Archives in output order.
        source: Byte source for reading the mixin configs.
        needle: Case-insensitive substring filter on class names.

    Returns:
        A MixinListing. Mods without any (matching) mixin class are left out.
    """
    source = source or ZipByteSource()
    listing = MixinListing()

    for entry in entries:
        for record in entry.manifests:
            if not record.mixin_configs:
                continue
            group = _mixins_of(record, source, listing.issues)
            if needle:
                group.entries = [e for e in group.entries if _contains(needle, e.class_name)]
            if group.entries:
                listing.groups.append(group)

    return listing


def _widener_of(
    record: ManifestRecord, source: ByteSource, issues: List[ScanIssue]
) -> Optional[AccessWidenerEntry]:
    location = f"{record.source_archive}{NESTED_SEPARATOR}{record.access_widener_path}"
    try:
        text = decode_text(_read(source, record, record.access_widener_path))
        widener, skipped = parse_access_widener(text, record.id, path=location)
    except (EntryNotFoundError, ArchiveOpenError) as e:
        error = AccessWidenerParseError(f"cannot read access widener: {e.message}", path=location)
        logger.warning(str(error))
        issues.append(ScanIssue.from_error(error))
        return None
    except UnicodeDecodeError as e:
        error = AccessWidenerParseError(f"access widener is not UTF-8: {e}", path=location)
        logger.warning(str(error))
        issues.append(ScanIssue.from_error(error))
        return None
    except AccessWidenerParseError as e:
        logger.warning(str(e))
        issues.append(ScanIssue.from_error(e))
        return None

    for message in skipped:
        issues.append(ScanIssue(path=location, message=f"skipped rule, {message}", kind="access_widener"))
    return widener


def list_access_wideners(
    entries: Iterable[ArchiveEntry],
    source: ByteSource | None = None,
    needle: Optional[str] = None,
) -> AccessWidenerListing:
    """
    List access-widener rules per archive and mod.

    With ``needle`` set, only rules whose class, member name or descriptor
    contain it are kept, and mods without a matching rule are left out.
    Mods that declare no access widener never appear.
    """
    source = source or ZipByteSource()
    listing = AccessWidenerListing()

    for entry in entries:
        for record in entry.manifests:
            if not record.access_widener_path:
                continue
            widener = _widener_of(record, source, listing.issues)
            if widener is None:
                continue
            if needle:
                rules = tuple(rule for rule in widener.rules if rule_matches(rule, needle))
                if not rules:
                    continue
                widener = widener.model_copy(update={"rules": rules})
            listing.groups.append(AccessWidenerGroup(
                archive_path=entry.archive_path,
                widener=widener,
                source_path=record.access_widener_path,
            ))

    return listing
