"""
Access-widener parsing.

File format::

    accessWidener v1 named
    # comment
    accessible class net/minecraft/Foo
    extendable method net/minecraft/Foo bar ()V
    mutable field net/minecraft/Foo baz I

Version 2 files may prefix a kind with ``transitive-``.
"""

import logging
from typing import List, Optional, Tuple

from ..core.errors import AccessWidenerParseError
from ..core.types import AccessKind, AccessRule, AccessTarget, AccessWidenerEntry

logger = logging.getLogger(__name__)

HEADER_KEYWORD = "accessWidener"
SUPPORTED_VERSIONS = {"v1", "v2"}
TRANSITIVE_PREFIX = "transitive-"


def _strip_comment(line: str) -> str:
    return line.split("#", 1)[0].strip()


def parse_rule(line: str) -> AccessRule:
    """
    Parse one rule line.

    Raises:
        ValueError: The line is not a valid rule.
    """
    tokens = line.split()
    if len(tokens) < 3:
        raise ValueError(f"expected at least 3 tokens, got {len(tokens)}")

    raw_kind, raw_target, class_ref, *member = tokens
    transitive = raw_kind.startswith(TRANSITIVE_PREFIX)
    if transitive:
        raw_kind = raw_kind[len(TRANSITIVE_PREFIX):]

    kind = AccessKind(raw_kind)
    target = AccessTarget(raw_target)

    if target == AccessTarget.CLASS:
        if member:
            raise ValueError("class rules take no member name or descriptor")
        return AccessRule(kind=kind, target=target, class_ref=class_ref, transitive=transitive)

    if len(member) != 2:
        raise ValueError(f"{target} rules need a name and a descriptor")
    return AccessRule(
        kind=kind,
        target=target,
        class_ref=class_ref,
        member_name=member[0],
        descriptor=member[1],
        transitive=transitive,
    )


def parse_access_widener(
    text: str, owning_mod: str, path: Optional[str] = None
) -> Tuple[AccessWidenerEntry, List[str]]:
    """
    Parse an access-widener file.

    Args:
        text: Decoded file contents.
        owning_mod: Mod id whose manifest references the file.
        path: Location used in error messages.

    Returns:
        The parsed entry and a list of messages for rule lines that were
        skipped because they are malformed.

    Raises:
        AccessWidenerParseError: The header is missing or invalid.
    """
    lines = [(number, _strip_comment(raw)) for number, raw in enumerate(text.splitlines(), 1)]
    lines = [(number, line) for number, line in lines if line]

    if not lines:
        raise AccessWidenerParseError("empty access widener", path=path)

    header_number, header = lines[0]
    parts = header.split()
    if len(parts) != 3 or parts[0] != HEADER_KEYWORD:
        raise AccessWidenerParseError(
            f"line {header_number}: invalid header {header!r}", path=path
        )
    _, version_tag, namespace = parts
    if version_tag not in SUPPORTED_VERSIONS:
        logger.warning(f"{path or owning_mod}: unknown access widener version {version_tag}")

    rules: List[AccessRule] = []
    skipped: List[str] = []
    for number, line in lines[1:]:
        try:
            rules.append(parse_rule(line))
        except ValueError as e:
            skipped.append(f"line {number}: {e}")

    entry = AccessWidenerEntry(
        owning_mod=owning_mod,
        namespace=namespace,
        version_tag=version_tag,
        rules=tuple(rules),
    )
    return entry, skipped
