"""
Parsing module for modlens.

Decoders for everything read out of a mod archive.

Key Components:
- archive: ByteSource contract and the zipfile-backed implementation
- manifest: fabric.mod.json -> ManifestRecord
- mixins: mixin config -> MixinEntry
- access_widener: access-widener file -> AccessWidenerEntry
"""

from .access_widener import parse_access_widener, parse_rule
from .archive import ByteSource, ZipByteSource, decode_text, nested_path
from .manifest import parse_manifest
from .mixins import MixinConfig, parse_mixin_config

__all__ = [
    "ByteSource",
    "MixinConfig",
    "ZipByteSource",
    "decode_text",
    "nested_path",
    "parse_access_widener",
    "parse_manifest",
    "parse_mixin_config",
    "parse_rule",
]
