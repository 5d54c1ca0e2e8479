"""Shared fixtures: real jars on disk and an in-memory byte source."""

import io
import json
import struct
import zipfile
from pathlib import Path
from typing import Any, Callable, Dict, Optional

import pytest

from modlens.core.errors import ArchiveOpenError, EntryNotFoundError


def _encode(content: Any) -> bytes:
    if isinstance(content, bytes):
        return content
    if isinstance(content, str):
        return content.encode("utf-8")
    return json.dumps(content).encode("utf-8")


def build_jar_bytes(manifest: Any = None, files: Optional[Dict[str, Any]] = None) -> bytes:
    """Zip ``files`` (plus fabric.mod.json when given) into jar bytes."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as jar:
        if manifest is not None:
            jar.writestr("fabric.mod.json", _encode(manifest))
        for name, content in (files or {}).items():
            jar.writestr(name, _encode(content))
    return buffer.getvalue()


class MemoryByteSource:
    """ByteSource over a dict of ``{archive_path: {entry: content}}``."""

    def __init__(self, archives: Dict[str, Dict[str, Any]]):
        self.archives = archives
        self.reads = []

    def read(self, archive_path: str, entry: str) -> bytes:
        self.reads.append((archive_path, entry))
        if archive_path not in self.archives:
            raise ArchiveOpenError("embedded archive not found", path=archive_path)
        files = self.archives[archive_path]
        if entry not in files:
            raise EntryNotFoundError(f"no entry '{entry}'", path=archive_path)
        return _encode(files[entry])


@pytest.fixture
def jar_bytes() -> Callable[..., bytes]:
    return build_jar_bytes


@pytest.fixture
def mods_dir(tmp_path) -> Path:
    directory = tmp_path / "mods"
    directory.mkdir()
    return directory


@pytest.fixture
def write_jar(mods_dir) -> Callable[..., Path]:
    """Write a jar into ``mods_dir`` and return its path."""
    def _write(name: str, manifest: Any = None, files: Optional[Dict[str, Any]] = None) -> Path:
        path = mods_dir / name
        path.write_bytes(build_jar_bytes(manifest, files))
        return path
    return _write


def scramble_jar_bytes(payload: bytes, entry: str = "fabric.mod.json", count: int = 10) -> bytes:
    """XOR ``count`` bytes of the compressed stream of ``entry``."""
    with zipfile.ZipFile(io.BytesIO(payload)) as jar:
        info = jar.getinfo(entry)
    data = bytearray(payload)
    name_len, extra_len = struct.unpack("<HH", data[info.header_offset + 26:info.header_offset + 30])
    start = info.header_offset + 30 + name_len + extra_len + 2
    for offset in range(start, start + min(count, info.compress_size - 2)):
        data[offset] ^= 0xFF
    return bytes(data)


@pytest.fixture
def write_scrambled_jar(mods_dir) -> Callable[..., Path]:
    """Write a deflated jar whose manifest stream is corrupted."""
    def _write(name: str) -> Path:
        manifest = {"id": "broken", "description": "padding " * 40}
        buffer = io.BytesIO()
        with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED) as jar:
            jar.writestr("fabric.mod.json", _encode(manifest))
        path = mods_dir / name
        path.write_bytes(scramble_jar_bytes(buffer.getvalue()))
        return path
    return _write


@pytest.fixture
def memory_source() -> Callable[[Dict[str, Dict[str, Any]]], MemoryByteSource]:
    return MemoryByteSource


def manifest(mod_id: str, jars=(), **extra) -> Dict[str, Any]:
    data = {"schemaVersion": 1, "id": mod_id, "version": "1.0.0"}
    if jars:
        data["jars"] = [{"file": ref} for ref in jars]
    data.update(extra)
    return data


@pytest.fixture
def make_manifest() -> Callable[..., Dict[str, Any]]:
    return manifest
