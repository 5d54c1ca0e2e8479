"""Unit tests for directory scanning."""

import pytest

from modlens.core.discovery import discover_archives
from modlens.core.errors import DirectoryScanError


class TestDiscoverArchives:
    def test_lists_jars_sorted_by_name(self, mods_dir):
        for name in ("zeta.jar", "Alpha.JAR", "beta.jar", "notes.txt"):
            (mods_dir / name).write_bytes(b"")
        (mods_dir / "nested").mkdir()
        (mods_dir / "nested" / "deep.jar").write_bytes(b"")
        (mods_dir / "folder.jar").mkdir()

        found = discover_archives(mods_dir)

        assert [p.name for p in found] == ["Alpha.JAR", "beta.jar", "zeta.jar"]

    def test_empty_directory(self, mods_dir):
        assert discover_archives(mods_dir) == []

    def test_custom_suffixes(self, mods_dir):
        (mods_dir / "a.zip").write_bytes(b"")
        (mods_dir / "b.jar").write_bytes(b"")

        assert [p.name for p in discover_archives(mods_dir, suffixes={".zip"})] == ["a.zip"]

    def test_missing_directory(self, tmp_path):
        with pytest.raises(DirectoryScanError) as exc:
            discover_archives(tmp_path / "does-not-exist")
        assert exc.value.kind == "directory"
        assert "cannot list directory" in exc.value.message
