"""Unit tests for mixin config decoding."""

import json

import pytest

from modlens.core.errors import MixinConfigError
from modlens.core.types import Environment
from modlens.parsing.mixins import parse_mixin_config


def _config(**data) -> bytes:
    return json.dumps(data).encode("utf-8")


class TestMixinConfig:
    def test_sections_map_to_sides(self):
        config = parse_mixin_config(
            _config(package="foo", mixins=["Common"], client=["foo.Bar"], server=["Srv"]),
            "m.jar!/m.mixins.json",
        )
        entries = config.entries("m")

        assert [(e.environment_side, e.class_name) for e in entries] == [
            (Environment.COMMON, "Common"),
            (Environment.CLIENT, "foo.Bar"),
            (Environment.SERVER, "Srv"),
        ]
        assert all(e.owning_mod == "m" for e in entries)

    def test_forced_environment_overrides_sections(self):
        config = parse_mixin_config(_config(mixins=["A"], server=["B"]), "m.json")
        entries = config.entries("m", forced=Environment.CLIENT)

        assert {e.environment_side for e in entries} == {Environment.CLIENT}

    def test_null_sections_and_plugin(self):
        config = parse_mixin_config(
            _config(mixins=None, client=["X"], plugin="foo.Plugin", required=True), "m.json"
        )

        assert config.plugin == "foo.Plugin"
        assert [e.class_name for e in config.entries("m")] == ["X"]

    def test_malformed_config(self):
        with pytest.raises(MixinConfigError) as exc:
            parse_mixin_config(b"[1, 2", "m.jar!/broken.json")
        assert exc.value.path == "m.jar!/broken.json"

    def test_wrong_section_type(self):
        with pytest.raises(MixinConfigError):
            parse_mixin_config(_config(client="foo.Bar"), "m.json")
