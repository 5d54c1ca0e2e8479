"""Unit tests for the mixin and access-widener listers."""

from modlens.analysis.listers import list_access_wideners, list_mixins
from modlens.core.catalog import load_archive
from modlens.core.types import Environment

AW_TEXT = """accessWidener v1 named
accessible class net/minecraft/client/Foo
extendable method net/minecraft/client/Foo render (I)V
mutable field net/minecraft/server/Bar ticks I
"""


def _entries(source, *paths):
    return [load_archive(path, source).unwrap() for path in paths]


class TestListMixins:
    def test_groups_by_mod_and_side(self, memory_source, make_manifest):
        source = memory_source({"m.jar": {
            "fabric.mod.json": make_manifest("m", mixins=["m.mixins.json"]),
            "m.mixins.json": {"package": "foo", "mixins": ["CommonMixin"], "client": ["foo.Bar"]},
        }})

        listing = list_mixins(_entries(source, "m.jar"), source)

        (group,) = listing.groups
        assert group.header == "m (m.jar)"
        sides = group.by_side()
        assert [e.class_name for e in sides[Environment.COMMON]] == ["CommonMixin"]
        assert [e.class_name for e in sides[Environment.CLIENT]] == ["foo.Bar"]
        assert sides[Environment.SERVER] == []
        assert listing.issues == []

    def test_client_config_is_kept_apart_from_common(self, memory_source, make_manifest):
        source = memory_source({"m.jar": {
            "fabric.mod.json": make_manifest("m", mixins=["mixins.common.json", "mixins.client.json"]),
            "mixins.common.json": {"mixins": ["foo.Common"]},
            "mixins.client.json": {"client": ["foo.Bar"]},
        }})

        (group,) = list_mixins(_entries(source, "m.jar"), source).groups
        sides = group.by_side()

        assert [e.class_name for e in sides[Environment.CLIENT]] == ["foo.Bar"]
        assert [e.class_name for e in sides[Environment.COMMON]] == ["foo.Common"]

    def test_configs_are_read_in_declared_order(self, memory_source, make_manifest):
        source = memory_source({"m.jar": {
            "fabric.mod.json": make_manifest(
                "m", mixins=["b.json", {"config": "a.json", "environment": "server"}],
            ),
            "b.json": {"mixins": ["First"]},
            "a.json": {"mixins": ["Second"], "plugin": "m.Plugin"},
        }})

        (group,) = list_mixins(_entries(source, "m.jar"), source).groups

        assert [(e.class_name, e.environment_side) for e in group.entries] == [
            ("First", Environment.COMMON),
            ("Second", Environment.SERVER),
        ]
        assert group.plugins == ["m.Plugin"]

    def test_mods_without_mixins_are_omitted(self, memory_source, make_manifest):
        source = memory_source({
            "plain.jar": {"fabric.mod.json": make_manifest("plain")},
            "empty.jar": {
                "fabric.mod.json": make_manifest("empty", mixins=["e.json"]),
                "e.json": {"mixins": []},
            },
        })

        listing = list_mixins(_entries(source, "plain.jar", "empty.jar"), source)

        assert listing.groups == []

    def test_missing_config_is_reported_not_fatal(self, memory_source, make_manifest):
        source = memory_source({"m.jar": {
            "fabric.mod.json": make_manifest("m", mixins=["gone.json", "ok.json"]),
            "ok.json": {"client": ["Kept"]},
        }})

        listing = list_mixins(_entries(source, "m.jar"), source)

        assert [e.class_name for e in listing.groups[0].entries] == ["Kept"]
        assert [(i.kind, i.path) for i in listing.issues] == [("mixin_config", "m.jar!/gone.json")]

    def test_filter_on_class_name(self, memory_source, make_manifest):
        source = memory_source({
            "a.jar": {
                "fabric.mod.json": make_manifest("a", mixins=["a.json"]),
                "a.json": {"mixins": ["WorldRendererMixin", "ChatMixin"]},
            },
            "b.jar": {
                "fabric.mod.json": make_manifest("b", mixins=["b.json"]),
                "b.json": {"mixins": ["EntityMixin"]},
            },
        })

        listing = list_mixins(_entries(source, "a.jar", "b.jar"), source, needle="render")

        (group,) = listing.groups
        assert [e.class_name for e in group.entries] == ["WorldRendererMixin"]


class TestListAccessWideners:
    def test_lists_rules(self, memory_source, make_manifest):
        source = memory_source({"m.jar": {
            "fabric.mod.json": make_manifest("m", accessWidener="m.accesswidener"),
            "m.accesswidener": AW_TEXT,
        }})

        listing = list_access_wideners(_entries(source, "m.jar"), source)

        (group,) = listing.groups
        assert group.header == "m (m.jar)"
        assert group.source_path == "m.accesswidener"
        assert group.widener.namespace == "named"
        assert [r.render() for r in group.widener.rules] == AW_TEXT.splitlines()[1:]

    def test_mods_without_access_widener_are_omitted(self, memory_source, make_manifest):
        source = memory_source({"plain.jar": {"fabric.mod.json": make_manifest("plain")}})

        assert list_access_wideners(_entries(source, "plain.jar"), source).groups == []

    def test_filter_keeps_matching_rules_only(self, memory_source, make_manifest):
        source = memory_source({
            "m.jar": {
                "fabric.mod.json": make_manifest("m", accessWidener="m.aw"),
                "m.aw": AW_TEXT,
            },
            "n.jar": {
                "fabric.mod.json": make_manifest("n", accessWidener="n.aw"),
                "n.aw": "accessWidener v1 named\naccessible class a/Unrelated\n",
            },
        })

        listing = list_access_wideners(_entries(source, "m.jar", "n.jar"), source, needle="server")

        (group,) = listing.groups
        assert [r.class_ref for r in group.widener.rules] == ["net/minecraft/server/Bar"]

    def test_filter_matches_member_and_descriptor(self, memory_source, make_manifest):
        source = memory_source({"m.jar": {
            "fabric.mod.json": make_manifest("m", accessWidener="m.aw"),
            "m.aw": AW_TEXT,
        }})
        entries = _entries(source, "m.jar")

        by_member = list_access_wideners(entries, source, needle="TICKS").groups[0]
        by_descriptor = list_access_wideners(entries, source, needle="(I)V").groups[0]

        assert [r.member_name for r in by_member.widener.rules] == ["ticks"]
        assert [r.member_name for r in by_descriptor.widener.rules] == ["render"]

    def test_invalid_header_is_reported(self, memory_source, make_manifest):
        source = memory_source({"m.jar": {
            "fabric.mod.json": make_manifest("m", accessWidener="m.aw"),
            "m.aw": "not a header\n",
        }})

        listing = list_access_wideners(_entries(source, "m.jar"), source)

        assert listing.groups == []
        assert [i.kind for i in listing.issues] == ["access_widener"]

    def test_skipped_rules_are_reported(self, memory_source, make_manifest):
        source = memory_source({"m.jar": {
            "fabric.mod.json": make_manifest("m", accessWidener="m.aw"),
            "m.aw": "accessWidener v1 named\naccessible class a/B\nbogus line\n",
        }})

        listing = list_access_wideners(_entries(source, "m.jar"), source)

        assert len(listing.groups[0].widener.rules) == 1
        assert listing.issues[0].message.startswith("skipped rule, line 3")

    def test_missing_file_is_reported(self, memory_source, make_manifest):
        source = memory_source({"m.jar": {
            "fabric.mod.json": make_manifest("m", accessWidener="gone.aw"),
        }})

        listing = list_access_wideners(_entries(source, "m.jar"), source)

        assert listing.groups == []
        assert listing.issues[0].path == "m.jar!/gone.aw"
