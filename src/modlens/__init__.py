"""
modlens - Read-only inspector for Fabric mod archives.

Scans the jars in a directory and reports what each one carries:
mixin classes, access-widener rules and embedded (jar-in-jar) mods.

Key Components:
- parsing: Archive byte access and metadata decoders
- core: Data types, catalog and containment graph
- graph: Tree rendering of the containment graph
- analysis: Flat mixin / access-widener listers

Usage:
    from modlens.core.catalog import build_catalog
    from modlens.core.graph import build_containment_graph
    from modlens.graph.tree import render_forest, format_lines

    catalog = build_catalog(paths)
    graph = build_containment_graph(catalog)
    for line in format_lines(render_forest(graph)):
        print(line)
"""

__version__ = "0.1.0"

from .core.types import (
    AccessRule, AccessWidenerEntry, ArchiveEntry, ArchiveKey,
    Environment, ManifestRecord, MixinEntry, TreeNode,
)

__all__ = [
    "__version__",
    "AccessRule",
    "AccessWidenerEntry",
    "ArchiveEntry",
    "ArchiveKey",
    "Environment",
    "ManifestRecord",
    "MixinEntry",
    "TreeNode",
]
