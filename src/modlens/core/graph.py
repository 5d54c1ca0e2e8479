"""
Containment Graph.

Resolves the ``jars`` declarations of every manifest into parent -> child
edges. Embedded archives are read through the same ByteSource and decoded
with the same manifest parser as top-level archives, driven by an explicit
work-list instead of recursion.

Node keys:
- ArchiveKey for every parsed mod, shared by all archives with the same
  file name and mod id.
- LeafKey for embeds that are not mods: jars without a manifest
  (NOT_A_MOD) and declarations that could not be resolved (UNRESOLVED).

Edges carry the declared ``ref`` and its ``position`` in the parent's
``jars`` list, which is the order children are rendered in.
"""

import logging
from collections import deque
from typing import Any, Deque, Dict, Iterator, List, NamedTuple, Optional, Set, Union

import networkx as nx

from ..parsing.archive import ByteSource, ZipByteSource, nested_path
from .catalog import ArchiveCatalog, load_archive
from .errors import UnresolvedEmbedError
from .result import Err
from .types import ArchiveEntry, ArchiveKey, ManifestRecord, NodeMarker, ScanIssue, archive_name

logger = logging.getLogger(__name__)


class LeafKey(NamedTuple):
    """Key of a non-mod node hanging off one specific embed declaration."""
    parent: ArchiveKey
    position: int
    ref: str


NodeKey = Union[ArchiveKey, LeafKey]


class ContainmentEdge(NamedTuple):
    parent: ArchiveKey
    child: NodeKey
    ref: str
    position: int


class ContainmentGraph:
    """
    Type-safe wrapper around a NetworkX MultiDiGraph.

    Provides:
    - Mod and leaf nodes with their display data
    - Children in declared order, parents in discovery order
    - Root selection for normal and reversed traversal
    - The archive entries discovered while resolving embeds
    """

    def __init__(self):
        self._graph = nx.MultiDiGraph()
        self._order: Dict[NodeKey, int] = {}
        self._top_level: List[ArchiveKey] = []
        self._entries: List[ArchiveEntry] = []
        self.issues: List[ScanIssue] = []

    # =========================================================================
    # Construction
    # =========================================================================

    def _register(self, key: NodeKey, **attrs) -> None:
        self._order[key] = len(self._order)
        self._graph.add_node(key, **attrs)

    def add_archive(self, entry: ArchiveEntry) -> None:
        """Remember an archive entry (top-level or embedded)."""
        self._entries.append(entry)

    def add_mod(self, record: ManifestRecord, top_level: bool = False) -> bool:
        """
        Add a mod node for ``record``.

        Returns:
            True if this identity was not in the graph yet. An identity that
            already exists keeps the record it was first seen with.
        """
        key = record.key
        if key in self._order:
            return False
        self._register(key, kind="mod", record=record)
        if top_level:
            self._top_level.append(key)
        return True

    def add_leaf(
        self,
        parent: ArchiveKey,
        position: int,
        ref: str,
        marker: NodeMarker,
        archive_path: str,
        detail: Optional[str] = None,
    ) -> LeafKey:
        """Add a NOT_A_MOD or UNRESOLVED leaf under one embed declaration."""
        key = LeafKey(parent=parent, position=position, ref=ref)
        self._register(key, kind=str(marker), marker=marker, archive_path=archive_path, detail=detail)
        self.add_edge(parent, key, ref, position)
        return key

    def add_edge(self, parent: ArchiveKey, child: NodeKey, ref: str, position: int) -> None:
        self._graph.add_edge(parent, child, ref=ref, position=position)

    # =========================================================================
    # Queries
    # =========================================================================

    def has_node(self, key: NodeKey) -> bool:
        return key in self._order

    def node_data(self, key: NodeKey) -> Dict[str, Any]:
        return self._graph.nodes[key]

    def get_record(self, key: NodeKey) -> Optional[ManifestRecord]:
        if not self.has_node(key):
            return None
        return self._graph.nodes[key].get("record")

    def children(self, key: NodeKey) -> List[NodeKey]:
        """Embedded nodes of ``key`` in declared order, one per edge."""
        edges = sorted(
            self._graph.out_edges(key, data=True),
            key=lambda edge: edge[2]["position"],
        )
        return [child for _, child, _ in edges]

    def parents(self, key: NodeKey) -> List[NodeKey]:
        """Nodes that embed ``key``, in discovery order, one per edge."""
        edges = sorted(
            self._graph.in_edges(key, data=True),
            key=lambda edge: (self._order[edge[0]], edge[2]["position"]),
        )
        return [parent for parent, _, _ in edges]

    def root_keys(self) -> List[ArchiveKey]:
        """
        Roots of the normal tree.

        Top-level mods that nothing embeds come first. Top-level mods only
        reachable through a cycle are appended afterwards so that every
        scanned mod shows up somewhere.
        """
        roots = [key for key in self._top_level if self._graph.in_degree(key) == 0]
        reached: Set[NodeKey] = set()
        for root in roots:
            reached.add(root)
            reached.update(nx.descendants(self._graph, root))

        for key in self._top_level:
            if key not in reached:
                roots.append(key)
                reached.add(key)
                reached.update(nx.descendants(self._graph, key))
        return roots

    def embedded_keys(self) -> List[NodeKey]:
        """Roots of the reversed tree: every node some archive embeds."""
        return [key for key in self._order if self._graph.in_degree(key) > 0]

    def iter_edges(self) -> Iterator[ContainmentEdge]:
        for parent, child, data in self._graph.edges(data=True):
            yield ContainmentEdge(parent, child, data["ref"], data["position"])

    def archive_entries(self) -> List[ArchiveEntry]:
        """
        Archives to list in flat listings, top-level first.

        Each entry only keeps the manifests that own their graph identity,
        so an embedded copy of a jar that is also scanned on its own is
        listed once.
        """
        entries = []
        for entry in self._entries:
            owned = tuple(
                record for record in entry.manifests
                if self.get_record(record.key) is record
            )
            if owned:
                entries.append(entry.model_copy(update={"manifests": owned}))
        return entries

    @property
    def node_count(self) -> int:
        return self._graph.number_of_nodes()

    @property
    def edge_count(self) -> int:
        return self._graph.number_of_edges()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "archives": [entry.model_dump(mode="json") for entry in self._entries],
            "edges": [
                {
                    "parent": str(edge.parent),
                    "child": str(edge.child) if isinstance(edge.child, ArchiveKey) else edge.child.ref,
                    "ref": edge.ref,
                    "position": edge.position,
                    "kind": self._graph.nodes[edge.child]["kind"],
                }
                for edge in self.iter_edges()
            ],
            "issues": [issue.model_dump() for issue in self.issues],
        }


def build_containment_graph(
    catalog: ArchiveCatalog,
    source: ByteSource | None = None,
) -> ContainmentGraph:
    """
    Resolve every embed declaration in ``catalog`` into graph edges.

    Each embedded archive is read from inside its parent's bytes and decoded
    like a top-level archive. Failures never abort the build: they become
    UNRESOLVED leaves plus an entry in ``graph.issues``.

    Args:
        catalog: Top-level archives in discovery order.
        source: Byte source able to read nested ``a.jar!/b.jar`` paths.

    Returns:
        The populated ContainmentGraph.
    """
    source = source or ZipByteSource()
    graph = ContainmentGraph()
    pending: Deque[ManifestRecord] = deque()

    for entry in catalog.entries:
        graph.add_archive(entry)
        for record in entry.manifests:
            if graph.add_mod(record, top_level=True):
                pending.append(record)

    while pending:
        record = pending.popleft()
        parent = record.key

        for position, ref in enumerate(record.embedded_refs):
            child_path = nested_path(record.source_archive, ref)
            result = load_archive(child_path, source, parent_path=record.source_archive)

            if isinstance(result, Err):
                error = UnresolvedEmbedError(result.error.message, path=child_path, ref=ref)
                logger.warning(f"Unresolved embed {ref} in {record.source_archive}: {error.message}")
                graph.issues.append(ScanIssue.from_error(error))
                graph.add_leaf(parent, position, ref, NodeMarker.UNRESOLVED, child_path, error.message)
                continue

            entry = result.value
            if entry is None or not entry.manifests:
                graph.add_leaf(parent, position, ref, NodeMarker.NOT_A_MOD, child_path)
                continue

            graph.add_archive(entry)
            for child in entry.manifests:
                if graph.add_mod(child):
                    pending.append(child)
                graph.add_edge(parent, child.key, ref, position)

    logger.debug(f"Containment graph: {graph.node_count} node(s), {graph.edge_count} edge(s)")
    return graph


def leaf_name(key: LeafKey) -> str:
    """Display name of a leaf: the file name of the declared ref."""
    return archive_name(key.ref)
