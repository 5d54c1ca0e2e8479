"""
Tree Renderer.

Projects the containment graph into TreeNode forests and formats them.

- Normal mode walks parent -> embedded child from the top-level mods.
- Reverse mode walks child -> embedding parent from every embedded node.

Both walks keep a visited set per path: a node already on the current path
becomes a CYCLE leaf, while the same node under two different parents is
rendered under each of them.
"""

from typing import FrozenSet, Iterable, Iterator, List, Optional

from rich.text import Text
from rich.tree import Tree

from ..config import CYCLE_MARKER, INDENT_UNIT, NOT_A_MOD_MARKER, UNRESOLVED_MARKER
from ..core.errors import CycleDetectedError
from ..core.graph import ContainmentGraph, LeafKey, NodeKey, leaf_name
from ..core.types import NodeMarker, TreeNode


def render_forest(
    graph: ContainmentGraph,
    reverse: bool = False,
    needle: Optional[str] = None,
) -> List[TreeNode]:
    """
    Build the jar-in-jar forest.

    Args:
        graph: Resolved containment graph. Never modified.
        reverse: Walk from embedded archives up to the archives embedding them.
        needle: Case-insensitive substring filter on root mod ids / names.

    Returns:
        Root TreeNodes in discovery order.
    """
    roots = graph.embedded_keys() if reverse else graph.root_keys()
    forest = [_build(graph, key, 0, frozenset(), reverse) for key in roots]
    return filter_forest(forest, needle)


def _build(
    graph: ContainmentGraph,
    key: NodeKey,
    depth: int,
    path: FrozenSet[NodeKey],
    reverse: bool,
) -> TreeNode:
    node = _describe(graph, key, depth)
    try:
        path = _enter(path, key, node.label)
    except CycleDetectedError as e:
        return node.model_copy(update={"marker": NodeMarker.CYCLE, "detail": e.message})

    next_keys = graph.parents(key) if reverse else graph.children(key)
    if not next_keys:
        return node

    children = tuple(_build(graph, k, depth + 1, path, reverse) for k in next_keys)
    return node.model_copy(update={"children": children})


def _enter(path: FrozenSet[NodeKey], key: NodeKey, label: str) -> FrozenSet[NodeKey]:
    """Extend the current path with key, refusing to revisit a node on it."""
    if key in path:
        raise CycleDetectedError(f"{label} is already on this branch")
    return path | {key}


def _describe(graph: ContainmentGraph, key: NodeKey, depth: int) -> TreeNode:
    data = graph.node_data(key)
    if isinstance(key, LeafKey):
        name = leaf_name(key)
        label = key.ref if data["marker"] == NodeMarker.UNRESOLVED else name
        return TreeNode(
            label=label,
            depth=depth,
            archive_name=name,
            marker=data["marker"],
            detail=data.get("detail"),
        )

    record = data["record"]
    return TreeNode(
        label=f"{record.id} ({key.archive_name})",
        depth=depth,
        mod_id=record.id,
        display_name=record.display_name,
        archive_name=key.archive_name,
    )


def matches(node: TreeNode, needle: str) -> bool:
    """Case-insensitive substring match on a node's mod id or display name."""
    wanted = needle.casefold()
    return any(
        wanted in value.casefold()
        for value in (node.mod_id, node.display_name)
        if value
    )


def filter_forest(forest: Iterable[TreeNode], needle: Optional[str]) -> List[TreeNode]:
    """
    Keep only the roots matching ``needle``.

    Descendants are never filtered: a kept root keeps its whole subtree.
    """
    if not needle:
        return list(forest)
    return [root for root in forest if matches(root, needle)]


def describe_marker(node: TreeNode) -> str:
    """Suffix shown after a node's label, empty for plain mods."""
    if node.marker == NodeMarker.CYCLE:
        return f"[{CYCLE_MARKER}]"
    if node.marker == NodeMarker.UNRESOLVED:
        if node.detail:
            return f"[{UNRESOLVED_MARKER}: {node.detail}]"
        return f"[{UNRESOLVED_MARKER}]"
    if node.marker == NodeMarker.NOT_A_MOD:
        return NOT_A_MOD_MARKER
    return ""


def format_node(node: TreeNode) -> str:
    suffix = describe_marker(node)
    return f"{node.label} {suffix}" if suffix else node.label


def format_lines(forest: Iterable[TreeNode], indent: str = INDENT_UNIT) -> Iterator[str]:
    """Yield one line per node, indented by one ``indent`` unit per depth."""
    stack = list(reversed(list(forest)))
    while stack:
        node = stack.pop()
        yield f"{indent * node.depth}{format_node(node)}"
        stack.extend(reversed(node.children))


_MARKER_STYLES = {
    NodeMarker.CYCLE: "yellow",
    NodeMarker.UNRESOLVED: "red",
    NodeMarker.NOT_A_MOD: "dim",
}


def _rich_label(node: TreeNode) -> Text:
    label = Text(node.label, style=_MARKER_STYLES.get(node.marker, "cyan"))
    suffix = describe_marker(node)
    if suffix:
        label.append(f" {suffix}", style=_MARKER_STYLES[node.marker])
    return label


def to_rich_tree(forest: Iterable[TreeNode], title: str = "Jar-in-Jar") -> Tree:
    """Build a rich Tree with every root of ``forest`` as a top-level branch."""
    tree = Tree(f"📦 [bold]{title}[/bold]")
    pending = [(tree, root) for root in forest]
    while pending:
        branch, node = pending.pop(0)
        child_branch = branch.add(_rich_label(node))
        pending.extend((child_branch, child) for child in node.children)
    return tree
