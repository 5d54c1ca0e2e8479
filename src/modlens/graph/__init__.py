"""
Graph rendering for modlens.

Turns the containment graph into TreeNode forests and text or rich output.
"""

from .tree import filter_forest, format_lines, render_forest, to_rich_tree

__all__ = [
    "filter_forest",
    "format_lines",
    "render_forest",
    "to_rich_tree",
]
