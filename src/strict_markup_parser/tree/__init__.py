"""Tree model and tree building for strict markup parsing.

Key Components:
    Element: Markup element with attributes and ordered children
    Text: Trimmed run of text content
    TreeBuilder: Builds a node tree from scanner output
"""

from .builder import OpenElement, TreeBuilder, build_tree
from .nodes import Element, Node, Text

__all__ = [
    "Element",
    "Node",
    "OpenElement",
    "Text",
    "TreeBuilder",
    "build_tree",
]
