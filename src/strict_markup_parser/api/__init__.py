"""Public API for strict markup parsing.

Key Components:
    parse: Level 1 entry point returning the root node
    MarkupParser: Level 2 configurable, reusable parser
    LxmlAdapter: Conversion between node trees and lxml.etree
"""

from .adapters import ConversionResult, LxmlAdapter, from_lxml, to_lxml
from .parser import MarkupParser, parse

__all__ = [
    "ConversionResult",
    "LxmlAdapter",
    "MarkupParser",
    "from_lxml",
    "parse",
    "to_lxml",
]
