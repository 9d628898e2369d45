"""Lexical layer for strict markup parsing.

Key Components:
    Scanner: Cursor over the input bytes with delimiter-level operations
    TagInteriorParser: Splits a tag interior into a name and attributes
"""

from .attributes import TagInteriorParser, is_identifier, parse_tag_interior
from .scanner import Scanner

__all__ = [
    "Scanner",
    "TagInteriorParser",
    "is_identifier",
    "parse_tag_interior",
]
