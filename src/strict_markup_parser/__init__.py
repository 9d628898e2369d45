"""Strict Markup Parser.

A small, fail-fast parser that turns well-formed, trusted markup (nested tags,
double-quoted attributes, text runs) into a tree of ``Element`` and ``Text``
nodes. Entity decoding, void elements, comments, DOCTYPE, CDATA and
serialization are out of scope.

Progressive API Disclosure:
- Level 1: Simple function - parse()
- Level 2: Configured parser - MarkupParser class with ParserConfig
"""

__version__ = "0.1.0"
__author__ = "Strict Markup Parser Team"

from .api import MarkupParser, parse
from .shared.config import ParserConfig
from .shared.errors import (
    ErrorKind,
    GenericError,
    InvalidAttributeValueError,
    InvalidIdentifierError,
    ParserError,
    PrematureEndOfFileError,
    UnexpectedTokenError,
)
from .tree.nodes import Element, Node, Text

__all__ = [
    # Version and metadata
    "__author__",
    "__version__",

    # Level 1: Simple parsing function
    "parse",

    # Level 2: Configured parser
    "MarkupParser",
    "ParserConfig",

    # Tree model
    "Element",
    "Node",
    "Text",

    # Errors
    "ErrorKind",
    "GenericError",
    "InvalidAttributeValueError",
    "InvalidIdentifierError",
    "ParserError",
    "PrematureEndOfFileError",
    "UnexpectedTokenError",
]
