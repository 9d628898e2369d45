"""Positional error taxonomy for strict markup parsing.

Every fallible scanner and builder operation raises a subclass of
``ParserError``. Each error carries its ``kind`` so callers can branch on the
failure category without ``isinstance`` chains, the byte offset at which the
failure was detected, and a human-readable message.
"""

from enum import Enum, auto
from typing import Any, Dict, Optional


class ErrorKind(Enum):
    """Categories of parse failures."""

    UNEXPECTED_TOKEN = auto()         # Token does not fit the grammar position
    PREMATURE_END_OF_FILE = auto()    # Input exhausted before a required closer
    INVALID_IDENTIFIER = auto()       # Tag name or attribute key not alphanumeric
    INVALID_ATTRIBUTE_VALUE = auto()  # Attribute value not wrapped in quotes
    GENERIC = auto()                  # Catch-all positional error


class ParserError(Exception):
    """Base class for all parse failures."""

    kind: ErrorKind = ErrorKind.GENERIC

    def __init__(self, message: str, position: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.position = position

    @property
    def details(self) -> Dict[str, Any]:
        """Variant-specific payload."""
        return {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary representation."""
        return {
            "kind": self.kind.name,
            "position": self.position,
            "message": self.message,
            "details": self.details,
        }

    def __repr__(self) -> str:
        return f"{type(self).__name__}(position={self.position!r}, message={self.message!r})"


class UnexpectedTokenError(ParserError):
    """Raised when the input does not match what the grammar position demands."""

    kind = ErrorKind.UNEXPECTED_TOKEN

    def __init__(self, expected: str, found: str, position: int) -> None:
        super().__init__(
            f'Expected "{expected}", found "{found}" at {position}', position
        )
        self.expected = expected
        self.found = found

    @property
    def details(self) -> Dict[str, Any]:
        return {"expected": self.expected, "found": self.found}


class PrematureEndOfFileError(ParserError):
    """Raised when input ends before a required delimiter or closing tag."""

    kind = ErrorKind.PREMATURE_END_OF_FILE

    def __init__(self, position: int) -> None:
        super().__init__(f"Premature end of file at {position}", position)


class InvalidIdentifierError(ParserError):
    """Raised when a tag name or attribute key contains non-alphanumeric bytes."""

    kind = ErrorKind.INVALID_IDENTIFIER

    def __init__(self, identifier: str, position: int) -> None:
        super().__init__(f'Invalid identifier "{identifier}" at {position}', position)
        self.identifier = identifier

    @property
    def details(self) -> Dict[str, Any]:
        return {"identifier": self.identifier}


class InvalidAttributeValueError(ParserError):
    """Raised when an attribute value is not wrapped in double quotes."""

    kind = ErrorKind.INVALID_ATTRIBUTE_VALUE

    def __init__(self, value: str, position: int) -> None:
        super().__init__(
            f'Invalid attribute value {value!r} at {position}, '
            'expected a double-quoted string',
            position
        )
        self.value = value

    @property
    def details(self) -> Dict[str, Any]:
        return {"value": self.value}


class GenericError(ParserError):
    """Catch-all positional error."""

    kind = ErrorKind.GENERIC

    def __init__(self, position: int, message: str) -> None:
        super().__init__(f"{message} at {position}", position)
        self.reason = message

    @property
    def details(self) -> Dict[str, Any]:
        return {"reason": self.reason}
