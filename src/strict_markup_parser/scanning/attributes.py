"""Tag-interior parsing for strict markup parsing.

The scanner isolates the raw bytes between ``<`` (or ``</``) and ``>``; this
module splits them into a tag name and an attribute map.

Grammar of an opening-tag interior::

    interior  := name [ " " section { " " section } ]
    section   := key "=" '"' value '"'    ; quoted attribute
               | key                      ; value-less attribute, stored as ""

Names and ``key="value"`` keys must be ASCII alphanumeric. Sections are
separated by single spaces, so a quoted value cannot contain a space. Duplicate
keys keep their first occurrence.
"""

from typing import Dict, Optional, Tuple

from strict_markup_parser.shared import (
    InvalidAttributeValueError,
    InvalidIdentifierError,
)

QUOTE = b'"'

TagInterior = Tuple[str, Dict[str, str]]


def _decode(raw: bytes) -> str:
    return raw.decode("utf-8", errors="replace")


def is_identifier(raw: bytes) -> bool:
    """Check that ``raw`` is a non-empty run of ASCII letters and digits."""
    return raw.isalnum()


class TagInteriorParser:
    """Splits tag interiors into names and attributes.

    Args:
        validate_boolean_attributes: Also require value-less attribute names
            to be identifiers. Off by default, matching the reference grammar
            where only ``key="value"`` keys are checked.
    """

    def __init__(self, validate_boolean_attributes: bool = False) -> None:
        self.validate_boolean_attributes = validate_boolean_attributes

    def parse(self, interior: bytes, offset: int = 0) -> TagInterior:
        """Parse an opening-tag interior.

        Args:
            interior: Raw bytes between ``<`` and ``>``
            offset: Byte offset of ``interior`` in the scanned input, used for
                error positions

        Returns:
            Tuple of tag name and attribute map

        Raises:
            InvalidIdentifierError: Tag name or attribute key is not alphanumeric
            InvalidAttributeValueError: Attribute value is not double-quoted
        """
        space = interior.find(b" ")
        if space == -1:
            raw_name, raw_attributes = interior, None
        else:
            raw_name, raw_attributes = interior[:space], interior[space + 1:]

        name = self._validate_name(raw_name, offset)

        attributes: Dict[str, str] = {}
        if raw_attributes is not None:
            self._parse_attributes(raw_attributes, offset + space + 1, attributes)

        return name, attributes

    def parse_closing(self, interior: bytes, offset: int = 0) -> str:
        """Parse a closing-tag interior, which carries a name and nothing else."""
        return self._validate_name(interior, offset)

    def _validate_name(self, raw_name: bytes, offset: int) -> str:
        if not is_identifier(raw_name):
            raise InvalidIdentifierError(_decode(raw_name), offset)
        return raw_name.decode("ascii")

    def _parse_attributes(
        self, raw_attributes: bytes, offset: int, attributes: Dict[str, str]
    ) -> None:
        position = offset
        for section in raw_attributes.split(b" "):
            if section:
                key, value = self._parse_section(section, position)
                # First occurrence wins
                if key not in attributes:
                    attributes[key] = value
            position += len(section) + 1

    def _parse_section(self, section: bytes, offset: int) -> Tuple[str, str]:
        equals = section.find(b"=")

        if equals == -1:
            if self.validate_boolean_attributes and not is_identifier(section):
                raise InvalidIdentifierError(_decode(section), offset)
            return _decode(section), ""

        raw_key, raw_value = section[:equals], section[equals + 1:]
        if not is_identifier(raw_key):
            raise InvalidIdentifierError(_decode(raw_key), offset)

        value = _unquote(raw_value)
        if value is None:
            raise InvalidAttributeValueError(_decode(raw_value), offset + equals + 1)

        return raw_key.decode("ascii"), _decode(value)


def _unquote(raw_value: bytes) -> Optional[bytes]:
    if len(raw_value) < 2 or not (
        raw_value.startswith(QUOTE) and raw_value.endswith(QUOTE)
    ):
        return None
    return raw_value[1:-1]


def parse_tag_interior(
    interior: bytes,
    offset: int = 0,
    validate_boolean_attributes: bool = False
) -> TagInterior:
    """Parse an opening-tag interior with a throwaway ``TagInteriorParser``."""
    return TagInteriorParser(validate_boolean_attributes).parse(interior, offset)
