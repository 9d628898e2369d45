"""Byte-level scanner for strict markup parsing.

The scanner holds an immutable byte buffer and a read cursor and exposes the
primitive lexical operations the tree builder is written in terms of. The
cursor is a byte offset and is not code-point aware: the scanner is
ASCII-oriented and multi-byte UTF-8 content is carried through unchanged but
not interpreted.
"""

from typing import Union

from strict_markup_parser.shared import (
    GenericError,
    PrematureEndOfFileError,
    UnexpectedTokenError,
)

# Delimiter bytes
LESS_THAN = 0x3C
GREATER_THAN = 0x3E
SLASH = 0x2F
SPACE = 0x20
DOUBLE_QUOTE = 0x22


class Scanner:
    """Cursor over an immutable byte buffer.

    Args:
        source: Markup as text (UTF-8 encoded before scanning) or raw bytes
        quote_aware: When true, ``read_tag_interior`` does not stop at a ``>``
            inside a double-quoted run
    """

    def __init__(self, source: Union[str, bytes], quote_aware: bool = False) -> None:
        if isinstance(source, str):
            source = source.encode("utf-8")
        elif not isinstance(source, bytes):
            raise TypeError(
                f"Scanner source must be str or bytes, not {type(source).__name__}"
            )
        self._buffer = source
        self._length = len(self._buffer)
        self.position = 0
        self.quote_aware = quote_aware

    @property
    def buffer(self) -> bytes:
        """The scanned input."""
        return self._buffer

    def __len__(self) -> int:
        return self._length

    def at_end(self) -> bool:
        """True when the cursor is at or past the end of input."""
        return self.position >= self._length

    def current(self) -> int:
        """Byte at the cursor."""
        if self.at_end():
            raise GenericError(self.position, "Cursor is past the end of input")
        return self._buffer[self.position]

    def peek_next(self) -> int:
        """Byte one past the cursor."""
        if self.position + 1 >= self._length:
            raise GenericError(self.position + 1, "Lookahead is out of bounds")
        return self._buffer[self.position + 1]

    def advance(self, count: int = 1) -> None:
        """Move the cursor forward by ``count`` bytes."""
        if self.position + count > self._length:
            raise GenericError(self.position + count, "Cannot advance past end of input")
        self.position += count

    def skip_spaces(self) -> None:
        """Advance over consecutive ASCII space bytes.

        Only 0x20 counts: tabs and newlines are ordinary content.
        """
        while self.position < self._length and self._buffer[self.position] == SPACE:
            self.position += 1

    def read_text_run(self) -> bytes:
        """Consume bytes up to the next ``<`` or the end of input.

        Raises:
            UnexpectedTokenError: A bare ``>`` occurs before the next ``<``
        """
        start = self.position
        end = self._buffer.find(b"<", start)
        if end == -1:
            end = self._length

        stray = self._buffer.find(b">", start, end)
        if stray != -1:
            self.position = stray
            raise UnexpectedTokenError("text content", ">", stray)

        self.position = end
        return self._buffer[start:end]

    def read_tag_interior(self) -> bytes:
        """Consume raw bytes up to and including the next ``>``.

        Returns the bytes before the ``>``. Unless the scanner is quote-aware,
        a ``>`` inside a quoted attribute value terminates the tag.

        Raises:
            PrematureEndOfFileError: No ``>`` before the end of input
        """
        start = self.position
        if self.quote_aware:
            end = self._find_unquoted_greater_than(start)
        else:
            end = self._buffer.find(b">", start)

        if end == -1:
            self.position = self._length
            raise PrematureEndOfFileError(self._length)

        self.position = end + 1
        return self._buffer[start:end]

    def _find_unquoted_greater_than(self, start: int) -> int:
        in_quotes = False
        for index in range(start, self._length):
            byte = self._buffer[index]
            if byte == DOUBLE_QUOTE:
                in_quotes = not in_quotes
            elif byte == GREATER_THAN and not in_quotes:
                return index
        return -1
