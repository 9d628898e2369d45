"""Tree building for strict markup parsing.

This module turns scanner output into a tree of ``Element`` and ``Text``
nodes. Each opening tag opens a frame that is closed by the first closing tag
whose name exactly matches it; a mismatched closer, a stray ``>`` in text or
an exhausted input aborts the parse with a positional ``ParserError``.

Open elements are kept on an explicit stack of frames rather than on the
Python call stack, so nesting depth is bounded by ``ParserConfig.max_depth``
instead of the interpreter recursion limit.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Union

from strict_markup_parser.scanning import Scanner, TagInteriorParser
from strict_markup_parser.scanning.scanner import LESS_THAN, SLASH, SPACE
from strict_markup_parser.shared import (
    GenericError,
    ParserConfig,
    PrematureEndOfFileError,
    UnexpectedTokenError,
    get_logger,
)
from strict_markup_parser.tree.nodes import Element, Node, Text


@dataclass
class OpenElement:
    """An element whose closing tag has not been reached yet."""

    tag_name: str
    attributes: Dict[str, str] = field(default_factory=dict)
    children: List[Node] = field(default_factory=list)
    start_position: int = 0

    def finish(self) -> Element:
        return Element(self.tag_name, self.attributes, self.children)


class TreeBuilder:
    """Builds a node tree from a single markup document.

    A builder owns its scanner: it is driven to completion by one caller and
    is not reused. ``MarkupParser`` creates a fresh builder per call.

    Args:
        source: Markup as text or bytes
        config: Parser configuration (defaults to ``ParserConfig()``)
    """

    def __init__(
        self,
        source: Union[str, bytes],
        config: Optional[ParserConfig] = None
    ) -> None:
        self.config = config or ParserConfig()
        self.scanner = Scanner(source, quote_aware=self.config.quote_aware_tag_interior)
        self.interior_parser = TagInteriorParser(
            validate_boolean_attributes=self.config.validate_boolean_attributes
        )
        self.logger = get_logger(__name__, self.config.correlation_id, "tree_builder")

        self.elements_created = 0
        self.text_nodes_created = 0
        self.deepest_nesting = 0

    def parse(self) -> Node:
        """Parse the whole document and return its root node.

        Raises:
            ParserError: On the first lexical or structural error
        """
        scanner = self.scanner

        if scanner.at_end():
            raise PrematureEndOfFileError(scanner.position)

        if scanner.current() != LESS_THAN:
            if self.config.allow_text_root:
                return self._parse_text_root()
            raise UnexpectedTokenError(
                "<", _describe_byte(scanner.current()), scanner.position
            )

        start = scanner.position
        scanner.advance()
        interior_offset = scanner.position
        interior = scanner.read_tag_interior()
        tag_name, attributes = self.interior_parser.parse(interior, interior_offset)
        self.elements_created += 1

        children = self.parse_content(tag_name, attributes, start)

        if not scanner.at_end():
            self.logger.debug(
                "Ignoring content after root element",
                extra={"position": scanner.position, "remaining": len(scanner) - scanner.position}
            )

        return Element(tag_name, attributes, children)

    def parse_content(
        self,
        expected_tag_name: str,
        attributes: Optional[Dict[str, str]] = None,
        start_position: int = 0
    ) -> List[Node]:
        """Collect the children of an open element up to its closing tag.

        Nested elements are opened and closed on the frame stack; the call
        returns once the closing tag named ``expected_tag_name`` is consumed.

        Raises:
            UnexpectedTokenError: A closing tag does not match the open element
            PrematureEndOfFileError: Input ends while an element is still open
            GenericError: The nesting bound is exceeded or ``<`` ends the input
        """
        scanner = self.scanner
        stack = [OpenElement(expected_tag_name, attributes or {}, [], start_position)]
        self._track_depth(len(stack))

        while not scanner.at_end():
            byte = scanner.current()

            if byte == LESS_THAN:
                tag_position = scanner.position
                if scanner.peek_next() == SLASH:
                    scanner.advance(2)
                    name_offset = scanner.position
                    closing_name = self.interior_parser.parse_closing(
                        scanner.read_tag_interior(), name_offset
                    )
                    frame = stack[-1]
                    if closing_name != frame.tag_name:
                        raise UnexpectedTokenError(
                            f"</{frame.tag_name}>", f"</{closing_name}>", tag_position
                        )

                    stack.pop()
                    if not stack:
                        return frame.children
                    stack[-1].children.append(frame.finish())
                else:
                    scanner.advance()
                    interior_offset = scanner.position
                    tag_name, tag_attributes = self.interior_parser.parse(
                        scanner.read_tag_interior(), interior_offset
                    )
                    self._check_depth(len(stack) + 1, tag_position)
                    stack.append(OpenElement(tag_name, tag_attributes, [], tag_position))
                    self.elements_created += 1
                    self._track_depth(len(stack))

            elif byte == SPACE:
                scanner.skip_spaces()

            else:
                run = scanner.read_text_run()
                stack[-1].children.append(Text(self._decode_text(run)))
                self.text_nodes_created += 1

        self.logger.debug(
            "Input exhausted with open elements",
            extra={
                "open_elements": [
                    {"tag_name": frame.tag_name, "position": frame.start_position}
                    for frame in stack
                ]
            }
        )
        raise PrematureEndOfFileError(scanner.position)

    def _parse_text_root(self) -> Text:
        run = self.scanner.read_text_run()
        if not self.scanner.at_end():
            raise UnexpectedTokenError("end of input", "<", self.scanner.position)
        self.text_nodes_created += 1
        return Text(self._decode_text(run))

    def _check_depth(self, depth: int, position: int) -> None:
        max_depth = self.config.max_depth
        if max_depth is not None and depth > max_depth:
            raise GenericError(position, f"Maximum nesting depth {max_depth} exceeded")

    def _track_depth(self, depth: int) -> None:
        if depth > self.deepest_nesting:
            self.deepest_nesting = depth

    @staticmethod
    def _decode_text(run: bytes) -> str:
        return run.strip(b" ").decode("utf-8", errors="replace")


def _describe_byte(byte: int) -> str:
    if byte < 0x80:
        return chr(byte)
    return f"\\x{byte:02x}"


def build_tree(source: Union[str, bytes], config: Optional[ParserConfig] = None) -> Node:
    """Parse ``source`` with a fresh ``TreeBuilder``."""
    return TreeBuilder(source, config).parse()
