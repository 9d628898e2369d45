"""Integration adapters for exchanging parsed trees with lxml.

The adapters convert between ``Element``/``Text`` trees and ``lxml.etree``
elements. lxml stores text as ``text``/``tail`` strings rather than as nodes,
so consecutive text runs are joined with a single space on the way out and
each ``text``/``tail`` string becomes one ``Text`` node on the way back.
"""

import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from lxml import etree

from strict_markup_parser.scanning import is_identifier
from strict_markup_parser.shared import get_logger
from strict_markup_parser.tree import Element, Node, Text

MS_PER_SECOND = 1000


@dataclass
class AdapterMetadata:
    """Metadata about an integration adapter."""

    name: str
    target_library: str
    description: str
    target_version: str = ""


@dataclass
class ConversionResult:
    """Result of a conversion operation."""

    success: bool
    converted_data: Any
    original_data: Any
    conversion_time_ms: float
    warnings: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)


class LxmlAdapter:
    """Adapter for bidirectional conversion with lxml.etree.

    Examples:
        >>> adapter = LxmlAdapter()
        >>> result = adapter.to_target(parse('<a href="x">y</a>'))
        >>> result.converted_data.get('href')
        'x'
    """

    def __init__(self, correlation_id: Optional[str] = None) -> None:
        self.correlation_id = correlation_id
        self._logger = get_logger(__name__, correlation_id, "lxml_adapter")

    @property
    def metadata(self) -> AdapterMetadata:
        """Get adapter metadata."""
        return AdapterMetadata(
            name="lxml",
            target_library="lxml",
            description="Bidirectional conversion between node trees and lxml.etree",
            target_version=".".join(str(part) for part in etree.LXML_VERSION),
        )

    def to_target(self, node: Node) -> ConversionResult:
        """Convert a parsed tree to an ``lxml.etree`` element.

        Args:
            node: Root of a parsed tree; must be an ``Element``

        Returns:
            ConversionResult containing the lxml element
        """
        start_time = time.time()

        if not isinstance(node, Element):
            return self._create_error_result(
                "Only element trees can be converted to lxml", node, start_time
            )

        warnings: List[str] = []
        try:
            converted = self._convert_element_to_lxml(node, warnings)
        except (ValueError, TypeError) as e:
            return self._create_error_result(
                f"Failed to convert to lxml: {e}", node, start_time
            )

        return ConversionResult(
            success=True,
            converted_data=converted,
            original_data=node,
            conversion_time_ms=(time.time() - start_time) * MS_PER_SECOND,
            warnings=warnings,
            metadata={"element_count": sum(1 for _ in converted.iter())},
        )

    def from_target(self, target_data: Any) -> ConversionResult:
        """Convert an ``lxml.etree`` element to a node tree.

        Comments and processing instructions are skipped; their tails are kept.
        """
        start_time = time.time()

        if not isinstance(target_data, etree._Element) or not isinstance(
            target_data.tag, str
        ):
            return self._create_error_result(
                "Target data is not a valid lxml element", target_data, start_time
            )

        try:
            converted = self._convert_lxml_to_element(target_data)
        except ValueError as e:
            return self._create_error_result(
                f"Failed to convert from lxml: {e}", target_data, start_time
            )

        return ConversionResult(
            success=True,
            converted_data=converted,
            original_data=target_data,
            conversion_time_ms=(time.time() - start_time) * MS_PER_SECOND,
            metadata={"original_tag": target_data.tag},
        )

    def _convert_element_to_lxml(
        self, element: Element, warnings: List[str]
    ) -> "etree._Element":
        lxml_element = etree.Element(element.tag_name)

        for key, value in element.attributes.items():
            if not key:
                warnings.append(f"Dropped empty attribute name on <{element.tag_name}>")
                continue
            lxml_element.set(key, value)

        last_child: Optional["etree._Element"] = None
        for child in element.children:
            if isinstance(child, Text):
                if last_child is None:
                    lxml_element.text = _join(lxml_element.text, child.content)
                else:
                    last_child.tail = _join(last_child.tail, child.content)
            else:
                last_child = self._convert_element_to_lxml(child, warnings)
                lxml_element.append(last_child)

        return lxml_element

    def _convert_lxml_to_element(self, lxml_element: "etree._Element") -> Element:
        children: List[Node] = []
        _append_text(children, lxml_element.text)

        for child in lxml_element:
            if isinstance(child.tag, str):
                children.append(self._convert_lxml_to_element(child))
            _append_text(children, child.tail)

        tag_name = etree.QName(lxml_element).localname
        _check_identifier(tag_name, "tag name")
        attributes = dict(lxml_element.attrib)
        for key in attributes:
            _check_identifier(key, "attribute name")

        return Element(tag_name, attributes, children)

    def _create_error_result(
        self, message: str, original_data: Any, start_time: float
    ) -> ConversionResult:
        self._logger.warning(message, extra={"adapter": "lxml"})
        return ConversionResult(
            success=False,
            converted_data=None,
            original_data=original_data,
            conversion_time_ms=(time.time() - start_time) * MS_PER_SECOND,
            errors=[message],
        )


def _join(existing: Optional[str], content: str) -> str:
    if not existing:
        return content
    if not content:
        return existing
    return f"{existing} {content}"


def _check_identifier(name: str, what: str) -> None:
    if not is_identifier(name.encode("utf-8")):
        raise ValueError(f"Invalid {what} \"{name}\", expected ASCII letters and digits")


def _append_text(children: List[Node], raw: Optional[str]) -> None:
    if raw is None:
        return
    content = raw.strip(" ")
    if content:
        children.append(Text(content))


def to_lxml(node: Node) -> "etree._Element":
    """Convert a parsed tree to lxml, raising ``ValueError`` on failure."""
    result = LxmlAdapter().to_target(node)
    if not result.success:
        raise ValueError("; ".join(result.errors))
    return result.converted_data


def from_lxml(lxml_element: "etree._Element") -> Element:
    """Convert an lxml element to a node tree, raising ``ValueError`` on failure."""
    result = LxmlAdapter().from_target(lxml_element)
    if not result.success:
        raise ValueError("; ".join(result.errors))
    return result.converted_data
