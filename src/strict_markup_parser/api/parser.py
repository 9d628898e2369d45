"""Core parser API with progressive disclosure for strict markup parsing.

This module provides the main parsing API, from a simple module-level
``parse()`` function to the reusable, configurable ``MarkupParser`` class.
Parsing is fail-fast: the first error is raised to the caller unchanged and no
partial tree is returned.
"""

import time
from typing import Any, Dict, Optional, Union

from strict_markup_parser.shared import (
    ParserConfig,
    ParserError,
    get_logger,
)
from strict_markup_parser.tree import Node, TreeBuilder

InputType = Union[str, bytes]

# Constants for API operations
PREVIEW_LENGTH = 100  # Max length for content preview in logs
MS_PER_SECOND = 1000  # Milliseconds per second conversion


def _preview(source: InputType) -> str:
    text = source if isinstance(source, str) else source.decode("utf-8", errors="replace")
    if len(text) > PREVIEW_LENGTH:
        return text[:PREVIEW_LENGTH] + "..."
    return text


def parse(
    source: InputType,
    config: Optional[ParserConfig] = None,
    correlation_id: Optional[str] = None
) -> Node:
    """Parse markup into a node tree.

    This is the primary entry point. Text input is UTF-8 encoded and scanned
    as bytes; error positions are byte offsets.

    Args:
        source: Markup as string or bytes
        config: Optional parser configuration
        correlation_id: Optional correlation ID for request tracking, takes
            precedence over ``config.correlation_id``

    Returns:
        Root node of the parsed tree

    Raises:
        ParserError: On the first lexical or structural error
        TypeError: Source is neither str nor bytes

    Examples:
        >>> root = parse('<div>content</div>')
        >>> root.tag_name
        'div'
        >>> root.children[0].content
        'content'
    """
    config = config or ParserConfig()
    if correlation_id is not None:
        config = config.override(correlation_id=correlation_id)

    logger = get_logger(__name__, config.correlation_id, "parse")
    start_time = time.time()
    builder = TreeBuilder(source, config)

    logger.info(
        "Starting parse operation",
        extra={
            "input_type": type(source).__name__,
            "content_length": len(source),
            "preview": _preview(source),
        }
    )

    try:
        root = builder.parse()
    except ParserError as e:
        logger.warning(
            "Parse operation failed",
            extra={
                "error": e.to_dict(),
                "processing_time_ms": (time.time() - start_time) * MS_PER_SECOND,
            }
        )
        raise

    logger.info(
        "Parse operation completed",
        extra={"processing_time_ms": (time.time() - start_time) * MS_PER_SECOND}
    )
    return root


class MarkupParser:
    """Configurable markup parser for repeated use.

    Every call to ``parse`` builds a fresh scanner and tree builder, so one
    instance can serve any number of sequential parses. Overlapping calls
    from several threads are not supported.

    Attributes:
        config: Current parser configuration
        correlation_id: Correlation ID for request tracking

    Examples:
        >>> parser = MarkupParser(ParserConfig.hardened())
        >>> parser.parse('<a title="x>y">link</a>').get_attribute('title')
        'x>y'
        >>> parser.statistics['total_parses']
        1
    """

    def __init__(
        self,
        config: Optional[ParserConfig] = None,
        correlation_id: Optional[str] = None
    ) -> None:
        self.config = config or ParserConfig()
        if correlation_id is not None:
            self.config = self.config.override(correlation_id=correlation_id)
        self.correlation_id = self.config.correlation_id

        self.logger = get_logger(__name__, self.correlation_id, "markup_parser")

        self._parse_count = 0
        self._successful_parses = 0
        self._total_processing_time = 0.0
        self._elements_created = 0
        self._deepest_nesting = 0

    def parse(self, source: InputType) -> Node:
        """Parse markup with this parser's configuration.

        Raises:
            ParserError: On the first lexical or structural error
        """
        start_time = time.time()
        builder = TreeBuilder(source, self.config)

        self.logger.info(
            "Starting configured parse operation",
            extra={
                "content_length": len(source),
                "parse_count": self._parse_count + 1,
            }
        )

        try:
            root = builder.parse()
        except ParserError as e:
            self._record(start_time, builder, success=False)
            self.logger.warning(
                "Configured parse failed",
                extra={"error": e.to_dict(), "parse_count": self._parse_count}
            )
            raise

        processing_time = self._record(start_time, builder, success=True)
        self.logger.info(
            "Configured parse completed",
            extra={
                "processing_time_ms": processing_time,
                "elements_created": builder.elements_created,
                "max_depth": builder.deepest_nesting,
            }
        )
        return root

    def _record(self, start_time: float, builder: TreeBuilder, success: bool) -> float:
        processing_time = (time.time() - start_time) * MS_PER_SECOND
        self._parse_count += 1
        self._total_processing_time += processing_time
        if success:
            self._successful_parses += 1
            self._elements_created += builder.elements_created
            self._deepest_nesting = max(self._deepest_nesting, builder.deepest_nesting)
        return processing_time

    def reconfigure(self, config: ParserConfig) -> None:
        """Replace the parser configuration for subsequent parses."""
        self.config = config
        self.correlation_id = config.correlation_id
        self.logger = get_logger(__name__, self.correlation_id, "markup_parser")
        self.logger.info("Parser reconfigured", extra={"config": config.to_dict()})

    @property
    def statistics(self) -> Dict[str, Any]:
        """Get parser usage statistics."""
        return {
            "total_parses": self._parse_count,
            "successful_parses": self._successful_parses,
            "failed_parses": self._parse_count - self._successful_parses,
            "success_rate": (
                self._successful_parses / self._parse_count
                if self._parse_count > 0 else 0.0
            ),
            "elements_created": self._elements_created,
            "deepest_nesting": self._deepest_nesting,
            "total_processing_time_ms": self._total_processing_time,
            "average_processing_time_ms": (
                self._total_processing_time / self._parse_count
                if self._parse_count > 0 else 0.0
            ),
            "correlation_id": self.correlation_id,
        }

    def reset_statistics(self) -> None:
        """Reset parser usage statistics."""
        self._parse_count = 0
        self._successful_parses = 0
        self._total_processing_time = 0.0
        self._elements_created = 0
        self._deepest_nesting = 0

        self.logger.info("Parser statistics reset")
