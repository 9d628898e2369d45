"""Configuration for strict markup parsing.

This module provides an immutable configuration object controlling the few
behaviours of the parser that are deliberately left switchable: the nesting
bound, the bare-text root extension and the two hardening options for tag
interiors.
"""

import json
from dataclasses import asdict, dataclass, fields, replace
from typing import Any, Dict, List, Optional

DEFAULT_MAX_DEPTH = 512


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigValidationError(ConfigError):
    """Exception raised when configuration validation fails."""

    def __init__(self, message: str, field_name: Optional[str] = None,
                 suggestions: Optional[List[str]] = None):
        super().__init__(message)
        self.field_name = field_name
        self.suggestions = suggestions or []


@dataclass(frozen=True)
class ParserConfig:
    """Configuration for the scanner, tag-interior parser and tree builder.

    Thread-safe due to frozen dataclass implementation. The defaults reproduce
    the reference grammar exactly; ``hardened()`` switches on the stricter
    handling of tag interiors.

    Attributes:
        max_depth: Maximum number of simultaneously open elements, or None
            for no bound
        allow_text_root: Accept a document consisting of a bare text run
        validate_boolean_attributes: Validate value-less attribute names as
            identifiers, like ``key="value"`` keys
        quote_aware_tag_interior: Do not terminate a tag at a ``>`` that sits
            inside a double-quoted attribute value
        correlation_id: Optional correlation ID attached to log records
    """

    max_depth: Optional[int] = DEFAULT_MAX_DEPTH
    allow_text_root: bool = False
    validate_boolean_attributes: bool = False
    quote_aware_tag_interior: bool = False
    correlation_id: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate parser configuration."""
        if self.max_depth is not None:
            if isinstance(self.max_depth, bool) or not isinstance(self.max_depth, int):
                raise ConfigValidationError(
                    "max_depth must be an integer or None", field_name="max_depth"
                )
            if self.max_depth <= 0:
                raise ConfigValidationError(
                    "max_depth must be > 0 or None",
                    field_name="max_depth",
                    suggestions=["Use None to disable the nesting bound"]
                )

        for flag in (
            "allow_text_root",
            "validate_boolean_attributes",
            "quote_aware_tag_interior",
        ):
            if not isinstance(getattr(self, flag), bool):
                raise ConfigValidationError(f"{flag} must be a boolean", field_name=flag)

    @classmethod
    def default(cls) -> "ParserConfig":
        """Create configuration matching the reference grammar."""
        return cls()

    @classmethod
    def hardened(cls) -> "ParserConfig":
        """Create configuration with uniform identifier checks and quote-aware tags."""
        return cls(validate_boolean_attributes=True, quote_aware_tag_interior=True)

    def override(self, **kwargs: Any) -> "ParserConfig":
        """Create a new configuration with specific overrides.

        Example:
            >>> config = ParserConfig().override(max_depth=64)
        """
        known = {f.name for f in fields(self)}
        unknown = sorted(set(kwargs) - known)
        if unknown:
            raise ConfigValidationError(
                f"Unknown configuration fields: {', '.join(unknown)}",
                suggestions=sorted(known)
            )
        return replace(self, **kwargs)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary format."""
        return asdict(self)

    def to_json(self, indent: int = 2) -> str:
        """Convert configuration to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ParserConfig":
        """Create configuration from dictionary, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        return cls(**{key: value for key, value in data.items() if key in known})

    @classmethod
    def from_json(cls, json_str: str) -> "ParserConfig":
        """Create configuration from JSON string."""
        try:
            data = json.loads(json_str)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON configuration: {e}") from e
        if not isinstance(data, dict):
            raise ConfigError("JSON configuration must be an object")
        return cls.from_dict(data)
