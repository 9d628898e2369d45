"""Shared utilities for strict markup parsing.

This module provides the configuration object, the positional error taxonomy
and logging helpers used across all processing layers.
"""

from .config import (
    ConfigError,
    ConfigValidationError,
    ParserConfig,
)
from .errors import (
    ErrorKind,
    GenericError,
    InvalidAttributeValueError,
    InvalidIdentifierError,
    ParserError,
    PrematureEndOfFileError,
    UnexpectedTokenError,
)
from .logging import (
    CorrelationLogger,
    get_logger,
)

__all__ = [
    "ConfigError",
    "ConfigValidationError",
    "ParserConfig",
    "ErrorKind",
    "GenericError",
    "InvalidAttributeValueError",
    "InvalidIdentifierError",
    "ParserError",
    "PrematureEndOfFileError",
    "UnexpectedTokenError",
    "CorrelationLogger",
    "get_logger",
]
