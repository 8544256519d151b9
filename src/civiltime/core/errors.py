"""
Structured error types for civiltime.

Every failure the library can report is a ``CivilTimeError`` carrying a
category, structured context and an optional chained cause. Callers can log
``error.to_dict()`` directly or route on ``error.category``.

Manifesto:
    - **Typed hierarchy:** Parsing, validation, calendar and formatting
      failures are distinct types
    - **Recoverable by default:** Malformed input raises, it never exits the
      process and never silently becomes zero
    - **Rich context:** Errors carry the offending text, field or locale
    - **Error chaining:** The original exception is preserved as ``cause``

Architecture:
    ::

        ┌──────────────────────────────────────────────────────────┐
        │                     CivilTimeError                        │
        │        (category, context, cause, to_dict())              │
        ├──────────────────────────────────────────────────────────┤
        │  ParseError        ValidationError     CalendarError      │
        │  (PARSE)           (VALIDATION)        (CALENDAR)         │
        │                        │                   │              │
        │                    FieldRangeError    CalendarRangeError  │
        │                                                           │
        │  FormattingError   ConfigError                            │
        │  (FORMATTING)      (CONFIG)                               │
        └──────────────────────────────────────────────────────────┘

Examples:
    >>> error = ParseError("expected 3 tokens", text="2022-01", expected_tokens=3, actual_tokens=2)
    >>> error.category
    <ErrorCategory.PARSE: 'PARSE'>
    >>> error.to_dict()["actual_tokens"]
    2

Tags:
    error-handling, exception-hierarchy, parsing, civiltime

Doc-Types:
    - API Reference
    - Error Handling Guide
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """
    Standard error categories for classification and routing.

    Attributes:
        PARSE: Malformed ISO text
        VALIDATION: Field values outside their conventional ranges
        CALENDAR: Fields that cannot be resolved to an absolute instant
        FORMATTING: Locale database or formatter failures
        CONFIG: Invalid settings (unknown zone, unknown calendar)
        INTERNAL: Bugs, unexpected state
        UNKNOWN: Uncategorized errors
    """

    PARSE = "PARSE"
    VALIDATION = "VALIDATION"
    CALENDAR = "CALENDAR"
    FORMATTING = "FORMATTING"
    CONFIG = "CONFIG"
    INTERNAL = "INTERNAL"
    UNKNOWN = "UNKNOWN"


@dataclass
class ErrorContext:
    """
    Structured metadata attached to an error.

    Only non-None fields are emitted by ``to_dict()``; anything that does not
    have a dedicated field goes into ``metadata``.

    Attributes:
        operation: Name of the operation that failed (e.g. ``"from_iso"``)
        value_type: Value type involved (``"LocalDate"``, ``"LocalDateTime"``)
        timezone: Zone key used for a bridge call
        calendar: Calendar identifier used for a bridge call
        locale: Locale identifier used for a formatting call
        metadata: Additional key-value pairs
    """

    operation: str | None = None
    value_type: str | None = None
    timezone: str | None = None
    calendar: str | None = None
    locale: str | None = None

    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result = {}
        for key in ["operation", "value_type", "timezone", "calendar", "locale"]:
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        if self.metadata:
            result.update(self.metadata)
        return result


class CivilTimeError(Exception):
    """
    Base exception for all civiltime errors.

    Subclasses set ``default_category``; instances may override it. The
    ``cause`` argument is also installed as ``__cause__`` so tracebacks show
    the chain.

    Examples:
        >>> error = CivilTimeError("Something went wrong")
        >>> error.category
        <ErrorCategory.INTERNAL: 'INTERNAL'>

        >>> error = CivilTimeError("Bridge failed").with_context(timezone="UTC")
        >>> error.context.timezone
        'UTC'
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.context = context or ErrorContext()
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> CivilTimeError:
        """
        Add context to this error (fluent API).

        Usage:
            raise CalendarRangeError("year out of range").with_context(
                operation="to_absolute",
                timezone="Europe/Berlin",
            )
        """
        for key, value in kwargs.items():
            if hasattr(self.context, key):
                setattr(self.context, key, value)
            else:
                self.context.metadata[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
        }
        context_dict = self.context.to_dict()
        if context_dict:
            result["context"] = context_dict
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


# =============================================================================
# PARSE ERRORS
# =============================================================================


class ParseError(CivilTimeError):
    """
    ISO text could not be decoded.

    Raised for a wrong token count after splitting on ``T``, ``-`` or ``:``
    and for a token that is not a decimal integer. ``position`` is the index
    of the offending token within its group, or None for count mismatches.
    """

    default_category = ErrorCategory.PARSE

    def __init__(
        self,
        message: str,
        *,
        text: str | None = None,
        expected_tokens: int | None = None,
        actual_tokens: int | None = None,
        position: int | None = None,
        token: str | None = None,
        **kwargs: Any,
    ):
        super().__init__(message, **kwargs)
        self.text = text
        self.expected_tokens = expected_tokens
        self.actual_tokens = actual_tokens
        self.position = position
        self.token = token

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        for key in ["text", "expected_tokens", "actual_tokens", "position", "token"]:
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        return result


# =============================================================================
# VALIDATION ERRORS
# =============================================================================


class ValidationError(CivilTimeError):
    """Field validation error."""

    default_category = ErrorCategory.VALIDATION

    def __init__(
        self,
        message: str,
        *,
        field: str | None = None,
        value: Any = None,
        constraint: str | None = None,
        **kwargs: Any,
    ):
        super().__init__(message, **kwargs)
        self.field = field
        self.value = value
        self.constraint = constraint

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        if self.field:
            result["field"] = self.field
        if self.value is not None:
            result["value"] = repr(self.value)
        if self.constraint:
            result["constraint"] = self.constraint
        return result


class FieldRangeError(ValidationError):
    """A civil field lies outside its conventional range."""

    pass


# =============================================================================
# CALENDAR ERRORS
# =============================================================================


class CalendarError(CivilTimeError):
    """Calendar computation failed."""

    default_category = ErrorCategory.CALENDAR


class CalendarRangeError(CalendarError):
    """Fields cannot be represented as an absolute instant."""

    pass


# =============================================================================
# FORMATTING / CONFIGURATION ERRORS
# =============================================================================


class FormattingError(CivilTimeError):
    """Locale lookup or formatting failed."""

    default_category = ErrorCategory.FORMATTING


class ConfigError(CivilTimeError):
    """Invalid configuration value."""

    default_category = ErrorCategory.CONFIG

    def __init__(self, key: str, value: Any, message: str | None = None):
        msg = message or f"Invalid configuration value for {key}: {value!r}"
        super().__init__(msg)
        self.key = key
        self.value = value


def categorize_error(error: Exception) -> ErrorCategory:
    """Get the category of an error."""
    if isinstance(error, CivilTimeError):
        return error.category
    if isinstance(error, (ValueError, TypeError)):
        return ErrorCategory.VALIDATION
    if isinstance(error, OverflowError):
        return ErrorCategory.CALENDAR
    return ErrorCategory.UNKNOWN


__all__ = [
    "ErrorCategory",
    "ErrorContext",
    "CivilTimeError",
    "ParseError",
    "ValidationError",
    "FieldRangeError",
    "CalendarError",
    "CalendarRangeError",
    "FormattingError",
    "ConfigError",
    "categorize_error",
]
