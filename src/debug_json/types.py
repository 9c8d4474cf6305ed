"""Core type definitions for the debug-to-JSON transcoder."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum, Flag, auto
from typing import Any, Callable, Iterator, List, Optional


class TokenKind(Flag):
    """Kinds of fragment the aggregator may accept next."""
    OPEN_BRACE = auto()
    CLOSE_BRACE = auto()
    OPEN_BRACKET = auto()
    CLOSE_BRACKET = auto()
    COLON = auto()
    STRING_START = auto()
    STRING_END = auto()
    STRING_BODY = auto()
    ESCAPE_CHAR = auto()
    FIELD_NAME = auto()
    NUMBER = auto()


# Named expected-token sets used by the aggregator's transitions.
AFTER_OPEN_BRACE = TokenKind.FIELD_NAME | TokenKind.CLOSE_BRACE

VALUE_COMPLETED = (
    TokenKind.FIELD_NAME
    | TokenKind.CLOSE_BRACE
    | TokenKind.CLOSE_BRACKET
    | TokenKind.STRING_START
    | TokenKind.OPEN_BRACE
    | TokenKind.OPEN_BRACKET
)

AFTER_OPEN_BRACKET = (
    TokenKind.STRING_START
    | TokenKind.OPEN_BRACE
    | TokenKind.OPEN_BRACKET
    | TokenKind.CLOSE_BRACKET
    | TokenKind.NUMBER
)

AFTER_COLON = (
    TokenKind.STRING_START
    | TokenKind.OPEN_BRACE
    | TokenKind.OPEN_BRACKET
    | TokenKind.NUMBER
)

INSIDE_STRING = TokenKind.STRING_END | TokenKind.STRING_BODY | TokenKind.ESCAPE_CHAR

AFTER_STRING = VALUE_COMPLETED

# Booleans and numbers may be followed by more scalars inside a list.
AFTER_SCALAR = VALUE_COMPLETED | TokenKind.NUMBER

# Inside a string, right after a backslash: the next fragment is always body.
AFTER_ESCAPE = TokenKind.STRING_BODY


class Rule(Enum):
    """Classification outcome for one fragment."""
    OPEN_BRACE = "open_brace"
    CLOSE_BRACE = "close_brace"
    OPEN_BRACKET = "open_bracket"
    CLOSE_BRACKET = "close_bracket"
    COLON = "colon"
    STRING_START = "string_start"
    STRING_END = "string_end"
    BOOLEAN = "boolean"
    NUMBER = "number"
    STRING_BODY = "string_body"
    FIELD_NAME = "field_name"


class ErrorType(Enum):
    """Enumeration of strict-mode error types."""
    UNSUPPORTED_VARIANT = "unsupported_variant"
    MALFORMED_NUMBER = "malformed_number"
    UNEXPECTED_TOKEN = "unexpected_token"
    INCOMPLETE_DOCUMENT = "incomplete_document"
    UNSUPPORTED_KEY = "unsupported_key"
    SYNTAX = "syntax"
    STRUCTURE = "structure"


RenameFunction = Callable[[str], str]


@dataclass
class TranscodeResult:
    """Result of a transcode operation."""
    success: bool
    json_string: str
    fragment_count: int = 0
    errors: Optional[List[str]] = None
    warnings: List[str] = field(default_factory=list)


@dataclass
class ValidationError:
    """Validation error details."""
    type: ErrorType
    message: str
    location: Optional[str] = None


@dataclass
class ValidationResult:
    """Result of output validation."""
    is_valid: bool
    errors: List[ValidationError]
    warnings: List[str]


@dataclass
class ErrorResponse:
    """Response for error handling."""
    can_recover: bool
    suggested_action: str
    partial_results: Optional[Any] = None


class TranscodeError(Exception):
    """Raised by strict-mode transcoding when the fragment stream cannot be mapped."""

    error_type = ErrorType.UNEXPECTED_TOKEN

    def __init__(self, message: str, fragment: Optional[str] = None,
                 partial_output: str = ""):
        super().__init__(message)
        self.fragment = fragment
        self.partial_output = partial_output


class UnsupportedVariant(TranscodeError):
    """A variant (sum-type) value or a bare capitalized name was encountered."""

    error_type = ErrorType.UNSUPPORTED_VARIANT


class MalformedNumber(TranscodeError):
    """A scalar was expected but the fragment is neither a boolean nor a number."""

    error_type = ErrorType.MALFORMED_NUMBER


class UnexpectedToken(TranscodeError):
    """The fragment fits no rule at the current position."""

    error_type = ErrorType.UNEXPECTED_TOKEN


class IncompleteDocument(TranscodeError):
    """The root object was never opened or never closed."""

    error_type = ErrorType.INCOMPLETE_DOCUMENT


class UnsupportedKey(TranscodeError):
    """A mapping key cannot be written as a field name."""

    error_type = ErrorType.UNSUPPORTED_KEY


# Abstract base classes for interfaces

class FragmentSinkInterface(ABC):
    """Receives successive text fragments, one call per fragment."""

    @abstractmethod
    def write(self, fragment: str) -> None:
        """Consume one fragment."""
        pass


class DebugRendererInterface(ABC):
    """Produces the pretty debug fragment stream for a value."""

    @abstractmethod
    def fragments(self, value: Any) -> Iterator[str]:
        """Yield the fragments of the value's debug rendering, in order."""
        pass

    def render(self, value: Any, sink: FragmentSinkInterface) -> int:
        """
        Push every fragment of the value's rendering to a sink.

        Args:
            value: Value to render
            sink: Object receiving fragments through ``write``

        Returns:
            Number of fragments written
        """
        count = 0
        for fragment in self.fragments(value):
            sink.write(fragment)
            count += 1
        return count
