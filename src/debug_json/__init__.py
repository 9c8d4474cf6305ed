"""
debug-json - minimal JSON serialization from pretty debug output.

Converts the pretty-printed debug representation of a record value into
minified JSON by reading the syntactic shape of the debug fragments
(braces, brackets, quotes, colons, literals) instead of the value's types.

Limitations:
- the root must render as a record, so the output is always a JSON object
- enum members, variants and None are not supported anywhere in the value
- field names must not start with an uppercase letter
- mapping keys must be plain name strings, not literals like "true" or
  "1"; other entries are skipped (or rejected in strict mode)
"""

from .aggregator import StreamingAggregator
from .lexer import DebugTextLexer
from .naming import keep_as_is, pascal_case
from .renderer import PrettyDebugRenderer
from .transcoder import (
    JSONDebugTranscoder,
    serialize,
    serialize_text,
    serialize_with_pascal_case,
    serialize_with_renamed_fields,
)
from .types import (
    IncompleteDocument,
    MalformedNumber,
    TokenKind,
    TranscodeError,
    TranscodeResult,
    UnexpectedToken,
    UnsupportedKey,
    UnsupportedVariant,
)

__version__ = "1.0.0"
__all__ = [
    "DebugTextLexer",
    "IncompleteDocument",
    "JSONDebugTranscoder",
    "MalformedNumber",
    "PrettyDebugRenderer",
    "StreamingAggregator",
    "TokenKind",
    "TranscodeError",
    "TranscodeResult",
    "UnexpectedToken",
    "UnsupportedKey",
    "UnsupportedVariant",
    "keep_as_is",
    "pascal_case",
    "serialize",
    "serialize_text",
    "serialize_with_pascal_case",
    "serialize_with_renamed_fields",
]
