"""Lexer splitting rendered debug text back into renderer-style fragments."""

import logging
from typing import Iterator, Optional

# Single-character fragments outside of strings.
PUNCTUATION = frozenset("{}[]():,")


class DebugTextLexer:
    """
    Splits debug dump text into the fragments a renderer would have emitted.

    Useful when only the text of a dump is available (a log line, a file)
    rather than the value itself. Outside strings, punctuation characters are
    single fragments and every other whitespace-delimited run is one
    fragment. Inside strings, unescaped runs are single fragments while a
    backslash and the character after it are separate fragments, so the
    aggregator sees the same stream as from a live rendering. Whitespace
    between tokens is skipped.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize the lexer.

        Args:
            logger: Optional logger instance
        """
        self.logger = logger or logging.getLogger(__name__)

    def tokenize(self, text: str) -> Iterator[str]:
        """
        Yield the fragments of a debug dump.

        Args:
            text: Debug text, pretty (multi-line) or compact

        Yields:
            Fragments in text order
        """
        i = 0
        n = len(text)
        while i < n:
            c = text[i]
            if c.isspace():
                i += 1
            elif c == '"':
                yield '"'
                i = yield from self._tokenize_string(text, i + 1)
            elif c in PUNCTUATION:
                yield c
                i += 1
            else:
                start = i
                while i < n and not text[i].isspace() and text[i] not in PUNCTUATION and text[i] != '"':
                    i += 1
                yield text[start:i]

    def _tokenize_string(self, text: str, i: int) -> Iterator[str]:
        """Yield string body fragments and the closing quote; return the index after it."""
        n = len(text)
        start = i
        while i < n:
            c = text[i]
            if c == "\\":
                if start < i:
                    yield text[start:i]
                yield "\\"
                if i + 1 < n:
                    yield text[i + 1]
                i += 2
                start = i
            elif c == '"':
                if start < i:
                    yield text[start:i]
                yield '"'
                return i + 1
            else:
                i += 1
        if start < n:
            yield text[start:n]
        self.logger.debug("Unterminated string at end of debug text")
        return n
