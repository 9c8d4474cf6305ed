"""Streaming aggregator turning debug-format fragments into minified JSON."""

import logging
from typing import List, Optional

from .classifier import classify, starts_with_uppercase
from .naming import keep_as_is
from .types import (
    AFTER_COLON,
    AFTER_ESCAPE,
    AFTER_OPEN_BRACE,
    AFTER_OPEN_BRACKET,
    AFTER_SCALAR,
    AFTER_STRING,
    INSIDE_STRING,
    VALUE_COMPLETED,
    FragmentSinkInterface,
    IncompleteDocument,
    MalformedNumber,
    RenameFunction,
    Rule,
    TokenKind,
    UnexpectedToken,
    UnsupportedVariant,
)

# Last output characters after which the next value needs a separator.
_SEPARATOR_TRIGGERS = frozenset('"]}0123456789e')

# Fragments the renderer emits between fields and elements.
_SEPARATOR_ARTIFACTS = frozenset(("", ","))

# Delimiters, never mistaken for a malformed scalar.
_STRUCTURAL = frozenset('{}[]():"')


class StreamingAggregator(FragmentSinkInterface):
    """
    State machine consuming debug-format fragments and producing JSON.

    Fragments are fed one at a time in emission order. There is no
    look-ahead: each fragment is classified against the set of token kinds
    acceptable at the current point, the matching JSON text is appended and
    the expected set is replaced. Fragments matching no rule are dropped.

    In strict mode dropped fragments raise a TranscodeError subclass instead,
    except for the empty and bare comma fragments a renderer emits as
    separators.
    """

    def __init__(self, rename_field: RenameFunction = keep_as_is,
                 strict: bool = False,
                 logger: Optional[logging.Logger] = None):
        """
        Initialize the aggregator.

        Args:
            rename_field: Mapping applied to every field name before it is written
            strict: Raise on fragments that would otherwise be dropped
            logger: Optional logger instance
        """
        self.rename_field = rename_field
        self.strict = strict
        self.logger = logger or logging.getLogger(__name__)
        self.expecting = TokenKind.OPEN_BRACE
        self.fragment_count = 0
        self._parts: List[str] = []
        self._last_char = ""
        self._depth = 0
        self._opened = False
        self._pending_name: Optional[str] = None

    @property
    def is_complete(self) -> bool:
        """True once the root object has been opened and closed again."""
        return self._opened and self._depth == 0

    def write(self, fragment: str) -> None:
        """Fragment sink entry point, same as feed."""
        self.feed(fragment)

    def feed(self, fragment: str) -> None:
        """
        Consume one fragment.

        Args:
            fragment: Text piece as emitted by the renderer

        Raises:
            TranscodeError: Only in strict mode, for fragments matching no rule
        """
        self.fragment_count += 1
        token = fragment.strip()
        rule = classify(token, self.expecting)

        if self.strict:
            self._check_strict(token, rule)

        if rule is None:
            self.logger.debug(
                f"Dropped fragment {token!r} (expecting {self.expecting})"
            )
            return

        if rule is Rule.OPEN_BRACE:
            self._append_separator()
            self._append("{")
            self._depth += 1
            self._opened = True
            self.expecting = AFTER_OPEN_BRACE
        elif rule is Rule.CLOSE_BRACE:
            self._append("}")
            self._depth -= 1
            self.expecting = VALUE_COMPLETED
        elif rule is Rule.OPEN_BRACKET:
            self._append_separator()
            self._append("[")
            self._depth += 1
            self.expecting = AFTER_OPEN_BRACKET
        elif rule is Rule.CLOSE_BRACKET:
            self._append("]")
            self._depth -= 1
            self.expecting = VALUE_COMPLETED
        elif rule is Rule.COLON:
            # The colon was already written together with the field name.
            self.expecting = AFTER_COLON
        elif rule is Rule.STRING_START:
            self._append_separator()
            self._append('"')
            self.expecting = INSIDE_STRING
        elif rule is Rule.STRING_END:
            self._append('"')
            self.expecting = AFTER_STRING
        elif rule is Rule.BOOLEAN or rule is Rule.NUMBER:
            self._append_separator()
            self._append(token)
            self.expecting = AFTER_SCALAR
        elif rule is Rule.STRING_BODY:
            if token == "\\":
                self._append("\\\\")
                # A backslash right after an escape is the escaped character.
                if self.expecting == AFTER_ESCAPE:
                    self.expecting = INSIDE_STRING
                else:
                    self.expecting = AFTER_ESCAPE
            else:
                self._append(token)
                self.expecting = INSIDE_STRING
        elif rule is Rule.FIELD_NAME:
            if token in _SEPARATOR_ARTIFACTS:
                return
            self._append_separator()
            self._append(f'"{self.rename_field(token)}":')
            self.expecting = TokenKind.COLON

    def finalize(self) -> str:
        """
        Return the JSON produced so far.

        May be called at any time; the text is only a complete document once
        the root object has been closed.

        Raises:
            TranscodeError: Only in strict mode, if a variant name is still
                pending or the root object is not complete
        """
        output = "".join(self._parts)
        if self.strict:
            if self._pending_name is not None:
                raise UnsupportedVariant(
                    f"Unsupported variant or capitalized name {self._pending_name!r}",
                    fragment=self._pending_name,
                    partial_output=output,
                )
            if not self.is_complete:
                raise IncompleteDocument(
                    "Root object was never closed" if self._opened
                    else "No root object was rendered",
                    partial_output=output,
                )
        return output

    def _check_strict(self, token: str, rule: Optional[Rule]) -> None:
        """Raise for fragments that lenient mode would silently drop."""
        if token in _SEPARATOR_ARTIFACTS and rule in (None, Rule.FIELD_NAME):
            return

        # A capitalized name is only valid as the type name of a record,
        # so the next meaningful fragment has to open that record.
        if self._pending_name is not None:
            if rule is not Rule.OPEN_BRACE:
                raise UnsupportedVariant(
                    f"Unsupported variant or capitalized name {self._pending_name!r}",
                    fragment=self._pending_name,
                    partial_output="".join(self._parts),
                )
            self._pending_name = None

        if rule is None:
            if starts_with_uppercase(token):
                self._pending_name = token
                return
            if TokenKind.NUMBER in self.expecting and token not in _STRUCTURAL:
                raise MalformedNumber(
                    f"Expected a number or boolean, got {token!r}",
                    fragment=token,
                    partial_output="".join(self._parts),
                )
            raise UnexpectedToken(
                f"Unexpected {token!r} (expecting {self.expecting})",
                fragment=token,
                partial_output="".join(self._parts),
            )

        if self.is_complete:
            raise UnexpectedToken(
                f"Unexpected {token!r} after the root object closed",
                fragment=token,
                partial_output="".join(self._parts),
            )

    def _append(self, text: str) -> None:
        if text:
            self._parts.append(text)
            self._last_char = text[-1]

    def _append_separator(self) -> None:
        if self._last_char in _SEPARATOR_TRIGGERS:
            self._append(",")
