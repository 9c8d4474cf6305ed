"""Pretty debug renderer producing the fragment stream the aggregator consumes."""

import dataclasses
import logging
from collections.abc import Mapping
from enum import Enum
from typing import Any, Iterable, Iterator, List, Optional, Set, Tuple

from .classifier import is_field_name
from .types import DebugRendererInterface, UnsupportedKey

# Escapes written as a backslash followed by one letter.
_SIMPLE_ESCAPES = {
    "\\": "\\",
    '"': '"',
    "\n": "n",
    "\r": "r",
    "\t": "t",
}


class PrettyDebugRenderer(DebugRendererInterface):
    """
    Renders Python values in a multi-line pretty debug format.

    The output mirrors the ``Name { field: value }`` notation of derived
    debug printing: dataclasses, named tuples and mappings are records,
    lists and sets use brackets, tuples use parentheses, strings are double
    quoted with backslash escapes, booleans are ``true``/``false``. Enum
    members render like tuple variants (``NAME(value)``) and ``None`` as
    ``None``; the aggregator treats both as unsupported. Mapping entries
    whose key cannot be written as a field name are skipped, or raise
    UnsupportedKey in strict mode.

    Every piece is yielded as a separate fragment, in the same places a
    formatter would hand them to its writer: the record name, `` {\\n``,
    indentation, field names, ``: ``, each value piece and ``,\\n``.
    """

    def __init__(self, indent_width: int = 4, strict: bool = False,
                 logger: Optional[logging.Logger] = None):
        """
        Initialize the renderer.

        Args:
            indent_width: Spaces per nesting level
            strict: Raise UnsupportedKey for mapping keys that are not field names
            logger: Optional logger instance
        """
        if indent_width < 0:
            raise ValueError(f"indent_width must be >= 0, got {indent_width}")
        self.indent_width = indent_width
        self.strict = strict
        self.logger = logger or logging.getLogger(__name__)

    def fragments(self, value: Any) -> Iterator[str]:
        """
        Yield the fragments of a value's pretty debug rendering.

        Args:
            value: Value to render

        Yields:
            Text fragments in emission order
        """
        yield from self._render(value, 0, set())

    def render_to_string(self, value: Any) -> str:
        """Return the complete pretty debug text of a value."""
        return "".join(self.fragments(value))

    def _render(self, value: Any, level: int, active: Set[int]) -> Iterator[str]:
        # bool before int: bool is an int subclass
        if isinstance(value, bool):
            yield "true" if value else "false"
        elif value is None:
            yield "None"
        elif isinstance(value, Enum):
            yield from self._render_variant(value, level, active)
        elif isinstance(value, str):
            yield from self._render_str(value)
        elif isinstance(value, int):
            yield str(value)
        elif isinstance(value, float):
            yield repr(value)
        elif id(value) in active:
            self.logger.debug(f"Cycle detected at {type(value).__name__}")
            yield "..."
        elif self._is_record(value):
            active.add(id(value))
            try:
                yield from self._render_record(value, level, active)
            finally:
                active.discard(id(value))
        elif isinstance(value, (list, tuple, set, frozenset)):
            active.add(id(value))
            try:
                if isinstance(value, tuple):
                    yield from self._render_sequence(value, "(", ")", level, active)
                else:
                    yield from self._render_sequence(value, "[", "]", level, active)
            finally:
                active.discard(id(value))
        else:
            self.logger.debug(f"No debug shape for {type(value).__name__}, using repr")
            yield repr(value)

    @staticmethod
    def _is_record(value: Any) -> bool:
        if dataclasses.is_dataclass(value) and not isinstance(value, type):
            return True
        if isinstance(value, tuple) and hasattr(value, "_fields"):
            return True
        return isinstance(value, Mapping)

    def _record_fields(self, value: Any) -> Tuple[Optional[str], List[Tuple[str, Any]]]:
        """Return the record's type name (None for mappings) and its fields in order."""
        if isinstance(value, Mapping):
            return None, self._mapping_fields(value)
        if isinstance(value, tuple):
            return type(value).__name__, list(zip(value._fields, value))
        fields = [
            (f.name, getattr(value, f.name))
            for f in dataclasses.fields(value)
            if f.repr
        ]
        return type(value).__name__, fields

    def _mapping_fields(self, value: Mapping) -> List[Tuple[str, Any]]:
        fields = []
        for key, item in value.items():
            if is_field_name(key):
                fields.append((key, item))
            elif self.strict:
                raise UnsupportedKey(
                    f"Mapping key {key!r} cannot be written as a field name",
                    fragment=repr(key),
                )
            else:
                self.logger.warning(f"Skipping mapping entry with key {key!r}")
        return fields

    def _indent(self, level: int) -> str:
        return " " * (self.indent_width * level)

    def _render_record(self, value: Any, level: int, active: Set[int]) -> Iterator[str]:
        name, fields = self._record_fields(value)
        if name is not None:
            yield name
            opening = " {"
        else:
            opening = "{"
        if not fields:
            yield opening
            yield "}"
            return
        yield opening + "\n"
        for field_name, field_value in fields:
            yield self._indent(level + 1)
            yield field_name
            yield ": "
            yield from self._render(field_value, level + 1, active)
            yield ",\n"
        yield self._indent(level) + "}"

    def _render_sequence(self, items: Iterable[Any], open_delim: str,
                         close_delim: str, level: int,
                         active: Set[int]) -> Iterator[str]:
        yield open_delim
        first = True
        for item in items:
            if first:
                yield "\n"
                first = False
            yield self._indent(level + 1)
            yield from self._render(item, level + 1, active)
            yield ",\n"
        if first:
            yield close_delim
        else:
            yield self._indent(level) + close_delim

    def _render_variant(self, member: Enum, level: int, active: Set[int]) -> Iterator[str]:
        yield member.name
        yield "(\n"
        yield self._indent(level + 1)
        yield from self._render(member.value, level + 1, active)
        yield ",\n"
        yield self._indent(level) + ")"

    @staticmethod
    def _render_str(value: str) -> Iterator[str]:
        yield '"'
        run_start = 0
        for i, c in enumerate(value):
            if c in _SIMPLE_ESCAPES:
                escape = _SIMPLE_ESCAPES[c]
            elif not c.isprintable():
                escape = "u{" + format(ord(c), "x") + "}"
            else:
                continue
            if run_start < i:
                yield value[run_start:i]
            # one fragment per escape character
            yield "\\"
            yield from escape
            run_start = i + 1
        if run_start < len(value):
            yield value[run_start:]
        yield '"'
