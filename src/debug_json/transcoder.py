"""Transcoder facade: value or debug text in, minified JSON out."""

import logging
from typing import Any, Iterable, Optional

from .aggregator import StreamingAggregator
from .error_handler import ErrorHandler
from .lexer import DebugTextLexer
from .naming import keep_as_is, pascal_case
from .profiler import PerformanceProfiler
from .renderer import PrettyDebugRenderer
from .types import RenameFunction, TranscodeError, TranscodeResult


class JSONDebugTranscoder:
    """
    Converts values to JSON through their pretty debug rendering.

    The value is rendered to debug fragments which are fed, one by one, to a
    fresh StreamingAggregator per call. No type information reaches the JSON
    side: only the syntactic shape of the fragments matters. The same
    pipeline accepts an already-rendered debug dump through the lexer.

    Instances hold configuration only and can be reused; every call builds
    its own aggregator.
    """

    def __init__(self, rename_field: RenameFunction = keep_as_is,
                 strict: bool = False,
                 indent_width: int = 4,
                 enable_profiling: bool = False,
                 logger: Optional[logging.Logger] = None):
        """
        Initialize the transcoder.

        Args:
            rename_field: Mapping applied to every field name
            strict: Raise TranscodeError instead of dropping unrecognized fragments
            indent_width: Spaces per nesting level in the debug rendering
            enable_profiling: Record PerformanceMetrics for every call
            logger: Optional logger instance
        """
        self.rename_field = rename_field
        self.strict = strict
        self.logger = logger or logging.getLogger(__name__)

        self.renderer = PrettyDebugRenderer(indent_width=indent_width, strict=strict,
                                            logger=self.logger)
        self.lexer = DebugTextLexer(self.logger)
        self.error_handler = ErrorHandler(self.logger)
        self.profiler = PerformanceProfiler(self.logger) if enable_profiling else None

    def new_aggregator(self) -> StreamingAggregator:
        """Create an aggregator configured like this transcoder."""
        return StreamingAggregator(
            rename_field=self.rename_field,
            strict=self.strict,
            logger=self.logger
        )

    def serialize(self, value: Any) -> str:
        """
        Serialize a record value to minified JSON.

        Args:
            value: Dataclass, named tuple or mapping at the root

        Returns:
            JSON text (best effort in lenient mode)

        Raises:
            TranscodeError: In strict mode only
        """
        return self._run(self.renderer.fragments(value), "serialize", 0, self.new_aggregator())

    def serialize_text(self, text: str) -> str:
        """
        Convert an already-rendered debug dump to minified JSON.

        Args:
            text: Pretty or compact debug text of a record

        Returns:
            JSON text (best effort in lenient mode)

        Raises:
            TranscodeError: In strict mode only
        """
        input_size = len(text.encode("utf-8"))
        return self._run(self.lexer.tokenize(text), "serialize_text", input_size, self.new_aggregator())

    def transcode(self, value: Any) -> TranscodeResult:
        """
        Serialize a value and report the outcome instead of raising.

        Args:
            value: Value to serialize

        Returns:
            TranscodeResult with output, fragment count, errors and warnings
        """
        return self._transcode(self.renderer.fragments(value), "transcode", 0)

    def transcode_text(self, text: str) -> TranscodeResult:
        """
        Convert debug text and report the outcome instead of raising.

        Args:
            text: Debug text of a record

        Returns:
            TranscodeResult with output, fragment count, errors and warnings
        """
        return self._transcode(self.lexer.tokenize(text), "transcode_text",
                               len(text.encode("utf-8")))

    def _transcode(self, fragments: Iterable[str], operation: str,
                   input_size: int) -> TranscodeResult:
        aggregator = self.new_aggregator()
        try:
            output = self._run(fragments, operation, input_size, aggregator)
        except TranscodeError as e:
            response = self.error_handler.handle_transcode_error(e)
            self.logger.warning(f"{operation} failed after {aggregator.fragment_count} fragments: {e}")
            return TranscodeResult(
                success=False,
                json_string=e.partial_output,
                fragment_count=aggregator.fragment_count,
                errors=[str(e)],
                warnings=[response.suggested_action]
            )

        validation = self.error_handler.validate_output(output)
        warnings = list(validation.warnings)
        warnings.extend(error.message for error in validation.errors)
        return TranscodeResult(
            success=True,
            json_string=output,
            fragment_count=aggregator.fragment_count,
            warnings=warnings
        )

    def _run(self, fragments: Iterable[str], operation: str, input_size: int,
             aggregator: StreamingAggregator) -> str:
        if self.profiler is None:
            return self._feed_all(fragments, operation, aggregator)

        with self.profiler.profile_operation(operation, input_size) as profiler:
            output = self._feed_all(fragments, operation, aggregator)
            profiler.record_output(len(output.encode("utf-8")), aggregator.fragment_count)
        return output

    def _feed_all(self, fragments: Iterable[str], operation: str,
                  aggregator: StreamingAggregator) -> str:
        for fragment in fragments:
            aggregator.feed(fragment)
        output = aggregator.finalize()
        self.logger.info(f"{operation}: {aggregator.fragment_count} fragments -> {len(output)} chars")
        return output


def serialize(value: Any) -> str:
    """
    Serialize a record value to minified JSON, keeping field names.

    Example:
        >>> from dataclasses import dataclass
        >>> @dataclass
        ... class MyData:
        ...     a: str
        ...     b: str
        >>> serialize(MyData(a="hello", b="world"))
        '{"a":"hello","b":"world"}'
    """
    return serialize_with_renamed_fields(value, keep_as_is)


def serialize_with_pascal_case(value: Any) -> str:
    """Serialize a record value, converting snake_case field names to PascalCase."""
    return serialize_with_renamed_fields(value, pascal_case)


def serialize_with_renamed_fields(value: Any, rename_fn: RenameFunction) -> str:
    """
    Serialize a record value, renaming every field with a callback.

    Args:
        value: Record value at the root
        rename_fn: Called with each field name, returns the JSON key

    Returns:
        Minified JSON text
    """
    return JSONDebugTranscoder(rename_field=rename_fn).serialize(value)


def serialize_text(text: str, rename_fn: RenameFunction = keep_as_is,
                   strict: bool = False) -> str:
    """
    Convert debug dump text to minified JSON.

    Args:
        text: Debug text of a record
        rename_fn: Field rename policy
        strict: Raise TranscodeError on unrecognized fragments

    Returns:
        Minified JSON text
    """
    return JSONDebugTranscoder(rename_field=rename_fn, strict=strict).serialize_text(text)
