"""Error handling and output validation for the transcoder."""

import json
import logging
from typing import List, Optional

from .types import (
    ErrorResponse,
    ErrorType,
    TranscodeError,
    ValidationError,
    ValidationResult,
)


class ErrorHandler:
    """
    Validates transcoder output and turns strict-mode errors into responses.

    Lenient transcoding never raises, so malformed output is only visible by
    inspecting the text; validate_output does that check. Strict transcoding
    raises TranscodeError, which handle_transcode_error maps to a suggested
    action together with the partial JSON produced before the failure.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize the error handler.

        Args:
            logger: Optional logger instance for error reporting
        """
        self.logger = logger or logging.getLogger(__name__)

    def validate_output(self, json_text: str) -> ValidationResult:
        """
        Check that transcoder output is a JSON object document.

        Args:
            json_text: Text returned by the transcoder

        Returns:
            ValidationResult with validation details
        """
        errors: List[ValidationError] = []
        warnings: List[str] = []

        if not json_text.strip():
            errors.append(ValidationError(
                type=ErrorType.SYNTAX,
                message="JSON output is empty",
                location="output"
            ))
            return ValidationResult(is_valid=False, errors=errors, warnings=warnings)

        def _flag_constant(name: str) -> float:
            warnings.append(f"Non-standard JSON constant {name}")
            return float(name)

        try:
            data = json.loads(json_text, parse_constant=_flag_constant)
        except json.JSONDecodeError as e:
            errors.append(ValidationError(
                type=ErrorType.SYNTAX,
                message=f"Invalid JSON syntax: {e.msg}",
                location=f"line {e.lineno}, column {e.colno}"
            ))
            return ValidationResult(is_valid=False, errors=errors, warnings=warnings)

        if not isinstance(data, dict):
            errors.append(ValidationError(
                type=ErrorType.STRUCTURE,
                message=f"Root element must be an object, got {type(data).__name__}",
                location="root"
            ))

        return ValidationResult(
            is_valid=len(errors) == 0,
            errors=errors,
            warnings=warnings
        )

    def handle_transcode_error(self, error: TranscodeError) -> ErrorResponse:
        """
        Handle a strict-mode transcode error.

        Args:
            error: TranscodeError raised by the aggregator

        Returns:
            ErrorResponse with recovery information and the partial output
        """
        self.logger.error(f"Transcode error: {error.error_type.value} - {error}")

        if error.error_type == ErrorType.UNSUPPORTED_VARIANT:
            return ErrorResponse(
                can_recover=False,
                suggested_action="Replace enum, variant and None values with records, lists or scalars",
                partial_results=error.partial_output
            )
        elif error.error_type == ErrorType.MALFORMED_NUMBER:
            return ErrorResponse(
                can_recover=True,
                suggested_action="Render numbers as plain decimal literals, or retry in lenient mode to drop the value",
                partial_results=error.partial_output
            )
        elif error.error_type == ErrorType.UNSUPPORTED_KEY:
            return ErrorResponse(
                can_recover=True,
                suggested_action="Use plain name strings as mapping keys, or retry in lenient mode to skip those entries",
                partial_results=error.partial_output
            )
        elif error.error_type == ErrorType.INCOMPLETE_DOCUMENT:
            return ErrorResponse(
                can_recover=False,
                suggested_action="The root value must render as a complete record",
                partial_results=error.partial_output
            )
        else:
            return ErrorResponse(
                can_recover=True,
                suggested_action="Retry in lenient mode to drop unrecognized fragments",
                partial_results=error.partial_output
            )
