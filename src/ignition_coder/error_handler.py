"""Error handling for Ignition coder operations."""

import logging
from pathlib import Path
from typing import Optional
from .types import (
    ValidationResult,
    ValidationError,
    ErrorResponse,
    IgnitionCoderError,
    ErrorType
)
from .utils.validation import ValidationUtils


class ErrorHandler:
    """
    Error handler for Ignition coder operations.

    Validates operation inputs up front and turns a terminal error into a
    single log record plus a suggested action for the user. No error is
    recoverable within an operation: files written before a failure stay
    on disk and the in-progress document is discarded.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize the error handler.

        Args:
            logger: Optional logger instance for error reporting
        """
        self.logger = logger or logging.getLogger(__name__)

    def validate_input(self, input_data: str) -> ValidationResult:
        """
        Validate an input Ignition document string.

        Args:
            input_data: JSON string to validate

        Returns:
            ValidationResult with validation details
        """
        return ValidationUtils.validate_json_string(input_data)

    def validate_directory_path(self, directory: str) -> ValidationResult:
        """Check that a directory argument does not point at an existing file."""
        errors = []
        if not directory:
            errors.append(ValidationError(
                type=ErrorType.FILESYSTEM,
                message="Directory path cannot be empty",
                location="directory"
            ))
        elif Path(directory).exists() and not Path(directory).is_dir():
            errors.append(ValidationError(
                type=ErrorType.FILESYSTEM,
                message=f"Path exists and is not a directory: {directory}",
                location=directory
            ))
        return ValidationResult(is_valid=len(errors) == 0, errors=errors, warnings=[])

    def handle_error(self, error: IgnitionCoderError) -> ErrorResponse:
        """
        Report a terminal error once and suggest what to do about it.

        Args:
            error: The error that aborted the operation

        Returns:
            ErrorResponse with the suggested action
        """
        self.logger.error(f"Operation failed: {error.error_type.value} - {error}")

        if error.error_type == ErrorType.SCHEMA:
            action = "Fix the Ignition document; only specification versions 3.0.0 to 3.5.0 are supported."
        elif error.error_type == ErrorType.DECODE:
            action = "Repair the malformed data URL at the reported path."
        elif error.error_type == ErrorType.PATH:
            action = "Remove '..' segments and absolute references from the reported path."
        elif error.error_type == ErrorType.MISSING_CONTENT:
            action = "Restore the referenced content file or replace the placeholder with inline content."
        elif error.error_type == ErrorType.FILESYSTEM:
            action = "Check file permissions, available disk space, and directory access."
        else:
            action = "Unknown error type. Please check logs and retry."

        partial = error.context.get("written") if error.context else None
        return ErrorResponse(can_recover=False, suggested_action=action, partial_results=partial)
