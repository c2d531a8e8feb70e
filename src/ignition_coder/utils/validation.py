"""Validation utilities for input documents and content references."""

import json
from pathlib import Path, PurePosixPath
from typing import Any, List, Union
from ..types import ValidationResult, ValidationError, ErrorType, PathEscapeError

REFERENCE_SEPARATOR = "/"


class ValidationUtils:
    """Utility class for validating documents and content references."""

    @staticmethod
    def validate_json_string(json_string: str) -> ValidationResult:
        """
        Validate JSON string syntax and root type.

        Args:
            json_string: JSON string to validate

        Returns:
            ValidationResult with validation details
        """
        errors = []
        warnings = []

        if not json_string.strip():
            errors.append(ValidationError(
                type=ErrorType.SCHEMA,
                message="Ignition document is empty",
                location="input"
            ))
            return ValidationResult(is_valid=False, errors=errors, warnings=warnings)

        try:
            data = json.loads(json_string)
        except json.JSONDecodeError as e:
            errors.append(ValidationError(
                type=ErrorType.SCHEMA,
                message=f"Invalid JSON syntax: {e.msg}",
                location=f"line {e.lineno}, column {e.colno}"
            ))
            return ValidationResult(is_valid=False, errors=errors, warnings=warnings)

        if not isinstance(data, dict):
            errors.append(ValidationError(
                type=ErrorType.SCHEMA,
                message=f"Root element must be an object, got {type(data).__name__}",
                location="root"
            ))

        return ValidationResult(
            is_valid=len(errors) == 0,
            errors=errors,
            warnings=warnings
        )

    @staticmethod
    def sanitize_reference(logical_path: str) -> str:
        """
        Turn a logical path into a relative content reference.

        Strips one leading separator and rejects parent-directory segments
        and references that are still absolute afterwards.

        Raises:
            PathEscapeError: If the reference could leave its root
        """
        reference = logical_path
        if reference.startswith(REFERENCE_SEPARATOR):
            reference = reference[1:]

        segments = reference.split(REFERENCE_SEPARATOR)
        if ".." in segments or "\\" in reference:
            raise PathEscapeError(logical_path, ".")
        if reference.startswith(REFERENCE_SEPARATOR) or PurePosixPath(reference).is_absolute():
            raise PathEscapeError(logical_path, ".")
        if not reference or all(segment in ("", ".") for segment in segments):
            raise PathEscapeError(logical_path, ".")

        return reference

    @staticmethod
    def resolve_reference(root: Union[str, Path], reference: str) -> Path:
        """
        Resolve a content reference against an operation root.

        Args:
            root: Operation root directory
            reference: Reference (a leading separator is tolerated)

        Returns:
            Absolute path inside the root

        Raises:
            PathEscapeError: If the resolved path lies outside the root
        """
        root_path = Path(root).resolve()
        try:
            relative = ValidationUtils.sanitize_reference(reference)
        except PathEscapeError:
            raise PathEscapeError(reference, root_path)

        resolved = (root_path / relative).resolve()
        if resolved == root_path or not resolved.is_relative_to(root_path):
            raise PathEscapeError(reference, root_path)
        return resolved

    @staticmethod
    def find_non_string_paths(data: Any) -> List[str]:
        """List JSON pointers of ``path`` members that are not strings."""
        found = []

        def visit(node: Any, pointer: str) -> None:
            if isinstance(node, dict):
                for key, value in node.items():
                    child = f"{pointer}/{key}"
                    if key == "path" and not isinstance(value, str):
                        found.append(child)
                    visit(value, child)
            elif isinstance(node, list):
                for index, item in enumerate(node):
                    visit(item, f"{pointer}/{index}")

        visit(data, "")
        return found
