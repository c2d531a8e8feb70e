"""Core type definitions for the Ignition coder."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Union


class ErrorType(Enum):
    """Enumeration of error types."""
    SCHEMA = "schema"
    DECODE = "decode"
    PATH = "path"
    MISSING_CONTENT = "missing-content"
    FILESYSTEM = "filesystem"


@dataclass
class DisassembleResult:
    """Result of disassemble operation."""
    success: bool
    output_directory: str
    file_count: int
    document_path: Optional[str] = None
    warnings: List[str] = field(default_factory=list)
    errors: Optional[List[str]] = None


@dataclass
class AssembleResult:
    """Result of assemble operation."""
    success: bool
    json_string: str
    file_count: int
    output_file: Optional[str] = None
    warnings: List[str] = field(default_factory=list)
    errors: Optional[List[str]] = None


@dataclass
class ValidationError:
    """Validation error details."""
    type: ErrorType
    message: str
    location: Optional[str] = None


@dataclass
class ValidationResult:
    """Result of input validation."""
    is_valid: bool
    errors: List[ValidationError]
    warnings: List[str]


@dataclass
class ErrorResponse:
    """Response for error handling."""
    can_recover: bool
    suggested_action: str
    partial_results: Optional[Any] = None


class IgnitionCoderError(Exception):
    """Base exception for every failure of a coder operation."""

    def __init__(self, message: str, error_type: ErrorType, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.error_type = error_type
        self.context = context or {}


class SchemaParseError(IgnitionCoderError):
    """Malformed document or unsupported Ignition version."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message, ErrorType.SCHEMA, context)


class DecodeError(IgnitionCoderError):
    """A data URL carries the scheme prefix but its body is malformed."""

    def __init__(self, message: str, logical_path: str = ""):
        if logical_path:
            message = f"{message} (path: {logical_path})"
        super().__init__(message, ErrorType.DECODE, {"logical_path": logical_path})
        self.logical_path = logical_path


class PathEscapeError(IgnitionCoderError):
    """A content reference would resolve outside the operation root."""

    def __init__(self, reference: str, root: Union[str, Path]):
        super().__init__(
            f"Reference '{reference}' escapes the content root {root}",
            ErrorType.PATH,
            {"reference": reference, "root": str(root)},
        )
        self.reference = reference
        self.root = str(root)


class MissingContentError(IgnitionCoderError):
    """A placeholder references a content file that does not exist."""

    def __init__(self, reference: str, path: Union[str, Path]):
        super().__init__(
            f"Content file for '{reference}' not found at {path}",
            ErrorType.MISSING_CONTENT,
            {"reference": reference, "path": str(path)},
        )
        self.reference = reference
        self.path = str(path)


class ContentIOError(IgnitionCoderError):
    """Filesystem failure, wrapped with the attempted operation and path."""

    def __init__(self, operation: str, path: Union[str, Path], cause: OSError):
        super().__init__(
            f"Failed to {operation} {path}: {cause.strerror or cause}",
            ErrorType.FILESYSTEM,
            {"operation": operation, "path": str(path)},
        )
        self.operation = operation
        self.path = str(path)


# Abstract base classes for interfaces

class IgnitionCoderInterface(ABC):
    """Abstract interface for the Ignition coder."""

    @abstractmethod
    async def disassemble(self, ignition_string: str, output_dir: str) -> DisassembleResult:
        """Extract embedded file contents into a directory."""
        pass

    @abstractmethod
    async def assemble(self, ignition_dir: str, target_file: Optional[str] = None) -> AssembleResult:
        """Embed external file contents back into one Ignition document."""
        pass


class ContentWalkerInterface(ABC):
    """Abstract interface for document walkers."""

    @abstractmethod
    def walk(self, document: Any) -> int:
        """Rewrite content fields of the document in place, returning how many were converted."""
        pass
