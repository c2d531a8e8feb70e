"""
Ignition coder - Bidirectional Ignition config transformation tool.

Converts between a self-contained Fedora CoreOS Ignition config with inline
data URLs and a directory holding the config plus one file per embedded
content.
"""

__version__ = "1.0.0"

from .ignition_coder import IgnitionCoder
from .models import SchemaVersion, VersionedConfig, ContentLocation, ExtractionState
from .types import (
    DisassembleResult,
    AssembleResult,
    IgnitionCoderError,
    SchemaParseError,
    DecodeError,
    PathEscapeError,
    MissingContentError,
    ContentIOError,
)

__all__ = [
    "IgnitionCoder",
    "SchemaVersion",
    "VersionedConfig",
    "ContentLocation",
    "ExtractionState",
    "DisassembleResult",
    "AssembleResult",
    "IgnitionCoderError",
    "SchemaParseError",
    "DecodeError",
    "PathEscapeError",
    "MissingContentError",
    "ContentIOError",
]
