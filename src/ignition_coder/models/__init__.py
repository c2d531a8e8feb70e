"""Data models for the Ignition coder."""

from .versioned_config import SchemaVersion, VersionLayout, VersionedConfig
from .content_location import ContentLocation, ExtractionState

__all__ = ["SchemaVersion", "VersionLayout", "VersionedConfig", "ContentLocation", "ExtractionState"]
