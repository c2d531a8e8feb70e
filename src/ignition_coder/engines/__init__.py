"""Core traversal engines."""

from .path_tracker import PathTracker
from .array_disambiguator import ArrayDisambiguator

__all__ = ["PathTracker", "ArrayDisambiguator"]
