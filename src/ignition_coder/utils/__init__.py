"""Utility functions for the Ignition coder."""

from .validation import ValidationUtils
from .media_types import extension_for
from .defaults import remove_default_values

__all__ = ["ValidationUtils", "extension_for", "remove_default_values"]
