"""Stripping of default-valued fields from assembled documents."""

from typing import Any


def is_default(value: Any) -> bool:
    """Check whether a JSON value equals its type's default."""
    if value is None:
        return True
    if isinstance(value, bool):
        return not value
    if isinstance(value, (str, list, dict)):
        return len(value) == 0
    if isinstance(value, int):
        return value == 0
    # Floats are never treated as defaults
    return False


def remove_default_values(value: Any) -> None:
    """
    Remove default-valued members and elements in place.

    Containers are filtered before their children are visited, so a child
    that only becomes empty after its own filtering is kept.
    """
    if isinstance(value, dict):
        for key in [k for k, v in value.items() if is_default(v)]:
            del value[key]
        for child in value.values():
            remove_default_values(child)
    elif isinstance(value, list):
        value[:] = [item for item in value if not is_default(item)]
        for child in value:
            remove_default_values(child)
