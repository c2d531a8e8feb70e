"""Logical path tracking for document traversal."""

from typing import Any

PATH_KEY = "path"


class PathTracker:
    """Derives the logical path in force at a document node."""

    @staticmethod
    def declared_path(node: Any):
        """Return the node's own string ``path`` declaration, or None."""
        if isinstance(node, dict):
            value = node.get(PATH_KEY)
            if isinstance(value, str):
                return value
        return None

    @classmethod
    def track(cls, node: Any, inherited_path: str) -> str:
        """
        Compute the logical path for a node.

        Args:
            node: Document node about to be visited
            inherited_path: Logical path of the node's parent

        Returns:
            The node's declared path if it is an object with a string
            ``path`` member, otherwise ``inherited_path``
        """
        declared = cls.declared_path(node)
        return inherited_path if declared is None else declared
