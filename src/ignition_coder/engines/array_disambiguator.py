"""Index assignment for content that shares one logical path inside arrays."""

import logging
from typing import Any, Dict, Optional

from .path_tracker import PathTracker
from ..codec import SCHEME_PREFIX

CONTENT_KEY = "source"


class ArrayDisambiguator:
    """
    Plans storage locations for content-bearing arrays of one object.

    Every element of a content-bearing array inherits the logical path of
    the object that owns the array, so elements are told apart by their
    0-based position. When only one claimant uses the path, elements live
    in ``<path>/<index>``. When several claimants share it (two arrays, or
    a lone ``contents`` next to an ``append`` array) each array moves to a
    sibling directory qualified by its member name, ``<path>.<field>/<index>``,
    and the lone content keeps ``<path>``.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)

    @staticmethod
    def is_content_element(element: Any) -> bool:
        """An array element that shares its owner's path and carries content."""
        return (
            isinstance(element, dict)
            and isinstance(element.get(CONTENT_KEY), str)
            and PathTracker.declared_path(element) is None
        )

    def qualifying_arrays(self, node: Dict[str, Any]) -> list:
        """Names of array members holding content-bearing elements, in key order."""
        return [
            key for key, value in node.items()
            if isinstance(value, list) and any(self.is_content_element(item) for item in value)
        ]

    def plan(self, node: Dict[str, Any], logical_path: str) -> Dict[str, Optional[str]]:
        """
        Decide how each qualifying array of an object is stored.

        Args:
            node: Object whose members are about to be visited
            logical_path: Logical path in force for the object

        Returns:
            Mapping of array member name to directory qualifier (None for
            the plain ``<path>/<index>`` layout). Empty when the logical
            path is empty, since such content gets synthesized names.
        """
        if not logical_path:
            return {}

        arrays = self.qualifying_arrays(node)
        if not arrays:
            return {}

        shared = len(arrays) > 1 or self._has_lone_claimant(node, set(arrays))
        plan = {key: (key if shared else None) for key in arrays}
        if shared:
            self.logger.debug(f"Qualifying array directories under {logical_path}: {arrays}")
        return plan

    def _has_lone_claimant(self, node: Dict[str, Any], excluded: set) -> bool:
        """Check for data URL content outside the arrays that uses the same path."""
        value = node.get(CONTENT_KEY)
        if isinstance(value, str) and value.startswith(SCHEME_PREFIX):
            return True

        for key, child in node.items():
            if key in excluded or key == CONTENT_KEY:
                continue
            if self._subtree_claims(child):
                return True
        return False

    def _subtree_claims(self, node: Any) -> bool:
        if isinstance(node, dict):
            if PathTracker.declared_path(node) is not None:
                return False
            return self._has_lone_claimant(node, set())
        if isinstance(node, list):
            return any(self._subtree_claims(item) for item in node)
        return False
