"""Versioned Ignition configuration model."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, FrozenSet, Optional

_BASE_SECTIONS = frozenset({"ignition", "passwd", "storage", "systemd"})
_BASE_STORAGE = frozenset({"directories", "disks", "files", "filesystems", "links", "raid"})


class SchemaVersion(Enum):
    """Supported Ignition specification versions."""
    V3_0 = "3.0.0"
    V3_1 = "3.1.0"
    V3_2 = "3.2.0"
    V3_3 = "3.3.0"
    V3_4 = "3.4.0"
    V3_5 = "3.5.0"

    @classmethod
    def from_string(cls, version: str) -> Optional["SchemaVersion"]:
        """Look up a version by its string form, or None if unsupported."""
        for member in cls:
            if member.value == version:
                return member
        return None

    @property
    def layout(self) -> "VersionLayout":
        return _LAYOUTS[self]


@dataclass(frozen=True)
class VersionLayout:
    """Known top-level and storage sections of one specification version."""
    sections: FrozenSet[str]
    storage_sections: FrozenSet[str]


_LAYOUTS = {
    SchemaVersion.V3_0: VersionLayout(_BASE_SECTIONS, _BASE_STORAGE),
    SchemaVersion.V3_1: VersionLayout(_BASE_SECTIONS, _BASE_STORAGE),
    SchemaVersion.V3_2: VersionLayout(_BASE_SECTIONS, _BASE_STORAGE | {"luks"}),
    SchemaVersion.V3_3: VersionLayout(_BASE_SECTIONS | {"kernelArguments"}, _BASE_STORAGE | {"luks"}),
    SchemaVersion.V3_4: VersionLayout(_BASE_SECTIONS | {"kernelArguments"}, _BASE_STORAGE | {"luks"}),
    SchemaVersion.V3_5: VersionLayout(_BASE_SECTIONS | {"kernelArguments"}, _BASE_STORAGE | {"luks"}),
}


@dataclass
class VersionedConfig:
    """
    A parsed Ignition configuration together with its specification version.

    The document is kept as the generic JSON tree the walkers operate on,
    in input key order, so every version shares one walker implementation.
    """

    version: SchemaVersion
    document: Dict[str, Any]

    def to_tree(self) -> Dict[str, Any]:
        """Return the generic tree form (the live document, not a copy)."""
        return self.document

    @classmethod
    def from_tree(cls, tree: Dict[str, Any], version: SchemaVersion) -> "VersionedConfig":
        return cls(version=version, document=tree)
