"""Content location and per-operation extraction state."""

from dataclasses import dataclass, field
from typing import List, Optional, Set

from ..utils.media_types import extension_for
from ..utils.validation import ValidationUtils, REFERENCE_SEPARATOR

SYNTHESIZED_PREFIX = "content-"


@dataclass(frozen=True)
class ContentLocation:
    """
    Where one content occurrence is stored, relative to the operation root.

    ``index`` is set for elements of content-bearing arrays; ``qualifier`` is set
    when the array's directory has to be qualified by its member name.
    """

    logical_path: str
    index: Optional[int] = None
    qualifier: Optional[str] = None

    def __post_init__(self):
        if self.index is not None and self.index < 0:
            raise ValueError("index must be non-negative")
        if self.qualifier is not None and self.index is None:
            raise ValueError("qualifier requires an index")

    @property
    def reference(self) -> str:
        """Relative, separator-delimited reference with no leading separator."""
        base = ValidationUtils.sanitize_reference(self.logical_path)
        if self.index is None:
            return base
        if self.qualifier is not None:
            base = f"{base}.{self.qualifier}"
        return f"{base}{REFERENCE_SEPARATOR}{self.index}"

    @staticmethod
    def synthesized_reference(counter: int, media_type: str) -> str:
        """Name for content whose logical path is empty."""
        return f"{SYNTHESIZED_PREFIX}{counter}{extension_for(media_type)}"


@dataclass
class ExtractionState:
    """Operation-scoped state threaded through one extraction walk."""

    counter: int = 0
    references: List[str] = field(default_factory=list)
    _seen: Set[str] = field(default_factory=set, repr=False)

    def record(self, reference: str) -> bool:
        """
        Count one converted field.

        Returns:
            False if the reference was already written in this operation
        """
        self.counter += 1
        self.references.append(reference)
        if reference in self._seen:
            return False
        self._seen.add(reference)
        return True
