"""Extraction walker: moves inline content out of a document (disassemble)."""

import logging
from pathlib import Path, PurePosixPath
from typing import Any, Callable, Iterable, Optional, Tuple, Union

from .. import codec
from ..engines.path_tracker import PathTracker
from ..engines.array_disambiguator import ArrayDisambiguator, CONTENT_KEY
from ..io.file_writer import FileWriter
from ..models import ContentLocation, ExtractionState
from ..types import ContentIOError, ContentWalkerInterface, PathEscapeError

# (index, directory qualifier) assigned to an element of a content-bearing array
Slot = Tuple[int, Optional[str]]
ProgressCallback = Callable[[int, str], None]


class ExtractionWalker(ContentWalkerInterface):
    """
    Depth-first traversal converting inline content to external files.

    Each inline ``source`` value is decoded, written below the output root
    and replaced with a placeholder referencing the written file. Traversal
    follows input key and array order, so locations are reproducible for a
    fixed input. The file is written before the field is rewritten; a
    failure aborts the walk and leaves earlier files in place.
    """

    def __init__(self, output_root: Union[str, Path],
                 file_writer: Optional[FileWriter] = None,
                 disambiguator: Optional[ArrayDisambiguator] = None,
                 logger: Optional[logging.Logger] = None,
                 on_progress: Optional[ProgressCallback] = None,
                 reserved_references: Iterable[str] = ()):
        """
        Initialize the extraction walker.

        Args:
            output_root: Directory content files are written under
            file_writer: Optional FileWriter instance
            disambiguator: Optional ArrayDisambiguator instance
            logger: Optional logger instance
            on_progress: Called with (counter, reference) after each extraction
            reserved_references: Root-level names content may not be written to,
                such as the file name of the decomposed document
        """
        self.output_root = Path(output_root)
        self.logger = logger or logging.getLogger(__name__)
        self.file_writer = file_writer or FileWriter(self.logger)
        self.disambiguator = disambiguator or ArrayDisambiguator(self.logger)
        self.on_progress = on_progress
        self.reserved_references = {reference.casefold() for reference in reserved_references}

    def walk(self, document: Any) -> int:
        """Extract all inline content of the document, returning the number of files written."""
        return self.extract(document).counter

    def extract(self, document: Any, state: Optional[ExtractionState] = None) -> ExtractionState:
        """
        Extract all inline content of the document.

        Args:
            document: Generic document tree, mutated in place
            state: Optional state to continue counting from

        Returns:
            ExtractionState with the counter and written references
        """
        state = state or ExtractionState()
        self._visit(document, "", state, None)
        self.logger.info(f"Extracted {state.counter} file(s) to {self.output_root}")
        return state

    def _visit(self, node: Any, inherited_path: str, state: ExtractionState, slot: Optional[Slot]) -> None:
        if isinstance(node, dict):
            logical_path = PathTracker.track(node, inherited_path)
            plan = self.disambiguator.plan(node, logical_path)

            for key, value in node.items():
                if key == CONTENT_KEY and isinstance(value, str):
                    node[key] = self._convert(value, logical_path, state, slot)
                elif key in plan:
                    for index, item in enumerate(value):
                        item_slot = (index, plan[key]) if self.disambiguator.is_content_element(item) else None
                        self._visit(item, logical_path, state, item_slot)
                else:
                    self._visit(value, logical_path, state, None)

        elif isinstance(node, list):
            for item in node:
                self._visit(item, inherited_path, state, None)

    def _convert(self, value: str, logical_path: str, state: ExtractionState, slot: Optional[Slot]) -> str:
        content = codec.decode(value, logical_path)
        if content is None:
            return value

        reference = self._reference_for(logical_path, content.media_type, state, slot)
        if PurePosixPath(reference).as_posix().casefold() in self.reserved_references:
            raise ContentIOError(
                "write content file",
                self.output_root / reference,
                FileExistsError(f"'{reference}' is reserved for the Ignition document"),
            )
        self.file_writer.write_content(self.output_root, reference, content.data)

        if not state.record(reference):
            self.logger.warning(f"Content location {reference} written more than once, keeping the last")
        self.logger.info(f"[{state.counter}] Extracted {logical_path or '(no path)'} -> {reference}")
        if self.on_progress:
            self.on_progress(state.counter, reference)

        return codec.encode_placeholder(content.media_type, reference, content.base64, content.indicator)

    def _reference_for(self, logical_path: str, media_type: str,
                       state: ExtractionState, slot: Optional[Slot]) -> str:
        if not logical_path:
            return ContentLocation.synthesized_reference(state.counter, media_type)

        index, qualifier = slot if slot else (None, None)
        try:
            return ContentLocation(logical_path, index=index, qualifier=qualifier).reference
        except PathEscapeError:
            raise PathEscapeError(logical_path, self.output_root)
