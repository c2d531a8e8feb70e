"""File reader for decomposed Ignition directories."""

import logging
from pathlib import Path
from typing import Optional, Union
from ..types import ContentIOError, MissingContentError, SchemaParseError
from ..utils.validation import ValidationUtils

IGNITION_SUFFIX = ".ign"


class FileReader:
    """Reads content files and documents from the decomposed representation."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)

    def read_content(self, root: Union[str, Path], reference: str) -> bytes:
        """
        Read the content bytes a placeholder refers to.

        Raises:
            PathEscapeError: If the reference leaves the root
            MissingContentError: If no file exists at the reference
            ContentIOError: If the file exists but cannot be read
        """
        file_path = ValidationUtils.resolve_reference(root, reference)
        if not file_path.is_file():
            raise MissingContentError(reference, file_path)

        try:
            data = file_path.read_bytes()
        except OSError as e:
            raise ContentIOError("read content file", file_path, e)

        self.logger.debug(f"Read {len(data)} bytes from {file_path}")
        return data

    def find_ignition_file(self, directory: Union[str, Path], preferred: Optional[str] = None) -> Path:
        """
        Locate the Ignition document of a decomposed directory.

        Args:
            directory: Decomposed directory
            preferred: Document file name used when present in the directory

        Returns:
            The preferred document, otherwise the first ``*.ign`` file in name order

        Raises:
            ContentIOError: If the directory cannot be listed or holds no document
        """
        directory = Path(directory)
        if preferred and (directory / preferred).is_file():
            return directory / preferred

        try:
            candidates = sorted(
                entry for entry in directory.iterdir()
                if entry.is_file() and entry.suffix == IGNITION_SUFFIX
            )
        except OSError as e:
            raise ContentIOError("list directory", directory, e)

        if not candidates:
            raise ContentIOError(
                "find Ignition document in",
                directory,
                FileNotFoundError(f"no {IGNITION_SUFFIX} file"),
            )
        if len(candidates) > 1:
            self.logger.warning(f"Multiple {IGNITION_SUFFIX} files in {directory}, using {candidates[0].name}")
        return candidates[0]

    def read_document(self, file_path: Union[str, Path]) -> str:
        """Read an Ignition document as text."""
        file_path = Path(file_path)
        try:
            return file_path.read_text(encoding="utf-8")
        except OSError as e:
            raise ContentIOError("read Ignition document", file_path, e)
        except UnicodeDecodeError as e:
            raise SchemaParseError(f"Ignition document {file_path} is not valid UTF-8: {e.reason}")
