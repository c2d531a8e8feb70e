"""File writer for extracted content and decomposed documents."""

import logging
from pathlib import Path
from typing import Optional, Union
from ..types import ContentIOError
from ..utils.validation import ValidationUtils


class FileWriter:
    """
    File writer for the decomposed on-disk representation.

    Handles directory creation, reference resolution against the operation
    root and wrapping of OS errors with the attempted operation.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize the file writer.

        Args:
            logger: Optional logger instance
        """
        self.logger = logger or logging.getLogger(__name__)

    def write_content(self, root: Union[str, Path], reference: str, data: bytes) -> Path:
        """
        Write extracted content bytes below the operation root.

        Args:
            root: Operation root directory
            reference: Relative content reference
            data: Decoded content bytes

        Returns:
            Path of the written file

        Raises:
            PathEscapeError: If the reference leaves the root
            ContentIOError: If the directory or file cannot be written
        """
        file_path = ValidationUtils.resolve_reference(root, reference)
        self.ensure_directory(file_path.parent)

        try:
            file_path.write_bytes(data)
        except OSError as e:
            raise ContentIOError("write content file", file_path, e)

        self.logger.debug(f"Wrote {len(data)} bytes to {file_path}")
        return file_path

    def write_document(self, output_path: Union[str, Path], json_string: str) -> Path:
        """
        Write a serialized Ignition document.

        Raises:
            ContentIOError: If the file cannot be written
        """
        file_path = Path(output_path)
        self.ensure_directory(file_path.parent)

        try:
            file_path.write_text(json_string, encoding="utf-8")
        except OSError as e:
            raise ContentIOError("write Ignition document", file_path, e)

        self.logger.info(f"Wrote Ignition document to {file_path}")
        return file_path

    def ensure_directory(self, directory: Union[str, Path]) -> Path:
        """Create a directory and its parents if they do not exist."""
        directory = Path(directory)
        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ContentIOError("create directory", directory, e)
        return directory
