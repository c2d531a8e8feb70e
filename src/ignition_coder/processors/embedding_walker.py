"""Embedding walker: inlines externally stored content (assemble)."""

import logging
from pathlib import Path
from typing import Any, Optional, Union

from .. import codec
from ..engines.array_disambiguator import CONTENT_KEY
from ..io.file_reader import FileReader
from ..types import ContentWalkerInterface


class EmbeddingWalker(ContentWalkerInterface):
    """
    Mirror of the extraction walker.

    Placeholders carry their own reference, so this walker never derives
    logical paths; edits elsewhere in the document between extraction and
    assembly do not change where content is read from.
    """

    def __init__(self, files_root: Union[str, Path],
                 file_reader: Optional[FileReader] = None,
                 logger: Optional[logging.Logger] = None):
        self.files_root = Path(files_root)
        self.logger = logger or logging.getLogger(__name__)
        self.file_reader = file_reader or FileReader(self.logger)

    def walk(self, document: Any) -> int:
        """Embed all placeholder content, returning the number of fields rewritten."""
        count = self._visit(document)
        self.logger.info(f"Embedded {count} file(s) from {self.files_root}")
        return count

    def _visit(self, node: Any) -> int:
        count = 0
        if isinstance(node, dict):
            for key, value in node.items():
                if key == CONTENT_KEY and isinstance(value, str):
                    embedded = self._convert(value)
                    if embedded is not None:
                        node[key] = embedded
                        count += 1
                else:
                    count += self._visit(value)
        elif isinstance(node, list):
            for item in node:
                count += self._visit(item)
        return count

    def _convert(self, value: str) -> Optional[str]:
        placeholder = codec.decode_placeholder(value)
        if placeholder is None:
            return None

        data = self.file_reader.read_content(self.files_root, placeholder.external_ref)
        self.logger.debug(f"Embedding {placeholder.external_ref} ({len(data)} bytes)")
        return codec.encode_inline(data, placeholder.media_type, placeholder.base64, placeholder.indicator)
