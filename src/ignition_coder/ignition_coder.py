"""Main Ignition coder implementation."""

import logging
from contextlib import nullcontext
from pathlib import Path
from typing import Optional, Union
from .types import (
    IgnitionCoderInterface,
    IgnitionCoderError,
    DisassembleResult,
    AssembleResult,
)
from .parser import IgnitionParser
from .error_handler import ErrorHandler
from .engines import ArrayDisambiguator
from .processors import ExtractionWalker, EmbeddingWalker
from .processors.extraction_walker import ProgressCallback
from .models import ExtractionState
from .io import FileReader, FileWriter
from .profiler import PerformanceProfiler
from .utils.defaults import remove_default_values

DEFAULT_DOCUMENT_FILENAME = "decoded.ign"


class IgnitionCoder(IgnitionCoderInterface):
    """
    Main implementation of the Ignition coder interface.

    Provides bidirectional conversion between a self-contained Ignition
    config with inline data URLs and a directory holding the config with
    placeholders plus one file per embedded content.
    """

    def __init__(self, document_filename: str = DEFAULT_DOCUMENT_FILENAME,
                 compact: bool = False,
                 strip_defaults: bool = False,
                 enable_profiling: bool = True,
                 logger: Optional[logging.Logger] = None,
                 on_progress: Optional[ProgressCallback] = None):
        """
        Initialize the Ignition coder.

        Args:
            document_filename: Name of the config written by disassemble
            compact: Default for serializing assembled configs without whitespace
            strip_defaults: Default for removing default-valued fields on assemble
            enable_profiling: Record duration and memory metrics per operation
            logger: Optional logger instance
            on_progress: Called with (counter, reference) after each extracted file
        """
        self.document_filename = document_filename
        self.compact = compact
        self.strip_defaults = strip_defaults
        self.enable_profiling = enable_profiling
        self.logger = logger or logging.getLogger(__name__)
        self.on_progress = on_progress

        self.error_handler = ErrorHandler(self.logger)
        self.parser = IgnitionParser(self.error_handler, self.logger)
        self.disambiguator = ArrayDisambiguator(self.logger)
        self.file_writer = FileWriter(self.logger)
        self.file_reader = FileReader(self.logger)
        self.profiler = PerformanceProfiler(self.logger)

    async def disassemble(self, ignition_string: str, output_dir: str) -> DisassembleResult:
        """
        Extract every inline content of an Ignition config into files.

        Args:
            ignition_string: Ignition config text
            output_dir: Directory receiving the content files and the config

        Returns:
            DisassembleResult with operation details
        """
        dir_validation = self.error_handler.validate_directory_path(output_dir)
        if not dir_validation.is_valid:
            return DisassembleResult(
                success=False,
                output_directory=output_dir,
                file_count=0,
                errors=[error.message for error in dir_validation.errors]
            )

        warnings = []
        state = ExtractionState()
        try:
            with self._profile("disassemble", len(ignition_string.encode("utf-8"))) as profile:
                self.logger.info(f"Starting disassemble operation: output_dir={output_dir}")

                config, warnings = self.parser.parse(ignition_string)
                self._report_warnings(warnings)

                output_path = self.file_writer.ensure_directory(output_dir)
                walker = ExtractionWalker(
                    output_path,
                    file_writer=self.file_writer,
                    disambiguator=self.disambiguator,
                    logger=self.logger,
                    on_progress=self.on_progress,
                    reserved_references=[self.document_filename]
                )
                walker.extract(config.to_tree(), state)

                json_string = self.parser.serialize(config)
                document_path = self.file_writer.write_document(
                    output_path / self.document_filename, json_string
                )

                if profile:
                    profile.files_processed = state.counter
                    profile.output_size = len(json_string.encode("utf-8"))
                    profile.sample_performance()

            return DisassembleResult(
                success=True,
                output_directory=str(output_path.absolute()),
                file_count=state.counter,
                document_path=str(document_path),
                warnings=warnings
            )

        except IgnitionCoderError as e:
            e.context.setdefault("written", list(state.references))
            self.error_handler.handle_error(e)
            return DisassembleResult(
                success=False,
                output_directory=output_dir,
                file_count=state.counter,
                warnings=warnings,
                errors=[str(e)]
            )

    async def disassemble_file(self, ignition_file: Union[str, Path], output_dir: str) -> DisassembleResult:
        """Read an Ignition config from disk and disassemble it."""
        try:
            ignition_string = self.file_reader.read_document(ignition_file)
        except IgnitionCoderError as e:
            self.error_handler.handle_error(e)
            return DisassembleResult(success=False, output_directory=output_dir, file_count=0, errors=[str(e)])
        return await self.disassemble(ignition_string, output_dir)

    async def assemble(self, ignition_dir: str, target_file: Optional[str] = None,
                       compact: Optional[bool] = None,
                       strip_defaults: Optional[bool] = None) -> AssembleResult:
        """
        Embed external content back into one Ignition config.

        Args:
            ignition_dir: Directory holding a ``.ign`` config and content files
            target_file: Optional path the assembled config is written to
            compact: Serialize without whitespace (defaults to the instance setting)
            strip_defaults: Remove default-valued fields (defaults to the instance setting)

        Returns:
            AssembleResult with the assembled JSON
        """
        compact = self.compact if compact is None else compact
        strip_defaults = self.strip_defaults if strip_defaults is None else strip_defaults

        warnings = []
        try:
            with self._profile("assemble") as profile:
                self.logger.info(f"Starting assemble operation: ignition_dir={ignition_dir}")

                document_path = self.file_reader.find_ignition_file(ignition_dir, self.document_filename)
                ignition_string = self.file_reader.read_document(document_path)

                config, warnings = self.parser.parse(ignition_string)
                self._report_warnings(warnings)

                walker = EmbeddingWalker(ignition_dir, file_reader=self.file_reader, logger=self.logger)
                file_count = walker.walk(config.to_tree())

                if strip_defaults:
                    remove_default_values(config.to_tree())

                json_string = self.parser.serialize(config, compact=compact)
                output_file = None
                if target_file:
                    output_file = str(self.file_writer.write_document(target_file, json_string))

                if profile:
                    profile.input_size = len(ignition_string.encode("utf-8"))
                    profile.output_size = len(json_string.encode("utf-8"))
                    profile.files_processed = file_count

            return AssembleResult(
                success=True,
                json_string=json_string,
                file_count=file_count,
                output_file=output_file,
                warnings=warnings
            )

        except IgnitionCoderError as e:
            self.error_handler.handle_error(e)
            return AssembleResult(
                success=False,
                json_string="",
                file_count=0,
                warnings=warnings,
                errors=[str(e)]
            )

    def _profile(self, operation_name: str, input_size: int = 0):
        if not self.enable_profiling:
            return nullcontext()
        return self.profiler.profile_operation(operation_name, input_size)

    def _report_warnings(self, warnings):
        for warning in warnings:
            self.logger.debug(f"Schema warning: {warning}")
