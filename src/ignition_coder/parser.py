"""Ignition document parser with version detection and shape checks."""

import json
import logging
from typing import Any, Dict, List, Optional, Tuple
from .types import SchemaParseError
from .error_handler import ErrorHandler
from .models import SchemaVersion, VersionedConfig
from .utils.validation import ValidationUtils

_SECTION_TYPES = {
    "ignition": dict,
    "passwd": dict,
    "storage": dict,
    "systemd": dict,
    "kernelArguments": dict,
}


class IgnitionParser:
    """
    Parses Ignition text into a VersionedConfig and serializes it back.

    Every supported version is normalized into the same generic tree, so
    the walkers never dispatch on the version themselves. Problems that do
    not prevent processing are returned as warnings.
    """

    def __init__(self, error_handler: Optional[ErrorHandler] = None,
                 logger: Optional[logging.Logger] = None):
        """
        Initialize the Ignition parser.

        Args:
            error_handler: Optional ErrorHandler instance
            logger: Optional logger instance
        """
        self.error_handler = error_handler or ErrorHandler()
        self.logger = logger or logging.getLogger(__name__)

    def parse(self, json_string: str) -> Tuple[VersionedConfig, List[str]]:
        """
        Parse an Ignition document.

        Args:
            json_string: Document text

        Returns:
            Tuple of (versioned_config, warnings)

        Raises:
            SchemaParseError: If the document is malformed or its version unsupported
        """
        validation_result = self.error_handler.validate_input(json_string)
        if not validation_result.is_valid:
            messages = [
                f"{error.message} at {error.location}" if error.location else error.message
                for error in validation_result.errors
            ]
            raise SchemaParseError(f"Invalid Ignition document: {'; '.join(messages)}")

        warnings = list(validation_result.warnings)
        document = json.loads(json_string, object_pairs_hook=self._pairs_hook(warnings))

        version = self._detect_version(document)
        warnings.extend(self._check_layout(document, version))
        warnings.extend(
            f"Non-string path ignored at {pointer}"
            for pointer in ValidationUtils.find_non_string_paths(document)
        )

        self.logger.info(f"Parsed Ignition config version {version.value}")
        return VersionedConfig.from_tree(document, version), warnings

    def serialize(self, config: VersionedConfig, compact: bool = False) -> str:
        """Serialize a configuration as pretty (2-space indent) or compact JSON."""
        if compact:
            return json.dumps(config.to_tree(), ensure_ascii=False, separators=(",", ":"))
        return json.dumps(config.to_tree(), ensure_ascii=False, indent=2)

    @staticmethod
    def _pairs_hook(warnings: List[str]):
        def build(pairs):
            result = {}
            for key, value in pairs:
                if key in result:
                    warnings.append(f"Duplicate key '{key}', keeping the last value")
                result[key] = value
            return result
        return build

    def _detect_version(self, document: Dict[str, Any]) -> SchemaVersion:
        ignition = document.get("ignition")
        if not isinstance(ignition, dict):
            raise SchemaParseError("Missing 'ignition' section")

        version_string = ignition.get("version")
        if not isinstance(version_string, str):
            raise SchemaParseError("Missing or non-string 'ignition.version'")

        version = SchemaVersion.from_string(version_string)
        if version is None:
            if version_string.startswith("2."):
                raise SchemaParseError(
                    f"Ignition spec {version_string} is not supported; translate it to spec 3 first",
                    context={"version": version_string}
                )
            raise SchemaParseError(
                f"Unsupported Ignition config version: {version_string}",
                context={"version": version_string}
            )
        return version

    def _check_layout(self, document: Dict[str, Any], version: SchemaVersion) -> List[str]:
        warnings = []
        layout = version.layout

        for key, value in document.items():
            if key not in layout.sections:
                warnings.append(f"Unknown section '{key}' for spec {version.value}")
                continue
            expected = _SECTION_TYPES[key]
            if not isinstance(value, expected):
                raise SchemaParseError(
                    f"Section '{key}' must be an object, got {type(value).__name__}"
                )

        storage = document.get("storage", {})
        for key, value in storage.items():
            if key not in layout.storage_sections:
                warnings.append(f"Unknown storage section '{key}' for spec {version.value}")
            elif not isinstance(value, list):
                raise SchemaParseError(
                    f"Section 'storage.{key}' must be an array, got {type(value).__name__}"
                )

        return warnings
