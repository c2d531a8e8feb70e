"""Content codec for Ignition ``source`` values.

Inline content is an RFC 2397 data URL::

    data:<media-type>;base64,<base64-bytes>
    data:<media-type>,<percent-encoded-bytes>

Extracted content is replaced by a placeholder that stays syntactically a
data URL but carries a relative reference instead of the payload::

    data:<media-type>;base64-placeholder,<external-ref>

Content that was percent-encoded in the input uses the ``plain-placeholder``
marker so assembly can restore the same encoding form. The spelling of the
base64 indicator is kept in the marker (``;BASE64`` becomes
``;BASE64-placeholder``).

Only canonical bodies are accepted: padded base64 without whitespace, and
percent encoding that escapes exactly the bytes outside the URL character
set with upper-case hex digits. Anything else could not be written back
unchanged. All functions here are pure.
"""

import base64
import binascii
import re
from dataclasses import dataclass
from typing import Optional
from urllib.parse import quote_from_bytes, unquote_to_bytes

from .types import DecodeError

SCHEME_PREFIX = "data:"
BASE64_INDICATOR = "base64"
PLACEHOLDER_SUFFIX = "-placeholder"
BASE64_PLACEHOLDER_MARKER = BASE64_INDICATOR + PLACEHOLDER_SUFFIX
PLAIN_PLACEHOLDER_MARKER = "plain" + PLACEHOLDER_SUFFIX

_PLACEHOLDER_MARKERS = (BASE64_PLACEHOLDER_MARKER, PLAIN_PLACEHOLDER_MARKER)
_INVALID_PERCENT_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")
# RFC 3986 reserved and unreserved characters; quote() always keeps letters, digits and "_.-~"
_PERCENT_SAFE = ":/?#[]@!$&'()*+,;="


@dataclass(frozen=True)
class InlineContent:
    """Decoded inline content."""
    data: bytes
    media_type: str
    base64: bool = True
    indicator: str = BASE64_INDICATOR


@dataclass(frozen=True)
class Placeholder:
    """Decoded placeholder value."""
    media_type: str
    external_ref: str
    base64: bool = True
    indicator: str = BASE64_INDICATOR


def _split_header(value: str, logical_path: str = ""):
    body_start = value.find(",")
    if body_start < 0:
        raise DecodeError("Malformed data URL: missing ',' separator", logical_path)
    header = value[len(SCHEME_PREFIX):body_start]
    return header, value[body_start + 1:]


def _last_parameter(header: str) -> str:
    if ";" not in header:
        return ""
    return header.rsplit(";", 1)[1]


def _strip_last_parameter(header: str) -> str:
    return header.rsplit(";", 1)[0]


def _percent_encode(data: bytes) -> str:
    return quote_from_bytes(data, safe=_PERCENT_SAFE)


def decode(value: str, logical_path: str = "") -> Optional[InlineContent]:
    """
    Decode inline content.

    Args:
        value: Content field value
        logical_path: Logical path of the field, only used in error messages

    Returns:
        InlineContent, or None when the value is not inline content
        (remote URLs, placeholders)

    Raises:
        DecodeError: If the value has the data scheme but a malformed or
            non-canonical body
    """
    if not value.startswith(SCHEME_PREFIX):
        return None

    header, body = _split_header(value, logical_path)
    parameter = _last_parameter(header)

    if parameter.lower() in _PLACEHOLDER_MARKERS:
        return None

    if parameter.lower() == BASE64_INDICATOR:
        try:
            data = base64.b64decode(body, validate=True)
        except (binascii.Error, ValueError) as e:
            raise DecodeError(f"Malformed data URL: invalid base64 payload ({e})", logical_path)
        if base64.b64encode(data).decode("ascii") != body:
            raise DecodeError(
                "Malformed data URL: base64 payload is not in canonical padded form", logical_path
            )
        return InlineContent(
            data=data,
            media_type=_strip_last_parameter(header),
            base64=True,
            indicator=parameter,
        )

    if _INVALID_PERCENT_ESCAPE.search(body):
        raise DecodeError("Malformed data URL: invalid percent escape", logical_path)
    data = unquote_to_bytes(body)
    if _percent_encode(data) != body:
        raise DecodeError(
            f"Malformed data URL: percent-encoded payload is not in canonical form "
            f"(expected '{_percent_encode(data)}')",
            logical_path
        )
    return InlineContent(data=data, media_type=header, base64=False)


def encode_inline(data: bytes, media_type: str, base64_encoded: bool = True,
                  indicator: str = BASE64_INDICATOR) -> str:
    """Encode bytes as a data URL."""
    if base64_encoded:
        encoded = base64.b64encode(data).decode("ascii")
        return f"{SCHEME_PREFIX}{media_type};{indicator},{encoded}"
    return f"{SCHEME_PREFIX}{media_type},{_percent_encode(data)}"


def decode_placeholder(value: str) -> Optional[Placeholder]:
    """
    Decode a placeholder.

    Returns:
        Placeholder, or None when the value is not a placeholder

    Raises:
        DecodeError: If the placeholder carries no external reference
    """
    if not value.startswith(SCHEME_PREFIX) or "," not in value:
        return None

    header, reference = _split_header(value)
    marker = _last_parameter(header)
    if marker.lower() not in _PLACEHOLDER_MARKERS:
        return None

    if not reference:
        raise DecodeError(f"Placeholder '{value}' carries no external reference")

    base64_encoded = marker.lower() == BASE64_PLACEHOLDER_MARKER
    return Placeholder(
        media_type=_strip_last_parameter(header),
        external_ref=reference,
        base64=base64_encoded,
        indicator=marker[:-len(PLACEHOLDER_SUFFIX)] if base64_encoded else BASE64_INDICATOR,
    )


def encode_placeholder(media_type: str, external_ref: str, base64_encoded: bool = True,
                       indicator: str = BASE64_INDICATOR) -> str:
    """Encode a placeholder referencing externally stored content."""
    marker = indicator + PLACEHOLDER_SUFFIX if base64_encoded else PLAIN_PLACEHOLDER_MARKER
    return f"{SCHEME_PREFIX}{media_type};{marker},{external_ref}"
