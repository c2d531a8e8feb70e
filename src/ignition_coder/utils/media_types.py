"""Default file extensions for synthesized content names."""

DEFAULT_EXTENSION = ".bin"

EXTENSIONS = {
    "text/plain": ".txt",
    "application/json": ".json",
    "application/yaml": ".yaml",
    "application/x-yaml": ".yaml",
    "text/yaml": ".yaml",
    "text/x-yaml": ".yaml",
    "application/xml": ".xml",
    "text/xml": ".xml",
    "text/html": ".html",
    "application/javascript": ".js",
    "text/javascript": ".js",
    "text/css": ".css",
}


def essence(media_type: str) -> str:
    """Return the lowercased type/subtype of a media type, without parameters."""
    value = media_type.split(";", 1)[0].strip().lower()
    # RFC 2397: an omitted media type means text/plain
    return value or "text/plain"


def extension_for(media_type: str) -> str:
    """Look up the file extension for a media type."""
    return EXTENSIONS.get(essence(media_type), DEFAULT_EXTENSION)
