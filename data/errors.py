"""
Error taxonomy for asset loading, editing and interchange.

All errors derive from ValueError so callers that already guard header
parsing with ``except ValueError`` keep working.
"""


class AssetError(ValueError):
    """Base class for every asset error."""


class FormatError(AssetError):
    """Bad magic, version or flag byte, truncated buffer, unknown header."""


class UnsupportedVersionError(FormatError):
    """A recognised but unsupported historical format version."""


class CompressionError(FormatError):
    """Whole-buffer decompression failed."""

    def __init__(self, message: str, context: str = ""):
        self.context = context
        if context:
            message = f"{context}: {message}"
        super().__init__(message)


class ValidationError(AssetError):
    """A single edit was rejected; the session stays usable."""
