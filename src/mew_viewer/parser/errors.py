"""Record-fatal decode errors.

Missing fields are never errors; locators return None instead. These are
raised only when a whole record cannot be decoded.
"""


class RecordDecodeError(ValueError):
    """The record cannot be decoded at all (too small, undecompressable)."""


class DecompressionError(RecordDecodeError):
    """Every decompression strategy was tried and none produced a buffer."""
