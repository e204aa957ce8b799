"""LZ4 block decompression for cat blobs.

Two layouts occur in saves:
  - header:     u32 uncompressed size, then an LZ4 block
  - headerless: a bare LZ4 block; the size is not stored, so a fixed list of
                sizes seen for cat records is tried in ascending order
"""

import logging
import struct

import lz4.block

from mew_viewer.models.records import DecodedBuffer, Variant
from mew_viewer.parser.errors import DecompressionError


logger = logging.getLogger(__name__)

MAX_DECLARED_SIZE = 10_000_000
HEADERLESS_SIZES: tuple[int, ...] = (0x2000, 0x3000, 0x4000, 0x5000, 0x6000, 0x8000)


def _lz4_block(payload: bytes, size: int) -> bytes | None:
    try:
        return lz4.block.decompress(payload, uncompressed_size=size)
    except (lz4.block.LZ4BlockError, ValueError, MemoryError):
        return None


def _try_header(data: bytes) -> bytes | None:
    if len(data) < 4:
        return None
    declared = struct.unpack_from("<I", data, 0)[0]
    if not 0 < declared < MAX_DECLARED_SIZE:
        return None
    out = _lz4_block(data[4:], declared)
    if out is None or len(out) != declared:
        return None
    return out


def _try_headerless(data: bytes, size: int) -> bytes | None:
    out = _lz4_block(data, size)
    if out is None or not 0 < len(out) <= size:
        return None
    return out[:size]


def decompress(data: bytes) -> DecodedBuffer:
    """Decompress a cat blob, trying the header layout first.

    Raises:
        DecompressionError: If neither layout yields a buffer.
    """
    out = _try_header(data)
    if out is not None:
        return DecodedBuffer(out, Variant.header())

    for size in HEADERLESS_SIZES:
        out = _try_headerless(data, size)
        if out is not None:
            logger.debug("Headerless LZ4 block decoded with size %#x", size)
            return DecodedBuffer(out, Variant.headerless(size))

    raise DecompressionError(
        f"LZ4 decompression failed for {len(data)}-byte blob: "
        "no header size or candidate size matched"
    )
