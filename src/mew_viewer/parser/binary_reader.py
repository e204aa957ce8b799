"""Low-level binary reads over a flat decompressed buffer.

Two styles live here:

  - Soft-fail module functions (read_u32, read_ascii, ...) used by the
    locators. A read that would run past the buffer returns a zero value,
    an empty string or False instead of raising, so locators can probe
    speculative offsets and let their validity checks reject the result.
  - BinaryReader, a cursor with strict bounds, for blobs that are laid out
    sequentially (the house-state roster).
"""

import struct


_U16 = struct.Struct("<H")
_U32 = struct.Struct("<I")
_I32 = struct.Struct("<i")
_U64 = struct.Struct("<Q")
_I64 = struct.Struct("<q")
_F32 = struct.Struct("<f")
_F64 = struct.Struct("<d")


def _fits(data: bytes, offset: int, size: int) -> bool:
    return offset >= 0 and offset + size <= len(data)


def read_u16(data: bytes, offset: int) -> int:
    if not _fits(data, offset, 2):
        return 0
    return _U16.unpack_from(data, offset)[0]


def read_u32(data: bytes, offset: int) -> int:
    if not _fits(data, offset, 4):
        return 0
    return _U32.unpack_from(data, offset)[0]


def read_i32(data: bytes, offset: int) -> int:
    if not _fits(data, offset, 4):
        return 0
    return _I32.unpack_from(data, offset)[0]


def read_u64(data: bytes, offset: int) -> int:
    if not _fits(data, offset, 8):
        return 0
    return _U64.unpack_from(data, offset)[0]


def read_i64(data: bytes, offset: int) -> int:
    if not _fits(data, offset, 8):
        return 0
    return _I64.unpack_from(data, offset)[0]


def read_f32(data: bytes, offset: int) -> float:
    if not _fits(data, offset, 4):
        return 0.0
    return _F32.unpack_from(data, offset)[0]


def read_f64(data: bytes, offset: int) -> float:
    if not _fits(data, offset, 8):
        return 0.0
    return _F64.unpack_from(data, offset)[0]


def read_ascii(data: bytes, offset: int, length: int) -> str:
    if length < 0 or not _fits(data, offset, length):
        return ""
    return data[offset : offset + length].decode("ascii", errors="replace")


def read_utf16le(data: bytes, offset: int, char_count: int) -> str:
    """Read `char_count` UTF-16LE code units starting at `offset`."""
    size = char_count * 2
    if char_count < 0 or not _fits(data, offset, size):
        return ""
    return data[offset : offset + size].decode("utf-16-le", errors="replace")


def is_printable_ascii(data: bytes, offset: int, length: int) -> bool:
    """True if every byte in the slice is in 0x20..0x7E."""
    if length < 0 or not _fits(data, offset, length):
        return False
    return all(0x20 <= b < 0x7F for b in data[offset : offset + length])


def printable_run_length(data: bytes, offset: int, limit: int) -> int:
    """Count printable bytes from `offset`, stopping at `limit` bytes."""
    end = min(len(data), offset + limit)
    pos = max(offset, 0)
    while pos < end and 0x20 <= data[pos] < 0x7F:
        pos += 1
    return pos - max(offset, 0)


def find_bytes(data: bytes, pattern: bytes, start: int = 0) -> int:
    """Offset of the first exact match of `pattern` at or after `start`, or -1."""
    if start < 0:
        start = 0
    return data.find(pattern, start)


def bytes_equal(data: bytes, offset: int, pattern: bytes) -> bool:
    if not _fits(data, offset, len(pattern)):
        return False
    return data[offset : offset + len(pattern)] == pattern


class BinaryReader:
    """Wraps a bytes buffer with typed reads and a moving cursor.

    Unlike the module-level helpers, every read is strict: crossing the
    end of the buffer raises ValueError.
    """

    __slots__ = ("_data", "_pos", "_end")

    def __init__(self, data: bytes, offset: int = 0, end: int | None = None) -> None:
        self._data = data
        self._pos = offset
        self._end = end if end is not None else len(data)

    @property
    def position(self) -> int:
        return self._pos

    @property
    def remaining(self) -> int:
        return self._end - self._pos

    def _read(self, size: int) -> bytes:
        if size < 0 or self._pos + size > self._end:
            raise ValueError(
                f"Read of {size} bytes at offset {self._pos} "
                f"would exceed boundary at {self._end}"
            )
        chunk = self._data[self._pos : self._pos + size]
        self._pos += size
        return chunk

    def uint32(self) -> int:
        return _U32.unpack(self._read(4))[0]

    def uint64(self) -> int:
        return _U64.unpack(self._read(8))[0]

    def float64(self) -> float:
        return _F64.unpack(self._read(8))[0]

    def ascii(self, size: int) -> str:
        """Read a fixed-width ASCII string; non-ASCII bytes are replaced."""
        return self._read(size).decode("ascii", errors="replace")
