"""Name, sex and status flags at the head of a cat record.

Layout near the start of the buffer:
  0x00  u32   breed id
  0x04  u64   unique id
  0x0C  u64   name length in UTF-16 code units (some saves put it at 0x10)
  0x14  ...   UTF-16LE name
  end+8  u16  sex code
  end+12 u16  sex code (repeated)
  end+16 u16  status flags
"""

from mew_viewer.models.cat import Identity, StatusFlags
from mew_viewer.models.constants import (
    FLAG_DEAD,
    FLAG_DONATED,
    FLAG_RETIRED,
    SEX_CODES,
    Sex,
)
from mew_viewer.parser.binary_reader import read_u16, read_u32, read_utf16le
from mew_viewer.parser.scan import TieBreak, best_candidate


NAME_LENGTH_OFFSETS = (0x0C, 0x10)
NAME_START = 0x14
MAX_NAME_LENGTH = 128
FLAGS_AFTER_NAME = 0x10


def _probe_name(data: bytes, len_offset: int) -> tuple[Identity, int] | None:
    """Decode a name assuming its length lives at `len_offset`; returns (identity, score)."""
    n = len(data)
    if len_offset + 4 > n:
        return None
    name_len = read_u32(data, len_offset)
    if name_len > MAX_NAME_LENGTH:
        return None
    end = NAME_START + name_len * 2
    if end > n:
        return None

    name = read_utf16le(data, NAME_START, name_len)
    sex = Sex.UNKNOWN
    score = 0

    if end + 14 <= n:
        a = SEX_CODES.get(read_u16(data, end + 8))
        b = SEX_CODES.get(read_u16(data, end + 12))
        if a is not None and a is b:
            sex = a
            score += 4
        elif a is not None or b is not None:
            sex = a or b
            score += 2

    if name:
        score += 1
    return Identity(name=name, sex=sex, name_end_offset=end), score


def locate_identity(data: bytes) -> Identity:
    """Pick the name-length offset whose surroundings look most like a cat header."""
    best = best_candidate(
        NAME_LENGTH_OFFSETS,
        lambda off: _probe_name(data, off),
        lambda off, probed: probed[1],
        TieBreak.EARLIEST,
    )
    if best is None:
        return Identity(name="", sex=Sex.UNKNOWN, name_end_offset=NAME_START)
    return best.value[0]


def read_status_flags(data: bytes, name_end_offset: int) -> StatusFlags:
    offset = name_end_offset + FLAGS_AFTER_NAME
    if offset + 2 > len(data):
        return StatusFlags(raw=-1, offset=offset)
    raw = read_u16(data, offset)
    return StatusFlags(
        raw=raw,
        offset=offset,
        retired=bool(raw & FLAG_RETIRED),
        dead=bool(raw & FLAG_DEAD),
        donated=bool(raw & FLAG_DONATED),
    )
