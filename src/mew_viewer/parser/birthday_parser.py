"""Class name and birthday day counter, usually near the end of the record.

  u64   class name length (3..64)
  ...   printable ASCII class name
  12    padding
  i64   birthday, in game days
  i64   sentinel, always -1
"""

from mew_viewer.models.cat import BirthdayRecord
from mew_viewer.models.constants import AGE_CAP_DAYS
from mew_viewer.parser.binary_reader import is_printable_ascii, read_ascii, read_i64, read_u64
from mew_viewer.parser.scan import TieBreak, best_candidate


TAIL_SCAN_BYTES = 2048
MIN_CLASS_LENGTH = 3
MAX_CLASS_LENGTH = 64
PADDING_AFTER_CLASS = 12
SENTINEL = -1


def _probe_birthday(data: bytes, offset: int, current_day: int | None) -> BirthdayRecord | None:
    n = len(data)
    length = read_u64(data, offset)
    if length < MIN_CLASS_LENGTH or length > MAX_CLASS_LENGTH:
        return None
    str_offset = offset + 8
    day_offset = str_offset + length + PADDING_AFTER_CLASS
    if day_offset + 16 > n:
        return None
    if not is_printable_ascii(data, str_offset, length):
        return None
    if read_i64(data, day_offset + 8) != SENTINEL:
        return None

    day = read_i64(data, day_offset)
    if current_day is not None and not 0 <= current_day - day <= AGE_CAP_DAYS:
        return None
    return BirthdayRecord(
        class_name=read_ascii(data, str_offset, length),
        birthday_day=day,
        offset=day_offset,
    )


def _scan_range(data: bytes, start: int, end: int, current_day: int | None) -> BirthdayRecord | None:
    # Ranked on the day-counter offset: the latest record in the buffer wins.
    stop = min(max(start, end - 8), len(data) - 7)
    best = best_candidate(
        range(start, stop),
        lambda off: _probe_birthday(data, off, current_day),
        lambda off, record: record.offset,
        TieBreak.LATEST,
    )
    return best.value if best else None


def locate_birthday(data: bytes, current_day: int | None = None) -> BirthdayRecord | None:
    """Find the class/birthday record, checking the tail of the buffer first.

    With `current_day`, candidates implying an age outside
    [0, AGE_CAP_DAYS] are discarded.
    """
    n = len(data)
    if n < 64:
        return None
    found = _scan_range(data, max(0, n - TAIL_SCAN_BYTES), n, current_day)
    if found is not None:
        return found
    return _scan_range(data, 0, n, current_day)
