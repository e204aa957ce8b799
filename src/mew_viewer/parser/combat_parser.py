"""Status effect and current HP, 84 bytes after the base stats.

  stats+84   u64  status length (high half must be 0, low half 1..64)
  stats+92   ...  printable ASCII status effect
  ...        u32  current HP
"""

from mew_viewer.models.cat import CombatState
from mew_viewer.parser.binary_reader import is_printable_ascii, read_ascii, read_i32, read_u32


COMBAT_AFTER_STATS = 84
MAX_STATUS_LENGTH = 64


def _status_length(data: bytes, status_offset: int) -> int | None:
    if status_offset < 0 or status_offset + 13 > len(data):
        return None
    length = read_u32(data, status_offset)
    length_hi = read_u32(data, status_offset + 4)
    if length_hi != 0 or length == 0 or length > MAX_STATUS_LENGTH:
        return None
    string_start = status_offset + 8
    if string_start + length + 4 > len(data):
        return None
    if not is_printable_ascii(data, string_start, length):
        return None
    return length


def has_combat_state(data: bytes, stats_offset: int) -> bool:
    """True if a well-formed combat block follows a stats vector at `stats_offset`."""
    return _status_length(data, stats_offset + COMBAT_AFTER_STATS) is not None


def parse_combat_state(data: bytes, stats_offset: int) -> CombatState | None:
    status_offset = stats_offset + COMBAT_AFTER_STATS
    length = _status_length(data, status_offset)
    if length is None:
        return None
    string_start = status_offset + 8
    hp_offset = string_start + length
    return CombatState(
        status_effect=read_ascii(data, string_start, length),
        hp=read_i32(data, hp_offset),
        status_offset=status_offset,
        hp_offset=hp_offset,
    )
