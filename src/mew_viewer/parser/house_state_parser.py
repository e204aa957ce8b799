"""Parse the `house_state` blob: which cats live in which room.

Fixed sequential layout, no scanning:
  u32 version (0), u32 count (<= 512), then per entry
  u32 key, u32 unknown, u64 room length, ASCII room, 3 x f64
"""

from mew_viewer.models.cat import HouseCatEntry
from mew_viewer.parser.binary_reader import BinaryReader


MAX_ENTRIES = 512


def parse_house_state(blob: bytes) -> list[HouseCatEntry]:
    """Decode roster entries. A truncated blob yields the entries read so far."""
    reader = BinaryReader(blob)
    if reader.remaining < 8:
        return []
    version = reader.uint32()
    count = reader.uint32()
    if version != 0 or count > MAX_ENTRIES:
        return []

    entries: list[HouseCatEntry] = []
    for _ in range(count):
        try:
            key = reader.uint32()
            unknown = reader.uint32()
            room_len = reader.uint64()
            room = reader.ascii(room_len)
            p0 = reader.float64()
            p1 = reader.float64()
            p2 = reader.float64()
        except ValueError:
            break
        entries.append(HouseCatEntry(key=key, room=room, unknown=unknown, p0=p0, p1=p1, p2=p2))
    return entries
