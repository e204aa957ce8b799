"""Walk the five equipment slots that follow the equipment header.

After the header pattern each slot is one of:
  - the empty marker 00 05 00 00 00
  - tag 0x01, u64-prefixed (or NUL-terminated) item id, opaque item data,
    then a boundary FF ?? 05 00 00 00 that starts the next slot

The last slot has no boundary of its own. Its item data runs until an FF
followed by the tag byte of whatever record comes next; a slot 4 that
starts directly with such a tag is an implicit empty slot.

Header-like byte sequences also appear elsewhere, so a failed walk resumes
the header search one byte later.
"""

from mew_viewer.models.cat import EquipSlot
from mew_viewer.models.constants import EQUIP_SLOT_COUNT
from mew_viewer.parser.binary_reader import (
    bytes_equal,
    find_bytes,
    is_printable_ascii,
    printable_run_length,
    read_ascii,
    read_u64,
)


EQUIP_HEADER = bytes([0x01, 0x00, 0x00, 0x00, 0x05, 0x00, 0x00, 0x00])
EMPTY_MARKER = bytes([0x00, 0x05, 0x00, 0x00, 0x00])
ITEM_TAG = 0x01
MAX_NEXT_TAG = 3
MAX_ITEM_LENGTH = 128
MAX_TAG_IDENT_LENGTH = 32
BOUNDARY_SEARCH = 800
LAST_BOUNDARY_SEARCH = 1400


def read_item_string(data: bytes, len_offset: int, max_len: int = MAX_ITEM_LENGTH) -> tuple[str, int] | None:
    """Item id as (text, byte length): u64-prefixed, else NUL-terminated after the prefix."""
    n = len(data)
    if len_offset + 8 > n:
        return None
    str_start = len_offset + 8

    length = read_u64(data, len_offset)
    if 0 < length <= max_len and str_start + length <= n and is_printable_ascii(data, str_start, length):
        return read_ascii(data, str_start, length), length

    nul = data.find(b"\x00", str_start, min(n, str_start + max_len))
    end = nul if nul >= 0 else min(n, str_start + max_len)
    length = end - str_start
    if length > 0 and is_printable_ascii(data, str_start, length):
        return read_ascii(data, str_start, length), length
    return None


def _is_tagged_ident(data: bytes, tag_offset: int) -> bool:
    """A tag byte <= 3 followed by a u64-prefixed identifier or a printable run."""
    n = len(data)
    if tag_offset + 9 > n or data[tag_offset] > MAX_NEXT_TAG:
        return False
    str_start = tag_offset + 9
    length = read_u64(data, tag_offset + 1)
    if 0 < length <= MAX_TAG_IDENT_LENGTH and str_start + length <= n \
            and is_printable_ascii(data, str_start, length):
        return True
    run = printable_run_length(data, str_start, MAX_TAG_IDENT_LENGTH)
    return 2 <= run <= MAX_TAG_IDENT_LENGTH


def find_slot_boundary(data: bytes, start: int, max_search: int = BOUNDARY_SEARCH) -> int | None:
    """Offset just past the next FF ?? 05 00 00 00 boundary."""
    end = min(len(data) - 6, start + max_search)
    for p in range(start, end):
        if data[p] == 0xFF and data[p + 2 : p + 6] == b"\x05\x00\x00\x00":
            return p + 6
    return None


def find_last_slot_boundary(data: bytes, start: int, max_search: int = LAST_BOUNDARY_SEARCH) -> int | None:
    """Offset just past the FF that precedes the next tagged identifier."""
    end = min(len(data) - 10, start + max_search)
    for p in range(start, end):
        if data[p] == 0xFF and _is_tagged_ident(data, p + 1):
            return p + 1
    return None


def _parse_item_slot(data: bytes, blob_slot: int, pos: int, last: bool) -> EquipSlot | None:
    item = read_item_string(data, pos + 1)
    if item is None:
        return None
    item_id, length = item
    search_from = pos + 9 + length
    if last:
        end = find_last_slot_boundary(data, search_from)
    else:
        end = find_slot_boundary(data, search_from)
    if end is None:
        return None
    return EquipSlot(blob_slot=blob_slot, start=pos, end=end, item_id=item_id)


def parse_slots_from_header(data: bytes, header_offset: int) -> tuple[EquipSlot, ...] | None:
    """Walk all five slots after a header hit; None if any slot is malformed."""
    n = len(data)
    pos = header_offset + len(EQUIP_HEADER)
    slots: list[EquipSlot] = []
    last_slot = EQUIP_SLOT_COUNT - 1

    for blob_slot in range(EQUIP_SLOT_COUNT):
        last = blob_slot == last_slot

        if bytes_equal(data, pos, EMPTY_MARKER):
            slots.append(EquipSlot(blob_slot=blob_slot, start=pos, end=pos + len(EMPTY_MARKER)))
            pos += len(EMPTY_MARKER)
            continue

        if pos < n and data[pos] == ITEM_TAG:
            slot = _parse_item_slot(data, blob_slot, pos, last)
            if slot is None:
                return None
            slots.append(slot)
            pos = slot.end
            continue

        if last and _is_tagged_ident(data, pos):
            slots.append(EquipSlot(blob_slot=blob_slot, start=pos, end=pos, implicit_empty=True))
            continue

        return None

    return tuple(slots)


def parse_equipment_slots(data: bytes) -> tuple[EquipSlot, ...] | None:
    """Return the first header hit whose five slots all parse, or None."""
    search_start = 0
    while True:
        header = find_bytes(data, EQUIP_HEADER, search_start)
        if header < 0:
            return None
        slots = parse_slots_from_header(data, header)
        if slots is not None:
            return slots
        search_start = header + 1
