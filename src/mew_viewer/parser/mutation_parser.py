"""Locate the 14-slot appearance/mutation table.

  +0   f32  scale       0.05..20.0
  +4   u32  coat id     1..20000
  +8   u32  tier 1      <= 500
  +12  u32  tier 2      0xFFFFFFFF or <= 5000
  +16  14 x 20-byte slots: u32 slot id, u32 coat id (or 0), 12 bytes unknown

The table has no fixed offset. Every offset is tried; a header is accepted
when enough slots repeat its coat id (or are zero).
"""

from mew_viewer.models.cat import MutationSlot, MutationTable
from mew_viewer.models.constants import (
    MUTATION_MIN_VOTES,
    MUTATION_SLOT_COUNT,
    mutation_slot_info,
)
from mew_viewer.parser.binary_reader import read_f32, read_u32
from mew_viewer.parser.scan import TieBreak, best_candidate


HEADER_SIZE = 16
SLOT_SIZE = 20
TABLE_SIZE = HEADER_SIZE + MUTATION_SLOT_COUNT * SLOT_SIZE
NO_TIER = 0xFFFFFFFF


def _slot_offset(base: int, index: int) -> int:
    return base + HEADER_SIZE + index * SLOT_SIZE


def count_coat_votes(data: bytes, base: int, coat: int) -> int:
    """Number of slots whose coat field equals `coat` or is zero."""
    votes = 0
    for i in range(MUTATION_SLOT_COUNT):
        c = read_u32(data, _slot_offset(base, i) + 4)
        if c == coat or c == 0:
            votes += 1
    return votes


def _probe_table(data: bytes, base: int) -> int | None:
    scale = read_f32(data, base)
    if not 0.05 <= scale <= 20.0:
        return None
    coat = read_u32(data, base + 4)
    if coat == 0 or coat > 20000:
        return None
    if read_u32(data, base + 8) > 500:
        return None
    tier2 = read_u32(data, base + 12)
    if tier2 != NO_TIER and tier2 > 5000:
        return None

    votes = count_coat_votes(data, base, coat)
    if votes < MUTATION_MIN_VOTES:
        return None
    return votes


def locate_mutation_table(data: bytes) -> MutationTable | None:
    n = len(data)
    if n < TABLE_SIZE:
        return None

    best = best_candidate(
        range(0, n - TABLE_SIZE + 1),
        lambda base: _probe_table(data, base),
        lambda base, votes: votes * 1000 + base,
        TieBreak.LATEST,
    )
    if best is None:
        return None

    base = best.offset
    slots = []
    for i in range(MUTATION_SLOT_COUNT):
        offset = _slot_offset(base, i)
        label, category = mutation_slot_info(i + 1)
        slots.append(MutationSlot(
            slot_index=i + 1,
            label=label,
            category=category,
            slot_id=read_u32(data, offset),
            offset=offset,
        ))

    return MutationTable(
        base_offset=base,
        coat_id=read_u32(data, base + 4),
        coat_offset=base + 4,
        slots=tuple(slots),
    )
