"""Decode the ability run: actives, passives and disorders.

Abilities are stored as a run of u64-prefixed identifiers that always starts
with "DefaultMove". Run items 0-5 are the active moves and item 10 is the
first passive. A u32 tier for that passive follows the run, then three
(u64-prefixed identifier, u32 tier) records: the second passive and two
disorders.
"""

import re
import struct
from collections.abc import Iterator
from dataclasses import dataclass

from mew_viewer.models.cat import AbilityKind, AbilitySlot
from mew_viewer.models.constants import (
    ACTIVE_ABILITY_LABELS,
    PASSIVE1_LABEL,
    PASSIVE1_RUN_INDEX,
    TAIL_ABILITY_LABELS,
)
from mew_viewer.parser.binary_reader import (
    find_bytes,
    is_printable_ascii,
    read_ascii,
    read_u32,
    read_u64,
)
from mew_viewer.parser.scan import first_match


FIRST_ABILITY = "DefaultMove"
MIN_RUN_ITEMS = 11
MAX_RUN_ITEMS = 32
MAX_IDENT_LENGTH = 96
MAX_TIER = 50

_IDENT_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")

# A qualifying run can only start where "DefaultMove" is stored with its prefix
_RUN_PREFIX = struct.pack("<Q", len(FIRST_ABILITY)) + FIRST_ABILITY.encode("ascii")


@dataclass(frozen=True, slots=True)
class PrefixedString:
    offset: int        # offset of the u64 length prefix
    byte_length: int
    value: str


@dataclass(frozen=True, slots=True)
class TieredString:
    offset: int
    byte_length: int
    value: str
    tier: int


@dataclass(frozen=True, slots=True)
class AbilityRun:
    items: tuple[PrefixedString, ...]
    run_end: int
    passive1_tier: int
    tail: tuple[TieredString, ...]


def parse_identifier_run(
    data: bytes,
    start: int,
    max_len: int = MAX_IDENT_LENGTH,
    max_items: int = MAX_RUN_ITEMS,
) -> tuple[list[PrefixedString], int]:
    """Read consecutive prefixed identifiers; returns (items, end offset)."""
    n = len(data)
    items: list[PrefixedString] = []
    pos = start
    while len(items) < max_items:
        if pos + 8 > n:
            break
        length = read_u64(data, pos)
        if length == 0 or length > max_len or pos + 8 + length > n:
            break
        if not is_printable_ascii(data, pos + 8, length):
            break
        text = read_ascii(data, pos + 8, length)
        if not _IDENT_RE.fullmatch(text):
            break
        items.append(PrefixedString(offset=pos, byte_length=length, value=text))
        pos += 8 + length
    return items, pos


def parse_tiered_entries(
    data: bytes,
    start: int,
    count: int = 3,
    max_len: int = MAX_IDENT_LENGTH,
) -> list[TieredString]:
    n = len(data)
    entries: list[TieredString] = []
    pos = start
    for _ in range(count):
        if pos + 8 > n:
            break
        length = read_u64(data, pos)
        if length == 0 or length > max_len or pos + 8 + length + 4 > n:
            break
        if not is_printable_ascii(data, pos + 8, length):
            break
        tier = read_u32(data, pos + 8 + length)
        if tier == 0 or tier > MAX_TIER:
            break
        entries.append(TieredString(
            offset=pos,
            byte_length=length,
            value=read_ascii(data, pos + 8, length),
            tier=tier,
        ))
        pos += 8 + length + 4
    return entries


def _probe_run(data: bytes, start: int) -> AbilityRun | None:
    items, end = parse_identifier_run(data, start)
    if len(items) < MIN_RUN_ITEMS or items[0].value != FIRST_ABILITY:
        return None
    if end + 4 > len(data):
        return None
    passive1_tier = read_u32(data, end)
    if passive1_tier == 0 or passive1_tier > MAX_TIER:
        return None
    tail = parse_tiered_entries(data, end + 4, len(TAIL_ABILITY_LABELS))
    if len(tail) != len(TAIL_ABILITY_LABELS):
        return None
    return AbilityRun(
        items=tuple(items),
        run_end=end,
        passive1_tier=passive1_tier,
        tail=tuple(tail),
    )


def _run_starts(data: bytes) -> Iterator[int]:
    limit = len(data) - 32
    pos = find_bytes(data, _RUN_PREFIX)
    while 0 <= pos < limit:
        yield pos
        pos = find_bytes(data, _RUN_PREFIX, pos + 1)


def find_primary_ability_run(data: bytes) -> AbilityRun | None:
    found = first_match(_run_starts(data), lambda start: _probe_run(data, start))
    return found.value if found else None


def parse_abilities(data: bytes) -> tuple[AbilitySlot, ...]:
    run = find_primary_ability_run(data)
    if run is None:
        return ()

    run_start = run.items[0].offset
    slots: list[AbilitySlot] = []
    for index, label in enumerate(ACTIVE_ABILITY_LABELS):
        slots.append(AbilitySlot(
            label=label,
            kind=AbilityKind.RUN_ENTRY,
            ability_id=run.items[index].value,
            run_start=run_start,
            run_end=run.run_end,
            run_index=index,
        ))

    slots.append(AbilitySlot(
        label=PASSIVE1_LABEL,
        kind=AbilityKind.RUN_ENTRY,
        ability_id=run.items[PASSIVE1_RUN_INDEX].value,
        tier=run.passive1_tier,
        run_start=run_start,
        run_end=run.run_end,
        run_index=PASSIVE1_RUN_INDEX,
    ))

    for label, entry in zip(TAIL_ABILITY_LABELS, run.tail):
        slots.append(AbilitySlot(
            label=label,
            kind=AbilityKind.TIER_ENTRY,
            ability_id=entry.value,
            tier=entry.tier,
            record_offset=entry.offset,
            byte_length=entry.byte_length,
        ))

    return tuple(slots)
