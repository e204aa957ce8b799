"""Decode one cat blob into a DecodedRecord.

All locators read the same immutable buffer. Stats scoring is corroborated
by the combat-state check, and the flags offset comes from the identity
locator; nothing else is shared between them.
"""

from mew_viewer.models.cat import DecodedRecord
from mew_viewer.models.records import DecodedBuffer, Variant
from mew_viewer.parser.ability_parser import parse_abilities
from mew_viewer.parser.binary_reader import read_u64
from mew_viewer.parser.birthday_parser import locate_birthday
from mew_viewer.parser.combat_parser import has_combat_state, parse_combat_state
from mew_viewer.parser.decompress import decompress
from mew_viewer.parser.equipment_parser import parse_equipment_slots
from mew_viewer.parser.errors import RecordDecodeError
from mew_viewer.parser.identity_parser import locate_identity, read_status_flags
from mew_viewer.parser.mutation_parser import locate_mutation_table
from mew_viewer.parser.stats_parser import locate_stats


MIN_RECORD_SIZE = 12
UNIQUE_ID_OFFSET = 4


def _decode_buffer(key: int, buffer: DecodedBuffer, current_day: int | None) -> DecodedRecord:
    data = buffer.data
    if len(data) < MIN_RECORD_SIZE:
        raise RecordDecodeError(
            f"Cat key {key} blob too small after decompress ({len(data)} bytes)"
        )

    identity = locate_identity(data)
    stats = locate_stats(data, corroborate=has_combat_state)

    return DecodedRecord(
        key=key,
        unique_id=read_u64(data, UNIQUE_ID_OFFSET),
        identity=identity,
        flags=read_status_flags(data, identity.name_end_offset),
        stats=stats,
        combat=parse_combat_state(data, stats.offset) if stats else None,
        birthday=locate_birthday(data, current_day),
        mutations=locate_mutation_table(data),
        equipment=parse_equipment_slots(data) or (),
        abilities=parse_abilities(data),
        decoded_bytes=data,
        variant=buffer.variant,
    )


def decode_record(key: int, compressed: bytes, current_day: int | None = None) -> DecodedRecord:
    """Decompress and decode a `cats` row.

    Raises:
        DecompressionError: If no decompression strategy works.
        RecordDecodeError: If the decompressed buffer is too small to be a cat.
    """
    return _decode_buffer(key, decompress(compressed), current_day)


def redecode_from_buffer(
    key: int,
    decompressed: bytes,
    variant: Variant | str,
    current_day: int | None = None,
) -> DecodedRecord:
    """Decode bytes that were already decompressed, keeping their variant tag."""
    if isinstance(variant, str):
        variant = Variant.parse(variant)
    return _decode_buffer(key, DecodedBuffer.from_decompressed(decompressed, variant), current_day)
