"""End-to-end decode of synthetic cat blobs."""

import lz4.block
import pytest

from mew_viewer.models.constants import Sex
from mew_viewer.models.records import Variant
from mew_viewer.parser.errors import DecompressionError, RecordDecodeError
from mew_viewer.parser.record_decoder import decode_record, redecode_from_buffer

from cat_blob import BIRTHDAY_OFFSET, MUTATION_OFFSET, STATS_OFFSET, CatBlob


def test_decode_all_fields():
    cat = decode_record(7, CatBlob().compressed(), current_day=2000)

    assert cat.key == 7
    assert cat.unique_id == 0x1122334455667788
    assert cat.name == "Mittens"
    assert cat.sex is Sex.FEMALE
    assert cat.display_name == "Mittens (Key: 7)"
    assert cat.flags.retired and cat.flags.dead and not cat.flags.donated

    assert cat.stats.offset == STATS_OFFSET
    assert cat.stats.base.as_tuple() == (5, 6, 4, 7, 3, 8, 2)
    assert cat.stats.bonus.luck == 4
    assert (cat.combat.status_effect, cat.combat.hp) == ("Poisoned", 42)

    assert cat.class_name == "Fighter"
    assert cat.birthday_day == 1500
    assert cat.birthday.offset == BIRTHDAY_OFFSET + 27

    assert cat.mutations.base_offset == MUTATION_OFFSET
    assert cat.mutations.coat_id == 1234
    assert [s.item_id for s in cat.equipment] == ["RedCollar", None, "LuckyCharm", None, "ShinyHat"]
    assert len(cat.abilities) == 10

    assert cat.variant == Variant.header()
    assert cat.decoded_bytes == CatBlob().build()


def test_decode_is_deterministic():
    blob = CatBlob().compressed()
    assert decode_record(7, blob) == decode_record(7, blob)


def test_redecode_matches_decode():
    cat = decode_record(7, CatBlob().compressed())
    again = redecode_from_buffer(7, cat.decoded_bytes, cat.variant.tag)
    assert again == cat


def test_redecode_keeps_variant():
    data = CatBlob().build()
    cat = redecode_from_buffer(9, data, "headerless:0x2000")
    assert cat.variant == Variant.headerless(0x2000)
    assert cat.name == "Mittens"


def test_headerless_blob_decodes():
    blob = lz4.block.compress(CatBlob(name="Socks").build(), store_size=False)
    cat = decode_record(2, blob)
    assert cat.name == "Socks"
    assert cat.variant.tag == "headerless:0x2000"


def test_missing_section_leaves_field_empty():
    cat = decode_record(7, CatBlob(with_mutations=False).compressed())
    assert cat.mutations is None
    assert cat.stats is not None
    assert cat.birthday is not None
    assert len(cat.equipment) == 5


def test_birthday_filtered_by_current_day():
    cat = decode_record(7, CatBlob().compressed(), current_day=1000)
    assert cat.birthday is None
    assert cat.class_name is None
    assert cat.birthday_day is None


def test_empty_buffer_decodes_to_blank_record():
    cat = redecode_from_buffer(1, bytes(64), Variant.header())
    assert cat.name == ""
    assert cat.sex is Sex.MALE
    assert cat.stats is None
    assert cat.combat is None
    assert cat.birthday is None
    assert cat.mutations is None
    assert cat.equipment == ()
    assert cat.abilities == ()


def test_too_small_after_decompress():
    blob = lz4.block.compress(b"\x01" * 8, store_size=True)
    with pytest.raises(RecordDecodeError, match="too small") as excinfo:
        decode_record(4, blob)
    assert not isinstance(excinfo.value, DecompressionError)


def test_undecompressable_blob():
    with pytest.raises(DecompressionError):
        decode_record(4, b"\xff" * 32)
