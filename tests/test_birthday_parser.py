"""Tests for the class-name / birthday locator."""

import pytest

from mew_viewer.parser.birthday_parser import locate_birthday

from cat_blob import BIRTHDAY_OFFSET, CatBlob, birthday_block, put


def test_fixture_birthday():
    record = locate_birthday(CatBlob().build())
    assert record.class_name == "Fighter"
    assert record.birthday_day == 1500
    assert record.offset == BIRTHDAY_OFFSET + 8 + 7 + 12


def test_current_day_within_age_cap():
    record = locate_birthday(CatBlob().build(), current_day=2000)
    assert record.birthday_day == 1500


def test_birthday_in_the_future_is_rejected():
    assert locate_birthday(CatBlob().build(), current_day=1000) is None


def test_birthday_older_than_cap_is_rejected():
    assert locate_birthday(CatBlob(birthday_day=-600_000).build(), current_day=0) is None


@pytest.mark.parametrize("length,found", [(2, False), (3, True), (64, True), (65, False)])
def test_class_name_length_bounds(length, found):
    buf = bytearray(0x200)
    put(buf, 0x20, birthday_block("C" * length, 77))
    record = locate_birthday(bytes(buf))
    if found:
        assert record.class_name == "C" * length
        assert record.birthday_day == 77
    else:
        assert record is None


def test_sentinel_is_required():
    buf = bytearray(0x200)
    put(buf, 0x20, birthday_block("Hunter", 77, sentinel=0))
    assert locate_birthday(bytes(buf)) is None


def test_latest_record_wins():
    buf = bytearray(0x400)
    put(buf, 0x300, birthday_block("Mage", 10))
    put(buf, 0x380, birthday_block("Tank", 20))
    record = locate_birthday(bytes(buf))
    assert record.class_name == "Tank"


def test_full_scan_when_tail_has_nothing():
    buf = bytearray(0x2000)
    put(buf, 0x100, birthday_block("Druid", 30))
    record = locate_birthday(bytes(buf))
    assert record.class_name == "Druid"
    assert record.offset == 0x100 + 8 + 5 + 12


def test_tail_candidate_filtered_by_current_day():
    buf = bytearray(0x2000)
    put(buf, 0x100, birthday_block("Druid", 1500))
    put(buf, 0x1F00, birthday_block("Tank", 5000))
    assert locate_birthday(bytes(buf)).class_name == "Tank"
    assert locate_birthday(bytes(buf), current_day=2000).class_name == "Druid"


def test_short_buffer():
    assert locate_birthday(birthday_block("Druid", 30)) is None
