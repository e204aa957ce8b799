"""Tests for the base-stat locator and level-bonus vector."""

import struct

from mew_viewer.parser.combat_parser import has_combat_state
from mew_viewer.parser.stats_parser import (
    EXPECTED_OFFSET,
    locate_stats,
    read_stat_vector,
    stats_candidates,
)

from cat_blob import CatBlob, STATS_OFFSET, combat_block, put, stat_block


def _buffer(size: int = 0x400) -> bytearray:
    return bytearray(size)


def test_fixture_stats():
    loc = locate_stats(CatBlob().build())
    assert loc.offset == STATS_OFFSET
    assert loc.base.as_tuple() == (5, 6, 4, 7, 3, 8, 2)
    assert loc.base.total == 35
    assert loc.bonus.as_tuple() == (0, 2, -1, 3, 0, 0, 4)


def test_read_stat_vector_range():
    data = stat_block([1, 2, 3, 4, 5, 6, 10])
    assert read_stat_vector(data, 0, 1, 10) == (1, 2, 3, 4, 5, 6, 10)
    assert read_stat_vector(data, 0, 2, 10) is None
    assert read_stat_vector(data, 4, 1, 10) is None


def test_proximity_wins_over_total():
    buf = _buffer()
    put(buf, EXPECTED_OFFSET + 0x40, stat_block([10] * 7))
    put(buf, EXPECTED_OFFSET - 8, stat_block([1] * 7))
    loc = locate_stats(bytes(buf))
    assert loc.offset == EXPECTED_OFFSET - 8


def test_out_of_window_is_ignored():
    buf = _buffer()
    far = EXPECTED_OFFSET + 0x141
    put(buf, far, stat_block([4] * 7))
    assert locate_stats(bytes(buf)) is None
    assert locate_stats(bytes(buf), window=0x200).offset == far


def test_corroboration_prefers_candidate_with_combat_block():
    buf = _buffer()
    put(buf, EXPECTED_OFFSET, stat_block([5] * 7))
    put(buf, 0x200, stat_block([3] * 7))
    put(buf, 0x200 + 84, combat_block("Healthy", 17))
    data = bytes(buf)

    assert locate_stats(data).offset == EXPECTED_OFFSET
    assert locate_stats(data, corroborate=has_combat_state).offset == 0x200


def test_corroboration_falls_back_to_top_candidate():
    buf = _buffer()
    put(buf, EXPECTED_OFFSET, stat_block([5] * 7))
    put(buf, 0x200, stat_block([3] * 7))
    loc = locate_stats(bytes(buf), corroborate=has_combat_state)
    assert loc.offset == EXPECTED_OFFSET


def test_equal_scores_pick_earliest():
    buf = _buffer()
    put(buf, EXPECTED_OFFSET - 0x40, stat_block([2] * 7))
    put(buf, EXPECTED_OFFSET + 0x40, stat_block([2] * 7))
    ranked = stats_candidates(bytes(buf))
    assert [c.offset for c in ranked] == [EXPECTED_OFFSET - 0x40, EXPECTED_OFFSET + 0x40]


def test_bonus_out_of_range_is_dropped():
    buf = _buffer()
    put(buf, EXPECTED_OFFSET, stat_block([5] * 7))
    put(buf, EXPECTED_OFFSET + 28, struct.pack("<7i", 0, 0, 60, 0, 0, 0, 0))
    loc = locate_stats(bytes(buf))
    assert loc.offset == EXPECTED_OFFSET
    assert loc.bonus is None


def test_short_buffer():
    assert locate_stats(b"\x01" * 20) is None
