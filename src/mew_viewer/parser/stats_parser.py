"""Locate the base attribute vector and the level-bonus vector after it.

The base vector is seven i32 values in [1, 10] that usually sit at 0x1CC
but drift by a few hundred bytes between saves. Every offset within the
window is tried; proximity to the expected offset dominates the score and
the stat total only separates near-ties.
"""

from collections.abc import Callable

from mew_viewer.models.cat import StatsLocation, StatVector
from mew_viewer.models.constants import (
    BASE_STAT_RANGE,
    BONUS_STAT_RANGE,
    STAT_COUNT,
    STAT_VECTOR_SIZE,
)
from mew_viewer.parser.binary_reader import read_i32
from mew_viewer.parser.scan import Candidate, TieBreak, rank_candidates, scan_candidates


EXPECTED_OFFSET = 0x1CC
WINDOW = 0x140


def read_stat_vector(data: bytes, offset: int, lo: int, hi: int) -> tuple[int, ...] | None:
    """Seven consecutive i32 values, or None if any falls outside [lo, hi]."""
    if offset < 0 or offset + STAT_VECTOR_SIZE > len(data):
        return None
    values = []
    for i in range(STAT_COUNT):
        v = read_i32(data, offset + i * 4)
        if v < lo or v > hi:
            return None
        values.append(v)
    return tuple(values)


def stats_candidates(
    data: bytes,
    expected_offset: int = EXPECTED_OFFSET,
    window: int = WINDOW,
) -> list[Candidate[tuple[int, ...]]]:
    """All valid base vectors in the window, best-first."""
    n = len(data)
    if n < STAT_VECTOR_SIZE:
        return []
    lo = max(0, expected_offset - window)
    hi = min(n - STAT_VECTOR_SIZE, expected_offset + window)

    found = scan_candidates(
        range(lo, hi + 1),
        lambda off: read_stat_vector(data, off, *BASE_STAT_RANGE),
        lambda off, vals: (1000 - abs(off - expected_offset)) + sum(vals) * 0.1,
    )
    return rank_candidates(found, TieBreak.EARLIEST)


def locate_stats(
    data: bytes,
    *,
    expected_offset: int = EXPECTED_OFFSET,
    window: int = WINDOW,
    corroborate: Callable[[bytes, int], bool] | None = None,
) -> StatsLocation | None:
    """Find the base stats and the optional bonus vector that follows.

    If `corroborate` is given and the top-scoring offset fails it, the first
    lower-ranked offset that passes takes its place; structural evidence
    from the neighbouring fields outranks the proximity score.
    """
    ranked = stats_candidates(data, expected_offset, window)
    if not ranked:
        return None

    best = ranked[0]
    if corroborate is not None and not corroborate(data, best.offset):
        corroborated = next((c for c in ranked if corroborate(data, c.offset)), None)
        if corroborated is not None:
            best = corroborated

    bonus = read_stat_vector(data, best.offset + STAT_VECTOR_SIZE, *BONUS_STAT_RANGE)
    return StatsLocation(
        offset=best.offset,
        base=StatVector.from_values(best.value),
        bonus=StatVector.from_values(bonus) if bonus is not None else None,
    )
