"""Shared scan-and-score loop for the offset locators.

Every locator has the same shape: walk a range of candidate offsets, probe
each with a validity check that returns a value (or None), score the
survivors and pick a winner. The winner is the highest score; equal scores
are settled by a named tie-break rule rather than by iteration order.
"""

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar


T = TypeVar("T")


class TieBreak(Enum):
    EARLIEST = "earliest"   # lower offset wins
    LATEST = "latest"       # higher offset wins


@dataclass(frozen=True, slots=True)
class Candidate(Generic[T]):
    offset: int
    value: T
    score: float


def scan_candidates(
    offsets: Iterable[int],
    probe: Callable[[int], T | None],
    score: Callable[[int, T], float],
) -> list[Candidate[T]]:
    """Probe every offset and score the ones that pass, in scan order."""
    found: list[Candidate[T]] = []
    for offset in offsets:
        value = probe(offset)
        if value is None:
            continue
        found.append(Candidate(offset, value, score(offset, value)))
    return found


def rank_candidates(
    candidates: Iterable[Candidate[T]],
    tie_break: TieBreak = TieBreak.EARLIEST,
) -> list[Candidate[T]]:
    """Sort best-first: score descending, then by the tie-break rule."""
    if tie_break is TieBreak.LATEST:
        return sorted(candidates, key=lambda c: (-c.score, -c.offset))
    return sorted(candidates, key=lambda c: (-c.score, c.offset))


def best_candidate(
    offsets: Iterable[int],
    probe: Callable[[int], T | None],
    score: Callable[[int, T], float],
    tie_break: TieBreak = TieBreak.EARLIEST,
) -> Candidate[T] | None:
    ranked = rank_candidates(scan_candidates(offsets, probe, score), tie_break)
    return ranked[0] if ranked else None


def first_match(
    offsets: Iterable[int],
    probe: Callable[[int], T | None],
) -> Candidate[T] | None:
    """Return the first offset whose probe succeeds, without scanning further."""
    for offset in offsets:
        value = probe(offset)
        if value is not None:
            return Candidate(offset, value, 0.0)
    return None
