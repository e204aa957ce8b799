"""Raw and decompressed record containers."""

from dataclasses import dataclass
from enum import Enum


class Strategy(Enum):
    """Which decompression strategy produced a buffer."""
    HEADER = "header"            # u32 declared size + LZ4 block
    HEADERLESS = "headerless"    # bare LZ4 block, size guessed from a fixed list


@dataclass(frozen=True, slots=True)
class RawRecord:
    """A `cats` table row: integer key and the compressed blob."""
    key: int
    data: bytes


@dataclass(frozen=True, slots=True)
class Variant:
    """Decompression strategy tag, carried alongside the decoded bytes.

    Serialises to "header" or "headerless:0x2000" so a cached buffer can be
    re-decoded later with the same tag.
    """
    strategy: Strategy
    candidate_size: int | None = None

    @classmethod
    def header(cls) -> "Variant":
        return cls(Strategy.HEADER)

    @classmethod
    def headerless(cls, size: int) -> "Variant":
        return cls(Strategy.HEADERLESS, size)

    @property
    def tag(self) -> str:
        if self.strategy is Strategy.HEADERLESS:
            return f"headerless:{self.candidate_size:#x}"
        return self.strategy.value

    @classmethod
    def parse(cls, tag: str) -> "Variant":
        """Inverse of `tag`. Raises ValueError for anything unrecognised."""
        if tag == Strategy.HEADER.value:
            return cls.header()
        prefix, sep, size = tag.partition(":")
        if prefix == Strategy.HEADERLESS.value and sep:
            return cls.headerless(int(size, 0))
        raise ValueError(f"Unknown decompression variant tag {tag!r}")

    def __str__(self) -> str:
        return self.tag


@dataclass(frozen=True, slots=True)
class DecodedBuffer:
    """Flat decompressed record bytes plus the strategy that produced them."""
    data: bytes
    variant: Variant

    @classmethod
    def from_decompressed(cls, data: bytes, variant: Variant) -> "DecodedBuffer":
        """Wrap bytes that are already decompressed (cached / re-decode path)."""
        return cls(data=bytes(data), variant=variant)

    def __len__(self) -> int:
        return len(self.data)
