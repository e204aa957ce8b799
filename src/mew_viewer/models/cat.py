"""Decoded cat record data classes.

Every class here is a frozen snapshot produced by one decode pass. Fields a
locator could not find are None (or an empty tuple for repeated fields);
only decompression failure aborts a record.
"""

from dataclasses import dataclass
from enum import Enum

from mew_viewer.models.constants import Sex
from mew_viewer.models.records import Variant


@dataclass(frozen=True, slots=True)
class Identity:
    name: str
    sex: Sex
    name_end_offset: int   # end of the UTF-16 name, 0x14 when unresolved


@dataclass(frozen=True, slots=True)
class StatusFlags:
    """u16 status bitfield. raw is -1 when the offset was past the buffer."""
    raw: int
    offset: int
    retired: bool = False
    dead: bool = False
    donated: bool = False


@dataclass(frozen=True, slots=True)
class StatVector:
    """Seven attributes in on-disk order."""
    strength: int
    dexterity: int
    constitution: int
    intelligence: int
    speed: int
    charisma: int
    luck: int

    @classmethod
    def from_values(cls, values: tuple[int, ...] | list[int]) -> "StatVector":
        return cls(*values[:7])

    def as_tuple(self) -> tuple[int, ...]:
        return (
            self.strength,
            self.dexterity,
            self.constitution,
            self.intelligence,
            self.speed,
            self.charisma,
            self.luck,
        )

    @property
    def total(self) -> int:
        return sum(self.as_tuple())


@dataclass(frozen=True, slots=True)
class StatsLocation:
    offset: int
    base: StatVector
    bonus: StatVector | None = None   # level-up bonuses, 28 bytes after base


@dataclass(frozen=True, slots=True)
class CombatState:
    status_effect: str
    hp: int
    status_offset: int   # offset of the u64 status length
    hp_offset: int


@dataclass(frozen=True, slots=True)
class BirthdayRecord:
    class_name: str
    birthday_day: int
    offset: int          # offset of the i64 day counter


@dataclass(frozen=True, slots=True)
class MutationSlot:
    slot_index: int      # 1-14
    label: str
    category: str
    slot_id: int
    offset: int


@dataclass(frozen=True, slots=True)
class MutationTable:
    base_offset: int
    coat_id: int
    coat_offset: int
    slots: tuple[MutationSlot, ...]


@dataclass(frozen=True, slots=True)
class EquipSlot:
    blob_slot: int       # 0-4, in blob order
    start: int
    end: int
    item_id: str | None = None
    implicit_empty: bool = False

    @property
    def is_empty(self) -> bool:
        return self.item_id is None


class AbilityKind(Enum):
    RUN_ENTRY = "u64run"     # member of the identifier run
    TIER_ENTRY = "u64tier"   # standalone identifier + u32 tier


@dataclass(frozen=True, slots=True)
class AbilitySlot:
    label: str
    kind: AbilityKind
    ability_id: str
    tier: int | None = None
    run_start: int | None = None
    run_end: int | None = None
    run_index: int | None = None
    record_offset: int | None = None
    byte_length: int | None = None


@dataclass(frozen=True, slots=True)
class HouseCatEntry:
    """One row of the house-state roster."""
    key: int
    room: str
    unknown: int
    p0: float
    p1: float
    p2: float


@dataclass(frozen=True, slots=True)
class DecodedRecord:
    """All fields recovered from one cat blob."""
    key: int
    unique_id: int
    identity: Identity
    flags: StatusFlags
    stats: StatsLocation | None
    combat: CombatState | None
    birthday: BirthdayRecord | None
    mutations: MutationTable | None
    equipment: tuple[EquipSlot, ...]
    abilities: tuple[AbilitySlot, ...]
    decoded_bytes: bytes
    variant: Variant

    @property
    def name(self) -> str:
        return self.identity.name

    @property
    def sex(self) -> Sex:
        return self.identity.sex

    @property
    def class_name(self) -> str | None:
        return self.birthday.class_name if self.birthday else None

    @property
    def birthday_day(self) -> int | None:
        return self.birthday.birthday_day if self.birthday else None

    @property
    def display_name(self) -> str:
        return f"{self.name} (Key: {self.key})"


@dataclass(frozen=True, slots=True)
class HouseCat:
    """A roster entry joined with its decoded record."""
    key: int
    name: str
    sex: Sex
    room: str
    class_name: str | None
    is_dead: bool
    is_retired: bool
    is_donated: bool
    birthday_day: int | None
    age: int | None
    stats: StatVector | None
