"""Fixed labels and empirically tuned limits for the cat record format.

None of the ranges below come from a published schema. They were tuned
against real saves and are treated as behaviour: changing one changes
which candidate offsets the locators accept.
"""

from enum import Enum


class Sex(Enum):
    MALE = "Male"
    FEMALE = "Female"
    UNKNOWN = "Unknown"


# Raw u16 sex codes written after the name
SEX_CODES: dict[int, Sex] = {
    0: Sex.MALE,
    1: Sex.FEMALE,
}

# Status flag bits (u16 at name end + 0x10)
FLAG_RETIRED = 0x0002
FLAG_DEAD = 0x0020
FLAG_DONATED = 0x4000

# Stat vectors: 7 x i32 in STR, DEX, CON, INT, SPD, CHA, LUCK order
STAT_COUNT = 7
STAT_VECTOR_SIZE = STAT_COUNT * 4
STAT_NAMES: tuple[str, ...] = ("STR", "DEX", "CON", "INT", "SPD", "CHA", "LCK")
BASE_STAT_RANGE = (1, 10)
BONUS_STAT_RANGE = (-10, 50)

# Birthday / class record
AGE_CAP_DAYS = 500_000

# Mutation table: 16-byte header + 14 slots of 20 bytes
MUTATION_SLOT_COUNT = 14
MUTATION_MIN_VOTES = 10

# Slot index (1-based) → (label, category)
MUTATION_SLOT_INFO: dict[int, tuple[str, str]] = {
    1: ("Eyes", "Appearance"),
    2: ("Ears", "Appearance"),
    3: ("Tail", "Appearance"),
    4: ("Body", "Appearance"),
    5: ("Pattern", "Appearance"),
    6: ("Color 1", "Appearance"),
    7: ("Color 2", "Appearance"),
    8: ("Color 3", "Appearance"),
    9: ("Mutation 1", "Mutation"),
    10: ("Mutation 2", "Mutation"),
    11: ("Mutation 3", "Mutation"),
    12: ("Mutation 4", "Mutation"),
    13: ("Mutation 5", "Mutation"),
    14: ("Mutation 6", "Mutation"),
}


def mutation_slot_info(slot_index: int) -> tuple[str, str]:
    """Label and category for a 1-based mutation slot index."""
    return MUTATION_SLOT_INFO.get(slot_index, (f"Slot {slot_index}", "Unknown"))


# Equipment table
EQUIP_SLOT_COUNT = 5

# Ability run labels
ACTIVE_ABILITY_LABELS: tuple[str, ...] = (
    "Active1 (DefaultMove)",
    "Active2 (BasicAttack)",
    "Active3",
    "Active4",
    "Active5",
    "Active6",
)
PASSIVE1_LABEL = "Passive1"
TAIL_ABILITY_LABELS: tuple[str, ...] = ("Passive2", "Disorder1", "Disorder2")
PASSIVE1_RUN_INDEX = 10
