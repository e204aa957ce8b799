"""JSON-ready payloads for decoded cats."""

from __future__ import annotations

from dataclasses import asdict
from typing import Any

from mew_viewer.models.cat import DecodedRecord, HouseCat, StatVector


def _stats_payload(stats: StatVector | None) -> dict[str, int] | None:
    if stats is None:
        return None
    return {
        "str": stats.strength,
        "dex": stats.dexterity,
        "con": stats.constitution,
        "int": stats.intelligence,
        "spd": stats.speed,
        "cha": stats.charisma,
        "luck": stats.luck,
    }


def record_payload(record: DecodedRecord, *, include_blob: bool = False) -> dict[str, Any]:
    """Flatten a DecodedRecord; the raw buffer is hex-encoded only on request."""
    payload: dict[str, Any] = {
        "key": record.key,
        "id64": record.unique_id,
        "name": record.name,
        "sex": record.sex.value,
        "name_end_raw": record.identity.name_end_offset,
        "flags": asdict(record.flags),
        "stats": _stats_payload(record.stats.base) if record.stats else None,
        "level_bonuses": _stats_payload(record.stats.bonus) if record.stats else None,
        "stats_offset": record.stats.offset if record.stats else None,
        "combat": asdict(record.combat) if record.combat else None,
        "class_name": record.class_name,
        "birthday_day": record.birthday_day,
        "birthday_offset": record.birthday.offset if record.birthday else None,
        "mutations": asdict(record.mutations) if record.mutations else None,
        "equipment": [asdict(slot) for slot in record.equipment],
        "abilities": [
            {**asdict(slot), "kind": slot.kind.value} for slot in record.abilities
        ],
        "lz4_variant": record.variant.tag,
    }
    if include_blob:
        payload["decompressed_blob"] = record.decoded_bytes.hex()
    return payload


def house_cat_payload(cat: HouseCat) -> dict[str, Any]:
    return {
        "key": cat.key,
        "name": cat.name,
        "sex": cat.sex.value,
        "room": cat.room,
        "class_name": cat.class_name,
        "is_dead": cat.is_dead,
        "is_retired": cat.is_retired,
        "is_donated": cat.is_donated,
        "birthday_day": cat.birthday_day,
        "age": cat.age,
        "stats": _stats_payload(cat.stats),
    }
