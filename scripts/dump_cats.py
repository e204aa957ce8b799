"""Dump decoded cats from a save file.

Usage:
    python -m scripts.dump_cats [--save PATH] [--key N] [--house] [--json] [--watch]

Without --save, the path is taken from $MEWGENICS_SAVE.
"""

import argparse
import json
import logging
import time
from pathlib import Path

from mew_viewer.config import ViewerConfig
from mew_viewer.export import house_cat_payload, record_payload
from mew_viewer.models.constants import STAT_NAMES
from mew_viewer.service.cat_service import CatService
from mew_viewer.service.file_watcher import FileChangeWatcher


def format_stats(stats) -> str:
    if stats is None:
        return "-"
    return " ".join(f"{name}={value}" for name, value in zip(STAT_NAMES, stats.as_tuple()))


def format_cat(cat) -> list[str]:
    """Human-readable lines for one DecodedRecord."""
    flags = [name for name in ("retired", "dead", "donated") if getattr(cat.flags, name)]
    lines = [
        f"{cat.display_name}  [{cat.sex.value}]  class={cat.class_name or '?'}"
        f"  birthday={cat.birthday_day if cat.birthday_day is not None else '?'}",
        f"  flags: {', '.join(flags) or 'none'} (raw={cat.flags.raw:#x})"
        if cat.flags.raw >= 0 else "  flags: unavailable",
    ]
    if cat.stats:
        lines.append(f"  stats @ {cat.stats.offset:#x}: {format_stats(cat.stats.base)}"
                     f" (total {cat.stats.base.total})")
        lines.append(f"  level bonuses: {format_stats(cat.stats.bonus)}")
    if cat.combat:
        lines.append(f"  status: {cat.combat.status_effect}  hp={cat.combat.hp}")
    if cat.mutations:
        parts = [f"{s.label}={s.slot_id}" for s in cat.mutations.slots]
        lines.append(f"  coat {cat.mutations.coat_id}: " + ", ".join(parts))
    for slot in cat.equipment:
        item = slot.item_id if not slot.is_empty else ("(implicit empty)" if slot.implicit_empty else "(empty)")
        lines.append(f"  equip[{slot.blob_slot}]: {item}")
    for ability in cat.abilities:
        tier = f" tier {ability.tier}" if ability.tier is not None else ""
        lines.append(f"  {ability.label}: {ability.ability_id}{tier}")
    return lines


def watch(service: CatService, config: ViewerConfig) -> None:
    watcher = FileChangeWatcher(config.require_save_path(), config.poll_interval_seconds)
    service.attach_watcher(watcher)
    watcher.subscribe(lambda: print(f"Reloaded: {len(service.list_all())} cats"))
    print(f"Loaded: {len(service.list_all())} cats; watching {watcher.path}")
    watcher.start()
    try:
        while True:
            time.sleep(3600)
    except KeyboardInterrupt:
        pass
    finally:
        watcher.stop()


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Dump decoded cats from a save file")
    parser.add_argument("--save", type=Path, help="Path to the .sav (SQLite) file")
    parser.add_argument("--key", type=int, help="Only decode the cat with this key")
    parser.add_argument("--house", action="store_true",
                        help="Only show cats currently in the house")
    parser.add_argument("--json", action="store_true", help="Emit JSON instead of text")
    parser.add_argument("--watch", action="store_true",
                        help="Keep running and reload whenever the save changes")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = ViewerConfig.from_env(args.save)
    try:
        service = CatService.from_config(config)
    except FileNotFoundError as exc:
        print(f"Error: {exc}")
        return 1

    if args.watch:
        watch(service, config)
        return 0

    if args.house:
        house = service.house_cats()
        if args.json:
            print(json.dumps([house_cat_payload(c) for c in house], indent=2))
        else:
            for c in house:
                age = c.age if c.age is not None else "?"
                print(f"{c.name:<24} {c.room:<20} age={age:<6} class={c.class_name or '?'}")
            print(f"\n{len(house)} cats in the house")
        return 0

    if args.key is not None:
        cat = service.get_by_key(args.key)
        if cat is None:
            print(f"Cat with key {args.key} not found or not decodable")
            return 1
        cats = (cat,)
    else:
        cats = service.list_all()

    if args.json:
        print(json.dumps([record_payload(c) for c in cats], indent=2))
    else:
        for cat in cats:
            print("\n".join(format_cat(cat)))
        print(f"\n{len(cats)} of {service.count()} cats decoded")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
