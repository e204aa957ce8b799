"""Decoded-cat service: batch decoding, caching and the house roster.

The full collection is expensive to decode, so it is kept behind two
layers: a fast in-process reference and a TTL cache entry under
ALL_CATS_KEY. Concurrent callers that miss both share one decode through
SingleFlight. invalidate_cache() drops both layers at once; it is wired to
the save file watcher.
"""

import logging
import os
import threading
import time
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor, as_completed
from datetime import datetime

from mew_viewer.config import ViewerConfig
from mew_viewer.models.cat import DecodedRecord, HouseCat
from mew_viewer.parser.errors import RecordDecodeError
from mew_viewer.parser.house_state_parser import parse_house_state
from mew_viewer.parser.record_decoder import decode_record
from mew_viewer.service.cache import SingleFlight, TtlCache
from mew_viewer.service.file_watcher import FileChangeWatcher
from mew_viewer.service.save_store import SaveStore


logger = logging.getLogger(__name__)

ALL_CATS_KEY = "all_parsed_cats"
HOUSE_STATE_BLOB = "house_state"
CURRENT_DAY_BLOB = "current_day"


def parse_current_day(blob: bytes | None) -> int | None:
    """`current_day` is stored as NUL-padded ASCII digits."""
    if not blob:
        return None
    text = blob.decode("ascii", errors="replace").rstrip("\x00").strip()
    try:
        return int(text)
    except ValueError:
        return None


class CatService:
    """Read-side facade over a save store."""

    def __init__(
        self,
        store: SaveStore,
        *,
        cache_ttl_seconds: float = 300.0,
        max_workers: int | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._store = store
        self._ttl = cache_ttl_seconds
        self._max_workers = max_workers or os.cpu_count() or 1
        self._clock = clock
        self._cache = TtlCache(clock)
        self._single_flight = SingleFlight()
        self._lock = threading.Lock()
        self._cached: tuple[DecodedRecord, ...] | None = None
        self._cached_until = 0.0
        self._generation = 0
        self.last_cache_update: datetime | None = None

    @classmethod
    def from_config(cls, config: ViewerConfig) -> "CatService":
        return cls(
            SaveStore(config.require_save_path()),
            cache_ttl_seconds=config.cache_ttl_seconds,
            max_workers=config.max_workers,
        )

    def attach_watcher(self, watcher: FileChangeWatcher) -> None:
        watcher.subscribe(self._on_source_changed)

    def _on_source_changed(self) -> None:
        logger.info("Save changed, invalidating cat cache")
        self.invalidate_cache()

    def invalidate_cache(self) -> None:
        with self._lock:
            self._generation += 1
            self._cached = None
            self._cache.remove(ALL_CATS_KEY)
            self.last_cache_update = None

    def _fresh_reference(self) -> tuple[DecodedRecord, ...] | None:
        with self._lock:
            if self._cached is not None and self._clock() < self._cached_until:
                return self._cached
            return None

    def list_all(self) -> tuple[DecodedRecord, ...]:
        """Every decodable cat, sorted by name. Undecodable rows are logged and skipped."""
        cats = self._fresh_reference()
        if cats is not None:
            return cats
        return self._single_flight.do(ALL_CATS_KEY, self._load_or_reuse)

    def _load_or_reuse(self) -> tuple[DecodedRecord, ...]:
        cats = self._fresh_reference()
        if cats is not None:
            return cats

        with self._lock:
            generation = self._generation

        cats = self._cache.get(ALL_CATS_KEY)
        if cats is None:
            logger.info("Loading cats from %s", self._store.path)
            started = time.perf_counter()
            cats = self._decode_all()
            logger.info(
                "Loaded %d cats in %.0fms", len(cats), (time.perf_counter() - started) * 1000
            )

        with self._lock:
            # An invalidation during the decode means `cats` may be stale
            if generation == self._generation:
                self._cache.set(ALL_CATS_KEY, cats, self._ttl)
                self._cached = cats
                self._cached_until = self._clock() + self._ttl
                self.last_cache_update = datetime.now()
        return cats

    def _decode_all(self) -> tuple[DecodedRecord, ...]:
        records = self._store.iter_records()
        current_day = self.current_day()
        cats: list[DecodedRecord] = []

        with ThreadPoolExecutor(max_workers=self._max_workers) as pool:
            futures = {
                pool.submit(decode_record, record.key, record.data, current_day): record.key
                for record in records
            }
            for future in as_completed(futures):
                key = futures[future]
                try:
                    cats.append(future.result())
                except Exception:
                    logger.exception("Failed to parse cat %d", key)

        return tuple(sorted(cats, key=lambda cat: (cat.name, cat.key)))

    def get_by_key(self, key: int) -> DecodedRecord | None:
        data = self._store.fetch_record_bytes(key)
        if data is None:
            return None
        try:
            return decode_record(key, data, self.current_day())
        except RecordDecodeError:
            logger.exception("Failed to parse cat %d", key)
            return None

    def count(self) -> int:
        return self._store.record_count()

    def current_day(self) -> int | None:
        return parse_current_day(self._store.fetch_named_blob(CURRENT_DAY_BLOB))

    def house_cats(self) -> list[HouseCat]:
        """Cats currently in the house, with their room and age in days."""
        blob = self._store.fetch_named_blob(HOUSE_STATE_BLOB)
        if not blob:
            return []

        by_key = {cat.key: cat for cat in self.list_all()}
        current_day = self.current_day()
        house: list[HouseCat] = []
        for entry in parse_house_state(blob):
            cat = by_key.get(entry.key)
            if cat is None:
                continue
            age = None
            if current_day is not None and cat.birthday_day is not None:
                age = current_day - cat.birthday_day
            house.append(HouseCat(
                key=cat.key,
                name=cat.name,
                sex=cat.sex,
                room=entry.room,
                class_name=cat.class_name,
                is_dead=cat.flags.dead,
                is_retired=cat.flags.retired,
                is_donated=cat.flags.donated,
                birthday_day=cat.birthday_day,
                age=age,
                stats=cat.stats.base if cat.stats else None,
            ))
        return sorted(house, key=lambda c: (c.name, c.key))
