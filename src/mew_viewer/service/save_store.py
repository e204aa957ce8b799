"""Read-only access to the SQLite save file.

The save holds cat blobs in `cats(key, data)` and auxiliary blobs such as
`house_state` and `current_day` in `files(key, data)`. A fresh connection is
opened per call so the store can be shared between decode worker threads.
"""

import sqlite3
from contextlib import closing
from pathlib import Path

from mew_viewer.models.records import RawRecord


class SaveStore:
    """Key → bytes lookups against a save file opened in read-only mode."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def _connect(self) -> sqlite3.Connection:
        return sqlite3.connect(f"{self.path.resolve().as_uri()}?mode=ro", uri=True)

    def fetch_record_bytes(self, key: int) -> bytes | None:
        with closing(self._connect()) as conn:
            row = conn.execute("SELECT data FROM cats WHERE key = ?", (key,)).fetchone()
        return bytes(row[0]) if row and row[0] is not None else None

    def fetch_named_blob(self, name: str) -> bytes | None:
        with closing(self._connect()) as conn:
            row = conn.execute("SELECT data FROM files WHERE key = ?", (name,)).fetchone()
        return bytes(row[0]) if row and row[0] is not None else None

    def iter_records(self) -> list[RawRecord]:
        with closing(self._connect()) as conn:
            rows = conn.execute("SELECT key, data FROM cats ORDER BY key").fetchall()
        return [RawRecord(key=int(k), data=bytes(d)) for k, d in rows if d is not None]

    def record_count(self) -> int:
        with closing(self._connect()) as conn:
            return int(conn.execute("SELECT COUNT(*) FROM cats").fetchone()[0])
