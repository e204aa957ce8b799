"""Poll the save file's modification time and notify subscribers on change.

The game rewrites the save in place, so a notification fires only when the
mtime moves forward; duplicate or out-of-order events are ignored.
"""

import logging
import threading
from collections.abc import Callable
from pathlib import Path


logger = logging.getLogger(__name__)


class FileChangeWatcher:
    """Background mtime poller for a single file."""

    def __init__(self, path: Path, poll_interval: float = 1.0) -> None:
        self.path = Path(path)
        self.poll_interval = poll_interval
        self._callbacks: list[Callable[[], None]] = []
        self._lock = threading.Lock()
        self._last_mtime = self._mtime()
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    def _mtime(self) -> float | None:
        try:
            return self.path.stat().st_mtime
        except FileNotFoundError:
            return None

    def subscribe(self, callback: Callable[[], None]) -> None:
        """Register a no-argument callback fired after each detected change."""
        with self._lock:
            self._callbacks.append(callback)

    def check(self) -> bool:
        """Poll once; notify subscribers and return True if the file changed."""
        mtime = self._mtime()
        with self._lock:
            if mtime is None or (self._last_mtime is not None and mtime <= self._last_mtime):
                return False
            self._last_mtime = mtime
            callbacks = list(self._callbacks)

        logger.info("Save file changed: %s", self.path)
        for callback in callbacks:
            try:
                callback()
            except Exception:
                logger.exception("File change callback failed")
        return True

    def _run(self) -> None:
        while not self._stop.wait(self.poll_interval):
            self.check()

    def start(self) -> None:
        if self._thread is not None:
            return
        logger.info("Watching %s every %.1fs", self.path, self.poll_interval)
        self._stop.clear()
        self._thread = threading.Thread(target=self._run, name="save-watcher", daemon=True)
        self._thread.start()

    def stop(self) -> None:
        if self._thread is None:
            return
        self._stop.set()
        self._thread.join()
        self._thread = None
        logger.info("File watcher stopped")
