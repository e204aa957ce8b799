"""Runtime configuration for the save viewer.

Values come from keyword arguments first, then environment variables,
then the defaults below.
"""

import os
from dataclasses import dataclass
from pathlib import Path


ENV_SAVE_PATH = "MEWGENICS_SAVE"
ENV_CACHE_TTL = "MEW_VIEWER_CACHE_TTL"
ENV_POLL_INTERVAL = "MEW_VIEWER_POLL_INTERVAL"
ENV_WORKERS = "MEW_VIEWER_WORKERS"


@dataclass(slots=True)
class ViewerConfig:
    """Tuneable knobs for the cat service and its file watcher."""

    save_path: Path | None = None
    cache_ttl_seconds: float = 300.0     # decoded collection lifetime
    poll_interval_seconds: float = 1.0   # file watcher mtime polling
    max_workers: int | None = None       # None → os.cpu_count()

    @classmethod
    def from_env(cls, save_path: Path | None = None, environ=None) -> "ViewerConfig":
        env = os.environ if environ is None else environ
        if save_path is None and env.get(ENV_SAVE_PATH):
            save_path = Path(env[ENV_SAVE_PATH]).expanduser()

        config = cls(save_path=save_path)
        if env.get(ENV_CACHE_TTL):
            config.cache_ttl_seconds = float(env[ENV_CACHE_TTL])
        if env.get(ENV_POLL_INTERVAL):
            config.poll_interval_seconds = float(env[ENV_POLL_INTERVAL])
        if env.get(ENV_WORKERS):
            config.max_workers = int(env[ENV_WORKERS])
        return config

    def require_save_path(self) -> Path:
        if self.save_path is None:
            raise FileNotFoundError(
                f"No save file configured. Pass --save or set {ENV_SAVE_PATH}."
            )
        if not self.save_path.exists():
            raise FileNotFoundError(f"Save file not found: {self.save_path}")
        return self.save_path
