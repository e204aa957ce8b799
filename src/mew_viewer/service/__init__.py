"""Save-file access, caching and change notification around the decoder."""

from mew_viewer.service.cat_service import CatService
from mew_viewer.service.file_watcher import FileChangeWatcher
from mew_viewer.service.save_store import SaveStore

__all__ = [
    "CatService",
    "FileChangeWatcher",
    "SaveStore",
]
