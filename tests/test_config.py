"""Tests for ViewerConfig environment handling."""

from pathlib import Path

import pytest

from mew_viewer.config import ViewerConfig


def test_defaults():
    config = ViewerConfig.from_env(environ={})
    assert config.save_path is None
    assert config.cache_ttl_seconds == 300.0
    assert config.poll_interval_seconds == 1.0
    assert config.max_workers is None


def test_environment_values():
    config = ViewerConfig.from_env(environ={
        "MEWGENICS_SAVE": "/saves/a.sav",
        "MEW_VIEWER_CACHE_TTL": "30",
        "MEW_VIEWER_POLL_INTERVAL": "0.5",
        "MEW_VIEWER_WORKERS": "3",
    })
    assert config.save_path == Path("/saves/a.sav")
    assert config.cache_ttl_seconds == 30.0
    assert config.poll_interval_seconds == 0.5
    assert config.max_workers == 3


def test_explicit_path_wins(tmp_path):
    config = ViewerConfig.from_env(tmp_path, environ={"MEWGENICS_SAVE": "/saves/a.sav"})
    assert config.save_path == tmp_path


def test_require_save_path(tmp_path):
    with pytest.raises(FileNotFoundError, match="MEWGENICS_SAVE"):
        ViewerConfig().require_save_path()
    with pytest.raises(FileNotFoundError, match="not found"):
        ViewerConfig(save_path=tmp_path / "nope.sav").require_save_path()
    save = tmp_path / "a.sav"
    save.write_bytes(b"")
    assert ViewerConfig(save_path=save).require_save_path() == save
