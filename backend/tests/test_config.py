"""Tests for settings validation."""

import os

import pytest
from pydantic import ValidationError

from dirshare.config import Settings


def test_root_dir_made_absolute(tmp_path, monkeypatch):
    (tmp_path / "share").mkdir()
    monkeypatch.chdir(tmp_path)
    settings = Settings(root_dir="share")
    assert os.path.isabs(settings.root_dir)
    assert settings.root_dir == os.path.realpath(tmp_path / "share")


def test_missing_root_dir_rejected(tmp_path):
    with pytest.raises(ValidationError):
        Settings(root_dir=str(tmp_path / "missing"))


def test_file_root_dir_rejected(tmp_path):
    (tmp_path / "f").write_text("x")
    with pytest.raises(ValidationError):
        Settings(root_dir=str(tmp_path / "f"))


def test_limits_must_be_positive(tmp_path):
    with pytest.raises(ValidationError):
        Settings(root_dir=str(tmp_path), cache_capacity=0)
    with pytest.raises(ValidationError):
        Settings(root_dir=str(tmp_path), max_concurrent_requests=-1)


def test_env_prefix(tmp_path, monkeypatch):
    monkeypatch.setenv("DIRSHARE_ROOT_DIR", str(tmp_path))
    monkeypatch.setenv("DIRSHARE_CHUNK_SIZE", "4096")
    settings = Settings()
    assert settings.root_dir == os.path.realpath(tmp_path)
    assert settings.chunk_size == 4096


def test_defaults(tmp_path):
    settings = Settings(root_dir=str(tmp_path))
    assert settings.cache_capacity == 100
    assert settings.cache_threshold_bytes == 1024 * 1024
    assert settings.chunk_size == 8 * 1024
    assert settings.max_concurrent_requests == 64
