"""Tests for capplane.core.settings."""

from pathlib import Path

from capplane.core.settings import CapPlaneSettings


def test_paths_derive_from_data_dir(tmp_path):
    settings = CapPlaneSettings(data_dir=tmp_path)
    assert settings.resolved_store_path == tmp_path / "store.db"
    assert settings.resolved_cache_dir == tmp_path / "capabilities"
    assert settings.resolved_environments_file == tmp_path / "environments.yaml"


def test_explicit_paths_win(tmp_path):
    settings = CapPlaneSettings(data_dir=tmp_path, cache_dir=Path("/opt/caps"))
    assert settings.resolved_cache_dir == Path("/opt/caps")


def test_environment_variables(monkeypatch, tmp_path):
    monkeypatch.setenv("CAPPLANE_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("CAPPLANE_CONCURRENT_FETCH", "false")
    monkeypatch.setenv("CAPPLANE_LOG_LEVEL", "DEBUG")
    settings = CapPlaneSettings()
    assert settings.data_dir == tmp_path
    assert settings.concurrent_fetch is False
    assert settings.log_level == "DEBUG"
