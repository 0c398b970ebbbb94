"""Tests for the local installed-capability cache."""

import pytest

from capplane.capabilities.cache import LocalCapabilityCache
from capplane.core.errors import NotFoundError


class TestListInstalled:
    def test_file_name_order(self, cache):
        names = [entry["name"] for entry in cache.list_installed("workload")]
        assert names == ["cron", "webservice"]

    def test_plural_kind_accepted(self, cache):
        assert [e["name"] for e in cache.list_installed("traits")] == ["sidecar"]

    def test_missing_directory_is_empty(self, tmp_path):
        assert LocalCapabilityCache(tmp_path / "nothing").list_installed("workload") == []

    def test_malformed_files_skipped(self, cache, cache_dir):
        (cache_dir / "workloads" / "aaa.json").write_text("{not json", encoding="utf-8")
        (cache_dir / "workloads" / "bbb.json").write_text("[1, 2]", encoding="utf-8")
        names = [entry["name"] for entry in cache.list_installed("workload")]
        assert names == ["cron", "webservice"]

    def test_undecodable_file_skipped(self, cache, cache_dir):
        (cache_dir / "workloads" / "bad.json").write_bytes(b'{"name": "\xff"}')
        names = [entry["name"] for entry in cache.list_installed("workload")]
        assert names == ["cron", "webservice"]


class TestGetInstalled:
    def test_by_name(self, cache):
        assert cache.get_installed("workload", "cron")["definition"] == "cronjobs.batch"

    def test_by_short_alias(self, cache):
        assert cache.get_installed("workload", "cj")["name"] == "cron"

    def test_not_found(self, cache):
        with pytest.raises(NotFoundError) as excinfo:
            cache.get_installed("trait", "scaler")
        assert excinfo.value.resource_kind == "installed trait"
