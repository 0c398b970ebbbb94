"""Tests for trait matching and the derived applicability view."""

import pytest

from capplane.capabilities.matcher import (
    compatible_traits,
    match_traits,
    trait_applicability,
    workload_rows,
)
from capplane.capabilities.registry import CapabilityRegistry
from capplane.core.models import NEUTRAL_MARKER


@pytest.fixture()
def snapshot(store, cache):
    return CapabilityRegistry(store, cache).snapshot()


class TestMatchTraits:
    def test_no_filter_lists_every_applicable_trait(self, snapshot):
        rows = match_traits(snapshot)
        assert [(r.name, r.applies_to) for r in rows] == [
            ("scaler", "webservice, worker"),
            ("ingress", "webservice"),
            ("sidecar", "worker, cron"),
        ]

    def test_trait_applying_to_nothing_never_listed(self, snapshot):
        for workload_filter in ("", "webservice", "worker", "cron", "nope"):
            assert "orphan" not in [r.name for r in match_traits(snapshot, workload_filter)]

    @pytest.mark.parametrize("workload_filter", ["webservice", "worker", "cron", "nope"])
    def test_filter_rows_carry_the_filter(self, snapshot, workload_filter):
        rows = match_traits(snapshot, workload_filter)
        for row in rows:
            assert row.applies_to == workload_filter
            trait = snapshot.get("trait", row.name)
            assert workload_filter in trait.applies_to_workloads

    @pytest.mark.parametrize("workload_filter", ["webservice", "worker", "cron"])
    def test_filter_is_a_subset_in_source_order(self, snapshot, workload_filter):
        unfiltered = [r.name for r in match_traits(snapshot)]
        filtered = [r.name for r in match_traits(snapshot, workload_filter)]
        assert filtered == [name for name in unfiltered if name in filtered]

    def test_worker_filter(self, snapshot):
        assert [r.name for r in match_traits(snapshot, "worker")] == ["scaler", "sidecar"]

    def test_unknown_workload_matches_nothing(self, snapshot):
        assert match_traits(snapshot, "nope") == []

    def test_filter_is_case_sensitive(self, snapshot):
        assert match_traits(snapshot, "WebService") == []

    def test_status_follows_origin(self, snapshot):
        statuses = {r.name: r.status for r in match_traits(snapshot)}
        assert statuses == {"scaler": "installed", "ingress": "installed", "sidecar": "uninstalled"}


class TestWorkloadRows:
    def test_applies_to_is_neutral(self, snapshot):
        rows = workload_rows(snapshot)
        assert [r.name for r in rows] == ["webservice", "worker", "cron"]
        assert {r.applies_to for r in rows} == {NEUTRAL_MARKER}

    def test_short_alias_and_status(self, snapshot):
        cron = workload_rows(snapshot)[-1]
        assert cron.short_alias == "cj"
        assert cron.status == "uninstalled"


class TestApplicability:
    def test_one_entry_per_workload(self, snapshot):
        view = {entry.workload: entry.traits for entry in trait_applicability(snapshot)}
        assert view == {
            "webservice": ("scaler", "ingress"),
            "worker": ("scaler", "sidecar"),
            "cron": ("sidecar",),
        }

    def test_compatible_traits_unknown_workload(self, snapshot):
        assert compatible_traits(snapshot, "nope") == ()
