"""Tests for the run_workload operation."""

from capplane.capabilities.params import RawParam
from capplane.core.errors import ErrorCategory
from capplane.ops.context import OperationContext
from capplane.ops.requests import RunWorkloadRequest
from capplane.ops.workloads import run_workload
from capplane.store.memory import InMemoryResourceStore
from capplane.workloads.pipeline import WORKLOAD_KIND


class UnreachableStore(InMemoryResourceStore):
    def list(self, kind, namespace=None):
        raise ConnectionError("connection refused")


class UnmountedCache:
    def list_installed(self, kind):
        raise OSError("cache volume unmounted")

    def get_installed(self, kind, name_or_alias):
        raise OSError("cache volume unmounted")


def params(**values):
    return [RawParam(name, value) for name, value in values.items()]


class TestRunWorkload:
    def test_apply_with_defaults(self, ctx, store):
        result = run_workload(ctx, RunWorkloadRequest(env="dev", workload_type="webservice"))

        assert result.success, result.error
        assert result.data.outcome == "applied"
        assert result.data.name == "webservice"
        assert result.data.namespace == "dev-ns"
        assert result.data.message == "App webservice deployed"
        assert result.data.created is True

        stored = store.get(WORKLOAD_KIND, "webservice", namespace="dev-ns")
        assert stored["spec"]["parameters"] == {"port": 8080}

    def test_alias_and_user_values(self, ctx, store):
        request = RunWorkloadRequest(
            env="shop",
            workload_type="wk",
            workload_name="orders",
            parameters=params(queue="orders", replicas="4", region="eu"),
        )
        result = run_workload(ctx, request)

        assert result.success, result.error
        stored = store.get(WORKLOAD_KIND, "orders", namespace="shop-ns")
        assert stored["spec"]["parameters"] == {"replicas": 4, "queue": "orders", "debug": False}
        assert stored["spec"]["options"] == {"region": "eu"}
        assert stored["metadata"]["labels"]["capplane.dev/app-group"] == "shop"

    def test_second_run_updates(self, ctx):
        request = RunWorkloadRequest(env="dev", workload_type="webservice")
        run_workload(ctx, request)
        assert run_workload(ctx, request).data.created is False

    def test_staging_request(self, ctx, store):
        before = len(store)
        result = run_workload(ctx, RunWorkloadRequest(env="dev", workload_type="webservice", staging=True))
        assert result.data.outcome == "staged"
        assert result.data.message == "Staging saved"
        assert len(store) == before

    def test_dry_run_context_stages(self, store, cache, environments):
        ctx = OperationContext(store=store, cache=cache, environments=environments, dry_run=True)
        before = len(store)
        result = run_workload(ctx, RunWorkloadRequest(env="dev", workload_type="webservice"))
        assert result.data.outcome == "staged"
        assert len(store) == before


class TestRunWorkloadFailures:
    def test_unknown_environment(self, ctx, store):
        before = len(store)
        result = run_workload(ctx, RunWorkloadRequest(env="Dev", workload_type="webservice"))
        assert not result.success
        assert result.error.code == "NOT_FOUND"
        assert result.error.details["resource_kind"] == "environment"
        assert len(store) == before

    def test_unknown_workload(self, ctx):
        result = run_workload(ctx, RunWorkloadRequest(env="dev", workload_type="lambda"))
        assert result.error.code == "NOT_FOUND"
        assert result.error.details["resource_kind"] == "workload"

    def test_trait_is_not_a_workload(self, ctx):
        result = run_workload(ctx, RunWorkloadRequest(env="dev", workload_type="scaler"))
        assert result.error.code == "NOT_FOUND"

    def test_uncoercible_parameter(self, ctx, store):
        before = len(store)
        request = RunWorkloadRequest(env="dev", workload_type="webservice", parameters=params(port="abc"))
        result = run_workload(ctx, request)
        assert result.error.code == "VALIDATION_FAILED"
        assert result.error.details["param"] == "port"
        assert result.error.retryable is False
        assert len(store) == before

    def test_required_parameter_missing(self, ctx):
        result = run_workload(ctx, RunWorkloadRequest(env="dev", workload_type="worker"))
        assert result.error.code == "VALIDATION_FAILED"
        assert result.error.details["param"] == "queue"
        assert result.error.details["request_id"] == ctx.request_id

    def test_cluster_unreachable(self, cache, environments):
        ctx = OperationContext(store=UnreachableStore(), cache=cache, environments=environments)
        result = run_workload(ctx, RunWorkloadRequest(env="dev", workload_type="webservice"))
        assert result.error.code == "REGISTRY_UNAVAILABLE"
        assert result.error.category is ErrorCategory.SOURCE
        assert result.error.retryable is True

    def test_cache_failure_is_a_warning(self, store, environments):
        ctx = OperationContext(store=store, cache=UnmountedCache(), environments=environments)
        result = run_workload(ctx, RunWorkloadRequest(env="dev", workload_type="webservice"))
        assert result.success
        assert any("cache" in warning for warning in result.warnings)

    def test_cancelled(self, ctx, store):
        before = len(store)
        ctx.cancel()
        result = run_workload(ctx, RunWorkloadRequest(env="dev", workload_type="webservice"))
        assert result.error.code == "CANCELLED"
        assert result.error.details["indeterminate"] is False
        assert len(store) == before
