"""Tests for workload assembly."""

import pytest

from capplane.capabilities.params import ParameterBinder, RawParam
from capplane.core.errors import KindMismatchError, ValidationError
from capplane.core.models import EnvironmentContext
from capplane.workloads import WorkloadAssembler

from conftest import SCALER, WEBSERVICE, WORKER

DEV = EnvironmentContext(name="dev", namespace="dev-ns")
SHOP = EnvironmentContext(
    name="shop",
    namespace="shop-ns",
    app_group="shop",
    overrides={"replicas": "2", "port": "8443"},
)


def assemble(capability, env, *pairs, **kwargs):
    config = ParameterBinder().bind(capability, [RawParam(n, v) for n, v in pairs])
    return WorkloadAssembler().assemble(capability, config, env, **kwargs)


class TestKinds:
    def test_trait_rejected(self):
        config = ParameterBinder().bind(SCALER, [])
        with pytest.raises(KindMismatchError) as excinfo:
            WorkloadAssembler().assemble(SCALER, config, DEV)
        assert excinfo.value.code == "KIND_MISMATCH"


class TestParameters:
    def test_defaults_without_overrides(self):
        instance = assemble(WEBSERVICE, DEV)
        assert instance.parameters == {"port": 8080}

    def test_environment_override_beats_default(self):
        instance = assemble(WEBSERVICE, SHOP)
        assert instance.parameters["port"] == 8443

    def test_user_value_beats_override(self):
        instance = assemble(WEBSERVICE, SHOP, ("port", "9000"))
        assert instance.parameters["port"] == 9000

    def test_override_fills_worker_replicas(self):
        instance = assemble(WORKER, SHOP, ("queue", "orders"))
        assert instance.parameters == {"replicas": 2, "queue": "orders", "debug": False}

    def test_required_parameter_missing(self):
        with pytest.raises(ValidationError) as excinfo:
            assemble(WORKER, DEV)
        assert excinfo.value.param == "queue"
        assert excinfo.value.context.environment == "dev"

    def test_uncoercible_override(self):
        env = EnvironmentContext(name="bad", namespace="ns", overrides={"port": "http"})
        with pytest.raises(ValidationError) as excinfo:
            assemble(WEBSERVICE, env)
        assert excinfo.value.param == "port"

    def test_passthrough_becomes_options(self):
        instance = assemble(WEBSERVICE, DEV, ("region", "eu"), ("image", "nginx:1"))
        assert instance.options == {"region": "eu"}
        assert instance.parameters == {"port": 8080, "image": "nginx:1"}


class TestNaming:
    def test_capability_name_fallback(self):
        instance = assemble(WEBSERVICE, DEV)
        assert (instance.name, instance.app_group) == ("webservice", "webservice")
        assert instance.namespace == "dev-ns"
        assert instance.environment == "dev"

    def test_environment_app_group(self):
        instance = assemble(WEBSERVICE, SHOP)
        assert (instance.name, instance.app_group) == ("shop", "shop")

    def test_explicit_name_keeps_environment_group(self):
        instance = assemble(WEBSERVICE, SHOP, name="api")
        assert (instance.name, instance.app_group) == ("api", "shop")

    def test_explicit_app_group_names_resource(self):
        instance = assemble(WEBSERVICE, DEV, app_group="frontend")
        assert (instance.name, instance.app_group) == ("frontend", "frontend")

    def test_explicit_name_becomes_group(self):
        instance = assemble(WEBSERVICE, DEV, name="api")
        assert (instance.name, instance.app_group) == ("api", "api")
        assert instance.identity == "dev-ns/api"


class TestStaging:
    @pytest.mark.parametrize("staging", [True, False])
    def test_flag_copied(self, staging):
        assert assemble(WEBSERVICE, DEV, staging=staging).staging is staging

    def test_definition_ref_copied(self):
        assert assemble(WEBSERVICE, DEV).definition_ref == "deployments.apps"
