"""Tests for capplane.core.models."""

from dataclasses import asdict

import pytest

from capplane.core.models import (
    NEUTRAL_MARKER,
    STATUS_INSTALLED,
    STATUS_UNINSTALLED,
    CapabilityDefinition,
    CapabilityKind,
    EnvironmentContext,
    ParamType,
    SourceOrigin,
    TypedConfig,
    WorkloadInstance,
)


class TestCapabilityKind:
    @pytest.mark.parametrize("raw", ["workload", "Workload", "WORKLOADS", " workloads "])
    def test_parse_workload_spellings(self, raw):
        assert CapabilityKind.parse(raw) is CapabilityKind.WORKLOAD

    def test_parse_accepts_member(self):
        assert CapabilityKind.parse(CapabilityKind.TRAIT) is CapabilityKind.TRAIT

    def test_parse_rejects_unknown(self):
        with pytest.raises(ValueError):
            CapabilityKind.parse("component")


class TestParamType:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("str", ParamType.STRING),
            ("integer", ParamType.INT),
            ("number", ParamType.FLOAT),
            ("boolean", ParamType.BOOL),
            ("Int", ParamType.INT),
        ],
    )
    def test_aliases(self, raw, expected):
        assert ParamType.parse(raw) is expected

    def test_unknown_type(self):
        with pytest.raises(ValueError):
            ParamType.parse("object")


class TestCapabilityDefinition:
    def test_status_follows_origin(self):
        cluster = CapabilityDefinition("a", CapabilityKind.TRAIT, SourceOrigin.CLUSTER)
        local = CapabilityDefinition("a", CapabilityKind.TRAIT, SourceOrigin.LOCAL_CACHE)
        assert cluster.status == STATUS_INSTALLED
        assert local.status == STATUS_UNINSTALLED

    def test_matches_name_and_alias_exactly(self):
        definition = CapabilityDefinition(
            "webservice", CapabilityKind.WORKLOAD, SourceOrigin.CLUSTER, short_alias="ws"
        )
        assert definition.matches("webservice")
        assert definition.matches("ws")
        assert not definition.matches("WS")
        assert not definition.matches("web")

    def test_empty_alias_never_matches(self):
        definition = CapabilityDefinition("webservice", CapabilityKind.WORKLOAD, SourceOrigin.CLUSTER)
        assert not definition.matches("")

    def test_neutral_marker(self):
        assert NEUTRAL_MARKER == "-"


class TestValueObjects:
    def test_typed_config_copies_input(self):
        values = {"port": 8080}
        config = TypedConfig(values=values)
        values["port"] = 1
        assert config.values["port"] == 8080

    def test_environment_is_frozen(self):
        env = EnvironmentContext(name="dev", namespace="dev-ns")
        with pytest.raises(AttributeError):
            env.namespace = "other"  # type: ignore[misc]

    def test_workload_instance_identity_and_asdict(self):
        instance = WorkloadInstance(
            name="web",
            capability="webservice",
            definition_ref="deployments.apps",
            environment="dev",
            namespace="dev-ns",
            app_group="web",
            parameters={"port": 8080},
            options={},
        )
        assert instance.identity == "dev-ns/web"
        assert asdict(instance)["parameters"] == {"port": 8080}
