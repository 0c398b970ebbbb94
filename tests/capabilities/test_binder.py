"""Tests for parameter binding and coercion."""

import pytest

from capplane.capabilities.params import ParameterBinder, RawParam, coerce_value, parse_assignments
from capplane.core.errors import ValidationError
from capplane.core.models import ParameterSpec, ParamType

from conftest import WORKER


def bind(*pairs):
    return ParameterBinder().bind(WORKER, [RawParam(name, value) for name, value in pairs])


class TestBind:
    def test_default_applied(self):
        config = bind()
        assert config.values["replicas"] == 1
        assert "replicas" in config.defaulted
        assert config.unset == ("queue",)

    def test_supplied_value_coerced(self):
        config = bind(("replicas", "3"))
        assert config.values["replicas"] == 3
        assert "replicas" not in config.defaulted

    def test_uncoercible_value_names_parameter(self):
        with pytest.raises(ValidationError) as excinfo:
            bind(("replicas", "abc"))
        assert excinfo.value.param == "replicas"
        assert excinfo.value.code == "VALIDATION_FAILED"

    def test_unknown_names_pass_through(self):
        config = bind(("queue", "jobs"), ("region", "eu-west-1"))
        assert config.values["queue"] == "jobs"
        assert config.passthrough == {"region": "eu-west-1"}
        assert "region" not in config.values

    def test_last_value_wins(self):
        config = bind(("replicas", "2"), ("replicas", "5"), ("extra", "a"), ("extra", "b"))
        assert config.values["replicas"] == 5
        assert config.passthrough == {"extra": "b"}

    def test_values_follow_schema_order(self):
        config = bind(("debug", "yes"), ("queue", "jobs"))
        assert list(config.values) == ["replicas", "queue", "debug"]


class TestCoerce:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [("true", True), ("Yes", True), ("on", True), ("1", True), ("false", False), ("OFF", False)],
    )
    def test_bool_words(self, raw, expected):
        assert coerce_value(ParameterSpec("debug", ParamType.BOOL), raw) is expected

    def test_bool_rejects_other_text(self):
        with pytest.raises(ValidationError):
            coerce_value(ParameterSpec("debug", ParamType.BOOL), "maybe")

    def test_non_text_stringified(self):
        assert coerce_value(ParameterSpec("port", ParamType.INT), 8080) == 8080
        assert coerce_value(ParameterSpec("name", ParamType.STRING), True) == "true"

    def test_float(self):
        assert coerce_value(ParameterSpec("ratio", ParamType.FLOAT), " 0.5 ") == 0.5


class TestParseAssignments:
    def test_pairs(self):
        params = parse_assignments(["port=9000", "cmd=a=b", "empty="])
        assert params == [RawParam("port", "9000"), RawParam("cmd", "a=b"), RawParam("empty", "")]

    @pytest.mark.parametrize("pair", ["port", "=9000"])
    def test_rejects_malformed(self, pair):
        with pytest.raises(ValidationError):
            parse_assignments([pair])
