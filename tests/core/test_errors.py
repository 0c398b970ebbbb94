"""Tests for capplane.core.errors module."""

import pytest

from capplane.core.errors import (
    ApplyCancelledError,
    ApplyError,
    CapPlaneError,
    ErrorCategory,
    KindMismatchError,
    NotFoundError,
    RegistryFetchError,
    ResourceExistsError,
    StoreError,
    ValidationError,
)


class TestCodes:
    @pytest.mark.parametrize(
        ("error", "code", "category"),
        [
            (RegistryFetchError("down"), "REGISTRY_UNAVAILABLE", ErrorCategory.SOURCE),
            (NotFoundError("workload", "x"), "NOT_FOUND", ErrorCategory.NOT_FOUND),
            (ValidationError("port", "bad"), "VALIDATION_FAILED", ErrorCategory.VALIDATION),
            (KindMismatchError("scaler", "workload", "trait"), "KIND_MISMATCH", ErrorCategory.INTERNAL),
            (ApplyError("boom"), "APPLY_FAILED", ErrorCategory.STORAGE),
            (ApplyCancelledError("stop", indeterminate=False), "CANCELLED", ErrorCategory.CANCELLED),
        ],
    )
    def test_code_and_category(self, error, code, category):
        assert error.code == code
        assert error.category is category

    def test_registry_fetch_is_retryable(self):
        assert RegistryFetchError("down").retryable is True
        assert ValidationError("port", "bad").retryable is False


class TestMessages:
    def test_not_found_message_and_details(self):
        error = NotFoundError("environment", "Dev")
        assert error.message == "environment 'Dev' not found"
        assert error.details() == {"resource_kind": "environment", "name": "Dev"}

    def test_validation_names_parameter(self):
        error = ValidationError("replicas", "expected int, got 'abc'", value="abc")
        assert "replicas" in str(error)
        assert error.details()["param"] == "replicas"
        assert error.details()["value"] == "'abc'"

    def test_kind_mismatch_message(self):
        error = KindMismatchError("scaler", "workload", "trait")
        assert str(error) == "Capability 'scaler' is a trait, expected a workload"

    def test_cancelled_details_carry_indeterminate(self):
        error = ApplyCancelledError("stop", indeterminate=True)
        assert isinstance(error, ApplyError)
        assert error.details()["indeterminate"] is True


class TestContextAndCause:
    def test_with_context_sets_known_fields_and_metadata(self):
        error = ApplyError("boom").with_context(resource="dev-ns/web", attempt=1)
        assert error.context.resource == "dev-ns/web"
        assert error.details() == {"resource": "dev-ns/web", "attempt": 1}

    def test_cause_is_chained(self):
        root = ConnectionError("refused")
        error = RegistryFetchError("down", cause=root)
        assert error.__cause__ is root
        assert error.to_dict()["cause"] == "refused"

    def test_store_errors_are_capplane_errors(self):
        error = ResourceExistsError("Workload", "dev-ns", "web")
        assert isinstance(error, StoreError)
        assert isinstance(error, CapPlaneError)
        assert error.code == "CONFLICT"

    def test_to_dict_shape(self):
        data = NotFoundError("workload", "x").to_dict()
        assert data["error_type"] == "NotFoundError"
        assert data["code"] == "NOT_FOUND"
        assert data["context"] == {"resource_kind": "workload", "name": "x"}
