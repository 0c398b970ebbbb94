"""
Structured error types for capplane.

Every failure the core can report is a typed :class:`CapPlaneError` carrying
a machine-readable ``code``, an :class:`ErrorCategory`, retry semantics,
structured context and the chained underlying cause.

Architecture:
    ::

        ┌─────────────────────────────────────────────────────────────────┐
        │                       CapPlaneError                              │
        │  (code, category, retryable, context, cause)                     │
        ├─────────────────────────────────────────────────────────────────┤
        │                                                                  │
        │  RegistryFetchError   NotFoundError       ValidationError        │
        │  (SOURCE)             (NOT_FOUND)         (VALIDATION)           │
        │                                                                  │
        │  KindMismatchError    ApplyError          StoreError             │
        │  (INTERNAL)           (STORAGE)           (STORAGE)              │
        │                            │                   │                 │
        │                   ApplyCancelledError  ResourceExistsError       │
        │                                        ResourceNotFoundError     │
        └─────────────────────────────────────────────────────────────────┘

Core components raise these errors; the operations layer (``capplane.ops``)
is the only place that catches them and turns them into failed
``OperationResult`` envelopes. Transports then translate the ``code`` into an
exit status or an HTTP status.

Usage:
    from capplane.core.errors import NotFoundError

    raise NotFoundError("workload", "webservice")
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Standard error categories for classification and routing.

    Attributes:
        SOURCE: Capability definition source (cluster or cache) failures
        NOT_FOUND: Unknown capability, environment or resource
        VALIDATION: Parameter coercion or required-parameter failures
        STORAGE: Target resource store failures
        CANCELLED: Request cancelled while the store call was in flight
        INTERNAL: Bugs, unexpected state
    """

    SOURCE = "SOURCE"
    NOT_FOUND = "NOT_FOUND"
    VALIDATION = "VALIDATION"
    STORAGE = "STORAGE"
    CANCELLED = "CANCELLED"
    INTERNAL = "INTERNAL"


@dataclass
class ErrorContext:
    """Structured metadata context for errors.

    Only fields that are set appear in :meth:`to_dict`; anything else goes
    into ``metadata``.

    Attributes:
        capability: Capability (workload or trait type) name involved
        environment: Environment name involved
        resource: Resource identity (``namespace/name``) involved
        request_id: Request identifier from the operation context
        metadata: Additional key-value pairs
    """

    capability: str | None = None
    environment: str | None = None
    resource: str | None = None
    request_id: str | None = None

    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result = {}
        for key in ["capability", "environment", "resource", "request_id"]:
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        if self.metadata:
            result.update(self.metadata)
        return result


class CapPlaneError(Exception):
    """
    Base exception for all capplane errors.

    Subclasses set ``code``, ``default_category`` and ``default_retryable``
    class attributes so callers get sensible defaults without repeating them
    at every raise site.

    Examples:
        >>> error = CapPlaneError("Something went wrong")
        >>> error.code
        'INTERNAL'
        >>> error.with_context(capability="webservice").context.capability
        'webservice'
    """

    code: str = "INTERNAL"
    default_category: ErrorCategory = ErrorCategory.INTERNAL
    default_retryable: bool = False

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        retryable: bool | None = None,
        context: ErrorContext | None = None,
        cause: BaseException | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.retryable = retryable if retryable is not None else self.default_retryable
        self.context = context or ErrorContext()
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> CapPlaneError:
        """
        Add context to this error (fluent API).

        Usage:
            raise ApplyError("store refused", cause=exc).with_context(
                resource="dev-ns/frontend",
            )
        """
        for key, value in kwargs.items():
            if hasattr(self.context, key):
                setattr(self.context, key, value)
            else:
                self.context.metadata[key] = value
        return self

    def details(self) -> dict[str, Any]:
        """Machine-readable details forwarded to failed operation results."""
        return self.context.to_dict()

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result = {
            "error_type": self.__class__.__name__,
            "code": self.code,
            "message": self.message,
            "category": self.category.value,
            "retryable": self.retryable,
        }
        details = self.details()
        if details:
            result["context"] = details
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, code={self.code})"


# =============================================================================
# REGISTRY / LOOKUP ERRORS
# =============================================================================


class RegistryFetchError(CapPlaneError):
    """The cluster-origin definition source could not be read.

    Fatal for the current request: the registry never falls back to
    local-cache-only data.
    """

    code = "REGISTRY_UNAVAILABLE"
    default_category = ErrorCategory.SOURCE
    default_retryable = True


class DefinitionFormatError(CapPlaneError):
    """A raw capability definition (cluster item or cache entry) is malformed.

    The registry skips such definitions with a warning; they are a
    data-quality defect, not a request failure.
    """

    code = "INVALID_DEFINITION"
    default_category = ErrorCategory.SOURCE


class NotFoundError(CapPlaneError):
    """Unknown capability, environment or resource."""

    code = "NOT_FOUND"
    default_category = ErrorCategory.NOT_FOUND

    def __init__(self, resource_kind: str, name: str, message: str | None = None, **kwargs: Any):
        self.resource_kind = resource_kind
        self.name = name
        super().__init__(message or f"{resource_kind} '{name}' not found", **kwargs)

    def details(self) -> dict[str, Any]:
        result = {"resource_kind": self.resource_kind, "name": self.name}
        result.update(super().details())
        return result


# =============================================================================
# VALIDATION ERRORS
# =============================================================================


class ValidationError(CapPlaneError):
    """
    Parameter coercion or required-parameter failure.

    Never retryable - the input must be fixed. Always names the offending
    parameter.
    """

    code = "VALIDATION_FAILED"
    default_category = ErrorCategory.VALIDATION

    def __init__(
        self,
        param: str,
        reason: str,
        *,
        value: Any = None,
        message: str | None = None,
        **kwargs: Any,
    ):
        self.param = param
        self.reason = reason
        self.value = value
        super().__init__(message or f"Invalid parameter '{param}': {reason}", **kwargs)

    def details(self) -> dict[str, Any]:
        result: dict[str, Any] = {"param": self.param, "reason": self.reason}
        if self.value is not None:
            result["value"] = repr(self.value)
        result.update(super().details())
        return result


class KindMismatchError(CapPlaneError):
    """A capability of the wrong kind reached a kind-specific component.

    Always a programming defect, never expected in normal operation.
    """

    code = "KIND_MISMATCH"
    default_category = ErrorCategory.INTERNAL

    def __init__(self, name: str, expected: str, actual: str):
        self.name = name
        self.expected = expected
        self.actual = actual
        super().__init__(f"Capability '{name}' is a {actual}, expected a {expected}")

    def details(self) -> dict[str, Any]:
        result = {"name": self.name, "expected": self.expected, "actual": self.actual}
        result.update(super().details())
        return result


# =============================================================================
# STORE ERRORS (raised by resource store collaborators)
# =============================================================================


class StoreError(CapPlaneError):
    """Error reported by a resource store implementation."""

    code = "STORE_ERROR"
    default_category = ErrorCategory.STORAGE


class ResourceExistsError(StoreError):
    """A resource with the same identity already exists."""

    code = "CONFLICT"

    def __init__(self, kind: str, namespace: str, name: str):
        self.kind = kind
        self.namespace = namespace
        self.name = name
        super().__init__(f"{kind} '{namespace}/{name}' already exists")


class ResourceNotFoundError(StoreError):
    """No resource with the requested identity exists."""

    code = "NOT_FOUND"

    def __init__(self, kind: str, namespace: str, name: str):
        self.kind = kind
        self.namespace = namespace
        self.name = name
        super().__init__(f"{kind} '{namespace}/{name}' not found")


# =============================================================================
# APPLY ERRORS
# =============================================================================


class ApplyError(CapPlaneError):
    """Store-level failure while persisting a workload. No internal retry."""

    code = "APPLY_FAILED"
    default_category = ErrorCategory.STORAGE


class ApplyCancelledError(ApplyError):
    """The request was cancelled around the store operation.

    ``indeterminate`` is ``True`` when the store call may have taken effect,
    so the caller has to check the resource state itself.
    """

    code = "CANCELLED"
    default_category = ErrorCategory.CANCELLED

    def __init__(self, message: str, *, indeterminate: bool, **kwargs: Any):
        self.indeterminate = indeterminate
        super().__init__(message, **kwargs)

    def details(self) -> dict[str, Any]:
        result: dict[str, Any] = {"indeterminate": self.indeterminate}
        result.update(super().details())
        return result


__all__ = [
    "ApplyCancelledError",
    "ApplyError",
    "CapPlaneError",
    "DefinitionFormatError",
    "ErrorCategory",
    "ErrorContext",
    "KindMismatchError",
    "NotFoundError",
    "RegistryFetchError",
    "ResourceExistsError",
    "ResourceNotFoundError",
    "StoreError",
    "ValidationError",
]
