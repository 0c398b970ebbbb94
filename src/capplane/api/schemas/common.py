"""
Common API schemas - shared envelopes and RFC 7807 errors.

Every endpoint returns either :class:`SuccessResponse` or
:class:`PagedResponse` on success, and :class:`ProblemDetail` on failure.

Response Envelope Conventions:
    - ``elapsed_ms`` tracks server-side processing time
    - ``warnings`` carries non-fatal issues (e.g. the local capability
      cache could not be read and the listing is cluster-only)
"""

from __future__ import annotations

from typing import Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


# ── RFC 7807 Problem Detail ─────────────────────────────────────────────


class ErrorDetail(BaseModel):
    """Structured error detail for field-level errors."""

    code: str = Field(description="Machine-readable error code (e.g. 'VALIDATION_FAILED')")
    message: str = Field(description="Human-readable error description")
    field: str | None = Field(default=None, description="Offending parameter, if any")


class ProblemDetail(BaseModel):
    """RFC 7807 «Problem Details for HTTP APIs».

    Error Codes:
        - ``NOT_FOUND`` (404): Unknown capability or environment
        - ``VALIDATION_FAILED`` (400): Parameter coercion or required parameter missing
        - ``REGISTRY_UNAVAILABLE`` (503): Cluster definitions could not be fetched
        - ``APPLY_FAILED`` (502): The resource store rejected the workload
        - ``CANCELLED`` (499): The request was cancelled around the store call
        - ``KIND_MISMATCH`` / ``INTERNAL`` (500): Server-side defect

    Example:
        {
            "type": "about:blank",
            "title": "Invalid parameter 'replicas': expected int, got 'abc'",
            "status": 400,
            "detail": "VALIDATION_FAILED",
            "instance": "/api/v1/workloads",
            "errors": [{"code": "VALIDATION_FAILED", "message": "...", "field": "replicas"}]
        }
    """

    type: str = Field(default="about:blank", description="Error type URI")
    title: str = Field(description="Short human-readable error summary")
    status: int = Field(description="HTTP status code")
    detail: str = Field(default="", description="Machine-readable error code or explanation")
    instance: str = Field(default="", description="URI of the failing request")
    errors: list[ErrorDetail] = Field(default_factory=list, description="Field-level error details")


# ── Success Envelopes ────────────────────────────────────────────────────


class PageMeta(BaseModel):
    """Listing metadata."""

    total: int = Field(description="Number of items in the listing")


class SuccessResponse(BaseModel, Generic[T]):
    """Standard success envelope for single-item responses."""

    data: T = Field(description="Response payload (type varies by endpoint)")
    elapsed_ms: float = Field(default=0.0, description="Server-side processing time in milliseconds")
    warnings: list[str] = Field(default_factory=list, description="Non-fatal warnings")


class PagedResponse(BaseModel, Generic[T]):
    """Success envelope for list responses. Items keep source order."""

    data: list[T] = Field(description="Items")
    page: PageMeta = Field(description="Listing metadata")
    elapsed_ms: float = Field(default=0.0, description="Server-side processing time in milliseconds")
    warnings: list[str] = Field(default_factory=list, description="Non-fatal warnings")
