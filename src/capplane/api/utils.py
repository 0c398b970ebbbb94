"""
Shared API router utilities.

- ``_dc()`` converts a dataclass or dict to a plain dict
- ``_handle_error()`` converts a failed OperationResult to a problem response
- ``_paged()`` / ``_single()`` build the success envelopes
"""

from __future__ import annotations

from dataclasses import asdict
from typing import Any

from fastapi.responses import JSONResponse

from capplane.api.middleware.errors import problem_response, status_for_error_code
from capplane.ops.result import OperationResult, PagedResult


def _dc(obj: Any) -> dict[str, Any]:
    """Convert a dataclass (or dict) to a plain dict.

    Returns an empty dict for objects that are neither dataclasses nor dicts.
    """
    if hasattr(obj, "__dataclass_fields__"):
        return asdict(obj)
    return obj if isinstance(obj, dict) else {}


def _handle_error(result: OperationResult, instance: str = "") -> JSONResponse:
    """Convert a failed ``OperationResult`` into a Problem Details response.

    The error code selects the HTTP status; the error message becomes the
    title. A ``param`` in the error details is reported as the field.
    """
    error = result.error
    code = error.code if error else "INTERNAL"
    message = error.message if error else "Operation failed"
    details = error.details if error else {}
    return problem_response(
        status=status_for_error_code(code),
        title=message,
        detail=code,
        instance=instance,
        errors=[{"code": code, "message": message, "field": details.get("param")}],
    )


def _single(result: OperationResult) -> dict[str, Any]:
    return {
        "data": _dc(result.data),
        "elapsed_ms": round(result.elapsed_ms, 2),
        "warnings": result.warnings,
    }


def _paged(result: PagedResult) -> dict[str, Any]:
    items = [_dc(item) for item in (result.data or [])]
    return {
        "data": items,
        "page": {"total": result.total},
        "elapsed_ms": round(result.elapsed_ms, 2),
        "warnings": result.warnings,
    }
