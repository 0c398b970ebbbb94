"""
Operations layer - transport-agnostic entry points for capplane.

- All functions accept ``OperationContext`` as first argument
- All functions return ``OperationResult[T]`` (never raise)
- The CLI and the HTTP API call these functions and nothing deeper

Usage::

    from capplane.ops import OperationContext
    from capplane.ops.requests import RunWorkloadRequest
    from capplane.ops.workloads import run_workload
    from capplane.store import InMemoryResourceStore

    ctx = OperationContext(store=InMemoryResourceStore(), environments=envs)
    result = run_workload(ctx, RunWorkloadRequest(env="dev", workload_type="webservice"))
    assert result.success
"""

from capplane.ops.context import OperationContext
from capplane.ops.result import OperationError, OperationResult, PagedResult

__all__ = [
    "OperationContext",
    "OperationError",
    "OperationResult",
    "PagedResult",
]
