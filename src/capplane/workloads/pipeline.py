"""
Apply pipeline - stage or persist an assembled workload.

State machine (both states terminal):

    ::

        WorkloadInstance
             │
             ├── staging=True  ──► render() ──────────────────► STAGED
             │
             └── staging=False ──► render() ──► store.create ─► APPLIED (created)
                                                   │
                                        ResourceExistsError
                                                   │
                                                   └► store.update ► APPLIED (updated)

Rendering is deterministic and side-effect free, so a staged render is
exactly what a later non-staged apply persists.

Failures:
    - any store error other than the plain existence conflict, or any
      unexpected exception from the store, becomes :class:`ApplyError`
      with the underlying cause; there are no retries
    - cancellation (``cancel_event`` set, or ``KeyboardInterrupt`` during
      the store call) becomes :class:`ApplyCancelledError`; its
      ``indeterminate`` flag tells the caller whether the store call may
      already have taken effect
"""

from __future__ import annotations

import threading
from typing import Any

from capplane.core.errors import ApplyCancelledError, ApplyError, ResourceExistsError
from capplane.core.logging import get_logger
from capplane.core.models import ApplyOutcome, ApplyResult, WorkloadInstance
from capplane.core.protocols import ResourceStore

logger = get_logger(__name__)

WORKLOAD_API_VERSION = "core.capplane.dev/v1alpha1"
WORKLOAD_KIND = "Workload"

LABEL_APP_GROUP = "capplane.dev/app-group"
LABEL_WORKLOAD_TYPE = "capplane.dev/workload-type"
LABEL_ENVIRONMENT = "capplane.dev/environment"

STAGED_MESSAGE = "Staging saved"


def render(instance: WorkloadInstance) -> dict[str, Any]:
    """Final resource representation of *instance*."""
    return {
        "apiVersion": WORKLOAD_API_VERSION,
        "kind": WORKLOAD_KIND,
        "metadata": {
            "name": instance.name,
            "namespace": instance.namespace,
            "labels": {
                LABEL_APP_GROUP: instance.app_group,
                LABEL_WORKLOAD_TYPE: instance.capability,
                LABEL_ENVIRONMENT: instance.environment,
            },
        },
        "spec": {
            "workloadType": instance.capability,
            "definitionRef": instance.definition_ref,
            "parameters": dict(instance.parameters),
            "options": dict(instance.options),
        },
    }


class ApplyPipeline:
    """Stage or create-or-update workload resources in a :class:`ResourceStore`."""

    def __init__(self, store: ResourceStore):
        self._store = store

    def apply(self, instance: WorkloadInstance, cancel_event: threading.Event | None = None) -> ApplyResult:
        """
        Run *instance* through the pipeline.

        Args:
            instance: Assembled workload.
            cancel_event: Set by the caller to cancel the request.

        Raises:
            ApplyCancelledError: If the request was cancelled around the store call.
            ApplyError: If the store rejected the resource.
        """
        resource = render(instance)

        if instance.staging:
            logger.info(
                "workload_staged",
                name=instance.name,
                namespace=instance.namespace,
                capability=instance.capability,
            )
            return self._result(instance, ApplyOutcome.STAGED, resource, STAGED_MESSAGE)

        if cancel_event is not None and cancel_event.is_set():
            raise ApplyCancelledError(
                f"Apply of '{instance.identity}' cancelled before contacting the store",
                indeterminate=False,
            ).with_context(resource=instance.identity, environment=instance.environment)

        try:
            stored, created = self._create_or_update(resource)
        except KeyboardInterrupt as exc:
            raise ApplyCancelledError(
                f"Apply of '{instance.identity}' interrupted; resource state is unknown",
                indeterminate=True,
                cause=exc,
            ).with_context(resource=instance.identity, environment=instance.environment) from exc
        except Exception as exc:
            logger.error(
                "workload_apply_failed",
                name=instance.name,
                namespace=instance.namespace,
                error=str(exc),
                error_type=type(exc).__name__,
            )
            raise ApplyError(
                f"Failed to apply '{instance.identity}': {exc}",
                cause=exc,
            ).with_context(resource=instance.identity, environment=instance.environment) from exc

        if cancel_event is not None and cancel_event.is_set():
            raise ApplyCancelledError(
                f"Apply of '{instance.identity}' cancelled after the store call; verify the resource",
                indeterminate=True,
            ).with_context(resource=instance.identity, environment=instance.environment)

        logger.info(
            "workload_applied",
            name=instance.name,
            namespace=instance.namespace,
            capability=instance.capability,
            created=created,
        )
        return self._result(
            instance,
            ApplyOutcome.APPLIED,
            stored,
            f"App {instance.name} deployed",
            created=created,
        )

    def _create_or_update(self, resource: dict[str, Any]) -> tuple[dict[str, Any], bool]:
        try:
            return self._store.create(resource), True
        except ResourceExistsError:
            logger.debug(
                "workload_exists_updating",
                name=resource["metadata"]["name"],
                namespace=resource["metadata"]["namespace"],
            )
        return self._store.update(resource), False

    @staticmethod
    def _result(
        instance: WorkloadInstance,
        outcome: ApplyOutcome,
        resource: dict[str, Any],
        message: str,
        created: bool = False,
    ) -> ApplyResult:
        return ApplyResult(
            outcome=outcome,
            name=instance.name,
            namespace=instance.namespace,
            environment=instance.environment,
            capability=instance.capability,
            resource=resource,
            message=message,
            created=created,
        )
