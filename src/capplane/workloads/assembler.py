"""
Workload assembly.

Combines a workload capability, its bound parameters and a resolved
environment into a :class:`WorkloadInstance`. Assembly is a pure function of
its inputs: it performs no I/O and never touches the resource store.

Parameter precedence for schema parameters:
    user-supplied value > environment override > declared default

Naming:
    resource name = explicit name, else app group, else the environment's
    default app group, else the capability name.
    app group     = explicit app group, else the environment's default app
    group, else the resource name.
"""

from __future__ import annotations

from typing import Any

from capplane.capabilities.params import coerce_value
from capplane.core.errors import KindMismatchError, ValidationError
from capplane.core.logging import get_logger
from capplane.core.models import (
    CapabilityDefinition,
    CapabilityKind,
    EnvironmentContext,
    TypedConfig,
    WorkloadInstance,
)

logger = get_logger(__name__)

REQUIRED_MISSING = "required parameter missing"


class WorkloadAssembler:
    """Build :class:`WorkloadInstance` objects from request-scoped inputs."""

    def assemble(
        self,
        capability: CapabilityDefinition,
        typed_config: TypedConfig,
        env_context: EnvironmentContext,
        app_group: str = "",
        staging: bool = False,
        name: str = "",
    ) -> WorkloadInstance:
        """
        Assemble a workload instance.

        Args:
            capability: Workload definition. Traits are rejected.
            typed_config: Output of :class:`ParameterBinder` for *capability*.
            env_context: Resolved target environment.
            app_group: Requested application group (may be empty).
            staging: Copied onto the instance unchanged.
            name: Requested resource name (may be empty).

        Raises:
            KindMismatchError: If *capability* is not a workload.
            ValidationError: If an override cannot be coerced, or a required
                parameter ends up without a value.
        """
        if capability.kind is not CapabilityKind.WORKLOAD:
            raise KindMismatchError(capability.name, CapabilityKind.WORKLOAD.value, capability.kind.value)

        parameters = self._resolve_parameters(capability, typed_config, env_context)

        resource_name = name or app_group or env_context.app_group or capability.name
        group = app_group or env_context.app_group or resource_name

        return WorkloadInstance(
            name=resource_name,
            capability=capability.name,
            definition_ref=capability.definition_ref,
            environment=env_context.name,
            namespace=env_context.namespace,
            app_group=group,
            parameters=parameters,
            options=typed_config.passthrough,
            staging=staging,
        )

    def _resolve_parameters(
        self,
        capability: CapabilityDefinition,
        typed_config: TypedConfig,
        env_context: EnvironmentContext,
    ) -> dict[str, Any]:
        overridable = set(typed_config.unset) | set(typed_config.defaulted)

        parameters: dict[str, Any] = {}
        for spec in capability.parameters:
            if spec.name in overridable and spec.name in env_context.overrides:
                parameters[spec.name] = coerce_value(spec, env_context.overrides[spec.name])
                logger.debug(
                    "environment_override_applied",
                    capability=capability.name,
                    environment=env_context.name,
                    param=spec.name,
                )
            elif spec.name in typed_config.values:
                parameters[spec.name] = typed_config.values[spec.name]
            elif spec.required:
                raise ValidationError(spec.name, REQUIRED_MISSING).with_context(
                    capability=capability.name,
                    environment=env_context.name,
                )
        return parameters
