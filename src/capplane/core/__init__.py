"""capplane core -- domain models, errors, logging, settings and protocols.

Architecture::

    Layer 1 -- Type System & Errors
        models.py          Capability, environment and workload value objects
        errors.py          Structured error hierarchy (CapPlaneError and friends)
        protocols.py       External collaborator contracts (store, cache, envs)

    Layer 2 -- Ambient
        logging.py         structlog configuration and logger factory
        settings.py        pydantic-settings configuration
"""

from capplane.core.errors import (
    ApplyCancelledError,
    ApplyError,
    CapPlaneError,
    DefinitionFormatError,
    ErrorCategory,
    ErrorContext,
    KindMismatchError,
    NotFoundError,
    RegistryFetchError,
    ResourceExistsError,
    ResourceNotFoundError,
    StoreError,
    ValidationError,
)
from capplane.core.models import (
    ApplyOutcome,
    ApplyResult,
    CapabilityDefinition,
    CapabilityKind,
    EnvironmentContext,
    ParameterSpec,
    ParamType,
    SourceOrigin,
    TraitApplicability,
    TraitMeta,
    TypedConfig,
    WorkloadInstance,
)

__all__ = [
    # errors
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
    # models
    "ApplyOutcome",
    "ApplyResult",
    "CapabilityDefinition",
    "CapabilityKind",
    "EnvironmentContext",
    "ParameterSpec",
    "ParamType",
    "SourceOrigin",
    "TraitApplicability",
    "TraitMeta",
    "TypedConfig",
    "WorkloadInstance",
]
