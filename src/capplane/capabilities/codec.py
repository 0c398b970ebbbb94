"""
Decode raw capability definitions into :class:`CapabilityDefinition`.

Two raw shapes exist:

Cluster items (resources of kind ``WorkloadDefinition``/``TraitDefinition``)::

    {"kind": "TraitDefinition",
     "metadata": {"name": "scaler", "annotations": {"short": "scale"}},
     "spec": {"definitionRef": {"name": "manualscalertraits.core.oam.dev"},
              "appliesToWorkloads": ["webservice"],
              "parameters": [{"name": "replicas", "type": "int", "default": 1}]}}

Local cache entries (one JSON file per installed capability)::

    {"name": "scaler", "type": "trait", "short": "scale",
     "definition": "manualscalertraits.core.oam.dev",
     "appliesTo": ["webservice"],
     "parameters": [{"name": "replicas", "type": "int", "default": 1}]}

Both decode to the same model; only ``source_origin`` differs.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import replace
from typing import Any

from capplane.capabilities.params import coerce_value
from capplane.core.errors import DefinitionFormatError, ValidationError
from capplane.core.models import (
    CapabilityDefinition,
    CapabilityKind,
    ParameterSpec,
    ParamType,
    SourceOrigin,
)

# Resource kinds under which the cluster registers definitions.
DEFINITION_RESOURCE_KINDS: dict[CapabilityKind, str] = {
    CapabilityKind.WORKLOAD: "WorkloadDefinition",
    CapabilityKind.TRAIT: "TraitDefinition",
}

SHORT_ANNOTATION = "short"


def decode_parameters(raw: Any, *, capability: str) -> tuple[ParameterSpec, ...]:
    """Decode a raw parameter list, coercing each default to its declared type."""
    if raw is None:
        return ()
    if not isinstance(raw, list):
        raise DefinitionFormatError(f"{capability}: parameters must be a list")

    specs: list[ParameterSpec] = []
    for entry in raw:
        if not isinstance(entry, Mapping) or not entry.get("name"):
            raise DefinitionFormatError(f"{capability}: every parameter needs a name")
        name = str(entry["name"])
        try:
            param_type = ParamType.parse(str(entry.get("type", ParamType.STRING.value)))
        except ValueError as exc:
            raise DefinitionFormatError(
                f"{capability}: parameter '{name}' has unknown type {entry.get('type')!r}",
                cause=exc,
            ) from exc

        spec = ParameterSpec(
            name=name,
            type=param_type,
            required=bool(entry.get("required", False)),
            usage=_text(entry.get("usage")),
            short=_text(entry.get("short")),
        )
        default = entry.get("default")
        if default is not None:
            try:
                default = coerce_value(spec, default)
            except ValidationError as exc:
                raise DefinitionFormatError(
                    f"{capability}: default of parameter '{name}' {exc.reason}",
                    cause=exc,
                ) from exc
            spec = replace(spec, default=default)
        specs.append(spec)
    return tuple(specs)


def _mapping(raw: Any, *, capability: str, field: str) -> Mapping[str, Any]:
    if raw is None:
        return {}
    if not isinstance(raw, Mapping):
        raise DefinitionFormatError(f"{capability}: {field} must be a mapping")
    return raw


def _text(raw: Any) -> str:
    return "" if raw is None else str(raw)


def _string_list(raw: Any, *, capability: str, field: str) -> tuple[str, ...]:
    if raw is None:
        return ()
    if not isinstance(raw, list) or not all(isinstance(item, str) for item in raw):
        raise DefinitionFormatError(f"{capability}: {field} must be a list of strings")
    return tuple(raw)


def decode_cluster_item(item: Mapping[str, Any], kind: CapabilityKind) -> CapabilityDefinition:
    """Decode a cluster-registered definition resource."""
    resource_kind = DEFINITION_RESOURCE_KINDS[kind]
    metadata = _mapping(item.get("metadata"), capability=resource_kind, field="metadata")
    name = metadata.get("name")
    if not name or not isinstance(name, str):
        raise DefinitionFormatError(f"{resource_kind} without metadata.name")

    annotations = _mapping(metadata.get("annotations"), capability=name, field="metadata.annotations")
    spec = _mapping(item.get("spec"), capability=name, field="spec")
    reference = _mapping(spec.get("definitionRef"), capability=name, field="spec.definitionRef")

    applies_to: tuple[str, ...] = ()
    if kind is CapabilityKind.TRAIT:
        applies_to = _string_list(spec.get("appliesToWorkloads"), capability=name, field="appliesToWorkloads")

    return CapabilityDefinition(
        name=name,
        kind=kind,
        source_origin=SourceOrigin.CLUSTER,
        short_alias=_text(annotations.get(SHORT_ANNOTATION)),
        definition_ref=_text(reference.get("name")),
        applies_to_workloads=applies_to,
        parameters=decode_parameters(spec.get("parameters"), capability=name),
        description=_text(annotations.get("description")),
    )


def decode_cache_entry(entry: Mapping[str, Any], kind: CapabilityKind) -> CapabilityDefinition:
    """Decode an installed-capability cache entry."""
    name = entry.get("name")
    if not name or not isinstance(name, str):
        raise DefinitionFormatError(f"cached {kind.value} entry without a name")

    declared = entry.get("type")
    if declared is not None and declared != kind.value:
        raise DefinitionFormatError(f"{name}: cached as {kind.value} but declares type {declared!r}")

    applies_to: tuple[str, ...] = ()
    if kind is CapabilityKind.TRAIT:
        applies_to = _string_list(entry.get("appliesTo"), capability=name, field="appliesTo")

    return CapabilityDefinition(
        name=name,
        kind=kind,
        source_origin=SourceOrigin.LOCAL_CACHE,
        short_alias=_text(entry.get("short")),
        definition_ref=_text(entry.get("definition")),
        applies_to_workloads=applies_to,
        parameters=decode_parameters(entry.get("parameters"), capability=name),
        description=_text(entry.get("description")),
    )


def encode_parameter(spec: ParameterSpec) -> dict[str, Any]:
    """Plain-dict form of a parameter spec, as used in listings and caches."""
    data: dict[str, Any] = {"name": spec.name, "type": spec.type.value, "required": spec.required}
    if spec.default is not None:
        data["default"] = spec.default
    if spec.usage:
        data["usage"] = spec.usage
    if spec.short:
        data["short"] = spec.short
    return data


def encode_cluster_item(definition: CapabilityDefinition) -> dict[str, Any]:
    """Cluster resource form of *definition* (used to register definitions)."""
    annotations: dict[str, str] = {}
    if definition.short_alias:
        annotations[SHORT_ANNOTATION] = definition.short_alias
    if definition.description:
        annotations["description"] = definition.description

    spec: dict[str, Any] = {"definitionRef": {"name": definition.definition_ref}}
    if definition.kind is CapabilityKind.TRAIT:
        spec["appliesToWorkloads"] = list(definition.applies_to_workloads)
    if definition.parameters:
        spec["parameters"] = [encode_parameter(p) for p in definition.parameters]

    return {
        "apiVersion": "core.capplane.dev/v1alpha1",
        "kind": DEFINITION_RESOURCE_KINDS[definition.kind],
        "metadata": {"name": definition.name, "namespace": "", "annotations": annotations},
        "spec": spec,
    }
