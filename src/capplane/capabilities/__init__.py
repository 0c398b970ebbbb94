"""Capability discovery, trait matching and parameter binding."""

from capplane.capabilities.cache import LocalCapabilityCache
from capplane.capabilities.matcher import match_traits, trait_applicability, workload_rows
from capplane.capabilities.params import ParameterBinder, RawParam, coerce_value, parse_assignments
from capplane.capabilities.registry import CapabilityRegistry, RegistrySnapshot, merge_definitions

__all__ = [
    "CapabilityRegistry",
    "LocalCapabilityCache",
    "ParameterBinder",
    "RawParam",
    "RegistrySnapshot",
    "coerce_value",
    "match_traits",
    "merge_definitions",
    "parse_assignments",
    "trait_applicability",
    "workload_rows",
]
