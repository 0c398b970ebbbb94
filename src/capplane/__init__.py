"""
capplane - control-plane core for pluggable workload and trait capabilities.

Capabilities are discovered at runtime from definitions registered in the
target cluster and from the locally installed capability cache. The
packages below reconcile both sources and instantiate workloads:

- capplane.core: models, errors, logging, settings, protocols
- capplane.capabilities: registry, trait matching, parameter binding
- capplane.environments: environment resolution
- capplane.workloads: workload assembly and the stage/apply pipeline
- capplane.ops: transport-agnostic operations shared by CLI and API
"""

__version__ = "0.1.0"
