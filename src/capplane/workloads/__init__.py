"""Workload assembly and the stage/apply pipeline."""

from capplane.workloads.assembler import WorkloadAssembler
from capplane.workloads.pipeline import ApplyPipeline, render

__all__ = ["ApplyPipeline", "WorkloadAssembler", "render"]
