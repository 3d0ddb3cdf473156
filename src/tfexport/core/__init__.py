"""Core components of the Terraform exporter.

This package contains pagination and version resolution, activation
aggregation and the Terraform state lookup used by import scripts.
"""

from .activations import ActivationData, aggregate_activations, collect_policy_activations
from .resolver import find_by_name, find_latest_version, list_all
from .state_loader import TerraformState

__all__ = [
    "ActivationData",
    "TerraformState",
    "aggregate_activations",
    "collect_policy_activations",
    "find_by_name",
    "find_latest_version",
    "list_all",
]
