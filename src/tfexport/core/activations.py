"""Fold raw activation history into one record per network."""

from collections.abc import Iterable
from dataclasses import dataclass, field

from ..api.models import Policy, PolicyActivation
from ..constants import POLICY_NETWORKS


@dataclass
class ActivationData:
    """A policy version live on one network, with the properties it serves."""

    policy_id: int
    network: str
    version: int
    properties: list[str] = field(default_factory=list)


def aggregate_activations(
    policy_id: int, activations: Iterable[PolicyActivation], network: str
) -> ActivationData | None:
    """
    Combine every activation entry for `network` into one record.

    The version of the last matching entry wins; property names are
    appended in entry order and may repeat.

    Returns:
        The combined record, or None when no entry is on `network`
    """
    result: ActivationData | None = None
    for activation in activations:
        if activation.network != network:
            continue
        if result is None:
            result = ActivationData(policy_id=policy_id, network=network, version=0)
        result.version = activation.policy_info.version
        result.properties.append(activation.property_info.name)
    return result


def collect_policy_activations(policy: Policy) -> dict[str, ActivationData]:
    """Activation records keyed by network, staging before prod, absent networks omitted."""
    collected: dict[str, ActivationData] = {}
    for network in POLICY_NETWORKS:
        activation = aggregate_activations(policy.policy_id, policy.activations, network)
        if activation is not None:
            collected[network] = activation
    return collected
