"""Cloudlet policy export (`create-cloudlets-policy`).

Flow:
1. Find the policy by name across the paginated policy list
2. Reject cloudlet types without templates
3. Resolve the latest policy version (rules included)
4. Fold activations into one record per network, staging first
5. For load-balancer policies, fetch each referenced origin's latest
   load balancer version and newest activation per network
"""

from dataclasses import dataclass, field
from functools import partial

import structlog

from ..api.models import (
    LoadBalancerActivation,
    LoadBalancerVersion,
    MatchRule,
    MatchRuleALB,
    Policy,
    PolicyVersion,
)
from ..constants import LOAD_BALANCER_NETWORKS, MATCH_RULE_DATA_SOURCES, SUPPORTED_CLOUDLETS
from ..core.activations import ActivationData, collect_policy_activations
from ..core.resolver import find_by_name, find_latest_version
from ..utils.exceptions import FetchError, UnsupportedTypeError
from .base import BaseExporter

logger = structlog.get_logger(__name__)


@dataclass
class PolicyData:
    """Everything the cloudlet templates read."""

    name: str
    cloudlet_code: str
    group_id: int
    section: str
    description: str | None = None
    match_rule_format: str | None = None
    match_rules: list[MatchRule] = field(default_factory=list)
    policy_activations: dict[str, ActivationData] = field(default_factory=dict)
    load_balancers: list[LoadBalancerVersion] = field(default_factory=list)
    load_balancer_activations: list[LoadBalancerActivation] = field(default_factory=list)

    @property
    def match_rule_data_source(self) -> str:
        return MATCH_RULE_DATA_SOURCES[self.cloudlet_code]


def origin_ids(rules: list[MatchRule]) -> list[str]:
    """Distinct origin IDs referenced by load-balancer rules, in first-seen order."""
    seen: dict[str, None] = {}
    for rule in rules:
        if not isinstance(rule, MatchRuleALB):
            raise TypeError(f"match rule type is not albMatchRule: {rule.type}")
        origin_id = rule.forward_settings.origin_id
        if origin_id:
            seen.setdefault(origin_id, None)
    return list(seen)


def newest_activation(
    activations: list[LoadBalancerActivation], network: str
) -> LoadBalancerActivation | None:
    """Most recently activated entry on `network`."""
    on_network = [a for a in activations if a.network == network]
    if not on_network:
        return None
    return max(on_network, key=lambda a: a.activated_date)


class CloudletsExporter(BaseExporter):
    family = "cloudlets"
    template_targets = {
        "policy.tf.j2": "policy.tf",
        "match-rules.tf.j2": "match-rules.tf",
        "load-balancer.tf.j2": "load-balancer.tf",
        "variables.tf.j2": "variables.tf",
        "imports.sh.j2": "import.sh",
    }

    async def find_policy(self, name: str) -> Policy:
        return await self.guard(
            "fetching policy",
            lambda: find_by_name(name, self.client.list_policies, "policy", self.page_size),
        )

    async def latest_version(self, policy_id: int) -> PolicyVersion:
        return await self.guard(
            "fetching latest policy version",
            lambda: find_latest_version(
                partial(self.client.list_policy_versions, policy_id),
                partial(self.client.get_policy_version, policy_id),
                "policy",
                self.page_size,
            ),
        )

    async def load_balancers(
        self, origins: list[str]
    ) -> tuple[list[LoadBalancerVersion], list[LoadBalancerActivation]]:
        """Latest version and newest PRODUCTION/STAGING activation of each origin."""
        versions: list[LoadBalancerVersion] = []
        activations: list[LoadBalancerActivation] = []
        for origin_id in origins:
            origin_versions = await self.client.list_load_balancer_versions(origin_id)
            latest = max(origin_versions, key=lambda v: v.version, default=None)
            # Version 0 is not a usable load balancer version
            if latest is not None and latest.version > 0:
                versions.append(latest)

            origin_activations = await self.client.list_load_balancer_activations(origin_id)
            for network in LOAD_BALANCER_NETWORKS:
                activation = newest_activation(origin_activations, network)
                if activation is not None:
                    activations.append(activation)
        return versions, activations

    async def fetch(self, name: str) -> PolicyData:
        logger.info("Fetching policy", policy=name)
        policy = await self.find_policy(name)
        if policy.cloudlet_code not in SUPPORTED_CLOUDLETS:
            raise UnsupportedTypeError("cloudlet", policy.cloudlet_code)

        version = await self.latest_version(policy.policy_id)
        data = PolicyData(
            name=policy.name,
            cloudlet_code=policy.cloudlet_code,
            group_id=policy.group_id,
            section=self.section,
            description=version.description,
            match_rule_format=version.match_rule_format,
            match_rules=version.match_rules or [],
            policy_activations=collect_policy_activations(policy),
        )

        if policy.cloudlet_code == "ALB":
            try:
                origins = origin_ids(data.match_rules)
            except TypeError as e:
                raise FetchError("fetching load balancers", e) from e
            logger.debug("Fetching load balancers", origins=origins)
            data.load_balancers, data.load_balancer_activations = await self.guard(
                "fetching load balancers", lambda: self.load_balancers(origins)
            )
        return data
