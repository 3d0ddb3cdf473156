"""Security configuration export (`create-appsec`).

The configuration is looked up by name in the (unpaginated) configuration
list, its latest version is resolved through the paginated version list
and the full export of that version is fetched. The export body is kept as
returned by the API; templates read it through the cross-reference lookups
in render.functions.
"""

from dataclasses import dataclass, field
from functools import partial
from typing import Any

import structlog

from ..core.resolver import find_by_name, find_latest_version
from .base import BaseExporter

logger = structlog.get_logger(__name__)

# securityControls flag -> (protection resource, attribute)
PROTECTIONS: dict[str, tuple[str, str]] = {
    "applyApplicationLayerControls": ("akamai_appsec_waf_protection", "enabled"),
    "applyNetworkLayerControls": ("akamai_appsec_ip_geo_protection", "enabled"),
    "applyRateControls": ("akamai_appsec_rate_protection", "enabled"),
    "applyReputationControls": ("akamai_appsec_reputation_protection", "enabled"),
    "applySlowPostControls": ("akamai_appsec_slowpost_protection", "enabled"),
    "applyApiConstraints": ("akamai_appsec_api_constraints_protection", "enabled"),
    "applyMalwareControls": ("akamai_appsec_malware_protection", "enabled"),
}


@dataclass
class Protection:
    resource: str
    attribute: str
    enabled: bool


@dataclass
class SecurityPolicy:
    """One security policy with the parts of the export it owns."""

    id: str
    name: str
    body: dict[str, Any]
    protections: list[Protection] = field(default_factory=list)

    @property
    def waf(self) -> dict[str, Any]:
        return self.body.get("webApplicationFirewall") or {}

    @property
    def rule_actions(self) -> list[dict[str, Any]]:
        return self.waf.get("ruleActions") or []

    @property
    def attack_group_actions(self) -> list[dict[str, Any]]:
        return self.waf.get("attackGroupActions") or []

    @property
    def custom_rule_actions(self) -> list[dict[str, Any]]:
        return self.body.get("customRuleActions") or []

    @property
    def rate_policy_actions(self) -> list[dict[str, Any]]:
        return self.body.get("ratePolicyActions") or []

    @property
    def malware_policy_actions(self) -> list[dict[str, Any]]:
        return self.body.get("malwarePolicyActions") or []


@dataclass
class AppsecData:
    """Everything the security configuration templates read."""

    config_id: int
    name: str
    section: str
    version: int
    description: str = ""
    contract_id: str = ""
    group_id: int | None = None
    hostnames: list[str] = field(default_factory=list)
    staging_version: int | None = None
    production_version: int | None = None
    export: dict[str, Any] = field(default_factory=dict)
    policies: list[SecurityPolicy] = field(default_factory=list)

    def section_items(self, key: str) -> list[Any]:
        return self.export.get(key) or []

    @property
    def custom_rules(self) -> list[dict[str, Any]]:
        return self.section_items("customRules")

    @property
    def rate_policies(self) -> list[dict[str, Any]]:
        return self.section_items("ratePolicies")

    @property
    def malware_policies(self) -> list[dict[str, Any]]:
        return self.section_items("malwarePolicies")

    @property
    def reputation_profiles(self) -> list[dict[str, Any]]:
        return self.section_items("reputationProfiles")

    @property
    def advanced_options(self) -> dict[str, Any]:
        return self.export.get("advancedOptions") or {}

    @property
    def match_targets(self) -> list[dict[str, Any]]:
        targets = self.export.get("matchTargets") or {}
        return (targets.get("websiteTargets") or []) + (targets.get("apiTargets") or [])

    @property
    def activations(self) -> dict[str, int]:
        """Active version per network, staging first."""
        result = {}
        if self.staging_version:
            result["staging"] = self.staging_version
        if self.production_version:
            result["production"] = self.production_version
        return result


def selected_hostnames(export: dict[str, Any]) -> list[str]:
    """Selected hosts are plain strings in newer exports, objects in older ones."""
    hosts = []
    for host in export.get("selectedHosts") or []:
        hosts.append(host["hostname"] if isinstance(host, dict) else str(host))
    return hosts


def build_policies(export: dict[str, Any]) -> list[SecurityPolicy]:
    policies = []
    for body in export.get("securityPolicies") or []:
        controls = body.get("securityControls") or {}
        protections = [
            Protection(resource, attribute, bool(controls[flag]))
            for flag, (resource, attribute) in PROTECTIONS.items()
            if flag in controls
        ]
        policies.append(
            SecurityPolicy(id=str(body["id"]), name=body.get("name", ""), body=body, protections=protections)
        )
    return policies


class AppsecExporter(BaseExporter):
    family = "appsec"
    template_targets = {
        "appsec.tf.j2": "appsec.tf",
        "appsec-policies.tf.j2": "appsec-policies.tf",
        "appsec-activations.tf.j2": "appsec-activations.tf",
        "variables.tf.j2": "variables.tf",
        "imports.sh.j2": "import.sh",
    }

    async def find_configuration(self, name: str) -> dict[str, Any]:
        configs = await self.client.list_configurations()

        async def page(offset: int, size: int) -> list[dict[str, Any]]:
            return configs[offset : offset + size]

        return await find_by_name(name, page, "security configuration", self.page_size)

    async def fetch(self, name: str) -> AppsecData:
        logger.info("Fetching security configuration", configuration=name)
        config = await self.guard("fetching security configuration", lambda: self.find_configuration(name))
        config_id = config["id"]

        export = await self.guard(
            "fetching latest configuration version",
            lambda: find_latest_version(
                partial(self.client.list_configuration_versions, config_id),
                partial(self.client.get_export, config_id),
                "security configuration",
                self.page_size,
            ),
        )

        return AppsecData(
            config_id=config_id,
            name=config["name"],
            section=self.section,
            version=export.get("version", config.get("latestVersion", 0)),
            description=config.get("description") or export.get("description") or "",
            contract_id=str(export.get("contractId", "")),
            group_id=export.get("groupId"),
            hostnames=selected_hostnames(export) or list(config.get("productionHostnames") or []),
            staging_version=config.get("stagingVersion"),
            production_version=config.get("productionVersion"),
            export=export,
            policies=build_policies(export),
        )
