"""CDN property export (`create-property`).

Flow:
1. Search the property by name
2. Resolve the latest version through the paginated version list
3. Fetch the rule tree, hostnames, edge hostnames and activations of that
   version's contract and group
"""

from dataclasses import dataclass, field
from functools import partial
from typing import Any

import structlog

from ..core.resolver import find_by_name, find_latest_version
from ..render.functions import tf_name
from .base import BaseExporter

logger = structlog.get_logger(__name__)

PROPERTY_NETWORKS: tuple[str, ...] = ("STAGING", "PRODUCTION")


@dataclass
class PropertyData:
    """Everything the property templates read."""

    name: str
    property_id: str
    contract_id: str
    group_id: str
    version: int
    section: str
    product_id: str = ""
    rule_format: str = ""
    rules: dict[str, Any] = field(default_factory=dict)
    hostnames: list[dict[str, Any]] = field(default_factory=list)
    edge_hostnames: list[dict[str, Any]] = field(default_factory=list)
    activations: dict[str, dict[str, Any]] = field(default_factory=dict)

    @property
    def resource_name(self) -> str:
        return tf_name(self.name)

    def edge_hostname_name(self, domain: str) -> str:
        return tf_name(domain)

    def edge_hostname_for(self, cname_to: str) -> dict[str, Any] | None:
        for edge_hostname in self.edge_hostnames:
            if edge_hostname.get("edgeHostnameDomain") == cname_to:
                return edge_hostname
        return None


def used_edge_hostnames(
    hostnames: list[dict[str, Any]], edge_hostnames: list[dict[str, Any]]
) -> list[dict[str, Any]]:
    """Edge hostnames some property hostname points at, in listing order."""
    targets = {h.get("cnameTo") for h in hostnames}
    return [e for e in edge_hostnames if e.get("edgeHostnameDomain") in targets]


def latest_activations(activations: list[dict[str, Any]]) -> dict[str, dict[str, Any]]:
    """Most recent ACTIVE activation per network, staging first."""
    result: dict[str, dict[str, Any]] = {}
    for network in PROPERTY_NETWORKS:
        active = [
            a
            for a in activations
            if a.get("network") == network
            and a.get("status") == "ACTIVE"
            and a.get("activationType", "ACTIVATE") == "ACTIVATE"
        ]
        if active:
            result[network.lower()] = max(active, key=lambda a: a.get("updateDate") or a.get("submitDate") or "")
    return result


class PropertyExporter(BaseExporter):
    family = "property"
    template_targets = {
        "property.tf.j2": "property.tf",
        "rules.json.j2": "property-snippets/main.json",
        "variables.tf.j2": "variables.tf",
        "imports.sh.j2": "import.sh",
    }

    async def find_property(self, name: str) -> dict[str, Any]:
        items = await self.client.find_property(name)

        async def page(offset: int, size: int) -> list[dict[str, Any]]:
            return items[offset : offset + size]

        return await find_by_name(
            name, page, "property", self.page_size, name_of=lambda item: item.get("propertyName")
        )

    async def fetch(self, name: str) -> PropertyData:
        logger.info("Fetching property", property=name)
        found = await self.guard("fetching property", lambda: self.find_property(name))
        property_id = found["propertyId"]
        contract_id = found["contractId"]
        group_id = found["groupId"]

        version = await self.guard(
            "fetching latest property version",
            lambda: find_latest_version(
                partial(self.client.list_property_versions, property_id, contract_id, group_id),
                partial(self.client.get_property_version, property_id, contract_id, group_id),
                "property",
                self.page_size,
                version_of=lambda item: item.get("propertyVersion"),
            ),
        )
        number = version["propertyVersion"]

        async def details() -> tuple[dict, list, list, list]:
            rule_tree = await self.client.get_rule_tree(property_id, contract_id, group_id, number)
            hostnames = await self.client.get_hostnames(property_id, contract_id, group_id, number)
            edge_hostnames = await self.client.list_edge_hostnames(contract_id, group_id)
            activations = await self.client.list_property_activations(property_id, contract_id, group_id)
            return rule_tree, hostnames, edge_hostnames, activations

        rule_tree, hostnames, edge_hostnames, activations = await self.guard(
            "fetching property details", details
        )

        return PropertyData(
            name=found["propertyName"],
            property_id=property_id,
            contract_id=contract_id,
            group_id=group_id,
            version=number,
            section=self.section,
            product_id=version.get("productId", ""),
            rule_format=rule_tree.get("ruleFormat") or version.get("ruleFormat", ""),
            rules=rule_tree.get("rules") or {},
            hostnames=hostnames,
            edge_hostnames=used_edge_hostnames(hostnames, edge_hostnames),
            activations=latest_activations(activations),
        )
