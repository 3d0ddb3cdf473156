"""GTM domain export (`create-domain`).

Default datacenters exist on every domain and cannot be managed, so they
are never emitted as resources; anything pointing at them uses the literal
datacenter ID instead of a resource reference.
"""

from dataclasses import dataclass, field
from typing import Any

import structlog

from ..render.functions import is_default_datacenter, tf_name
from .base import BaseExporter

logger = structlog.get_logger(__name__)


@dataclass
class DomainData:
    """Everything the GTM templates read."""

    name: str
    section: str
    domain: dict[str, Any]
    datacenters: list[dict[str, Any]] = field(default_factory=list)
    default_datacenters: list[dict[str, Any]] = field(default_factory=list)

    @property
    def resource_name(self) -> str:
        return tf_name(self.name)

    @property
    def properties(self) -> list[dict[str, Any]]:
        return self.domain.get("properties") or []

    @property
    def resources(self) -> list[dict[str, Any]]:
        return self.domain.get("resources") or []

    @property
    def cidr_maps(self) -> list[dict[str, Any]]:
        return self.domain.get("cidrMaps") or []

    @property
    def geo_maps(self) -> list[dict[str, Any]]:
        return self.domain.get("geographicMaps") or []

    @property
    def as_maps(self) -> list[dict[str, Any]]:
        return self.domain.get("asMaps") or []

    def datacenter_name(self, datacenter: dict[str, Any]) -> str:
        return tf_name(datacenter.get("nickname") or f"datacenter_{datacenter['datacenterId']}")

    def datacenter_ref(self, datacenter_id: Any) -> str:
        """HCL expression for a datacenter ID: a literal for defaults, a resource reference otherwise."""
        if is_default_datacenter(datacenter_id):
            return str(datacenter_id)
        for datacenter in self.datacenters:
            if str(datacenter.get("datacenterId")) == str(datacenter_id):
                return f"akamai_gtm_datacenter.{self.datacenter_name(datacenter)}.datacenter_id"
        return str(datacenter_id)


class GTMExporter(BaseExporter):
    family = "gtm"
    template_targets = {
        "domain.tf.j2": "domain.tf",
        "datacenters.tf.j2": "datacenters.tf",
        "properties.tf.j2": "properties.tf",
        "resources.tf.j2": "resources.tf",
        "maps.tf.j2": "maps.tf",
        "variables.tf.j2": "variables.tf",
        "imports.sh.j2": "import.sh",
    }

    async def fetch(self, name: str) -> DomainData:
        logger.info("Fetching domain", domain=name)
        domain = await self.guard("fetching domain", lambda: self.client.get_domain(name))

        data = DomainData(name=domain.get("name", name), section=self.section, domain=domain)
        for datacenter in domain.get("datacenters") or []:
            if is_default_datacenter(datacenter.get("datacenterId")):
                data.default_datacenters.append(datacenter)
            else:
                data.datacenters.append(datacenter)
        logger.debug(
            "Split datacenters",
            datacenters=len(data.datacenters),
            default_datacenters=len(data.default_datacenters),
        )
        return data
