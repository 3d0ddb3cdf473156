"""Edge DNS zone export (`create-zone`)."""

from dataclasses import dataclass, field
from functools import partial
from pathlib import Path
from typing import Any

import structlog

from ..api.models import Recordset, Zone
from ..core.resolver import list_all
from ..render.functions import tf_name
from .base import BaseExporter

logger = structlog.get_logger(__name__)

# rdata layout of an SOA record
SOA_FIELDS = ("name_server", "email_address", "serial", "refresh", "retry", "expiry", "nxdomain_ttl")


@dataclass
class RecordData:
    """One recordset as a Terraform resource."""

    name: str
    type: str
    ttl: int
    target: list[str] = field(default_factory=list)
    fields: dict[str, Any] = field(default_factory=dict)

    @property
    def resource_name(self) -> str:
        return tf_name(f"{self.name}_{self.type}")


@dataclass
class ZoneData:
    """Everything the DNS templates read."""

    zone: Zone
    section: str
    records: list[RecordData] = field(default_factory=list)

    @property
    def resource_name(self) -> str:
        return tf_name(self.zone.zone)


def record_data(recordset: Recordset) -> RecordData:
    """Map a recordset to resource attributes; SOA rdata is split into named fields."""
    record = RecordData(name=recordset.name, type=recordset.type, ttl=recordset.ttl)
    if recordset.type == "SOA" and recordset.rdata:
        parts = recordset.rdata[0].split()
        record.fields = {key: value for key, value in zip(SOA_FIELDS, parts) if key != "serial"}
        for key in ("refresh", "retry", "expiry", "nxdomain_ttl"):
            if key in record.fields:
                record.fields[key] = int(record.fields[key])
    elif recordset.type == "TXT":
        record.target = [value.strip('"') for value in recordset.rdata]
    else:
        record.target = list(recordset.rdata)
    return record


class DNSExporter(BaseExporter):
    family = "dns"

    def targets(self, data: ZoneData) -> dict[str, Path]:
        return {
            "dnsvars.tf.j2": self.work_path / "dnsvars.tf",
            "zone.tf.j2": self.work_path / f"{data.zone.zone}.tf",
            "imports.sh.j2": self.work_path / "import.sh",
        }

    async def fetch(self, name: str) -> ZoneData:
        logger.info("Fetching zone", zone=name)
        zone = await self.guard("fetching zone", lambda: self.client.get_zone(name))
        recordsets = await self.guard(
            "fetching recordsets",
            lambda: list_all(partial(self.client.list_recordsets, name), self.page_size),
        )
        logger.debug("Fetched recordsets", zone=name, count=len(recordsets))
        return ZoneData(zone=zone, section=self.section, records=[record_data(r) for r in recordsets])
