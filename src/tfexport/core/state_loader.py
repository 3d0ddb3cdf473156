"""Terraform state lookups for import script generation.

A `TerraformState` handle is created per export and passed to the
template layer. The state file is read at most once, on the first query.
Any problem reading it means "nothing imported yet".
"""

import json
from pathlib import Path

import structlog

from ..constants import TERRAFORM_STATE_FILE

logger = structlog.get_logger(__name__)


class TerraformState:
    """
    Answer "is this resource already in state?" for one work directory.

    Usage:
        state = TerraformState(Path("./infra"))
        if not state.has_resource("akamai_dns_zone", "example_com"):
            ...
    """

    def __init__(self, work_path: Path | str) -> None:
        self.path = Path(work_path) / TERRAFORM_STATE_FILE
        self._resources: set[tuple[str, str]] | None = None

    def _load(self) -> set[tuple[str, str]]:
        try:
            with open(self.path) as f:
                data = json.load(f)
            return {
                (entry["type"], entry["name"])
                for entry in data.get("resources", [])
                if "type" in entry and "name" in entry
            }
        except FileNotFoundError:
            logger.debug("No terraform state found", path=str(self.path))
        except (OSError, ValueError, AttributeError, TypeError) as e:
            logger.warning("Unable to read terraform state", path=str(self.path), error=str(e))
        return set()

    @property
    def resources(self) -> set[tuple[str, str]]:
        if self._resources is None:
            self._resources = self._load()
        return self._resources

    def has_resource(self, resource_type: str, name: str) -> bool:
        """True if a resource of this type and name is recorded in state."""
        return (resource_type, name) in self.resources
