"""Shared plumbing for the per-family exporters."""

from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable
from pathlib import Path
from typing import Any, ClassVar, TypeVar

import jinja2
import structlog

from ..api.client import EdgeClient
from ..constants import DEFAULT_EDGERC_SECTION, DEFAULT_PAGE_SIZE
from ..core.state_loader import TerraformState
from ..render.processor import TemplateProcessor
from ..utils.exceptions import APIError, FetchError

logger = structlog.get_logger(__name__)

T = TypeVar("T")


class BaseExporter(ABC):
    """
    Fetch one remote object, assemble its data snapshot and render it.

    Subclasses set `family` (the template sub-directory) and
    `template_targets` (template name -> file name relative to the work
    path, or a callable building it from the snapshot), and implement
    `fetch(name)`.
    """

    family: ClassVar[str] = ""
    template_targets: ClassVar[dict[str, str]] = {}

    def __init__(
        self,
        client: EdgeClient,
        work_path: Path | str = ".",
        section: str = DEFAULT_EDGERC_SECTION,
        page_size: int = DEFAULT_PAGE_SIZE,
        state: TerraformState | None = None,
        loader: jinja2.BaseLoader | None = None,
    ) -> None:
        """
        Initialize the exporter.

        Args:
            client: API client
            work_path: Directory the Terraform files are written to
            section: .edgerc section written into the generated provider block
            page_size: Page size for paginated listings
            state: Terraform state handle, defaults to the one in work_path
            loader: Template loader override (tests)
        """
        self.client = client
        self.work_path = Path(work_path)
        self.section = section
        self.page_size = page_size
        self.state = state or TerraformState(self.work_path)
        self.loader = loader or jinja2.PackageLoader("tfexport", f"templates/{self.family}")

    async def guard(self, phase: str, call: Callable[[], Awaitable[T]]) -> T:
        """Await `call`, turning API failures into FetchError for `phase`."""
        try:
            return await call()
        except APIError as e:
            logger.error("Fetch failed", phase=phase, error=str(e))
            raise FetchError(phase, e) from e

    def targets(self, data: Any) -> dict[str, Path]:
        return {template: self.work_path / target for template, target in self.template_targets.items()}

    def processor(self, data: Any) -> TemplateProcessor:
        return TemplateProcessor(
            template_targets=self.targets(data),
            loader=self.loader,
            functions={"imported": self.state.has_resource},
        )

    @abstractmethod
    async def fetch(self, name: str) -> Any:
        """Fetch `name` and assemble its data snapshot."""

    async def export(self, name: str) -> Any:
        """Fetch `name` and write its Terraform files. Returns the snapshot."""
        data = await self.fetch(name)
        logger.info("Saving Terraform configuration", family=self.family, path=str(self.work_path))
        self.processor(data).process_templates(data)
        return data
