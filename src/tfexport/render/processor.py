"""Render a data object through a fixed set of templates into files.

Each command owns a template target map (template name -> output path).
Templates are rendered in map order and each output is written as soon as
it is rendered. The first failure stops processing; files written before
it stay on disk.
"""

import dataclasses
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any

import jinja2
import structlog
from pydantic import BaseModel

from ..utils.exceptions import SavingFilesError
from .functions import base_functions

logger = structlog.get_logger(__name__)


def build_context(data: Any) -> dict[str, Any]:
    """Expose the fields of `data` as top-level template names, plus `data` itself."""
    if dataclasses.is_dataclass(data) and not isinstance(data, type):
        context = {f.name: getattr(data, f.name) for f in dataclasses.fields(data)}
    elif isinstance(data, BaseModel):
        context = {name: getattr(data, name) for name in type(data).model_fields}
    elif isinstance(data, Mapping):
        context = dict(data)
    else:
        context = {}
    context["data"] = data
    return context


class TemplateProcessor:
    """
    Jinja2-backed template renderer.

    Usage:
        processor = TemplateProcessor(
            loader=jinja2.PackageLoader("tfexport", "templates/dns"),
            template_targets={"zone.tf.j2": work_path / "example.com.tf"},
            functions={"imported": state.has_resource},
        )
        processor.process_templates(zone_data)
    """

    def __init__(
        self,
        template_targets: Mapping[str, Path | str],
        template_dir: Path | str | None = None,
        loader: jinja2.BaseLoader | None = None,
        functions: Mapping[str, Callable[..., Any]] | None = None,
    ) -> None:
        """
        Initialize the processor.

        Args:
            template_targets: Template name to destination path, in render order
            template_dir: Directory holding the templates (ignored when loader is given)
            loader: Explicit Jinja2 loader
            functions: Extra functions on top of base_functions()
        """
        if loader is None:
            if template_dir is None:
                raise ValueError("either template_dir or loader is required")
            loader = jinja2.FileSystemLoader(str(template_dir))

        self.template_targets = dict(template_targets)
        self.env = jinja2.Environment(
            loader=loader,
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            undefined=jinja2.ChainableUndefined,
        )
        all_functions = {**base_functions(), **(functions or {})}
        self.env.globals.update(all_functions)
        self.env.filters.update(all_functions)

    def render(self, template_name: str, data: Any) -> str:
        """Render one template against `data`."""
        template = self.env.get_template(template_name)
        return template.render(build_context(data))

    def process_templates(self, data: Any) -> None:
        """
        Render every mapped template and write it to its destination.

        Raises:
            SavingFilesError: On the first lookup, render or write failure
        """
        for template_name, destination in self.template_targets.items():
            try:
                output = self.render(template_name, data)
                path = Path(destination)
                path.parent.mkdir(parents=True, exist_ok=True)
                path.write_text(output)
            except (jinja2.TemplateError, OSError, TypeError, ValueError, KeyError, AttributeError) as e:
                logger.error("Template processing failed", template=template_name, error=str(e))
                raise SavingFilesError(template_name, e) from e
            logger.verbose("Wrote file", template=template_name, path=str(path))
