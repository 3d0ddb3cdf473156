"""Terraform exporter - turn live vendor configuration into Terraform files."""

__version__ = "0.1.0"

from .cli import app  # noqa: E402
from .config import ExporterConfig  # noqa: E402

__all__ = ["app", "ExporterConfig", "__version__"]
