"""Per-family exporters: fetch one remote object and render its Terraform files."""

from .appsec import AppsecExporter
from .base import BaseExporter
from .cloudlets import CloudletsExporter
from .dns import DNSExporter
from .gtm import GTMExporter
from .property import PropertyExporter

__all__ = [
    "AppsecExporter",
    "BaseExporter",
    "CloudletsExporter",
    "DNSExporter",
    "GTMExporter",
    "PropertyExporter",
]
