"""Vendor management API: signing, endpoints, client and response models."""

from .auth import EdgeGridAuth
from .client import EdgeClient
from .endpoints import Endpoints

__all__ = ["EdgeClient", "EdgeGridAuth", "Endpoints"]
