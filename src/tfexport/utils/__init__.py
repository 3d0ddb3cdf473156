"""Utility functions and exceptions."""

from .exceptions import (
    APIError,
    AuthenticationError,
    ConfigurationError,
    ExporterError,
    FetchError,
    ResourceNotFoundError,
    SavingFilesError,
    UnsupportedTypeError,
)

__all__ = [
    "ExporterError",
    "ConfigurationError",
    "ResourceNotFoundError",
    "UnsupportedTypeError",
    "FetchError",
    "SavingFilesError",
    "APIError",
    "AuthenticationError",
]
