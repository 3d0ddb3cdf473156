"""Custom exceptions for the Terraform exporter.

Exception Hierarchy:
-------------------
ExporterError (base)
├── ConfigurationError          # Missing credentials, unreadable config file
├── ResourceNotFoundError       # Name or version absent after full pagination
├── UnsupportedTypeError        # Resource variant outside the supported set
├── FetchError                  # Upstream API failure, wrapped with the phase
├── SavingFilesError            # Template lookup/render/write failure
└── APIError (base for HTTP errors)
    └── AuthenticationError     # HTTP 401/403

Usage Guidelines:
----------------
1. The API client raises APIError/AuthenticationError only.
2. Exporters wrap APIError into FetchError, naming the phase that failed
   (listing, version fetch, detail fetch).
3. ResourceNotFoundError and UnsupportedTypeError propagate unwrapped so
   calling scripts can branch on the exit code.
4. Nothing is retried or recovered mid-pipeline; the CLI prints the error
   and exits with the error's exit_code.

Exit Codes:
----------
1  generic / configuration
3  resource not found
4  unsupported type
5  upstream fetch failure
6  saving files
"""


class ExporterError(Exception):
    """Base exception for all exporter errors."""

    exit_code: int = 1


class ConfigurationError(ExporterError):
    """Raised when configuration or credentials cannot be loaded."""

    pass


class ResourceNotFoundError(ExporterError):
    """Raised when a named resource (or any version of it) does not exist."""

    exit_code = 3

    def __init__(self, resource_type: str, identifier: str | int) -> None:
        """
        Initialize ResourceNotFoundError.

        Args:
            resource_type: Type of resource that wasn't found.
            identifier: Name or ID used to search for the resource.
        """
        super().__init__(f"{resource_type} '{identifier}' does not exist")
        self.resource_type = resource_type
        self.identifier = identifier


class UnsupportedTypeError(ExporterError):
    """Raised when a resource variant is not in the supported set."""

    exit_code = 4

    def __init__(self, resource_type: str, type_name: str) -> None:
        """
        Initialize UnsupportedTypeError.

        Args:
            resource_type: Kind of resource being checked (e.g. 'cloudlet').
            type_name: The unsupported type code returned by the API.
        """
        super().__init__(f"{resource_type} type not supported: {type_name}")
        self.resource_type = resource_type
        self.type_name = type_name


class FetchError(ExporterError):
    """Raised when an upstream API call fails during a named export phase."""

    exit_code = 5

    def __init__(self, phase: str, cause: Exception | str) -> None:
        """
        Initialize FetchError.

        Args:
            phase: Export phase that failed (e.g. 'fetching policy').
            cause: Underlying error or message.
        """
        super().__init__(f"unable to complete {phase}: {cause}")
        self.phase = phase
        self.cause = cause


class SavingFilesError(ExporterError):
    """Raised when rendering or writing a Terraform file fails.

    Files written before the failing template are left on disk.
    """

    exit_code = 6

    def __init__(self, template: str, cause: Exception | str) -> None:
        """
        Initialize SavingFilesError.

        Args:
            template: Template name being processed when the failure occurred.
            cause: Underlying error or message.
        """
        super().__init__(f"saving terraform project files ({template}): {cause}")
        self.template = template
        self.cause = cause


class APIError(ExporterError):
    """Base exception for vendor API errors."""

    exit_code = 5

    def __init__(self, message: str, status_code: int | None = None) -> None:
        """
        Initialize APIError.

        Args:
            message: Error message.
            status_code: Optional HTTP status code.
        """
        super().__init__(message)
        self.status_code = status_code


class AuthenticationError(APIError):
    """Raised when the API rejects the request signature or permissions."""

    def __init__(self, message: str = "Authentication failed", status_code: int = 401) -> None:
        """
        Initialize AuthenticationError.

        Args:
            message: Error message (default: "Authentication failed").
            status_code: HTTP status code (401 or 403).
        """
        super().__init__(message, status_code=status_code)
