"""Configuration management for the Terraform exporter."""

import configparser
import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

import yaml

from .constants import DEFAULT_EDGERC_PATH, DEFAULT_EDGERC_SECTION, DEFAULT_PAGE_SIZE
from .utils.exceptions import ConfigurationError

# Keys every credential source must provide
_REQUIRED_CREDENTIALS = ("host", "client_token", "client_secret", "access_token")


@dataclass
class EdgeGridConfig:
    """API connection and signing credentials."""

    host: str
    client_token: str
    client_secret: str
    access_token: str
    account_key: str | None = None
    max_body: int = 131072  # Bytes of a POST body included in the content hash
    timeout: int = 60
    verify_ssl: bool = True


@dataclass
class ExportConfig:
    """Export behavior shared by all commands."""

    page_size: int = DEFAULT_PAGE_SIZE
    tf_work_path: Path = Path(".")
    section: str = DEFAULT_EDGERC_SECTION


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "WARNING"
    format: str = "console"
    file: Path | None = None


@dataclass
class ExporterConfig:
    """
    Complete configuration for the Terraform exporter.

    This combines all configuration sections.
    """

    edgegrid: EdgeGridConfig | None = None
    export: ExportConfig = field(default_factory=ExportConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_file(cls, config_path: Path) -> "ExporterConfig":
        """
        Load configuration from YAML file.

        Args:
            config_path: Path to YAML config file

        Returns:
            ExporterConfig instance

        Raises:
            ConfigurationError: If the file is not valid YAML or not a mapping
        """
        try:
            with open(config_path) as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(
                f"Invalid YAML in configuration file {config_path}: {e}"
            ) from e

        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Invalid configuration file structure in {config_path}: "
                f"expected dictionary, got {type(data).__name__}"
            )

        edgegrid_data = data.get("edgegrid")
        edgegrid = None
        if edgegrid_data:
            _check_credentials(edgegrid_data, str(config_path))
            edgegrid = _section(EdgeGridConfig, edgegrid_data, "edgegrid", config_path)

        export_data = dict(data.get("export") or {})
        if export_data.get("tf_work_path"):
            export_data["tf_work_path"] = Path(export_data["tf_work_path"])
        export = _section(ExportConfig, export_data, "export", config_path)

        logging_data = dict(data.get("logging") or {})
        # Convert file path string to Path if present
        if logging_data.get("file"):
            logging_data["file"] = Path(logging_data["file"])
        logging = _section(LoggingConfig, logging_data, "logging", config_path)

        return cls(edgegrid=edgegrid, export=export, logging=logging)

    def to_file(self, config_path: Path) -> None:
        """
        Save configuration to YAML file.

        Args:
            config_path: Path to save config file
        """
        data = {
            "edgegrid": self.edgegrid.__dict__ if self.edgegrid else None,
            "export": {
                k: str(v) if isinstance(v, Path) else v for k, v in self.export.__dict__.items()
            },
            "logging": {
                k: str(v) if isinstance(v, Path) else v
                for k, v in self.logging.__dict__.items()
                if v is not None
            },
        }

        config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(config_path, "w") as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False)

    @classmethod
    def from_edgerc(
        cls,
        edgerc_path: Path | str = DEFAULT_EDGERC_PATH,
        section: str = DEFAULT_EDGERC_SECTION,
        account_key: str | None = None,
    ) -> "ExporterConfig":
        """
        Create configuration from an .edgerc credentials file.

        Args:
            edgerc_path: Path to the INI-style credentials file
            section: Section holding the credentials
            account_key: Optional account switch key

        Returns:
            ExporterConfig instance

        Raises:
            ConfigurationError: If the file, section or required keys are missing
        """
        path = Path(edgerc_path).expanduser()
        parser = configparser.ConfigParser()
        try:
            read = parser.read(path)
        except configparser.Error as e:
            raise ConfigurationError(f"Unable to parse {path}: {e}") from e

        if not read:
            raise ConfigurationError(f"Credentials file not found: {path}")
        if not parser.has_section(section):
            raise ConfigurationError(f"Section '{section}' not found in {path}")

        values = dict(parser.items(section))
        _check_credentials(values, f"{path} [{section}]")

        edgegrid = EdgeGridConfig(
            host=values["host"],
            client_token=values["client_token"],
            client_secret=values["client_secret"],
            access_token=values["access_token"],
            account_key=account_key or values.get("account_key"),
            max_body=int(values.get("max-body", values.get("max_body", 131072))),
        )
        return cls(edgegrid=edgegrid, export=ExportConfig(section=section))

    @classmethod
    def from_env(cls) -> "ExporterConfig":
        """
        Create configuration from environment variables.

        Environment variables:
            AKAMAI_HOST: API host name
            AKAMAI_CLIENT_TOKEN: Client token
            AKAMAI_CLIENT_SECRET: Client secret
            AKAMAI_ACCESS_TOKEN: Access token
            AKAMAI_ACCOUNT_KEY: Account switch key (optional)
            LOG_LEVEL: Logging level (default: WARNING)
            LOG_FORMAT: console or json (default: console)

        Returns:
            ExporterConfig instance

        Raises:
            ConfigurationError: If AKAMAI_HOST is set but credentials are missing
        """
        edgegrid = None
        host = os.getenv("AKAMAI_HOST")
        if host:
            values = {
                "host": host,
                "client_token": os.environ.get("AKAMAI_CLIENT_TOKEN", ""),
                "client_secret": os.environ.get("AKAMAI_CLIENT_SECRET", ""),
                "access_token": os.environ.get("AKAMAI_ACCESS_TOKEN", ""),
            }
            _check_credentials(values, "environment")
            edgegrid = EdgeGridConfig(
                **values,
                account_key=os.environ.get("AKAMAI_ACCOUNT_KEY") or None,
            )

        logging_config = LoggingConfig(
            level=os.environ.get("LOG_LEVEL", "WARNING"),
            format=os.environ.get("LOG_FORMAT", "console"),
        )

        return cls(edgegrid=edgegrid, export=ExportConfig(), logging=logging_config)


def _check_credentials(values: dict, source: str) -> None:
    missing = [key for key in _REQUIRED_CREDENTIALS if not values.get(key)]
    if missing:
        raise ConfigurationError(
            f"Missing credentials in {source}: {', '.join(missing)}"
        )


def _section(cls: type, values: dict, name: str, source: Path) -> Any:
    """Build a config section, rejecting keys the dataclass does not declare."""
    known = {f.name for f in fields(cls)}
    unknown = [key for key in values if key not in known]
    if unknown:
        raise ConfigurationError(
            f"Unknown key(s) in '{name}' section of {source}: {', '.join(map(str, unknown))}"
        )
    return cls(**values)


def load_config(
    config_file: Path | None = None,
    edgerc: Path | str | None = None,
    section: str = DEFAULT_EDGERC_SECTION,
    account_key: str | None = None,
) -> ExporterConfig:
    """
    Load configuration from a YAML file, an .edgerc file or the environment.

    The YAML file wins when given. Otherwise environment credentials are used
    when AKAMAI_HOST is set, falling back to the .edgerc file.

    Args:
        config_file: Optional path to YAML config file
        edgerc: Optional path to the .edgerc file
        section: .edgerc section name
        account_key: Optional account switch key overriding file values

    Returns:
        ExporterConfig instance

    Raises:
        ConfigurationError: If config_file is given but doesn't exist, or no
            credential source is usable
    """
    if config_file:
        if not config_file.exists():
            raise ConfigurationError(f"Configuration file not found: {config_file}")
        config = ExporterConfig.from_file(config_file)
    else:
        config = ExporterConfig.from_env()
        if config.edgegrid is None:
            edgerc_config = ExporterConfig.from_edgerc(
                edgerc or DEFAULT_EDGERC_PATH, section, account_key
            )
            config.edgegrid = edgerc_config.edgegrid
        config.export.section = section

    if config.edgegrid and account_key:
        config.edgegrid.account_key = account_key
    return config
