"""Command-line interface for the Terraform exporter."""

import asyncio
from dataclasses import dataclass
from pathlib import Path

import structlog
import typer
from rich.console import Console
from rich.panel import Panel

from . import __version__
from .api.client import EdgeClient
from .config import ExporterConfig, LoggingConfig, load_config
from .constants import DEFAULT_EDGERC_PATH, DEFAULT_EDGERC_SECTION
from .exporters import (
    AppsecExporter,
    BaseExporter,
    CloudletsExporter,
    DNSExporter,
    GTMExporter,
    PropertyExporter,
)
from .observability import LogContext, configure_logging
from .utils.exceptions import ConfigurationError, ExporterError

app = typer.Typer(
    name="tf-export",
    help="Export vendor CDN and security configuration as Terraform files",
    add_completion=False,
)

console = Console()
err_console = Console(stderr=True)
logger = structlog.get_logger(__name__)


@dataclass
class GlobalOptions:
    edgerc: Path
    section: str
    account_key: str | None
    config_file: Path | None
    log_level: str | None = None
    json_logs: bool | None = None


@app.callback()
def main(
    ctx: typer.Context,
    edgerc: Path = typer.Option(Path(DEFAULT_EDGERC_PATH), "--edgerc", help="Credentials file"),
    section: str = typer.Option(DEFAULT_EDGERC_SECTION, "--section", help="Section of the credentials file"),
    account_key: str | None = typer.Option(None, "--accountkey", help="Account switch key"),
    config_file: Path | None = typer.Option(None, "--config", "-c", help="YAML configuration file"),
    log_level: str | None = typer.Option(
        None, "--log-level", help="DEBUG, VERBOSE, INFO, WARNING, ERROR [default: WARNING]"
    ),
    json_logs: bool | None = typer.Option(
        None, "--json-logs/--console-logs", help="Emit logs as JSON or for the console"
    ),
) -> None:
    """Export vendor CDN and security configuration as Terraform files."""
    # Reconfigured once the configuration is loaded
    configure_logging(level=log_level or "WARNING", json_logs=bool(json_logs))
    ctx.obj = GlobalOptions(
        edgerc=edgerc,
        section=section,
        account_key=account_key,
        config_file=config_file,
        log_level=log_level,
        json_logs=json_logs,
    )


def apply_logging(config: LoggingConfig, options: GlobalOptions) -> None:
    """Configure logging from the loaded configuration, command-line flags first."""
    json_logs = options.json_logs
    if json_logs is None:
        json_logs = config.format.lower() == "json"
    configure_logging(
        level=options.log_level or config.level,
        json_logs=json_logs,
        log_file=config.file,
    )


def _work_path_option() -> Path | None:
    return typer.Option(
        None, "--tfworkpath", help="Directory the Terraform files are written to [default: .]"
    )


def _check_work_path(work_path: Path) -> None:
    if not work_path.is_dir():
        err_console.print("Destination work path is not accessible", style="red", markup=False)
        raise typer.Exit(code=1)


async def _export(
    config: ExporterConfig,
    exporter_cls: type[BaseExporter],
    name: str,
    work_path: Path,
) -> None:
    async with EdgeClient(config.edgegrid) as client:
        exporter = exporter_cls(
            client,
            work_path=work_path,
            section=config.export.section,
            page_size=config.export.page_size,
        )
        await exporter.export(name)


def run_export(
    ctx: typer.Context,
    family: str,
    label: str,
    exporter_cls: type[BaseExporter],
    name: str,
    work_path: Path | None,
) -> None:
    """Shared body of the create-* commands."""
    options: GlobalOptions = ctx.obj
    if work_path is not None:
        _check_work_path(work_path)

    with LogContext(command=ctx.command.name, resource=name):
        try:
            config = load_config(
                options.config_file, options.edgerc, options.section, options.account_key
            )
            apply_logging(config.logging, options)
            if work_path is None:
                work_path = config.export.tf_work_path
                _check_work_path(work_path)
            if config.edgegrid is None:
                raise ConfigurationError("No API credentials configured")
            with console.status(f"Exporting {label} {name}"):
                asyncio.run(_export(config, exporter_cls, name, work_path))
        except ExporterError as e:
            logger.debug("Export failed", error_type=type(e).__name__)
            err_console.print(f"Error exporting {family} HCL: {e}", style="red", markup=False)
            raise typer.Exit(code=e.exit_code) from e

    console.print(f"Terraform configuration for {label} '{name}' was saved successfully")


@app.command("create-cloudlets-policy")
def create_cloudlets_policy(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Policy name"),
    tfworkpath: Path | None = _work_path_option(),
) -> None:
    """
    Export a cloudlet policy with its activations and load balancers.

    Examples:
        tf-export create-cloudlets-policy my_policy --tfworkpath ./policy
    """
    run_export(ctx, "policy", "policy", CloudletsExporter, name, tfworkpath)


@app.command("create-appsec")
def create_appsec(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Security configuration name"),
    tfworkpath: Path | None = _work_path_option(),
) -> None:
    """Export a security configuration and its policies."""
    run_export(ctx, "appsec", "security configuration", AppsecExporter, name, tfworkpath)


@app.command("create-zone")
def create_zone(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Zone name"),
    tfworkpath: Path | None = _work_path_option(),
) -> None:
    """Export an Edge DNS zone and its recordsets."""
    run_export(ctx, "zone", "zone", DNSExporter, name, tfworkpath)


@app.command("create-domain")
def create_domain(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="GTM domain name"),
    tfworkpath: Path | None = _work_path_option(),
) -> None:
    """Export a GTM domain with datacenters, properties, resources and maps."""
    run_export(ctx, "domain", "domain", GTMExporter, name, tfworkpath)


@app.command("create-property")
def create_property(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Property name"),
    tfworkpath: Path | None = _work_path_option(),
) -> None:
    """Export a CDN property with its hostnames, rules and activations."""
    run_export(ctx, "property", "property", PropertyExporter, name, tfworkpath)


@app.command()
def version() -> None:
    """Show version information."""
    console.print(
        Panel.fit(
            "[bold]Terraform exporter[/bold]\n\n"
            f"Version: [cyan]{__version__}[/cyan]\n\n"
            "[bold]Commands:[/bold]\n"
            "- create-cloudlets-policy\n"
            "- create-appsec\n"
            "- create-zone\n"
            "- create-domain\n"
            "- create-property",
            title="About",
            border_style="blue",
        )
    )
