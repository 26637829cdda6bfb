"""CLI commands for the status page."""

import logging
import sys
from pathlib import Path
from typing import NoReturn

import click
import structlog

from statuspage.config import (
    ConfigLoader,
    ConfigValidationError,
    PageFileConfig,
    PageProvider,
    build_page_provider,
    format_validation_error,
)
from statuspage.config.constants import COMPONENT_CLI
from statuspage.observability import configure_logging
from statuspage.renderer import write_status_page


logger = structlog.get_logger()


def _setup_logging(json_logs: bool, verbose: bool) -> None:
    log_level = logging.DEBUG if verbose else logging.INFO
    configure_logging(level=log_level, json_format=json_logs)


def _report_validation_error(error: ConfigValidationError) -> NoReturn:
    """Print validation errors with hints and exit."""
    click.echo(f"Configuration validation failed: {error.file_path}", err=True)
    for item in error.errors:
        formatted = format_validation_error(
            location=item["loc"],
            message=item["msg"],
            error_type=item.get("type", "unknown"),
            include_hint=True,
        )
        click.echo(f"  - {formatted}", err=True)
    sys.exit(1)


def _load(config_path: Path) -> PageFileConfig:
    try:
        return ConfigLoader().load(config_path)
    except ConfigValidationError as e:
        _report_validation_error(e)


def _provider(page_file: PageFileConfig) -> PageProvider:
    try:
        return build_page_provider(page_file)
    except ConfigValidationError as e:
        _report_validation_error(e)


json_logs_option = click.option(
    "--json-logs/--no-json-logs",
    default=True,
    help="Use JSON format for logs (default: true).",
)
verbose_option = click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose logging.",
)
config_option = click.option(
    "--config",
    "config_path",
    required=True,
    type=click.Path(path_type=Path),
    help="Path to the page YAML file.",
)


@click.group()
@click.version_option(version="0.1.0")
def cli() -> None:
    """Status page CLI."""


@cli.command()
@config_option
@click.option(
    "--out",
    "output_path",
    required=True,
    type=click.Path(dir_okay=False, path_type=Path),
    help="Output HTML file.",
)
@json_logs_option
@verbose_option
def render(
    config_path: Path,
    output_path: Path,
    json_logs: bool,
    verbose: bool,
) -> None:
    """Render the status page once to a static HTML file."""
    _setup_logging(json_logs, verbose)
    log = logger.bind(component=COMPONENT_CLI, command="render")

    page_file = _load(config_path)
    provider = _provider(page_file)
    page = provider()

    file_info = write_status_page(page, output_path)
    log.info(
        "render_complete",
        path=file_info.absolute_path,
        current_status=page.current_status.value,
    )
    click.echo(f"Rendered {file_info.path} ({file_info.bytes_written} bytes)")


@cli.command()
@config_option
@click.option("--host", default="127.0.0.1", show_default=True, help="Bind address.")
@click.option("--port", default=8000, show_default=True, type=int, help="Bind port.")
@json_logs_option
@verbose_option
def serve(
    config_path: Path,
    host: str,
    port: int,
    json_logs: bool,
    verbose: bool,
) -> None:
    """Serve the status page, regenerating it on every request."""
    from statuspage.server import create_server

    _setup_logging(json_logs, verbose)
    log = logger.bind(component=COMPONENT_CLI, command="serve")

    provider = _provider(_load(config_path))
    server = create_server(provider, host=host, port=port)
    click.echo(f"Serving status page on http://{host}:{server.server_address[1]}/")
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        log.info("server_stopped")
    finally:
        server.server_close()


@cli.command()
@config_option
def validate(config_path: Path) -> None:
    """Validate a page file without rendering it."""
    page_file = _load(config_path)

    click.echo("Configuration is valid!")
    if page_file.gridfox is not None:
        click.echo(f"  Source: gridfox ({page_file.gridfox.environments_table})")
        return

    page = page_file.to_page_config()
    services = sum(len(env.services) for env in page.environments)
    click.echo(f"  Environments: {len(page.environments)}")
    click.echo(f"  Services: {services}")
    click.echo(f"  Current status: {page.current_status.value}")


if __name__ == "__main__":
    cli()
