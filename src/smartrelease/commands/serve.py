"""Serve command implementation."""

from pathlib import Path

import click
from rich.console import Console

from smartrelease.core.config import SmartReleaseConfig
from smartrelease.core.log import configure_logging
from smartrelease.server import SmartReleaseServer

console = Console()


@click.command()
@click.option("--host", default=None, help="Address to bind (default: HOST or 0.0.0.0)")
@click.option("--port", type=int, default=None, help="Port to bind (default: PORT or 8080)")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="YAML config file; environment variables take precedence",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def serve(host: str | None, port: int | None, config_path: Path | None, verbose: bool):
    """Run the redirect server."""
    try:
        config = SmartReleaseConfig.load(config_path)
    except (OSError, ValueError) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise SystemExit(1)

    config = SmartReleaseConfig.from_mapping({"host": host, "port": port}, base=config)

    configure_logging(verbose)
    SmartReleaseServer(config).run()
