"""CLI interface for Sohodemo.

Command-line tool for serving the component demo site.
"""

import logging
import sys
from pathlib import Path

import click
from yarl import URL

from sohodemo.config import Config
from sohodemo.core.content import ContentStore
from sohodemo.core.options import build_request_options, default_options
from sohodemo.core.resolver import DEFAULT_EXCLUDES, Listing, PathResolver, Render


@click.group()
def cli() -> None:
    """Sohodemo - demo pages and mock APIs for the SoHo XI components."""


def _load_config(config_path: Path | None) -> Config:
    """Load configuration or exit with a readable error."""
    try:
        return Config.load(config_path)
    except (FileNotFoundError, ValueError) as e:
        click.echo(click.style(f"Error: {e}", fg="red"), err=True)
        sys.exit(1)


@cli.command()
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Path to configuration file (default: auto-discover sohodemo.toml)",
)
@click.option(
    "--views-dir",
    type=click.Path(exists=True, path_type=Path, file_okay=False),
    default=None,
    help="Page template directory (overrides config)",
)
@click.option(
    "--public-dir",
    type=click.Path(path_type=Path, file_okay=False),
    default=None,
    help="Static asset directory (overrides config)",
)
@click.option(
    "--data-dir",
    type=click.Path(path_type=Path, file_okay=False),
    default=None,
    help="JSON fixture directory (overrides config)",
)
@click.option(
    "--host",
    default=None,
    help="Host to bind to (overrides config)",
)
@click.option(
    "--port",
    "-p",
    type=int,
    default=None,
    help="Port to bind to (overrides config)",
)
@click.option(
    "--basepath",
    envvar="BASEPATH",
    default=None,
    help="URL prefix the site is mounted under (overrides config)",
)
@click.option(
    "--live-reload/--no-live-reload",
    default=None,
    help="Enable/disable live reload (overrides config, default: enabled)",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output (debug logging, tracebacks in error pages)",
)
def serve(
    config_path: Path | None,
    views_dir: Path | None,
    public_dir: Path | None,
    data_dir: Path | None,
    host: str | None,
    port: int | None,
    basepath: str | None,
    live_reload: bool | None,
    verbose: bool,
) -> None:
    """Start the demo server."""
    from sohodemo.server import run_server

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = _load_config(config_path).with_overrides(
        host=host,
        port=port,
        basepath=basepath,
        views_dir=views_dir,
        public_dir=public_dir,
        data_dir=data_dir,
        live_reload_enabled=live_reload,
    )

    click.echo(f"Starting server on {config.server.host}:{config.server.port}")
    click.echo(f"Views directory: {config.views.views_dir}")
    click.echo(f"Public directory: {config.views.public_dir}")
    click.echo(f"Fixture directory: {config.api.data_dir}")
    if config.server.basepath != "/":
        click.echo(f"Base path: {config.server.basepath}")
    if config.live_reload.enabled:
        click.echo("Live reload: enabled")
    else:
        click.echo("Live reload: disabled")

    run_server(config, verbose=verbose)


@cli.command()
@click.argument("path")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Path to configuration file (default: auto-discover sohodemo.toml)",
)
@click.option(
    "--views-dir",
    type=click.Path(exists=True, path_type=Path, file_okay=False),
    default=None,
    help="Page template directory (overrides config)",
)
def resolve(path: str, config_path: Path | None, views_dir: Path | None) -> None:
    """Show how a request PATH would be resolved."""
    config = _load_config(config_path).with_overrides(views_dir=views_dir)
    resolver = PathResolver(
        ContentStore(config.views.views_dir),
        basepath=config.server.basepath,
        excludes=(*DEFAULT_EXCLUDES, *config.views.exclude),
        sort_listings=config.views.sort_listings,
    )
    defaults = default_options(
        basepath=config.server.basepath,
        live_reload=config.live_reload.enabled,
    )
    # Query parameters feed the options the same way request.query does
    options = build_request_options(defaults, URL(path).query)

    resolution = resolver.resolve(path, options)

    if isinstance(resolution, Render):
        click.echo(f"Render: {resolution.key}")
        click.echo(f"Layout: {resolution.options.get('layout') or '(none)'}")
        click.echo(f"Subtitle: {resolution.options.get('subtitle') or '(none)'}")
        return

    if isinstance(resolution, Listing):
        _print_listing(resolution)
        return

    click.echo(click.style(f"Not found: {resolution.key}", fg="yellow"))
    if resolution.fallback is not None:
        _print_listing(resolution.fallback)
    sys.exit(1)


def _print_listing(listing: Listing) -> None:
    """Print a directory listing.

    Args:
        listing: Listing to print
    """
    click.echo(f"Listing: {listing.key}/")
    for entry in listing.entries:
        marker = "d" if entry.is_directory else "-"
        click.echo(f"  {marker} {entry.name} -> {entry.href}")


if __name__ == "__main__":
    cli()
