"""Command-line interface for Simpl.

Commands:
- render: Render one request path and print the result.
- routes: List configured content sources.
- plugins: List plugins known to the default registry.
"""

from __future__ import annotations

import asyncio
import logging
import sys
from pathlib import Path

import click

from . import __version__
from .config import load_config
from .errors import SimplError
from .registry import default_registry
from .site import SimplSite


@click.group()
@click.version_option(version=__version__, prog_name="simpl")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose: bool):
    """Simpl request-time site renderer."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _project_option(func):
    return click.option(
        "--project",
        type=click.Path(file_okay=False, path_type=Path),
        default=".",
        show_default=True,
        help="Project root containing simpl.yaml",
    )(func)


@cli.command()
@click.argument("path")
@_project_option
def render(path: str, project: Path):
    """Render PATH through the full pipeline and print the body."""
    try:
        config = load_config(project.resolve())
        site = SimplSite(config, default_registry())
    except SimplError as exc:
        raise click.ClickException(exc.message) from None
    response = asyncio.run(site.handle_request(path))
    if isinstance(response.content, bytes):
        sys.stdout.buffer.write(response.content)
        sys.stdout.flush()
    else:
        click.echo(response.content)
    if not response.ok:
        click.echo(click.style(f"Status: {response.status}", fg="red"), err=True)
        raise SystemExit(1)


@cli.command()
@_project_option
def routes(project: Path):
    """List content sources in matching order."""
    try:
        config = load_config(project.resolve())
    except SimplError as exc:
        raise click.ClickException(exc.message) from None
    for source in config.content_sources:
        route = source.route or "(any)"
        click.echo(f"{route:<20} {source.type:<12} {source.path}")
    click.echo(f"default content type: {config.default_content_type}")


@cli.command()
def plugins():
    """List bundled plugin names."""
    for name in default_registry().names():
        click.echo(name)


def main():
    """Entry point for the CLI application."""
    cli()
