"""
CLI command: info

Displays unifetch package version, API root and registered fetchers.
"""

import logging
from importlib.metadata import PackageNotFoundError, version

import click

# Configure module-level logger
logger = logging.getLogger("unifetch.cli.info")


@click.command("info")
@click.pass_context
def cli(ctx) -> None:
    """
    Show package metadata and registered fetchers.
    """
    # Retrieve package version, fallback if not installed
    try:
        pkg_version = version("unifetch")
        logger.debug("Retrieved package version: %s", pkg_version)
    except PackageNotFoundError:
        pkg_version = "0.0.0-dev"
        logger.warning(
            "Package 'unifetch' not found; using development version placeholder."
        )

    click.echo(f"unifetch version: {pkg_version}")
    click.echo(f"API url: {ctx.obj['settings'].api_url}")

    registry = ctx.obj["registry"].ensure_initialized()
    click.echo("\nRegistered fetchers:")
    for key, description in registry.get_info().items():
        click.echo(f"  - {key}: {description}")
