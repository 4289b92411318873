"""
CLI command: fetch

Fetches one or all registered collections and prints their records.
"""

import asyncio
import json
import logging

import click

from unifetch.data.fetch import FetchError, FetchManager

# Configure module-level logger
logger = logging.getLogger("unifetch.cli.fetch")


@click.command("fetch")
@click.argument("key", type=click.STRING, required=False)
@click.option("--json", "as_json", is_flag=True, help="Print records as JSON")
@click.pass_context
def cli(ctx, key: str, as_json: bool) -> None:
    """
    Fetch the collection registered under KEY, or every collection with 'all'.

    If KEY is not specified, lists the registered keys.
    """
    registry = ctx.obj["registry"].ensure_initialized()
    available = registry.keys()

    # If no key specified, list registered keys
    if not key:
        click.echo("Registered fetchers:")
        for k in available:
            click.echo(f"  - {k}")
        click.echo("\nUsage:")
        click.echo("  unifetch fetch <key>    # Fetch one collection")
        click.echo("  unifetch fetch all      # Fetch every collection")
        return

    # Validate input
    if key.lower() != "all" and key not in available:
        options = available + ["all"]
        logger.error("Unknown fetcher key '%s'; available: %s", key, ", ".join(options))
        click.echo(f"Error: Unknown fetcher key '{key}'.\nAvailable: {', '.join(options)}")
        raise click.Abort()

    keys = available if key.lower() == "all" else [key]
    logger.info("Fetching %s...", ", ".join(keys))

    results = asyncio.run(FetchManager(registry).fetch_all(keys))

    failed = 0
    payload = {}
    for k, outcome in results.items():
        if isinstance(outcome, FetchError):
            failed += 1
            click.echo(f"✗ {k}: [{outcome.kind.value}] {outcome}", err=True)
            continue

        records = [r.model_dump(by_alias=True) for r in outcome]
        if as_json:
            payload[k] = records
        else:
            click.echo(f"✓ {k}: {len(records)} records")
            for record in records:
                fields = ", ".join(f"{name}={value}" for name, value in record.items())
                click.echo(f"    {fields}")

    if as_json:
        click.echo(json.dumps(payload, indent=2))

    if failed:
        click.echo(f"\nCompleted: {len(results) - failed}/{len(results)} collections fetched")
        raise click.Abort()
