"""
Core unifetch CLI: dynamically loads commands from plugins/cli.
"""

import importlib
import logging
import pathlib
import pkgutil

import click

from unifetch.data.fetch import FetcherRegistry, register_default_fetchers
from unifetch.settings import LOG_LEVELS, Settings

# Logging configuration
logger = logging.getLogger("unifetch")
handler = logging.StreamHandler()
formatter = logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s")
handler.setFormatter(formatter)
logger.addHandler(handler)

# Load global settings
settings = Settings()
logger.setLevel(settings.log_level)


@click.group()
@click.option(
    "--log-level",
    default=settings.log_level,
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    help="Set logging level",
)
@click.option("--api-url", default=settings.api_url, help="Base URL of the collection endpoints")
@click.pass_context
def main(ctx, log_level, api_url):
    """
    unifetch CLI
    """
    ctx.ensure_object(dict)
    ctx.obj["log_level"] = log_level

    # Update logging level
    logger.setLevel(log_level.upper())

    # One registry per invocation, threaded to the commands
    run_settings = Settings(
        api_url=api_url,
        request_timeout=settings.request_timeout,
        log_level=log_level,
    )
    ctx.obj["settings"] = run_settings
    ctx.obj["registry"] = FetcherRegistry(
        initializer=register_default_fetchers, settings=run_settings
    )


def load_commands():
    """
    Auto-discover and register click commands from src/unifetch/plugins/cli/*.py
    Each plugin module must define a top-level `cli` click.Command.
    """
    plugins_path = pathlib.Path(__file__).parent / "plugins" / "cli"
    package = "unifetch.plugins.cli"
    for _, module_name, _ in pkgutil.iter_modules([str(plugins_path)]):
        full_name = f"{package}.{module_name}"
        try:
            module = importlib.import_module(full_name)
            cmd = getattr(module, "cli", None)
            if isinstance(cmd, click.Command):
                main.add_command(cmd)
        except Exception as e:
            logger.error(f"Failed to load plugin {full_name}: {e}")


# Load all plugin commands
load_commands()

if __name__ == "__main__":
    main()
