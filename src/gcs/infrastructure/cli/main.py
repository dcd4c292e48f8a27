import click

from gcs.infrastructure.bootstrap import LOG_LEVEL_ENV
from gcs.infrastructure.cli.gift_commands import (
    gift_add,
    gift_delete,
    gift_list,
    gift_search,
    gift_show,
    gift_update,
)
from gcs.infrastructure.cli.suggestion_commands import (
    suggestion_add,
    suggestion_delete,
    suggestion_list,
    suggestion_search,
    suggestion_show,
    suggestion_update,
)
from gcs.infrastructure.log_config import configure_logging


@click.group()
@click.option(
    "--log-level",
    envvar=LOG_LEVEL_ENV,
    default="WARNING",
    show_default=True,
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
)
def cli(log_level: str) -> None:
    """GCS: gift catalog service."""
    configure_logging(log_level)


@cli.group()
def suggestion() -> None:
    """Manage gift suggestions."""


@cli.group()
def gift() -> None:
    """Manage concrete gifts."""


# Register subcommands
suggestion.add_command(suggestion_add)
suggestion.add_command(suggestion_delete)
suggestion.add_command(suggestion_list)
suggestion.add_command(suggestion_search)
suggestion.add_command(suggestion_show)
suggestion.add_command(suggestion_update)
gift.add_command(gift_add)
gift.add_command(gift_delete)
gift.add_command(gift_list)
gift.add_command(gift_search)
gift.add_command(gift_show)
gift.add_command(gift_update)
