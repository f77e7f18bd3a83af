"""findforge CLI entry point."""

import click

from findforge.config import Settings, configure_logging


@click.group()
@click.option(
    "--log-level",
    default=None,
    help="Log level (defaults to FINDFORGE_LOG_LEVEL or WARNING).",
)
@click.pass_context
def cli(ctx: click.Context, log_level: str | None):
    """Find-or-create seeding."""
    settings = Settings.from_env()
    if log_level:
        settings.log_level = log_level.upper()
    try:
        configure_logging(settings.log_level)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--log-level") from e
    ctx.obj = settings


# Register subcommands
from findforge.cli.seed_cmd import check, seed  # noqa: E402

cli.add_command(seed)
cli.add_command(check)
