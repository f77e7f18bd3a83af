"""Seed CLI commands: apply and check seed plans."""

from pathlib import Path

import click
from sqlalchemy.exc import NoSuchTableError, SQLAlchemyError

from findforge.config import Settings, create_engine_from_settings
from findforge.errors import FindForgeError, SeedPlanError
from findforge.seeds import apply_seed_plan, load_seed_plan


def _load_or_exit(path: Path):
    try:
        return load_seed_plan(path)
    except SeedPlanError as e:
        click.echo(click.style(f"Error: {e}", fg="red"), err=True)
        raise SystemExit(1)


@click.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--database-url",
    default=None,
    help="Database URL (defaults to FINDFORGE_DATABASE_URL or DATABASE_URL).",
)
@click.pass_obj
def seed(settings: Settings | None, path: Path, database_url: str | None):
    """Find or create every record of a seed plan."""
    settings = settings or Settings.from_env()
    if database_url:
        settings.database_url = database_url

    plan = _load_or_exit(path)
    engine = create_engine_from_settings(settings)
    try:
        report = apply_seed_plan(plan, engine)
    except NoSuchTableError as e:
        click.echo(click.style(f"Error: table '{e}' does not exist", fg="red"), err=True)
        raise SystemExit(1)
    except (SQLAlchemyError, FindForgeError) as e:
        click.echo(click.style(f"Error: {e}", fg="red"), err=True)
        raise SystemExit(1)
    finally:
        engine.dispose()

    for line in report.summary_lines():
        click.echo(f"  {line}")
    click.echo(
        click.style(
            f"Seeded {len(plan.records)} record(s): "
            f"{report.created} created, {report.found} found.",
            fg="green",
        )
    )


@click.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def check(path: Path):
    """Validate a seed plan without touching the database."""
    plan = _load_or_exit(path)
    for key, model in sorted(plan.models.items()):
        count = sum(1 for record in plan.records if record.model == key)
        click.echo(f"  ✓ {key} (table: {model.table}, find_by: {', '.join(model.find_by)}, {count} record(s))")
    click.echo(click.style("Seed plan is valid.", fg="green", bold=True))
