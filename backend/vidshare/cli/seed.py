"""``flask seed`` commands: demo channels, videos and engagement for local work."""

from __future__ import annotations

import logging

import click
from flask import current_app
from flask.cli import with_appcontext
from sqlalchemy.exc import SQLAlchemyError

from vidshare.core.extensions import db
from vidshare.seeds import seed_data

log = logging.getLogger(__name__)


def _set_verbosity(verbose: bool) -> None:
    for name in (seed_data.__name__, __name__):
        logging.getLogger(name).setLevel(logging.DEBUG if verbose else logging.INFO)


def _echo_summary(summary: dict[str, dict[str, int]]) -> None:
    click.echo("Seed summary:")
    if not summary:
        click.echo("  (no changes)")
        return
    pad = max(map(len, summary))
    for table in sorted(summary):
        counts = summary[table]
        click.echo(
            f"  {table:<{pad}}  created={counts.get('created', 0):>2}"
            f"  existing={counts.get('existing', 0):>2}"
        )


def _refuse_in_production() -> None:
    if current_app.config.get("ENV_NAME") == "production":
        raise click.UsageError("'flask seed fresh' is disabled in production.")


def _seed(verbose: bool, what: str) -> None:
    try:
        summary = seed_data.run_all(db, verbose=verbose)
    except SQLAlchemyError as exc:
        db.session.rollback()
        raise click.ClickException(f"{what} failed: {exc}") from exc
    _echo_summary(summary)


@click.group("seed")
@click.option("--verbose", is_flag=True, help="Log every seeded row.")
@click.pass_context
def seed_cli(ctx: click.Context, verbose: bool) -> None:
    """Load development fixtures."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    _set_verbosity(verbose)


@seed_cli.command("run")
@click.pass_context
@with_appcontext
def run(ctx: click.Context) -> None:
    """Insert missing fixtures; existing rows are left alone."""
    _seed(bool(ctx.obj.get("verbose", False)), "Seeding")


@seed_cli.command("fresh")
@click.option("--yes", is_flag=True, help="Skip the confirmation prompt.")
@click.pass_context
@with_appcontext
def fresh(ctx: click.Context, yes: bool) -> None:
    """Drop every table, recreate the schema and seed."""
    _refuse_in_production()
    if not yes:
        click.confirm("This will DROP all tables and recreate them. Continue?", abort=True)
    log.info("Recreating database schema")
    db.session.remove()
    db.drop_all()
    db.create_all()
    _seed(bool(ctx.obj.get("verbose", False)), "Fresh seed")
