"""Quick-entry add command."""

from datetime import datetime

import click

from quickledger.cli.error_handling import parse_date_or_exit
from quickledger.config import load_settings
from quickledger.domain.entry import QuickEntryService
from quickledger.utils.date_parser import now_in


@click.command("add")
@click.argument("text")
@click.option("--user", "user_id", required=True, help="User ID owning the entry")
@click.option(
    "--date",
    help="Entry date (YYYY-MM-DD or relative like 'today', 'yesterday'); defaults to today",
)
@click.pass_context
def add_entry(ctx, text: str, user_id: str, date: str | None):
    """Record a quick entry from a short message.

    Examples:
        quickledger add 午餐120 --user alice
        quickledger add "計程車-250現金" --user alice --date yesterday
    """
    db = ctx.obj["db"]
    settings = load_settings()
    service = QuickEntryService(db, db, db, settings=settings)

    now = now_in(settings.timezone)
    if date:
        day = parse_date_or_exit(ctx, date)
        now = datetime.combine(day, now.timetz())

    response = service.process(text, user_id, now=now)
    if not response.success:
        click.echo(response.message, err=True)
        ctx.exit(1)
    click.echo(response.message)


def register_commands(cli):
    """Register add command with main CLI."""
    cli.add_command(add_entry)
