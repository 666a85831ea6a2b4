"""Entry viewing command."""

import click

from quickledger.cli.error_handling import parse_date_or_exit


@click.command("entries")
@click.option("--user", "user_id", required=True, help="User ID")
@click.option("--date", help="Only entries for this date (YYYY-MM-DD or 'today')")
@click.pass_context
def list_entries(ctx, user_id: str, date: str | None):
    """List recorded entries for a user."""
    db = ctx.obj["db"]

    day = parse_date_or_exit(ctx, date) if date else None
    rows = db.list_entries(user_id, day=day)
    if not rows:
        click.echo("No entries found.")
        return

    click.echo(f"\nFound {len(rows)} entr{'y' if len(rows) == 1 else 'ies'}:")
    click.echo(f"{'ID':<16} {'Amount':>10} {'Type':<8} {'Category':<10} {'Payment':<8} Remark")
    click.echo("-" * 72)
    total = 0
    for row in rows:
        signed = row["amount"] if row["direction"] == "income" else -row["amount"]
        total += signed
        click.echo(
            f"{row['entry_id']:<16} {signed:>10,} {row['direction']:<8} "
            f"{row['category']:<10} {row['payment_method']:<8} {row['remark']}"
        )
    click.echo("-" * 72)
    click.echo(f"{'Net':<16} {total:>10,}")


def register_commands(cli):
    """Register entries command with main CLI."""
    cli.add_command(list_entries)
