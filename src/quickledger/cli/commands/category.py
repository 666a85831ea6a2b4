"""Category directory commands."""

import click

from quickledger.cli.error_handling import handle_domain_error


@click.group()
def category_group():
    """Manage a user's category directory."""
    pass


@category_group.command("list")
@click.option("--user", "user_id", required=True, help="User ID")
@click.pass_context
def list_categories(ctx, user_id: str):
    """List a user's categories grouped by major code."""
    db = ctx.obj["db"]
    categories = db.get_categories(user_id)
    if not categories:
        click.echo("No categories found. Run 'init-categories' to create default categories.")
        return

    click.echo("\nCategories:")
    current_major = None
    for cat in categories:
        if cat.major_code != current_major:
            current_major = cat.major_code
            click.echo(f"{cat.major_code} {cat.major_name}")
        synonyms = f" [{', '.join(sorted(cat.synonyms))}]" if cat.synonyms else ""
        click.echo(f"  {cat.code} {cat.sub_name}{synonyms}")


@category_group.command("create")
@click.option("--user", "user_id", required=True, help="User ID")
@click.option("--major-code", required=True, help="Major category code (e.g., 101)")
@click.option("--major-name", required=True, help="Major category name (e.g., 餐飲)")
@click.option("--sub-code", required=True, help="Sub category code (e.g., 01)")
@click.option("--sub-name", required=True, help="Sub category name (e.g., 午餐)")
@click.option("--synonyms", help="Comma-separated synonyms (e.g., 'lunch,中餐')")
@click.pass_context
def create_category(
    ctx,
    user_id: str,
    major_code: str,
    major_name: str,
    sub_code: str,
    sub_name: str,
    synonyms: str | None,
):
    """Create a category for a user."""
    db = ctx.obj["db"]
    synonym_list = [s.strip() for s in (synonyms or "").split(",") if s.strip()]

    try:
        category_id = db.create_category(
            user_id=user_id,
            major_code=major_code,
            major_name=major_name,
            sub_code=sub_code,
            sub_name=sub_name,
            synonyms=synonym_list,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created category '{sub_name}' ({major_code}-{sub_code}, ID: {category_id})")


def register_commands(cli):
    """Register category commands with main CLI."""
    cli.add_command(category_group, name="category")
