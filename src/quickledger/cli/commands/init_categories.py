"""Initialize a default category directory."""

import click

# (major_code, major_name, sub_code, sub_name, synonyms)
INITIAL_CATEGORIES = [
    ("101", "餐飲", "01", "早餐", ["早點"]),
    ("101", "餐飲", "02", "午餐", ["中餐", "lunch"]),
    ("101", "餐飲", "03", "晚餐", ["晚飯", "dinner"]),
    ("101", "餐飲", "04", "咖啡", ["拿鐵", "coffee"]),
    ("101", "餐飲", "05", "飲料", ["手搖", "奶茶"]),
    ("102", "交通", "01", "計程車", ["小黃", "taxi", "Uber"]),
    ("102", "交通", "02", "捷運", ["MRT", "地鐵"]),
    ("102", "交通", "03", "加油", ["油錢"]),
    ("102", "交通", "04", "停車", ["停車費"]),
    ("103", "居家", "01", "房租", ["租金"]),
    ("103", "居家", "02", "水電", ["電費", "水費"]),
    ("103", "居家", "03", "網路", ["電信", "手機費"]),
    ("104", "購物", "01", "日用品", ["超市", "全聯"]),
    ("104", "購物", "02", "服飾", ["衣服"]),
    ("105", "娛樂", "01", "電影", ["movie"]),
    ("106", "醫療", "01", "看診", ["掛號", "醫院"]),
    ("801", "薪資", "01", "薪水", ["薪資", "salary"]),
    ("801", "薪資", "02", "獎金", ["年終", "bonus"]),
    ("901", "其他收入", "01", "利息", ["股息"]),
]


@click.command("init-categories")
@click.option("--user", "user_id", required=True, help="User ID to seed")
@click.option("--force", is_flag=True, help="Add missing defaults even if categories exist")
@click.pass_context
def init_categories(ctx, user_id: str, force: bool):
    """Initialize a user's directory with default categories."""
    db = ctx.obj["db"]

    # Check if categories already exist
    if db.count_categories(user_id) and not force:
        click.echo("Categories already exist. Use --force to add missing defaults.")
        return

    click.echo("Creating default categories...")

    created = 0
    errors = 0
    for major_code, major_name, sub_code, sub_name, synonyms in INITIAL_CATEGORIES:
        try:
            db.create_category(
                user_id=user_id,
                major_code=major_code,
                major_name=major_name,
                sub_code=sub_code,
                sub_name=sub_name,
                synonyms=synonyms,
            )
            created += 1
        except ValueError as e:
            click.echo(f"Warning: Could not create category '{sub_name}': {e}", err=True)
            errors += 1

    if errors == 0:
        click.echo(f"Successfully created {created} categories.")
    else:
        click.echo(f"Created {created} categories with {errors} errors.")


def register_commands(cli):
    """Register init-categories command with main CLI."""
    cli.add_command(init_categories)
