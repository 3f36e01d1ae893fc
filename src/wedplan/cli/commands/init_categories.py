"""Initialize default categories."""

import click

from wedplan.domain.category import CategoryService


# Default wedding budget categories
INITIAL_CATEGORIES = [
    "Venue",
    "Catering",
    "Drinks",
    "Cake",
    "Attire",
    "Rings",
    "Photography",
    "Videography",
    "Music",
    "Flowers & Decor",
    "Stationery",
    "Transportation",
    "Accommodation",
    "Ceremony",
    "Beauty",
    "Gifts & Favors",
    "Honeymoon",
    "Other",
]


@click.command("init-categories")
@click.pass_context
def init_categories(ctx):
    """Initialize database with default wedding categories.

    Categories that already exist are left untouched.
    """
    db = ctx.obj["db"]
    service = CategoryService(db)

    created = 0
    skipped = 0
    for name in INITIAL_CATEGORIES:
        if service.get_category_by_name(name) is not None:
            skipped += 1
            continue
        service.create_category(name)
        created += 1

    if created == 0:
        click.echo("All default categories already exist.")
        return
    click.echo(f"Created {created} categories.")
    if skipped:
        click.echo(f"Skipped {skipped} categories that already exist.")


def register_commands(cli):
    """Register init-categories command with main CLI."""
    cli.add_command(init_categories)
