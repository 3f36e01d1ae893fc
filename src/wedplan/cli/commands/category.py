"""Category management commands."""

import click

from wedplan.cli.error_handling import handle_domain_error
from wedplan.domain.category import CategoryService


@click.group()
def category_group():
    """Manage categories."""
    pass


@category_group.command("list")
@click.pass_context
def list_categories(ctx):
    """List all categories with the number of costs in each."""
    db = ctx.obj["db"]
    service = CategoryService(db)

    categories = service.list_categories()
    if not categories:
        click.echo("No categories found. Run 'init-categories' to create default categories.")
        return

    click.echo("\nCategories:")
    for cat in categories:
        count = db.count_costs_for_category(cat.id)
        click.echo(f"ID: {cat.id:3d} | {cat.name:24s} | {count} cost{'s' if count != 1 else ''}")


@category_group.command("create")
@click.argument("name")
@click.pass_context
def create_category(ctx, name: str):
    """Create a new category."""
    service = CategoryService(ctx.obj["db"])

    try:
        category_id = service.create_category(name=name)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created category '{name.strip()}' (ID: {category_id})")


@category_group.command("rename")
@click.argument("category", metavar="CATEGORY")
@click.argument("new_name", metavar="NEW_NAME")
@click.pass_context
def rename_category(ctx, category: str, new_name: str):
    """Rename a category.

    CATEGORY can be a category name or ID.
    """
    service = CategoryService(ctx.obj["db"])

    try:
        category_id = service.resolve_category(category)
        renamed = service.rename_category(category_id, new_name)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Renamed category to '{renamed.name}'")


@category_group.command("delete")
@click.argument("category", metavar="CATEGORY")
@click.pass_context
def delete_category(ctx, category: str):
    """Delete a category.

    CATEGORY can be a category name or ID. The category can only be
    deleted if no cost uses it.
    """
    service = CategoryService(ctx.obj["db"])

    try:
        category_id = service.resolve_category(category)
        service.delete_category(category_id)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted category '{category}'")


def register_commands(cli):
    """Register category commands with main CLI."""
    cli.add_command(category_group, name="category")
