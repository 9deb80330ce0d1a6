"""Category management commands."""

import click
from spendtrack.cli.error_handling import handle_domain_error
from spendtrack.domain.category import CategoryService
from spendtrack.domain.entities import Category
from spendtrack.domain.errors import DomainError


def print_categories(categories: list[Category]) -> None:
    click.echo("-" * 60)
    for cat in categories:
        click.echo(f"{cat.code:<15} {cat.description}")


@click.group()
def category_group():
    """Manage categories."""
    pass


@category_group.command("create")
@click.argument("code")
@click.argument("description")
@click.pass_context
def create_category(ctx, code: str, description: str):
    """Create a new category.

    Examples:
        spendtrack category create FOOD "Food and drinks"
    """
    service = CategoryService(ctx.obj["gateway"])
    try:
        category = service.create({"code": code, "description": description})
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Created category '{category.code}' ({category.description})")


@category_group.command("list")
@click.option("--search", help="Only show categories whose description contains this text")
@click.pass_context
def list_categories(ctx, search: str | None):
    """List categories ordered by code."""
    service = CategoryService(ctx.obj["gateway"])
    try:
        categories = service.search(search) if search is not None else service.find_all()
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    if not categories:
        click.echo("No categories found.")
        return

    click.echo("\nCategories:")
    print_categories(categories)


@category_group.command("show")
@click.argument("code")
@click.pass_context
def show_category(ctx, code: str):
    """Show a category and how many expense entries use it."""
    service = CategoryService(ctx.obj["gateway"])
    try:
        stats = service.get_stats(code)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    category = stats.entity
    click.echo(f"Category: {category.code}")
    click.echo(f"  Description: {category.description}")
    click.echo(f"  Expense entries: {stats.dependent_count}")
    click.echo(f"  Can delete: {'yes' if stats.can_delete else 'no'}")
    click.echo(f"  Created: {category.created_at}")
    click.echo(f"  Updated: {category.updated_at}")


@category_group.command("update")
@click.argument("code")
@click.option("--description", help="New description")
@click.pass_context
def update_category(ctx, code: str, description: str | None):
    """Update a category. Only the options given are changed."""
    service = CategoryService(ctx.obj["gateway"])
    data = {}
    if description is not None:
        data["description"] = description
    try:
        category = service.update(code, data)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Updated category '{category.code}' ({category.description})")


@category_group.command("delete")
@click.argument("code")
@click.pass_context
def delete_category(ctx, code: str):
    """Delete a category that no expense entry uses."""
    service = CategoryService(ctx.obj["gateway"])
    try:
        service.delete(code)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Deleted category '{code}'")


def register_commands(cli):
    """Register category commands with main CLI."""
    cli.add_command(category_group, name="category")
