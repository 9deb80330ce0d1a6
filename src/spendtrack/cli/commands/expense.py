"""Expense entry commands."""

import click
from spendtrack.cli.error_handling import handle_domain_error
from spendtrack.domain.entities import ExpenseEntryDetail
from spendtrack.domain.errors import DomainError
from spendtrack.domain.expense import ExpenseEntryService


def print_entries(entries: list[ExpenseEntryDetail]) -> None:
    click.echo(f"\nFound {len(entries)} expense entr{'ies' if len(entries) != 1 else 'y'}:")
    click.echo("-" * 110)
    click.echo(
        f"{'ID':<6} {'Entry':<12} {'Paid':<12} {'Amount':>12}  {'Category':<20} {'Establishment':<20} {'Description':<20}"
    )
    click.echo("-" * 110)
    for detail in entries:
        entry = detail.entry
        category = detail.category_description or entry.category_code
        establishment = detail.establishment_name or entry.establishment_code
        click.echo(
            f"{entry.id:<6} {str(entry.entry_date):<12} {str(entry.payment_date):<12} "
            f"{entry.amount:>12,.2f}  {category[:20]:<20} {establishment[:20]:<20} "
            f"{(entry.description or '')[:20]:<20}"
        )


@click.group()
def expense_group():
    """Manage expense entries."""
    pass


@expense_group.command("add")
@click.option(
    "--date",
    "entry_date",
    required=True,
    help="Entry date (YYYY-MM-DD or relative like 'today', 'yesterday')",
)
@click.option("--paid", "payment_date", help="Payment date (defaults to the entry date)")
@click.option("--amount", required=True, help="Amount (e.g., 45.50); rounded to 2 decimal places")
@click.option("--category", required=True, help="Category code")
@click.option("--establishment", required=True, help="Establishment code")
@click.option("--description", help="Free-text description (up to 500 characters)")
@click.pass_context
def add_entry(
    ctx,
    entry_date: str,
    payment_date: str | None,
    amount: str,
    category: str,
    establishment: str,
    description: str | None,
):
    """Add an expense entry.

    Examples:
        spendtrack expense add --date 2024-01-15 --amount 45.50 --category FOOD --establishment REST1
        spendtrack expense add --date today --paid tomorrow --amount 12 --category FOOD --establishment REST1
    """
    service = ExpenseEntryService(ctx.obj["gateway"])
    data = {
        "entry_date": entry_date,
        "payment_date": payment_date if payment_date is not None else entry_date,
        "amount": amount,
        "category_code": category,
        "establishment_code": establishment,
    }
    if description is not None:
        data["description"] = description

    try:
        entry = service.create(data)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Created expense entry {entry.id}")
    click.echo(f"  Date: {entry.entry_date} (paid {entry.payment_date})")
    click.echo(f"  Amount: {entry.amount:,.2f}")
    click.echo(f"  Category: {entry.category_code}")
    click.echo(f"  Establishment: {entry.establishment_code}")
    if entry.description:
        click.echo(f"  Description: {entry.description}")


@expense_group.command("list")
@click.option("--category", help="Only entries of this category code")
@click.option("--establishment", help="Only entries of this establishment code")
@click.option("--start-date", help="Start of entry date range (requires --end-date)")
@click.option("--end-date", help="End of entry date range (requires --start-date)")
@click.pass_context
def list_entries(
    ctx,
    category: str | None,
    establishment: str | None,
    start_date: str | None,
    end_date: str | None,
):
    """List expense entries, newest first."""
    service = ExpenseEntryService(ctx.obj["gateway"])
    try:
        if category is not None:
            entries = service.find_by_category(category)
        elif establishment is not None:
            entries = service.find_by_establishment(establishment)
        elif start_date is not None or end_date is not None:
            entries = service.find_by_period(start_date, end_date)
        else:
            entries = service.find_all_detailed()
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    if not entries:
        click.echo("No expense entries found.")
        return
    print_entries(entries)


@expense_group.command("show")
@click.argument("entry_id")
@click.pass_context
def show_entry(ctx, entry_id: str):
    """Show one expense entry."""
    service = ExpenseEntryService(ctx.obj["gateway"])
    try:
        detail = service.find_by_id_detailed(entry_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    if detail is None:
        click.echo(f"Error: Expense entry {entry_id} not found", err=True)
        ctx.exit(1)
        return

    entry = detail.entry
    click.echo(f"Expense entry {entry.id}")
    click.echo(f"  Entry date: {entry.entry_date}")
    click.echo(f"  Payment date: {entry.payment_date}")
    click.echo(f"  Amount: {entry.amount:,.2f}")
    click.echo(f"  Category: {entry.category_code} ({detail.category_description})")
    click.echo(f"  Establishment: {entry.establishment_code} ({detail.establishment_name})")
    if entry.description:
        click.echo(f"  Description: {entry.description}")
    click.echo(f"  Created: {entry.created_at}")
    click.echo(f"  Updated: {entry.updated_at}")


@expense_group.command("update")
@click.argument("entry_id")
@click.option("--date", "entry_date", help="New entry date")
@click.option("--paid", "payment_date", help="New payment date")
@click.option("--amount", help="New amount")
@click.option("--category", help="New category code")
@click.option("--establishment", help="New establishment code")
@click.option("--description", help="New description (empty string clears it)")
@click.pass_context
def update_entry(
    ctx,
    entry_id: str,
    entry_date: str | None,
    payment_date: str | None,
    amount: str | None,
    category: str | None,
    establishment: str | None,
    description: str | None,
):
    """Update an expense entry. Only the options given are changed."""
    service = ExpenseEntryService(ctx.obj["gateway"])
    options = (
        ("entry_date", entry_date),
        ("payment_date", payment_date),
        ("amount", amount),
        ("category_code", category),
        ("establishment_code", establishment),
        ("description", description),
    )
    data = {field: value for field, value in options if value is not None}

    try:
        entry = service.update(entry_id, data)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Updated expense entry {entry.id}")


@expense_group.command("delete")
@click.argument("entry_id")
@click.pass_context
def delete_entry(ctx, entry_id: str):
    """Delete an expense entry."""
    service = ExpenseEntryService(ctx.obj["gateway"])
    try:
        service.delete(entry_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Deleted expense entry {entry_id}")


@expense_group.command("stats")
@click.option("--category", help="Total for one category code")
@click.option("--establishment", help="Total for one establishment code")
@click.pass_context
def stats(ctx, category: str | None, establishment: str | None):
    """Show totals across expense entries."""
    service = ExpenseEntryService(ctx.obj["gateway"])
    try:
        if category is not None:
            click.echo(f"Total for category {category}: {service.total_by_category(category):,.2f}")
            return
        if establishment is not None:
            total = service.total_by_establishment(establishment)
            click.echo(f"Total for establishment {establishment}: {total:,.2f}")
            return
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    summary = service.get_stats()
    click.echo(f"Entries: {summary.count}")
    click.echo(f"Total: {summary.total:,.2f}")
    click.echo(f"Average: {summary.average:,.2f}")


def register_commands(cli):
    """Register expense commands with main CLI."""
    cli.add_command(expense_group, name="expense")
