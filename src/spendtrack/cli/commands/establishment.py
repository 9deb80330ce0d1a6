"""Establishment management commands."""

import click
from spendtrack.cli.error_handling import handle_domain_error
from spendtrack.domain.establishment import EstablishmentService
from spendtrack.domain.errors import DomainError


@click.group()
def establishment_group():
    """Manage establishments."""
    pass


@establishment_group.command("create")
@click.argument("code")
@click.option("--name", required=True, help="Establishment name")
@click.option("--address", required=True, help="Street address")
@click.option("--phone", required=True, help="Phone number (up to 20 characters)")
@click.pass_context
def create_establishment(ctx, code: str, name: str, address: str, phone: str):
    """Create a new establishment.

    Examples:
        spendtrack establishment create REST1 --name "Cantina" --address "Rua A, 10" --phone 11999999999
    """
    service = EstablishmentService(ctx.obj["gateway"])
    try:
        establishment = service.create(
            {"code": code, "name": name, "address": address, "phone": phone}
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Created establishment '{establishment.code}' ({establishment.name})")


@establishment_group.command("list")
@click.option("--name", "name_filter", help="Only show establishments whose name contains this text")
@click.option("--address", "address_filter", help="Only show establishments whose address contains this text")
@click.pass_context
def list_establishments(ctx, name_filter: str | None, address_filter: str | None):
    """List establishments."""
    service = EstablishmentService(ctx.obj["gateway"])
    try:
        if name_filter is not None:
            establishments = service.search_by_name(name_filter)
        elif address_filter is not None:
            establishments = service.search_by_address(address_filter)
        else:
            establishments = service.find_all()
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    if not establishments:
        click.echo("No establishments found.")
        return

    click.echo("\nEstablishments:")
    click.echo("-" * 100)
    click.echo(f"{'Code':<15} {'Name':<30} {'Phone':<20} {'Address':<35}")
    click.echo("-" * 100)
    for est in establishments:
        click.echo(f"{est.code:<15} {est.name[:30]:<30} {est.phone:<20} {est.address[:35]:<35}")


@establishment_group.command("show")
@click.argument("code")
@click.pass_context
def show_establishment(ctx, code: str):
    """Show an establishment and how many expense entries use it."""
    service = EstablishmentService(ctx.obj["gateway"])
    try:
        stats = service.get_stats(code)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    est = stats.entity
    click.echo(f"Establishment: {est.code}")
    click.echo(f"  Name: {est.name}")
    click.echo(f"  Address: {est.address}")
    click.echo(f"  Phone: {est.phone}")
    click.echo(f"  Expense entries: {stats.dependent_count}")
    click.echo(f"  Can delete: {'yes' if stats.can_delete else 'no'}")


@establishment_group.command("update")
@click.argument("code")
@click.option("--name", help="New name")
@click.option("--address", help="New address")
@click.option("--phone", help="New phone number")
@click.pass_context
def update_establishment(ctx, code: str, name: str | None, address: str | None, phone: str | None):
    """Update an establishment. Only the options given are changed."""
    service = EstablishmentService(ctx.obj["gateway"])
    data = {
        field: value
        for field, value in (("name", name), ("address", address), ("phone", phone))
        if value is not None
    }
    try:
        establishment = service.update(code, data)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Updated establishment '{establishment.code}' ({establishment.name})")


@establishment_group.command("delete")
@click.argument("code")
@click.pass_context
def delete_establishment(ctx, code: str):
    """Delete an establishment that no expense entry uses."""
    service = EstablishmentService(ctx.obj["gateway"])
    try:
        service.delete(code)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Deleted establishment '{code}'")


def register_commands(cli):
    """Register establishment commands with main CLI."""
    cli.add_command(establishment_group, name="establishment")
