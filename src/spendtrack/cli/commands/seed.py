"""Seed command for loading sample categories and establishments."""

import click
from spendtrack.domain.category import CategoryService
from spendtrack.domain.errors import DomainError
from spendtrack.domain.establishment import EstablishmentService

# (code, description)
SAMPLE_CATEGORIES = [
    ("ALIMENTACAO", "Alimentação e Bebidas"),
    ("TRANSPORTE", "Transporte e Combustível"),
    ("SAUDE", "Saúde e Medicamentos"),
    ("EDUCACAO", "Educação e Cursos"),
    ("LAZER", "Lazer e Entretenimento"),
    ("CASA", "Casa e Utilidades"),
    ("ROUPAS", "Roupas e Acessórios"),
    ("TECNOLOGIA", "Tecnologia e Eletrônicos"),
]

# (code, name, address, phone)
SAMPLE_ESTABLISHMENTS = [
    ("MERCADO01", "Supermercado Central", "Rua das Flores, 100 - São Paulo", "(11) 3333-1000"),
    ("POSTO01", "Posto Avenida", "Av. Brasil, 2500 - São Paulo", "(11) 3333-2000"),
    ("FARMACIA01", "Farmácia Saúde", "Rua Augusta, 450 - São Paulo", "(11) 3333-3000"),
    ("LIVRARIA01", "Livraria Cultura Viva", "Av. Paulista, 900 - São Paulo", "(11) 3333-4000"),
]


@click.command("seed")
@click.option("--force", is_flag=True, help="Add missing sample records even if data already exists")
@click.pass_context
def seed(ctx, force: bool):
    """Load sample categories and establishments."""
    gateway = ctx.obj["gateway"]
    categories = CategoryService(gateway)
    establishments = EstablishmentService(gateway)

    if (categories.count() or establishments.count()) and not force:
        click.echo("Data already exists. Use --force to add missing sample records.")
        return

    click.echo("Loading sample data...")

    created = 0
    skipped = 0
    errors = 0

    for code, description in SAMPLE_CATEGORIES:
        if categories.exists(code):
            skipped += 1
            continue
        try:
            categories.create({"code": code, "description": description})
            created += 1
        except DomainError as e:
            click.echo(f"Warning: Could not create category '{code}': {e}", err=True)
            errors += 1

    for code, name, address, phone in SAMPLE_ESTABLISHMENTS:
        if establishments.exists(code):
            skipped += 1
            continue
        try:
            establishments.create({"code": code, "name": name, "address": address, "phone": phone})
            created += 1
        except DomainError as e:
            click.echo(f"Warning: Could not create establishment '{code}': {e}", err=True)
            errors += 1

    summary = f"Created {created} records"
    if skipped:
        summary += f", skipped {skipped} existing"
    if errors:
        summary += f", {errors} errors"
    click.echo(summary + ".")


def register_commands(cli):
    """Register seed command with main CLI."""
    cli.add_command(seed)
