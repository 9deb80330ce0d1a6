"""CLI error handling helpers."""

import click

from spendtrack.domain.errors import BusinessRuleError, DomainError, ReferentialIntegrityError, ValidationError


def handle_domain_error(ctx: click.Context, error: DomainError) -> None:
    """Render a domain error, one line per failing field, and exit with failure."""
    click.echo(f"Error: {error}", err=True)
    details = []
    if isinstance(error, ValidationError):
        details = error.errors
    elif isinstance(error, BusinessRuleError):
        details = error.violations
    for detail in details:
        click.echo(f"  {detail.field}: {detail.message}", err=True)
    if isinstance(error, ReferentialIntegrityError):
        click.echo(f"  dependent entries: {error.count}", err=True)
    ctx.exit(1)
