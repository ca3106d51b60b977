"""Dashboard command."""

import click
from ledgerbook.cli.error_handling import handle_domain_error
from ledgerbook.domain.dashboard import DashboardService
from ledgerbook.domain.errors import DomainError
from ledgerbook.domain.ledger import format_amount


@click.command("dashboard")
@click.pass_context
def show_dashboard(ctx):
    """Show customer count and outstanding totals."""
    service = DashboardService(ctx.obj["db"])

    try:
        summary = service.get_summary()
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo("\nDashboard")
    click.echo("-" * 40)
    click.echo(f"{'Total customers:':<28} {summary.customer_count}")
    click.echo(f"{'Outstanding (receive):':<28} {format_amount(summary.totals.total_receivable)}")
    click.echo(f"{'Outstanding (you owe):':<28} {format_amount(summary.totals.total_payable)}")


def register_commands(cli):
    """Register dashboard command with main CLI."""
    cli.add_command(show_dashboard)
