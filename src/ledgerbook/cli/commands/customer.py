"""Customer management commands."""

import click
from ledgerbook.cli.error_handling import confirm_or_cancel, handle_domain_error
from ledgerbook.cli.pagination import build_query, echo_page_footer, list_options, load_page
from ledgerbook.cli.views import DetailView
from ledgerbook.database.changes import CUSTOMERS, PAYMENTS, TRANSACTIONS
from ledgerbook.domain.customer import CustomerService
from ledgerbook.domain.errors import DomainError
from ledgerbook.domain.ledger import format_amount


@click.group()
def customer_group():
    """Manage customers."""
    pass


@customer_group.command("add")
@click.argument("name", metavar="NAME")
@click.option("--phone", help="Phone number")
@click.pass_context
def add_customer(ctx, name: str, phone: str | None):
    """Add a new customer.

    Examples:
        ledgerbook customer add "Rami Haddad"
        ledgerbook customer add "Rami Haddad" --phone "03 123 456"
    """
    service = CustomerService(ctx.obj["db"])

    try:
        customer_id = service.create_customer(name=name, phone=phone)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Customer added: '{name.strip()}' (ID: {customer_id})")


@customer_group.command("list")
@click.option("--search", help="Only customers whose name contains this text")
@list_options(("created_at", "name"))
@click.pass_context
def list_customers(ctx, search: str | None, page: int, sort: str, asc: bool):
    """List customers, newest first, 10 per page."""
    db = ctx.obj["db"]
    service = CustomerService(db)

    query = build_query(page, sort, asc, search=search)
    result = load_page(ctx, db, CUSTOMERS, service.list_customers, query)

    if not result.rows:
        click.echo("No customers found.")
        return

    click.echo("\nCustomers:")
    click.echo("-" * 70)
    click.echo(f"{'ID':<6} {'Name':<30} {'Phone':<16} {'Created':<12}")
    click.echo("-" * 70)
    for c in result.rows:
        click.echo(f"{c.id:<6} {c.name[:30]:<30} {(c.phone or '-'):<16} {c.created_at:%Y-%m-%d}")
    echo_page_footer(result)


@customer_group.command("show")
@click.argument("customer_id", type=int)
@click.pass_context
def show_customer(ctx, customer_id: int):
    """Show a customer's balance and transactions."""
    db = ctx.obj["db"]
    service = CustomerService(db)

    view = DetailView(
        db,
        lambda: service.get_customer_balance(customer_id),
        watches=[
            (CUSTOMERS, {"id": customer_id}),
            (TRANSACTIONS, {"customer_id": customer_id}),
            (PAYMENTS, None),
        ],
    )
    with view:
        if view.last_error is not None:
            handle_domain_error(ctx, view.last_error)
        balance = view.data

    if view.not_found or balance is None:
        click.echo(f"Customer {customer_id} not found.", err=True)
        ctx.exit(1)

    customer = balance.customer
    click.echo(f"\n{customer.name}")
    click.echo(f"  Phone: {customer.phone or '-'}")
    click.echo(f"  Created: {customer.created_at:%Y-%m-%d}")
    click.echo(f"  Should receive: {format_amount(balance.receive)}")
    click.echo(f"  You owe: {format_amount(balance.owe)}")
    click.echo(f"  Net balance: {format_amount(balance.outstanding)}")

    if not balance.transactions:
        click.echo("\nNo transactions.")
        return

    click.echo("\nTransactions:")
    click.echo("-" * 90)
    click.echo(f"{'ID':<6} {'Title':<28} {'Type':<22} {'Amount':>10} {'Paid':>10} {'Remaining':>10}")
    click.echo("-" * 90)
    for tb in balance.transactions:
        txn = tb.transaction
        click.echo(
            f"{txn.id:<6} {txn.title[:28]:<28} {txn.type.value:<22} "
            f"{format_amount(txn.amount):>10} {format_amount(tb.paid):>10} "
            f"{format_amount(tb.remaining):>10}"
        )


@customer_group.command("edit")
@click.argument("customer_id", type=int)
@click.option("--name", help="New name")
@click.option("--phone", help="New phone number (empty string to clear)")
@click.pass_context
def edit_customer(ctx, customer_id: int, name: str | None, phone: str | None):
    """Edit a customer's name or phone.

    Examples:
        ledgerbook customer edit 3 --name "Rami H."
        ledgerbook customer edit 3 --phone ""
    """
    service = CustomerService(ctx.obj["db"])

    if name is None and phone is None:
        click.echo("Nothing to update: pass --name and/or --phone.", err=True)
        ctx.exit(1)

    try:
        service.update_customer(customer_id, name=name, phone=phone)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Customer {customer_id} updated")


@customer_group.command("delete")
@click.argument("customer_id", type=int)
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_customer(ctx, customer_id: int, yes: bool):
    """Delete a customer together with their transactions and payments."""
    service = CustomerService(ctx.obj["db"])

    try:
        customer = service.get_customer(customer_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    if customer is None:
        click.echo(f"Error: Customer {customer_id} not found", err=True)
        ctx.exit(1)

    if not confirm_or_cancel(
        f"Delete customer '{customer.name}' (ID: {customer_id}) and all their transactions?", yes
    ):
        return

    try:
        service.delete_customer(customer_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Customer deleted: '{customer.name}'")


def register_commands(cli):
    """Register customer commands with main CLI."""
    cli.add_command(customer_group, name="customer")
