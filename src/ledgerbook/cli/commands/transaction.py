"""Transaction management commands."""

import click
from ledgerbook.cli.error_handling import confirm_or_cancel, handle_domain_error
from ledgerbook.cli.pagination import build_query, echo_page_footer, list_options, load_page
from ledgerbook.cli.views import DetailView
from ledgerbook.database.changes import PAYMENTS, TRANSACTIONS
from ledgerbook.domain.customer import CustomerService
from ledgerbook.domain.entities import PaymentMethod, TransactionType
from ledgerbook.domain.errors import DomainError
from ledgerbook.domain.ledger import format_amount
from ledgerbook.domain.transaction import TransactionService

TYPE_CHOICES = click.Choice([t.value for t in TransactionType])
METHOD_CHOICES = click.Choice([m.value for m in PaymentMethod])


@click.group()
def transaction_group():
    """Manage transactions."""
    pass


@transaction_group.command("add")
@click.option("--customer", "customer_id", type=int, required=True, help="Customer ID")
@click.option("--title", required=True, help="Transaction title")
@click.option("--type", "txn_type", type=TYPE_CHOICES, required=True, help="Transaction type")
@click.option("--amount", required=True, help="Amount (e.g., 25.00)")
@click.option("--description", help="Description")
@click.option("--method", type=METHOD_CHOICES, help="Payment method")
@click.pass_context
def add_transaction(
    ctx,
    customer_id: int,
    title: str,
    txn_type: str,
    amount: str,
    description: str | None,
    method: str | None,
):
    """Add a transaction for a customer.

    Examples:
        ledgerbook transaction add --customer 1 --title "March line" --type phoneline_charging --amount 25
        ledgerbook transaction add --customer 1 --title "Netflix" --type netflix_subscription --amount 8.99 --method whish
    """
    db = ctx.obj["db"]
    service = TransactionService(db)
    customer_service = CustomerService(db)

    try:
        transaction_id = service.create_transaction(
            customer_id=customer_id,
            title=title,
            type=txn_type,
            amount=amount,
            description=description,
            payment_method=method,
        )
        txn = service.get_transaction(transaction_id)
        customer = customer_service.get_customer(customer_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Transaction added: {transaction_id}")
    click.echo(f"  Customer: {customer.name}")
    click.echo(f"  Title: {txn.title}")
    click.echo(f"  Type: {txn.type.value}")
    click.echo(f"  Amount: {format_amount(txn.amount)}")
    if txn.payment_method:
        click.echo(f"  Method: {txn.payment_method.value}")


@transaction_group.command("list")
@click.option("--search", help="Only transactions whose title contains this text")
@click.option("--type", "txn_type", type=TYPE_CHOICES, help="Filter by type")
@click.option("--method", type=METHOD_CHOICES, help="Filter by payment method")
@click.option("--customer", "customer_id", type=int, help="Filter by customer ID")
@list_options(("created_at", "title", "amount"))
@click.pass_context
def list_transactions(
    ctx,
    search: str | None,
    txn_type: str | None,
    method: str | None,
    customer_id: int | None,
    page: int,
    sort: str,
    asc: bool,
):
    """List transactions, newest first, 10 per page."""
    db = ctx.obj["db"]
    service = TransactionService(db)
    customer_service = CustomerService(db)

    query = build_query(
        page,
        sort,
        asc,
        search=search,
        type=txn_type,
        payment_method=method,
        customer_id=customer_id,
    )
    result = load_page(ctx, db, TRANSACTIONS, service.list_transactions, query)

    if not result.rows:
        click.echo("No transactions found.")
        return

    try:
        names = {c.id: c.name for c in customer_service.list_all_customers()}
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo("\nTransactions:")
    click.echo("-" * 100)
    click.echo(
        f"{'ID':<6} {'Title':<26} {'Customer':<20} {'Type':<22} {'Amount':>10} {'Method':<7} {'Created':<10}"
    )
    click.echo("-" * 100)
    for txn in result.rows:
        method_str = txn.payment_method.value if txn.payment_method else "-"
        click.echo(
            f"{txn.id:<6} {txn.title[:26]:<26} {names.get(txn.customer_id, '-')[:20]:<20} "
            f"{txn.type.value:<22} {format_amount(txn.amount):>10} {method_str:<7} "
            f"{txn.created_at:%Y-%m-%d}"
        )
    echo_page_footer(result)


@transaction_group.command("show")
@click.argument("transaction_id", type=int)
@click.pass_context
def show_transaction(ctx, transaction_id: int):
    """Show a transaction with its payments and remaining amount."""
    db = ctx.obj["db"]
    service = TransactionService(db)
    customer_service = CustomerService(db)

    view = DetailView(
        db,
        lambda: service.get_transaction_balance(transaction_id),
        watches=[
            (TRANSACTIONS, {"id": transaction_id}),
            (PAYMENTS, {"transaction_id": transaction_id}),
        ],
    )
    with view:
        if view.last_error is not None:
            handle_domain_error(ctx, view.last_error)
        data = view.data

    if view.not_found or data is None:
        click.echo(f"Transaction {transaction_id} not found.", err=True)
        ctx.exit(1)

    balance, payments = data
    txn = balance.transaction
    try:
        customer = customer_service.get_customer(txn.customer_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"\n{txn.title}")
    click.echo(f"  Customer: {customer.name if customer else '-'}")
    click.echo(f"  Type: {txn.type.value}")
    if txn.description:
        click.echo(f"  Description: {txn.description}")
    click.echo(f"  Amount: {format_amount(txn.amount)}")
    click.echo(f"  Paid: {format_amount(balance.paid)}")
    click.echo(f"  Remaining: {format_amount(balance.remaining)}")

    if not payments:
        click.echo("\nNo payments.")
        return

    click.echo("\nPayments:")
    click.echo("-" * 70)
    click.echo(f"{'ID':<6} {'Amount':>10} {'Method':<7} {'Date':<12} {'Note':<30}")
    click.echo("-" * 70)
    for p in payments:
        click.echo(
            f"{p.id:<6} {format_amount(p.amount):>10} {p.method.value:<7} "
            f"{p.created_at:%Y-%m-%d}   {(p.note or '')[:30]}"
        )


@transaction_group.command("edit")
@click.argument("transaction_id", type=int)
@click.option("--title", help="New title")
@click.option("--amount", help="New amount")
@click.option("--description", help="New description (empty string to clear)")
@click.pass_context
def edit_transaction(
    ctx, transaction_id: int, title: str | None, amount: str | None, description: str | None
):
    """Edit a transaction's title, amount or description.

    Examples:
        ledgerbook transaction edit 4 --amount 30
        ledgerbook transaction edit 4 --title "April line"
    """
    service = TransactionService(ctx.obj["db"])

    if title is None and amount is None and description is None:
        click.echo("Nothing to update: pass --title, --amount or --description.", err=True)
        ctx.exit(1)

    try:
        service.update_transaction(
            transaction_id, title=title, amount=amount, description=description
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Transaction {transaction_id} updated")


@transaction_group.command("delete")
@click.argument("transaction_id", type=int)
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_transaction(ctx, transaction_id: int, yes: bool):
    """Delete a transaction and its payments."""
    service = TransactionService(ctx.obj["db"])

    try:
        txn = service.get_transaction(transaction_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    if txn is None:
        click.echo(f"Error: Transaction {transaction_id} not found", err=True)
        ctx.exit(1)

    if not confirm_or_cancel(f"Delete transaction '{txn.title}' (ID: {transaction_id})?", yes):
        return

    try:
        service.delete_transaction(transaction_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Transaction deleted: '{txn.title}'")


def register_commands(cli):
    """Register transaction commands with main CLI."""
    cli.add_command(transaction_group, name="transaction")
