"""Payment management commands."""

import click
from ledgerbook.cli.error_handling import confirm_or_cancel, handle_domain_error
from ledgerbook.cli.pagination import build_query, echo_page_footer, list_options, load_page
from ledgerbook.database.changes import PAYMENTS
from ledgerbook.domain.entities import PaymentMethod
from ledgerbook.domain.errors import DomainError
from ledgerbook.domain.ledger import format_amount
from ledgerbook.domain.payment import PaymentService
from ledgerbook.domain.transaction import TransactionService

METHOD_CHOICES = click.Choice([m.value for m in PaymentMethod])


@click.group()
def payment_group():
    """Manage payments."""
    pass


@payment_group.command("add")
@click.option("--transaction", "transaction_id", type=int, required=True, help="Transaction ID")
@click.option("--amount", required=True, help="Amount paid (e.g., 10.00)")
@click.option("--method", type=METHOD_CHOICES, required=True, help="Payment method")
@click.option("--note", help="Note")
@click.pass_context
def add_payment(ctx, transaction_id: int, amount: str, method: str, note: str | None):
    """Record a payment against a transaction.

    Payments larger than what is left on the transaction are accepted; the
    transaction then shows a negative remaining amount.

    Examples:
        ledgerbook payment add --transaction 4 --amount 10 --method cash
    """
    db = ctx.obj["db"]
    service = PaymentService(db)
    transaction_service = TransactionService(db)

    try:
        payment_id = service.create_payment(
            transaction_id=transaction_id, amount=amount, method=method, note=note
        )
        balance, _ = transaction_service.get_transaction_balance(transaction_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Payment added: {payment_id}")
    click.echo(f"  Transaction: {balance.transaction.title}")
    click.echo(f"  Remaining: {format_amount(balance.remaining)}")


@payment_group.command("list")
@click.option("--search", help="Only payments whose note contains this text")
@click.option("--transaction", "transaction_id", type=int, help="Filter by transaction ID")
@click.option("--method", type=METHOD_CHOICES, help="Filter by payment method")
@list_options(("created_at", "amount"))
@click.pass_context
def list_payments(
    ctx,
    search: str | None,
    transaction_id: int | None,
    method: str | None,
    page: int,
    sort: str,
    asc: bool,
):
    """List payments, newest first, 10 per page."""
    db = ctx.obj["db"]
    service = PaymentService(db)
    transaction_service = TransactionService(db)

    query = build_query(
        page, sort, asc, search=search, transaction_id=transaction_id, method=method
    )
    result = load_page(ctx, db, PAYMENTS, service.list_payments, query)

    if not result.rows:
        click.echo("No payments found.")
        return

    titles: dict[int, str] = {}
    try:
        for p in result.rows:
            if p.transaction_id not in titles:
                txn = transaction_service.get_transaction(p.transaction_id)
                titles[p.transaction_id] = txn.title if txn else "-"
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo("\nPayments:")
    click.echo("-" * 90)
    click.echo(f"{'ID':<6} {'Transaction':<28} {'Amount':>10} {'Method':<7} {'Date':<12} {'Note':<24}")
    click.echo("-" * 90)
    for p in result.rows:
        click.echo(
            f"{p.id:<6} {titles[p.transaction_id][:28]:<28} {format_amount(p.amount):>10} "
            f"{p.method.value:<7} {p.created_at:%Y-%m-%d}   {(p.note or '')[:24]}"
        )
    echo_page_footer(result)


@payment_group.command("edit")
@click.argument("payment_id", type=int)
@click.option("--amount", help="New amount")
@click.option("--note", help="New note (empty string to clear)")
@click.pass_context
def edit_payment(ctx, payment_id: int, amount: str | None, note: str | None):
    """Edit a payment's amount or note."""
    service = PaymentService(ctx.obj["db"])

    if amount is None and note is None:
        click.echo("Nothing to update: pass --amount and/or --note.", err=True)
        ctx.exit(1)

    try:
        service.update_payment(payment_id, amount=amount, note=note)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Payment {payment_id} updated")


@payment_group.command("delete")
@click.argument("payment_id", type=int)
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_payment(ctx, payment_id: int, yes: bool):
    """Delete a payment."""
    service = PaymentService(ctx.obj["db"])

    try:
        payment = service.get_payment(payment_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    if payment is None:
        click.echo(f"Error: Payment {payment_id} not found", err=True)
        ctx.exit(1)

    if not confirm_or_cancel(
        f"Delete payment {payment_id} of {format_amount(payment.amount)}?", yes
    ):
        return

    try:
        service.delete_payment(payment_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Payment deleted: {payment_id}")


def register_commands(cli):
    """Register payment commands with main CLI."""
    cli.add_command(payment_group, name="payment")
