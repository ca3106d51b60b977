"""CLI helpers for paginated list commands."""

from typing import Any, Callable

import click

from ledgerbook.cli.error_handling import handle_domain_error
from ledgerbook.cli.views import ListView
from ledgerbook.domain.errors import DomainError
from ledgerbook.domain.entities import PAGE_SIZE, Page, QueryState, SortOrder


def list_options(sort_fields: tuple[str, ...]):
    """Add --page, --sort and --asc options to a list command."""

    def decorator(f):
        f = click.option("--asc", is_flag=True, help="Sort ascending instead of newest first")(f)
        f = click.option(
            "--sort",
            type=click.Choice(sort_fields),
            default="created_at",
            show_default=True,
            help="Column to sort by",
        )(f)
        f = click.option("--page", type=click.IntRange(min=1), default=1, help="Page number (1-based)")(f)
        return f

    return decorator


def build_query(page: int, sort: str, asc: bool, **filters: Any) -> QueryState:
    """Build the query state for a list command from its options."""
    query = QueryState(page_size=PAGE_SIZE, sort=SortOrder(field=sort, descending=not asc))
    return query.with_filters(**filters).with_page(page)


def load_page(
    ctx: click.Context,
    db,
    table: str,
    loader: Callable[[QueryState], Page],
    query: QueryState,
) -> Page:
    """Load one page through a ListView, exiting with an error on failure."""
    try:
        with ListView(db, table, loader, query=query) as view:
            if view.last_error is not None:
                handle_domain_error(ctx, view.last_error)
            page = view.page
    except DomainError as e:
        handle_domain_error(ctx, e)
    if page is None:
        ctx.exit(1)
    return page


def echo_page_footer(page: Page) -> None:
    click.echo(f"Page {page.query.page} / {page.total_pages} ({page.total_count} total)")
