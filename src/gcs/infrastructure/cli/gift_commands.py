"""CLI commands for ConcreteGift entities."""

from __future__ import annotations

import click

from gcs.application.dto import ConcreteGiftData
from gcs.domain.exceptions import DomainException
from gcs.domain.model.paging import PageRequest
from gcs.domain.model.price_range import to_price
from gcs.domain.query import ConcreteGiftCriteria
from gcs.infrastructure.bootstrap import concrete_gift_service
from gcs.infrastructure.cli.suggestion_commands import (
    criteria_from_options,
    suggestion_fields,
)


def gift_fields(func):
    """Options shared by ``add`` and ``update``."""
    for option in reversed([
        click.option("--suggestion-id", required=True, help="Parent suggestion ID."),
        click.option("--name", required=True),
        click.option("--description", required=True),
        click.option("--price", required=True, help="Exact price (e.g. 49.99)."),
        click.option("--vendor", required=True, help="Vendor name."),
        click.option("--url", default=None, help="Product URL (http/https)."),
        click.option("--sku", default=None, help="Vendor SKU."),
        click.option("--available/--unavailable", default=True, show_default=True),
    ]):
        func = option(func)
    return func


def _to_data(suggestion_id, name, description, price, vendor, url, sku, available):
    return ConcreteGiftData(
        name=name,
        description=description,
        exact_price=price,
        vendor_name=vendor,
        gift_suggestion_id=suggestion_id,
        product_url=url,
        product_sku=sku,
        available=available,
    )


def _display_page(page) -> None:
    if not page.content:
        click.echo("No concrete gifts found.")
    else:
        click.echo(f"{'ID':<38} {'Name':<30} {'Vendor':<16} {'Price':>10} {'Avail':>6}")
        click.echo("-" * 104)
        for g in page:
            click.echo(
                f"{g.id:<38} {g.name[:30]:<30} {g.vendor_name[:16]:<16} "
                f"{'$' + format(g.exact_price, '.2f'):>10} {'yes' if g.available else 'no':>6}"
            )
    click.echo(
        f"Page {page.number + 1} of {max(page.total_pages, 1)}  "
        f"({page.total_elements} total)"
    )


@click.command("add")
@gift_fields
def gift_add(**fields) -> None:
    """Add a concrete gift under an existing suggestion."""
    try:
        gift = concrete_gift_service().create(_to_data(**fields))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Concrete gift {gift.id} '{gift.name}' added at ${gift.exact_price:.2f}")


@click.command("show")
@click.option("--id", "gift_id", required=True, help="Concrete gift ID.")
def gift_show(gift_id: str) -> None:
    """Show a concrete gift."""
    gift = concrete_gift_service().find_by_id(gift_id)
    if gift is None:
        raise click.ClickException(f"Concrete gift not found with ID: {gift_id}")

    click.echo(f"Concrete gift {gift.id}")
    click.echo(f"  Name:        {gift.name}")
    click.echo(f"  Description: {gift.description or ''}")
    click.echo(f"  Price:       ${gift.exact_price:.2f}")
    click.echo(f"  Vendor:      {gift.vendor_name}")
    click.echo(f"  URL:         {gift.product_url or '-'}")
    click.echo(f"  SKU:         {gift.product_sku or '-'}")
    click.echo(f"  Available:   {'yes' if gift.available else 'no'}")
    click.echo(f"  Suggestion:  {gift.gift_suggestion_id}")


@click.command("list")
@click.option("--suggestion-id", default=None, help="Only gifts under this suggestion.")
@click.option("--page", default=0, show_default=True, type=int)
@click.option("--size", default=20, show_default=True, type=int)
def gift_list(suggestion_id: str | None, page: int, size: int) -> None:
    """List concrete gifts page by page."""
    service = concrete_gift_service()
    try:
        request = PageRequest(page, size)
        if suggestion_id:
            result = service.find_by_gift_suggestion_id_paged(suggestion_id, request)
        else:
            result = service.find_all_paged(request)
    except DomainException as exc:
        raise click.ClickException(str(exc))
    _display_page(result)


@click.command("update")
@click.option("--id", "gift_id", required=True, help="Concrete gift ID.")
@gift_fields
def gift_update(gift_id: str, **fields) -> None:
    """Replace every field of a concrete gift."""
    try:
        concrete_gift_service().update(gift_id, _to_data(**fields))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Concrete gift {gift_id} updated.")


@click.command("delete")
@click.option("--id", "gift_id", required=True, help="Concrete gift ID.")
def gift_delete(gift_id: str) -> None:
    """Delete a concrete gift; its suggestion is kept."""
    try:
        concrete_gift_service().delete_by_id(gift_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Concrete gift {gift_id} deleted.")


@click.command("search")
@click.option("--suggestion-id", default=None)
@click.option("--vendor", default=None)
@click.option(
    "--availability",
    type=click.Choice(["available", "unavailable"], case_sensitive=False),
    default=None,
)
@click.option("--min-price", default=None, help="Inclusive lower price bound.")
@click.option("--max-price", default=None, help="Inclusive upper price bound.")
@suggestion_fields(required=False)
@click.option("--max-budget", default=None, help="Parent band must start at or below this.")
@click.option("--page", default=0, show_default=True, type=int)
@click.option("--size", default=20, show_default=True, type=int)
def gift_search(
    suggestion_id, vendor, availability, min_price, max_price, max_budget, page, size,
    **categories,
) -> None:
    """Search concrete gifts, optionally through their suggestion's tags."""
    try:
        gift_criteria = ConcreteGiftCriteria(
            gift_suggestion_id=suggestion_id,
            vendor_name=vendor,
            available=None if availability is None else availability.lower() == "available",
            min_price=to_price(min_price, "min_price"),
            max_price=to_price(max_price, "max_price"),
        )
        suggestion_criteria = criteria_from_options(max_budget=max_budget, **categories)
        result = concrete_gift_service().find_by_suggestion_and_criteria(
            suggestion_criteria, gift_criteria, PageRequest(page, size)
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))
    _display_page(result)
