"""CLI commands for the GiftSuggestion aggregate."""

from __future__ import annotations

import click

from gcs.application.dto import GiftSuggestionData
from gcs.domain.exceptions import DomainException
from gcs.domain.model.categories import (
    AgeGroup,
    Gender,
    Interest,
    Occasion,
    PersonalityType,
    Relationship,
)
from gcs.domain.model.paging import PageRequest
from gcs.domain.model.price_range import to_price
from gcs.domain.query import SuggestionCriteria
from gcs.infrastructure.bootstrap import gift_suggestion_service


def _choice(enum_type) -> click.Choice:
    return click.Choice([member.value for member in enum_type], case_sensitive=False)


def suggestion_fields(required: bool):
    """Shared options for the six category fields."""
    options = [
        click.option("--age-group", type=_choice(AgeGroup), required=required),
        click.option("--gender", type=_choice(Gender), required=required),
        click.option("--interest", type=_choice(Interest), required=required),
        click.option("--occasion", type=_choice(Occasion), required=required),
        click.option("--relationship", type=_choice(Relationship), required=required),
        click.option(
            "--personality-type", type=_choice(PersonalityType), required=required
        ),
    ]

    def decorator(func):
        for option in reversed(options):
            func = option(func)
        return func

    return decorator


def criteria_from_options(
    age_group: str | None,
    gender: str | None,
    interest: str | None,
    occasion: str | None,
    relationship: str | None,
    personality_type: str | None,
    min_budget: str | None = None,
    max_budget: str | None = None,
) -> SuggestionCriteria:
    return SuggestionCriteria(
        age_group=AgeGroup.parse(age_group) if age_group else None,
        gender=Gender.parse(gender) if gender else None,
        interest=Interest.parse(interest) if interest else None,
        occasion=Occasion.parse(occasion) if occasion else None,
        relationship=Relationship.parse(relationship) if relationship else None,
        personality_type=(
            PersonalityType.parse(personality_type) if personality_type else None
        ),
        min_budget=to_price(min_budget, "min_budget"),
        max_budget=to_price(max_budget, "max_budget"),
    )


def _display_suggestion(s) -> None:
    click.echo(f"Suggestion {s.id}")
    click.echo(f"  Name:        {s.name}")
    click.echo(f"  Description: {s.description}")
    click.echo(f"  Price band:  {s.price_range}")
    click.echo(
        f"  Tags:        {s.age_group.value} / {s.gender.value} / {s.interest.value} / "
        f"{s.occasion.value} / {s.relationship.value} / {s.personality_type.value}"
    )


def _display_page(page) -> None:
    if not page.content:
        click.echo("No gift suggestions found.")
    else:
        click.echo(f"{'ID':<38} {'Name':<30} {'Price band':>20}")
        click.echo("-" * 90)
        for s in page:
            click.echo(f"{s.id:<38} {s.name[:30]:<30} {str(s.price_range):>20}")
    click.echo(
        f"Page {page.number + 1} of {max(page.total_pages, 1)}  "
        f"({page.total_elements} total)"
    )


@click.command("add")
@click.option("--name", required=True, help="Suggestion name.")
@click.option("--description", required=True, help="Short description.")
@click.option("--min-price", required=True, help="Lower bound of the band (e.g. 10.00).")
@click.option("--max-price", required=True, help="Upper bound of the band.")
@suggestion_fields(required=True)
def suggestion_add(name, description, min_price, max_price, **categories) -> None:
    """Add a new gift suggestion."""
    data = GiftSuggestionData(
        name=name, description=description, min_price=min_price, max_price=max_price,
        **categories,
    )
    try:
        suggestion = gift_suggestion_service().create(data)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Suggestion {suggestion.id} '{suggestion.name}' added ({suggestion.price_range})")


@click.command("show")
@click.option("--id", "suggestion_id", required=True, help="Suggestion ID.")
def suggestion_show(suggestion_id: str) -> None:
    """Show a gift suggestion."""
    suggestion = gift_suggestion_service().find_by_id(suggestion_id)
    if suggestion is None:
        raise click.ClickException(f"Gift suggestion not found with ID: {suggestion_id}")
    _display_suggestion(suggestion)


@click.command("list")
@click.option("--page", default=0, show_default=True, type=int)
@click.option("--size", default=20, show_default=True, type=int)
def suggestion_list(page: int, size: int) -> None:
    """List gift suggestions page by page."""
    try:
        result = gift_suggestion_service().find_all_paged(PageRequest(page, size))
    except DomainException as exc:
        raise click.ClickException(str(exc))
    _display_page(result)


@click.command("update")
@click.option("--id", "suggestion_id", required=True, help="Suggestion ID.")
@click.option("--name", required=True)
@click.option("--description", required=True)
@click.option("--min-price", required=True)
@click.option("--max-price", required=True)
@suggestion_fields(required=True)
def suggestion_update(suggestion_id, name, description, min_price, max_price, **categories) -> None:
    """Replace every field of a gift suggestion."""
    data = GiftSuggestionData(
        name=name, description=description, min_price=min_price, max_price=max_price,
        **categories,
    )
    try:
        gift_suggestion_service().update(suggestion_id, data)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Suggestion {suggestion_id} updated.")


@click.command("delete")
@click.option("--id", "suggestion_id", required=True, help="Suggestion ID.")
def suggestion_delete(suggestion_id: str) -> None:
    """Delete a suggestion and all of its concrete gifts."""
    try:
        gift_suggestion_service().delete_by_id(suggestion_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Suggestion {suggestion_id} deleted.")


@click.command("search")
@suggestion_fields(required=False)
@click.option("--min-budget", default=None, help="Keep bands reaching at least this price.")
@click.option("--max-budget", default=None, help="Keep bands starting at or below this price.")
@click.option("--page", default=0, show_default=True, type=int)
@click.option("--size", default=20, show_default=True, type=int)
def suggestion_search(min_budget, max_budget, page, size, **categories) -> None:
    """Search suggestions; every filter is optional."""
    try:
        criteria = criteria_from_options(
            min_budget=min_budget, max_budget=max_budget, **categories
        )
        result = gift_suggestion_service().find_by_advanced_criteria(
            criteria, PageRequest(page, size)
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))
    _display_page(result)
