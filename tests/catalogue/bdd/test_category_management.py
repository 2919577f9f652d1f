"""BDD tests for category management."""

from protean.exceptions import ValidationError
from pytest_bdd import parsers, scenarios, then, when

scenarios("features/category_management.feature")


@when(parsers.cfparse('the category description is changed to "{description}"'))
def change_description(category, description):
    category.update_details(description=description)


@when(parsers.cfparse('the category slug is changed to "{slug}"'))
def change_slug(category, slug, error):
    try:
        category.update_details(slug=slug)
    except ValidationError as exc:
        error["exc"] = exc


@then(parsers.cfparse('the category slug is "{slug}"'))
def slug_is(category, slug):
    assert category.slug == slug
