"""Read-side lookups over the category registry."""

from opinalocal.category.category import Category, CategoryStatus
from opinalocal.utils.queries import fetch_all


def list_categories(status=None):
    """All categories ordered by name, optionally restricted to one status."""
    filters = {"status": status} if status else {}
    return sorted(fetch_all(Category, **filters), key=lambda c: c.normalized_name)


def search_categories(substring, status=None):
    """Case-insensitive substring match on the category name."""
    needle = " ".join((substring or "").split()).casefold()
    return [category for category in list_categories(status) if needle in category.normalized_name]


def approved_category_names():
    return [category.name for category in list_categories(CategoryStatus.APPROVED.value)]
