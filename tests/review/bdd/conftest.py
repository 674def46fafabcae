"""Shared BDD fixtures for review rating."""

import pytest


@pytest.fixture()
def draft():
    """Scores and photos collected by Given steps before submission."""
    return {"standard": {}, "custom": {}, "photos": []}


@pytest.fixture()
def error():
    return {"exc": None}
