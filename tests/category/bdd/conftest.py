"""Shared BDD fixtures and step definitions for category moderation."""

import pytest
from protean.utils.globals import current_domain
from pytest_bdd import given, parsers, then

from opinalocal.category.category import Category
from opinalocal.category.creation import CreateCategory
from opinalocal.channel import get_channel
from opinalocal.user.preferences import UpdateNotificationPreferences
from opinalocal.user.registration import RegisterUser
from opinalocal.utils.queries import fetch_all, fetch_first


@pytest.fixture()
def outcome():
    """Container for the exception raised by a When step, if any."""
    return {"exc": None}


def category_named(name):
    return fetch_first(Category, name=name)


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(
    parsers.cfparse('a registered user "{name}" with email "{email}"'),
    target_fixture="user_id",
)
def registered_user(name, email):
    return current_domain.process(
        RegisterUser(external_id=f"uid-{email}", email=email, name=name),
        asynchronous=False,
    )


@given("the user switched off category approval notifications")
def opted_out(user_id):
    current_domain.process(
        UpdateNotificationPreferences(user_id=user_id, notify_on_category_approval=False),
        asynchronous=False,
    )


@given(parsers.cfparse('the user suggested the category "{name}"'))
def suggested_category(user_id, name):
    current_domain.process(CreateCategory(name=name, created_by=user_id), asynchronous=False)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the category "{name}" is "{status}"'))
def category_status_is(name, status):
    assert category_named(name).status == status


@then(parsers.cfparse('"{email}" receives {count:d} email'))
@then(parsers.cfparse('"{email}" receives {count:d} emails'))
def receives_emails(email, count):
    assert len(get_channel("Email").emails_to(email)) == count


@then(parsers.cfparse("there is {count:d} category"))
@then(parsers.cfparse("there are {count:d} categories"))
def category_count(count):
    assert len(fetch_all(Category)) == count
