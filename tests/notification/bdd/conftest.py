"""Shared BDD fixtures and step definitions for notifications."""

import pytest
from protean.utils.globals import current_domain
from pytest_bdd import given, parsers

from opinalocal.channel import get_channel
from opinalocal.user.preferences import UpdateNotificationPreferences


@pytest.fixture()
def people():
    """Display name → user id."""
    return {}


@given(parsers.cfparse('"{name}" reviewed a restaurant'), target_fixture="review_id")
def reviewed_restaurant(people, register_user, register_restaurant, submit_review, name):
    people[name] = register_user(name=name, email=f"{name.lower()}@example.com")
    return submit_review(people[name], register_restaurant())


@given(parsers.cfparse('a registered user "{name}"'))
def registered_user(people, register_user, name):
    people[name] = register_user(name=name, email=f"{name.lower()}@example.com")


@given(parsers.cfparse('"{name}" switched off comment notifications'))
def opted_out(people, name):
    current_domain.process(
        UpdateNotificationPreferences(user_id=people[name], notify_on_comment=False),
        asynchronous=False,
    )


@given("the email channel is down")
def email_down():
    get_channel("Email").configure(raise_on_send=True, failure_reason="SMTP unavailable")
