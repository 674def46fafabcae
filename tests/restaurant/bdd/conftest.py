"""Shared BDD fixtures and step definitions for restaurant ownership."""

import pytest
from protean.utils.globals import current_domain
from pytest_bdd import given, parsers

from opinalocal.restaurant.ownership import GrantOwnership, RevokeOwnership
from opinalocal.user.registration import RegisterUser
from opinalocal.user.user import User


@pytest.fixture()
def users():
    """Display name → user id."""
    return {}


@pytest.fixture()
def outcome():
    return {"exc": None}


@given(parsers.cfparse('a restaurant named "{name}"'), target_fixture="restaurant_id")
def restaurant_named(register_restaurant, name):
    return register_restaurant(name=name)


@given(parsers.cfparse('a registered user "{name}"'))
def registered_user(users, name):
    users[name] = current_domain.process(
        RegisterUser(external_id=f"uid-{name}", email=f"{name.lower()}@example.com", name=name),
        asynchronous=False,
    )


@given(parsers.cfparse('"{name}" owns the restaurant'))
def owns_restaurant(users, restaurant_id, name):
    current_domain.process(GrantOwnership(user_id=users[name], restaurant_id=restaurant_id), asynchronous=False)


@given(parsers.cfparse('the ownership of "{name}" is revoked'))
def ownership_revoked(users, restaurant_id, name):
    current_domain.process(RevokeOwnership(user_id=users[name], restaurant_id=restaurant_id), asynchronous=False)


@given(parsers.cfparse('"{name}" is an administrator'))
def is_administrator(users, name):
    repo = current_domain.repository_for(User)
    user = repo.get(users[name])
    user.grant_admin()
    repo.add(user)
