"""Read-side lookups for users and their push subscriptions."""

from protean.utils.globals import current_domain

from opinalocal.user.push import PushSubscription
from opinalocal.user.user import User
from opinalocal.utils.queries import fetch_all, fetch_first


def get_user(user_id):
    """Raises ObjectNotFoundError when the id is unknown."""
    return current_domain.repository_for(User).get(user_id)


def find_user_by_external_id(external_id):
    return fetch_first(User, external_id=external_id)


def find_user_by_email(email):
    return fetch_first(User, email=email.strip().lower())


def push_subscriptions_for(user_id):
    return fetch_all(PushSubscription, user_id=str(user_id))
