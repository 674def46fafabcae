"""Tests for the User aggregate."""

import pytest
from protean.exceptions import ValidationError

from opinalocal.user.events import UserPromotedToAdmin
from opinalocal.user.user import NotificationPreference, User, UserRole


def _user(**overrides):
    fields = {"external_id": "firebase-1", "email": "Ana@Example.com", "name": "Ana"}
    fields.update(overrides)
    user = User.register(**fields)
    user._events.clear()
    return user


class TestRegisterUser:
    def test_defaults(self):
        user = _user()
        assert user.role == UserRole.USER.value
        assert user.is_admin() is False
        assert user.notify_on_comment is True
        assert user.notify_on_new_review is True
        assert user.notify_on_category_approval is True
        assert user.notify_on_newsletter is False

    def test_email_lowercased(self):
        assert _user().email == "ana@example.com"

    @pytest.mark.parametrize("email", ["ana", "ana@", "@example.com", "a b@example.com"])
    def test_invalid_email_rejected(self, email):
        with pytest.raises(ValidationError):
            _user(email=email)

    def test_blank_name_rejected(self):
        with pytest.raises(ValidationError):
            _user(name="  ")


class TestPreferences:
    def test_update_one_preference(self):
        user = _user()
        user.update_preferences(notify_on_comment=False)
        assert user.notify_on_comment is False
        assert user.notify_on_new_review is True

    def test_at_least_one_required(self):
        with pytest.raises(ValidationError):
            _user().update_preferences()

    def test_is_subscribed_to(self):
        user = _user()
        user.update_preferences(notify_on_category_approval=False)
        assert user.is_subscribed_to(NotificationPreference.CATEGORY_APPROVAL) is False
        assert user.is_subscribed_to(NotificationPreference.COMMENT) is True
        assert user.is_subscribed_to("notify_on_newsletter") is False


class TestProfile:
    def test_update_name_keeps_photo(self):
        user = _user(photo_url="https://img/ana.jpg")
        user.update_profile(name="Ana Lima")
        assert user.name == "Ana Lima"
        assert user.photo_url == "https://img/ana.jpg"


class TestGrantAdmin:
    def test_grant_admin(self):
        user = _user()
        user.grant_admin()
        assert user.is_admin() is True
        assert isinstance(user._events[0], UserPromotedToAdmin)

    def test_grant_admin_is_idempotent(self):
        user = _user()
        user.grant_admin()
        user.grant_admin()
        assert len(user._events) == 1
