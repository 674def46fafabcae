"""Application tests for category creation and moderation."""

import pytest
from protean import current_domain
from protean.exceptions import ObjectNotFoundError, ValidationError

from opinalocal.category.category import ADMIN_CREATOR, Category, CategoryStatus
from opinalocal.category.creation import CreateCategory
from opinalocal.category.moderation import SetCategoryStatus
from opinalocal.category.queries import approved_category_names, list_categories, search_categories
from opinalocal.channel import get_channel
from opinalocal.notification.notification import Notification, NotificationStatus, NotificationType
from opinalocal.shared.errors import CategoryConflictError
from opinalocal.user.push import SavePushSubscription
from opinalocal.utils.queries import fetch_all


def _create(name, created_by="user-x"):
    return current_domain.process(CreateCategory(name=name, created_by=created_by), asynchronous=False)


def _set_status(category_id, status):
    current_domain.process(SetCategoryStatus(category_id=category_id, status=status), asynchronous=False)


def _approval_notifications():
    return [
        n
        for n in fetch_all(Notification)
        if n.notification_type == NotificationType.CATEGORY_APPROVED.value
    ]


class TestCreateCategory:
    def test_create_returns_pending_category(self):
        category_id = _create("Wi-Fi")
        category = current_domain.repository_for(Category).get(category_id)
        assert category.name == "Wi-Fi"
        assert category.status == CategoryStatus.PENDING.value

    def test_admin_through_normal_path_is_pending(self):
        category_id = _create("Parking", created_by=ADMIN_CREATOR)
        assert current_domain.repository_for(Category).get(category_id).status == "pending"

    @pytest.mark.parametrize("duplicate", ["comida", "COMIDA", "Comida", "  comida "])
    def test_duplicate_name_conflicts_ignoring_case(self, duplicate):
        _create("Comida")
        before = len(fetch_all(Category))

        with pytest.raises(CategoryConflictError) as exc:
            _create(duplicate)

        assert exc.value.existing_id is not None
        assert len(fetch_all(Category)) == before

    def test_duplicate_of_seeded_category_conflicts(self):
        current_domain.repository_for(Category).add(Category.seed("Food"))
        with pytest.raises(CategoryConflictError):
            _create("food")

    def test_blank_name_rejected(self):
        with pytest.raises(ValidationError):
            _create("   ")


class TestSetCategoryStatus:
    def test_approve_pending_category(self):
        category_id = _create("Wi-Fi")
        _set_status(category_id, "approved")
        assert current_domain.repository_for(Category).get(category_id).status == "approved"

    def test_unknown_category(self):
        with pytest.raises(ObjectNotFoundError):
            _set_status("does-not-exist", "approved")

    def test_invalid_status(self):
        category_id = _create("Wi-Fi")
        with pytest.raises(ValidationError):
            _set_status(category_id, "archived")
        assert current_domain.repository_for(Category).get(category_id).status == "pending"

    def test_rejected_category_can_be_reopened(self):
        category_id = _create("Wi-Fi")
        _set_status(category_id, "rejected")
        _set_status(category_id, "pending")
        assert current_domain.repository_for(Category).get(category_id).status == "pending"


class TestApprovalNotification:
    def test_creator_notified_once_when_opted_in(self, register_user):
        creator = register_user(name="User Seven")
        category_id = _create("Wi-Fi", created_by=creator)

        _set_status(category_id, "approved")

        notifications = _approval_notifications()
        assert len(notifications) == 1
        assert str(notifications[0].recipient_id) == creator
        assert notifications[0].status == NotificationStatus.SENT.value

        emails = get_channel("Email").sent_emails
        assert len(emails) == 1
        assert "Wi-Fi" in emails[0]["subject"]

    def test_creator_not_notified_when_opted_out(self, register_user):
        creator = register_user(notify_on_category_approval=False)
        category_id = _create("Wi-Fi", created_by=creator)

        _set_status(category_id, "approved")

        assert _approval_notifications() == []
        assert get_channel("Email").sent_emails == []

    def test_admin_sentinel_never_notified(self):
        category_id = _create("Parking", created_by=ADMIN_CREATOR)
        _set_status(category_id, "approved")
        assert _approval_notifications() == []

    def test_unknown_creator_skipped(self):
        category_id = _create("Parking", created_by="ghost-user")
        _set_status(category_id, "approved")
        assert _approval_notifications() == []

    def test_rejection_sends_nothing(self, register_user):
        creator = register_user()
        category_id = _create("Wi-Fi", created_by=creator)
        _set_status(category_id, "rejected")
        assert _approval_notifications() == []

    def test_push_sent_to_every_device(self, register_user):
        creator = register_user()
        for endpoint in ("https://push/a", "https://push/b"):
            current_domain.process(
                SavePushSubscription(user_id=creator, subscription=f'{{"endpoint": "{endpoint}"}}'),
                asynchronous=False,
            )
        category_id = _create("Wi-Fi", created_by=creator)

        _set_status(category_id, "approved")

        pushes = get_channel("Push").sent_pushes
        assert sorted(p["endpoint"] for p in pushes) == ["https://push/a", "https://push/b"]
        assert len(_approval_notifications()) == 3

    def test_delivery_failure_does_not_fail_moderation(self, register_user):
        creator = register_user()
        category_id = _create("Wi-Fi", created_by=creator)
        get_channel("Email").configure(should_succeed=False, failure_reason="mailbox full")

        _set_status(category_id, "approved")

        assert current_domain.repository_for(Category).get(category_id).status == "approved"
        [notification] = _approval_notifications()
        assert notification.status == NotificationStatus.FAILED.value
        assert notification.failure_reason == "mailbox full"

    def test_adapter_exception_does_not_fail_moderation(self, register_user):
        creator = register_user()
        category_id = _create("Wi-Fi", created_by=creator)
        get_channel("Email").configure(raise_on_send=True, failure_reason="connection refused")

        _set_status(category_id, "approved")

        assert current_domain.repository_for(Category).get(category_id).status == "approved"
        [notification] = _approval_notifications()
        assert notification.status == NotificationStatus.FAILED.value


class TestCategoryQueries:
    def test_list_by_status(self):
        approved = _create("Wi-Fi")
        _create("Parking")
        _set_status(approved, "approved")

        assert [c.name for c in list_categories("approved")] == ["Wi-Fi"]
        assert [c.name for c in list_categories("pending")] == ["Parking"]
        assert [c.name for c in list_categories()] == ["Parking", "Wi-Fi"]

    def test_search_is_case_insensitive_substring(self):
        _create("Música ao vivo")
        _create("Vista")
        _create("Parking")
        assert [c.name for c in search_categories("VI")] == ["Música ao vivo", "Vista"]

    def test_search_filtered_by_status(self):
        wifi = _create("Wi-Fi")
        _create("Wine list")
        _set_status(wifi, "approved")
        assert [c.name for c in search_categories("wi", status="approved")] == ["Wi-Fi"]

    def test_approved_names(self):
        current_domain.repository_for(Category).add(Category.seed("Food"))
        _create("Wi-Fi")
        assert approved_category_names() == ["Food"]
