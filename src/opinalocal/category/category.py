"""Category aggregate: community rating dimensions and their moderation status.

Status lifecycle:
    pending → approved | rejected

Moderators may set any of the three statuses at any time, including moving a
category out of approved or rejected. Each change is recorded through
CategoryStatusChanged with the previous status.

Names are unique ignoring case. ``normalized_name`` holds the case-folded
form and carries the storage-level unique constraint.
"""

from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, String

from opinalocal.category.events import (
    CategoryApproved,
    CategoryProposed,
    CategorySeeded,
    CategoryStatusChanged,
)
from opinalocal.domain import opinalocal

# Creator recorded for platform-seeded categories
ADMIN_CREATOR = "admin"


class CategoryStatus(Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


def normalize_name(name):
    return " ".join(name.split()).casefold()


@opinalocal.aggregate
class Category:
    name: String(required=True, max_length=100)
    normalized_name: String(required=True, max_length=100, unique=True)
    created_by: String(required=True, max_length=50)
    status: String(choices=CategoryStatus, default=CategoryStatus.PENDING.value)
    created_at: DateTime()
    updated_at: DateTime()

    @invariant.post
    def name_must_not_be_blank(self):
        if self.name is not None and not self.name.strip():
            raise ValidationError({"name": ["Category name cannot be empty"]})

    @classmethod
    def propose(cls, name, created_by):
        """Create a category in pending status, whoever the creator is."""
        if not name or not name.strip():
            raise ValidationError({"name": ["Category name cannot be empty"]})

        now = datetime.now(UTC)
        display_name = " ".join(name.split())

        category = cls(
            name=display_name,
            normalized_name=normalize_name(display_name),
            created_by=str(created_by),
            status=CategoryStatus.PENDING.value,
            created_at=now,
            updated_at=now,
        )
        category.raise_(
            CategoryProposed(
                category_id=str(category.id),
                name=display_name,
                created_by=str(created_by),
                proposed_at=now,
            )
        )
        return category

    @classmethod
    def seed(cls, name):
        """Install a platform category, pre-approved. Used only when seeding."""
        now = datetime.now(UTC)

        category = cls(
            name=name,
            normalized_name=normalize_name(name),
            created_by=ADMIN_CREATOR,
            status=CategoryStatus.APPROVED.value,
            created_at=now,
            updated_at=now,
        )
        category.raise_(CategorySeeded(category_id=str(category.id), name=name, seeded_at=now))
        return category

    def is_approved(self):
        return self.status == CategoryStatus.APPROVED.value

    def set_status(self, new_status):
        """Set the moderation status. Unknown status values are rejected."""
        valid = {status.value for status in CategoryStatus}
        if new_status not in valid:
            raise ValidationError({"status": [f"Invalid status: {new_status!r}. Use one of {sorted(valid)}"]})

        now = datetime.now(UTC)
        previous = self.status
        self.status = new_status
        self.updated_at = now

        self.raise_(
            CategoryStatusChanged(
                category_id=str(self.id),
                name=self.name,
                previous_status=previous,
                new_status=new_status,
                changed_at=now,
            )
        )

        if new_status == CategoryStatus.APPROVED.value:
            self.raise_(
                CategoryApproved(
                    category_id=str(self.id),
                    name=self.name,
                    created_by=self.created_by,
                    approved_at=now,
                )
            )
