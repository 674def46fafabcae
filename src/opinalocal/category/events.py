"""Domain events for the Category aggregate."""

from protean.fields import DateTime, Identifier, String

from opinalocal.domain import opinalocal


@opinalocal.event(part_of="Category")
class CategoryProposed:
    """A user suggested a new rating category; it awaits moderation."""

    __version__ = 1

    category_id: Identifier(required=True)
    name: String(required=True)
    created_by: String(required=True)
    proposed_at: DateTime(required=True)


@opinalocal.event(part_of="Category")
class CategorySeeded:
    """A platform category was installed pre-approved."""

    __version__ = 1

    category_id: Identifier(required=True)
    name: String(required=True)
    seeded_at: DateTime(required=True)


@opinalocal.event(part_of="Category")
class CategoryStatusChanged:
    """A moderator set the category's status. Carries the previous status for auditing."""

    __version__ = 1

    category_id: Identifier(required=True)
    name: String(required=True)
    previous_status: String(required=True)
    new_status: String(required=True)
    changed_at: DateTime(required=True)


@opinalocal.event(part_of="Category")
class CategoryApproved:
    """The category is now offered to every reviewer."""

    __version__ = 1

    category_id: Identifier(required=True)
    name: String(required=True)
    created_by: String(required=True)
    approved_at: DateTime(required=True)
