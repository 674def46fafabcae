"""CreateCategory — a user proposes a new community rating category.

The lookup on ``normalized_name`` is a pre-flight check. Two concurrent
proposals can both pass it; the unique constraint on the column decides,
and its violation is reported as the same conflict.
"""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import String
from protean.utils.globals import current_domain

from opinalocal.category.category import Category, normalize_name
from opinalocal.domain import opinalocal
from opinalocal.shared.errors import CategoryConflictError
from opinalocal.utils.queries import fetch_first


@opinalocal.command(part_of="Category")
class CreateCategory:
    name: String(required=True, max_length=100)
    created_by: String(required=True, max_length=50)


@opinalocal.command_handler(part_of=Category)
class CreateCategoryHandler:
    @handle(CreateCategory)
    def create_category(self, command):
        existing = fetch_first(Category, normalized_name=normalize_name(command.name))
        if existing is not None:
            raise CategoryConflictError(existing.name, existing_id=str(existing.id))

        category = Category.propose(name=command.name, created_by=command.created_by)
        try:
            current_domain.repository_for(Category).add(category)
        except ValidationError as exc:
            if "normalized_name" in exc.messages:
                raise CategoryConflictError(category.name) from exc
            raise
        return str(category.id)
