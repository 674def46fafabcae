"""SetCategoryStatus — moderators approve, reject or reopen a category."""

from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from opinalocal.category.category import Category
from opinalocal.domain import opinalocal


@opinalocal.command(part_of="Category")
class SetCategoryStatus:
    category_id: Identifier(required=True)
    status: String(required=True, max_length=20)


@opinalocal.command_handler(part_of=Category)
class ModerateCategoryHandler:
    @handle(SetCategoryStatus)
    def set_status(self, command):
        repo = current_domain.repository_for(Category)
        category = repo.get(command.category_id)
        category.set_status(command.status)
        repo.add(category)
