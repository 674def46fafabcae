"""Domain errors that have no Protean counterpart.

Validation failures use ``protean.exceptions.ValidationError`` and missing
records ``protean.exceptions.ObjectNotFoundError``; the two below let callers
tell a duplicate or a forbidden request apart from bad input.
"""


class CategoryConflictError(Exception):
    """A category with the same name (ignoring case) already exists."""

    def __init__(self, name, existing_id=None):
        self.name = name
        self.existing_id = existing_id
        super().__init__(f"Category '{name}' already exists")

    @property
    def messages(self):
        return {"name": [str(self)]}


class ForbiddenError(Exception):
    """The requester is not allowed to perform the operation."""

    def __init__(self, message="Operation not permitted", field="requester_id"):
        self.field = field
        super().__init__(message)

    @property
    def messages(self):
        return {self.field: [str(self)]}
