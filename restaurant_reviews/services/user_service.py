"""Business logic for users."""
from database import User
from .base import CrudService


class UserService(CrudService):
    """Users are unique by email.  Deleting a user also deletes their reviews."""

    def find_by_email(self, db, email: str) -> User:
        """Return the user with *email*; raises ``EntityNotFound`` otherwise."""
        return self.find_by_unique(db, email)
