"""Repository for registered users, ordered by name."""
from database import User
from .base import BaseRepository


class UserRepository(BaseRepository):
    """Persists :class:`~database.User` rows.  Unique key: ``email``."""

    model = User
    order_by = ('name',)
    unique_field = 'email'
    unique_label = 'email'
    conflict_message = 'That email is already used, please use a unique email'

    def find_by_email(self, db, email: str) -> User:
        """Return the user registered with *email*.

        Raises:
            EntityNotFound: If nobody uses that email.
        """
        return self.find_by_unique(db, email)
