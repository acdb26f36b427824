"""Business logic for restaurant reviews."""
from typing import List

from database import Review
from ..errors import ImmutableEntity
from .base import CrudService


class ReviewService(CrudService):
    """Reviews can be posted and read but never edited or removed.

    Rules
    -----
    * ``userId`` must belong to an existing user.
    * A user may review each restaurant only once.
    * Reviews disappear only when their author is deleted.
    """

    def find_by_user_id(self, db, user_id: int) -> List[Review]:
        """Return every review written by *user_id* (may be empty)."""
        return self._repo.find_by_user_id(db, user_id)

    def update(self, db, entity):
        """Always raises :class:`ImmutableEntity`."""
        raise ImmutableEntity('Reviews cannot be changed once posted')

    def delete(self, db, entity):
        raise ImmutableEntity('Reviews are removed only together with their user')
