"""Repository for reviews ({user_id, restaurant_id} is unique)."""
from typing import List, Optional

from database import Review, User, id_in_range
from ..errors import ReferenceNotFound
from .base import BaseRepository


class ReviewRepository(BaseRepository):
    """Persists :class:`~database.Review` rows.

    A review has no single unique column; the pair ``(user_id,
    restaurant_id)`` is unique, enforced by a composite constraint.
    """

    model = Review
    order_by = ('user_id', 'restaurant_id')
    unique_label = 'review'
    conflict_message = 'The user has already given review for that restaurant'

    def find_by_user_id(self, db, user_id: int) -> List[Review]:
        """Return all reviews written by *user_id* (may be empty)."""
        if not id_in_range(user_id):
            return []
        return (db.query(Review)
                .filter(Review.user_id == user_id)
                .order_by(Review.restaurant_id)
                .all())

    def find_by_user_and_restaurant(self, db, user_id: int,
                                    restaurant_id: int) -> Optional[Review]:
        """Return the review *user_id* wrote for *restaurant_id*, or ``None``."""
        if not (id_in_range(user_id) and id_in_range(restaurant_id)):
            return None
        return (db.query(Review)
                .filter(Review.user_id == user_id,
                        Review.restaurant_id == restaurant_id)
                .first())

    def create(self, db, review: Review) -> Review:
        """Attach *review* to its author, then insert it."""
        user = db.get(User, review.user_id) if id_in_range(review.user_id) else None
        if user is None:
            raise ReferenceNotFound('userId', 'The user id does not exist')
        user.reviews.append(review)
        return super().create(db, review)
