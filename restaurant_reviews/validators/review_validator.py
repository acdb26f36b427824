"""Validation rules for reviews.

Besides the field checks, a review must point at an existing user and be
that user's first review of the restaurant.
"""
from database import MAX_ID, MIN_ID
from ..errors import ReferenceNotFound, UniquenessConflict
from .base import BaseValidator, FieldRule

TEXT_PATTERN = r"[A-Za-z-' ,.]+"
RATING_PATTERN = r'[0-5]'


class ReviewValidator(BaseValidator):

    rules = (
        FieldRule('userId', attr='user_id', kind=int, min_value=MIN_ID, max_value=MAX_ID),
        FieldRule('restaurantId', attr='restaurant_id', kind=int,
                  min_value=MIN_ID, max_value=MAX_ID),
        FieldRule('review', min_length=1, max_length=300, pattern=TEXT_PATTERN,
                  message='Please use a text without numbers or specials'),
        FieldRule('rating', pattern=RATING_PATTERN,
                  message='Please use a number between 0 and 5'),
    )

    def __init__(self, repository, user_repository) -> None:
        super().__init__(repository)
        self._users = user_repository

    def check_unique(self, db, review) -> None:
        if self._users.find_by_id(db, review.user_id) is None:
            raise ReferenceNotFound('userId', 'The user id does not exist')
        existing = self._repo.find_by_user_and_restaurant(
            db, review.user_id, review.restaurant_id)
        if existing is not None and existing.id != review.id:
            raise UniquenessConflict('review', self._repo.conflict_message)
