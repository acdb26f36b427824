"""Repository for restaurants, ordered by name."""
from database import Restaurant
from .base import BaseRepository


class RestaurantRepository(BaseRepository):
    """Persists :class:`~database.Restaurant` rows.  Unique key: ``phone_number``."""

    model = Restaurant
    order_by = ('name',)
    unique_field = 'phone_number'
    unique_label = 'phoneNumber'
    conflict_message = 'That phone number is already used, please use a unique phone number'

    def find_by_phone_number(self, db, phone_number: str) -> Restaurant:
        """Return the restaurant reachable on *phone_number*.

        Raises:
            EntityNotFound: If no restaurant has that number.
        """
        return self.find_by_unique(db, phone_number)
