"""Business logic for restaurants."""
from database import Restaurant
from .base import CrudService


class RestaurantService(CrudService):
    """Restaurants are unique by phone number."""

    def find_by_phone_number(self, db, phone_number: str) -> Restaurant:
        """Return the restaurant on *phone_number*; raises ``EntityNotFound`` otherwise."""
        return self.find_by_unique(db, phone_number)
