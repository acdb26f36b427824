"""Services package — expose all concrete services from one import."""
from .base import CrudService
from .user_service import UserService
from .restaurant_service import RestaurantService
from .review_service import ReviewService

__all__ = [
    'CrudService',
    'UserService',
    'RestaurantService',
    'ReviewService',
]
