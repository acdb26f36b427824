"""Repository package — expose all concrete repositories from one import."""
from .base import BaseRepository
from .user_repository import UserRepository
from .restaurant_repository import RestaurantRepository
from .review_repository import ReviewRepository

__all__ = [
    'BaseRepository',
    'UserRepository',
    'RestaurantRepository',
    'ReviewRepository',
]
