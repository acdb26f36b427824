"""Validator package — expose all concrete validators from one import."""
from .base import BaseValidator, FieldRule
from .user_validator import UserValidator
from .restaurant_validator import RestaurantValidator
from .review_validator import ReviewValidator

__all__ = [
    'BaseValidator',
    'FieldRule',
    'UserValidator',
    'RestaurantValidator',
    'ReviewValidator',
]
