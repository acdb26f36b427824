"""Validation rules for restaurants: name, post code, unique phone number."""
from .base import BaseValidator, FieldRule
from .user_validator import NAME_MESSAGE, NAME_PATTERN, PHONE_PATTERN

POST_CODE_PATTERN = r'[A-Za-z0-9]{6}'


class RestaurantValidator(BaseValidator):
    """Checks a :class:`~database.Restaurant` before it is created or updated."""

    rules = (
        FieldRule('name', min_length=1, max_length=50,
                  pattern=NAME_PATTERN, message=NAME_MESSAGE),
        FieldRule('postCode', attr='post_code', not_empty=True, pattern=POST_CODE_PATTERN),
        FieldRule('phoneNumber', attr='phone_number', pattern=PHONE_PATTERN),
    )
