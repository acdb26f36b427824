"""Validation rules for users: name, email format, phone number, unique email."""
from .base import BaseValidator, FieldRule

NAME_PATTERN = r"[A-Za-z- ']+"
NAME_MESSAGE = 'Please use a name without numbers or specials'
PHONE_PATTERN = r'0[0-9]{10}'
EMAIL_PATTERN = r"[A-Za-z0-9._%+'-]+@[A-Za-z0-9-]+(\.[A-Za-z0-9-]+)+"


class UserValidator(BaseValidator):
    """Checks a :class:`~database.User` before it is created or updated.

    The email address must be unused by every *other* user; re-saving a
    user with its own email is allowed.
    """

    rules = (
        FieldRule('name', min_length=1, max_length=50,
                  pattern=NAME_PATTERN, message=NAME_MESSAGE),
        FieldRule('email', not_empty=True, pattern=EMAIL_PATTERN,
                  message='The email address must be in the format of name@domain.com'),
        FieldRule('phoneNumber', attr='phone_number', pattern=PHONE_PATTERN),
    )
