"""Exception hierarchy shared by the repository, validator and service layers.

Validators and repositories raise these; services let them pass through
unchanged; the Flask route handlers in ``reviews_api.py`` are the only place
that turns them into HTTP status codes.
"""
from typing import Dict, Optional


class RestaurantReviewsError(Exception):
    """Base class for all domain errors."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class FieldValidationError(RestaurantReviewsError):
    """One or more fields broke their format, size or required rule.

    ``reasons`` maps every offending field to a human-readable message.
    """

    def __init__(self, reasons: Dict[str, str],
                 message: str = 'Field validation failed') -> None:
        super().__init__(message)
        self.reasons = dict(reasons)


class UniquenessConflict(RestaurantReviewsError):
    """The entity's unique key collides with another persisted record."""

    def __init__(self, field: str, message: Optional[str] = None) -> None:
        super().__init__(message or f'Unique {field} violation')
        self.field = field


class ReferenceNotFound(RestaurantReviewsError):
    """A foreign key points at an entity that does not exist."""

    def __init__(self, field: str, message: Optional[str] = None) -> None:
        super().__init__(message or f'Referenced {field} does not exist')
        self.field = field


class EntityNotFound(RestaurantReviewsError):
    """A lookup by id or unique key found nothing."""


class ImmutableEntity(RestaurantReviewsError):
    """The entity may not be changed or removed once persisted."""


class ConfigError(RestaurantReviewsError):
    """The configuration file could not be read."""
