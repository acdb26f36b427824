"""Field rules and the validator base class shared by all entities."""
import logging
import re
from typing import Any, Dict, Optional, Sequence

from ..errors import EntityNotFound, FieldValidationError, UniquenessConflict


class FieldRule:
    """Declarative constraints for one entity attribute.

    Checks run in order (required, type, not-empty, size, pattern) and the
    first one that fails supplies the message for that field.

    Args:
        field:      JSON name reported in violation reasons.
        attr:       Model attribute to read (defaults to *field*).
        required:   Reject ``None``.
        kind:       Expected Python type, ``str`` or ``int``.
        not_empty:  Reject the empty string.
        min_length: Minimum string length.
        max_length: Maximum string length.
        min_value:  Smallest accepted number (``int`` kind only).
        max_value:  Largest accepted number (``int`` kind only).
        pattern:    Regular expression the whole value must match.
        message:    Message used when *pattern* does not match.
    """

    def __init__(self, field: str, attr: Optional[str] = None, required: bool = True,
                 kind: type = str, not_empty: bool = False,
                 min_length: Optional[int] = None, max_length: Optional[int] = None,
                 pattern: Optional[str] = None, message: Optional[str] = None,
                 min_value: Optional[int] = None, max_value: Optional[int] = None) -> None:
        self.field = field
        self.attr = attr or field
        self.required = required
        self.kind = kind
        self.not_empty = not_empty
        self.min_length = min_length
        self.max_length = max_length
        self.min_value = min_value
        self.max_value = max_value
        self.pattern = pattern
        self._regex = re.compile(pattern) if pattern else None
        self.message = message or (f'must match "{pattern}"' if pattern else None)

    def check(self, value: Any) -> Optional[str]:
        """Return the violation message for *value*, or ``None`` if it passes."""
        if value is None:
            return 'may not be null' if self.required else None
        if self.kind is int:
            if isinstance(value, bool) or not isinstance(value, int):
                return 'must be a number'
            if self.min_value is not None and value < self.min_value:
                return f'must be greater than or equal to {self.min_value}'
            if self.max_value is not None and value > self.max_value:
                return f'must be less than or equal to {self.max_value}'
            return None
        if not isinstance(value, str):
            return 'must be a string'
        if self.not_empty and value == '':
            return 'may not be empty'
        if self.min_length is not None or self.max_length is not None:
            low = self.min_length if self.min_length is not None else 0
            high = self.max_length if self.max_length is not None else 2 ** 31 - 1
            if not low <= len(value) <= high:
                return f'size must be between {low} and {high}'
        if self._regex is not None and not self._regex.fullmatch(value):
            return self.message
        return None


class BaseValidator:
    """Validates an entity in two stages.

    1. Every :class:`FieldRule` in :attr:`rules` is checked and *all*
       violations are raised together as one :class:`FieldValidationError`.
    2. Only when the fields are valid, the unique key is looked up through
       the repository.  A hit on a different record raises
       :class:`UniquenessConflict`; a hit on the record being updated is fine.
    """

    rules: Sequence[FieldRule] = ()

    def __init__(self, repository) -> None:
        self._repo = repository
        self._log = logging.getLogger(f'restaurant_reviews.validator.{type(self).__name__}')

    def validate(self, db, entity: Any) -> None:
        """Raise if *entity* may not be persisted as it stands."""
        self.check_fields(entity)
        self.check_unique(db, entity)
        self._log.debug("Validated %r", entity)

    def check_fields(self, entity: Any) -> None:
        reasons: Dict[str, str] = {}
        for rule in self.rules:
            message = rule.check(getattr(entity, rule.attr, None))
            if message is not None:
                reasons[rule.field] = message
        if reasons:
            raise FieldValidationError(reasons)

    def check_unique(self, db, entity: Any) -> None:
        value = getattr(entity, self._repo.unique_field)
        try:
            existing = self._repo.find_by_unique(db, value)
        except EntityNotFound:
            return
        if entity.id is not None and existing.id == entity.id:
            return
        raise UniquenessConflict(self._repo.unique_label, self._repo.conflict_message)
