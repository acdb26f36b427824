"""Generic create/read/update/delete orchestration over a validator and repository."""
import logging
from typing import Any, List, Optional


class CrudService:
    """Validates, then persists, entities of one type.

    Rules
    -----
    * ``create`` and ``update`` run the validator first; any validation
      error propagates unchanged and nothing is written.
    * ``delete`` of an entity without an id is a no-op returning ``None``.
    * Lookups pass straight through to the repository.

    All methods accept a *db* SQLAlchemy session as the first argument so
    that callers (Flask route handlers) control the session lifecycle.
    """

    def __init__(self, repository, validator) -> None:
        self._repo = repository
        self._validator = validator
        self._log = logging.getLogger(f'restaurant_reviews.service.{type(self).__name__}')

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def find_all(self, db) -> List[Any]:
        return self._repo.find_all(db)

    def find_by_id(self, db, entity_id: int) -> Optional[Any]:
        return self._repo.find_by_id(db, entity_id)

    def find_by_unique(self, db, value: Any) -> Any:
        """Return the entity holding *value* as its unique key.

        Raises:
            EntityNotFound: If there is none.
        """
        return self._repo.find_by_unique(db, value)

    def create(self, db, entity: Any) -> Any:
        """Validate *entity* and insert it.

        Returns:
            The persisted entity, with its generated id.

        Raises:
            FieldValidationError, UniquenessConflict, ReferenceNotFound
        """
        self._log.info("create() - Creating %r", entity)
        self._validator.validate(db, entity)
        return self._repo.create(db, entity)

    def update(self, db, entity: Any) -> Any:
        """Validate *entity* and write its fields over the stored row."""
        self._log.info("update() - Updating %r", entity)
        self._validator.validate(db, entity)
        return self._repo.update(db, entity)

    def delete(self, db, entity: Any) -> Optional[Any]:
        """Remove *entity* if it has been persisted.

        Returns:
            The removed entity, or ``None`` when there was nothing to remove.
        """
        self._log.info("delete() - Deleting %r", entity)
        if entity.id is None:
            self._log.info("delete() - %r has no id, nothing to delete", entity)
            return None
        return self._repo.delete(db, entity)
