"""Repository base class used by all concrete repositories."""
import logging
from typing import Any, List, Optional, Sequence

from sqlalchemy.exc import IntegrityError

from database import id_in_range
from ..errors import EntityNotFound, UniquenessConflict


class BaseRepository:
    """Provides SQLAlchemy-backed persistence for a single model class.

    Sub-classes set :attr:`model`, :attr:`order_by` (attribute names used by
    :meth:`find_all`) and :attr:`unique_field` (the attribute holding the
    domain-unique key, or ``None`` when the key spans several columns).

    Every method takes the SQLAlchemy session *db* as its first argument so
    that callers (Flask route handlers) control the session lifecycle.
    Mutating methods commit on success and roll back on failure.
    """

    model: Any = None
    order_by: Sequence[str] = ()
    unique_field: Optional[str] = None
    # JSON name of the unique field, used in conflict reasons
    unique_label: Optional[str] = None
    conflict_message: Optional[str] = None

    def __init__(self) -> None:
        self._log = logging.getLogger(f'restaurant_reviews.repository.{type(self).__name__}')

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def find_all(self, db) -> List[Any]:
        """Return every row, ordered by :attr:`order_by`."""
        columns = [getattr(self.model, name) for name in self.order_by]
        return db.query(self.model).order_by(*columns).all()

    def find_by_id(self, db, entity_id: int) -> Optional[Any]:
        """Return the row with primary key *entity_id*, or ``None``.

        Ids too large for the key column cannot exist, so they find nothing.
        """
        if not id_in_range(entity_id):
            return None
        return db.get(self.model, entity_id)

    def find_by_unique(self, db, value: Any) -> Any:
        """Return the row whose unique field equals *value*.

        Raises:
            EntityNotFound: If no row matches.
        """
        column = getattr(self.model, self.unique_field)
        entity = db.query(self.model).filter(column == value).first()
        if entity is None:
            raise EntityNotFound(
                f"No {self.model.__name__} with {self.unique_label or self.unique_field} "
                f"{value} was found!")
        return entity

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def create(self, db, entity: Any) -> Any:
        """Insert *entity* and return it with its generated id."""
        self._log.info("Creating %r", entity)
        db.add(entity)
        self._commit(db)
        db.refresh(entity)
        return entity

    def update(self, db, entity: Any) -> Any:
        """Merge the state of *entity* into its persisted row and return it."""
        self._log.info("Updating %r", entity)
        merged = db.merge(entity)
        self._commit(db)
        db.refresh(merged)
        return merged

    def delete(self, db, entity: Any) -> Optional[Any]:
        """Remove *entity*.  Returns ``None`` if no row has its id."""
        self._log.info("Deleting %r", entity)
        if entity.id is None:
            return None
        persisted = self.find_by_id(db, entity.id)
        if persisted is None:
            return None
        db.delete(persisted)
        self._commit(db)
        return persisted

    def _commit(self, db) -> None:
        """Commit, translating unique-constraint failures into conflicts."""
        try:
            db.commit()
        except IntegrityError as exc:
            db.rollback()
            self._log.warning("Integrity error on commit: %s", exc.orig)
            raise UniquenessConflict(self.unique_label or self.unique_field or 'id',
                                     self.conflict_message) from exc
        except Exception:
            db.rollback()
            raise
