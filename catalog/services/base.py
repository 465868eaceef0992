"""
CRUD Service Base

The create/read/update/delete flow shared by every entity service.

Subclasses plug in:
- repository_class: the repository to use
- build(draft): a new, unsaved entity from a validated form
- apply(entity, draft): copy the mutable fields of a form onto an entity
- validate(draft, exclude_id): uniqueness rules, raising ValidationFailedError
- check_delete(entity_id): association rules, raising DomainConstraintError

Every write ends in a commit; if the commit or anything before it inside
transaction() fails, the session is rolled back and the error propagates.
Checks run before the transaction opens, so a refused operation touches
nothing.
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import UTC, datetime
from typing import Any, Generic, TypeVar

from sqlalchemy.orm import Session

from catalog.database import Base
from catalog.exceptions import NotFoundError
from catalog.repositories.base import BaseRepository
from catalog.utils.pagination import Page, PageRequest

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)
DraftT = TypeVar("DraftT")


class CrudService(Generic[ModelT, DraftT]):
    """Shared entity lifecycle on top of a repository."""

    entity_name: str = "Entity"
    repository_class: type[BaseRepository[ModelT]]

    def __init__(self, session: Session) -> None:
        self.session = session
        self.repository = self.repository_class(session)

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------
    def get_all(self) -> set[ModelT]:
        """All entities, as an unordered set."""
        return set(self.repository.list_all())

    def find_by_id(self, entity_id: int) -> ModelT:
        """
        Get an entity by id.

        Raises:
            NotFoundError: if no entity has this id
        """
        entity = self.repository.find_by_id(entity_id)
        if entity is None:
            raise NotFoundError(self.entity_name, entity_id)
        return entity

    def exists(self, entity_id: int) -> bool:
        return self.repository.find_by_id(entity_id) is not None

    def find_all(self, page_request: PageRequest) -> Page[ModelT]:
        """One page of entities, sliced by the database."""
        return self.repository.find_all(page_request)

    def get_latest_entry(self) -> ModelT | None:
        """The most recently created entity, or None when there are none."""
        return self.repository.find_top_by_order_by_id_desc()

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------
    def create(self, draft: DraftT) -> ModelT:
        """
        Validate, build and store a new entity.

        Returns the newest entity as re-read from storage, not the object
        that was just added.
        """
        self.validate(draft)
        entity = self.build(draft)
        with self.transaction():
            self.repository.save(entity)

        created = self.get_latest_entry()
        logger.info(f"Created {self.entity_name} {created.id}")
        return created

    def update(self, entity_id: int, draft: DraftT) -> None:
        """
        Copy the draft's fields onto a stored entity.

        Raises:
            NotFoundError: if no entity has this id
            ValidationFailedError: if the draft breaks a uniqueness rule
        """
        entity = self.find_by_id(entity_id)
        self.validate(draft, exclude_id=entity_id)
        self.apply(entity, draft)
        self.touch(entity)
        with self.transaction():
            self.repository.save(entity)
        logger.info(f"Updated {self.entity_name} {entity_id}")

    def delete(self, entity_id: int) -> None:
        """Delete by id. Deleting an id that does not exist is a no-op."""
        self.check_delete(entity_id)
        with self.transaction():
            self.repository.delete_by_id(entity_id)
        logger.info(f"Deleted {self.entity_name} {entity_id}")

    # -------------------------------------------------------------------------
    # Hooks
    # -------------------------------------------------------------------------
    def build(self, draft: DraftT) -> ModelT:
        raise NotImplementedError

    def apply(self, entity: ModelT, draft: DraftT) -> None:
        raise NotImplementedError

    def validate(self, draft: DraftT, exclude_id: int | None = None) -> None:
        pass

    def check_delete(self, entity_id: int) -> None:
        pass

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------
    @staticmethod
    def touch(*entities: Any) -> None:
        """Stamp updated_at on entities whose change the row itself may not show."""
        now = datetime.now(UTC)
        for entity in entities:
            entity.updated_at = now

    @contextmanager
    def transaction(self) -> Iterator[None]:
        """Commit on success, roll back and re-raise on any failure."""
        try:
            yield
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise
