"""
Base Repository

Generic CRUD and paging queries shared by every entity repository.

Repositories flush but never commit; the calling service decides where a
transaction ends.
"""

from typing import Generic, TypeVar

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from catalog.database import Base
from catalog.utils.pagination import Page, PageRequest

ModelT = TypeVar("ModelT", bound=Base)


class BaseRepository(Generic[ModelT]):
    """Repository for one mapped model class, set by subclasses."""

    model: type[ModelT]

    def __init__(self, session: Session):
        """
        Initialize the repository with a database session.

        Args:
            session: SQLAlchemy session for database operations
        """
        self.session = session

    def save(self, entity: ModelT) -> ModelT:
        """Add the entity to the session and flush so it gets an id."""
        self.session.add(entity)
        self.session.flush()
        return entity

    def find_by_id(self, entity_id: int) -> ModelT | None:
        return self.session.get(self.model, entity_id)

    def delete_by_id(self, entity_id: int) -> None:
        """Delete the entity with this id; a missing id is ignored."""
        entity = self.find_by_id(entity_id)
        if entity is not None:
            self.session.delete(entity)
            self.session.flush()

    def find_by_ids(self, ids: list[int]) -> list[ModelT]:
        """Get the entities whose id is in `ids`; unknown ids are skipped."""
        if not ids:
            return []
        stmt = select(self.model).where(self.model.id.in_(ids)).order_by(self.model.id)
        return list(self.session.execute(stmt).scalars().all())

    def list_all(self) -> list[ModelT]:
        stmt = select(self.model).order_by(self.model.id)
        return list(self.session.execute(stmt).scalars().all())

    def count(self) -> int:
        stmt = select(func.count()).select_from(self.model)
        return self.session.execute(stmt).scalar_one()

    def find_all(self, page_request: PageRequest) -> Page[ModelT]:
        """
        Get one page of entities ordered by id.

        The count runs first so a page index past the end can be clamped
        onto the last page before the slice is fetched.
        """
        total = self.count()
        page_request = page_request.clamp(total)
        stmt = (
            select(self.model)
            .order_by(self.model.id)
            .offset(page_request.offset)
            .limit(page_request.size)
        )
        items = list(self.session.execute(stmt).scalars().all())
        return Page(items=items, total=total, number=page_request.page, size=page_request.size)

    def find_top_by_order_by_id_desc(self) -> ModelT | None:
        """Get the entity with the highest id, i.e. the most recently created."""
        stmt = select(self.model).order_by(self.model.id.desc()).limit(1)
        return self.session.execute(stmt).scalars().first()
