"""
Base repository class with owner-scoped CRUD operations.
Every query built here carries the caller's user_id in its WHERE clause;
a caller-supplied ownership claim is never trusted.
"""

from typing import Any, Generic, List, Optional, Type, TypeVar

from sqlalchemy import delete, exists, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.elements import ColumnElement

from app.db.base import Base, utcnow

ModelType = TypeVar("ModelType", bound=Base)

# Columns a caller can never set or change through the repository
PROTECTED_FIELDS = frozenset({"id", "user_id", "created_at", "updated_at"})


class BaseRepository(Generic[ModelType]):
    """Base repository for models that belong to a user."""

    def __init__(self, model: Type[ModelType], session: AsyncSession):
        """
        Initialize repository.

        Args:
            model: SQLAlchemy model class with id and user_id columns
            session: Async database session
        """
        self.model = model
        self.session = session

    def _owned(self, user_id: str, id: Optional[str] = None) -> List[ColumnElement]:
        """WHERE conditions restricting a statement to one owner (and optionally one row)."""
        conditions = [self.model.user_id == user_id]
        if id is not None:
            conditions.append(self.model.id == id)
        return conditions

    @staticmethod
    def _writable(values: dict) -> dict:
        return {key: value for key, value in values.items() if key not in PROTECTED_FIELDS}

    async def create(self, user_id: str, /, **kwargs: Any) -> ModelType:
        """
        Create a new record owned by user_id.

        Args:
            user_id: Owner; overrides any user_id in kwargs
            **kwargs: Model attributes

        Returns:
            Created model instance
        """
        instance = self.model(**self._writable(kwargs), user_id=user_id)
        self.session.add(instance)
        await self.session.flush()
        await self.session.refresh(instance)
        return instance

    async def get(self, user_id: str, id: str) -> Optional[ModelType]:
        """
        Get a record by ID, only if user_id owns it.

        Returns:
            Model instance or None (absent and not-owned look the same)
        """
        result = await self.session.execute(
            select(self.model)
            .where(*self._owned(user_id, id))
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def update(self, user_id: str, id: str, /, **kwargs: Any) -> Optional[ModelType]:
        """
        Update the given attributes of an owned record and refresh updated_at.

        Returns:
            Updated model instance or None if no owned row matched
        """
        values = self._writable(kwargs)
        values["updated_at"] = utcnow()

        result = await self.session.execute(
            update(self.model)
            .where(*self._owned(user_id, id))
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            return None

        await self.session.flush()
        return await self.get(user_id, id)

    async def delete(self, user_id: str, id: str) -> bool:
        """
        Permanently delete an owned record.

        Returns:
            True if deleted, False if no owned row matched
        """
        result = await self.session.execute(
            delete(self.model)
            .where(*self._owned(user_id, id))
            .execution_options(synchronize_session=False)
        )
        await self.session.flush()
        return result.rowcount > 0

    async def exists(self, user_id: str, id: str) -> bool:
        """Check whether user_id owns a record with this ID."""
        result = await self.session.execute(
            select(exists().where(*self._owned(user_id, id)))
        )
        return bool(result.scalar())
