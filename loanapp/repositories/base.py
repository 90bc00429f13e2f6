from typing import Any, Generic, List, Optional, Tuple, Type, TypeVar
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.exc import StaleDataError

from loanapp.core.exceptions import ConcurrentUpdateError
from loanapp.db.base import Base

# Type variable for the model class
ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """
    Generic base repository providing common persistence operations.

    This class implements the repository pattern with async database operations,
    providing a foundation for domain-specific repositories to extend.

    Type Parameters:
        ModelType: The SQLAlchemy model class this repository manages
    """

    def __init__(self, model: Type[ModelType], db: AsyncSession):
        """
        Initialize the repository.

        Args:
            model: The SQLAlchemy model class
            db: Async database session
        """
        self.model = model
        self.db = db

    async def save(self, instance: ModelType) -> ModelType:
        """
        Insert or update an entity and flush it to the database.

        Versioned models are written with a guard on the version read
        earlier; a guard that matches no row means another transaction
        updated the entity first.

        Args:
            instance: New or already persistent entity

        Returns:
            The flushed entity

        Raises:
            ConcurrentUpdateError: If the versioned row changed since it was read
            IntegrityError: If a database constraint is violated
        """
        self.db.add(instance)
        try:
            await self.db.flush()
        except StaleDataError as e:
            raise ConcurrentUpdateError(
                f"{self.model.__name__} was modified concurrently, retry the operation"
            ) from e
        return instance

    async def get_by_id(self, id: UUID) -> Optional[ModelType]:
        """
        Retrieve an entity by its ID.

        Args:
            id: The UUID of the entity

        Returns:
            The entity if found, None otherwise
        """
        stmt = select(self.model).where(self.model.id == id)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def get_page(
        self,
        skip: int = 0,
        limit: int = 100,
        order_by: Optional[Tuple[Any, ...]] = None,
    ) -> Tuple[List[ModelType], int]:
        """
        Retrieve one page of entities together with the total count.

        Args:
            skip: Number of records to skip (offset)
            limit: Maximum number of records to return
            order_by: Optional ordering clauses

        Returns:
            Tuple of (entities on the page, total number of entities)
        """
        stmt = select(self.model)
        if order_by is not None:
            stmt = stmt.order_by(*order_by)
        stmt = stmt.offset(skip).limit(limit)

        result = await self.db.execute(stmt)
        items = list(result.scalars().all())
        return items, await self.count()

    async def count(self, **filters: Any) -> int:
        """
        Count entities matching the given filters.

        Args:
            **filters: Field equality filters

        Returns:
            Count of matching entities
        """
        stmt = select(func.count()).select_from(self.model)

        for field, value in filters.items():
            if hasattr(self.model, field):
                stmt = stmt.where(getattr(self.model, field) == value)

        result = await self.db.execute(stmt)
        return result.scalar_one()

    async def exists_by(self, **filters: Any) -> bool:
        """
        Check whether any entity matches the given filters.

        Args:
            **filters: Field equality filters

        Returns:
            True if at least one entity matches, False otherwise
        """
        return await self.count(**filters) > 0

    async def find_one_by(self, **filters: Any) -> Optional[ModelType]:
        """
        Find a single entity matching the given filters.

        Args:
            **filters: Field equality filters

        Returns:
            The first matching entity, or None if not found
        """
        stmt = select(self.model)

        for field, value in filters.items():
            if hasattr(self.model, field):
                stmt = stmt.where(getattr(self.model, field) == value)

        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()
