"""
Base Data Access Object (DAO) class.

WHY: The DAO pattern separates database operations from business logic,
making the codebase more testable, maintainable, and allowing easier
database technology changes in the future.
"""

from typing import Generic, TypeVar, Type, List, Any
from sqlalchemy import Select
from sqlalchemy.ext.asyncio import AsyncSession

from records_api.models.base import Base

# Type variable for model class
ModelType = TypeVar("ModelType", bound=Base)


class BaseDAO(Generic[ModelType]):
    """
    Base Data Access Object shared by all model DAOs.

    Type Parameters:
        ModelType: The SQLAlchemy model class this DAO manages
    """

    def __init__(self, model: Type[ModelType], session: AsyncSession):
        """
        Initialize DAO with model class and database session.

        Args:
            model: The SQLAlchemy model class
            session: Async database session
        """
        self.model = model
        self.session = session

    async def create(self, **kwargs: Any) -> ModelType:
        """
        Create a new record.

        Args:
            **kwargs: Field values for the new record

        Returns:
            The created model instance with database-generated fields populated

        Raises:
            IntegrityError: If unique constraints are violated
        """
        instance = self.model(**kwargs)
        self.session.add(instance)
        await self.session.flush()  # Flush to get auto-generated fields
        await self.session.refresh(instance)
        return instance

    async def fetch_all(self, query: Select) -> List[ModelType]:
        """
        Execute a select over this DAO's model and return the instances.

        Args:
            query: Select statement built by the caller

        Returns:
            List of model instances
        """
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def fetch_scalar(self, query: Select) -> Any:
        """Execute a select that yields one scalar (count, max, ...)."""
        result = await self.session.execute(query)
        return result.scalar_one_or_none()
