"""
Base Repository

Provides common data access operations for all repositories.

Repositories only stage changes on the session and flush them so that later
reads in the same unit of work see them. Committing or rolling back is left
to the caller's transaction.
"""

from typing import Any, Generic, TypeVar

from sqlalchemy import func
from sqlmodel import Session, SQLModel, select


ModelType = TypeVar("ModelType", bound=SQLModel)


class BaseRepository(Generic[ModelType]):
    """Base repository with common data access operations"""

    def __init__(self, model: type[ModelType], session: Session):
        """
        Initialize repository

        Args:
            model: SQLModel class
            session: Database session
        """
        self.model = model
        self.session = session

    def add(self, obj: ModelType) -> ModelType:
        """
        Stage a new or modified record

        Args:
            obj: Model instance to persist

        Returns:
            The same model instance
        """
        self.session.add(obj)
        self.session.flush()
        return obj

    def get(self, id: Any) -> ModelType | None:
        """
        Get record by primary key

        Args:
            id: Primary key value (a tuple for composite keys)

        Returns:
            Model instance or None
        """
        return self.session.get(self.model, id)

    def delete(self, obj: ModelType) -> None:
        """
        Delete a record

        Args:
            obj: Model instance to delete
        """
        self.session.delete(obj)
        self.session.flush()

    def count(self) -> int:
        """
        Count total records

        Returns:
            Total count
        """
        statement = select(func.count()).select_from(self.model)
        return self.session.exec(statement).one()
