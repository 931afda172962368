"""
Base read operations.

This module contains the read-only repository base that specific model
repositories inherit from. The hydrology database is never written by this
service, so there are no create/update/delete operations.
"""

from typing import Any, Dict, Generic, List, Type, TypeVar
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import Select

from app.database import Base

ModelType = TypeVar("ModelType", bound=Base)


class CRUDReadOnly(Generic[ModelType]):
    """
    Base read operations class.

    Instances hold no per-request state and are shared by all requests.
    """

    def __init__(self, model: Type[ModelType]):
        """
        Initialize read operations for a specific model.

        Args:
            model: The SQLAlchemy model class
        """
        self.model = model

    async def fetch_models(self, db: AsyncSession, stmt: Select) -> List[ModelType]:
        """Run a statement selecting the model and return the instances."""
        result = await db.execute(stmt)
        return result.scalars().all()

    async def fetch_scalar(self, db: AsyncSession, stmt: Select) -> Any:
        """Run a single-value statement, such as a count."""
        result = await db.execute(stmt)
        return result.scalar_one()

    async def fetch_one(self, db: AsyncSession, stmt: Select) -> Dict[str, Any]:
        """
        Run a statement returning exactly one row.

        Returns:
            The row as a dict keyed by column label
        """
        result = await db.execute(stmt)
        return dict(result.mappings().one())

    async def fetch_all(self, db: AsyncSession, stmt: Select) -> List[Dict[str, Any]]:
        """
        Run a statement and return every row.

        Returns:
            List of rows as dicts keyed by column label
        """
        result = await db.execute(stmt)
        return [dict(row) for row in result.mappings().all()]
