# school_admin/services/base_service.py
"""Base service with common CRUD operations."""
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func
from typing import Type, Any, Callable, Dict, Optional, TypeVar, Generic
import logging

from ..core.exceptions import ConflictError, NotFoundError
from ..utils.pagination import Paginator

logger = logging.getLogger(__name__)

# Define generic type
T = TypeVar('T')

class BaseService(Generic[T]):
    # Used in "<resource> not found" messages
    resource_name: str = "Record"

    def __init__(self, model: Type[T], db: AsyncSession):
        self.model = model
        self.db = db

    async def get(self, id: Any) -> Optional[T]:
        stmt = select(self.model).where(self.model.id == id)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def get_or_404(self, id: Any) -> T:
        obj = await self.get(id)
        if obj is None:
            raise NotFoundError(self.resource_name)
        return obj

    async def get_paginated(self, stmt, page: int = 1, size: int = 20, order_by=()) -> Dict[str, Any]:
        """Run a filtered select with count, ordering and offset/limit"""
        count_stmt = select(func.count()).select_from(stmt.order_by(None).subquery())
        total = (await self.db.execute(count_stmt)).scalar() or 0

        if order_by:
            stmt = stmt.order_by(*order_by)
        stmt = stmt.offset(Paginator.calculate_offset(page, size)).limit(size)
        items = (await self.db.execute(stmt)).scalars().all()

        return {
            "items": items,
            "total": total,
            "page": page,
            "size": size,
        }

    async def create(self, obj_in: Dict) -> T:
        obj = self.model(**obj_in)
        self.db.add(obj)
        await self.db.commit()
        await self.db.refresh(obj)
        return obj

    async def update(self, id: Any, obj_in: Dict) -> T:
        obj = await self.get_or_404(id)
        for key, value in obj_in.items():
            setattr(obj, key, value)
        await self.db.commit()
        await self.db.refresh(obj)
        return obj

    async def hard_delete(self, id: Any) -> T:
        """Permanently delete record from database; returns the deleted row"""
        obj = await self.get_or_404(id)
        await self.db.delete(obj)
        await self.db.commit()
        return obj

    async def generate_unique(self, column, factory: Callable[[], str], attempts: int = 5) -> str:
        """Draw identifiers from `factory` until one is unused in `column`"""
        for _ in range(attempts):
            candidate = factory()
            stmt = select(func.count()).select_from(self.model).where(column == candidate)
            if not (await self.db.execute(stmt)).scalar():
                return candidate
            logger.warning(f"{column.key} collision on {candidate}, regenerating")
        raise ConflictError(f"Could not allocate a unique {column.key}, please retry")

    async def count(self, *criteria) -> int:
        stmt = select(func.count()).select_from(self.model)
        if criteria:
            stmt = stmt.where(*criteria)
        result = await self.db.execute(stmt)
        return result.scalar() or 0
