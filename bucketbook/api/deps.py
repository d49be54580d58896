"""
FastAPI Dependencies
"""

from typing import AsyncGenerator
from fastapi import Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from bucketbook.core.database import async_session
from bucketbook.repositories.base import UnitOfWork
from bucketbook.repositories.sql import SqlUnitOfWork

async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Database session dependency"""
    async with async_session() as session:
        try:
            yield session
        finally:
            await session.close()

def get_uow(db: AsyncSession = Depends(get_db)) -> UnitOfWork:
    """Unit of work over the request's session"""
    return SqlUnitOfWork(db)

def get_current_user_id(user_id: str = Query(..., min_length=1, description="User ID")) -> str:
    """Authenticated user id, supplied by the auth layer in front of the API"""
    return user_id
