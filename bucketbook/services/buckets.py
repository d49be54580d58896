"""
Bucket Store service
Bucket CRUD for the API. Amounts are not editable here; they only change
through allocations, reallocations and spending.
"""

import logging
from typing import List, Optional

from bucketbook.core.exceptions import InvalidInputError, NotFoundError
from bucketbook.models import Bucket
from bucketbook.repositories.base import UnitOfWork

logger = logging.getLogger(__name__)

DEFAULT_BUCKETS = [
    {"name": "Groceries", "icon_name": "Shopping"},
    {"name": "Transportation", "icon_name": "Transportation"},
    {"name": "Entertainment", "icon_name": "Entertainment"},
    {"name": "Dining Out", "icon_name": "Dining"},
]

EDITABLE_FIELDS = ("name", "icon_name")


class BucketService:
    
    def __init__(self, uow: UnitOfWork):
        self.uow = uow
    
    async def get(self, bucket_id: str, user_id: str) -> Bucket:
        bucket = await self.uow.buckets.get(bucket_id, user_id)
        if not bucket:
            raise NotFoundError("Bucket not found")
        return bucket
    
    async def list(self, user_id: str) -> List[Bucket]:
        return await self.uow.buckets.list(user_id)
    
    async def create(self, user_id: str, name: str, icon_name: Optional[str] = None) -> Bucket:
        name = (name or "").strip()
        if not name:
            raise InvalidInputError("Bucket name is required")
        async with self.uow:
            bucket = await self.uow.buckets.create(user_id, name, icon_name)
        logger.info("Created bucket %s (%s) for user %s", bucket.id, name, user_id)
        return bucket
    
    async def create_defaults(self, user_id: str) -> List[Bucket]:
        """Starter buckets for a new account; caller owns the unit of work"""
        return [
            await self.uow.buckets.create(user_id, starter["name"], starter["icon_name"])
            for starter in DEFAULT_BUCKETS
        ]
    
    async def update(self, bucket_id: str, user_id: str, **fields) -> Bucket:
        changes = {key: value for key, value in fields.items() if key in EDITABLE_FIELDS}
        if "name" in changes and not (changes["name"] or "").strip():
            raise InvalidInputError("Bucket name is required")
        async with self.uow:
            bucket = await self.uow.buckets.update(bucket_id, user_id, **changes)
        return bucket
    
    async def delete(self, bucket_id: str, user_id: str) -> None:
        async with self.uow:
            await self.uow.buckets.delete(bucket_id, user_id)
        logger.info("Deleted bucket %s for user %s", bucket_id, user_id)
