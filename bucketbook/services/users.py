"""
User accounts
Credentials live elsewhere; this only keeps the user row and seeds the
starter buckets for a new account.
"""

import logging
from typing import Dict

from bucketbook.core.exceptions import ConflictError, InvalidInputError, NotFoundError
from bucketbook.models import User
from bucketbook.repositories.base import UnitOfWork
from bucketbook.services.buckets import BucketService

logger = logging.getLogger(__name__)


class UserService:
    
    def __init__(self, uow: UnitOfWork):
        self.uow = uow
    
    async def create(self, username: str, email: str, name: str) -> Dict:
        """Create a user along with the default buckets"""
        if not username or not email or not name:
            raise InvalidInputError("Username, email and name are required")
        
        async with self.uow:
            if await self.uow.users.get_by_email(email):
                raise ConflictError("User already exists with this email")
            if await self.uow.users.get_by_username(username):
                raise ConflictError("Username already taken")
            
            user = await self.uow.users.create(username, email, name)
            buckets = await BucketService(self.uow).create_defaults(user.id)
        
        logger.info("Created user %s with %d starter buckets", user.id, len(buckets))
        return {"user": user, "buckets": buckets}
    
    async def get(self, user_id: str) -> User:
        user = await self.uow.users.get(user_id)
        if not user:
            raise NotFoundError("User not found")
        return user
    
    async def delete_data(self, user_id: str) -> None:
        """Wipe transactions, buckets, income and allocation history; keep the user"""
        async with self.uow:
            await self.uow.transactions.purge(user_id)
            for bucket in await self.uow.buckets.list(user_id):
                await self.uow.buckets.delete(bucket.id, user_id)
            await self.uow.income.purge(user_id)
            await self.uow.ledger.purge(user_id)
        logger.info("Deleted all data for user %s", user_id)
    
    async def delete_account(self, user_id: str) -> None:
        async with self.uow:
            await self.uow.users.delete(user_id)
        logger.info("Deleted account %s", user_id)
