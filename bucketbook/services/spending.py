"""
Spending transactions
Each transaction draws down its bucket's current balance; the allocated
amount is left alone.
"""

import logging
from datetime import datetime
from typing import Any, List, Optional

from bucketbook.core.exceptions import NotFoundError
from bucketbook.core.money import parse_positive_amount, to_money
from bucketbook.models import Transaction
from bucketbook.repositories.base import UnitOfWork

logger = logging.getLogger(__name__)


class SpendingService:
    
    def __init__(self, uow: UnitOfWork):
        self.uow = uow
    
    async def create(
        self,
        user_id: str,
        bucket_id: str,
        amount: Any,
        description: Optional[str] = None,
        date: Optional[datetime] = None
    ) -> Transaction:
        amount = parse_positive_amount(amount)
        
        async with self.uow:
            bucket = await self.uow.buckets.get(bucket_id, user_id, for_update=True)
            if not bucket:
                raise NotFoundError("Bucket not found")
            
            transaction = await self.uow.transactions.create(user_id, bucket_id, amount, description, date)
            await self.uow.buckets.update(
                bucket_id,
                user_id,
                current_balance=to_money(bucket.current_balance) - amount
            )
        
        logger.info("Spent %s from bucket %s", amount, bucket_id)
        return transaction
    
    async def list(self, user_id: str, limit: Optional[int] = None) -> List[Transaction]:
        return await self.uow.transactions.list(user_id, limit)
    
    async def list_for_bucket(self, bucket_id: str, user_id: str) -> List[Transaction]:
        return await self.uow.transactions.list_for_bucket(bucket_id, user_id)
    
    async def delete(self, transaction_id: str, user_id: str) -> None:
        """Delete a transaction and give its amount back to the bucket"""
        async with self.uow:
            transaction = await self.uow.transactions.get(transaction_id, user_id)
            if not transaction:
                raise NotFoundError("Transaction not found")
            
            bucket_id = transaction.bucket_id
            amount = to_money(transaction.amount)
            await self.uow.transactions.delete(transaction_id, user_id)
            
            bucket = await self.uow.buckets.get(bucket_id, user_id, for_update=True)
            if bucket:
                await self.uow.buckets.update(
                    bucket_id,
                    user_id,
                    current_balance=to_money(bucket.current_balance) + amount
                )
