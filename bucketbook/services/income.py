"""
Income Book
Income and withdrawals against the unallocated pool.

Both are stored as income records with a signed amount; ``kind`` tags
which one a record is and always agrees with the sign.
"""

import logging
from datetime import datetime
from typing import Any, List, Optional

from bucketbook.core.exceptions import InsufficientFundsError, InvalidAmountError
from bucketbook.core.money import ZERO, parse_amount, parse_positive_amount
from bucketbook.models import IncomeKind, IncomeRecord
from bucketbook.repositories.base import UnitOfWork
from bucketbook.services.projector import UnallocatedFundsProjector

logger = logging.getLogger(__name__)


class IncomeBook:
    
    def __init__(self, uow: UnitOfWork):
        self.uow = uow
        self.projector = UnallocatedFundsProjector(uow)
    
    async def add(
        self,
        user_id: str,
        amount: Any,
        description: Optional[str] = None,
        date: Optional[datetime] = None
    ) -> IncomeRecord:
        """
        Record a signed amount. Negative amounts remove funds from the
        unallocated pool, same as ``withdraw``, but without the balance check.
        """
        amount = parse_amount(amount)
        if amount == ZERO:
            raise InvalidAmountError("Amount must not be zero")
        
        kind = IncomeKind.INCOME if amount > ZERO else IncomeKind.WITHDRAWAL
        async with self.uow:
            record = await self.uow.income.add(user_id, amount, kind.value, description, date)
        
        logger.info("Recorded %s of %s for user %s", kind.value, amount, user_id)
        return record
    
    async def withdraw(
        self,
        user_id: str,
        amount: Any,
        description: Optional[str] = None,
        date: Optional[datetime] = None
    ) -> IncomeRecord:
        """Remove funds from the unallocated pool; cannot go below zero"""
        amount = parse_positive_amount(amount)
        
        async with self.uow:
            available = await self.projector.unallocated(user_id)
            if amount > available:
                raise InsufficientFundsError(
                    available,
                    f"Cannot remove more than available unallocated funds. Available: ${available}"
                )
            record = await self.uow.income.add(
                user_id, -amount, IncomeKind.WITHDRAWAL.value, description, date
            )
        
        logger.info("Withdrew %s from unallocated funds for user %s", amount, user_id)
        return record
    
    async def list(self, user_id: str) -> List[IncomeRecord]:
        return await self.uow.income.list(user_id)
    
    async def delete(self, record_id: str, user_id: str) -> None:
        async with self.uow:
            await self.uow.income.delete(record_id, user_id)
