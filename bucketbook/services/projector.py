"""
Unallocated-Funds Projector

unallocated = sum(income records) - sum(bucket allocated amounts)

Always computed from current rows; nothing is cached between calls.
"""

from decimal import Decimal
from typing import Dict

from bucketbook.repositories.base import UnitOfWork


class UnallocatedFundsProjector:

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def unallocated(self, user_id: str) -> Decimal:
        total_income = await self.uow.income.total(user_id)
        total_allocated = await self.uow.buckets.total_allocated(user_id)
        return total_income - total_allocated

    async def summary(self, user_id: str) -> Dict[str, Decimal]:
        """Dashboard totals for a user"""
        total_income = await self.uow.income.total(user_id)
        total_allocated = await self.uow.buckets.total_allocated(user_id)
        total_remaining = await self.uow.buckets.total_balance(user_id)
        
        return {
            'total_income': total_income,
            'total_allocated': total_allocated,
            'total_remaining': total_remaining,
            'unallocated': total_income - total_allocated
        }
