"""
Allocation Engine
Moves money from the unallocated pool into one or more buckets
"""

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, List, Mapping, Optional, Tuple

from bucketbook.config import settings
from bucketbook.core.exceptions import InsufficientFundsError, NotFoundError
from bucketbook.core.money import ZERO, money_sum, to_money, try_parse_money
from bucketbook.models import Bucket, TransferType
from bucketbook.repositories.base import UnitOfWork
from bucketbook.services.ledger import LedgerRecorder
from bucketbook.services.projector import UnallocatedFundsProjector

logger = logging.getLogger(__name__)


@dataclass
class AllocationResult:
    buckets: List[Bucket] = field(default_factory=list)
    message: str = ""
    unallocated: Decimal = ZERO
    over_allocated: bool = False


class AllocationEngine:
    """
    Applies a ``{bucket_id: amount}`` mapping in input order.

    Entries whose amount is not a number or is not positive are skipped.
    The whole mapping is one unit of work: an unknown bucket anywhere in
    the mapping leaves every bucket and the ledger untouched.
    """
    
    def __init__(self, uow: UnitOfWork, strict: Optional[bool] = None):
        self.uow = uow
        self.strict = settings.STRICT_ALLOCATION if strict is None else strict
        self.ledger = LedgerRecorder(uow)
        self.projector = UnallocatedFundsProjector(uow)
    
    @staticmethod
    def valid_entries(allocations: Mapping[str, Any]) -> List[Tuple[str, Decimal]]:
        entries = []
        for bucket_id, raw_amount in allocations.items():
            amount = try_parse_money(raw_amount)
            if amount is None or amount <= ZERO:
                logger.debug("Skipping allocation for bucket %s: %r", bucket_id, raw_amount)
                continue
            entries.append((bucket_id, amount))
        return entries
    
    async def _lock_buckets(self, user_id: str, bucket_ids) -> Dict[str, Bucket]:
        # Lock in id order so two calls naming the same buckets cannot deadlock
        locked = {}
        for bucket_id in sorted(set(bucket_ids)):
            bucket = await self.uow.buckets.get(bucket_id, user_id, for_update=True)
            if not bucket:
                raise NotFoundError(f"Bucket {bucket_id} not found")
            locked[bucket_id] = bucket
        return locked
    
    async def allocate(
        self,
        user_id: str,
        allocations: Mapping[str, Any],
        description: Optional[str] = None
    ) -> AllocationResult:
        entries = self.valid_entries(allocations)
        requested = money_sum(amount for _, amount in entries)
        
        async with self.uow:
            available = await self.projector.unallocated(user_id)
            if self.strict and requested > available:
                raise InsufficientFundsError(
                    available,
                    f"Allocation of ${requested} exceeds unallocated funds. Available: ${available}"
                )
            
            buckets = await self._lock_buckets(user_id, [bucket_id for bucket_id, _ in entries])
            
            updated_buckets = []
            for bucket_id, amount in entries:
                bucket = buckets[bucket_id]
                updated = await self.uow.buckets.update(
                    bucket_id,
                    user_id,
                    allocated_amount=to_money(bucket.allocated_amount) + amount,
                    current_balance=to_money(bucket.current_balance) + amount
                )
                buckets[bucket_id] = updated
                updated_buckets.append(updated)
                
                await self.ledger.record(
                    user_id,
                    TransferType.ALLOCATION,
                    amount,
                    source_bucket_id=None,
                    destination_bucket_id=bucket_id,
                    description=description
                )
            
            remaining = await self.projector.unallocated(user_id)
        
        # Only a call that moved money can be the one that over-allocated
        over_allocated = bool(updated_buckets) and remaining < ZERO
        if over_allocated:
            logger.warning("User %s over-allocated by %s", user_id, -remaining)
        
        if updated_buckets:
            message = "Funds allocated successfully"
        else:
            message = "No valid allocations to apply"
        
        return AllocationResult(
            buckets=updated_buckets,
            message=message,
            unallocated=remaining,
            over_allocated=over_allocated
        )
