"""
Reallocation Engine
Moves money out of one bucket into another bucket or back to the
unallocated pool.

Transitions for an amount ``a``:

    balance,    bucket -> bucket       source.balance -= a, dest.balance += a
    balance,    bucket -> unallocated  source.balance -= a, source.allocated -= a
    allocation, bucket -> bucket       both fields move from source to dest
    allocation, bucket -> unallocated  source.balance -= a, source.allocated -= a
"""

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, List, Optional

from bucketbook.core.exceptions import (
    InsufficientFundsError,
    InvalidTransferError,
    NotFoundError
)
from bucketbook.core.money import parse_positive_amount, to_money
from bucketbook.models import Bucket, TransferMode, TransferType
from bucketbook.repositories.base import UnitOfWork
from bucketbook.services.ledger import LedgerRecorder

logger = logging.getLogger(__name__)


@dataclass
class ReallocationResult:
    buckets: List[Bucket] = field(default_factory=list)
    message: str = "Funds reallocated successfully"


class ReallocationEngine:
    
    def __init__(self, uow: UnitOfWork):
        self.uow = uow
        self.ledger = LedgerRecorder(uow)
    
    @staticmethod
    def available_amount(bucket: Bucket, mode: TransferMode) -> Decimal:
        if mode == TransferMode.BALANCE:
            return to_money(bucket.current_balance)
        return to_money(bucket.allocated_amount)
    
    async def _load_buckets(self, user_id: str, source_bucket_id: str, destination_bucket_id: Optional[str]):
        # Lock in id order so two opposite transfers cannot deadlock
        wanted = sorted({source_bucket_id, destination_bucket_id} - {None})
        loaded = {}
        for bucket_id in wanted:
            loaded[bucket_id] = await self.uow.buckets.get(bucket_id, user_id, for_update=True)
        
        source = loaded.get(source_bucket_id)
        if not source:
            raise NotFoundError("Source bucket not found")
        
        destination = None
        if destination_bucket_id:
            destination = loaded.get(destination_bucket_id)
            if not destination:
                raise NotFoundError("Destination bucket not found")
        
        return source, destination
    
    async def reallocate(
        self,
        user_id: str,
        source_bucket_id: str,
        destination_bucket_id: Optional[str],
        amount: Any,
        transfer_type: Any,
        description: Optional[str] = None
    ) -> ReallocationResult:
        """
        Transfer ``amount`` from the source bucket.

        A falsy destination means the unallocated pool. Nothing is written
        unless every check passes.
        """
        amount = parse_positive_amount(amount)
        try:
            mode = TransferMode(transfer_type)
        except ValueError:
            raise InvalidTransferError(f"Invalid transfer type: {transfer_type!r}")
        
        destination_bucket_id = destination_bucket_id or None
        if destination_bucket_id == source_bucket_id:
            raise InvalidTransferError("Source and destination buckets must differ")
        
        async with self.uow:
            source, destination = await self._load_buckets(user_id, source_bucket_id, destination_bucket_id)
            
            available = self.available_amount(source, mode)
            if amount > available:
                raise InsufficientFundsError(available)
            
            source_allocated = to_money(source.allocated_amount)
            source_balance = to_money(source.current_balance)
            
            updated_buckets = []
            if mode == TransferMode.BALANCE and destination is not None:
                updated_buckets.append(await self.uow.buckets.update(
                    source.id, user_id,
                    current_balance=source_balance - amount
                ))
                updated_buckets.append(await self.uow.buckets.update(
                    destination.id, user_id,
                    current_balance=to_money(destination.current_balance) + amount
                ))
            else:
                # Budget moves with the cash; for the unallocated pool this is
                # what frees the money for a new allocation
                updated_buckets.append(await self.uow.buckets.update(
                    source.id, user_id,
                    allocated_amount=source_allocated - amount,
                    current_balance=source_balance - amount
                ))
                if destination is not None:
                    updated_buckets.append(await self.uow.buckets.update(
                        destination.id, user_id,
                        allocated_amount=to_money(destination.allocated_amount) + amount,
                        current_balance=to_money(destination.current_balance) + amount
                    ))
            
            await self.ledger.record(
                user_id,
                TransferType.REALLOCATION,
                amount,
                source_bucket_id=source.id,
                destination_bucket_id=destination.id if destination is not None else None,
                description=description
            )
        
        logger.info("Reallocated %s from %s in %s mode", amount, source_bucket_id, mode.value)
        return ReallocationResult(buckets=updated_buckets)
