"""
Ledger Recorder

Append-only audit trail of allocations and reallocations. Engines write
through ``record``; nothing here updates or removes an entry.
"""

import logging
from decimal import Decimal
from typing import List, Optional

from bucketbook.config import settings
from bucketbook.models import AllocationHistory, TransferType
from bucketbook.repositories.base import UnitOfWork

logger = logging.getLogger(__name__)


class LedgerRecorder:

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def record(
        self,
        user_id: str,
        transfer_type: TransferType,
        amount: Decimal,
        source_bucket_id: Optional[str] = None,
        destination_bucket_id: Optional[str] = None,
        description: Optional[str] = None
    ) -> AllocationHistory:
        entry = await self.uow.ledger.append(
            user_id=user_id,
            transfer_type=TransferType(transfer_type).value,
            amount=amount,
            source_bucket_id=source_bucket_id,
            destination_bucket_id=destination_bucket_id,
            description=description or None
        )
        logger.info(
            "Ledger %s %s: %s -> %s (user %s)",
            entry.transfer_type,
            amount,
            source_bucket_id or "unallocated",
            destination_bucket_id or "unallocated",
            user_id
        )
        return entry

    async def history(self, user_id: str, limit: Optional[int] = None) -> List[AllocationHistory]:
        """Entries newest first, capped at MAX_HISTORY_LIMIT"""
        if limit is None:
            limit = settings.DEFAULT_HISTORY_LIMIT
        limit = min(limit or settings.MAX_HISTORY_LIMIT, settings.MAX_HISTORY_LIMIT)
        return await self.uow.ledger.list(user_id, limit)
