from pydantic import Field
from datetime import datetime
from typing import Dict, List, Optional

from bucketbook.models import TransferMode
from bucketbook.schemas.base import CamelModel, Money
from bucketbook.schemas.bucket import BucketResponse

class AllocateRequest(CamelModel):
    # bucket id -> decimal string; bad amounts are skipped, not rejected
    allocations: Dict[str, str]
    description: Optional[str] = None

class AllocateResponse(CamelModel):
    message: str
    buckets: List[BucketResponse]
    unallocated: Money
    over_allocated: bool

class ReallocateRequest(CamelModel):
    source_bucket_id: str = Field(..., min_length=1)
    destination_bucket_id: Optional[str] = None  # None means unallocated
    amount: str
    transfer_type: TransferMode
    description: Optional[str] = None

class ReallocateResponse(CamelModel):
    message: str
    buckets: List[BucketResponse]

class AllocationHistoryResponse(CamelModel):
    id: str
    user_id: str
    source_bucket_id: Optional[str] = None
    destination_bucket_id: Optional[str] = None
    amount: Money
    transfer_type: str
    description: Optional[str] = None
    date: datetime
    created_at: datetime

class AllocationHistoryListResponse(CamelModel):
    allocation_history: List[AllocationHistoryResponse]

class SummaryResponse(CamelModel):
    total_income: Money
    total_allocated: Money
    total_remaining: Money
    unallocated: Money
