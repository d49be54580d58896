from pydantic import Field
from datetime import datetime
from typing import Optional, List

from bucketbook.schemas.base import CamelModel, Money

class BucketBase(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)
    icon_name: Optional[str] = Field(None, max_length=50)

class BucketCreate(BucketBase):
    pass

class BucketUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    icon_name: Optional[str] = Field(None, max_length=50)

class BucketResponse(BucketBase):
    id: str
    user_id: str
    allocated_amount: Money
    current_balance: Money
    created_at: datetime
    updated_at: datetime

class BucketEnvelope(CamelModel):
    bucket: BucketResponse

class BucketListResponse(CamelModel):
    buckets: List[BucketResponse]
