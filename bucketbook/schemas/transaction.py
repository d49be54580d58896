from pydantic import Field
from datetime import datetime
from typing import Optional, List

from bucketbook.schemas.base import CamelModel, Money

class TransactionCreate(CamelModel):
    bucket_id: str = Field(..., min_length=1)
    amount: str
    description: Optional[str] = None
    date: Optional[datetime] = None

class TransactionResponse(CamelModel):
    id: str
    user_id: str
    bucket_id: str
    amount: Money
    description: Optional[str] = None
    date: datetime
    created_at: datetime

class TransactionEnvelope(CamelModel):
    transaction: TransactionResponse

class TransactionListResponse(CamelModel):
    transactions: List[TransactionResponse]
