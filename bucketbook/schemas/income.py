from datetime import datetime
from typing import Optional, List

from bucketbook.schemas.base import CamelModel, Money

class IncomeCreate(CamelModel):
    amount: str  # signed; negative removes funds
    description: Optional[str] = None
    date: Optional[datetime] = None

class WithdrawRequest(CamelModel):
    amount: str
    description: Optional[str] = None
    date: Optional[datetime] = None

class IncomeResponse(CamelModel):
    id: str
    user_id: str
    amount: Money
    kind: str
    description: Optional[str] = None
    date: datetime
    created_at: datetime

class IncomeEnvelope(CamelModel):
    income_record: IncomeResponse

class IncomeListResponse(CamelModel):
    income_records: List[IncomeResponse]
