from sqlalchemy import Column, String, Numeric, DateTime, Text, ForeignKey
from sqlalchemy.orm import relationship
from datetime import datetime
from enum import Enum
from bucketbook.core.database import Base
from bucketbook.models.base import new_id

class IncomeKind(str, Enum):
    INCOME = "income"
    WITHDRAWAL = "withdrawal"  # funds removed from the unallocated pool

class IncomeRecord(Base):
    __tablename__ = "income_records"
    
    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    
    amount = Column(Numeric(10, 2), nullable=False)  # signed, negative for withdrawals
    kind = Column(String(20), nullable=False, default=IncomeKind.INCOME.value)
    description = Column(Text, nullable=True)
    date = Column(DateTime, default=datetime.utcnow)
    
    created_at = Column(DateTime, default=datetime.utcnow)
    
    # Relationships
    user = relationship("User", back_populates="income_records")
