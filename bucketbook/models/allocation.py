from sqlalchemy import Column, String, Numeric, DateTime, Text, ForeignKey
from sqlalchemy.orm import relationship
from datetime import datetime
from enum import Enum
from bucketbook.core.database import Base
from bucketbook.models.base import new_id

class TransferType(str, Enum):
    ALLOCATION = "allocation"  # unallocated pool -> bucket
    REALLOCATION = "reallocation"  # bucket -> bucket or bucket -> unallocated

class TransferMode(str, Enum):
    BALANCE = "balance"  # moves current_balance only
    ALLOCATION = "allocation"  # moves allocated_amount and current_balance

class AllocationHistory(Base):
    __tablename__ = "allocation_history"
    
    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    
    # NULL source means the unallocated pool; NULL destination likewise
    source_bucket_id = Column(String(36), ForeignKey("buckets.id", ondelete="SET NULL"), nullable=True)
    destination_bucket_id = Column(String(36), ForeignKey("buckets.id", ondelete="SET NULL"), nullable=True)
    
    amount = Column(Numeric(10, 2), nullable=False)
    transfer_type = Column(String(20), nullable=False)
    description = Column(Text, nullable=True)
    date = Column(DateTime, default=datetime.utcnow)
    
    created_at = Column(DateTime, default=datetime.utcnow, index=True)
    
    # Relationships
    user = relationship("User", back_populates="allocation_history")
