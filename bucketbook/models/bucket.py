from sqlalchemy import Column, String, Numeric, ForeignKey, DateTime
from sqlalchemy.orm import relationship
from datetime import datetime
from decimal import Decimal
from bucketbook.core.database import Base
from bucketbook.models.base import new_id

class Bucket(Base):
    __tablename__ = "buckets"
    
    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    
    name = Column(String(100), nullable=False)
    icon_name = Column(String(50), nullable=True)
    allocated_amount = Column(Numeric(10, 2), nullable=False, default=Decimal("0.00"))  # budget ceiling
    current_balance = Column(Numeric(10, 2), nullable=False, default=Decimal("0.00"))  # spendable remainder
    
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    
    # Relationships
    user = relationship("User", back_populates="buckets")
    transactions = relationship("Transaction", back_populates="bucket", cascade="all, delete-orphan", passive_deletes=True)
