from sqlalchemy import Column, String, DateTime
from sqlalchemy.orm import relationship
from datetime import datetime
from bucketbook.core.database import Base
from bucketbook.models.base import new_id

class User(Base):
    __tablename__ = "users"
    
    id = Column(String(36), primary_key=True, default=new_id)
    username = Column(String(100), unique=True, index=True, nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    name = Column(String(100), nullable=False)
    
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    
    # Relationships
    buckets = relationship("Bucket", back_populates="user", cascade="all, delete-orphan", passive_deletes=True)
    transactions = relationship("Transaction", back_populates="user", cascade="all, delete-orphan", passive_deletes=True)
    income_records = relationship("IncomeRecord", back_populates="user", cascade="all, delete-orphan", passive_deletes=True)
    allocation_history = relationship("AllocationHistory", back_populates="user", cascade="all, delete-orphan", passive_deletes=True)
