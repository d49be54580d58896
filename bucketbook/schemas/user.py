"""
User Pydantic schemas
"""

from pydantic import Field
from typing import List
from datetime import datetime

from bucketbook.schemas.base import CamelModel
from bucketbook.schemas.bucket import BucketResponse

class UserCreate(CamelModel):
    username: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., min_length=3, max_length=255)
    name: str = Field(..., min_length=1, max_length=100)

class UserResponse(CamelModel):
    id: str
    username: str
    email: str
    name: str
    created_at: datetime
    updated_at: datetime

class UserCreatedResponse(CamelModel):
    message: str
    user: UserResponse
    buckets: List[BucketResponse]
