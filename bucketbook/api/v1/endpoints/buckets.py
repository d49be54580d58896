"""
Bucket API Endpoints
"""

from fastapi import APIRouter, Depends

from bucketbook.api.deps import get_current_user_id, get_uow
from bucketbook.repositories.base import UnitOfWork
from bucketbook.schemas.base import MessageResponse
from bucketbook.schemas.bucket import (
    BucketCreate,
    BucketEnvelope,
    BucketListResponse,
    BucketUpdate
)
from bucketbook.schemas.transaction import TransactionListResponse
from bucketbook.services.buckets import BucketService
from bucketbook.services.spending import SpendingService

router = APIRouter()

@router.get("", response_model=BucketListResponse)
async def list_buckets(
    user_id: str = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_uow)
):
    """Get all buckets"""
    buckets = await BucketService(uow).list(user_id)
    return {"buckets": buckets}

@router.post("", response_model=BucketEnvelope, status_code=201)
async def create_bucket(
    bucket: BucketCreate,
    user_id: str = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_uow)
):
    """Create an empty bucket"""
    created = await BucketService(uow).create(user_id, bucket.name, bucket.icon_name)
    return {"bucket": created}

@router.get("/{bucket_id}", response_model=BucketEnvelope)
async def get_bucket(
    bucket_id: str,
    user_id: str = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_uow)
):
    """Get a single bucket"""
    bucket = await BucketService(uow).get(bucket_id, user_id)
    return {"bucket": bucket}

@router.patch("/{bucket_id}", response_model=BucketEnvelope)
async def update_bucket(
    bucket_id: str,
    update_data: BucketUpdate,
    user_id: str = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_uow)
):
    """
    Rename a bucket or change its icon
    """
    changes = update_data.model_dump(exclude_unset=True)
    bucket = await BucketService(uow).update(bucket_id, user_id, **changes)
    return {"bucket": bucket}

@router.delete("/{bucket_id}", response_model=MessageResponse)
async def delete_bucket(
    bucket_id: str,
    user_id: str = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_uow)
):
    """
    Delete a bucket together with its transactions
    """
    await BucketService(uow).delete(bucket_id, user_id)
    return {"message": "Bucket deleted successfully"}

@router.get("/{bucket_id}/transactions", response_model=TransactionListResponse)
async def list_bucket_transactions(
    bucket_id: str,
    user_id: str = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_uow)
):
    """Spending recorded against one bucket"""
    await BucketService(uow).get(bucket_id, user_id)
    transactions = await SpendingService(uow).list_for_bucket(bucket_id, user_id)
    return {"transactions": transactions}
