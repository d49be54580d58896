"""
Transaction API Endpoints
"""

from fastapi import APIRouter, Depends, Query
from typing import Optional

from bucketbook.api.deps import get_current_user_id, get_uow
from bucketbook.core.datetime_utils import to_naive_utc
from bucketbook.repositories.base import UnitOfWork
from bucketbook.schemas.base import MessageResponse
from bucketbook.schemas.transaction import (
    TransactionCreate,
    TransactionEnvelope,
    TransactionListResponse
)
from bucketbook.services.spending import SpendingService

router = APIRouter()

@router.get("", response_model=TransactionListResponse)
async def get_transactions(
    limit: Optional[int] = Query(None, ge=1, le=500),
    bucket_id: Optional[str] = Query(None, alias="bucketId"),
    user_id: str = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_uow)
):
    """
    Get user transactions, newest first, optionally for one bucket
    """
    service = SpendingService(uow)
    if bucket_id:
        transactions = await service.list_for_bucket(bucket_id, user_id)
    else:
        transactions = await service.list(user_id, limit)
    return {"transactions": transactions}

@router.post("", response_model=TransactionEnvelope, status_code=201)
async def create_transaction(
    transaction: TransactionCreate,
    user_id: str = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_uow)
):
    """
    Record spending against a bucket
    """
    created = await SpendingService(uow).create(
        user_id,
        transaction.bucket_id,
        transaction.amount,
        description=transaction.description,
        date=to_naive_utc(transaction.date)
    )
    return {"transaction": created}

@router.delete("/{transaction_id}", response_model=MessageResponse)
async def delete_transaction(
    transaction_id: str,
    user_id: str = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_uow)
):
    """
    Delete transaction and restore the bucket balance
    """
    await SpendingService(uow).delete(transaction_id, user_id)
    return {"message": "Transaction deleted successfully"}
