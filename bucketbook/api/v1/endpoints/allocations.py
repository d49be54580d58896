"""
Allocation API Endpoints
Allocate, reallocate, ledger history and the unallocated-funds summary
"""

import logging
from fastapi import APIRouter, Depends, Query
from typing import Optional

from bucketbook.api.deps import get_current_user_id, get_uow
from bucketbook.repositories.base import UnitOfWork
from bucketbook.schemas.allocation import (
    AllocateRequest,
    AllocateResponse,
    AllocationHistoryListResponse,
    ReallocateRequest,
    ReallocateResponse,
    SummaryResponse
)
from bucketbook.services.allocation import AllocationEngine
from bucketbook.services.ledger import LedgerRecorder
from bucketbook.services.projector import UnallocatedFundsProjector
from bucketbook.services.reallocation import ReallocationEngine

logger = logging.getLogger(__name__)

router = APIRouter()

@router.post("/buckets/allocate", response_model=AllocateResponse)
async def allocate_funds(
    request: AllocateRequest,
    user_id: str = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_uow)
):
    """
    Move unallocated funds into one or more buckets
    """
    result = await AllocationEngine(uow).allocate(
        user_id,
        request.allocations,
        description=request.description
    )
    
    return {
        "message": result.message,
        "buckets": result.buckets,
        "unallocated": result.unallocated,
        "over_allocated": result.over_allocated
    }

@router.post("/buckets/reallocate", response_model=ReallocateResponse)
async def reallocate_funds(
    request: ReallocateRequest,
    user_id: str = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_uow)
):
    """
    Move funds from one bucket to another bucket or back to unallocated
    """
    logger.debug("Reallocate called with %s", request.model_dump())
    result = await ReallocationEngine(uow).reallocate(
        user_id,
        request.source_bucket_id,
        request.destination_bucket_id,
        request.amount,
        request.transfer_type,
        description=request.description
    )
    
    return {"message": result.message, "buckets": result.buckets}

@router.get("/allocations", response_model=AllocationHistoryListResponse)
async def get_allocation_history(
    limit: Optional[int] = Query(None, ge=1, description="Max entries to return"),
    user_id: str = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_uow)
):
    """
    Allocation history, newest first
    """
    history = await LedgerRecorder(uow).history(user_id, limit)
    return {"allocation_history": history}

@router.get("/summary", response_model=SummaryResponse)
async def get_summary(
    user_id: str = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_uow)
):
    """
    Total income, total allocated, spendable remainder and unallocated funds
    """
    return await UnallocatedFundsProjector(uow).summary(user_id)
