"""
Income API Endpoints
"""

from fastapi import APIRouter, Depends

from bucketbook.api.deps import get_current_user_id, get_uow
from bucketbook.core.datetime_utils import to_naive_utc
from bucketbook.repositories.base import UnitOfWork
from bucketbook.schemas.base import MessageResponse
from bucketbook.schemas.income import (
    IncomeCreate,
    IncomeEnvelope,
    IncomeListResponse,
    WithdrawRequest
)
from bucketbook.services.income import IncomeBook

router = APIRouter()

@router.get("", response_model=IncomeListResponse)
async def get_income(
    user_id: str = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_uow)
):
    """Get all income records, newest first"""
    records = await IncomeBook(uow).list(user_id)
    return {"income_records": records}

@router.post("", response_model=IncomeEnvelope, status_code=201)
async def add_income(
    income: IncomeCreate,
    user_id: str = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_uow)
):
    """Add income (a negative amount removes funds)"""
    record = await IncomeBook(uow).add(
        user_id,
        income.amount,
        description=income.description,
        date=to_naive_utc(income.date)
    )
    return {"income_record": record}

@router.post("/withdraw", response_model=IncomeEnvelope, status_code=201)
async def withdraw_funds(
    request: WithdrawRequest,
    user_id: str = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_uow)
):
    """Remove funds from the unallocated pool"""
    record = await IncomeBook(uow).withdraw(
        user_id,
        request.amount,
        description=request.description,
        date=to_naive_utc(request.date)
    )
    return {"income_record": record}

@router.delete("/{record_id}", response_model=MessageResponse)
async def delete_income(
    record_id: str,
    user_id: str = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_uow)
):
    """Delete an income record"""
    await IncomeBook(uow).delete(record_id, user_id)
    return {"message": "Income record deleted successfully"}
