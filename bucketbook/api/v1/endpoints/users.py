"""
User API Endpoints
"""

from fastapi import APIRouter, Depends

from bucketbook.api.deps import get_uow
from bucketbook.repositories.base import UnitOfWork
from bucketbook.schemas.base import MessageResponse
from bucketbook.schemas.user import UserCreate, UserCreatedResponse, UserResponse
from bucketbook.services.users import UserService

router = APIRouter()

@router.post("", response_model=UserCreatedResponse, status_code=201)
async def create_user(
    user: UserCreate,
    uow: UnitOfWork = Depends(get_uow)
):
    """
    Create new user with the starter buckets
    """
    created = await UserService(uow).create(user.username, user.email, user.name)
    return {
        "message": "User registered successfully",
        "user": created["user"],
        "buckets": created["buckets"]
    }

@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: str,
    uow: UnitOfWork = Depends(get_uow)
):
    """
    Get user by ID
    """
    return await UserService(uow).get(user_id)

@router.delete("/{user_id}/data", response_model=MessageResponse)
async def delete_user_data(
    user_id: str,
    uow: UnitOfWork = Depends(get_uow)
):
    """
    Delete every bucket, transaction, income record and history entry
    """
    await UserService(uow).delete_data(user_id)
    return {"message": "All user data deleted successfully"}

@router.delete("/{user_id}", response_model=MessageResponse)
async def delete_user(
    user_id: str,
    uow: UnitOfWork = Depends(get_uow)
):
    """
    Delete the account and all of its data
    """
    await UserService(uow).delete_account(user_id)
    return {"message": "Account deleted successfully"}
