"""
API v1 Router
"""

from fastapi import APIRouter
from bucketbook.api.v1.endpoints import buckets, allocations, income, transactions, users

api_router = APIRouter()

api_router.include_router(
    buckets.router,
    prefix="/buckets",
    tags=["buckets"]
)

api_router.include_router(
    allocations.router,
    tags=["allocations"]
)

api_router.include_router(
    income.router,
    prefix="/income",
    tags=["income"]
)

api_router.include_router(
    transactions.router,
    prefix="/transactions",
    tags=["transactions"]
)

api_router.include_router(
    users.router,
    prefix="/users",
    tags=["users"]
)
