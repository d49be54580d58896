"""Database models initialization."""

# Import all models to ensure they're registered with SQLAlchemy
from .user import User
from .bucket import Bucket
from .transaction import Transaction
from .income import IncomeKind, IncomeRecord
from .allocation import AllocationHistory, TransferMode, TransferType

__all__ = [
    "User",
    "Bucket",
    "Transaction",
    "IncomeKind",
    "IncomeRecord",
    "AllocationHistory",
    "TransferMode",
    "TransferType"
]
