"""
Repository interfaces

Services depend on these abstractions only. ``SqlUnitOfWork`` backs them
with an async SQLAlchemy session, ``MemoryUnitOfWork`` with plain dicts.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from bucketbook.models import (
    AllocationHistory,
    Bucket,
    IncomeRecord,
    Transaction,
    User
)


class BucketRepository(ABC):

    @abstractmethod
    async def get(self, bucket_id: str, user_id: str, for_update: bool = False) -> Optional[Bucket]:
        """Return the bucket when it exists and belongs to user_id"""

    @abstractmethod
    async def list(self, user_id: str) -> List[Bucket]:
        ...

    @abstractmethod
    async def create(self, user_id: str, name: str, icon_name: Optional[str] = None) -> Bucket:
        ...

    @abstractmethod
    async def update(self, bucket_id: str, user_id: str, **fields) -> Bucket:
        """Apply fields; raises NotFoundError when the bucket is not owned by user_id"""

    @abstractmethod
    async def delete(self, bucket_id: str, user_id: str) -> None:
        """Delete bucket and its transactions; history rows keep a NULL reference"""

    @abstractmethod
    async def total_allocated(self, user_id: str) -> Decimal:
        ...

    @abstractmethod
    async def total_balance(self, user_id: str) -> Decimal:
        ...


class IncomeRepository(ABC):

    @abstractmethod
    async def add(self, user_id: str, amount: Decimal, kind: str,
                  description: Optional[str] = None, date: Optional[datetime] = None) -> IncomeRecord:
        ...

    @abstractmethod
    async def list(self, user_id: str) -> List[IncomeRecord]:
        """Newest first"""

    @abstractmethod
    async def delete(self, record_id: str, user_id: str) -> None:
        ...

    @abstractmethod
    async def total(self, user_id: str) -> Decimal:
        ...

    @abstractmethod
    async def purge(self, user_id: str) -> None:
        ...


class LedgerRepository(ABC):

    @abstractmethod
    async def append(self, user_id: str, transfer_type: str, amount: Decimal,
                     source_bucket_id: Optional[str] = None,
                     destination_bucket_id: Optional[str] = None,
                     description: Optional[str] = None,
                     date: Optional[datetime] = None) -> AllocationHistory:
        ...

    @abstractmethod
    async def list(self, user_id: str, limit: Optional[int] = None) -> List[AllocationHistory]:
        """Newest first"""

    @abstractmethod
    async def purge(self, user_id: str) -> None:
        """Drop a user's history; only used when the user's data is wiped"""


class TransactionRepository(ABC):

    @abstractmethod
    async def create(self, user_id: str, bucket_id: str, amount: Decimal,
                     description: Optional[str] = None, date: Optional[datetime] = None) -> Transaction:
        ...

    @abstractmethod
    async def get(self, transaction_id: str, user_id: str) -> Optional[Transaction]:
        ...

    @abstractmethod
    async def list(self, user_id: str, limit: Optional[int] = None) -> List[Transaction]:
        ...

    @abstractmethod
    async def list_for_bucket(self, bucket_id: str, user_id: str) -> List[Transaction]:
        ...

    @abstractmethod
    async def delete(self, transaction_id: str, user_id: str) -> None:
        ...

    @abstractmethod
    async def purge(self, user_id: str) -> None:
        ...


class UserRepository(ABC):

    @abstractmethod
    async def create(self, username: str, email: str, name: str) -> User:
        ...

    @abstractmethod
    async def get(self, user_id: str) -> Optional[User]:
        ...

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[User]:
        ...

    @abstractmethod
    async def get_by_username(self, username: str) -> Optional[User]:
        ...

    @abstractmethod
    async def delete(self, user_id: str) -> None:
        ...


class UnitOfWork(ABC):
    """
    One atomic scope over every repository.

    ``async with uow:`` commits when the block finishes and rolls back
    every write made inside it when the block raises.
    """

    buckets: BucketRepository
    income: IncomeRepository
    ledger: LedgerRepository
    transactions: TransactionRepository
    users: UserRepository

    async def __aenter__(self):
        await self.begin()
        return self

    async def __aexit__(self, exc_type, exc, tb):
        if exc_type is None:
            await self.commit()
        else:
            await self.rollback()
        return False

    async def begin(self):
        pass

    @abstractmethod
    async def commit(self):
        ...

    @abstractmethod
    async def rollback(self):
        ...
