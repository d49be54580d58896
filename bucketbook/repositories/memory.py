"""
In-memory repositories

Rows live in plain dicts keyed by table name and id. Every read hands back
a fresh model instance, so callers only change stored state through the
repository methods, the same way they would with a database.
"""

import copy
from datetime import datetime
from typing import Dict, List, Optional

from bucketbook.core.exceptions import NotFoundError
from bucketbook.core.money import ZERO, money_sum
from bucketbook.models import (
    AllocationHistory,
    Bucket,
    IncomeRecord,
    Transaction,
    User
)
from bucketbook.models.base import new_id
from bucketbook.repositories.base import (
    BucketRepository,
    IncomeRepository,
    LedgerRepository,
    TransactionRepository,
    UnitOfWork,
    UserRepository
)


class MemoryStore:
    """Shared table storage for every in-memory repository"""

    TABLES = ("users", "buckets", "transactions", "income_records", "allocation_history")

    def __init__(self):
        self.tables: Dict[str, Dict[str, dict]] = {name: {} for name in self.TABLES}

    def snapshot(self) -> Dict[str, Dict[str, dict]]:
        return copy.deepcopy(self.tables)

    def restore(self, snapshot: Dict[str, Dict[str, dict]]):
        self.tables = snapshot


def _newest_first(rows: List[dict], limit: Optional[int] = None) -> List[dict]:
    # reversed() first so rows sharing a timestamp keep newest-first order
    ordered = sorted(reversed(rows), key=lambda row: row["created_at"], reverse=True)
    if limit:
        ordered = ordered[:limit]
    return ordered


class _MemoryRepository:
    table = ""

    def __init__(self, store: MemoryStore):
        self.store = store

    @property
    def rows(self) -> Dict[str, dict]:
        return self.store.tables[self.table]

    def _owned(self, row_id: str, user_id: str) -> Optional[dict]:
        row = self.rows.get(row_id)
        if row is None or row["user_id"] != user_id:
            return None
        return row

    def _for_user(self, user_id: str) -> List[dict]:
        return [row for row in self.rows.values() if row["user_id"] == user_id]


class MemoryBucketRepository(_MemoryRepository, BucketRepository):
    table = "buckets"

    async def get(self, bucket_id, user_id, for_update=False):
        row = self._owned(bucket_id, user_id)
        return Bucket(**row) if row else None

    async def list(self, user_id):
        rows = sorted(self._for_user(user_id), key=lambda row: row["created_at"])
        return [Bucket(**row) for row in rows]

    async def create(self, user_id, name, icon_name=None):
        now = datetime.utcnow()
        row = {
            "id": new_id(),
            "user_id": user_id,
            "name": name,
            "icon_name": icon_name,
            "allocated_amount": ZERO,
            "current_balance": ZERO,
            "created_at": now,
            "updated_at": now,
        }
        self.rows[row["id"]] = row
        return Bucket(**row)

    async def update(self, bucket_id, user_id, **fields):
        row = self._owned(bucket_id, user_id)
        if row is None:
            raise NotFoundError("Bucket not found")
        row.update(fields)
        row["updated_at"] = datetime.utcnow()
        return Bucket(**row)

    async def delete(self, bucket_id, user_id):
        if self._owned(bucket_id, user_id) is None:
            raise NotFoundError("Bucket not found")
        del self.rows[bucket_id]

        transactions = self.store.tables["transactions"]
        for transaction_id in [tid for tid, row in transactions.items() if row["bucket_id"] == bucket_id]:
            del transactions[transaction_id]

        for entry in self.store.tables["allocation_history"].values():
            if entry["source_bucket_id"] == bucket_id:
                entry["source_bucket_id"] = None
            if entry["destination_bucket_id"] == bucket_id:
                entry["destination_bucket_id"] = None

    async def total_allocated(self, user_id):
        return money_sum(row["allocated_amount"] for row in self._for_user(user_id))

    async def total_balance(self, user_id):
        return money_sum(row["current_balance"] for row in self._for_user(user_id))


class MemoryIncomeRepository(_MemoryRepository, IncomeRepository):
    table = "income_records"

    async def add(self, user_id, amount, kind, description=None, date=None):
        now = datetime.utcnow()
        row = {
            "id": new_id(),
            "user_id": user_id,
            "amount": amount,
            "kind": kind,
            "description": description,
            "date": date or now,
            "created_at": now,
        }
        self.rows[row["id"]] = row
        return IncomeRecord(**row)

    async def list(self, user_id):
        return [IncomeRecord(**row) for row in _newest_first(self._for_user(user_id))]

    async def delete(self, record_id, user_id):
        if self._owned(record_id, user_id) is None:
            raise NotFoundError("Income record not found")
        del self.rows[record_id]

    async def total(self, user_id):
        return money_sum(row["amount"] for row in self._for_user(user_id))

    async def purge(self, user_id):
        for row in self._for_user(user_id):
            del self.rows[row["id"]]


class MemoryLedgerRepository(_MemoryRepository, LedgerRepository):
    table = "allocation_history"

    async def append(self, user_id, transfer_type, amount, source_bucket_id=None,
                     destination_bucket_id=None, description=None, date=None):
        now = datetime.utcnow()
        row = {
            "id": new_id(),
            "user_id": user_id,
            "source_bucket_id": source_bucket_id,
            "destination_bucket_id": destination_bucket_id,
            "amount": amount,
            "transfer_type": transfer_type,
            "description": description,
            "date": date or now,
            "created_at": now,
        }
        self.rows[row["id"]] = row
        return AllocationHistory(**row)

    async def list(self, user_id, limit=None):
        return [AllocationHistory(**row) for row in _newest_first(self._for_user(user_id), limit)]

    async def purge(self, user_id):
        for row in self._for_user(user_id):
            del self.rows[row["id"]]


class MemoryTransactionRepository(_MemoryRepository, TransactionRepository):
    table = "transactions"

    async def create(self, user_id, bucket_id, amount, description=None, date=None):
        now = datetime.utcnow()
        row = {
            "id": new_id(),
            "user_id": user_id,
            "bucket_id": bucket_id,
            "amount": amount,
            "description": description,
            "date": date or now,
            "created_at": now,
        }
        self.rows[row["id"]] = row
        return Transaction(**row)

    async def get(self, transaction_id, user_id):
        row = self._owned(transaction_id, user_id)
        return Transaction(**row) if row else None

    async def list(self, user_id, limit=None):
        return [Transaction(**row) for row in _newest_first(self._for_user(user_id), limit)]

    async def list_for_bucket(self, bucket_id, user_id):
        rows = [row for row in self._for_user(user_id) if row["bucket_id"] == bucket_id]
        return [Transaction(**row) for row in _newest_first(rows)]

    async def delete(self, transaction_id, user_id):
        if self._owned(transaction_id, user_id) is None:
            raise NotFoundError("Transaction not found")
        del self.rows[transaction_id]

    async def purge(self, user_id):
        for row in self._for_user(user_id):
            del self.rows[row["id"]]


class MemoryUserRepository(_MemoryRepository, UserRepository):
    table = "users"

    def _find(self, field: str, value: str) -> Optional[User]:
        for row in self.rows.values():
            if row[field] == value:
                return User(**row)
        return None

    async def create(self, username, email, name):
        now = datetime.utcnow()
        row = {
            "id": new_id(),
            "username": username,
            "email": email,
            "name": name,
            "created_at": now,
            "updated_at": now,
        }
        self.rows[row["id"]] = row
        return User(**row)

    async def get(self, user_id):
        row = self.rows.get(user_id)
        return User(**row) if row else None

    async def get_by_email(self, email):
        return self._find("email", email)

    async def get_by_username(self, username):
        return self._find("username", username)

    async def delete(self, user_id):
        if user_id not in self.rows:
            raise NotFoundError("User not found")
        del self.rows[user_id]
        for table in ("buckets", "transactions", "income_records", "allocation_history"):
            rows = self.store.tables[table]
            for row_id in [rid for rid, row in rows.items() if row["user_id"] == user_id]:
                del rows[row_id]


class MemoryUnitOfWork(UnitOfWork):
    """Snapshot on entry, restore on failure"""

    def __init__(self, store: Optional[MemoryStore] = None):
        self.store = store if store is not None else MemoryStore()
        self._snapshot = None
        self.buckets = MemoryBucketRepository(self.store)
        self.income = MemoryIncomeRepository(self.store)
        self.ledger = MemoryLedgerRepository(self.store)
        self.transactions = MemoryTransactionRepository(self.store)
        self.users = MemoryUserRepository(self.store)

    async def begin(self):
        self._snapshot = self.store.snapshot()

    async def commit(self):
        self._snapshot = None

    async def rollback(self):
        if self._snapshot is not None:
            self.store.restore(self._snapshot)
        self._snapshot = None
