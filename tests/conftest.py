import os

# Keep the app engine off PostgreSQL while tests import bucketbook
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

import pytest
from decimal import Decimal

from bucketbook.repositories.memory import MemoryStore, MemoryUnitOfWork

@pytest.fixture
def store():
    return MemoryStore()

@pytest.fixture
def uow(store):
    return MemoryUnitOfWork(store)

@pytest.fixture
def user_id():
    return "user-1"

@pytest.fixture
def other_user_id():
    return "user-2"

@pytest.fixture
def make_bucket(uow):
    async def _make(user_id, name, allocated="0", balance="0"):
        bucket = await uow.buckets.create(user_id, name)
        return await uow.buckets.update(
            bucket.id,
            user_id,
            allocated_amount=Decimal(allocated).quantize(Decimal("0.01")),
            current_balance=Decimal(balance).quantize(Decimal("0.01"))
        )
    return _make

@pytest.fixture
def add_income(uow):
    async def _add(user_id, amount):
        return await uow.income.add(user_id, Decimal(amount), "income")
    return _add
