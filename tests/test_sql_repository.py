import pytest
from decimal import Decimal
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker

from bucketbook.core.database import Base
from bucketbook.core.exceptions import InsufficientFundsError, NotFoundError
from bucketbook.repositories.sql import SqlUnitOfWork
from bucketbook.services.allocation import AllocationEngine
from bucketbook.services.income import IncomeBook
from bucketbook.services.projector import UnallocatedFundsProjector
from bucketbook.services.reallocation import ReallocationEngine
from bucketbook.services.users import UserService
import bucketbook.models

@pytest.fixture
async def session_factory(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'ledger.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    await engine.dispose()

@pytest.fixture
async def account(session_factory):
    async with session_factory() as session:
        created = await UserService(SqlUnitOfWork(session)).create("sam", "sam@example.com", "Sam")
        await IncomeBook(SqlUnitOfWork(session)).add(created["user"].id, "1000.00")
        return {
            "user_id": created["user"].id,
            "bucket_ids": [bucket.id for bucket in created["buckets"]]
        }

async def _bucket(session_factory, bucket_id, user_id):
    async with session_factory() as session:
        return await SqlUnitOfWork(session).buckets.get(bucket_id, user_id)

async def test_allocate_and_reallocate_persist(session_factory, account):
    user_id = account["user_id"]
    groceries, transport = account["bucket_ids"][:2]
    
    async with session_factory() as session:
        uow = SqlUnitOfWork(session)
        await AllocationEngine(uow).allocate(user_id, {groceries: "300.10", transport: "99.90"})
        await ReallocationEngine(uow).reallocate(user_id, groceries, transport, "100", "allocation")
        await ReallocationEngine(uow).reallocate(user_id, transport, None, "50.05", "balance")
    
    groceries_row = await _bucket(session_factory, groceries, user_id)
    transport_row = await _bucket(session_factory, transport, user_id)
    assert groceries_row.allocated_amount == Decimal("200.10")
    assert groceries_row.current_balance == Decimal("200.10")
    assert transport_row.allocated_amount == Decimal("149.85")
    assert transport_row.current_balance == Decimal("149.85")
    
    async with session_factory() as session:
        uow = SqlUnitOfWork(session)
        assert await UnallocatedFundsProjector(uow).unallocated(user_id) == Decimal("650.05")
        history = await uow.ledger.list(user_id)
        assert [entry.transfer_type for entry in history] == [
            "reallocation", "reallocation", "allocation", "allocation"
        ]
        assert len(await uow.ledger.list(user_id, limit=1)) == 1

async def test_failed_allocation_rolls_back(session_factory, account):
    user_id = account["user_id"]
    groceries = account["bucket_ids"][0]
    
    async with session_factory() as session:
        with pytest.raises(NotFoundError):
            await AllocationEngine(SqlUnitOfWork(session)).allocate(
                user_id, {groceries: "10", "missing-bucket": "5"}
            )
    
    row = await _bucket(session_factory, groceries, user_id)
    assert row.allocated_amount == Decimal("0.00")
    async with session_factory() as session:
        assert await SqlUnitOfWork(session).ledger.list(user_id) == []

async def test_insufficient_funds_leaves_rows_alone(session_factory, account):
    user_id = account["user_id"]
    groceries, transport = account["bucket_ids"][:2]
    
    async with session_factory() as session:
        await AllocationEngine(SqlUnitOfWork(session)).allocate(user_id, {groceries: "20"})
    
    async with session_factory() as session:
        with pytest.raises(InsufficientFundsError):
            await ReallocationEngine(SqlUnitOfWork(session)).reallocate(
                user_id, groceries, transport, "20.01", "balance"
            )
    
    row = await _bucket(session_factory, groceries, user_id)
    assert row.current_balance == Decimal("20.00")

async def test_bucket_ownership_in_sql(session_factory, account):
    groceries = account["bucket_ids"][0]
    
    async with session_factory() as session:
        uow = SqlUnitOfWork(session)
        assert await uow.buckets.get(groceries, "someone-else") is None
        with pytest.raises(NotFoundError):
            await uow.buckets.update(groceries, "someone-else", name="Stolen")

async def test_delete_account_removes_everything(session_factory, account):
    user_id = account["user_id"]
    
    async with session_factory() as session:
        await UserService(SqlUnitOfWork(session)).delete_account(user_id)
    
    async with session_factory() as session:
        uow = SqlUnitOfWork(session)
        assert await uow.users.get(user_id) is None
        assert await uow.buckets.list(user_id) == []
        assert await uow.income.total(user_id) == Decimal("0.00")
