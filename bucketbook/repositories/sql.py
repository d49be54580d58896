"""
SQLAlchemy repositories over one AsyncSession

Writes are flushed, never committed; ``SqlUnitOfWork`` owns the commit so
every write inside one ``async with`` block lands in the same transaction.
"""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import select, update, delete, func, and_, desc
from sqlalchemy.ext.asyncio import AsyncSession

from bucketbook.core.exceptions import NotFoundError
from bucketbook.core.money import ZERO, to_money
from bucketbook.models import (
    AllocationHistory,
    Bucket,
    IncomeRecord,
    Transaction,
    User
)
from bucketbook.repositories.base import (
    BucketRepository,
    IncomeRepository,
    LedgerRepository,
    TransactionRepository,
    UnitOfWork,
    UserRepository
)


class _SqlRepository:

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _sum(self, column, *criteria) -> Decimal:
        result = await self.db.execute(select(func.sum(column)).where(and_(*criteria)))
        total = result.scalar()
        return to_money(total) if total is not None else ZERO


class SqlBucketRepository(_SqlRepository, BucketRepository):

    async def get(self, bucket_id, user_id, for_update=False):
        stmt = select(Bucket).where(
            and_(
                Bucket.id == bucket_id,
                Bucket.user_id == user_id
            )
        )
        if for_update:
            # Row lock for the rest of the transaction; ignored by SQLite
            stmt = stmt.with_for_update().execution_options(populate_existing=True)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def list(self, user_id):
        stmt = select(Bucket).where(Bucket.user_id == user_id).order_by(Bucket.created_at.asc())
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def create(self, user_id, name, icon_name=None):
        bucket = Bucket(
            user_id=user_id,
            name=name,
            icon_name=icon_name,
            allocated_amount=ZERO,
            current_balance=ZERO
        )
        self.db.add(bucket)
        await self.db.flush()
        return bucket

    async def update(self, bucket_id, user_id, **fields):
        bucket = await self.get(bucket_id, user_id)
        if not bucket:
            raise NotFoundError("Bucket not found")

        for key, value in fields.items():
            setattr(bucket, key, value)
        bucket.updated_at = datetime.utcnow()

        await self.db.flush()
        return bucket

    async def delete(self, bucket_id, user_id):
        bucket = await self.get(bucket_id, user_id)
        if not bucket:
            raise NotFoundError("Bucket not found")

        await self.db.execute(delete(Transaction).where(Transaction.bucket_id == bucket_id))
        await self.db.execute(
            update(AllocationHistory)
            .where(AllocationHistory.source_bucket_id == bucket_id)
            .values(source_bucket_id=None)
        )
        await self.db.execute(
            update(AllocationHistory)
            .where(AllocationHistory.destination_bucket_id == bucket_id)
            .values(destination_bucket_id=None)
        )
        await self.db.execute(delete(Bucket).where(Bucket.id == bucket_id))
        await self.db.flush()

    async def total_allocated(self, user_id):
        return await self._sum(Bucket.allocated_amount, Bucket.user_id == user_id)

    async def total_balance(self, user_id):
        return await self._sum(Bucket.current_balance, Bucket.user_id == user_id)


class SqlIncomeRepository(_SqlRepository, IncomeRepository):

    async def add(self, user_id, amount, kind, description=None, date=None):
        record = IncomeRecord(
            user_id=user_id,
            amount=amount,
            kind=kind,
            description=description,
            date=date or datetime.utcnow()
        )
        self.db.add(record)
        await self.db.flush()
        return record

    async def list(self, user_id):
        stmt = select(IncomeRecord).where(
            IncomeRecord.user_id == user_id
        ).order_by(desc(IncomeRecord.created_at))
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def delete(self, record_id, user_id):
        result = await self.db.execute(
            delete(IncomeRecord).where(
                and_(
                    IncomeRecord.id == record_id,
                    IncomeRecord.user_id == user_id
                )
            )
        )
        if result.rowcount == 0:
            raise NotFoundError("Income record not found")

    async def total(self, user_id):
        return await self._sum(IncomeRecord.amount, IncomeRecord.user_id == user_id)

    async def purge(self, user_id):
        await self.db.execute(delete(IncomeRecord).where(IncomeRecord.user_id == user_id))


class SqlLedgerRepository(_SqlRepository, LedgerRepository):

    async def append(self, user_id, transfer_type, amount, source_bucket_id=None,
                     destination_bucket_id=None, description=None, date=None):
        entry = AllocationHistory(
            user_id=user_id,
            source_bucket_id=source_bucket_id,
            destination_bucket_id=destination_bucket_id,
            amount=amount,
            transfer_type=transfer_type,
            description=description,
            date=date or datetime.utcnow()
        )
        self.db.add(entry)
        await self.db.flush()
        return entry

    async def list(self, user_id, limit=None):
        query = select(AllocationHistory).where(
            AllocationHistory.user_id == user_id
        ).order_by(desc(AllocationHistory.created_at))
        if limit:
            query = query.limit(limit)
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def purge(self, user_id):
        await self.db.execute(delete(AllocationHistory).where(AllocationHistory.user_id == user_id))


class SqlTransactionRepository(_SqlRepository, TransactionRepository):

    async def create(self, user_id, bucket_id, amount, description=None, date=None):
        transaction = Transaction(
            user_id=user_id,
            bucket_id=bucket_id,
            amount=amount,
            description=description,
            date=date or datetime.utcnow()
        )
        self.db.add(transaction)
        await self.db.flush()
        return transaction

    async def get(self, transaction_id, user_id):
        stmt = select(Transaction).where(
            and_(
                Transaction.id == transaction_id,
                Transaction.user_id == user_id
            )
        )
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def list(self, user_id, limit=None):
        query = select(Transaction).where(
            Transaction.user_id == user_id
        ).order_by(desc(Transaction.created_at))
        if limit:
            query = query.limit(limit)
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def list_for_bucket(self, bucket_id, user_id):
        stmt = select(Transaction).where(
            and_(
                Transaction.bucket_id == bucket_id,
                Transaction.user_id == user_id
            )
        ).order_by(desc(Transaction.created_at))
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def delete(self, transaction_id, user_id):
        transaction = await self.get(transaction_id, user_id)
        if not transaction:
            raise NotFoundError("Transaction not found")
        await self.db.delete(transaction)
        await self.db.flush()

    async def purge(self, user_id):
        await self.db.execute(delete(Transaction).where(Transaction.user_id == user_id))


class SqlUserRepository(_SqlRepository, UserRepository):

    async def create(self, username, email, name):
        user = User(username=username, email=email, name=name)
        self.db.add(user)
        await self.db.flush()
        return user

    async def get(self, user_id):
        result = await self.db.execute(select(User).where(User.id == user_id))
        return result.scalar_one_or_none()

    async def get_by_email(self, email):
        result = await self.db.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def get_by_username(self, username):
        result = await self.db.execute(select(User).where(User.username == username))
        return result.scalar_one_or_none()

    async def delete(self, user_id):
        user = await self.get(user_id)
        if not user:
            raise NotFoundError("User not found")

        # Children first so SQLite without FK enforcement ends up clean too
        await self.db.execute(delete(Transaction).where(Transaction.user_id == user_id))
        await self.db.execute(delete(AllocationHistory).where(AllocationHistory.user_id == user_id))
        await self.db.execute(delete(IncomeRecord).where(IncomeRecord.user_id == user_id))
        await self.db.execute(delete(Bucket).where(Bucket.user_id == user_id))
        await self.db.execute(delete(User).where(User.id == user_id))
        await self.db.flush()


class SqlUnitOfWork(UnitOfWork):

    def __init__(self, db: AsyncSession):
        self.db = db
        self.buckets = SqlBucketRepository(db)
        self.income = SqlIncomeRepository(db)
        self.ledger = SqlLedgerRepository(db)
        self.transactions = SqlTransactionRepository(db)
        self.users = SqlUserRepository(db)

    async def commit(self):
        await self.db.commit()

    async def rollback(self):
        await self.db.rollback()
