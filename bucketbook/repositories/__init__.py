from .base import UnitOfWork
from .memory import MemoryStore, MemoryUnitOfWork
from .sql import SqlUnitOfWork

__all__ = ["UnitOfWork", "MemoryStore", "MemoryUnitOfWork", "SqlUnitOfWork"]
