"""
Transaction Store.

The only component that talks to the database. Every read, filter and sum
sees live rows only (deleted_at IS NULL). SQLAlchemy failures are rolled
back, logged and re-raised as StorageError so engine messages never reach
a response body.
"""

import logging
from datetime import datetime
from functools import wraps
from typing import Any, List

from sqlalchemy import select, func, asc, desc
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from backend.app.core.exceptions import ResourceNotFoundError, StorageError
from backend.app.models.transaction import Transaction

logger = logging.getLogger(__name__)

_DIRECTIONS = {"asc": asc, "desc": desc}


def storage_guard(func_):
    """Translate SQLAlchemy errors raised by a store call into StorageError."""
    @wraps(func_)
    async def wrapper(db: AsyncSession, *args, **kwargs):
        try:
            return await func_(db, *args, **kwargs)
        except SQLAlchemyError as exc:
            await db.rollback()
            logger.exception("Store operation %s failed", func_.__name__)
            raise StorageError() from exc
    return wrapper


def _live():
    return Transaction.deleted_at.is_(None)


def _ordering(field, direction: str):
    try:
        order = _DIRECTIONS[direction]
    except KeyError:
        raise ValueError(f"Unknown sort direction: {direction!r}")
    # Ties are broken by id in the same direction so the order is total.
    return order(field), order(Transaction.id)


class TransactionStore:

    @staticmethod
    @storage_guard
    async def insert(db: AsyncSession, transaction: Transaction) -> Transaction:
        """Persist a new entry. Assigns id, created_at and updated_at."""
        now = datetime.now()
        transaction.id = None
        transaction.created_at = now
        transaction.updated_at = now
        transaction.deleted_at = None

        db.add(transaction)
        await db.commit()
        await db.refresh(transaction)
        return transaction

    @staticmethod
    @storage_guard
    async def find_by_id(db: AsyncSession, transaction_id: int) -> Transaction:
        """
        Fetch one live entry.

        Raises:
            ResourceNotFoundError: If no live entry has that id.
        """
        result = await db.execute(
            select(Transaction).where(Transaction.id == transaction_id, _live())
        )
        transaction = result.scalar_one_or_none()
        if transaction is None:
            raise ResourceNotFoundError()
        return transaction

    @staticmethod
    @storage_guard
    async def list_all_ordered_by(db: AsyncSession, field, direction: str = "asc") -> List[Transaction]:
        query = select(Transaction).where(_live()).order_by(*_ordering(field, direction))
        result = await db.execute(query)
        return list(result.scalars().all())

    @staticmethod
    @storage_guard
    async def range(
        db: AsyncSession,
        field,
        lo: Any,
        hi: Any,
        *predicates,
        direction: str = "asc",
    ) -> List[Transaction]:
        """Live entries with lo <= field < hi that match every extra predicate."""
        query = (
            select(Transaction)
            .where(_live(), field >= lo, field < hi, *predicates)
            .order_by(*_ordering(field, direction))
        )
        result = await db.execute(query)
        return list(result.scalars().all())

    @staticmethod
    @storage_guard
    async def sum(db: AsyncSession, field, *predicates) -> float:
        """Sum of `field` over matching live entries. 0 when nothing matches."""
        query = select(func.coalesce(func.sum(field), 0)).where(_live(), *predicates)
        total = (await db.execute(query)).scalar()
        return float(total or 0)

    @staticmethod
    @storage_guard
    async def update(db: AsyncSession, transaction: Transaction) -> Transaction:
        """
        Persist changes to an existing live entry.

        Raises:
            ResourceNotFoundError: If the id does not identify a live entry.
        """
        exists = await db.execute(
            select(Transaction.id).where(Transaction.id == transaction.id, _live())
        )
        if exists.scalar_one_or_none() is None:
            raise ResourceNotFoundError()

        transaction.updated_at = datetime.now()
        db.add(transaction)
        await db.commit()
        await db.refresh(transaction)
        return transaction

    @staticmethod
    @storage_guard
    async def delete(db: AsyncSession, transaction_id: int) -> None:
        """Mark an entry as deleted. Deleting twice raises ResourceNotFoundError."""
        result = await db.execute(
            select(Transaction).where(Transaction.id == transaction_id, _live())
        )
        transaction = result.scalar_one_or_none()
        if transaction is None:
            raise ResourceNotFoundError()

        transaction.deleted_at = datetime.now()
        await db.commit()
