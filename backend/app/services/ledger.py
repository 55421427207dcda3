"""
Ledger Service (Domain Logic).

Validates entry shape, orchestrates TransactionStore calls and builds the
income/expense summaries.
"""

import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from backend.app.core.exceptions import BadRequestError, InvalidTransactionTypeError
from backend.app.domain.ledger.date_resolver import DateResolver, DAY_FORMAT, Period
from backend.app.models.transaction import Transaction
from backend.app.models.transaction_enums import TransactionType
from backend.app.schemas.transaction import (
    TransactionCreate, TransactionUpdate,
    ResumeResponse, PeriodResumeResponse
)
from backend.app.services.transaction_store import TransactionStore

logger = logging.getLogger(__name__)


def validate_type(value: Optional[str]) -> str:
    """Return the value if it names a TransactionType, else raise."""
    if value not in TransactionType.values():
        raise InvalidTransactionTypeError()
    return value


def resolve_entry_date(tanggal: Optional[str]) -> tuple:
    """
    Work out (tanggal, parsed_date) for an entry.

    A given date string is parsed strictly. Without one the entry is dated
    now and the display date is derived from that instant.
    """
    if tanggal:
        return tanggal, DateResolver.parse_day(tanggal)
    now = datetime.now()
    return now.strftime(DAY_FORMAT), now


class LedgerService:

    @staticmethod
    async def create(db: AsyncSession, draft: TransactionCreate) -> Transaction:
        """
        Record a new entry.

        Raises:
            BadRequestError: Invalid `tipe` or unparseable `tanggal`.
        """
        tipe = validate_type(draft.tipe)
        tanggal, parsed_date = resolve_entry_date(draft.tanggal)

        transaction = Transaction(
            nama=draft.nama,
            keperluan=draft.keperluan,
            kategori=draft.kategori,
            amount=draft.amount,
            tipe=tipe,
            tanggal=tanggal,
            parsed_date=parsed_date,
        )
        transaction = await TransactionStore.insert(db, transaction)
        logger.info("Transaction %s created (%s %s)", transaction.id, transaction.tipe, transaction.amount)
        return transaction

    @staticmethod
    async def get(db: AsyncSession, transaction_id: int) -> Transaction:
        return await TransactionStore.find_by_id(db, transaction_id)

    @staticmethod
    async def list_all(db: AsyncSession) -> List[Transaction]:
        """All live entries, newest display date first."""
        return await TransactionStore.list_all_ordered_by(db, Transaction.tanggal, "desc")

    @staticmethod
    async def filter(
        db: AsyncSession,
        start: Optional[str],
        end: Optional[str],
        tipe: Optional[str] = None,
    ) -> List[Transaction]:
        """
        Entries whose parsed_date falls between the `start` day and the end of
        the `end` day, optionally of a single type. Newest first.
        """
        if not start or not end:
            raise BadRequestError("start dan end date harus diisi (format: YYYY-MM-DD)")

        message = "Format date salah. Gunakan YYYY-MM-DD"
        period = DateResolver.day_range(
            DateResolver.parse_day(start, message),
            DateResolver.parse_day(end, message),
        )

        predicates = []
        if tipe:
            predicates.append(Transaction.tipe == validate_type(tipe))

        logger.debug("Filtering transactions %s tipe=%s", period.label, tipe or "*")

        return await TransactionStore.range(
            db, Transaction.parsed_date, period.start, period.end, *predicates, direction="desc"
        )

    @staticmethod
    async def update(db: AsyncSession, transaction_id: int, patch: TransactionUpdate) -> Transaction:
        """
        Overlay the fields present in `patch` onto an existing entry.

        The same type and date rules as create apply. An empty `tanggal`
        keeps the entry's current date.
        """
        transaction = await TransactionStore.find_by_id(db, transaction_id)

        update_data = patch.model_dump(exclude_unset=True, exclude_none=True)
        if "tipe" in update_data:
            update_data["tipe"] = validate_type(update_data["tipe"])
        if "tanggal" in update_data:
            tanggal = update_data.pop("tanggal")
            if tanggal:
                update_data["parsed_date"] = DateResolver.parse_day(tanggal)
                update_data["tanggal"] = tanggal

        for field, value in update_data.items():
            setattr(transaction, field, value)

        transaction = await TransactionStore.update(db, transaction)
        logger.info("Transaction %s updated", transaction.id)
        return transaction

    @staticmethod
    async def delete(db: AsyncSession, transaction_id: int) -> None:
        # Existence pre-check keeps 404 distinct from success
        await TransactionStore.find_by_id(db, transaction_id)
        await TransactionStore.delete(db, transaction_id)
        logger.info("Transaction %s deleted", transaction_id)

    @staticmethod
    async def _totals(db: AsyncSession, *predicates) -> ResumeResponse:
        income = await TransactionStore.sum(
            db, Transaction.amount, Transaction.tipe == TransactionType.INCOME.value, *predicates
        )
        expense = await TransactionStore.sum(
            db, Transaction.amount, Transaction.tipe == TransactionType.EXPENSE.value, *predicates
        )
        return ResumeResponse(
            total_pemasukan=income,
            total_pengeluaran=expense,
            saldo=income - expense,
        )

    @staticmethod
    async def resume_overall(db: AsyncSession) -> ResumeResponse:
        """Income, expense and balance over every live entry."""
        return await LedgerService._totals(db)

    @staticmethod
    async def resume_period(
        db: AsyncSession,
        month: Optional[str] = None,
        year: Optional[str] = None,
    ) -> PeriodResumeResponse:
        """Income, expense and balance for a month, a year or the current month."""
        period: Period = DateResolver.resolve_period(month=month, year=year)
        totals = await LedgerService._totals(
            db,
            Transaction.parsed_date >= period.start,
            Transaction.parsed_date < period.end,
        )
        return PeriodResumeResponse(
            **totals.model_dump(),
            periode=period.label,
            start=period.start.date(),
            end=period.end.date(),
        )
