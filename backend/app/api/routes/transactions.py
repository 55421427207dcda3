"""
Transaction API Endpoints.

Maps URLs, query parameters and bodies onto LedgerService calls.
Static paths (/filter, /resume) are declared before /{transaction_id}
so they are matched first.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Query
from sqlalchemy.ext.asyncio import AsyncSession

from backend.app.db.session import get_db
from backend.app.schemas.transaction import (
    TransactionCreate, TransactionUpdate, TransactionResponse,
    ResumeResponse, PeriodResumeResponse, MessageResponse
)
from backend.app.services.ledger import LedgerService

router = APIRouter(prefix="/transactions", tags=["Transactions"])

# Largest id SQLite can store (signed 64-bit INTEGER)
MAX_TRANSACTION_ID = 2**63 - 1


@router.post("", response_model=TransactionResponse)
async def create_transaction(
    draft: TransactionCreate,
    db: AsyncSession = Depends(get_db)
):
    """Record a new income or expense entry."""
    transaction = await LedgerService.create(db, draft)
    return TransactionResponse.model_validate(transaction)


@router.get("", response_model=List[TransactionResponse])
async def list_transactions(db: AsyncSession = Depends(get_db)):
    """List every live entry, newest first."""
    transactions = await LedgerService.list_all(db)
    return [TransactionResponse.model_validate(t) for t in transactions]


@router.get("/filter", response_model=List[TransactionResponse])
async def filter_transactions(
    start: Optional[str] = Query(None, description="First day, YYYY-MM-DD"),
    end: Optional[str] = Query(None, description="Last day (inclusive), YYYY-MM-DD"),
    tipe: Optional[str] = Query(None, description="'pemasukan' or 'pengeluaran'"),
    db: AsyncSession = Depends(get_db)
):
    """Entries dated within [start, end], optionally of one type."""
    transactions = await LedgerService.filter(db, start, end, tipe)
    return [TransactionResponse.model_validate(t) for t in transactions]


@router.get("/resume", response_model=ResumeResponse)
async def resume(db: AsyncSession = Depends(get_db)):
    """Total income, total expense and balance over all entries."""
    return await LedgerService.resume_overall(db)


@router.get("/resume/monthly", response_model=PeriodResumeResponse)
async def resume_monthly(
    bulan: Optional[str] = Query(None, description="Month, YYYY-MM"),
    tahun: Optional[str] = Query(None, description="Year, YYYY"),
    month: Optional[str] = Query(None, include_in_schema=False),
    year: Optional[str] = Query(None, include_in_schema=False),
    db: AsyncSession = Depends(get_db)
):
    """
    Totals for one period.

    `bulan` wins over `tahun`; with neither the current month is used.
    """
    return await LedgerService.resume_period(db, month=bulan or month, year=tahun or year)


@router.get("/{transaction_id}", response_model=TransactionResponse)
async def get_transaction(
    transaction_id: int = Path(..., ge=1, le=MAX_TRANSACTION_ID),
    db: AsyncSession = Depends(get_db)
):
    transaction = await LedgerService.get(db, transaction_id)
    return TransactionResponse.model_validate(transaction)


@router.put("/{transaction_id}", response_model=TransactionResponse)
async def update_transaction(
    patch: TransactionUpdate,
    transaction_id: int = Path(..., ge=1, le=MAX_TRANSACTION_ID),
    db: AsyncSession = Depends(get_db)
):
    """Update the fields present in the body. Absent fields keep their value."""
    transaction = await LedgerService.update(db, transaction_id, patch)
    return TransactionResponse.model_validate(transaction)


@router.delete("/{transaction_id}", response_model=MessageResponse)
async def delete_transaction(
    transaction_id: int = Path(..., ge=1, le=MAX_TRANSACTION_ID),
    db: AsyncSession = Depends(get_db)
):
    await LedgerService.delete(db, transaction_id)
    return MessageResponse(message="Data berhasil dihapus")
