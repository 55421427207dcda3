"""
Transaction Pydantic schemas.

Defines request and response models for the ledger API. Field names are
the JSON wire names.
"""

from pydantic import BaseModel, Field
from datetime import date, datetime
from typing import Optional


class TransactionCreate(BaseModel):
    """Schema for recording a new ledger entry."""
    nama: str = Field("", max_length=200, description="Payer or payee")
    keperluan: str = Field("", max_length=500, description="Purpose of the entry")
    kategori: str = Field("", max_length=100, description="Category tag")
    amount: float = Field(0.0, allow_inf_nan=False, description="Amount, sign carried by tipe")
    tipe: str = Field("", description="'pemasukan' or 'pengeluaran'")
    tanggal: Optional[str] = Field(None, description="Display date, YYYY-MM-DD")


class TransactionUpdate(BaseModel):
    """Schema for updating an entry. Absent or null fields keep their value."""
    nama: Optional[str] = Field(None, max_length=200)
    keperluan: Optional[str] = Field(None, max_length=500)
    kategori: Optional[str] = Field(None, max_length=100)
    amount: Optional[float] = Field(None, allow_inf_nan=False)
    tipe: Optional[str] = None
    tanggal: Optional[str] = None


class TransactionResponse(BaseModel):
    """Schema for a ledger entry response."""
    id: int
    created_at: datetime
    updated_at: datetime
    deleted_at: Optional[datetime] = None
    nama: str
    keperluan: str
    kategori: str
    amount: float
    tipe: str
    tanggal: str
    parsed_date: datetime

    class Config:
        from_attributes = True


class ResumeResponse(BaseModel):
    """Totals and balance over a set of entries."""
    total_pemasukan: float = 0.0
    total_pengeluaran: float = 0.0
    saldo: float = 0.0  # pemasukan - pengeluaran


class PeriodResumeResponse(ResumeResponse):
    """Totals for a resolved month or year. `end` is exclusive."""
    periode: str
    start: date
    end: date


class MessageResponse(BaseModel):
    """Plain message envelope."""
    message: str
