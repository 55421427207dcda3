"""
Transaction database model.

One row per ledger entry. Rows are never physically removed; a delete
stamps `deleted_at` and every read filters those rows out.
"""

from datetime import datetime
from sqlalchemy import Column, Integer, String, Float, DateTime
from backend.app.db.session import Base


class Transaction(Base):
    """
    Ledger entry model.

    Column names follow the JSON wire format:
    nama (payer/payee), keperluan (purpose), kategori (category),
    tipe (pemasukan/pengeluaran), tanggal (display date, YYYY-MM-DD).
    `parsed_date` is the canonical instant used by range filters and sums.
    """
    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)

    # Timestamps (local time, naive)
    created_at = Column(DateTime, default=datetime.now, nullable=False)
    updated_at = Column(DateTime, default=datetime.now, onupdate=datetime.now, nullable=False)
    deleted_at = Column(DateTime, nullable=True, index=True)

    # Entry details
    nama = Column(String(200), nullable=False, default="")
    keperluan = Column(String(500), nullable=False, default="")
    kategori = Column(String(100), nullable=False, default="")

    # Financials
    amount = Column(Float, nullable=False, default=0.0)
    tipe = Column(String(20), nullable=False, index=True)

    # Dates
    tanggal = Column(String(10), nullable=False, default="")
    parsed_date = Column(DateTime, nullable=False, index=True)

    def __repr__(self):
        return f"<Transaction(id={self.id}, tipe='{self.tipe}', amount={self.amount}, tanggal='{self.tanggal}')>"
