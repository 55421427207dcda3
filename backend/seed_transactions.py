"""
Database seeding script for sample ledger entries.

Records a month of example income and expenses so the landing page and
summary endpoints have something to show.
Run this script after the server has created the database once.
"""

import asyncio
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from backend.app.db.session import AsyncSessionLocal, engine, Base
from backend.app.models.transaction import Transaction
from backend.app.schemas.transaction import TransactionCreate
from backend.app.services.ledger import LedgerService
from sqlalchemy import select, func


SAMPLE_ENTRIES = [
    {"nama": "Kantor", "keperluan": "Gaji bulanan", "kategori": "salary",
     "amount": 5000000, "tipe": "pemasukan", "tanggal": "2025-07-01"},
    {"nama": "Pasar", "keperluan": "Belanja mingguan", "kategori": "groceries",
     "amount": 350000, "tipe": "pengeluaran", "tanggal": "2025-07-05"},
    {"nama": "PLN", "keperluan": "Token listrik", "kategori": "utilities",
     "amount": 200000, "tipe": "pengeluaran", "tanggal": "2025-07-15"},
    {"nama": "Klien", "keperluan": "Proyek lepas", "kategori": "freelance",
     "amount": 1500000, "tipe": "pemasukan", "tanggal": "2025-07-20"},
]


async def seed_transactions():
    """Seed sample entries unless the ledger already has data."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with AsyncSessionLocal() as db:
        print("🌱 Starting transaction seeding...")

        existing = (await db.execute(select(func.count(Transaction.id)))).scalar()
        if existing:
            print(f"ℹ️  Ledger already has {existing} entries, skipping seeding")
            return

        for entry in SAMPLE_ENTRIES:
            transaction = await LedgerService.create(db, TransactionCreate(**entry))
            print(f"✅ {transaction.tanggal} {transaction.tipe:<12} {transaction.amount:>12,.0f}  {transaction.keperluan}")

        resume = await LedgerService.resume_period(db, month="2025-07")
        print(f"\n🎉 Seeded {len(SAMPLE_ENTRIES)} entries. Saldo {resume.periode}: {resume.saldo:,.0f}")

    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(seed_transactions())
