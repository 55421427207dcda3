"""
Tests for TransactionStore against an isolated in-memory database.
"""

import pytest
from datetime import datetime
from unittest.mock import AsyncMock, patch

from sqlalchemy.exc import OperationalError

from backend.app.core.exceptions import ResourceNotFoundError, StorageError
from backend.app.models.transaction import Transaction
from backend.app.services.transaction_store import TransactionStore


def make_transaction(**overrides):
    data = {
        "nama": "Warung",
        "keperluan": "Makan siang",
        "kategori": "food",
        "amount": 25000.0,
        "tipe": "pengeluaran",
        "tanggal": "2025-07-10",
        "parsed_date": datetime(2025, 7, 10),
    }
    data.update(overrides)
    return Transaction(**data)


@pytest.mark.asyncio
async def test_insert_assigns_monotonic_ids_and_timestamps(db_session):
    first = await TransactionStore.insert(db_session, make_transaction())
    second = await TransactionStore.insert(db_session, make_transaction())

    assert first.id == 1
    assert second.id == 2
    assert first.created_at == first.updated_at
    assert first.deleted_at is None


@pytest.mark.asyncio
async def test_find_by_id_missing(db_session):
    with pytest.raises(ResourceNotFoundError):
        await TransactionStore.find_by_id(db_session, 99)


@pytest.mark.asyncio
async def test_list_all_ordered_breaks_ties_by_id(db_session):
    await TransactionStore.insert(db_session, make_transaction(tanggal="2025-07-10"))
    await TransactionStore.insert(db_session, make_transaction(tanggal="2025-07-12"))
    await TransactionStore.insert(db_session, make_transaction(tanggal="2025-07-10"))

    ascending = await TransactionStore.list_all_ordered_by(db_session, Transaction.tanggal, "asc")
    assert [t.id for t in ascending] == [1, 3, 2]

    descending = await TransactionStore.list_all_ordered_by(db_session, Transaction.tanggal, "desc")
    assert [t.id for t in descending] == [2, 3, 1]


@pytest.mark.asyncio
async def test_list_all_rejects_unknown_direction(db_session):
    with pytest.raises(ValueError):
        await TransactionStore.list_all_ordered_by(db_session, Transaction.tanggal, "sideways")


@pytest.mark.asyncio
async def test_range_is_half_open(db_session):
    await TransactionStore.insert(db_session, make_transaction(parsed_date=datetime(2025, 7, 1)))
    await TransactionStore.insert(db_session, make_transaction(parsed_date=datetime(2025, 7, 31, 23, 0)))
    await TransactionStore.insert(db_session, make_transaction(parsed_date=datetime(2025, 8, 1)))

    rows = await TransactionStore.range(
        db_session, Transaction.parsed_date, datetime(2025, 7, 1), datetime(2025, 8, 1)
    )
    assert [t.id for t in rows] == [1, 2]


@pytest.mark.asyncio
async def test_range_applies_extra_predicate(db_session):
    await TransactionStore.insert(db_session, make_transaction(tipe="pemasukan"))
    await TransactionStore.insert(db_session, make_transaction(tipe="pengeluaran"))

    rows = await TransactionStore.range(
        db_session, Transaction.parsed_date, datetime(2025, 7, 1), datetime(2025, 8, 1),
        Transaction.tipe == "pemasukan"
    )
    assert [t.tipe for t in rows] == ["pemasukan"]


@pytest.mark.asyncio
async def test_sum_of_empty_set_is_zero(db_session):
    total = await TransactionStore.sum(db_session, Transaction.amount, Transaction.tipe == "pemasukan")
    assert total == 0
    assert total is not None


@pytest.mark.asyncio
async def test_sum_ignores_deleted_entries(db_session):
    kept = await TransactionStore.insert(db_session, make_transaction(amount=100.0))
    gone = await TransactionStore.insert(db_session, make_transaction(amount=50.0))
    await TransactionStore.delete(db_session, gone.id)

    total = await TransactionStore.sum(db_session, Transaction.amount)
    assert total == kept.amount


@pytest.mark.asyncio
async def test_update_refreshes_updated_at_only(db_session):
    transaction = await TransactionStore.insert(db_session, make_transaction())
    created_at = transaction.created_at

    transaction.amount = 30000.0
    updated = await TransactionStore.update(db_session, transaction)

    assert updated.id == transaction.id
    assert updated.amount == 30000.0
    assert updated.created_at == created_at
    assert updated.updated_at >= created_at


@pytest.mark.asyncio
async def test_update_of_deleted_entry_fails(db_session):
    transaction = await TransactionStore.insert(db_session, make_transaction())
    await TransactionStore.delete(db_session, transaction.id)

    with pytest.raises(ResourceNotFoundError):
        await TransactionStore.update(db_session, transaction)


@pytest.mark.asyncio
async def test_delete_is_logical_and_hides_entry(db_session):
    transaction = await TransactionStore.insert(db_session, make_transaction())
    await TransactionStore.delete(db_session, transaction.id)

    assert transaction.deleted_at is not None
    with pytest.raises(ResourceNotFoundError):
        await TransactionStore.find_by_id(db_session, transaction.id)
    assert await TransactionStore.list_all_ordered_by(db_session, Transaction.id) == []

    with pytest.raises(ResourceNotFoundError):
        await TransactionStore.delete(db_session, transaction.id)


@pytest.mark.asyncio
async def test_engine_failure_becomes_storage_error(db_session):
    failure = OperationalError("SELECT", {}, Exception("disk I/O error"))
    with patch.object(db_session, "execute", AsyncMock(side_effect=failure)):
        with pytest.raises(StorageError) as exc_info:
            await TransactionStore.find_by_id(db_session, 1)

    assert "disk" not in exc_info.value.message
    assert exc_info.value.status_code == 500
