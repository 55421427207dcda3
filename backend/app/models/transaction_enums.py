"""
Transaction type enumeration.

Defines the two directions a ledger entry can move money.
"""

import enum


class TransactionType(str, enum.Enum):
    """
    Transaction type enumeration.

    Types:
        INCOME: Money coming in (pemasukan), adds to the balance
        EXPENSE: Money going out (pengeluaran), subtracts from the balance
    """
    INCOME = "pemasukan"
    EXPENSE = "pengeluaran"

    @classmethod
    def values(cls) -> list:
        return [member.value for member in cls]
