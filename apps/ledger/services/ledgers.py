"""
Ledger views over a filtered transaction list.

The daybook, cashbook and bankbook carry a running balance seeded at zero
for the filtered window; there is no carry-forward from earlier periods.
The cashbook holds Cash transactions and the bankbook everything else, so
together they hold exactly the daybook's transactions.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, List, Optional

from apps.bookings.models import PaymentMethod

from .transactions import Transaction, INCOME, EXPENSE

LEDGER_HEADERS = ['Date', 'Description', 'Income', 'Expense', 'Balance', 'Payment Method', 'Booking ID']

CATEGORY_LEDGER_HEADERS = ['Date', 'Description', 'Amount', 'Payment Method', 'Booking ID']

LEDGER_TITLES = {
    'daybook': 'Daybook',
    'cashbook': 'Cashbook',
    'bankbook': 'Bankbook',
}


@dataclass(frozen=True)
class LedgerEntry:
    transaction: Transaction
    balance: Decimal


def running_ledger(transactions: Iterable[Transaction]) -> List[LedgerEntry]:
    balance = Decimal('0.00')
    entries = []
    for transaction in transactions:
        balance += transaction.signed_amount
        entries.append(LedgerEntry(transaction=transaction, balance=balance))
    return entries


def daybook(transactions: Iterable[Transaction]) -> List[LedgerEntry]:
    return running_ledger(transactions)


def cashbook(transactions: Iterable[Transaction]) -> List[LedgerEntry]:
    return running_ledger(t for t in transactions if t.payment_method == PaymentMethod.CASH)


def bankbook(transactions: Iterable[Transaction]) -> List[LedgerEntry]:
    return running_ledger(t for t in transactions if t.payment_method != PaymentMethod.CASH)


LEDGERS = {
    'daybook': daybook,
    'cashbook': cashbook,
    'bankbook': bankbook,
}


def category_vendor_ledger(
    transactions: Iterable[Transaction],
    *,
    category: Optional[str] = None,
    vendor: Optional[str] = None,
) -> dict:
    """
    Expense-side entries for one category or one vendor, with their total.

    Only Expense-type transactions are kept, and the total is summed after
    that filter. A reverted expense is Income-type, so it is not listed
    and does not reduce the total. Nothing matches when neither a category
    nor a vendor is given.

    Returns:
        {'entries': [Transaction, ...], 'total': Decimal}
    """
    if category:
        entries = [t for t in transactions if t.type == EXPENSE and t.category == category]
    elif vendor:
        entries = [t for t in transactions if t.type == EXPENSE and t.vendor == vendor]
    else:
        entries = []

    return {
        'entries': entries,
        'total': sum((t.amount for t in entries), Decimal('0.00')),
    }


def format_date(day) -> str:
    return day.strftime('%d %b %Y')


def ledger_rows(entries: Iterable[LedgerEntry]) -> list:
    """Rows aligned to LEDGER_HEADERS."""
    return [
        [
            format_date(entry.transaction.date),
            entry.transaction.description,
            entry.transaction.amount if entry.transaction.type == INCOME else 0,
            entry.transaction.amount if entry.transaction.type == EXPENSE else 0,
            entry.balance,
            entry.transaction.payment_method,
            entry.transaction.booking_id or 'N/A',
        ]
        for entry in entries
    ]


def category_ledger_rows(transactions: Iterable[Transaction]) -> list:
    """Rows aligned to CATEGORY_LEDGER_HEADERS."""
    return [
        [
            format_date(t.date),
            t.description,
            t.amount,
            t.payment_method,
            t.booking_id or 'N/A',
        ]
        for t in transactions
    ]
