"""
Transaction construction and filtering.

Booking payments and expenses are merged into one list of Transactions
sorted by date:

    Received payment  -> Income
    Reverted payment  -> Expense
    Paid expense      -> Expense
    Reverted expense  -> Income

Equal dates keep construction order (payments before expenses). This
list is the only input of every ledger.
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Iterable, List, Optional, Tuple

from apps.bookings.models import Booking, PaymentType
from apps.expenses.models import Expense, ExpenseType

from .exceptions import InvalidSeasonError

INCOME = 'Income'
EXPENSE = 'Expense'


@dataclass(frozen=True)
class Transaction:
    date: date
    description: str
    type: str
    amount: Decimal
    payment_method: str
    booking_id: str = ''
    vendor: str = ''
    category: str = ''
    # 'payment:<id>' or 'expense:<id>'
    source: str = ''

    @property
    def signed_amount(self) -> Decimal:
        return self.amount if self.type == INCOME else -self.amount


def payment_transactions(bookings: Iterable) -> List[Transaction]:
    transactions = []
    for booking in bookings:
        for payment in booking.payments.all():
            if payment.type == PaymentType.RECEIVED:
                description = f"Payment from {booking.client_name}"
                kind = INCOME
            else:
                description = f"Payment Reverted to {booking.client_name}"
                if payment.notes:
                    description += f" (Reason: {payment.notes})"
                kind = EXPENSE

            transactions.append(Transaction(
                date=payment.date,
                description=description,
                type=kind,
                amount=payment.amount,
                payment_method=payment.method,
                booking_id=booking.booking_id,
                source=f"payment:{payment.id}",
            ))
    return transactions


def expense_transactions(expenses: Iterable) -> List[Transaction]:
    transactions = []
    for expense in expenses:
        description = f"{expense.category}: {expense.vendor}"
        if expense.type == ExpenseType.REVERTED and expense.notes:
            description += f" (Revert Reason: {expense.notes})"

        transactions.append(Transaction(
            date=expense.expense_date,
            description=description,
            type=EXPENSE if expense.type == ExpenseType.PAID else INCOME,
            amount=expense.amount,
            payment_method=expense.payment_method,
            booking_id=expense.booking_id,
            vendor=expense.vendor,
            category=expense.category,
            source=f"expense:{expense.id}",
        ))
    return transactions


def build_transactions(bookings: Iterable, expenses: Iterable) -> List[Transaction]:
    """All transactions, oldest first. The sort is stable."""
    transactions = payment_transactions(bookings) + expense_transactions(expenses)
    return sorted(transactions, key=lambda transaction: transaction.date)


def load_transactions() -> List[Transaction]:
    """build_transactions() over every stored booking and expense."""
    return build_transactions(
        Booking.objects.prefetch_related('payments').order_by('created_at'),
        Expense.objects.order_by('created_at'),
    )


def season_window(season: str) -> Tuple[date, date]:
    """
    First and last day of a season.

    A season "YYYY-YY" runs from April 1 of YYYY to March 31 of the next
    year, both inclusive. Only the start year is read.
    """
    try:
        start_year = int(season.split('-')[0])
        return date(start_year, 4, 1), date(start_year + 1, 3, 31)
    except (AttributeError, ValueError, OverflowError):
        raise InvalidSeasonError(f"Season '{season}' is not of the form YYYY-YY")


def in_season(day: date, season: str) -> bool:
    start, end = season_window(season)
    return start <= day <= end


def filter_transactions(
    transactions: Iterable[Transaction],
    *,
    season: Optional[str] = None,
    date_from: Optional[date] = None,
    date_to: Optional[date] = None,
    search: str = '',
) -> List[Transaction]:
    """
    Keep the transactions matching every given filter.

    Args:
        transactions: Transactions in ledger order
        season: Season key; keeps its April-March window
        date_from / date_to: Inclusive date bounds
        search: Case-insensitive substring of the booking id or description

    Returns:
        Matching transactions, order preserved
    """
    window = season_window(season) if season else None
    needle = (search or '').strip().lower()

    matched = []
    for transaction in transactions:
        if window and not (window[0] <= transaction.date <= window[1]):
            continue
        if date_from and transaction.date < date_from:
            continue
        if date_to and transaction.date > date_to:
            continue
        if needle and needle not in transaction.booking_id.lower() \
                and needle not in transaction.description.lower():
            continue
        matched.append(transaction)
    return matched
