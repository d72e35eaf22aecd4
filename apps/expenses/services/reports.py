"""
Expense ledger export rows.
"""

from typing import Iterable, Optional

from apps.bookings.models import Booking

EXPENSES_REPORT_HEADERS = [
    'Date',
    'Category',
    'Vendor',
    'Type',
    'Amount',
    'Method',
    'Notes',
]


def expenses_report_rows(expenses: Iterable) -> list:
    """One row per expense, aligned to EXPENSES_REPORT_HEADERS."""
    return [
        [
            expense.expense_date.isoformat(),
            expense.category,
            expense.vendor,
            expense.type,
            expense.amount,
            expense.payment_method,
            expense.notes or '',
        ]
        for expense in expenses
    ]


def expenses_report_title(*, booking_id: Optional[str] = None, general_only: bool = False) -> str:
    """
    Report title for a filtered expense ledger.

    A booking's expenses are titled with the client's name, falling back
    to the booking id when no booking has that id.
    """
    if booking_id:
        booking = Booking.objects.filter(booking_id=booking_id).first()
        return f"Expenses for {booking.client_name if booking else booking_id}"
    if general_only:
        return 'General Expenses'
    return 'Expenses Report'
