"""
Booking expense roll-up.

Booking.expenses is a cached total over the expense ledger:

    expenses = sum(Paid amounts) - sum(Reverted amounts)

for every expense carrying the booking's id. The cache is recomputed in
full (every booking, every expense) each time the expense ledger
changes. Expenses without a booking id, or with an id no booking has,
never contribute to any booking.
"""

import logging
from collections import defaultdict
from decimal import Decimal
from typing import Iterable

from django.db import transaction

from apps.bookings.models import Booking
from apps.expenses.models import Expense, ExpenseType

logger = logging.getLogger(__name__)


def expense_totals_by_booking(expenses: Iterable) -> dict:
    """
    Signed expense totals keyed by booking id.

    Args:
        expenses: Expense instances (or objects with booking_id, type and
            amount attributes)

    Returns:
        dict of booking id -> Decimal total. General expenses are skipped.
    """
    totals = defaultdict(Decimal)
    for expense in expenses:
        if not expense.booking_id:
            continue
        if expense.type == ExpenseType.REVERTED:
            totals[expense.booking_id] -= expense.amount
        else:
            totals[expense.booking_id] += expense.amount
    return dict(totals)


def recompute_booking_expenses(*, dry_run: bool = False) -> dict:
    """
    Recompute the cached expense total of every booking.

    Running it twice on an unchanged ledger changes nothing the second time.

    Args:
        dry_run: Compute the changes without saving them

    Returns:
        dict of booking id -> (old total, new total) for bookings whose
        total changed
    """
    totals = expense_totals_by_booking(
        Expense.objects.only('booking_id', 'type', 'amount')
    )

    changed = {}
    to_update = []
    for booking in Booking.objects.only('id', 'booking_id', 'expenses'):
        new_total = totals.get(booking.booking_id, Decimal('0.00'))
        if booking.expenses != new_total:
            changed[booking.booking_id] = (booking.expenses, new_total)
            booking.expenses = new_total
            to_update.append(booking)

    if to_update and not dry_run:
        with transaction.atomic():
            Booking.objects.bulk_update(to_update, ['expenses'])

    logger.info(
        "Expense roll-up%s: %d booking(s) changed",
        ' (dry run)' if dry_run else '',
        len(changed),
    )
    return changed
