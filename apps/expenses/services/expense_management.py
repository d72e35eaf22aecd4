"""
Expense entry and reversal service.

Expenses are append-only. Every function here that writes to the expense
ledger finishes by recomputing the booking expense roll-up.
"""

import logging
from datetime import date
from decimal import Decimal
from typing import Optional, Tuple
from uuid import UUID

from django.db import transaction
from django.db.models import Q, QuerySet, Sum

from apps.bookings.models import PaymentMethod
from apps.expenses.defaults import REFUND_CATEGORY_NAME
from apps.expenses.models import Expense, ExpenseType, Vendor

from .category_management import find_category_by_name, find_vendor_by_name, fallback_category
from .exceptions import (
    ExpenseNotFoundError,
    InvalidExpenseError,
    ExpenseReversalError,
)
from .expense_rollup import recompute_booking_expenses

logger = logging.getLogger(__name__)


def get_expense(*, expense_id: UUID) -> Expense:
    try:
        return Expense.objects.get(id=expense_id)
    except Expense.DoesNotExist:
        raise ExpenseNotFoundError(f"Expense {expense_id} not found")


def search_expenses(
    *,
    search: Optional[str] = None,
    booking_id: Optional[str] = None,
    category: Optional[str] = None,
    vendor: Optional[str] = None,
    expense_type: Optional[str] = None,
    general_only: bool = False,
    date_from: Optional[date] = None,
    date_to: Optional[date] = None,
) -> QuerySet:
    """
    Filter the expense ledger.

    Filters:
    - search: Substring of category, vendor, booking id or notes
    - booking_id: Exact booking id
    - category / vendor: Exact name, case-insensitive
    - expense_type: Paid or Reverted
    - general_only: Only expenses with no booking
    - date_from / date_to: Inclusive expense date range
    """
    queryset = Expense.objects.all()

    if search:
        queryset = queryset.filter(
            Q(category__icontains=search) |
            Q(vendor__icontains=search) |
            Q(booking_id__icontains=search) |
            Q(notes__icontains=search)
        )
    if booking_id:
        queryset = queryset.filter(booking_id=booking_id)
    if general_only:
        queryset = queryset.filter(booking_id='')
    if category:
        queryset = queryset.filter(category__iexact=category)
    if vendor:
        queryset = queryset.filter(vendor__iexact=vendor)
    if expense_type:
        queryset = queryset.filter(type=expense_type)
    if date_from:
        queryset = queryset.filter(expense_date__gte=date_from)
    if date_to:
        queryset = queryset.filter(expense_date__lte=date_to)

    return queryset.order_by('-expense_date', '-created_at')


def ensure_vendor(*, name: str, category_name: str = '') -> Tuple[Vendor, bool]:
    """
    Return the vendor with this name, creating it on first use.

    Names match case-insensitively. A new vendor is filed under the
    category named ``category_name`` when one exists, else under Other.

    Returns:
        (vendor, created)
    """
    vendor = find_vendor_by_name(name)
    if vendor is not None:
        return vendor, False

    selected = find_category_by_name(category_name) if category_name else None
    vendor = Vendor.objects.create(name=name.strip(), category=fallback_category(selected))
    logger.info("Vendor '%s' auto-created under %s", vendor.name, vendor.category.name)
    return vendor, True


def add_expense(
    *,
    category: str,
    vendor: str,
    expense_date: date,
    payment_method: str,
    amount: Optional[Decimal] = None,
    booking_id: str = '',
    notes: str = '',
    manpower_count: Optional[int] = None,
    rate_per_person: Optional[Decimal] = None,
) -> Tuple[Expense, bool]:
    """
    Record a paid expense.

    For manpower categories the amount is always ``manpower_count *
    rate_per_person``; any amount passed in is ignored. The vendor is
    created on first use (see ensure_vendor). The booking id is stored as
    given; an id no booking has simply never rolls up.

    Args:
        category: Category name
        vendor: Vendor name
        expense_date: Date paid
        payment_method: Cash, Card, UPI or Bank
        amount: Amount paid, required unless the category is manpower
        booking_id: Booking the expense belongs to; blank for overheads
        notes: Free-form notes
        manpower_count: Headcount, manpower categories only
        rate_per_person: Rate per head, manpower categories only

    Returns:
        (expense, vendor_created)

    Raises:
        InvalidExpenseError: If a required field is missing or the
            amount is not positive
    """
    category = (category or '').strip()
    vendor = (vendor or '').strip()
    if not category or not vendor:
        raise InvalidExpenseError("Category and vendor are required")

    if payment_method not in PaymentMethod.values:
        raise InvalidExpenseError(f"Unknown payment method '{payment_method}'")

    category_obj = find_category_by_name(category)
    if category_obj is not None and category_obj.requires_manpower:
        if not manpower_count or manpower_count <= 0 or not rate_per_person or rate_per_person <= 0:
            raise InvalidExpenseError(
                f"{category_obj.name} expenses need a headcount and a rate per person"
            )
        amount = rate_per_person * manpower_count
    else:
        manpower_count = None
        rate_per_person = None

    if amount is None or amount <= 0:
        logger.warning("Rejected expense for %s: non-positive amount %s", vendor, amount)
        raise InvalidExpenseError("Expense amount must be greater than zero")

    with transaction.atomic():
        vendor_obj, vendor_created = ensure_vendor(name=vendor, category_name=category)

        expense = Expense.objects.create(
            booking_id=(booking_id or '').strip(),
            expense_date=expense_date,
            category=category_obj.name if category_obj else category,
            vendor=vendor_obj.name,
            amount=amount,
            payment_method=payment_method,
            type=ExpenseType.PAID,
            notes=notes,
            manpower_count=manpower_count,
            rate_per_person=rate_per_person,
        )
        recompute_booking_expenses()

    logger.info(
        "Expense %s recorded: %s to %s (%s)",
        expense.id, expense.amount, expense.vendor, expense.booking_id or 'general',
    )
    return expense, vendor_created


def reverted_total(expense: Expense) -> Decimal:
    """Amount already reverted against an expense."""
    return expense.reversals.aggregate(total=Sum('amount'))['total'] or Decimal('0.00')


def revert_expense(
    *,
    expense_id: UUID,
    amount: Decimal,
    notes: str = '',
    expense_date: Optional[date] = None,
) -> Expense:
    """
    Record a reversal of a paid expense.

    The reversal copies the booking id, category, vendor and payment
    method of the original and is dated today unless a date is given.

    Args:
        expense_id: The Paid expense being reverted
        amount: Amount returned, 0 < amount <= what is left unreverted
        notes: Reason for the reversal
        expense_date: Date of the reversal, defaults to today

    Returns:
        The Reverted expense

    Raises:
        ExpenseNotFoundError: If the expense does not exist
        ExpenseReversalError: If the expense is itself a reversal or the
            amount is out of range
    """
    original = get_expense(expense_id=expense_id)

    if original.type != ExpenseType.PAID:
        raise ExpenseReversalError("Only paid expenses can be reverted")

    remaining = original.amount - reverted_total(original)
    if amount is None or amount <= 0 or amount > remaining:
        logger.warning(
            "Rejected reversal of expense %s: amount %s outside (0, %s]",
            original.id, amount, remaining,
        )
        raise ExpenseReversalError(
            f"Revert amount must be greater than zero and at most {remaining}"
        )

    with transaction.atomic():
        reversal = Expense.objects.create(
            booking_id=original.booking_id,
            expense_date=expense_date or date.today(),
            category=original.category,
            vendor=original.vendor,
            amount=amount,
            payment_method=original.payment_method,
            type=ExpenseType.REVERTED,
            notes=notes,
            reverses=original,
        )
        recompute_booking_expenses()

    logger.info("Expense %s reverted by %s (%s)", original.id, amount, reversal.id)
    return reversal


def record_refund_expense(
    *,
    booking_id: str,
    client_name: str,
    amount: Decimal,
    refund_date: Optional[date] = None,
) -> Expense:
    """
    Record the refund paid out on a cancelled booking.

    Refunds are paid by bank and do not create a vendor.
    """
    with transaction.atomic():
        expense = Expense.objects.create(
            booking_id=booking_id,
            expense_date=refund_date or date.today(),
            category=REFUND_CATEGORY_NAME,
            vendor=f"Refund to {client_name}",
            amount=amount,
            payment_method=PaymentMethod.BANK,
            type=ExpenseType.PAID,
        )
        recompute_booking_expenses()

    logger.info("Refund of %s to %s recorded for %s", amount, client_name, booking_id)
    return expense
