"""
Booking financial summary.

Pure functions over a booking and its payments. Nothing is clamped:
a balance or profit can be negative, and a booking whose payments were
over-reverted can show a negative total paid.
"""

from decimal import Decimal
from typing import Iterable, Optional

from apps.bookings.models import BookingStatus, PaymentType


def net_paid(payments: Iterable) -> Decimal:
    """Sum of Received amounts minus sum of Reverted amounts."""
    total = Decimal('0.00')
    for payment in payments:
        if payment.type == PaymentType.REVERTED:
            total -= payment.amount
        else:
            total += payment.amount
    return total


def rate_after_discount(booking) -> Decimal:
    return booking.rate - (booking.discount or Decimal('0.00'))


def booking_financials(booking, payments: Optional[Iterable] = None) -> dict:
    """
    Compute the money position of a booking.

    Args:
        booking: Booking (or any object with rate, discount, status,
            expenses and refund_amount)
        payments: The booking's payments; read from booking.payments
            when omitted

    Returns:
        dict with total_paid, rate_after_discount, balance_due and profit.
        For cancelled bookings profit is what was kept:
        total_paid - expenses - refund. Otherwise it is the contracted
        rate after discount minus expenses.
    """
    if payments is None:
        payments = booking.payments.all()

    paid = net_paid(payments)
    net_rate = rate_after_discount(booking)

    if booking.status == BookingStatus.CANCELLED:
        profit = paid - booking.expenses - (booking.refund_amount or Decimal('0.00'))
    else:
        profit = net_rate - booking.expenses

    return {
        'total_paid': paid,
        'rate_after_discount': net_rate,
        'balance_due': net_rate - paid,
        'profit': profit,
    }
