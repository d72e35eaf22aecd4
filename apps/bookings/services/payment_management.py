"""
Payment service.

Payments are append-only. A reversal is a new Reverted payment linked to
the Received payment it reverses, never an edit of the original.
"""

import logging
from datetime import date
from decimal import Decimal
from typing import Optional
from uuid import UUID

from django.db import transaction
from django.db.models import Sum

from apps.bookings.models import (
    Payment,
    PaymentMethod,
    PaymentType,
    BookingStatus,
)

from .booking_management import get_booking
from .exceptions import (
    InvalidBookingStateError,
    InvalidPaymentError,
    PaymentNotFoundError,
    PaymentReversalError,
)
from .financials import net_paid

logger = logging.getLogger(__name__)


@transaction.atomic
def add_payment(
    *,
    booking_pk: UUID,
    amount: Decimal,
    method: str,
    payment_date: Optional[date] = None,
    notes: str = '',
) -> Payment:
    """
    Record money received against a booking.

    Args:
        booking_pk: Booking paid for
        amount: Amount received, greater than zero
        method: Cash, Card, UPI or Bank
        payment_date: Date received, defaults to today
        notes: Free-form notes

    Raises:
        InvalidBookingStateError: If the booking is cancelled
        InvalidPaymentError: If the amount or method is invalid
    """
    booking = get_booking(booking_pk=booking_pk)

    if booking.status == BookingStatus.CANCELLED:
        logger.warning("Rejected payment on cancelled booking %s", booking.booking_id)
        raise InvalidBookingStateError("Payments cannot be added to a cancelled booking")
    if amount is None or amount <= 0:
        raise InvalidPaymentError("Payment amount must be greater than zero")
    if method not in PaymentMethod.values:
        raise InvalidPaymentError(f"Unknown payment method '{method}'")

    payment = Payment.objects.create(
        booking=booking,
        date=payment_date or date.today(),
        amount=amount,
        method=method,
        type=PaymentType.RECEIVED,
        notes=notes,
    )
    logger.info("Payment of %s (%s) received for %s", amount, method, booking.booking_id)
    return payment


@transaction.atomic
def revert_payment(
    *,
    booking_pk: UUID,
    payment_id: UUID,
    amount: Decimal,
    notes: str,
    payment_date: Optional[date] = None,
) -> Payment:
    """
    Record a reversal of a received payment.

    The reversal uses the original payment's method. Its amount may not
    exceed what is left unreverted of the original, nor the booking's
    current net paid.

    Args:
        booking_pk: Booking the payment belongs to
        payment_id: The Received payment being reverted
        amount: Amount returned
        notes: Reason for the reversal (required)
        payment_date: Date of the reversal, defaults to today

    Returns:
        The Reverted payment

    Raises:
        PaymentNotFoundError: If the payment is not on this booking
        PaymentReversalError: If the reversal breaks a business rule
    """
    booking = get_booking(booking_pk=booking_pk)

    try:
        original = booking.payments.get(id=payment_id)
    except Payment.DoesNotExist:
        raise PaymentNotFoundError(f"Payment {payment_id} not found on booking {booking.booking_id}")

    if original.type != PaymentType.RECEIVED:
        raise PaymentReversalError("Only received payments can be reverted")
    if not (notes or '').strip():
        raise PaymentReversalError("A reason is required to revert a payment")

    already_reverted = original.reversals.aggregate(total=Sum('amount'))['total'] or Decimal('0.00')
    limit = min(original.amount - already_reverted, net_paid(booking.payments.all()))
    if amount is None or amount <= 0 or amount > limit:
        logger.warning(
            "Rejected reversal of payment %s on %s: amount %s outside (0, %s]",
            original.id, booking.booking_id, amount, limit,
        )
        raise PaymentReversalError(
            f"Revert amount must be greater than zero and at most {max(limit, Decimal('0.00'))}"
        )

    reversal = Payment.objects.create(
        booking=booking,
        date=payment_date or date.today(),
        amount=amount,
        method=original.method,
        type=PaymentType.REVERTED,
        notes=notes.strip(),
        reverses=original,
    )
    logger.info("Payment %s on %s reverted by %s", original.id, booking.booking_id, amount)
    return reversal
