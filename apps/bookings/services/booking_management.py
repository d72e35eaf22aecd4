"""
Booking management service.

Handles the booking lifecycle:

    Upcoming --complete_booking--> Completed
    Upcoming --cancel_booking----> Cancelled

Bookings are never deleted. Only Upcoming bookings can be edited, and an
edit never touches payments, tier, season or status.
"""

import logging
import re
from datetime import date
from decimal import Decimal
from typing import Iterable, Optional
from uuid import UUID

from django.conf import settings
from django.db import transaction, IntegrityError
from django.db.models import Q, QuerySet

from apps.bookings.models import (
    Booking,
    BookingStatus,
    BookingTier,
    Payment,
    PaymentMethod,
    PaymentType,
    Shift,
)
from apps.catalog.services import get_package, apply_package, validate_service_values
from apps.expenses.services import record_refund_expense, recompute_booking_expenses

from .exceptions import (
    BookingNotFoundError,
    InvalidBookingError,
    InvalidBookingStateError,
)
from .financials import net_paid

logger = logging.getLogger(__name__)

SEASON_PATTERN = re.compile(r'^\d{4}-\d{2}$')

# Highest threshold first
TIER_THRESHOLDS = [
    (Decimal('180000'), BookingTier.DIAMOND),
    (Decimal('145000'), BookingTier.GOLD),
]

EDITABLE_FIELDS = (
    'client_name',
    'contact',
    'event_type',
    'guests',
    'shift',
    'event_date',
    'rate',
    'discount',
    'services',
)


def tier_for_rate(rate: Decimal) -> str:
    """Price tier for a contracted rate."""
    for threshold, tier in TIER_THRESHOLDS:
        if rate >= threshold:
            return tier
    return BookingTier.SILVER


def _sequence_number(booking_id: str) -> Optional[int]:
    """Leading digits of the last '/' segment, or None."""
    match = re.match(r'\s*(\d+)', booking_id.split('/')[-1])
    return int(match.group(1)) if match else None


def generate_booking_id(season: str, existing_ids: Iterable[str], prefix: str = 'HG') -> str:
    """
    Next booking id for a season.

    The sequence number is one more than the highest trailing number among
    the season's existing ids (not their count), zero-padded to three
    digits. Ids whose last segment is not numeric are ignored.

    >>> generate_booking_id('2025-26', ['HG/2025/26/001', 'HG/2025/26/003'])
    'HG/2025/26/004'
    """
    highest = 0
    for booking_id in existing_ids:
        number = _sequence_number(booking_id)
        if number is not None and number > highest:
            highest = number

    return f"{prefix}/{season.replace('-', '/')}/{highest + 1:03d}"


def next_booking_id(season: Optional[str] = None) -> str:
    """Next booking id for a season, based on the stored bookings."""
    season = season or settings.CURRENT_SEASON
    existing = Booking.objects.filter(season=season).values_list('booking_id', flat=True)
    return generate_booking_id(season, existing, prefix=settings.BOOKING_ID_PREFIX)


def get_booking(*, booking_pk: UUID) -> Booking:
    try:
        return Booking.objects.prefetch_related('payments').get(id=booking_pk)
    except Booking.DoesNotExist:
        raise BookingNotFoundError(f"Booking {booking_pk} not found")


def search_bookings(
    *,
    search: Optional[str] = None,
    status: Optional[str] = None,
    tier: Optional[str] = None,
    season: Optional[str] = None,
) -> QuerySet:
    """
    Filter bookings.

    Filters:
    - search: Substring of client name or booking id
    - status, tier, season: Exact match
    """
    queryset = Booking.objects.prefetch_related('payments')

    if search:
        queryset = queryset.filter(
            Q(client_name__icontains=search) |
            Q(booking_id__icontains=search)
        )
    if status:
        queryset = queryset.filter(status=status)
    if tier:
        queryset = queryset.filter(tier=tier)
    if season:
        queryset = queryset.filter(season=season)

    return queryset


def _validate_booking_fields(*, client_name, contact, rate, discount, guests, services):
    if not (client_name or '').strip() or not (contact or '').strip():
        raise InvalidBookingError("Client name and contact are required")
    if rate is None or rate <= 0:
        raise InvalidBookingError("Rate must be greater than zero")
    if discount < 0 or discount > rate:
        raise InvalidBookingError("Discount must be between zero and the rate")
    if guests is not None and guests < 0:
        raise InvalidBookingError("Guests cannot be negative")
    validate_service_values(services)


def create_booking(
    *,
    client_name: str,
    contact: str,
    event_date: date,
    rate: Optional[Decimal] = None,
    discount: Optional[Decimal] = None,
    event_type: str = '',
    guests: int = 0,
    shift: str = Shift.NIGHT,
    services: Optional[dict] = None,
    package_id: Optional[UUID] = None,
    season: Optional[str] = None,
    advance: Decimal = Decimal('0.00'),
    advance_method: str = PaymentMethod.BANK,
    max_retries: int = 3,
) -> Booking:
    """
    Create an Upcoming booking.

    This is a multi-step operation wrapped in a transaction:
    1. Generate the next booking id for the season
    2. Create the booking with its tier derived from the rate
    3. Record the advance, if any, as a Received payment

    Args:
        client_name: Client's name
        contact: Phone number or other contact
        event_date: Date of the event
        rate: Contracted rate; defaults to the package price
        discount: Discount off the rate, 0 <= discount <= rate
        event_type: Wedding, Reception... ('Unspecified' when blank)
        guests: Expected guest count
        shift: Day or Night
        services: Services map; defaults to the package's services
        package_id: Package to prefill rate and services from
        season: Season key "YYYY-YY"; defaults to the current season
        advance: Amount paid at booking, recorded on the event date
        advance_method: Payment method of the advance
        max_retries: Attempts when a concurrent booking takes the same id

    Returns:
        Created Booking instance

    Raises:
        InvalidBookingError: If a business rule is broken
        InvalidServiceSelectionError: If the services map is invalid
        PackageNotFoundError: If the package does not exist
    """
    if package_id is not None:
        prefill = apply_package(get_package(package_id=package_id))
        if rate is None:
            rate = prefill['rate']
        if services is None:
            services = prefill['services']
        if discount is None:
            discount = prefill['discount']

    discount = discount if discount is not None else Decimal('0.00')
    services = services or {}
    season = season or settings.CURRENT_SEASON
    advance = advance or Decimal('0.00')

    if not SEASON_PATTERN.match(season):
        raise InvalidBookingError(f"Season '{season}' is not of the form YYYY-YY")
    _validate_booking_fields(
        client_name=client_name,
        contact=contact,
        rate=rate,
        discount=discount,
        guests=guests,
        services=services,
    )
    if advance < 0:
        raise InvalidBookingError("Advance cannot be negative")

    for attempt in range(max_retries):
        try:
            with transaction.atomic():
                booking = Booking.objects.create(
                    booking_id=next_booking_id(season),
                    client_name=client_name.strip(),
                    contact=contact.strip(),
                    event_type=event_type.strip() or 'Unspecified',
                    guests=guests or 0,
                    shift=shift,
                    event_date=event_date,
                    season=season,
                    status=BookingStatus.UPCOMING,
                    tier=tier_for_rate(rate),
                    rate=rate,
                    discount=discount,
                    services=services,
                )

                if advance > 0:
                    Payment.objects.create(
                        booking=booking,
                        date=event_date,
                        amount=advance,
                        method=advance_method,
                        type=PaymentType.RECEIVED,
                    )
            break
        except IntegrityError:
            # Booking id taken by a concurrent insert
            if attempt == max_retries - 1:
                raise InvalidBookingError(
                    f"Failed to allocate a booking id after {max_retries} attempts"
                )

    # Expenses may already reference this id
    recompute_booking_expenses()
    booking.refresh_from_db()

    logger.info(
        "Booking %s created for %s (%s, %s)",
        booking.booking_id, booking.client_name, booking.tier, booking.rate,
    )
    return booking


@transaction.atomic
def update_booking(*, booking_pk: UUID, **fields) -> Booking:
    """
    Edit an Upcoming booking.

    Only the fields in EDITABLE_FIELDS change. The tier stays as derived
    at creation even when the rate is edited.

    Raises:
        BookingNotFoundError: If the booking does not exist
        InvalidBookingStateError: If the booking is not Upcoming
        InvalidBookingError: If the edited booking breaks a business rule
    """
    booking = get_booking(booking_pk=booking_pk)

    if booking.status != BookingStatus.UPCOMING:
        logger.warning("Rejected edit of %s booking %s", booking.status, booking.booking_id)
        raise InvalidBookingStateError(f"Only upcoming bookings can be edited (status: {booking.status})")

    unknown = set(fields) - set(EDITABLE_FIELDS)
    if unknown:
        raise InvalidBookingError(f"Fields cannot be edited: {', '.join(sorted(unknown))}")

    for field, value in fields.items():
        setattr(booking, field, value)

    # Same normalisation as create_booking()
    booking.client_name = (booking.client_name or '').strip()
    booking.contact = (booking.contact or '').strip()
    booking.event_type = (booking.event_type or '').strip() or 'Unspecified'
    booking.guests = booking.guests or 0
    if booking.discount is None:
        booking.discount = Decimal('0.00')

    _validate_booking_fields(
        client_name=booking.client_name,
        contact=booking.contact,
        rate=booking.rate,
        discount=booking.discount,
        guests=booking.guests,
        services=booking.services,
    )

    booking.save()
    logger.info("Booking %s updated", booking.booking_id)
    return booking


@transaction.atomic
def complete_booking(*, booking_pk: UUID) -> Booking:
    """Mark an Upcoming booking as Completed."""
    booking = get_booking(booking_pk=booking_pk)

    if booking.status != BookingStatus.UPCOMING:
        raise InvalidBookingStateError(
            f"Only upcoming bookings can be completed (status: {booking.status})"
        )

    booking.status = BookingStatus.COMPLETED
    booking.save(update_fields=['status', 'updated_at'])
    logger.info("Booking %s completed", booking.booking_id)
    return booking


@transaction.atomic
def cancel_booking(*, booking_pk: UUID, refund_amount: Decimal = Decimal('0.00')) -> Booking:
    """
    Cancel an Upcoming booking.

    A refund above zero is also recorded as a Refund expense against the
    booking, paid by bank today, and the expense roll-up is rerun.

    Args:
        booking_pk: Booking to cancel
        refund_amount: Amount returned to the client, 0 <= refund <= net paid

    Raises:
        InvalidBookingStateError: If the booking is not Upcoming
        InvalidBookingError: If the refund is out of range
    """
    booking = get_booking(booking_pk=booking_pk)

    if booking.status != BookingStatus.UPCOMING:
        raise InvalidBookingStateError(
            f"Only upcoming bookings can be cancelled (status: {booking.status})"
        )

    paid = net_paid(booking.payments.all())
    if refund_amount < 0 or refund_amount > max(paid, Decimal('0.00')):
        logger.warning(
            "Rejected cancellation of %s: refund %s outside [0, %s]",
            booking.booking_id, refund_amount, paid,
        )
        raise InvalidBookingError(f"Refund must be between zero and the amount paid ({paid})")

    booking.status = BookingStatus.CANCELLED
    booking.refund_amount = refund_amount
    booking.save(update_fields=['status', 'refund_amount', 'updated_at'])

    if refund_amount > 0:
        record_refund_expense(
            booking_id=booking.booking_id,
            client_name=booking.client_name,
            amount=refund_amount,
        )
        booking.refresh_from_db()

    logger.info("Booking %s cancelled with refund %s", booking.booking_id, refund_amount)
    return booking
