"""
Bookings app services layer.

Services contain business logic and orchestrate operations across models.
State-changing operations run in transactions.
"""

from .exceptions import (
    BookingsServiceError,
    BookingNotFoundError,
    InvalidBookingError,
    InvalidBookingStateError,
    PaymentNotFoundError,
    InvalidPaymentError,
    PaymentReversalError,
    VenueDataError,
)

from .financials import (
    net_paid,
    rate_after_discount,
    booking_financials,
)

from .booking_management import (
    tier_for_rate,
    generate_booking_id,
    next_booking_id,
    get_booking,
    search_bookings,
    create_booking,
    update_booking,
    complete_booking,
    cancel_booking,
)

from .payment_management import (
    add_payment,
    revert_payment,
)

from .data_loader import load_venue_data

from .event_calendar import (
    CALENDAR_EVENTS_HEADERS,
    calendar_bookings,
    bookings_by_date,
    upcoming_events,
    calendar_events_rows,
    month_grid,
    month_calendar_context,
    annual_calendar_context,
)

from .reports import (
    BOOKINGS_REPORT_HEADERS,
    bookings_report_rows,
    proforma_context,
)


__all__ = [
    # Exceptions
    'BookingsServiceError',
    'BookingNotFoundError',
    'InvalidBookingError',
    'InvalidBookingStateError',
    'PaymentNotFoundError',
    'InvalidPaymentError',
    'PaymentReversalError',
    'VenueDataError',

    # Financials
    'net_paid',
    'rate_after_discount',
    'booking_financials',

    # Booking lifecycle
    'tier_for_rate',
    'generate_booking_id',
    'next_booking_id',
    'get_booking',
    'search_bookings',
    'create_booking',
    'update_booking',
    'complete_booking',
    'cancel_booking',

    # Payments
    'add_payment',
    'revert_payment',

    # Data loading
    'load_venue_data',

    # Reports
    'BOOKINGS_REPORT_HEADERS',
    'bookings_report_rows',
    'proforma_context',

    # Event calendar
    'CALENDAR_EVENTS_HEADERS',
    'calendar_bookings',
    'bookings_by_date',
    'upcoming_events',
    'calendar_events_rows',
    'month_grid',
    'month_calendar_context',
    'annual_calendar_context',
]
