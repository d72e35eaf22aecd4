"""
Domain-specific exceptions for bookings app.

These exceptions represent business rule violations and should be
caught in views and converted to appropriate HTTP responses.
"""


class BookingsServiceError(Exception):
    """Base exception for all bookings service errors."""
    pass


class BookingNotFoundError(BookingsServiceError):
    """Raised when a booking does not exist."""
    pass


class InvalidBookingError(BookingsServiceError):
    """Raised when booking data breaks a business rule."""
    pass


class InvalidBookingStateError(BookingsServiceError):
    """Raised when an operation is not allowed in the booking's current status."""
    pass


class PaymentNotFoundError(BookingsServiceError):
    """Raised when a payment does not exist on the booking."""
    pass


class InvalidPaymentError(BookingsServiceError):
    """Raised when payment data breaks a business rule."""
    pass


class PaymentReversalError(BookingsServiceError):
    """Raised when a payment cannot be reverted as requested."""
    pass


class VenueDataError(BookingsServiceError):
    """Raised when a venue data export cannot be loaded."""
    pass
