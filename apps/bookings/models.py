from django.db import models
from django.core.validators import MinValueValidator
from decimal import Decimal
import uuid


class AppendOnlyError(Exception):
    """Raised when a financial record is edited or deleted in place."""
    pass


class AppendOnlyModel(models.Model):
    """
    Base for financial records that are only ever inserted.

    Corrections are new counter-entries; saving an existing row or
    deleting one raises AppendOnlyError.
    """

    class Meta:
        abstract = True

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise AppendOnlyError(
                f"{self.__class__.__name__} records cannot be modified; record a reversal instead"
            )
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise AppendOnlyError(
            f"{self.__class__.__name__} records cannot be deleted; record a reversal instead"
        )


class PaymentMethod(models.TextChoices):
    CASH = 'Cash', 'Cash'
    CARD = 'Card', 'Card'
    UPI = 'UPI', 'UPI'
    BANK = 'Bank', 'Bank'


class BookingStatus(models.TextChoices):
    UPCOMING = 'Upcoming', 'Upcoming'
    COMPLETED = 'Completed', 'Completed'
    CANCELLED = 'Cancelled', 'Cancelled'


class BookingTier(models.TextChoices):
    SILVER = 'Silver', 'Silver'
    GOLD = 'Gold', 'Gold'
    DIAMOND = 'Diamond', 'Diamond'


class Shift(models.TextChoices):
    DAY = 'Day', 'Day'
    NIGHT = 'Night', 'Night'


class PaymentType(models.TextChoices):
    RECEIVED = 'Received', 'Received'
    REVERTED = 'Reverted', 'Reverted'


class Booking(models.Model):
    """An event booked at the venue."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    # Human-facing id, e.g. HG/2025/26/004
    booking_id = models.CharField(max_length=32, unique=True)

    # Client and event
    client_name = models.CharField(max_length=200)
    contact = models.CharField(max_length=100)
    event_type = models.CharField(max_length=100, default='Unspecified')
    guests = models.PositiveIntegerField(default=0)
    shift = models.CharField(max_length=5, choices=Shift.choices, default=Shift.NIGHT)
    event_date = models.DateField()
    season = models.CharField(max_length=7)

    status = models.CharField(
        max_length=10,
        choices=BookingStatus.choices,
        default=BookingStatus.UPCOMING
    )
    tier = models.CharField(max_length=10, choices=BookingTier.choices)

    # Money
    rate = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.01'))]
    )
    discount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0.00'))
    refund_amount = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)

    # Cached roll-up of the expense ledger, see recompute_booking_expenses()
    expenses = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0.00'))

    # service id -> bool | int | option string
    services = models.JSONField(default=dict, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'bookings'
        indexes = [
            models.Index(fields=['season', 'status'], name='booking_season_status_idx'),
            models.Index(fields=['event_date'], name='booking_event_date_idx'),
        ]
        ordering = ['-event_date', '-created_at']

    def __str__(self):
        return f"{self.booking_id} - {self.client_name} ({self.status})"


class Payment(AppendOnlyModel):
    """Money received against a booking, or a reversal of such a receipt."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    booking = models.ForeignKey(
        Booking,
        on_delete=models.PROTECT,
        related_name='payments'
    )

    date = models.DateField()
    amount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.01'))]
    )
    method = models.CharField(max_length=4, choices=PaymentMethod.choices)
    type = models.CharField(
        max_length=8,
        choices=PaymentType.choices,
        default=PaymentType.RECEIVED
    )
    notes = models.TextField(blank=True)

    # Set on Reverted payments
    reverses = models.ForeignKey(
        'self',
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name='reversals'
    )

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'payments'
        indexes = [
            models.Index(fields=['booking', 'date'], name='payment_booking_date_idx'),
            models.Index(fields=['date'], name='payment_date_idx'),
        ]
        ordering = ['date', 'created_at']

    def __str__(self):
        return f"{self.type} {self.amount} ({self.method}) for {self.booking_id}"
