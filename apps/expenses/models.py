from django.db import models
from django.core.validators import MinValueValidator, validate_slug
from decimal import Decimal
import uuid

from apps.bookings.models import AppendOnlyModel, PaymentMethod


class ExpenseType(models.TextChoices):
    PAID = 'Paid', 'Paid'
    REVERTED = 'Reverted', 'Reverted'


class ExpenseCategory(models.Model):
    """Expense category, e.g. Catering or Staff."""

    id = models.CharField(primary_key=True, max_length=64, validators=[validate_slug])
    name = models.CharField(max_length=100, unique=True)

    # Manpower categories price an expense as headcount x rate per person
    requires_manpower = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'expense_categories'
        verbose_name_plural = 'expense categories'
        ordering = ['name']

    def __str__(self):
        return self.name


class Vendor(models.Model):
    """A supplier the venue pays."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=200)
    category = models.ForeignKey(
        ExpenseCategory,
        on_delete=models.CASCADE,
        related_name='vendors'
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'vendors'
        ordering = ['name']

    def __str__(self):
        return f"{self.name} ({self.category.name})"


class Expense(AppendOnlyModel):
    """Money paid out, or a reversal of such a payment."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    # Human-facing booking id; blank for general expenses.
    # Not a foreign key: unknown ids simply never roll up.
    booking_id = models.CharField(max_length=32, blank=True)

    expense_date = models.DateField()

    # Names, not ids, as recorded at entry time
    category = models.CharField(max_length=100)
    vendor = models.CharField(max_length=200)

    amount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.01'))]
    )
    payment_method = models.CharField(max_length=4, choices=PaymentMethod.choices)
    type = models.CharField(
        max_length=8,
        choices=ExpenseType.choices,
        default=ExpenseType.PAID
    )
    notes = models.TextField(blank=True)

    manpower_count = models.PositiveIntegerField(null=True, blank=True)
    rate_per_person = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)

    # Set on Reverted expenses
    reverses = models.ForeignKey(
        'self',
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name='reversals'
    )

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'expenses'
        indexes = [
            models.Index(fields=['booking_id'], name='expense_booking_idx'),
            models.Index(fields=['expense_date'], name='expense_date_idx'),
            models.Index(fields=['category', 'vendor'], name='expense_cat_vendor_idx'),
        ]
        ordering = ['expense_date', 'created_at']

    def __str__(self):
        return f"{self.type} {self.amount} - {self.category}: {self.vendor}"
