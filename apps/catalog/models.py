from django.db import models
from django.core.validators import MinValueValidator, validate_slug
from decimal import Decimal
import uuid


class ServiceCategory(models.TextChoices):
    INFRASTRUCTURE = 'infrastructure', 'Infrastructure'
    DECORATION = 'decoration', 'Decoration'
    LABOUR = 'labour', 'Labour'
    HALWAI = 'halwai', 'Halwai'
    EXTRA = 'extra', 'Extra'
    ENTRY_DECOR = 'entry-decor', 'Entry Decor'


class ServiceType(models.TextChoices):
    CHECKBOX = 'checkbox', 'Checkbox'
    NUMBER = 'number', 'Number'
    DROPDOWN = 'dropdown', 'Dropdown'


class ServiceDefinition(models.Model):
    """A service the venue offers, and the shape of its value in a services map."""

    id = models.CharField(primary_key=True, max_length=64, validators=[validate_slug])
    category = models.CharField(max_length=20, choices=ServiceCategory.choices)
    name = models.CharField(max_length=100)
    type = models.CharField(max_length=10, choices=ServiceType.choices)

    # Number services
    min_value = models.IntegerField(null=True, blank=True)
    max_value = models.IntegerField(null=True, blank=True)

    # Dropdown services
    options = models.JSONField(default=list, blank=True)

    position = models.PositiveIntegerField(default=0)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'service_definitions'
        indexes = [
            models.Index(fields=['category', 'position'], name='service_def_cat_pos_idx'),
        ]
        ordering = ['category', 'position', 'name']

    def __str__(self):
        return f"{self.name} ({self.get_category_display()})"

    def default_value(self):
        """Value a freshly added service starts with in a services map."""
        if self.type == ServiceType.NUMBER:
            return self.min_value or 0
        if self.type == ServiceType.DROPDOWN:
            return self.options[0] if self.options else ''
        return False


class Package(models.Model):
    """Booking template: a price plus a prefilled services map."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=100, unique=True)
    price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.01'))]
    )
    services = models.JSONField(default=dict, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'packages'
        ordering = ['price', 'name']

    def __str__(self):
        return f"{self.name} - {self.price}"
