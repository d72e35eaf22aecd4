from django.contrib import admin
from apps.bookings.models import Booking, Payment


class PaymentInline(admin.TabularInline):
    """Read-only inline: payments are append-only."""
    model = Payment
    fk_name = 'booking'
    extra = 0
    fields = ['date', 'amount', 'method', 'type', 'notes']
    readonly_fields = fields
    can_delete = False

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    """Admin interface for bookings."""

    list_display = [
        'booking_id',
        'client_name',
        'event_date',
        'season',
        'status',
        'tier',
        'rate',
        'expenses',
    ]
    list_filter = ['status', 'tier', 'season', 'shift']
    search_fields = ['booking_id', 'client_name', 'contact']
    readonly_fields = ['booking_id', 'tier', 'season', 'expenses', 'created_at', 'updated_at']
    date_hierarchy = 'event_date'
    inlines = [PaymentInline]

    def has_delete_permission(self, request, obj=None):
        return False
