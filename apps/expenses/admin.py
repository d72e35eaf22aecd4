from django.contrib import admin
from apps.expenses.models import Expense, ExpenseCategory, Vendor


class VendorInline(admin.TabularInline):
    """Inline admin for a category's vendors."""
    model = Vendor
    extra = 0
    fields = ['name']


@admin.register(ExpenseCategory)
class ExpenseCategoryAdmin(admin.ModelAdmin):
    list_display = ['name', 'id', 'requires_manpower']
    list_filter = ['requires_manpower']
    search_fields = ['name', 'id']
    inlines = [VendorInline]


@admin.register(Vendor)
class VendorAdmin(admin.ModelAdmin):
    list_display = ['name', 'category', 'created_at']
    list_filter = ['category']
    search_fields = ['name']


@admin.register(Expense)
class ExpenseAdmin(admin.ModelAdmin):
    """Read-only admin: expenses are append-only."""

    list_display = [
        'expense_date',
        'category',
        'vendor',
        'amount',
        'payment_method',
        'type',
        'booking_id',
    ]
    list_filter = ['type', 'payment_method', 'category', 'expense_date']
    search_fields = ['vendor', 'category', 'booking_id', 'notes']
    date_hierarchy = 'expense_date'

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
