"""
Bulk loader for a venue data export.

The export is one JSON object holding the six collections with camelCase
keys: bookings (with embedded payments), expenses, packages,
serviceConfig, expenseCategories and vendors. Bookings, payments and
expenses are inserted as they are; stored values are not re-validated
against the current service configuration. Configuration records are
merged with whatever configuration is already installed.
"""

import logging
from datetime import date
from decimal import Decimal

from django.db import transaction, IntegrityError

from apps.bookings.models import Booking, Payment, BookingStatus, PaymentType, Shift
from apps.catalog.models import Package, ServiceDefinition
from apps.expenses.models import Expense, ExpenseCategory, ExpenseType, Vendor
from apps.expenses.services import fallback_category, recompute_booking_expenses

from .booking_management import tier_for_rate
from .exceptions import VenueDataError

logger = logging.getLogger(__name__)


def _money(value) -> Decimal:
    return Decimal(str(value or 0))


def _day(value) -> date:
    # Accepts "YYYY-MM-DD" and full ISO timestamps
    return date.fromisoformat(str(value)[:10])


def _load_service_config(config: dict) -> int:
    count = 0
    for category, services in (config or {}).items():
        for position, service in enumerate(services):
            ServiceDefinition.objects.update_or_create(
                id=service['id'],
                defaults={
                    'category': category,
                    'name': service['name'],
                    'type': service['type'],
                    'min_value': service.get('min'),
                    'max_value': service.get('max'),
                    'options': service.get('options', []),
                    'position': position,
                },
            )
            count += 1
    return count


def _load_packages(packages: list) -> None:
    for entry in packages:
        Package.objects.update_or_create(
            name=entry['name'],
            defaults={
                'price': _money(entry['price']),
                'services': entry.get('services') or {},
            },
        )


def _load_categories_and_vendors(categories: list, vendors: list) -> None:
    by_export_id = {}
    for entry in categories:
        category = (
            ExpenseCategory.objects.filter(id=entry['id']).first()
            or ExpenseCategory.objects.filter(name__iexact=entry['name']).first()
            or ExpenseCategory(id=entry['id'])
        )
        category.name = entry['name']
        category.requires_manpower = bool(entry.get('requiresManpower'))
        category.save()
        by_export_id[entry['id']] = category

    for entry in vendors:
        if Vendor.objects.filter(name__iexact=entry['name']).exists():
            continue
        category = (
            by_export_id.get(entry.get('categoryId'))
            or ExpenseCategory.objects.filter(id=entry.get('categoryId')).first()
        )
        Vendor.objects.create(name=entry['name'], category=category or fallback_category())


def _load_bookings(bookings: list) -> int:
    payment_count = 0
    for entry in bookings:
        rate = _money(entry['rate'])
        booking = Booking.objects.create(
            booking_id=entry['bookingId'],
            client_name=entry['clientName'],
            contact=entry.get('contact', ''),
            event_type=entry.get('eventType') or 'Unspecified',
            guests=entry.get('guests') or 0,
            shift=entry.get('shift') or Shift.NIGHT,
            event_date=_day(entry['eventDate']),
            season=entry['season'],
            status=entry.get('status') or BookingStatus.UPCOMING,
            tier=entry.get('tier') or tier_for_rate(rate),
            rate=rate,
            discount=_money(entry.get('discount')),
            refund_amount=_money(entry['refundAmount']) if entry.get('refundAmount') is not None else None,
            services=entry.get('services') or {},
        )
        for payment in entry.get('payments', []):
            Payment.objects.create(
                booking=booking,
                date=_day(payment['date']),
                amount=_money(payment['amount']),
                method=payment['method'],
                type=payment.get('type') or PaymentType.RECEIVED,
                notes=payment.get('notes') or '',
            )
            payment_count += 1
    return payment_count


def _load_expenses(expenses: list) -> None:
    for entry in expenses:
        Expense.objects.create(
            booking_id=entry.get('bookingId') or '',
            expense_date=_day(entry['expenseDate']),
            category=entry['category'],
            vendor=entry['vendor'],
            amount=_money(entry['amount']),
            payment_method=entry['paymentMethod'],
            type=entry.get('type') or ExpenseType.PAID,
            notes=entry.get('notes') or '',
            manpower_count=entry.get('manpowerCount'),
            rate_per_person=_money(entry['ratePerPerson']) if entry.get('ratePerPerson') is not None else None,
        )


@transaction.atomic
def load_venue_data(data: dict) -> dict:
    """
    Insert every collection of an export.

    The database must not already hold bookings or expenses. The
    configuration collections are merged into what is stored: services
    (by id), packages (by name) and expense categories (by id, then
    name) are overwritten with the export's values, and vendors whose
    name is already known are skipped. Loading over installed defaults
    therefore works. The expense roll-up runs once at the end, so cached
    booking totals in the export are ignored.

    Returns:
        Counts of records per collection in the export

    Raises:
        VenueDataError: If bookings or expenses exist or a record is malformed
    """
    if Booking.objects.exists() or Expense.objects.exists():
        raise VenueDataError("Bookings or expenses already exist; load into an empty database")

    try:
        services = _load_service_config(data.get('serviceConfig'))
        _load_packages(data.get('packages', []))
        _load_categories_and_vendors(
            data.get('expenseCategories', []),
            data.get('vendors', []),
        )
        payments = _load_bookings(data.get('bookings', []))
        _load_expenses(data.get('expenses', []))
    except (KeyError, TypeError, ValueError, ArithmeticError, IntegrityError) as e:
        raise VenueDataError(f"Malformed export: {e!r}")

    recompute_booking_expenses()

    counts = {
        'bookings': len(data.get('bookings', [])),
        'payments': payments,
        'expenses': len(data.get('expenses', [])),
        'packages': len(data.get('packages', [])),
        'services': services,
        'expense_categories': len(data.get('expenseCategories', [])),
        'vendors': len(data.get('vendors', [])),
    }
    logger.info("Venue data loaded: %s", counts)
    return counts
