"""
Booking report rows and proforma content.
"""

from typing import Iterable, Optional

from django.conf import settings

from apps.catalog.models import ServiceCategory, ServiceDefinition, ServiceType

from .financials import booking_financials, net_paid

BOOKINGS_REPORT_HEADERS = [
    'Booking ID',
    'Client Name',
    'Status',
    'Tier',
    'Event Date',
    'Rate',
    'Paid',
    'Expenses',
    'Refund',
]


def bookings_report_rows(bookings: Iterable) -> list:
    """One row per booking, aligned to BOOKINGS_REPORT_HEADERS."""
    return [
        [
            booking.booking_id,
            booking.client_name,
            booking.status,
            booking.tier,
            booking.event_date.isoformat(),
            booking.rate,
            net_paid(booking.payments.all()),
            booking.expenses,
            booking.refund_amount or 0,
        ]
        for booking in bookings
    ]


def _included_value(definition: ServiceDefinition, value) -> Optional[str]:
    """Display suffix for an included service, or None when not included."""
    if definition.type == ServiceType.CHECKBOX:
        return '' if value is True else None
    if definition.type == ServiceType.NUMBER:
        if isinstance(value, int) and not isinstance(value, bool) and value > 0:
            return f"(Qty: {value})"
        return None
    if definition.type == ServiceType.DROPDOWN:
        first = definition.options[0] if definition.options else None
        if isinstance(value, str) and value not in ('None', first):
            return f"({value})"
        return None
    return None


def proforma_context(booking, definitions: Optional[Iterable[ServiceDefinition]] = None) -> dict:
    """
    Template context for a booking's printable proforma.

    Services are listed under their configuration category; unselected
    services, empty categories and ids no longer in the configuration
    are left out.
    """
    if definitions is None:
        definitions = ServiceDefinition.objects.all()

    labels = dict(ServiceCategory.choices)
    groups = {}
    for definition in definitions:
        suffix = _included_value(definition, booking.services.get(definition.id))
        if suffix is None:
            continue
        groups.setdefault(definition.category, []).append(
            {'name': definition.name, 'detail': suffix}
        )

    service_groups = [
        {'label': labels[category], 'services': groups[category]}
        for category in ServiceCategory.values
        if category in groups
    ]

    return {
        'venue_name': settings.VENUE_NAME,
        'booking': booking,
        'financials': booking_financials(booking),
        'service_groups': service_groups,
        'title': f"{booking.event_date.isoformat()}-{booking.client_name.replace(' ', '_')}",
    }
