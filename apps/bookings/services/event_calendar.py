"""
Event calendar.

A season's bookings laid out by event date, the next upcoming events, and
the month and year grids for the printable calendars. Cancelled bookings
never appear on the calendar. On a day with two events the Day shift is
listed before the Night shift.
"""

import calendar
from datetime import date
from typing import Iterable, Optional

from django.conf import settings
from django.db.models import QuerySet
from django.utils import timezone

from apps.bookings.models import Booking, BookingStatus, Shift

CALENDAR_EVENTS_HEADERS = [
    'Event Date',
    'Client Name',
    'Event Type',
    'Shift',
    'Status',
    'Booking ID',
]

UPCOMING_EVENTS_LIMIT = 8

# Weeks start on Sunday
WEEKDAY_NAMES = ['Sun', 'Mon', 'Tue', 'Wed', 'Thu', 'Fri', 'Sat']


def calendar_bookings(*, season: Optional[str] = None) -> QuerySet:
    """Non-cancelled bookings of a season, earliest event first."""
    season = season or settings.CURRENT_SEASON
    return (
        Booking.objects.filter(season=season)
        .exclude(status=BookingStatus.CANCELLED)
        .order_by('event_date', 'created_at')
    )


def bookings_by_date(bookings: Iterable) -> dict:
    """Non-cancelled bookings keyed by event date, in date order."""
    days = {}
    for booking in bookings:
        if booking.status == BookingStatus.CANCELLED:
            continue
        days.setdefault(booking.event_date, []).append(booking)

    for day_bookings in days.values():
        day_bookings.sort(key=lambda b: b.shift != Shift.DAY)

    return dict(sorted(days.items()))


def upcoming_events(*, today: Optional[date] = None, limit: int = UPCOMING_EVENTS_LIMIT) -> list:
    """The next Upcoming bookings from today onwards, across all seasons."""
    today = today or timezone.localdate()
    return list(
        Booking.objects.filter(status=BookingStatus.UPCOMING, event_date__gte=today)
        .order_by('event_date', 'created_at')[:limit]
    )


def calendar_events_rows(bookings: Iterable) -> list:
    """One row per non-cancelled booking, aligned to CALENDAR_EVENTS_HEADERS."""
    return [
        [
            booking.event_date.isoformat(),
            booking.client_name,
            booking.event_type,
            booking.shift,
            booking.status,
            booking.booking_id,
        ]
        for day_bookings in bookings_by_date(bookings).values()
        for booking in day_bookings
    ]


def _occupancy(count: int) -> str:
    if count >= 2:
        return 'full'
    if count == 1:
        return 'partial'
    return ''


def month_grid(year: int, month: int, days: dict) -> dict:
    """
    Weeks of one month for a printable calendar.

    Each week holds seven cells; cells outside the month are None.
    """
    weeks = []
    for week in calendar.Calendar(firstweekday=calendar.SUNDAY).monthdatescalendar(year, month):
        cells = []
        for day in week:
            if day.month != month:
                cells.append(None)
                continue
            day_bookings = days.get(day, [])
            cells.append({
                'day': day.day,
                'bookings': day_bookings,
                'occupancy': _occupancy(len(day_bookings)),
            })
        weeks.append(cells)

    return {'name': f"{calendar.month_name[month]} {year}", 'weeks': weeks}


def month_calendar_context(bookings: Iterable, *, year: int, month: int) -> dict:
    """Template context for the printable calendar of one month."""
    return {
        'heading': f"{settings.VENUE_NAME} - Monthly Calendar",
        'weekdays': WEEKDAY_NAMES,
        'months': [month_grid(year, month, bookings_by_date(bookings))],
        'annual': False,
        'title': f"Calendar_{calendar.month_name[month]}_{year}",
    }


def annual_calendar_context(bookings: Iterable, *, year: int) -> dict:
    """Template context for the printable calendar of January to December."""
    days = bookings_by_date(bookings)
    return {
        'heading': f"{settings.VENUE_NAME} - Annual Calendar {year}",
        'weekdays': WEEKDAY_NAMES,
        'months': [month_grid(year, month, days) for month in range(1, 13)],
        'annual': True,
        'title': f"Annual_Calendar_{year}",
    }
