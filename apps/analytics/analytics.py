"""
Analytics Module
=================

Season dashboard figures and venue-wide analytics, derived from bookings
and expenses.

Classes:
    VenueAnalytics: Static methods for the dashboard and analytics views.

Key Features:
    - Season revenue, collections, pending balance and net profit
    - Recent and soonest upcoming events of a season
    - Venue-wide profit margin and tier histogram
    - Season picker values

Example:
    Getting the current season's dashboard::

        from apps.analytics.analytics import VenueAnalytics

        bookings = Booking.objects.prefetch_related('payments')
        summary = VenueAnalytics.season_summary('2025-26', bookings, Expense.objects.all())
        print(f"Pending: {summary['pending_balance']}")

Note:
    Every method is a pure derivation over the objects it is given and
    never queries the database itself. Bookings are expected to have
    their payments prefetched.
"""

from decimal import Decimal, ROUND_HALF_UP

from django.conf import settings

from apps.bookings.models import BookingStatus, BookingTier
from apps.bookings.services import net_paid, rate_after_discount
from apps.expenses.models import ExpenseType
from .exceptions import InvalidSeasonError

ZERO = Decimal('0.00')


def _signed_total(expenses):
    """Paid amounts minus Reverted amounts."""
    total = ZERO
    for expense in expenses:
        if expense.type == ExpenseType.REVERTED:
            total -= expense.amount
        else:
            total += expense.amount
    return total


def _season_start_year(season):
    try:
        return int(season.split('-')[0])
    except (AttributeError, ValueError):
        raise InvalidSeasonError(f"Season '{season}' is not of the form YYYY-YY")


class VenueAnalytics:
    """
    Derived figures for the dashboard and the analytics screen.

    Methods:
        season_expenses: Expenses counted against one season.
        season_summary: Dashboard figures for one season.
        global_summary: Venue-wide revenue, profit and tier histogram.
        available_seasons: Seasons offered in season pickers.

    Note:
        All methods return plain dictionaries or lists, suitable for the
        response serializers.
    """

    @staticmethod
    def season_expenses(season, bookings, expenses):
        """
        Expenses counted against a season.

        An expense tied to a booking counts when that booking belongs to
        the season. A general expense counts when its calendar year is
        the season's start year or the year after. This is looser than
        the April-March window the ledgers use, and the two are kept
        apart so reported dashboard totals stay as they were.

        Args:
            season: Season key, "YYYY-YY"
            bookings: All bookings
            expenses: All expenses

        Returns:
            list of matching expenses

        Raises:
            InvalidSeasonError: If season has no leading year
        """
        start_year = _season_start_year(season)
        season_ids = {b.booking_id for b in bookings if b.season == season}

        matched = []
        for expense in expenses:
            if expense.booking_id:
                if expense.booking_id in season_ids:
                    matched.append(expense)
            elif expense.expense_date.year in (start_year, start_year + 1):
                matched.append(expense)
        return matched

    @staticmethod
    def season_summary(season, bookings, expenses):
        """
        Dashboard figures for one season.

        Cancelled bookings count towards total_bookings but not towards
        revenue or collections.

        Args:
            season: Season key, "YYYY-YY"
            bookings: All bookings, payments prefetched
            expenses: All expenses

        Returns:
            dict: {
                'season': str,
                'total_bookings': int,
                'upcoming_count': int,
                'revenue': Decimal,
                'total_paid': Decimal,
                'pending_balance': Decimal,
                'season_expenses': Decimal,
                'net_profit': Decimal,
                'recent_bookings': [Booking, ...],   # 3 latest by event date
                'upcoming_soon': [Booking, ...],     # 2 soonest upcoming
            }
        """
        bookings = list(bookings)
        season_bookings = [b for b in bookings if b.season == season]
        active = [b for b in season_bookings if b.status != BookingStatus.CANCELLED]
        upcoming = [b for b in season_bookings if b.status == BookingStatus.UPCOMING]

        revenue = sum((rate_after_discount(b) for b in active), ZERO)
        total_paid = sum((net_paid(b.payments.all()) for b in active), ZERO)
        season_expense_total = _signed_total(
            VenueAnalytics.season_expenses(season, bookings, expenses)
        )

        return {
            'season': season,
            'total_bookings': len(season_bookings),
            'upcoming_count': len(upcoming),
            'revenue': revenue,
            'total_paid': total_paid,
            'pending_balance': revenue - total_paid,
            'season_expenses': season_expense_total,
            'net_profit': revenue - season_expense_total,
            'recent_bookings': sorted(season_bookings, key=lambda b: b.event_date, reverse=True)[:3],
            'upcoming_soon': sorted(upcoming, key=lambda b: b.event_date)[:2],
        }

    @staticmethod
    def global_summary(bookings, expenses):
        """
        Venue-wide analytics across every season.

        Returns:
            dict: {
                'total_bookings': int,
                'revenue': Decimal,
                'booking_expenses': Decimal,
                'general_expenses': Decimal,
                'profit': Decimal,
                'average_booking_value': Decimal,
                'profit_margin': Decimal,          # percent, 0 when revenue is 0
                'bookings_by_tier': {tier: count},
            }
        """
        bookings = list(bookings)
        expenses = list(expenses)
        active = [b for b in bookings if b.status != BookingStatus.CANCELLED]

        revenue = sum((rate_after_discount(b) for b in active), ZERO)
        booking_expenses = _signed_total(e for e in expenses if e.booking_id)
        general_expenses = _signed_total(e for e in expenses if not e.booking_id)
        profit = revenue - booking_expenses - general_expenses

        cents = Decimal('0.01')
        if active:
            average = (revenue / len(active)).quantize(cents, rounding=ROUND_HALF_UP)
        else:
            average = ZERO
        if revenue > 0:
            margin = (profit / revenue * 100).quantize(cents, rounding=ROUND_HALF_UP)
        else:
            margin = ZERO

        # Tiers in declaration order; tiers with no bookings are left out
        by_tier = {}
        for tier in BookingTier.values:
            count = sum(1 for b in active if b.tier == tier)
            if count:
                by_tier[tier] = count

        return {
            'total_bookings': len(bookings),
            'revenue': revenue,
            'booking_expenses': booking_expenses,
            'general_expenses': general_expenses,
            'profit': profit,
            'average_booking_value': average,
            'profit_margin': margin,
            'bookings_by_tier': by_tier,
        }

    @staticmethod
    def available_seasons(bookings):
        """Seasons found on bookings plus the configured defaults, sorted."""
        seasons = {b.season for b in bookings if b.season}
        seasons.update(settings.DEFAULT_SEASONS)
        return sorted(seasons)

    @staticmethod
    def summary_rows(summary):
        """Metric/Value rows of a global summary, for export."""
        return [
            ['Total Bookings', summary['total_bookings']],
            ['Total Revenue (INR)', summary['revenue']],
            ['General Expenses (INR)', summary['general_expenses']],
            ['Net Profit (INR)', summary['profit']],
            ['Avg Booking Value (INR)', summary['average_booking_value']],
            ['Profit Margin (%)', summary['profit_margin']],
        ]
