import pytest
from datetime import date
from decimal import Decimal
from types import SimpleNamespace

from apps.analytics.analytics import VenueAnalytics
from apps.analytics.exceptions import InvalidSeasonError
from apps.bookings.models import Booking
from apps.expenses.models import Expense


class _Payments(list):
    def all(self):
        return self


def _booking(booking_id, season, status='Upcoming', rate='100000', discount='0', tier='Silver',
             event_date=date(2025, 12, 1), payments=()):
    return SimpleNamespace(
        booking_id=booking_id,
        season=season,
        status=status,
        tier=tier,
        rate=Decimal(rate),
        discount=Decimal(discount),
        event_date=event_date,
        payments=_Payments(payments),
    )


def _expense(amount, booking_id='', expense_date=date(2025, 6, 1), type='Paid'):
    return SimpleNamespace(
        amount=Decimal(amount),
        booking_id=booking_id,
        expense_date=expense_date,
        type=type,
    )


# =============================================================================
# Season expenses
# =============================================================================

class TestSeasonExpenses:

    def test_booking_expense_follows_booking_season(self):
        bookings = [_booking('HG/2025/26/001', '2025-26'), _booking('HG/2024/25/001', '2024-25')]
        expenses = [
            _expense('100', booking_id='HG/2025/26/001', expense_date=date(2027, 1, 1)),
            _expense('200', booking_id='HG/2024/25/001', expense_date=date(2025, 6, 1)),
        ]

        matched = VenueAnalytics.season_expenses('2025-26', bookings, expenses)

        assert [e.amount for e in matched] == [Decimal('100')]

    def test_general_expense_uses_calendar_years(self):
        expenses = [
            _expense('1', expense_date=date(2025, 1, 15)),
            _expense('2', expense_date=date(2026, 12, 31)),
            _expense('3', expense_date=date(2024, 12, 31)),
            _expense('4', expense_date=date(2027, 1, 1)),
        ]

        matched = VenueAnalytics.season_expenses('2025-26', [], expenses)

        # Wider than the April-March ledger window
        assert [e.amount for e in matched] == [Decimal('1'), Decimal('2')]

    def test_expense_for_unknown_booking_is_dropped(self):
        matched = VenueAnalytics.season_expenses('2025-26', [], [_expense('5', booking_id='HG/OLD/1')])
        assert matched == []

    @pytest.mark.parametrize('season', ['', 'current', None])
    def test_invalid_season(self, season):
        with pytest.raises(InvalidSeasonError):
            VenueAnalytics.season_expenses(season, [], [])


# =============================================================================
# Summaries over plain objects
# =============================================================================

class TestSeasonSummary:

    def test_cancelled_counted_but_not_earned(self):
        paid = SimpleNamespace(type='Received', amount=Decimal('40000'))
        bookings = [
            _booking('A', '2025-26', rate='100000', discount='10000', payments=[paid]),
            _booking('B', '2025-26', status='Cancelled', rate='80000', payments=[paid]),
        ]

        summary = VenueAnalytics.season_summary('2025-26', bookings, [])

        assert summary['total_bookings'] == 2
        assert summary['revenue'] == Decimal('90000')
        assert summary['total_paid'] == Decimal('40000')
        assert summary['pending_balance'] == Decimal('50000')

    def test_reverted_expenses_reduce_the_total(self):
        bookings = [_booking('A', '2025-26')]
        expenses = [
            _expense('1000', booking_id='A'),
            _expense('300', booking_id='A', type='Reverted'),
        ]

        summary = VenueAnalytics.season_summary('2025-26', bookings, expenses)

        assert summary['season_expenses'] == Decimal('700')
        assert summary['net_profit'] == Decimal('99300')

    def test_recent_and_upcoming_lists(self):
        bookings = [
            _booking(str(day), '2025-26', event_date=date(2025, 10, day),
                     status='Completed' if day < 10 else 'Upcoming')
            for day in (1, 5, 12, 20, 28)
        ]

        summary = VenueAnalytics.season_summary('2025-26', bookings, [])

        assert [b.booking_id for b in summary['recent_bookings']] == ['28', '20', '12']
        assert [b.booking_id for b in summary['upcoming_soon']] == ['12', '20']
        assert summary['upcoming_count'] == 3

    def test_empty_season(self):
        summary = VenueAnalytics.season_summary('2030-31', [_booking('A', '2025-26')], [])

        assert summary['total_bookings'] == 0
        assert summary['revenue'] == Decimal('0')
        assert summary['recent_bookings'] == []


class TestGlobalSummary:

    def test_no_bookings(self):
        summary = VenueAnalytics.global_summary([], [_expense('500')])

        assert summary['revenue'] == Decimal('0')
        assert summary['profit'] == Decimal('-500')
        assert summary['profit_margin'] == Decimal('0')
        assert summary['average_booking_value'] == Decimal('0')
        assert summary['bookings_by_tier'] == {}

    def test_margin_and_average_rounded_to_cents(self):
        bookings = [
            _booking('A', '2025-26', rate='100000', tier='Silver'),
            _booking('B', '2025-26', rate='100000', tier='Silver'),
            _booking('C', '2025-26', rate='100001', tier='Silver'),
        ]
        expenses = [_expense('1000', booking_id='A')]

        summary = VenueAnalytics.global_summary(bookings, expenses)

        assert summary['average_booking_value'] == Decimal('100000.33')
        # 299001 / 300001 * 100
        assert summary['profit_margin'] == Decimal('99.67')

    def test_tier_histogram_skips_cancelled_and_empty_tiers(self):
        bookings = [
            _booking('A', '2025-26', tier='Diamond'),
            _booking('B', '2025-26', tier='Diamond'),
            _booking('C', '2025-26', tier='Gold', status='Cancelled'),
            _booking('D', '2025-26', tier='Silver'),
        ]

        summary = VenueAnalytics.global_summary(bookings, [])

        assert summary['bookings_by_tier'] == {'Silver': 1, 'Diamond': 2}
        assert summary['total_bookings'] == 4


class TestAvailableSeasons:

    def test_union_with_defaults(self, settings):
        settings.DEFAULT_SEASONS = ['2025-26', '2026-27']
        bookings = [_booking('A', '2023-24'), _booking('B', '2025-26'), _booking('C', '')]

        assert VenueAnalytics.available_seasons(bookings) == ['2023-24', '2025-26', '2026-27']


# =============================================================================
# Stored data
# =============================================================================

@pytest.mark.django_db
class TestStoredSummaries:

    def test_season_summary(self, venue_seasons):
        summary = VenueAnalytics.season_summary(
            '2025-26',
            Booking.objects.prefetch_related('payments'),
            Expense.objects.all(),
        )

        assert summary['total_bookings'] == 4
        assert summary['upcoming_count'] == 2
        assert summary['revenue'] == Decimal('445000')
        assert summary['total_paid'] == Decimal('120000')
        assert summary['pending_balance'] == Decimal('325000')
        # 20000 - 2000 catering, 10000 refund, 4500 utilities
        assert summary['season_expenses'] == Decimal('32500')
        assert summary['net_profit'] == Decimal('412500')

    def test_global_summary(self, venue_seasons):
        summary = VenueAnalytics.global_summary(Booking.objects.all(), Expense.objects.all())

        assert summary['total_bookings'] == 5
        assert summary['revenue'] == Decimal('645000')
        assert summary['booking_expenses'] == Decimal('33000')
        assert summary['general_expenses'] == Decimal('5200')
        assert summary['profit'] == Decimal('606800')
        assert summary['average_booking_value'] == Decimal('161250.00')
        assert summary['profit_margin'] == Decimal('94.08')
        assert summary['bookings_by_tier'] == {'Silver': 1, 'Gold': 1, 'Diamond': 2}

    def test_summary_rows(self, venue_seasons):
        summary = VenueAnalytics.global_summary(Booking.objects.all(), Expense.objects.all())
        rows = VenueAnalytics.summary_rows(summary)

        assert [row[0] for row in rows] == [
            'Total Bookings',
            'Total Revenue (INR)',
            'General Expenses (INR)',
            'Net Profit (INR)',
            'Avg Booking Value (INR)',
            'Profit Margin (%)',
        ]
        assert rows[0][1] == 5
