import csv
import io
import pytest
from datetime import date
from decimal import Decimal
from django.urls import reverse
from rest_framework import status

from apps.bookings.models import Booking


# =============================================================================
# Season dashboard
# =============================================================================

@pytest.mark.django_db
class TestSeasonDashboard:
    """Tests for GET /api/analytics/season/"""

    def test_requires_authentication(self, api_client):
        response = api_client.get(reverse('analytics:season'))
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_defaults_to_current_season(self, authenticated_client, venue_seasons):
        response = authenticated_client.get(reverse('analytics:season'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['season'] == '2025-26'
        assert response.data['total_bookings'] == 4
        assert Decimal(response.data['revenue']) == Decimal('445000')
        assert Decimal(response.data['pending_balance']) == Decimal('325000')
        assert Decimal(response.data['net_profit']) == Decimal('412500')

    def test_recent_and_upcoming(self, authenticated_client, venue_seasons):
        response = authenticated_client.get(reverse('analytics:season'), {'season': '2025-26'})

        assert [b['booking_id'] for b in response.data['recent_bookings']] == [
            'HG/2025/26/003', 'HG/2025/26/004', 'HG/2025/26/001',
        ]
        assert [b['booking_id'] for b in response.data['upcoming_soon']] == [
            'HG/2025/26/001', 'HG/2025/26/004',
        ]
        assert 'financials' in response.data['upcoming_soon'][0]

    def test_other_season(self, authenticated_client, venue_seasons):
        response = authenticated_client.get(reverse('analytics:season'), {'season': '2024-25'})

        assert response.data['total_bookings'] == 1
        assert Decimal(response.data['revenue']) == Decimal('200000')
        assert response.data['upcoming_soon'] == []

    def test_malformed_season(self, authenticated_client, db):
        response = authenticated_client.get(reverse('analytics:season'), {'season': '2025'})
        assert response.status_code == status.HTTP_400_BAD_REQUEST


# =============================================================================
# Venue-wide summary
# =============================================================================

@pytest.mark.django_db
class TestSummary:
    """Tests for GET /api/analytics/summary/"""

    def test_summary(self, authenticated_client, venue_seasons):
        response = authenticated_client.get(reverse('analytics:summary'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['total_bookings'] == 5
        assert Decimal(response.data['profit']) == Decimal('606800')
        assert response.data['profit_margin'] == '94.08'
        assert response.data['bookings_by_tier'] == {'Silver': 1, 'Gold': 1, 'Diamond': 2}

    def test_empty_venue(self, authenticated_client, db):
        response = authenticated_client.get(reverse('analytics:summary'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['total_bookings'] == 0
        assert response.data['profit_margin'] == '0.00'

    def test_csv_export(self, authenticated_client, venue_seasons):
        response = authenticated_client.get(reverse('analytics:summary'), {'export': 'csv'})

        assert response.status_code == status.HTTP_200_OK
        assert response['Content-Disposition'] == 'attachment; filename="Analytics_Summary.csv"'
        rows = list(csv.reader(io.StringIO(response.content.decode('utf-8-sig'))))
        assert rows == [
            ['Metric', 'Value'],
            ['Total Bookings', '5'],
            ['Total Revenue (INR)', '645000.00'],
            ['General Expenses (INR)', '5200.00'],
            ['Net Profit (INR)', '606800.00'],
            ['Avg Booking Value (INR)', '161250.00'],
            ['Profit Margin (%)', '94.08'],
        ]

    def test_printable_export(self, authenticated_client, venue_seasons):
        response = authenticated_client.get(reverse('analytics:summary'), {'export': 'pdf'})

        assert response.status_code == status.HTTP_200_OK
        assert response['Content-Type'].startswith('text/html')
        assert '<title>Analytics Summary</title>' in response.content.decode()

    def test_unknown_export(self, authenticated_client, db):
        response = authenticated_client.get(reverse('analytics:summary'), {'export': 'docx'})
        assert response.status_code == status.HTTP_400_BAD_REQUEST


# =============================================================================
# Season picker
# =============================================================================

@pytest.mark.django_db
class TestSeasons:
    """Tests for GET /api/analytics/seasons/"""

    def test_seasons(self, authenticated_client, venue_seasons):
        Booking.objects.create(
            booking_id='HG/2027/28/001',
            client_name='Early Bird',
            contact='9866666666',
            event_date=date(2027, 5, 1),
            season='2027-28',
            tier='Silver',
            rate=Decimal('50000'),
        )

        response = authenticated_client.get(reverse('analytics:seasons'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data == {
            'current_season': '2025-26',
            'seasons': ['2024-25', '2025-26', '2026-27', '2027-28'],
        }

    def test_defaults_without_bookings(self, authenticated_client, settings):
        settings.DEFAULT_SEASONS = ['2025-26']

        response = authenticated_client.get(reverse('analytics:seasons'))

        assert response.data['seasons'] == ['2025-26']
