import pytest
from datetime import date
from decimal import Decimal
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

from apps.bookings.services import create_booking, add_payment
from apps.catalog.models import Package
from apps.catalog.services import install_default_catalog
from apps.expenses.services import install_default_categories


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def staff_user(db):
    """Create and return a back-office user."""
    return get_user_model().objects.create_user(
        username='frontdesk',
        password='TestPass123!',
        is_staff=True,
    )


@pytest.fixture
def authenticated_client(api_client, staff_user):
    """Return API client authenticated as the back-office user."""
    refresh = RefreshToken.for_user(staff_user)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client


# =============================================================================
# Venue configuration
# =============================================================================

@pytest.fixture
def venue_defaults(db):
    """Install default services, packages and expense categories."""
    install_default_catalog()
    install_default_categories()


@pytest.fixture
def gold_package(venue_defaults):
    return Package.objects.get(name='Gold Package')


# =============================================================================
# Bookings
# =============================================================================

@pytest.fixture
def booking(venue_defaults):
    """
    Upcoming wedding: rate 250000, discount 25000, no payments yet.
    """
    return create_booking(
        client_name='Meera Kapoor',
        contact='9811111111',
        event_date=date(2025, 12, 14),
        event_type='Wedding',
        guests=400,
        rate=Decimal('250000.00'),
        discount=Decimal('25000.00'),
        services={'ac-hall': True, 'waiters-count': 10, 'dj-setup': 'Premium DJ Setup'},
        season='2025-26',
    )


@pytest.fixture
def paid_booking(booking):
    """The wedding booking with 100000 received by bank."""
    add_payment(
        booking_pk=booking.id,
        amount=Decimal('100000.00'),
        method='Bank',
        payment_date=date(2025, 9, 1),
    )
    return booking


@pytest.fixture
def small_booking(venue_defaults):
    """Silver-tier birthday party."""
    return create_booking(
        client_name='Rohit Verma',
        contact='9822222222',
        event_date=date(2025, 8, 3),
        event_type='Birthday',
        rate=Decimal('60000.00'),
        shift='Day',
        season='2025-26',
    )
