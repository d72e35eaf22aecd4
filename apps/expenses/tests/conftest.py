import pytest
from datetime import date
from decimal import Decimal
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

from apps.bookings.models import Booking
from apps.expenses.models import ExpenseCategory, Vendor
from apps.expenses.services import install_default_categories, add_expense


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def staff_user(db):
    """Create and return a back-office user."""
    return get_user_model().objects.create_user(
        username='accountant',
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
# Categories and vendors
# =============================================================================

@pytest.fixture
def default_categories(db):
    """Install the default expense categories."""
    install_default_categories()
    return ExpenseCategory.objects.all()


@pytest.fixture
def catering(default_categories):
    return ExpenseCategory.objects.get(id='catering')


@pytest.fixture
def staff_category(default_categories):
    """A manpower category."""
    return ExpenseCategory.objects.get(id='staff')


@pytest.fixture
def caterer(catering):
    return Vendor.objects.create(name='Sharma Caterers', category=catering)


# =============================================================================
# Bookings and expenses
# =============================================================================

@pytest.fixture
def booking(db):
    """An upcoming booking with no expenses."""
    return Booking.objects.create(
        booking_id='HG/2025/26/001',
        client_name='Anita Rao',
        contact='9800000001',
        event_date=date(2025, 11, 20),
        season='2025-26',
        tier='Gold',
        rate=Decimal('150000.00'),
    )


@pytest.fixture
def other_booking(db):
    return Booking.objects.create(
        booking_id='HG/2025/26/002',
        client_name='Vikram Shah',
        contact='9800000002',
        event_date=date(2025, 12, 5),
        season='2025-26',
        tier='Silver',
        rate=Decimal('90000.00'),
    )


@pytest.fixture
def booking_expense(booking, caterer):
    """A 20000 catering expense against the booking."""
    expense, _ = add_expense(
        category='Catering',
        vendor='Sharma Caterers',
        expense_date=date(2025, 11, 18),
        payment_method='Bank',
        amount=Decimal('20000.00'),
        booking_id=booking.booking_id,
    )
    return expense


@pytest.fixture
def general_expense(default_categories):
    """An electricity bill with no booking."""
    expense, _ = add_expense(
        category='Utilities',
        vendor='State Electricity Board',
        expense_date=date(2025, 10, 1),
        payment_method='UPI',
        amount=Decimal('4500.00'),
    )
    return expense
