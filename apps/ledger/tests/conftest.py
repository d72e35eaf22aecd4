import pytest
from datetime import date
from decimal import Decimal
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

from apps.bookings.services import create_booking, add_payment, revert_payment
from apps.expenses.services import install_default_categories, add_expense, revert_expense
from apps.ledger.services import Transaction, INCOME, EXPENSE


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def staff_user(db):
    """Create and return a back-office user."""
    return get_user_model().objects.create_user(
        username='accounts',
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
# In-memory transactions
# =============================================================================

def make_transaction(day, amount, type=INCOME, method='Cash', **extra):
    return Transaction(
        date=day,
        description=extra.pop('description', 'Entry'),
        type=type,
        amount=Decimal(amount),
        payment_method=method,
        **extra,
    )


@pytest.fixture
def transactions():
    """Mixed transactions across two seasons, oldest first."""
    return [
        make_transaction(date(2025, 3, 31), '1000', EXPENSE, 'Cash', description='Old bill'),
        make_transaction(date(2025, 4, 1), '50000', INCOME, 'Bank', booking_id='HG/2025/26/001'),
        make_transaction(date(2025, 6, 10), '8000', EXPENSE, 'Cash',
                         category='Catering', vendor='Sharma Caterers', booking_id='HG/2025/26/001'),
        make_transaction(date(2025, 6, 12), '12000', INCOME, 'UPI', booking_id='HG/2025/26/002'),
        make_transaction(date(2025, 7, 1), '2000', EXPENSE, 'Card',
                         category='Catering', vendor='Royal Sweets'),
        make_transaction(date(2026, 3, 31), '500', INCOME, 'Cash',
                         category='Catering', vendor='Sharma Caterers'),
        make_transaction(date(2026, 4, 1), '700', EXPENSE, 'Bank', category='Utilities', vendor='Power Co'),
    ]


# =============================================================================
# Stored bookings and expenses
# =============================================================================

@pytest.fixture
def venue_activity(db):
    """
    One season of stored activity.

    Booking HG/2025/26/001 (Meera Kapoor):
        2025-09-01  Received  100000 Bank
        2025-10-01  Received   50000 Cash
        2025-10-05  Reverted   10000 Cash  (Date moved)
    Expenses:
        2025-04-01  Utilities: Power Co        4500 UPI   general
        2025-10-03  Catering: Sharma Caterers 20000 Cash  booking
        2026-03-31  reversal of the catering   2000 Cash  (Leftover)
        2026-04-01  Utilities: Power Co         700 Bank  next season
    """
    install_default_categories()
    booking = create_booking(
        client_name='Meera Kapoor',
        contact='9811111111',
        event_date=date(2025, 12, 14),
        rate=Decimal('250000'),
        season='2025-26',
    )
    add_payment(booking_pk=booking.id, amount=Decimal('100000'), method='Bank',
                payment_date=date(2025, 9, 1))
    cash = add_payment(booking_pk=booking.id, amount=Decimal('50000'), method='Cash',
                       payment_date=date(2025, 10, 1))
    revert_payment(booking_pk=booking.id, payment_id=cash.id, amount=Decimal('10000'),
                   notes='Date moved', payment_date=date(2025, 10, 5))

    add_expense(category='Utilities', vendor='Power Co', expense_date=date(2025, 4, 1),
                payment_method='UPI', amount=Decimal('4500'))
    catering, _ = add_expense(category='Catering', vendor='Sharma Caterers',
                              expense_date=date(2025, 10, 3), payment_method='Cash',
                              amount=Decimal('20000'), booking_id=booking.booking_id)
    revert_expense(expense_id=catering.id, amount=Decimal('2000'), notes='Leftover',
                   expense_date=date(2026, 3, 31))
    add_expense(category='Utilities', vendor='Power Co', expense_date=date(2026, 4, 1),
                payment_method='Bank', amount=Decimal('700'))
    return booking
