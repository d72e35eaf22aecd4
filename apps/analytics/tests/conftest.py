import pytest
from datetime import date
from decimal import Decimal
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

from apps.bookings.services import create_booking, add_payment, cancel_booking, complete_booking
from apps.expenses.services import install_default_categories, add_expense, revert_expense


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def staff_user(db):
    """Create and return a back-office user."""
    return get_user_model().objects.create_user(
        username='analyst',
        password='TestPass123!',
        is_staff=True,
    )


@pytest.fixture
def authenticated_client(api_client, staff_user):
    """Return API client authenticated as the back-office user."""
    refresh = RefreshToken.for_user(staff_user)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client


@pytest.fixture
def venue_seasons(db, settings):
    """
    Two seasons of bookings and expenses.

    2025-26:
        001 Meera   250000 - 25000  Diamond  Upcoming   2025-12-14  paid 100000
        002 Rohit    60000          Silver   Completed  2025-08-03  paid  20000
        003 Kiran   150000          Gold     Cancelled  2026-02-10  paid  30000, refund 10000
        004 Asha    160000          Gold     Upcoming   2026-01-05
    2024-25:
        001 Vikram  200000          Diamond  Completed  2024-11-10

    Expenses:
        Catering 20000 for Meera, 2000 of it reverted
        Refund 10000 for Kiran (recorded on cancellation)
        Catering 5000 for Vikram
        Utilities 4500 on 2025-05-01, general
        Utilities  700 on 2027-01-02, general
    """
    settings.CURRENT_SEASON = '2025-26'
    settings.DEFAULT_SEASONS = ['2024-25', '2025-26', '2026-27']
    install_default_categories()

    meera = create_booking(
        client_name='Meera Kapoor', contact='9811111111', event_date=date(2025, 12, 14),
        rate=Decimal('250000'), discount=Decimal('25000'), season='2025-26',
        advance=Decimal('100000'),
    )
    rohit = create_booking(
        client_name='Rohit Verma', contact='9822222222', event_date=date(2025, 8, 3),
        rate=Decimal('60000'), season='2025-26',
    )
    add_payment(booking_pk=rohit.id, amount=Decimal('20000'), method='Cash',
                payment_date=date(2025, 7, 20))
    complete_booking(booking_pk=rohit.id)

    kiran = create_booking(
        client_name='Kiran Das', contact='9833333333', event_date=date(2026, 2, 10),
        rate=Decimal('150000'), season='2025-26', advance=Decimal('30000'),
    )
    cancel_booking(booking_pk=kiran.id, refund_amount=Decimal('10000'))

    asha = create_booking(
        client_name='Asha Nair', contact='9844444444', event_date=date(2026, 1, 5),
        rate=Decimal('160000'), season='2025-26',
    )
    vikram = create_booking(
        client_name='Vikram Singh', contact='9855555555', event_date=date(2024, 11, 10),
        rate=Decimal('200000'), season='2024-25',
    )
    complete_booking(booking_pk=vikram.id)

    catering, _ = add_expense(category='Catering', vendor='Sharma Caterers',
                              expense_date=date(2025, 12, 10), payment_method='Cash',
                              amount=Decimal('20000'), booking_id=meera.booking_id)
    revert_expense(expense_id=catering.id, amount=Decimal('2000'), notes='Leftover',
                   expense_date=date(2025, 12, 20))
    add_expense(category='Catering', vendor='Sharma Caterers', expense_date=date(2024, 11, 9),
                payment_method='Bank', amount=Decimal('5000'), booking_id=vikram.booking_id)
    add_expense(category='Utilities', vendor='Power Co', expense_date=date(2025, 5, 1),
                payment_method='UPI', amount=Decimal('4500'))
    add_expense(category='Utilities', vendor='Power Co', expense_date=date(2027, 1, 2),
                payment_method='Bank', amount=Decimal('700'))

    return {
        'meera': meera,
        'rohit': rohit,
        'kiran': kiran,
        'asha': asha,
        'vikram': vikram,
    }
