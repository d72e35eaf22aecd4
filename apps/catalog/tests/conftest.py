import pytest
from decimal import Decimal
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

from apps.catalog.models import ServiceDefinition, Package
from apps.catalog.services import install_default_catalog


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def staff_user(db):
    """Create and return a back-office user."""
    return get_user_model().objects.create_user(
        username='manager',
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
def default_catalog(db):
    """Install the default service configuration and packages."""
    install_default_catalog()
    return ServiceDefinition.objects.all()


@pytest.fixture
def waiters(db):
    """A single number service."""
    return ServiceDefinition.objects.create(
        id='waiters-count',
        category='labour',
        name='Waiters',
        type='number',
        min_value=0,
        max_value=20,
    )


@pytest.fixture
def package(default_catalog):
    """Return the default Gold package."""
    return Package.objects.get(name='Gold Package')


@pytest.fixture
def custom_package(waiters):
    """A package using only the waiters service."""
    return Package.objects.create(
        name='Custom',
        price=Decimal('90000'),
        services={'waiters-count': 4},
    )
