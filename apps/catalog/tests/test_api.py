import pytest
from django.urls import reverse
from rest_framework import status

from apps.catalog.models import ServiceDefinition, Package


@pytest.mark.django_db
class TestServiceConfigEndpoint:
    """Tests for GET /api/catalog/service-config/"""

    def test_service_config(self, authenticated_client, default_catalog):
        url = reverse('catalog:service-config')
        response = authenticated_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert len(response.data) == 6
        assert len(response.data['halwai']) == 3

    def test_service_config_unauthenticated(self, api_client):
        url = reverse('catalog:service-config')
        response = api_client.get(url)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.django_db
class TestServiceDefinitionEndpoints:
    """Tests for /api/catalog/services/"""

    def test_list_filtered_by_category(self, authenticated_client, default_catalog):
        url = reverse('catalog:service-list')
        response = authenticated_client.get(url, {'category': 'decoration'})

        assert response.status_code == status.HTTP_200_OK
        assert [s['id'] for s in response.data] == [
            'flower-decoration', 'lighting-decoration', 'natural-flower-decoration'
        ]

    def test_create_service(self, authenticated_client, db):
        url = reverse('catalog:service-list')
        data = {
            'id': 'sound-system',
            'category': 'extra',
            'name': 'Sound System',
            'type': 'dropdown',
            'options': ['None', 'Standard'],
        }
        response = authenticated_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert ServiceDefinition.objects.get(id='sound-system').options == ['None', 'Standard']

    def test_create_duplicate_service(self, authenticated_client, waiters):
        url = reverse('catalog:service-list')
        data = {'id': 'waiters-count', 'category': 'labour', 'name': 'Waiters', 'type': 'number'}
        response = authenticated_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'error' in response.data

    def test_patch_service(self, authenticated_client, waiters):
        url = reverse('catalog:service-detail', args=['waiters-count'])
        response = authenticated_client.patch(url, {'name': 'Service Staff'}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['name'] == 'Service Staff'

    def test_delete_service(self, authenticated_client, waiters):
        url = reverse('catalog:service-detail', args=['waiters-count'])
        response = authenticated_client.delete(url)

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert not ServiceDefinition.objects.exists()


@pytest.mark.django_db
class TestPackageEndpoints:
    """Tests for /api/catalog/packages/"""

    def test_list_packages_by_price(self, authenticated_client, default_catalog):
        url = reverse('catalog:package-list')
        response = authenticated_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert [p['name'] for p in response.data] == [
            'Silver Package', 'Gold Package', 'Diamond Package'
        ]

    def test_create_package_with_invalid_services(self, authenticated_client, waiters):
        url = reverse('catalog:package-list')
        data = {'name': 'Big', 'price': '200000', 'services': {'waiters-count': 50}}
        response = authenticated_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'waiters-count' in response.data['services']
        assert not Package.objects.filter(name='Big').exists()

    def test_update_package_price(self, authenticated_client, custom_package):
        url = reverse('catalog:package-detail', args=[custom_package.id])
        response = authenticated_client.patch(url, {'price': '99000.00'}, format='json')

        assert response.status_code == status.HTTP_200_OK
        custom_package.refresh_from_db()
        assert str(custom_package.price) == '99000.00'

    def test_delete_package(self, authenticated_client, custom_package):
        url = reverse('catalog:package-detail', args=[custom_package.id])
        response = authenticated_client.delete(url)

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert not Package.objects.exists()
