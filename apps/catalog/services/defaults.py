"""
Installation of the default venue catalog.
"""

import logging

from django.db import transaction

from apps.catalog.defaults import DEFAULT_SERVICES_CONFIG, DEFAULT_PACKAGES
from apps.catalog.models import ServiceDefinition, Package

logger = logging.getLogger(__name__)


@transaction.atomic
def install_default_catalog() -> dict:
    """
    Install the default service configuration and packages.

    Existing services and packages are left untouched, so running this
    twice is harmless.

    Returns:
        Counts of created rows: {'services': int, 'packages': int}
    """
    created_services = 0
    for category, services in DEFAULT_SERVICES_CONFIG.items():
        for position, service in enumerate(services):
            _, created = ServiceDefinition.objects.get_or_create(
                id=service['id'],
                defaults={
                    'category': category,
                    'name': service['name'],
                    'type': service['type'],
                    'min_value': service.get('min'),
                    'max_value': service.get('max'),
                    'options': service.get('options', []),
                    'position': position,
                },
            )
            created_services += created

    created_packages = 0
    for package in DEFAULT_PACKAGES:
        _, created = Package.objects.get_or_create(
            name=package['name'],
            defaults={'price': package['price'], 'services': package['services']},
        )
        created_packages += created

    logger.info(
        "Default catalog installed: %d services, %d packages created",
        created_services, created_packages,
    )
    return {'services': created_services, 'packages': created_packages}
