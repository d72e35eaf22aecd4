"""
Package management service.

A package is a named booking template: choosing one on a new booking
prefills the rate with the package price and the services map with the
package's selections.
"""

import logging
from decimal import Decimal
from typing import Optional
from uuid import UUID

from django.db import transaction

from apps.catalog.models import Package

from .exceptions import (
    PackageNotFoundError,
    DuplicatePackageError,
    InvalidPackageError,
)
from .service_config import validate_service_values

logger = logging.getLogger(__name__)


def get_package(*, package_id: UUID) -> Package:
    try:
        return Package.objects.get(id=package_id)
    except Package.DoesNotExist:
        raise PackageNotFoundError(f"Package {package_id} not found")


def _check_price(price: Decimal) -> None:
    if price is None or price <= 0:
        raise InvalidPackageError("Package price must be greater than zero")


@transaction.atomic
def create_package(*, name: str, price: Decimal, services: Optional[dict] = None) -> Package:
    """
    Create a package.

    Args:
        name: Unique package name
        price: Package price, becomes the booking rate when applied
        services: Services map, validated against the service configuration

    Returns:
        Created Package instance

    Raises:
        DuplicatePackageError: If a package with this name exists
        InvalidPackageError: If the price is not positive
        InvalidServiceSelectionError: If the services map is invalid
    """
    name = name.strip()
    if Package.objects.filter(name__iexact=name).exists():
        raise DuplicatePackageError(f"Package '{name}' already exists")

    _check_price(price)
    services = validate_service_values(services or {})

    package = Package.objects.create(name=name, price=price, services=services)
    logger.info("Package '%s' created at %s", package.name, package.price)
    return package


@transaction.atomic
def update_package(
    *,
    package_id: UUID,
    name: Optional[str] = None,
    price: Optional[Decimal] = None,
    services: Optional[dict] = None,
) -> Package:
    package = get_package(package_id=package_id)

    if name is not None:
        name = name.strip()
        if Package.objects.filter(name__iexact=name).exclude(id=package.id).exists():
            raise DuplicatePackageError(f"Package '{name}' already exists")
        package.name = name

    if price is not None:
        _check_price(price)
        package.price = price

    if services is not None:
        package.services = validate_service_values(services)

    package.save()
    logger.info("Package '%s' updated", package.name)
    return package


def delete_package(*, package_id: UUID) -> None:
    package = get_package(package_id=package_id)
    package.delete()
    logger.info("Package '%s' deleted", package.name)


def apply_package(package: Package) -> dict:
    """
    Return the booking prefill for a package.

    Applying a package sets the rate to the package price, replaces the
    services map and resets any discount.
    """
    return {
        'rate': package.price,
        'services': dict(package.services),
        'discount': Decimal('0'),
    }
