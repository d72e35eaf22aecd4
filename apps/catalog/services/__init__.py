"""
Catalog app services layer.

Service configuration (the typed services a booking can select) and
packages (priced booking templates).
"""

from .exceptions import (
    CatalogServiceError,
    ServiceNotFoundError,
    DuplicateServiceError,
    InvalidServiceDefinitionError,
    InvalidServiceSelectionError,
    PackageNotFoundError,
    DuplicatePackageError,
    InvalidPackageError,
)

from .service_config import (
    validate_service_values,
    get_service_config,
    get_service_definition,
    create_service_definition,
    update_service_definition,
    delete_service_definition,
)

from .package_management import (
    get_package,
    create_package,
    update_package,
    delete_package,
    apply_package,
)

from .defaults import install_default_catalog


__all__ = [
    # Exceptions
    'CatalogServiceError',
    'ServiceNotFoundError',
    'DuplicateServiceError',
    'InvalidServiceDefinitionError',
    'InvalidServiceSelectionError',
    'PackageNotFoundError',
    'DuplicatePackageError',
    'InvalidPackageError',

    # Service configuration
    'validate_service_values',
    'get_service_config',
    'get_service_definition',
    'create_service_definition',
    'update_service_definition',
    'delete_service_definition',

    # Packages
    'get_package',
    'create_package',
    'update_package',
    'delete_package',
    'apply_package',

    # Defaults
    'install_default_catalog',
]
