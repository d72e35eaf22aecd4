"""
Domain-specific exceptions for catalog app.

These exceptions represent business rule violations and should be
caught in views and converted to appropriate HTTP responses.
"""


class CatalogServiceError(Exception):
    """Base exception for all catalog service errors."""
    pass


class ServiceNotFoundError(CatalogServiceError):
    """Raised when a service definition does not exist."""
    pass


class DuplicateServiceError(CatalogServiceError):
    """Raised when a service id is already taken."""
    pass


class InvalidServiceDefinitionError(CatalogServiceError):
    """Raised when a service definition's constraints are inconsistent."""
    pass


class InvalidServiceSelectionError(CatalogServiceError):
    """
    Raised when a services map does not match the service configuration.

    Attributes:
        errors (dict): service id -> problem description, one entry per
            offending key.
    """

    def __init__(self, errors):
        self.errors = errors
        details = '; '.join(f"{key}: {problem}" for key, problem in errors.items())
        super().__init__(f"Invalid service selection ({details})")


class PackageNotFoundError(CatalogServiceError):
    """Raised when a package does not exist."""
    pass


class DuplicatePackageError(CatalogServiceError):
    """Raised when a package name is already taken."""
    pass


class InvalidPackageError(CatalogServiceError):
    """Raised when package data breaks a business rule."""
    pass
