"""
Service configuration service.

The venue's service configuration is a fixed set of categories, each
holding typed service definitions. A booking's (or package's) services
map is keyed by service id and must hold a value of the matching type:

    checkbox  -> bool
    number    -> int within [min_value, max_value]
    dropdown  -> one of the definition's options

Stored bookings are never re-validated when the configuration changes,
so old records may carry ids that no longer exist.
"""

import logging
from typing import Iterable, Optional

from django.db import transaction

from apps.catalog.models import ServiceDefinition, ServiceCategory, ServiceType

from .exceptions import (
    ServiceNotFoundError,
    DuplicateServiceError,
    InvalidServiceDefinitionError,
    InvalidServiceSelectionError,
)

logger = logging.getLogger(__name__)


def _check_value(definition: ServiceDefinition, value) -> Optional[str]:
    """Return a problem description, or None when the value fits the definition."""
    if definition.type == ServiceType.CHECKBOX:
        if not isinstance(value, bool):
            return 'expected true or false'
        return None

    if definition.type == ServiceType.NUMBER:
        # bool is an int subclass
        if isinstance(value, bool) or not isinstance(value, int):
            return 'expected a whole number'
        if definition.min_value is not None and value < definition.min_value:
            return f'must be at least {definition.min_value}'
        if definition.max_value is not None and value > definition.max_value:
            return f'must be at most {definition.max_value}'
        return None

    if definition.type == ServiceType.DROPDOWN:
        if not isinstance(value, str) or value not in definition.options:
            return f"expected one of: {', '.join(definition.options)}"
        return None

    return f'unsupported service type {definition.type!r}'


def validate_service_values(values: dict, definitions: Optional[Iterable[ServiceDefinition]] = None) -> dict:
    """
    Validate a services map against the service configuration.

    Args:
        values: Mapping of service id -> selected value.
        definitions: Service definitions to validate against. Defaults to
            every ServiceDefinition in the database.

    Returns:
        The validated mapping (unchanged).

    Raises:
        InvalidServiceSelectionError: If any key is unknown or any value
            has the wrong type or is out of range. All problems are
            reported together.
    """
    if not values:
        return {}

    if definitions is None:
        definitions = ServiceDefinition.objects.all()
    by_id = {definition.id: definition for definition in definitions}

    errors = {}
    for service_id, value in values.items():
        definition = by_id.get(service_id)
        if definition is None:
            errors[service_id] = 'unknown service'
            continue
        problem = _check_value(definition, value)
        if problem:
            errors[service_id] = problem

    if errors:
        raise InvalidServiceSelectionError(errors)

    return values


def get_service_config() -> dict:
    """
    Return the service configuration grouped by category.

    Every category is present, in declaration order, even when it holds
    no services.
    """
    config = {category.value: [] for category in ServiceCategory}

    for definition in ServiceDefinition.objects.all():
        entry = {
            'id': definition.id,
            'name': definition.name,
            'type': definition.type,
            'default': definition.default_value(),
        }
        if definition.type == ServiceType.NUMBER:
            entry['min'] = definition.min_value
            entry['max'] = definition.max_value
        elif definition.type == ServiceType.DROPDOWN:
            entry['options'] = list(definition.options)
        config[definition.category].append(entry)

    return config


def _check_definition(*, type, min_value, max_value, options):
    if type == ServiceType.NUMBER:
        if min_value is not None and max_value is not None and min_value > max_value:
            raise InvalidServiceDefinitionError("Minimum must not exceed maximum")
    elif type == ServiceType.DROPDOWN:
        if not options or not all(isinstance(option, str) and option for option in options):
            raise InvalidServiceDefinitionError("Dropdown services need at least one option")


def get_service_definition(*, service_id: str) -> ServiceDefinition:
    try:
        return ServiceDefinition.objects.get(id=service_id)
    except ServiceDefinition.DoesNotExist:
        raise ServiceNotFoundError(f"Service '{service_id}' not found")


@transaction.atomic
def create_service_definition(
    *,
    service_id: str,
    category: str,
    name: str,
    type: str,
    min_value: Optional[int] = None,
    max_value: Optional[int] = None,
    options: Optional[list] = None,
) -> ServiceDefinition:
    """
    Add a service to a category.

    The service is appended after the category's existing services.

    Raises:
        DuplicateServiceError: If the id is already used.
        InvalidServiceDefinitionError: If the type constraints are inconsistent.
    """
    if ServiceDefinition.objects.filter(id=service_id).exists():
        raise DuplicateServiceError(f"Service '{service_id}' already exists")

    options = list(options or [])
    _check_definition(type=type, min_value=min_value, max_value=max_value, options=options)

    position = ServiceDefinition.objects.filter(category=category).count()
    definition = ServiceDefinition.objects.create(
        id=service_id,
        category=category,
        name=name,
        type=type,
        min_value=min_value if type == ServiceType.NUMBER else None,
        max_value=max_value if type == ServiceType.NUMBER else None,
        options=options if type == ServiceType.DROPDOWN else [],
        position=position,
    )
    logger.info("Service '%s' added to %s", definition.id, definition.category)
    return definition


@transaction.atomic
def update_service_definition(*, service_id: str, **fields) -> ServiceDefinition:
    """
    Edit a service definition in place.

    Only name, category, type, min_value, max_value and options can change.
    """
    definition = get_service_definition(service_id=service_id)

    for field in ('name', 'category', 'type', 'min_value', 'max_value', 'options'):
        if field in fields:
            setattr(definition, field, fields[field])

    _check_definition(
        type=definition.type,
        min_value=definition.min_value,
        max_value=definition.max_value,
        options=definition.options,
    )
    definition.save()
    logger.info("Service '%s' updated", definition.id)
    return definition


def delete_service_definition(*, service_id: str) -> None:
    definition = get_service_definition(service_id=service_id)
    definition.delete()
    logger.info("Service '%s' deleted", service_id)
