"""
Expense category and vendor management service.
"""

import logging
from typing import Optional
from uuid import UUID

from django.db import transaction
from django.utils.text import slugify

from apps.expenses.defaults import DEFAULT_EXPENSE_CATEGORIES, OTHER_CATEGORY_ID
from apps.expenses.models import ExpenseCategory, Vendor

from .exceptions import (
    CategoryNotFoundError,
    DuplicateCategoryError,
    VendorNotFoundError,
    DuplicateVendorError,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Categories
# =============================================================================

def get_category(*, category_id: str) -> ExpenseCategory:
    try:
        return ExpenseCategory.objects.get(id=category_id)
    except ExpenseCategory.DoesNotExist:
        raise CategoryNotFoundError(f"Expense category '{category_id}' not found")


def find_category_by_name(name: str) -> Optional[ExpenseCategory]:
    """Case-insensitive lookup of a category by its display name."""
    return ExpenseCategory.objects.filter(name__iexact=name.strip()).first()


def _unique_category_id(name: str) -> str:
    base = slugify(name) or 'category'
    candidate = base
    suffix = 2
    while ExpenseCategory.objects.filter(id=candidate).exists():
        candidate = f"{base}-{suffix}"
        suffix += 1
    return candidate


def create_category(
    *,
    name: str,
    requires_manpower: bool = False,
    category_id: Optional[str] = None
) -> ExpenseCategory:
    """
    Create an expense category.

    Args:
        name: Display name, unique case-insensitively
        requires_manpower: Expenses in this category are priced as
            headcount x rate per person
        category_id: Explicit id; derived from the name when omitted

    Raises:
        DuplicateCategoryError: If the name or id is already taken
    """
    name = name.strip()
    if find_category_by_name(name):
        raise DuplicateCategoryError(f"Expense category '{name}' already exists")

    if category_id:
        if ExpenseCategory.objects.filter(id=category_id).exists():
            raise DuplicateCategoryError(f"Expense category id '{category_id}' already exists")
    else:
        category_id = _unique_category_id(name)

    category = ExpenseCategory.objects.create(
        id=category_id,
        name=name,
        requires_manpower=requires_manpower,
    )
    logger.info("Expense category '%s' created", category.name)
    return category


def update_category(
    *,
    category_id: str,
    name: Optional[str] = None,
    requires_manpower: Optional[bool] = None
) -> ExpenseCategory:
    """
    Rename a category or toggle its manpower flag.

    Existing expenses keep the category name they were recorded with.
    """
    category = get_category(category_id=category_id)

    if name is not None:
        name = name.strip()
        if ExpenseCategory.objects.filter(name__iexact=name).exclude(id=category.id).exists():
            raise DuplicateCategoryError(f"Expense category '{name}' already exists")
        category.name = name

    if requires_manpower is not None:
        category.requires_manpower = requires_manpower

    category.save()
    logger.info("Expense category '%s' updated", category.name)
    return category


@transaction.atomic
def delete_category(*, category_id: str) -> int:
    """
    Delete a category together with its vendors.

    Recorded expenses are untouched.

    Returns:
        Number of vendors deleted
    """
    category = get_category(category_id=category_id)
    vendor_count = category.vendors.count()
    category.delete()
    logger.info(
        "Expense category '%s' deleted with %d vendor(s)",
        category.name, vendor_count,
    )
    return vendor_count


@transaction.atomic
def install_default_categories() -> int:
    """
    Install the default expense categories that are missing.

    Returns:
        Number of categories created
    """
    created_count = 0
    for entry in DEFAULT_EXPENSE_CATEGORIES:
        _, created = ExpenseCategory.objects.get_or_create(
            id=entry['id'],
            defaults={'name': entry['name'], 'requires_manpower': entry['requires_manpower']},
        )
        created_count += created
    logger.info("Default expense categories installed: %d created", created_count)
    return created_count


def fallback_category(selected: Optional[ExpenseCategory] = None) -> ExpenseCategory:
    """
    Category a newly seen vendor is filed under.

    The selected category when there is one, else the category named
    "Other", else an "other" category created on demand.
    """
    if selected is not None:
        return selected

    other = find_category_by_name('Other')
    if other is not None:
        return other

    other, created = ExpenseCategory.objects.get_or_create(
        id=OTHER_CATEGORY_ID,
        defaults={'name': 'Other'},
    )
    if created:
        logger.info("Fallback expense category '%s' created", other.id)
    return other


# =============================================================================
# Vendors
# =============================================================================

def get_vendor(*, vendor_id: UUID) -> Vendor:
    try:
        return Vendor.objects.select_related('category').get(id=vendor_id)
    except Vendor.DoesNotExist:
        raise VendorNotFoundError(f"Vendor {vendor_id} not found")


def find_vendor_by_name(name: str) -> Optional[Vendor]:
    """Case-insensitive lookup of a vendor by name."""
    return Vendor.objects.filter(name__iexact=name.strip()).first()


def create_vendor(*, name: str, category_id: str) -> Vendor:
    name = name.strip()
    if find_vendor_by_name(name):
        raise DuplicateVendorError(f"Vendor '{name}' already exists")

    category = get_category(category_id=category_id)
    vendor = Vendor.objects.create(name=name, category=category)
    logger.info("Vendor '%s' created under %s", vendor.name, category.name)
    return vendor


def update_vendor(
    *,
    vendor_id: UUID,
    name: Optional[str] = None,
    category_id: Optional[str] = None
) -> Vendor:
    vendor = get_vendor(vendor_id=vendor_id)

    if name is not None:
        name = name.strip()
        if Vendor.objects.filter(name__iexact=name).exclude(id=vendor.id).exists():
            raise DuplicateVendorError(f"Vendor '{name}' already exists")
        vendor.name = name

    if category_id is not None:
        vendor.category = get_category(category_id=category_id)

    vendor.save()
    logger.info("Vendor '%s' updated", vendor.name)
    return vendor


def delete_vendor(*, vendor_id: UUID) -> None:
    vendor = get_vendor(vendor_id=vendor_id)
    vendor.delete()
    logger.info("Vendor '%s' deleted", vendor.name)
