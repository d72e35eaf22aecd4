"""
Expenses app services layer.

Expense entry and reversal, vendor auto-creation, category and vendor
management, and the booking expense roll-up.
"""

from .exceptions import (
    ExpensesServiceError,
    ExpenseNotFoundError,
    InvalidExpenseError,
    ExpenseReversalError,
    CategoryNotFoundError,
    DuplicateCategoryError,
    VendorNotFoundError,
    DuplicateVendorError,
)

from .expense_rollup import (
    expense_totals_by_booking,
    recompute_booking_expenses,
)

from .category_management import (
    get_category,
    find_category_by_name,
    create_category,
    update_category,
    delete_category,
    install_default_categories,
    fallback_category,
    get_vendor,
    find_vendor_by_name,
    create_vendor,
    update_vendor,
    delete_vendor,
)

from .expense_management import (
    get_expense,
    search_expenses,
    ensure_vendor,
    add_expense,
    reverted_total,
    revert_expense,
    record_refund_expense,
)

from .reports import (
    EXPENSES_REPORT_HEADERS,
    expenses_report_rows,
    expenses_report_title,
)


__all__ = [
    # Exceptions
    'ExpensesServiceError',
    'ExpenseNotFoundError',
    'InvalidExpenseError',
    'ExpenseReversalError',
    'CategoryNotFoundError',
    'DuplicateCategoryError',
    'VendorNotFoundError',
    'DuplicateVendorError',

    # Roll-up
    'expense_totals_by_booking',
    'recompute_booking_expenses',

    # Categories and vendors
    'get_category',
    'find_category_by_name',
    'create_category',
    'update_category',
    'delete_category',
    'install_default_categories',
    'fallback_category',
    'get_vendor',
    'find_vendor_by_name',
    'create_vendor',
    'update_vendor',
    'delete_vendor',

    # Expenses
    'get_expense',
    'search_expenses',
    'ensure_vendor',
    'add_expense',
    'reverted_total',
    'revert_expense',
    'record_refund_expense',

    # Reports
    'EXPENSES_REPORT_HEADERS',
    'expenses_report_rows',
    'expenses_report_title',
]
