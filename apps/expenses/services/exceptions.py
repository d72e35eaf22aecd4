"""
Domain-specific exceptions for expenses app.

These exceptions represent business rule violations and should be
caught in views and converted to appropriate HTTP responses.
"""


class ExpensesServiceError(Exception):
    """Base exception for all expenses service errors."""
    pass


class ExpenseNotFoundError(ExpensesServiceError):
    """Raised when an expense does not exist."""
    pass


class InvalidExpenseError(ExpensesServiceError):
    """Raised when expense data breaks a business rule."""
    pass


class ExpenseReversalError(ExpensesServiceError):
    """Raised when an expense cannot be reverted as requested."""
    pass


class CategoryNotFoundError(ExpensesServiceError):
    """Raised when an expense category does not exist."""
    pass


class DuplicateCategoryError(ExpensesServiceError):
    """Raised when an expense category name or id is already taken."""
    pass


class VendorNotFoundError(ExpensesServiceError):
    """Raised when a vendor does not exist."""
    pass


class DuplicateVendorError(ExpensesServiceError):
    """Raised when a vendor name is already taken."""
    pass
