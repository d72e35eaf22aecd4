"""
Ledger app services layer.

Pure derivations from bookings and expenses, plus report export.
"""

from .exceptions import (
    LedgerError,
    InvalidSeasonError,
    UnsupportedExportFormatError,
)

from .transactions import (
    INCOME,
    EXPENSE,
    Transaction,
    payment_transactions,
    expense_transactions,
    build_transactions,
    load_transactions,
    season_window,
    in_season,
    filter_transactions,
)

from .ledgers import (
    LEDGER_HEADERS,
    CATEGORY_LEDGER_HEADERS,
    LEDGER_TITLES,
    LEDGERS,
    LedgerEntry,
    running_ledger,
    daybook,
    cashbook,
    bankbook,
    category_vendor_ledger,
    ledger_rows,
    category_ledger_rows,
)

from .exports import (
    EXPORT_FORMATS,
    to_csv,
    to_printable_document,
    printable_html_document,
    csv_response,
    html_response,
    export_response,
)


__all__ = [
    # Exceptions
    'LedgerError',
    'InvalidSeasonError',
    'UnsupportedExportFormatError',

    # Transactions
    'INCOME',
    'EXPENSE',
    'Transaction',
    'payment_transactions',
    'expense_transactions',
    'build_transactions',
    'load_transactions',
    'season_window',
    'in_season',
    'filter_transactions',

    # Ledgers
    'LEDGER_HEADERS',
    'CATEGORY_LEDGER_HEADERS',
    'LEDGER_TITLES',
    'LEDGERS',
    'LedgerEntry',
    'running_ledger',
    'daybook',
    'cashbook',
    'bankbook',
    'category_vendor_ledger',
    'ledger_rows',
    'category_ledger_rows',

    # Export
    'EXPORT_FORMATS',
    'to_csv',
    'to_printable_document',
    'printable_html_document',
    'csv_response',
    'html_response',
    'export_response',
]
