"""
Ledger App - Transactions, Ledgers and Exports

Merges booking payments and expenses into one dated transaction list and
derives the daybook, cashbook, bankbook and category/vendor ledgers from
it. Also owns CSV and printable-HTML export used by every report.

This app has no models of its own.
"""
