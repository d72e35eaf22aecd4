"""
Domain-specific exceptions for ledger app.
"""


class LedgerError(Exception):
    """Base exception for all ledger errors."""
    pass


class InvalidSeasonError(LedgerError):
    """Raised when a season key is not of the form YYYY-YY."""
    pass


class UnsupportedExportFormatError(LedgerError):
    """Raised when an export format other than csv or pdf is requested."""
    pass
