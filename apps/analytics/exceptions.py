"""
Domain exceptions for analytics app.

These exceptions are raised by VenueAnalytics and translated to HTTP
responses by the views.

Exception Hierarchy:
    AnalyticsServiceError (base)
    └── InvalidSeasonError

Usage:
    from apps.analytics.exceptions import InvalidSeasonError

    try:
        summary = VenueAnalytics.season_summary(season, bookings, expenses)
    except AnalyticsServiceError as e:
        return Response({'error': str(e)}, status=400)
"""


class AnalyticsServiceError(Exception):
    """Base exception for all analytics errors."""

    pass


class InvalidSeasonError(AnalyticsServiceError):
    """
    Raised when a season key has no leading year.

    Seasons are "YYYY-YY" (e.g. '2025-26').
    """

    pass
