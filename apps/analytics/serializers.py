"""
Serializers for analytics app.

Input Serializers:
    SeasonQuerySerializer - Validates the season parameter
    SummaryQuerySerializer - Validates the export parameter

Response Serializers:
    SeasonSummarySerializer - Season dashboard figures
    GlobalSummarySerializer - Venue-wide analytics
    SeasonsResponseSerializer - Season picker values
"""

from rest_framework import serializers

from apps.bookings.serializers import BookingListSerializer
from apps.ledger.services import EXPORT_FORMATS


# =============================================================================
# Input Serializers (Query Parameter Validation)
# =============================================================================

class SeasonQuerySerializer(serializers.Serializer):
    """
    Validate the season query parameter.

    Query Parameters:
        season (str): Season in YYYY-YY format; defaults to the current season
    """

    season = serializers.RegexField(
        regex=r'^\d{4}-\d{2}$',
        required=False,
        help_text='Season in YYYY-YY format'
    )


class SummaryQuerySerializer(serializers.Serializer):
    export = serializers.ChoiceField(choices=EXPORT_FORMATS, required=False)


# =============================================================================
# Response Serializers
# =============================================================================

class SeasonSummarySerializer(serializers.Serializer):
    season = serializers.CharField()
    total_bookings = serializers.IntegerField()
    upcoming_count = serializers.IntegerField()
    revenue = serializers.DecimalField(max_digits=14, decimal_places=2)
    total_paid = serializers.DecimalField(max_digits=14, decimal_places=2)
    pending_balance = serializers.DecimalField(max_digits=14, decimal_places=2)
    season_expenses = serializers.DecimalField(max_digits=14, decimal_places=2)
    net_profit = serializers.DecimalField(max_digits=14, decimal_places=2)
    recent_bookings = BookingListSerializer(many=True)
    upcoming_soon = BookingListSerializer(many=True)


class GlobalSummarySerializer(serializers.Serializer):
    total_bookings = serializers.IntegerField()
    revenue = serializers.DecimalField(max_digits=14, decimal_places=2)
    booking_expenses = serializers.DecimalField(max_digits=14, decimal_places=2)
    general_expenses = serializers.DecimalField(max_digits=14, decimal_places=2)
    profit = serializers.DecimalField(max_digits=14, decimal_places=2)
    average_booking_value = serializers.DecimalField(max_digits=14, decimal_places=2)
    profit_margin = serializers.DecimalField(max_digits=10, decimal_places=2)
    bookings_by_tier = serializers.DictField(child=serializers.IntegerField())


class SeasonsResponseSerializer(serializers.Serializer):
    current_season = serializers.CharField()
    seasons = serializers.ListField(child=serializers.CharField())


class ErrorSerializer(serializers.Serializer):
    error = serializers.CharField()
