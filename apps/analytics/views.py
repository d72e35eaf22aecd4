"""
Analytics API views.

Read-only endpoints over VenueAnalytics:
    season/   - dashboard figures for one season
    summary/  - venue-wide analytics, exportable
    seasons/  - season picker values
"""

from django.conf import settings
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes

from apps.bookings.models import Booking
from apps.expenses.models import Expense
from apps.ledger.services import export_response
from .analytics import VenueAnalytics
from .exceptions import AnalyticsServiceError
from .serializers import (
    SeasonQuerySerializer,
    SummaryQuerySerializer,
    SeasonSummarySerializer,
    GlobalSummarySerializer,
    SeasonsResponseSerializer,
    ErrorSerializer,
)

SUMMARY_HEADERS = ['Metric', 'Value']


def _bookings():
    return Booking.objects.prefetch_related('payments')


@extend_schema(
    parameters=[
        OpenApiParameter('season', OpenApiTypes.STR, description='Season (YYYY-YY). Defaults to the current season'),
    ],
    responses={200: SeasonSummarySerializer, 400: ErrorSerializer},
    description="Dashboard figures for one season: revenue, collections, expenses, profit and upcoming events.",
    tags=['analytics'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def season(request):
    query_serializer = SeasonQuerySerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)
    season_key = query_serializer.validated_data.get('season') or settings.CURRENT_SEASON

    try:
        data = VenueAnalytics.season_summary(season_key, _bookings(), Expense.objects.all())
    except AnalyticsServiceError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response(SeasonSummarySerializer(data).data)


@extend_schema(
    parameters=[
        OpenApiParameter('export', OpenApiTypes.STR, description="'csv' or 'pdf' to download instead of JSON"),
    ],
    responses={200: GlobalSummarySerializer, 400: ErrorSerializer},
    description="Venue-wide revenue, expenses, profit margin and bookings by tier.",
    tags=['analytics'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def summary(request):
    query_serializer = SummaryQuerySerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)
    export_format = query_serializer.validated_data.get('export')

    data = VenueAnalytics.global_summary(Booking.objects.all(), Expense.objects.all())

    if export_format:
        return export_response(
            export_format,
            title='Analytics Summary',
            headers=SUMMARY_HEADERS,
            rows=VenueAnalytics.summary_rows(data),
        )

    return Response(GlobalSummarySerializer(data).data)


@extend_schema(
    responses={200: SeasonsResponseSerializer},
    description="Seasons that have bookings plus the configured default seasons.",
    tags=['analytics'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def seasons(request):
    return Response({
        'current_season': settings.CURRENT_SEASON,
        'seasons': VenueAnalytics.available_seasons(Booking.objects.only('season')),
    })
