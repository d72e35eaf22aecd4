from decimal import Decimal

from django.conf import settings
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes

from .serializers import (
    LedgerQuerySerializer,
    CategoryLedgerQuerySerializer,
    TransactionSerializer,
    LedgerResponseSerializer,
    CategoryLedgerResponseSerializer,
    ErrorSerializer,
)
from .services import (
    LedgerError,
    INCOME,
    EXPENSE,
    LEDGERS,
    LEDGER_TITLES,
    LEDGER_HEADERS,
    CATEGORY_LEDGER_HEADERS,
    load_transactions,
    filter_transactions,
    category_vendor_ledger,
    ledger_rows,
    category_ledger_rows,
    export_response,
)

LEDGER_PARAMETERS = [
    OpenApiParameter('season', OpenApiTypes.STR, description="Season (YYYY-YY), or 'all'. Defaults to the current season"),
    OpenApiParameter('date_from', OpenApiTypes.DATE, description='Start date (YYYY-MM-DD), inclusive'),
    OpenApiParameter('date_to', OpenApiTypes.DATE, description='End date (YYYY-MM-DD), inclusive'),
    OpenApiParameter('search', OpenApiTypes.STR, description='Booking id or description'),
    OpenApiParameter('export', OpenApiTypes.STR, description="'csv' or 'pdf' to download instead of JSON"),
]


def _filtered_transactions(params):
    """Stored transactions narrowed by every given filter."""
    season = params.get('season') or settings.CURRENT_SEASON
    return filter_transactions(
        load_transactions(),
        season=None if season == 'all' else season,
        date_from=params.get('date_from'),
        date_to=params.get('date_to'),
        search=params.get('search', ''),
    )


def _ledger(request, name):
    query_serializer = LedgerQuerySerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)
    params = query_serializer.validated_data

    try:
        entries = LEDGERS[name](_filtered_transactions(params))
    except LedgerError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    if params.get('export'):
        return export_response(
            params['export'],
            title=LEDGER_TITLES[name],
            headers=LEDGER_HEADERS,
            rows=ledger_rows(entries),
        )

    total_income = sum((e.transaction.amount for e in entries if e.transaction.type == INCOME), Decimal('0.00'))
    total_expense = sum((e.transaction.amount for e in entries if e.transaction.type == EXPENSE), Decimal('0.00'))

    return Response(LedgerResponseSerializer({
        'ledger': name,
        'entries': entries,
        'total_income': total_income,
        'total_expense': total_expense,
        'closing_balance': entries[-1].balance if entries else Decimal('0.00'),
    }).data)


@extend_schema(
    parameters=LEDGER_PARAMETERS,
    responses={200: TransactionSerializer(many=True), 400: ErrorSerializer},
    description="Payments and expenses merged into one dated transaction list.",
    tags=['ledger'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def transactions(request):
    """Filtered transaction list - thin HTTP handler."""
    query_serializer = LedgerQuerySerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)

    try:
        data = _filtered_transactions(query_serializer.validated_data)
    except LedgerError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response(TransactionSerializer(data, many=True).data)


@extend_schema(
    parameters=LEDGER_PARAMETERS,
    responses={200: LedgerResponseSerializer, 400: ErrorSerializer},
    description="Every transaction with a running balance.",
    tags=['ledger'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def daybook(request):
    return _ledger(request, 'daybook')


@extend_schema(
    parameters=LEDGER_PARAMETERS,
    responses={200: LedgerResponseSerializer, 400: ErrorSerializer},
    description="Cash transactions with a running balance.",
    tags=['ledger'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def cashbook(request):
    return _ledger(request, 'cashbook')


@extend_schema(
    parameters=LEDGER_PARAMETERS,
    responses={200: LedgerResponseSerializer, 400: ErrorSerializer},
    description="Card, UPI and bank transactions with a running balance.",
    tags=['ledger'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def bankbook(request):
    return _ledger(request, 'bankbook')


@extend_schema(
    parameters=LEDGER_PARAMETERS + [
        OpenApiParameter('category', OpenApiTypes.STR, description='Expense category name'),
        OpenApiParameter('vendor', OpenApiTypes.STR, description='Vendor name'),
    ],
    responses={200: CategoryLedgerResponseSerializer, 400: ErrorSerializer},
    description="Expense entries for one category or vendor, with their total.",
    tags=['ledger'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def category_vendor(request):
    """Category or vendor ledger - thin HTTP handler."""
    query_serializer = CategoryLedgerQuerySerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)
    params = query_serializer.validated_data

    category = params.get('category')
    vendor = params.get('vendor')
    try:
        ledger = category_vendor_ledger(
            _filtered_transactions(params),
            category=category,
            vendor=vendor,
        )
    except LedgerError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    if params.get('export'):
        title = f"Ledger for category: {category}" if category else f"Ledger for vendor: {vendor}"
        return export_response(
            params['export'],
            title=title,
            headers=CATEGORY_LEDGER_HEADERS,
            rows=category_ledger_rows(ledger['entries']),
        )

    return Response(CategoryLedgerResponseSerializer({
        'category': category,
        'vendor': vendor,
        **ledger,
    }).data)
