from django.conf import settings
from django.template.loader import render_to_string
from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema, OpenApiParameter

from apps.catalog.services import PackageNotFoundError, InvalidServiceSelectionError
from apps.ledger.services import (
    export_response,
    html_response,
    printable_html_document,
    UnsupportedExportFormatError,
)

from .models import Booking
from .serializers import (
    BookingSerializer,
    BookingListSerializer,
    BookingCreateSerializer,
    BookingUpdateSerializer,
    PaymentSerializer,
    PaymentCreateSerializer,
    PaymentRevertSerializer,
    CancelBookingSerializer,
    CalendarEventSerializer,
    SeasonQuerySerializer,
    CalendarQuerySerializer,
)
from .services import (
    search_bookings,
    get_booking,
    create_booking,
    update_booking,
    complete_booking,
    cancel_booking,
    next_booking_id,
    add_payment,
    revert_payment,
    booking_financials,
    bookings_report_rows,
    proforma_context,
    BOOKINGS_REPORT_HEADERS,
    calendar_bookings,
    bookings_by_date,
    upcoming_events,
    calendar_events_rows,
    month_calendar_context,
    annual_calendar_context,
    CALENDAR_EVENTS_HEADERS,
    # Exceptions
    BookingNotFoundError,
    InvalidBookingError,
    InvalidBookingStateError,
    PaymentNotFoundError,
    InvalidPaymentError,
    PaymentReversalError,
)


class BookingPagination(PageNumberPagination):
    """Custom pagination for bookings."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


def _not_found(error):
    return Response({'error': str(error)}, status=status.HTTP_404_NOT_FOUND)


def _bad_request(error):
    return Response({'error': str(error)}, status=status.HTTP_400_BAD_REQUEST)


class BookingViewSet(viewsets.ModelViewSet):
    """
    ViewSet for bookings.

    Bookings are never deleted. Only upcoming bookings can be edited.

    list: Filtered bookings (search, status, tier, season)
    create: Create a booking, optionally from a package and with an advance
    retrieve: Booking with payments and financials
    update / partial_update: Edit an upcoming booking
    """

    queryset = Booking.objects.prefetch_related('payments')
    serializer_class = BookingSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = BookingPagination
    http_method_names = ['get', 'post', 'put', 'patch', 'head', 'options']

    def get_queryset(self):
        """
        Filter bookings based on query parameters.

        Filters:
        - search: Client name or booking id
        - status: Upcoming, Completed, Cancelled
        - tier: Silver, Gold, Diamond
        - season: e.g. 2025-26
        """
        params = self.request.query_params
        return search_bookings(
            search=params.get('search'),
            status=params.get('status'),
            tier=params.get('tier'),
            season=params.get('season'),
        )

    def get_serializer_class(self):
        """Use different serializers for different actions."""
        if self.action == 'list':
            return BookingListSerializer
        return BookingSerializer

    def create(self, request, *args, **kwargs):
        """Create a new booking."""
        serializer = BookingCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            booking = create_booking(**serializer.validated_data)
        except InvalidServiceSelectionError as e:
            return Response(
                {'error': str(e), 'services': e.errors},
                status=status.HTTP_400_BAD_REQUEST
            )
        except (InvalidBookingError, PackageNotFoundError) as e:
            return _bad_request(e)

        output_serializer = BookingSerializer(get_booking(booking_pk=booking.id))
        return Response(output_serializer.data, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        """Edit an upcoming booking. PUT and PATCH both accept partial data."""
        serializer = BookingUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            booking = update_booking(booking_pk=kwargs['pk'], **serializer.validated_data)
        except BookingNotFoundError as e:
            return _not_found(e)
        except InvalidServiceSelectionError as e:
            return Response(
                {'error': str(e), 'services': e.errors},
                status=status.HTTP_400_BAD_REQUEST
            )
        except (InvalidBookingError, InvalidBookingStateError) as e:
            return _bad_request(e)

        return Response(BookingSerializer(booking).data)

    @action(detail=True, methods=['get', 'post'])
    def payments(self, request, pk=None):
        """List the booking's payments, or record a new one."""
        if request.method == 'GET':
            booking = self.get_object()
            serializer = PaymentSerializer(booking.payments.all(), many=True)
            return Response(serializer.data)

        serializer = PaymentCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        try:
            payment = add_payment(
                booking_pk=pk,
                amount=data['amount'],
                method=data['method'],
                payment_date=data.get('date'),
                notes=data['notes'],
            )
        except BookingNotFoundError as e:
            return _not_found(e)
        except (InvalidBookingStateError, InvalidPaymentError) as e:
            return _bad_request(e)

        return Response(PaymentSerializer(payment).data, status=status.HTTP_201_CREATED)

    @action(detail=True, methods=['post'])
    def revert_payment(self, request, pk=None):
        """Record a reversal of one of the booking's received payments."""
        serializer = PaymentRevertSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        try:
            reversal = revert_payment(
                booking_pk=pk,
                payment_id=data['payment_id'],
                amount=data['amount'],
                notes=data['notes'],
                payment_date=data.get('date'),
            )
        except (BookingNotFoundError, PaymentNotFoundError) as e:
            return _not_found(e)
        except PaymentReversalError as e:
            return _bad_request(e)

        return Response(PaymentSerializer(reversal).data, status=status.HTTP_201_CREATED)

    @action(detail=True, methods=['post'])
    def cancel(self, request, pk=None):
        """Cancel an upcoming booking, optionally refunding part of what was paid."""
        serializer = CancelBookingSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            booking = cancel_booking(
                booking_pk=pk,
                refund_amount=serializer.validated_data['refund_amount']
            )
        except BookingNotFoundError as e:
            return _not_found(e)
        except (InvalidBookingError, InvalidBookingStateError) as e:
            return _bad_request(e)

        return Response(BookingSerializer(booking).data)

    @action(detail=True, methods=['post'])
    def complete(self, request, pk=None):
        """Mark an upcoming booking as completed."""
        try:
            booking = complete_booking(booking_pk=pk)
        except BookingNotFoundError as e:
            return _not_found(e)
        except InvalidBookingStateError as e:
            return _bad_request(e)

        return Response(BookingSerializer(booking).data)

    @action(detail=True, methods=['get'])
    def summary(self, request, pk=None):
        """Paid, rate after discount, balance due and profit."""
        booking = self.get_object()
        return Response({
            'booking_id': booking.booking_id,
            'status': booking.status,
            **booking_financials(booking),
        })

    @action(detail=True, methods=['get'])
    def proforma(self, request, pk=None):
        """Printable proforma for the booking."""
        booking = self.get_object()
        context = proforma_context(booking)
        html = render_to_string('bookings/proforma.html', context)
        return html_response(printable_html_document(html, context['title']))

    @extend_schema(
        parameters=[OpenApiParameter('season', str, description='Season, e.g. 2025-26')]
    )
    @action(detail=False, methods=['get'], url_path='next-id')
    def next_id(self, request):
        """Booking id the next booking of a season will get."""
        serializer = SeasonQuerySerializer(data=request.query_params)
        serializer.is_valid(raise_exception=True)
        return Response({'booking_id': next_booking_id(serializer.validated_data.get('season'))})

    @extend_schema(
        parameters=[
            OpenApiParameter('season', str, description='Season, e.g. 2025-26'),
            OpenApiParameter('export', str, description='csv, or pdf for a printable calendar'),
            OpenApiParameter('month', str, description='Month to print, YYYY-MM'),
            OpenApiParameter('year', int, description='Year to print, January to December'),
        ]
    )
    @action(detail=False, methods=['get'])
    def calendar(self, request):
        """
        The season's events by date, Day shift first. Cancelled bookings
        are left out.

        export=csv downloads the event list. export=pdf returns a printable
        calendar of the given month, or of the given year.
        """
        serializer = CalendarQuerySerializer(data=request.query_params)
        serializer.is_valid(raise_exception=True)
        params = serializer.validated_data
        season = params.get('season') or settings.CURRENT_SEASON
        bookings = calendar_bookings(season=season)
        export_format = params.get('export')

        if export_format == 'pdf':
            if 'month' in params:
                context = month_calendar_context(
                    bookings, year=params['month'].year, month=params['month'].month
                )
            else:
                context = annual_calendar_context(bookings, year=params['year'])
            html = render_to_string('bookings/calendar.html', context)
            return html_response(printable_html_document(html, context['title']))

        if export_format:
            try:
                return export_response(
                    export_format,
                    title=f"Calendar_Events_{season}",
                    headers=CALENDAR_EVENTS_HEADERS,
                    rows=calendar_events_rows(bookings),
                )
            except UnsupportedExportFormatError as e:
                return _bad_request(e)

        return Response({
            'season': season,
            'days': [
                {
                    'date': event_date.isoformat(),
                    'bookings': CalendarEventSerializer(day_bookings, many=True).data,
                }
                for event_date, day_bookings in bookings_by_date(bookings).items()
            ],
        })

    @action(detail=False, methods=['get'])
    def upcoming(self, request):
        """The next upcoming events from today, earliest first."""
        return Response(CalendarEventSerializer(upcoming_events(), many=True).data)

    @extend_schema(
        parameters=[
            OpenApiParameter('export', str, description='csv (default) or pdf'),
            OpenApiParameter('search', str),
            OpenApiParameter('status', str),
            OpenApiParameter('tier', str),
            OpenApiParameter('season', str),
        ]
    )
    @action(detail=False, methods=['get'])
    def report(self, request):
        """Export the filtered bookings as CSV or a printable document."""
        bookings = self.filter_queryset(self.get_queryset())

        try:
            return export_response(
                request.query_params.get('export', 'csv'),
                title='Bookings Report',
                headers=BOOKINGS_REPORT_HEADERS,
                rows=bookings_report_rows(bookings),
            )
        except UnsupportedExportFormatError as e:
            return _bad_request(e)
