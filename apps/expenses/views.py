from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from django.utils.dateparse import parse_date
from drf_spectacular.utils import extend_schema, OpenApiParameter

from apps.ledger.services import export_response, UnsupportedExportFormatError

from .models import Expense, ExpenseCategory, Vendor
from .serializers import (
    ExpenseSerializer,
    ExpenseCreateSerializer,
    ExpenseRevertSerializer,
    ExpenseCategorySerializer,
    ExpenseCategoryInputSerializer,
    VendorSerializer,
    VendorInputSerializer,
)
from .services import (
    search_expenses,
    add_expense,
    revert_expense,
    create_category,
    update_category,
    delete_category,
    create_vendor,
    update_vendor,
    delete_vendor,
    expenses_report_rows,
    expenses_report_title,
    EXPENSES_REPORT_HEADERS,
    # Exceptions
    ExpenseNotFoundError,
    InvalidExpenseError,
    ExpenseReversalError,
    CategoryNotFoundError,
    DuplicateCategoryError,
    VendorNotFoundError,
    DuplicateVendorError,
)


class ExpensePagination(PageNumberPagination):
    """Custom pagination for expenses."""
    page_size = 50
    page_size_query_param = 'page_size'
    max_page_size = 500


class ExpenseViewSet(viewsets.ModelViewSet):
    """
    ViewSet for the expense ledger.

    Expenses are append-only: there is no update or delete, a correction
    is recorded with the revert action.

    list: Filtered expenses, newest first
    create: Record an expense
    retrieve: Get an expense
    revert: Record a reversal of a paid expense
    """

    queryset = Expense.objects.all()
    serializer_class = ExpenseSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = ExpensePagination
    http_method_names = ['get', 'post', 'head', 'options']

    def get_queryset(self):
        """
        Filter expenses based on query parameters.

        Filters:
        - search, booking_id, category, vendor, type
        - general: 'true' for expenses with no booking
        - date_from / date_to: YYYY-MM-DD, inclusive
        """
        params = self.request.query_params
        return search_expenses(
            search=params.get('search'),
            booking_id=params.get('booking_id'),
            category=params.get('category'),
            vendor=params.get('vendor'),
            expense_type=params.get('type'),
            general_only=params.get('general') == 'true',
            date_from=parse_date(params.get('date_from') or ''),
            date_to=parse_date(params.get('date_to') or ''),
        )

    def create(self, request, *args, **kwargs):
        """Record an expense, auto-creating the vendor if it is new."""
        serializer = ExpenseCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            expense, vendor_created = add_expense(**serializer.validated_data)
        except InvalidExpenseError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        data = ExpenseSerializer(expense).data
        data['vendor_created'] = vendor_created
        return Response(data, status=status.HTTP_201_CREATED)

    @action(detail=True, methods=['post'])
    def revert(self, request, pk=None):
        """Record a reversal of this expense."""
        serializer = ExpenseRevertSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            reversal = revert_expense(expense_id=pk, **serializer.validated_data)
        except ExpenseNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except ExpenseReversalError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(ExpenseSerializer(reversal).data, status=status.HTTP_201_CREATED)

    @extend_schema(
        parameters=[
            OpenApiParameter('export', str, description='csv (default) or pdf'),
            OpenApiParameter('booking_id', str),
            OpenApiParameter('general', str, description="'true' for expenses with no booking"),
            OpenApiParameter('search', str),
            OpenApiParameter('date_from', str),
            OpenApiParameter('date_to', str),
        ]
    )
    @action(detail=False, methods=['get'])
    def report(self, request):
        """Export the filtered expenses, newest first, as CSV or a printable document."""
        params = request.query_params
        title = expenses_report_title(
            booking_id=params.get('booking_id'),
            general_only=params.get('general') == 'true',
        )

        try:
            return export_response(
                params.get('export', 'csv'),
                title=title,
                headers=EXPENSES_REPORT_HEADERS,
                rows=expenses_report_rows(self.get_queryset()),
            )
        except UnsupportedExportFormatError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)


class ExpenseCategoryViewSet(viewsets.ModelViewSet):
    """
    ViewSet for expense categories.

    Deleting a category deletes its vendors as well.
    """

    queryset = ExpenseCategory.objects.prefetch_related('vendors')
    serializer_class = ExpenseCategorySerializer
    permission_classes = [IsAuthenticated]

    def create(self, request, *args, **kwargs):
        serializer = ExpenseCategoryInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        try:
            category = create_category(
                name=data['name'],
                requires_manpower=data['requires_manpower'],
                category_id=data.get('id'),
            )
        except DuplicateCategoryError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(ExpenseCategorySerializer(category).data, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        serializer = ExpenseCategoryInputSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        try:
            category = update_category(
                category_id=kwargs['pk'],
                name=serializer.validated_data.get('name'),
                requires_manpower=serializer.validated_data.get('requires_manpower'),
            )
        except CategoryNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except DuplicateCategoryError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(ExpenseCategorySerializer(category).data)

    def destroy(self, request, *args, **kwargs):
        """Delete a category and its vendors."""
        try:
            delete_category(category_id=kwargs['pk'])
        except CategoryNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        return Response(status=status.HTTP_204_NO_CONTENT)


class VendorViewSet(viewsets.ModelViewSet):
    """ViewSet for vendors."""

    queryset = Vendor.objects.select_related('category')
    serializer_class = VendorSerializer
    permission_classes = [IsAuthenticated]

    def get_queryset(self):
        """Filter vendors by category if specified."""
        queryset = super().get_queryset()

        category = self.request.query_params.get('category')
        if category:
            queryset = queryset.filter(category_id=category)

        return queryset

    def create(self, request, *args, **kwargs):
        serializer = VendorInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            vendor = create_vendor(
                name=serializer.validated_data['name'],
                category_id=serializer.validated_data['category'],
            )
        except (DuplicateVendorError, CategoryNotFoundError) as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(VendorSerializer(vendor).data, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        serializer = VendorInputSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        try:
            vendor = update_vendor(
                vendor_id=kwargs['pk'],
                name=serializer.validated_data.get('name'),
                category_id=serializer.validated_data.get('category'),
            )
        except VendorNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except (DuplicateVendorError, CategoryNotFoundError) as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(VendorSerializer(vendor).data)

    def destroy(self, request, *args, **kwargs):
        try:
            delete_vendor(vendor_id=kwargs['pk'])
        except VendorNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        return Response(status=status.HTTP_204_NO_CONTENT)
