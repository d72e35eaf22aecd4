from rest_framework import serializers
from apps.bookings.models import PaymentMethod
from .models import Expense, ExpenseCategory, Vendor


class ExpenseSerializer(serializers.ModelSerializer):
    """Output serializer for expenses."""

    reverses = serializers.PrimaryKeyRelatedField(read_only=True)

    class Meta:
        model = Expense
        fields = [
            'id',
            'booking_id',
            'expense_date',
            'category',
            'vendor',
            'amount',
            'payment_method',
            'type',
            'notes',
            'manpower_count',
            'rate_per_person',
            'reverses',
            'created_at',
        ]
        read_only_fields = fields


class ExpenseCreateSerializer(serializers.Serializer):
    """Input serializer for recording an expense."""

    category = serializers.CharField(max_length=100)
    vendor = serializers.CharField(max_length=200)
    expense_date = serializers.DateField()
    payment_method = serializers.ChoiceField(choices=PaymentMethod.choices)
    amount = serializers.DecimalField(max_digits=12, decimal_places=2, required=False, allow_null=True)
    booking_id = serializers.CharField(max_length=32, required=False, allow_blank=True, default='')
    notes = serializers.CharField(required=False, allow_blank=True, default='')
    manpower_count = serializers.IntegerField(required=False, allow_null=True, min_value=1)
    rate_per_person = serializers.DecimalField(
        max_digits=12,
        decimal_places=2,
        required=False,
        allow_null=True
    )


class ExpenseRevertSerializer(serializers.Serializer):
    """Input serializer for reverting an expense."""

    amount = serializers.DecimalField(max_digits=12, decimal_places=2)
    notes = serializers.CharField(required=False, allow_blank=True, default='')
    expense_date = serializers.DateField(required=False, allow_null=True)


class ExpenseCategorySerializer(serializers.ModelSerializer):
    """Serializer for expense categories."""

    vendor_count = serializers.IntegerField(source='vendors.count', read_only=True)

    class Meta:
        model = ExpenseCategory
        fields = ['id', 'name', 'requires_manpower', 'vendor_count', 'created_at', 'updated_at']
        read_only_fields = ['created_at', 'updated_at']


class ExpenseCategoryInputSerializer(serializers.Serializer):
    """Input serializer for creating and editing categories."""

    id = serializers.SlugField(max_length=64, required=False)
    name = serializers.CharField(max_length=100)
    requires_manpower = serializers.BooleanField(required=False, default=False)


class VendorSerializer(serializers.ModelSerializer):
    """Serializer for vendors."""

    category_name = serializers.CharField(source='category.name', read_only=True)

    class Meta:
        model = Vendor
        fields = ['id', 'name', 'category', 'category_name', 'created_at', 'updated_at']
        read_only_fields = ['id', 'created_at', 'updated_at']


class VendorInputSerializer(serializers.Serializer):
    """Input serializer for creating and editing vendors."""

    name = serializers.CharField(max_length=200)
    category = serializers.CharField(max_length=64)
