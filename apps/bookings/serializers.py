from decimal import Decimal
from rest_framework import serializers
from .models import Booking, Payment, PaymentMethod, Shift
from .services import booking_financials


class PaymentSerializer(serializers.ModelSerializer):
    """Serializer for payments (read-only, payments are append-only)."""

    reverses = serializers.PrimaryKeyRelatedField(read_only=True)

    class Meta:
        model = Payment
        fields = [
            'id',
            'date',
            'amount',
            'method',
            'type',
            'notes',
            'reverses',
            'created_at',
        ]
        read_only_fields = fields


class FinancialsMixin(serializers.Serializer):
    """Adds the booking's computed money position."""

    financials = serializers.SerializerMethodField()

    def get_financials(self, obj):
        return {
            key: str(value)
            for key, value in booking_financials(obj).items()
        }


class BookingSerializer(FinancialsMixin, serializers.ModelSerializer):
    """Full booking with payments and financials."""

    payments = PaymentSerializer(many=True, read_only=True)

    class Meta:
        model = Booking
        fields = [
            'id',
            'booking_id',
            'client_name',
            'contact',
            'event_type',
            'guests',
            'shift',
            'event_date',
            'season',
            'status',
            'tier',
            'rate',
            'discount',
            'expenses',
            'refund_amount',
            'services',
            'payments',
            'financials',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class BookingListSerializer(FinancialsMixin, serializers.ModelSerializer):
    """Lightweight serializer for list views."""

    class Meta:
        model = Booking
        fields = [
            'id',
            'booking_id',
            'client_name',
            'event_date',
            'season',
            'status',
            'tier',
            'rate',
            'discount',
            'expenses',
            'refund_amount',
            'financials',
        ]
        read_only_fields = fields


class CalendarEventSerializer(serializers.ModelSerializer):
    """A booking as shown on the event calendar."""

    class Meta:
        model = Booking
        fields = [
            'id',
            'booking_id',
            'client_name',
            'event_type',
            'shift',
            'event_date',
            'status',
        ]
        read_only_fields = fields


class BookingCreateSerializer(serializers.Serializer):
    """Input serializer for creating a booking."""

    client_name = serializers.CharField(max_length=200)
    contact = serializers.CharField(max_length=100)
    event_date = serializers.DateField()
    event_type = serializers.CharField(max_length=100, required=False, allow_blank=True, default='')
    guests = serializers.IntegerField(min_value=0, required=False, default=0)
    shift = serializers.ChoiceField(choices=Shift.choices, required=False, default=Shift.NIGHT)
    rate = serializers.DecimalField(max_digits=12, decimal_places=2, required=False)
    discount = serializers.DecimalField(max_digits=12, decimal_places=2, required=False)
    services = serializers.DictField(required=False)
    package_id = serializers.UUIDField(required=False)
    season = serializers.RegexField(r'^\d{4}-\d{2}$', required=False)
    advance = serializers.DecimalField(
        max_digits=12,
        decimal_places=2,
        required=False,
        default=Decimal('0.00')
    )
    advance_method = serializers.ChoiceField(
        choices=PaymentMethod.choices,
        required=False,
        default=PaymentMethod.BANK
    )

    def validate(self, attrs):
        if 'rate' not in attrs and 'package_id' not in attrs:
            raise serializers.ValidationError({'rate': 'Give a rate or a package.'})
        return attrs


class BookingUpdateSerializer(serializers.Serializer):
    """Input serializer for editing an upcoming booking. All fields optional."""

    client_name = serializers.CharField(max_length=200, required=False)
    contact = serializers.CharField(max_length=100, required=False)
    event_date = serializers.DateField(required=False)
    event_type = serializers.CharField(max_length=100, required=False, allow_blank=True)
    guests = serializers.IntegerField(min_value=0, required=False)
    shift = serializers.ChoiceField(choices=Shift.choices, required=False)
    rate = serializers.DecimalField(max_digits=12, decimal_places=2, required=False)
    discount = serializers.DecimalField(max_digits=12, decimal_places=2, required=False)
    services = serializers.DictField(required=False)


class PaymentCreateSerializer(serializers.Serializer):
    """Input serializer for recording a payment."""

    amount = serializers.DecimalField(max_digits=12, decimal_places=2)
    method = serializers.ChoiceField(choices=PaymentMethod.choices)
    date = serializers.DateField(required=False)
    notes = serializers.CharField(required=False, allow_blank=True, default='')


class PaymentRevertSerializer(serializers.Serializer):
    """Input serializer for reverting a payment."""

    payment_id = serializers.UUIDField()
    amount = serializers.DecimalField(max_digits=12, decimal_places=2)
    notes = serializers.CharField()
    date = serializers.DateField(required=False)


class CancelBookingSerializer(serializers.Serializer):
    """Input serializer for cancelling a booking."""

    refund_amount = serializers.DecimalField(
        max_digits=12,
        decimal_places=2,
        required=False,
        default=Decimal('0.00')
    )


class SeasonQuerySerializer(serializers.Serializer):
    """Query parameters for season-scoped booking views."""

    season = serializers.RegexField(r'^\d{4}-\d{2}$', required=False)


class CalendarQuerySerializer(SeasonQuerySerializer):
    """
    Query parameters for the event calendar.

    A printable calendar covers either one month or a whole year.
    """

    export = serializers.CharField(required=False)
    month = serializers.DateField(input_formats=['%Y-%m'], required=False)
    year = serializers.IntegerField(min_value=1900, max_value=9999, required=False)

    def validate(self, attrs):
        if attrs.get('export') == 'pdf' and 'month' not in attrs and 'year' not in attrs:
            raise serializers.ValidationError({'month': 'Give a month (YYYY-MM) or a year to print.'})
        return attrs
