"""
Serializers for ledger endpoints.

Input serializers validate query parameters; output serializers describe
the plain transaction and ledger-entry objects built by the services.
"""

from rest_framework import serializers

from .services import EXPORT_FORMATS


class LedgerQuerySerializer(serializers.Serializer):
    """
    Query parameters shared by every ledger.

    season defaults to the current season; pass 'all' to drop the season
    window.
    """

    season = serializers.RegexField(r'^(\d{4}-\d{2}|all)$', required=False)
    date_from = serializers.DateField(required=False)
    date_to = serializers.DateField(required=False)
    search = serializers.CharField(required=False, allow_blank=True, default='')
    export = serializers.ChoiceField(choices=EXPORT_FORMATS, required=False)

    def validate(self, attrs):
        date_from = attrs.get('date_from')
        date_to = attrs.get('date_to')
        if date_from and date_to and date_from > date_to:
            raise serializers.ValidationError("date_from must be before or equal to date_to")
        return attrs


class CategoryLedgerQuerySerializer(LedgerQuerySerializer):
    """Ledger query plus exactly one of category or vendor."""

    category = serializers.CharField(required=False)
    vendor = serializers.CharField(required=False)

    def validate(self, attrs):
        attrs = super().validate(attrs)
        if bool(attrs.get('category')) == bool(attrs.get('vendor')):
            raise serializers.ValidationError("Give either a category or a vendor")
        return attrs


class TransactionSerializer(serializers.Serializer):
    date = serializers.DateField()
    description = serializers.CharField()
    type = serializers.CharField()
    amount = serializers.DecimalField(max_digits=14, decimal_places=2)
    payment_method = serializers.CharField()
    booking_id = serializers.CharField()
    vendor = serializers.CharField()
    category = serializers.CharField()
    source = serializers.CharField()


class LedgerEntrySerializer(serializers.Serializer):
    transaction = TransactionSerializer()
    balance = serializers.DecimalField(max_digits=14, decimal_places=2)


class LedgerResponseSerializer(serializers.Serializer):
    ledger = serializers.CharField()
    entries = LedgerEntrySerializer(many=True)
    total_income = serializers.DecimalField(max_digits=14, decimal_places=2)
    total_expense = serializers.DecimalField(max_digits=14, decimal_places=2)
    closing_balance = serializers.DecimalField(max_digits=14, decimal_places=2)


class CategoryLedgerResponseSerializer(serializers.Serializer):
    category = serializers.CharField(allow_null=True)
    vendor = serializers.CharField(allow_null=True)
    entries = TransactionSerializer(many=True)
    total = serializers.DecimalField(max_digits=14, decimal_places=2)


class ErrorSerializer(serializers.Serializer):
    error = serializers.CharField()
