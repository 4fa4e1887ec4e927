from __future__ import annotations

from decimal import Decimal

from django.conf import settings
from rest_framework import serializers

from .models import Quotation

MAX_AMOUNT = Decimal("1000000")


class QuotationWriteSerializer(serializers.ModelSerializer):
    submit = serializers.BooleanField(default=False, write_only=True)
    currency = serializers.CharField(max_length=3, required=False)

    class Meta:
        model = Quotation
        fields = [
            "currency", "pre_carriage", "main_carriage", "on_carriage", "additional_charges",
            "transit_time", "valid_until", "notes", "terms", "submit",
        ]
        extra_kwargs = {
            "pre_carriage": {"min_value": Decimal("0"), "max_value": MAX_AMOUNT},
            "main_carriage": {"min_value": Decimal("0"), "max_value": MAX_AMOUNT},
            "on_carriage": {"min_value": Decimal("0"), "max_value": MAX_AMOUNT},
            "additional_charges": {"min_value": Decimal("0"), "max_value": MAX_AMOUNT},
            "transit_time": {"min_value": 1},
        }

    def validate_currency(self, value):
        return value.upper()

    def validate(self, attrs):
        attrs.setdefault("currency", getattr(settings, "DEFAULT_QUOTATION_CURRENCY", "EUR"))
        return attrs


class QuotationSerializer(serializers.ModelSerializer):
    class Meta:
        model = Quotation
        fields = [
            "id", "quotation_number", "inquiry", "forwarder_organization",
            "status", "total_price", "currency",
            "pre_carriage", "main_carriage", "on_carriage", "additional_charges",
            "transit_time", "valid_until", "notes", "terms",
            "submitted_at", "responded_at", "created_at", "updated_at",
        ]
        read_only_fields = fields
