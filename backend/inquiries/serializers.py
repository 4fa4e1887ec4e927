from __future__ import annotations

from rest_framework import serializers

from .services.freight_measurement import dimensions_summary, process_package_data


# Largest InquiryPackage dimensions give ~1e12 m³ and ~6e15 kg per package
MEASURE_DIGITS = 30


# ---------- MEASUREMENT (read-only projection of process_package_data) ----------
class MeasuredPackageSerializer(serializers.Serializer):
    package_number = serializers.CharField(source='package.package_number')
    pieces = serializers.IntegerField(source='package.pieces')
    gross_weight = serializers.DecimalField(source='package.gross_weight', max_digits=14, decimal_places=3)
    is_dangerous = serializers.BooleanField(source='package.is_dangerous')
    temperature = serializers.CharField(source='package.temperature', allow_null=True)
    special_handling = serializers.CharField(source='package.special_handling', allow_null=True)
    calculated_volume = serializers.DecimalField(max_digits=MEASURE_DIGITS, decimal_places=6)
    calculated_chargeable_weight = serializers.DecimalField(max_digits=MEASURE_DIGITS, decimal_places=3)


class ShipmentTotalsSerializer(serializers.Serializer):
    package_count = serializers.IntegerField()
    total_pieces = serializers.IntegerField()
    total_gross_weight = serializers.DecimalField(max_digits=MEASURE_DIGITS, decimal_places=3)
    total_chargeable_weight = serializers.DecimalField(max_digits=MEASURE_DIGITS, decimal_places=3)
    total_volume = serializers.DecimalField(max_digits=MEASURE_DIGITS, decimal_places=6)
    has_dangerous_goods = serializers.BooleanField()
    has_temperature_control = serializers.BooleanField()
    has_special_handling = serializers.BooleanField()


def measurement_payload(inquiry) -> dict:
    packages = list(inquiry.packages.all())
    result = process_package_data(packages, inquiry.service_type)
    return {
        "packages": MeasuredPackageSerializer(result.packages, many=True).data,
        "totals": ShipmentTotalsSerializer(result.totals).data,
        "dimensions_summary": dimensions_summary(packages),
    }


class InquirySummarySerializer(serializers.Serializer):
    id = serializers.IntegerField()
    reference_number = serializers.CharField()
    title = serializers.CharField()
    service_type = serializers.CharField()
    status = serializers.CharField()
    validity_date = serializers.DateTimeField(allow_null=True)
    sent_at = serializers.DateTimeField(allow_null=True)
