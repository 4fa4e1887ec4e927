"""
Freight measurement: volume, chargeable weight and shipment totals.

Dimensions are centimetres, weights kilograms, volumes cubic metres. All
arithmetic is Decimal; missing or unparsable numbers count as zero so a
package row with holes in it still measures cleanly.
"""
from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any, Iterable, Mapping, Optional

from core.statuses import ServiceType
from core.utils import ZERO, d

from ..dataclasses import MeasuredPackage, PackageDataResult, PackageInput

logger = logging.getLogger(__name__)

CM3_PER_M3 = Decimal(1_000_000)

# kg per m³ used to turn volume into volumetric weight
AIR_VOLUMETRIC_FACTOR = Decimal(6000)
SEA_VOLUMETRIC_FACTOR = Decimal(1000)

VOLUMETRIC_FACTORS = {
    ServiceType.AIR_FREIGHT.value: AIR_VOLUMETRIC_FACTOR,
    ServiceType.SEA_FREIGHT.value: SEA_VOLUMETRIC_FACTOR,
}

_PACKAGE_FIELDS = (
    'gross_weight', 'pieces', 'chargeable_weight', 'length', 'width', 'height', 'volume',
    'is_dangerous', 'temperature', 'special_handling', 'package_number',
)


def calculate_volume(length, width, height) -> Decimal:
    """Volume in m³ from centimetre dimensions."""
    return (d(length) * d(width) * d(height)) / CM3_PER_M3


def calculate_chargeable_weight(
    service_type: str,
    gross_weight,
    volume,
    volumetric_factors: Optional[Mapping[str, Decimal]] = None,
) -> Decimal:
    """
    Billable weight for one package.

    Air and sea freight bill the greater of gross and volumetric weight;
    road, rail and anything unrecognized bill the gross weight.

    Args:
        service_type: one of the ServiceType values
        gross_weight: actual weight in kg
        volume: volume in m³
        volumetric_factors: named override of the kg-per-m³ factors, keyed by service type

    Returns:
        Decimal: chargeable weight in kg, never below gross weight
    """
    gross = d(gross_weight)
    factors = VOLUMETRIC_FACTORS if volumetric_factors is None else volumetric_factors
    factor = factors.get(str(service_type))
    if factor is None:
        return gross
    volumetric = d(volume) * d(factor)
    return max(gross, volumetric)


def _as_package_input(raw: Any) -> PackageInput:
    if isinstance(raw, PackageInput):
        return raw
    if isinstance(raw, Mapping):
        values = {name: raw.get(name) for name in _PACKAGE_FIELDS}
    else:
        # ORM rows and other attribute-style records
        values = {name: getattr(raw, name, None) for name in _PACKAGE_FIELDS}
    return PackageInput(
        gross_weight=d(values['gross_weight']),
        pieces=int(d(values['pieces'])),
        chargeable_weight=values['chargeable_weight'],
        length=values['length'],
        width=values['width'],
        height=values['height'],
        volume=values['volume'],
        is_dangerous=bool(values['is_dangerous']),
        temperature=values['temperature'] or None,
        special_handling=values['special_handling'] or None,
        package_number=str(values['package_number'] or ''),
    )


def _has_dimensions(package: PackageInput) -> bool:
    return all(
        value is not None and value != ''
        for value in (package.length, package.width, package.height)
    )


def package_volume(package: PackageInput) -> Decimal:
    """Stated volume when given, otherwise derived from complete dimensions, otherwise zero."""
    stated = d(package.volume)
    if stated:
        return stated
    if _has_dimensions(package):
        return calculate_volume(package.length, package.width, package.height)
    return ZERO


def process_package_data(packages: Iterable[Any], service_type: str) -> PackageDataResult:
    """
    Measure every package and aggregate shipment totals.

    Packages may be PackageInput instances, mappings keyed by field name or
    InquiryPackage rows. A stated chargeable weight wins over the computed one
    but is never allowed below the gross weight.
    """
    result = PackageDataResult()
    totals = result.totals

    for raw in packages:
        package = _as_package_input(raw)
        volume = package_volume(package)
        stated_chargeable = d(package.chargeable_weight)
        if stated_chargeable:
            chargeable = max(stated_chargeable, d(package.gross_weight))
        else:
            chargeable = calculate_chargeable_weight(service_type, package.gross_weight, volume)

        result.packages.append(MeasuredPackage(
            package=package,
            calculated_volume=volume,
            calculated_chargeable_weight=chargeable,
        ))

        totals.package_count += 1
        totals.total_gross_weight += d(package.gross_weight)
        totals.total_chargeable_weight += chargeable
        totals.total_volume += volume
        totals.total_pieces += int(d(package.pieces))
        totals.has_dangerous_goods = totals.has_dangerous_goods or bool(package.is_dangerous)
        totals.has_temperature_control = totals.has_temperature_control or bool(package.temperature)
        totals.has_special_handling = totals.has_special_handling or bool(package.special_handling)

    logger.debug(
        "Measured %s packages (%s): gross=%s chargeable=%s volume=%s",
        totals.package_count, service_type,
        totals.total_gross_weight, totals.total_chargeable_weight, totals.total_volume,
    )
    return result


def dimensions_summary(packages: Iterable[Any]) -> str:
    parts = []
    for raw in packages:
        package = _as_package_input(raw)
        dims = [d(package.length), d(package.width), d(package.height)]
        parts.append("x".join(format(v.normalize(), 'f') for v in dims) + "cm")
    return ", ".join(parts)
