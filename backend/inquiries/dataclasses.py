from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Optional

from core.utils import ZERO


@dataclass
class PackageInput:
    gross_weight: Decimal = ZERO
    pieces: int = 1
    chargeable_weight: Optional[Decimal] = None
    length: Optional[Decimal] = None
    width: Optional[Decimal] = None
    height: Optional[Decimal] = None
    volume: Optional[Decimal] = None
    is_dangerous: bool = False
    temperature: Optional[str] = None
    special_handling: Optional[str] = None
    package_number: str = ""


@dataclass
class MeasuredPackage:
    package: PackageInput
    calculated_volume: Decimal
    calculated_chargeable_weight: Decimal


@dataclass
class ShipmentTotals:
    total_gross_weight: Decimal = ZERO
    total_chargeable_weight: Decimal = ZERO
    total_volume: Decimal = ZERO
    total_pieces: int = 0
    package_count: int = 0
    has_dangerous_goods: bool = False
    has_temperature_control: bool = False
    has_special_handling: bool = False


@dataclass
class PackageDataResult:
    packages: List[MeasuredPackage] = field(default_factory=list)
    totals: ShipmentTotals = field(default_factory=ShipmentTotals)
