"""
Status vocabularies shared by the forwarder and shipper views.

Persisted status columns are plain strings. The casters below are the only
way raw values enter the status engines: they never raise, an unknown value
resolves to the documented default instead.
"""
from __future__ import annotations

from typing import Optional

from django.db import models


class InquiryStatus(models.TextChoices):
    DRAFT = 'draft', 'Draft'
    OPEN = 'open', 'Open'
    AWARDED = 'awarded', 'Awarded'
    CLOSED = 'closed', 'Closed'
    CANCELLED = 'cancelled', 'Cancelled'
    EXPIRED = 'expired', 'Expired'
    # Forwarder-local: never persisted on the inquiry row by the shipper side
    REJECTED = 'rejected', 'Rejected'


class QuotationStatus(models.TextChoices):
    DRAFT = 'draft', 'Draft'
    SUBMITTED = 'submitted', 'Submitted'
    ACCEPTED = 'accepted', 'Accepted'
    REJECTED = 'rejected', 'Rejected'
    WITHDRAWN = 'withdrawn', 'Withdrawn'
    EXPIRED = 'expired', 'Expired'


class ResponseStatus(models.TextChoices):
    PENDING = 'pending', 'Pending'
    REJECTED = 'rejected', 'Rejected'
    QUOTED = 'quoted', 'Quoted'


class ShipperInquiryStatus(models.TextChoices):
    DRAFT = 'draft', 'Draft'
    OPEN = 'open', 'Open'
    QUOTED = 'quoted', 'Quotations received'
    AWARDED = 'awarded', 'Awarded'
    CLOSED = 'closed', 'Closed'
    CANCELLED = 'cancelled', 'Cancelled'
    EXPIRED = 'expired', 'Expired'


class ServiceType(models.TextChoices):
    AIR_FREIGHT = 'air_freight', 'Air freight'
    SEA_FREIGHT = 'sea_freight', 'Sea freight'
    ROAD_FREIGHT = 'road_freight', 'Road freight'
    RAIL_FREIGHT = 'rail_freight', 'Rail freight'


def _normalize(raw) -> str:
    if raw is None:
        return ''
    return str(raw).strip().lower()


def to_inquiry_status(raw) -> InquiryStatus:
    """Cast a persisted inquiry status; anything unrecognized becomes ``draft``."""
    value = _normalize(raw)
    if value in InquiryStatus.values:
        return InquiryStatus(value)
    return InquiryStatus.DRAFT


def to_quotation_status(raw) -> Optional[QuotationStatus]:
    """Cast a persisted quotation status; empty or unknown means "no quotation"."""
    value = _normalize(raw)
    if value in QuotationStatus.values:
        return QuotationStatus(value)
    return None


def to_response_status(raw) -> Optional[ResponseStatus]:
    value = _normalize(raw)
    if value in ResponseStatus.values:
        return ResponseStatus(value)
    return None


def to_shipper_inquiry_status(raw) -> ShipperInquiryStatus:
    value = _normalize(raw)
    if value in ShipperInquiryStatus.values:
        return ShipperInquiryStatus(value)
    return ShipperInquiryStatus.DRAFT


def to_service_type(raw) -> Optional[ServiceType]:
    value = _normalize(raw)
    if value in ServiceType.values:
        return ServiceType(value)
    return None
