from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from django.db import transaction
from django.utils import timezone

from core.statuses import InquiryStatus, QuotationStatus

from ..models import Inquiry

logger = logging.getLogger(__name__)


@dataclass
class ExpiryResult:
    expired_inquiries: int = 0
    expired_quotations: int = 0


def is_inquiry_expired(validity_date: Optional[datetime], now: Optional[datetime] = None) -> bool:
    if validity_date is None:
        return False
    return (now or timezone.now()) > validity_date


def is_quotation_expired(valid_until: datetime, now: Optional[datetime] = None) -> bool:
    return (now or timezone.now()) > valid_until


def expire_stale_items(now: Optional[datetime] = None, dry_run: bool = False) -> ExpiryResult:
    """
    Mark open inquiries past their validity date and submitted quotations
    past ``valid_until`` as expired.
    """
    # Local import: quotes depends on inquiries, not the other way round
    from quotes.models import Quotation

    now = now or timezone.now()
    inquiries = Inquiry.objects.filter(status=InquiryStatus.OPEN, validity_date__lt=now)
    quotations = Quotation.objects.filter(status=QuotationStatus.SUBMITTED, valid_until__lt=now)

    if dry_run:
        return ExpiryResult(expired_inquiries=inquiries.count(), expired_quotations=quotations.count())

    with transaction.atomic():
        expired_inquiries = inquiries.update(status=InquiryStatus.EXPIRED, closed_at=now, updated_at=now)
        expired_quotations = quotations.update(status=QuotationStatus.EXPIRED, updated_at=now)

    logger.info("Expired %s inquiries and %s quotations", expired_inquiries, expired_quotations)
    return ExpiryResult(expired_inquiries=expired_inquiries, expired_quotations=expired_quotations)
