from __future__ import annotations

import logging

from django.db.models import Count, Q
from django.utils import timezone

from core.exceptions import TransitionNotAllowed
from core.statuses import InquiryStatus, QuotationStatus

from ..models import Inquiry
from .shipper_status import ShipperStatusContext, can_shipper_cancel_inquiry, summarize_responses

logger = logging.getLogger(__name__)


def shipper_context_for(inquiry: Inquiry) -> ShipperStatusContext:
    """Aggregate what every forwarder did with the inquiry into a shipper context."""
    # Drafts are private to the forwarder and invisible to the shipper
    counts = inquiry.quotations.exclude(status=QuotationStatus.DRAFT).aggregate(
        total=Count('id'),
        accepted=Count('id', filter=Q(status=QuotationStatus.ACCEPTED)),
        rejected=Count('id', filter=Q(status=QuotationStatus.REJECTED)),
    )
    responses = list(inquiry.forwarder_responses.values_list('response_status', flat=True))
    return ShipperStatusContext(
        inquiry_status=inquiry.status,
        quotation_count=counts['total'],
        has_accepted_quotation=counts['accepted'] > 0,
        has_rejected_quotations=counts['rejected'] > 0,
        forwarder_response_summary=summarize_responses(responses) if responses else None,
    )


def cancel_inquiry(inquiry: Inquiry) -> Inquiry:
    if not can_shipper_cancel_inquiry(shipper_context_for(inquiry)):
        raise TransitionNotAllowed("Only draft or open inquiries without quotations can be cancelled.")
    inquiry.status = InquiryStatus.CANCELLED
    inquiry.closed_at = timezone.now()
    inquiry.save(update_fields=['status', 'closed_at', 'updated_at'])
    logger.info("Inquiry %s cancelled by shipper %s", inquiry.pk, inquiry.shipper_organization_id)
    return inquiry
