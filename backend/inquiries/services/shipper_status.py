"""
Shipper-facing inquiry status.

A shipper looks at one inquiry across every forwarder it was sent to, so
the context here is an aggregate (quotation counts, a response summary)
rather than one forwarder's record. The forwarder view lives in
``quotes.services.status_engine``; the two never share a context object.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from core.statuses import (
    ResponseStatus,
    ShipperInquiryStatus,
    to_response_status,
    to_shipper_inquiry_status,
)

CANCELLABLE_STATUSES = frozenset({ShipperInquiryStatus.DRAFT, ShipperInquiryStatus.OPEN})

FINAL_STATUSES = frozenset({
    ShipperInquiryStatus.AWARDED,
    ShipperInquiryStatus.CLOSED,
    ShipperInquiryStatus.CANCELLED,
    ShipperInquiryStatus.EXPIRED,
})


@dataclass(frozen=True)
class ResponseSummary:
    total: int = 0
    pending: int = 0
    rejected: int = 0
    quoted: int = 0


@dataclass(frozen=True)
class ShipperStatusContext:
    inquiry_status: ShipperInquiryStatus
    quotation_count: int = 0
    has_accepted_quotation: bool = False
    has_rejected_quotations: bool = False
    forwarder_response_summary: Optional[ResponseSummary] = None

    def __post_init__(self):
        # Raw persisted strings are accepted and cast tolerantly
        object.__setattr__(self, 'inquiry_status', to_shipper_inquiry_status(self.inquiry_status))
        object.__setattr__(self, 'quotation_count', int(self.quotation_count or 0))


def summarize_responses(statuses: Iterable) -> ResponseSummary:
    """Count forwarder responses by status; unknown values only add to the total."""
    total = pending = rejected = quoted = 0
    for raw in statuses:
        total += 1
        status = to_response_status(raw)
        if status == ResponseStatus.PENDING:
            pending += 1
        elif status == ResponseStatus.REJECTED:
            rejected += 1
        elif status == ResponseStatus.QUOTED:
            quoted += 1
    return ResponseSummary(total=total, pending=pending, rejected=rejected, quoted=quoted)


def get_shipper_display_status(context: ShipperStatusContext) -> ShipperInquiryStatus:
    status = context.inquiry_status
    if status != ShipperInquiryStatus.OPEN:
        # draft, awarded and the terminal states pass through
        return status

    summary = context.forwarder_response_summary
    if context.quotation_count > 0 or (summary is not None and summary.quoted > 0):
        return ShipperInquiryStatus.QUOTED
    if summary is not None and summary.total > 0 and summary.rejected == summary.total:
        # every forwarder declined
        return ShipperInquiryStatus.CLOSED
    return ShipperInquiryStatus.OPEN


def can_shipper_cancel_inquiry(context: ShipperStatusContext) -> bool:
    return context.inquiry_status in CANCELLABLE_STATUSES and context.quotation_count == 0


def can_shipper_close_inquiry(context: Optional[ShipperStatusContext] = None) -> bool:
    # Inquiries close automatically (award, expiry, all forwarders declining), never by hand.
    return False


def is_shipper_inquiry_final(context: ShipperStatusContext) -> bool:
    return context.inquiry_status in FINAL_STATUSES
