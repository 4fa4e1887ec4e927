"""
Forwarder-facing workflow rules for an inquiry/quotation pair.

Everything here is a pure function of a StatusContext built from three
persisted strings: the inquiry status, this forwarder's quotation status
(if any) and this forwarder's response status (if any).

Display precedence, highest first:
  1. the forwarder declined the inquiry            -> rejected
  2. the inquiry was awarded                        -> awarded / rejected (lost)
  3. the inquiry itself is rejected                 -> rejected
  4. this forwarder's quotation was rejected        -> rejected
  5. otherwise                                      -> the inquiry status

Quotation lifecycle:
  none -> draft -> submitted -> accepted | rejected | withdrawn | expired
Terminal states are absorbing.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import FrozenSet, Optional

from django.db import models

from core.statuses import (
    InquiryStatus,
    QuotationStatus,
    ResponseStatus,
    to_inquiry_status,
    to_quotation_status,
    to_response_status,
)

# Inquiry states in which the forwarder can no longer act
BLOCKED_INQUIRY_STATUSES = frozenset({
    InquiryStatus.REJECTED,
    InquiryStatus.CLOSED,
    InquiryStatus.CANCELLED,
    InquiryStatus.EXPIRED,
})

CLOSED_INQUIRY_STATUSES = frozenset({
    InquiryStatus.CLOSED,
    InquiryStatus.CANCELLED,
    InquiryStatus.EXPIRED,
    InquiryStatus.AWARDED,
})

TERMINAL_QUOTATION_STATUSES = frozenset({
    QuotationStatus.ACCEPTED,
    QuotationStatus.REJECTED,
    QuotationStatus.WITHDRAWN,
    QuotationStatus.EXPIRED,
})

# None stands for "no quotation yet"
QUOTATION_TRANSITIONS = {
    None: frozenset({QuotationStatus.DRAFT, QuotationStatus.SUBMITTED}),
    QuotationStatus.DRAFT: frozenset({QuotationStatus.DRAFT, QuotationStatus.SUBMITTED}),
    QuotationStatus.SUBMITTED: frozenset({
        QuotationStatus.ACCEPTED,
        QuotationStatus.REJECTED,
        QuotationStatus.WITHDRAWN,
        QuotationStatus.EXPIRED,
    }),
    QuotationStatus.ACCEPTED: frozenset(),
    QuotationStatus.REJECTED: frozenset(),
    QuotationStatus.WITHDRAWN: frozenset(),
    QuotationStatus.EXPIRED: frozenset(),
}


class QuotationAction(models.TextChoices):
    """Canonical label for the forwarder's quotation button."""
    INQUIRY_REJECTED = 'inquiry_rejected', 'Inquiry rejected'
    QUOTATION_REJECTED = 'quotation_rejected', 'Quotation rejected'
    VIEW = 'view', 'View quotation'
    EDIT = 'edit', 'Edit quotation'
    CREATE = 'create', 'Create quotation'


class ForwarderAction(models.TextChoices):
    CREATE_QUOTATION = 'create_quotation', 'Create quotation'
    EDIT_QUOTATION = 'edit_quotation', 'Edit quotation'
    VIEW_QUOTATION = 'view_quotation', 'View quotation'
    REJECT_INQUIRY = 'reject_inquiry', 'Reject inquiry'


@dataclass(frozen=True)
class StatusContext:
    inquiry_status: InquiryStatus
    quotation_status: Optional[QuotationStatus] = None
    response_status: Optional[ResponseStatus] = None

    def __post_init__(self):
        object.__setattr__(self, 'inquiry_status', to_inquiry_status(self.inquiry_status))
        object.__setattr__(self, 'quotation_status', to_quotation_status(self.quotation_status))
        object.__setattr__(self, 'response_status', to_response_status(self.response_status))

    @classmethod
    def for_records(cls, inquiry, quotation=None, response=None) -> "StatusContext":
        """Build a context from Inquiry / Quotation / InquiryForwarder rows."""
        return cls(
            inquiry_status=inquiry.status,
            quotation_status=getattr(quotation, 'status', None),
            response_status=getattr(response, 'response_status', None),
        )


def is_rejected(context: StatusContext) -> bool:
    return (
        context.inquiry_status == InquiryStatus.REJECTED
        or context.quotation_status == QuotationStatus.REJECTED
        or context.response_status == ResponseStatus.REJECTED
    )


def is_closed(context: StatusContext) -> bool:
    return context.inquiry_status in CLOSED_INQUIRY_STATUSES


def is_quotation_disabled(context: StatusContext) -> bool:
    return is_rejected(context) or is_closed(context)


def can_create_quotation(context: StatusContext) -> bool:
    """
    Whether the forwarder may start (or keep editing) a quotation.

    A draft can be resumed while the inquiry is open; any explicit
    rejection, by either side, blocks quoting for good.
    """
    if context.inquiry_status in BLOCKED_INQUIRY_STATUSES:
        return False
    if context.response_status == ResponseStatus.REJECTED:
        return False
    if context.quotation_status == QuotationStatus.REJECTED:
        return False
    return context.inquiry_status == InquiryStatus.OPEN and (
        context.quotation_status is None or context.quotation_status == QuotationStatus.DRAFT
    )


def can_reject_inquiry(context: StatusContext) -> bool:
    if context.inquiry_status in BLOCKED_INQUIRY_STATUSES:
        return False
    if context.response_status in (ResponseStatus.REJECTED, ResponseStatus.QUOTED):
        return False
    if context.quotation_status is not None and context.quotation_status != QuotationStatus.DRAFT:
        return False
    return context.inquiry_status == InquiryStatus.OPEN


def get_display_status(context: StatusContext) -> InquiryStatus:
    if context.response_status == ResponseStatus.REJECTED:
        return InquiryStatus.REJECTED

    if context.inquiry_status == InquiryStatus.AWARDED:
        if context.quotation_status == QuotationStatus.REJECTED:
            # another forwarder won
            return InquiryStatus.REJECTED
        # won, or awarded without this forwarder taking part
        return InquiryStatus.AWARDED

    if context.inquiry_status == InquiryStatus.REJECTED:
        return InquiryStatus.REJECTED

    if context.quotation_status == QuotationStatus.REJECTED:
        return InquiryStatus.REJECTED

    return context.inquiry_status


def get_quotation_button_text(context: StatusContext) -> QuotationAction:
    if context.inquiry_status == InquiryStatus.REJECTED:
        return QuotationAction.INQUIRY_REJECTED
    if context.quotation_status == QuotationStatus.REJECTED:
        return QuotationAction.QUOTATION_REJECTED
    if context.quotation_status in (QuotationStatus.SUBMITTED, QuotationStatus.ACCEPTED):
        return QuotationAction.VIEW
    if context.quotation_status == QuotationStatus.DRAFT:
        return QuotationAction.EDIT
    return QuotationAction.CREATE


def permitted_actions(context: StatusContext) -> FrozenSet[ForwarderAction]:
    actions = set()
    if can_create_quotation(context):
        if context.quotation_status == QuotationStatus.DRAFT:
            actions.add(ForwarderAction.EDIT_QUOTATION)
        else:
            actions.add(ForwarderAction.CREATE_QUOTATION)
    if context.quotation_status is not None and context.quotation_status != QuotationStatus.DRAFT:
        actions.add(ForwarderAction.VIEW_QUOTATION)
    if can_reject_inquiry(context):
        actions.add(ForwarderAction.REJECT_INQUIRY)
    return frozenset(actions)


def can_transition_quotation(current, target) -> bool:
    """Whether a quotation may move from ``current`` (None = no quotation) to ``target``."""
    current_status = to_quotation_status(current)
    target_status = to_quotation_status(target)
    if target_status is None:
        return False
    return target_status in QUOTATION_TRANSITIONS[current_status]
