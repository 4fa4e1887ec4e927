"""
Forwarder and shipper actions on quotations.

Each action re-derives the StatusContext from the current rows and refuses
with TransitionNotAllowed when the status engine does not permit it.
"""
from __future__ import annotations

import logging
from typing import Optional

from django.db import transaction
from django.utils import timezone

from billing.services.quota_guard import quotation_slot
from core.exceptions import QuotaExceeded, TransitionNotAllowed
from core.statuses import InquiryStatus, QuotationStatus, ResponseStatus
from core.utils import d
from inquiries.models import Inquiry, InquiryForwarder

from ..models import Quotation
from .status_engine import (
    StatusContext,
    can_create_quotation,
    can_reject_inquiry,
    can_transition_quotation,
)

logger = logging.getLogger(__name__)

QUOTATION_FIELDS = (
    'currency', 'pre_carriage', 'main_carriage', 'on_carriage', 'additional_charges',
    'transit_time', 'valid_until', 'notes', 'terms',
)

UNDELETABLE_STATUSES = (QuotationStatus.ACCEPTED, QuotationStatus.REJECTED, QuotationStatus.EXPIRED)


def _existing_quotation(inquiry, forwarder_organization) -> Optional[Quotation]:
    return Quotation.objects.filter(inquiry=inquiry, forwarder_organization=forwarder_organization).first()


def context_for(response: InquiryForwarder, quotation: Optional[Quotation] = None) -> StatusContext:
    return StatusContext.for_records(response.inquiry, quotation=quotation, response=response)


def quotation_number_for(inquiry: Inquiry, forwarder_organization) -> str:
    return f"Q-{inquiry.reference_number}-{forwarder_organization.pk}"


def mark_viewed(response: InquiryForwarder) -> InquiryForwarder:
    if response.viewed_at is None:
        response.viewed_at = timezone.now()
        response.save(update_fields=['viewed_at'])
    return response


def reject_inquiry(response: InquiryForwarder) -> InquiryForwarder:
    quotation = _existing_quotation(response.inquiry, response.forwarder_organization)
    if not can_reject_inquiry(context_for(response, quotation)):
        raise TransitionNotAllowed("This inquiry can no longer be rejected.")
    response.response_status = ResponseStatus.REJECTED
    response.rejected_at = timezone.now()
    response.save(update_fields=['response_status', 'rejected_at'])
    logger.info("Forwarder %s rejected inquiry %s", response.forwarder_organization_id, response.inquiry_id)
    return response


def _apply_submission(quotation: Quotation, response: InquiryForwarder, submit: bool):
    if submit:
        quotation.status = QuotationStatus.SUBMITTED
        quotation.submitted_at = timezone.now()
    else:
        quotation.status = QuotationStatus.DRAFT
    quotation.save()
    if submit and response.response_status != ResponseStatus.QUOTED:
        response.response_status = ResponseStatus.QUOTED
        response.save(update_fields=['response_status'])


def save_quotation(response: InquiryForwarder, data: dict, user=None, submit: bool = False) -> Quotation:
    """
    Create or update this forwarder's quotation on the inquiry, as a draft
    or submitted. A new quotation counts against the monthly quota; editing
    an existing draft does not.
    """
    inquiry = response.inquiry
    forwarder = response.forwarder_organization

    if not any(d(data.get(f)) > 0 for f in Quotation.COST_FIELDS):
        raise TransitionNotAllowed("At least one cost item must be greater than zero.")

    quotation = _existing_quotation(inquiry, forwarder)
    if not can_create_quotation(context_for(response, quotation)):
        raise TransitionNotAllowed("A quotation cannot be created or edited for this inquiry.")

    values = {f: data[f] for f in QUOTATION_FIELDS if f in data}

    if quotation is not None:
        with transaction.atomic():
            for name, value in values.items():
                setattr(quotation, name, value)
            _apply_submission(quotation, response, submit)
        return quotation

    with quotation_slot(forwarder.pk) as decision:
        if not decision.allowed:
            raise QuotaExceeded(decision.reason)
        quotation = Quotation(
            quotation_number=quotation_number_for(inquiry, forwarder),
            inquiry=inquiry,
            forwarder_organization=forwarder,
            created_by=user if user is not None and user.is_authenticated else None,
            **values,
        )
        _apply_submission(quotation, response, submit)

    logger.info(
        "Forwarder %s created quotation %s (%s)", forwarder.pk, quotation.quotation_number, quotation.status
    )
    return quotation


def withdraw_quotation(quotation: Quotation) -> Quotation:
    if not can_transition_quotation(quotation.status, QuotationStatus.WITHDRAWN):
        raise TransitionNotAllowed(f"A {quotation.status} quotation cannot be withdrawn.")
    quotation.status = QuotationStatus.WITHDRAWN
    quotation.save(update_fields=['status', 'updated_at'])
    return quotation


def delete_quotation(quotation: Quotation) -> None:
    """
    Delete a quotation. A quoted response falls back to pending once no
    quotation remains; a rejected response stays rejected.
    """
    if quotation.status in UNDELETABLE_STATUSES:
        raise TransitionNotAllowed(f"A {quotation.status} quotation cannot be deleted.")
    inquiry_id = quotation.inquiry_id
    forwarder_id = quotation.forwarder_organization_id
    with transaction.atomic():
        quotation.delete()
        remaining = Quotation.objects.filter(inquiry_id=inquiry_id, forwarder_organization_id=forwarder_id)
        if not remaining.exists():
            InquiryForwarder.objects.filter(
                inquiry_id=inquiry_id,
                forwarder_organization_id=forwarder_id,
                response_status=ResponseStatus.QUOTED,
            ).update(response_status=ResponseStatus.PENDING)


def reject_quotation(quotation: Quotation) -> Quotation:
    """
    Shipper rejects one quotation. Once every quotation the shipper can see
    is rejected, the open inquiry closes.
    """
    now = timezone.now()
    with transaction.atomic():
        inquiry = Inquiry.objects.select_for_update().get(pk=quotation.inquiry_id)
        quotation.refresh_from_db()
        if not can_transition_quotation(quotation.status, QuotationStatus.REJECTED):
            raise TransitionNotAllowed(f"A {quotation.status} quotation cannot be rejected.")
        quotation.status = QuotationStatus.REJECTED
        quotation.responded_at = now
        quotation.save(update_fields=['status', 'responded_at', 'updated_at'])

        outstanding = (Quotation.objects
                       .filter(inquiry=inquiry)
                       .exclude(status__in=(QuotationStatus.DRAFT, QuotationStatus.REJECTED)))
        if inquiry.status == InquiryStatus.OPEN and not outstanding.exists():
            inquiry.status = InquiryStatus.CLOSED
            inquiry.closed_at = now
            inquiry.save(update_fields=['status', 'closed_at', 'updated_at'])
            logger.info("Inquiry %s closed: every quotation rejected", inquiry.pk)
    return quotation


def award_quotation(quotation: Quotation) -> Quotation:
    """
    Accept one quotation: it becomes accepted, every other submitted
    quotation on the inquiry is rejected and the inquiry is awarded.
    """
    now = timezone.now()
    with transaction.atomic():
        inquiry = Inquiry.objects.select_for_update().get(pk=quotation.inquiry_id)
        quotation.refresh_from_db()
        if inquiry.status != InquiryStatus.OPEN:
            raise TransitionNotAllowed(f"Quotations on a {inquiry.status} inquiry cannot be accepted.")
        if not can_transition_quotation(quotation.status, QuotationStatus.ACCEPTED):
            raise TransitionNotAllowed(f"A {quotation.status} quotation cannot be accepted.")

        quotation.status = QuotationStatus.ACCEPTED
        quotation.responded_at = now
        quotation.save(update_fields=['status', 'responded_at', 'updated_at'])

        (Quotation.objects
         .filter(inquiry=inquiry, status=QuotationStatus.SUBMITTED)
         .exclude(pk=quotation.pk)
         .update(status=QuotationStatus.REJECTED, responded_at=now, updated_at=now))

        inquiry.status = InquiryStatus.AWARDED
        inquiry.closed_at = now
        inquiry.save(update_fields=['status', 'closed_at', 'updated_at'])

    logger.info("Inquiry %s awarded to quotation %s", inquiry.pk, quotation.quotation_number)
    return quotation
