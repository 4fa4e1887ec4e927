from django.shortcuts import get_object_or_404
from rest_framework import status, views
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from organizations.services.membership import require_forwarder, require_shipper
from quotes.models import Quotation
from quotes.services import status_engine
from quotes.services.workflow import context_for, mark_viewed, reject_inquiry

from .models import Inquiry, InquiryForwarder
from .serializers import InquirySummarySerializer, measurement_payload
from .services import shipper_status
from .services.shipper_actions import cancel_inquiry, shipper_context_for


def _forwarder_response(request, id) -> InquiryForwarder:
    membership = require_forwarder(request.user)
    return get_object_or_404(
        InquiryForwarder.objects.select_related('inquiry', 'forwarder_organization'),
        inquiry_id=id,
        forwarder_organization=membership.organization,
    )


def _shipper_inquiry(request, id) -> Inquiry:
    membership = require_shipper(request.user)
    return get_object_or_404(Inquiry, pk=id, shipper_organization=membership.organization)


def forwarder_inquiry_payload(response: InquiryForwarder) -> dict:
    inquiry = response.inquiry
    quotation = Quotation.objects.filter(
        inquiry=inquiry, forwarder_organization_id=response.forwarder_organization_id
    ).first()
    ctx = context_for(response, quotation)

    payload = InquirySummarySerializer(inquiry).data
    payload.update({
        "display_status": status_engine.get_display_status(ctx),
        "response_status": response.response_status,
        "viewed_at": response.viewed_at,
        "quotation": None if quotation is None else {
            "id": quotation.id,
            "quotation_number": quotation.quotation_number,
            "status": quotation.status,
            "total_price": str(quotation.total_price),
            "currency": quotation.currency,
        },
        "quotation_action": status_engine.get_quotation_button_text(ctx),
        "quotation_disabled": status_engine.is_quotation_disabled(ctx),
        "permitted_actions": sorted(status_engine.permitted_actions(ctx)),
    })
    payload.update(measurement_payload(inquiry))
    return payload


class ForwarderInquiryDetailView(views.APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request, id):
        response = _forwarder_response(request, id)
        mark_viewed(response)
        return Response(forwarder_inquiry_payload(response), status=status.HTTP_200_OK)


class ForwarderInquiryRejectView(views.APIView):
    permission_classes = [IsAuthenticated]

    def post(self, request, id):
        response = _forwarder_response(request, id)
        reject_inquiry(response)
        return Response(forwarder_inquiry_payload(response), status=status.HTTP_200_OK)


def shipper_inquiry_payload(inquiry: Inquiry) -> dict:
    ctx = shipper_context_for(inquiry)
    summary = ctx.forwarder_response_summary

    payload = InquirySummarySerializer(inquiry).data
    payload.update({
        "display_status": shipper_status.get_shipper_display_status(ctx),
        "quotation_count": ctx.quotation_count,
        "has_accepted_quotation": ctx.has_accepted_quotation,
        "has_rejected_quotations": ctx.has_rejected_quotations,
        "forwarder_responses": None if summary is None else {
            "total": summary.total,
            "pending": summary.pending,
            "rejected": summary.rejected,
            "quoted": summary.quoted,
        },
        "can_cancel": shipper_status.can_shipper_cancel_inquiry(ctx),
        "can_close": shipper_status.can_shipper_close_inquiry(ctx),
        "is_final": shipper_status.is_shipper_inquiry_final(ctx),
    })
    payload.update(measurement_payload(inquiry))
    return payload


class ShipperInquiryDetailView(views.APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request, id):
        inquiry = _shipper_inquiry(request, id)
        return Response(shipper_inquiry_payload(inquiry), status=status.HTTP_200_OK)


class ShipperInquiryCancelView(views.APIView):
    permission_classes = [IsAuthenticated]

    def post(self, request, id):
        inquiry = _shipper_inquiry(request, id)
        cancel_inquiry(inquiry)
        return Response(shipper_inquiry_payload(inquiry), status=status.HTTP_200_OK)
