from django.shortcuts import get_object_or_404
from rest_framework import status, views
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from inquiries.models import InquiryForwarder
from organizations.services.membership import require_forwarder, require_shipper

from .models import Quotation
from .serializers import QuotationSerializer, QuotationWriteSerializer
from .services import workflow


class ForwarderQuotationSaveView(views.APIView):
    """Save this forwarder's quotation on an inquiry as a draft, or submit it."""
    permission_classes = [IsAuthenticated]

    def post(self, request, id):
        membership = require_forwarder(request.user)
        response = get_object_or_404(
            InquiryForwarder.objects.select_related('inquiry', 'forwarder_organization'),
            inquiry_id=id,
            forwarder_organization=membership.organization,
        )
        existed = Quotation.objects.filter(
            inquiry_id=id, forwarder_organization=membership.organization
        ).exists()

        ser = QuotationWriteSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        data = dict(ser.validated_data)
        submit = data.pop('submit', False)

        quotation = workflow.save_quotation(response, data, user=request.user, submit=submit)
        return Response(
            QuotationSerializer(quotation).data,
            status=status.HTTP_200_OK if existed else status.HTTP_201_CREATED,
        )


class ForwarderQuotationDetailView(views.APIView):
    permission_classes = [IsAuthenticated]

    def _get(self, request, id) -> Quotation:
        membership = require_forwarder(request.user)
        return get_object_or_404(Quotation, pk=id, forwarder_organization=membership.organization)

    def get(self, request, id):
        return Response(QuotationSerializer(self._get(request, id)).data, status=status.HTTP_200_OK)

    def delete(self, request, id):
        workflow.delete_quotation(self._get(request, id))
        return Response(status=status.HTTP_204_NO_CONTENT)


class ForwarderQuotationWithdrawView(views.APIView):
    permission_classes = [IsAuthenticated]

    def post(self, request, id):
        membership = require_forwarder(request.user)
        quotation = get_object_or_404(Quotation, pk=id, forwarder_organization=membership.organization)
        workflow.withdraw_quotation(quotation)
        return Response(QuotationSerializer(quotation).data, status=status.HTTP_200_OK)


def _shipper_quotation(request, id) -> Quotation:
    membership = require_shipper(request.user)
    # Drafts are never visible to the shipper
    return get_object_or_404(
        Quotation.objects.exclude(status='draft'),
        pk=id,
        inquiry__shipper_organization=membership.organization,
    )


class ShipperQuotationAcceptView(views.APIView):
    permission_classes = [IsAuthenticated]

    def post(self, request, id):
        quotation = workflow.award_quotation(_shipper_quotation(request, id))
        return Response(QuotationSerializer(quotation).data, status=status.HTTP_200_OK)


class ShipperQuotationRejectView(views.APIView):
    permission_classes = [IsAuthenticated]

    def post(self, request, id):
        quotation = workflow.reject_quotation(_shipper_quotation(request, id))
        return Response(QuotationSerializer(quotation).data, status=status.HTTP_200_OK)
