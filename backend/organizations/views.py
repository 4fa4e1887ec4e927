import logging

from django.shortcuts import get_object_or_404
from django.utils import timezone
from rest_framework import status, views
from rest_framework.exceptions import PermissionDenied, ValidationError
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from billing.services.quota_guard import ROLE_FORWARDER, ROLE_SHIPPER, connection_slot

from .models import Organization, OrganizationConnection
from .serializers import ConnectionInviteSerializer, OrganizationConnectionSerializer
from .services.membership import require_forwarder, require_shipper

logger = logging.getLogger(__name__)


def _require_manager(membership):
    if not membership.can_manage:
        raise PermissionDenied("Only admins can manage connections.")


class ShipperConnectionInviteView(views.APIView):
    permission_classes = [IsAuthenticated]

    def post(self, request):
        membership = require_shipper(request.user)
        _require_manager(membership)
        shipper = membership.organization

        ser = ConnectionInviteSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        forwarder_id = ser.validated_data['forwarder_organization_id']
        if forwarder_id == shipper.id:
            raise ValidationError({'forwarder_organization_id': "An organization cannot connect to itself."})
        forwarder = get_object_or_404(Organization, pk=forwarder_id, type=Organization.TYPE_FORWARDER)

        if OrganizationConnection.objects.filter(
            shipper_organization=shipper, forwarder_organization=forwarder
        ).exists():
            raise ValidationError({'forwarder_organization_id': "A connection to this forwarder already exists."})

        with connection_slot(shipper.id, ROLE_SHIPPER) as decision:
            if not decision.allowed:
                raise PermissionDenied(decision.reason)
            connection = OrganizationConnection.objects.create(
                shipper_organization=shipper,
                forwarder_organization=forwarder,
                invited_by=request.user,
            )

        logger.info("Shipper %s invited forwarder %s", shipper.id, forwarder.id)
        return Response(OrganizationConnectionSerializer(connection).data, status=status.HTTP_201_CREATED)


class ForwarderConnectionAcceptView(views.APIView):
    permission_classes = [IsAuthenticated]

    def post(self, request, id):
        membership = require_forwarder(request.user)
        _require_manager(membership)
        forwarder = membership.organization

        connection = get_object_or_404(
            OrganizationConnection,
            pk=id,
            forwarder_organization=forwarder,
            status=OrganizationConnection.STATUS_PENDING,
        )

        # The pending invitation already counts; exclude it so it is not held against itself
        with connection_slot(forwarder.id, ROLE_FORWARDER, exclude_connection_id=connection.id) as decision:
            if not decision.allowed:
                raise PermissionDenied(decision.reason)
            connection.status = OrganizationConnection.STATUS_CONNECTED
            connection.accepted_by = request.user
            connection.accepted_at = timezone.now()
            connection.save(update_fields=['status', 'accepted_by', 'accepted_at', 'updated_at'])

        logger.info("Forwarder %s accepted connection %s", forwarder.id, connection.id)
        return Response(OrganizationConnectionSerializer(connection).data, status=status.HTTP_200_OK)
