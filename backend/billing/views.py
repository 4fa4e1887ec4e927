import math

from rest_framework import status, views
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from organizations.services.membership import require_membership

from .services.quota_guard import (
    ROLE_FORWARDER,
    ROLE_SHIPPER,
    check_connection_limit,
    check_quotation_limit,
    get_organization_subscription,
)


def _decision_payload(decision):
    # JSON has no infinity; unlimited is reported as null
    return {
        "allowed": decision.allowed,
        "current": decision.current,
        "limit": None if math.isinf(decision.limit) else decision.limit,
        "reason": decision.reason,
    }


class SubscriptionUsageView(views.APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        membership = require_membership(request.user)
        org = membership.organization
        subscription = get_organization_subscription(org.id)

        payload = {
            "organization": org.id,
            "tier": subscription.tier,
            "status": subscription.status,
            "max_quotations_per_month": subscription.max_quotations_per_month,
        }
        if org.is_forwarder:
            payload["quotations"] = _decision_payload(check_quotation_limit(org.id))
            payload["connections"] = _decision_payload(check_connection_limit(org.id, ROLE_FORWARDER))
        else:
            payload["connections"] = _decision_payload(check_connection_limit(org.id, ROLE_SHIPPER))
        return Response(payload, status=status.HTTP_200_OK)
