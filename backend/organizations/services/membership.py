from __future__ import annotations

from typing import Optional

from core.exceptions import MembershipRequired

from ..models import Membership, Organization


def require_membership(user, org_type: Optional[str] = None) -> Membership:
    """
    Resolve the acting user's membership, optionally requiring the
    organization to be a shipper or forwarder.
    """
    if user is None or not user.is_authenticated:
        raise MembershipRequired("Authentication required.")
    membership = Membership.objects.select_related('organization').filter(user=user).first()
    if membership is None:
        raise MembershipRequired("You are not a member of any organization.")
    if org_type is not None and membership.organization.type != org_type:
        raise MembershipRequired(f"This action requires a {org_type} organization.")
    return membership


def require_shipper(user) -> Membership:
    return require_membership(user, Organization.TYPE_SHIPPER)


def require_forwarder(user) -> Membership:
    return require_membership(user, Organization.TYPE_FORWARDER)
