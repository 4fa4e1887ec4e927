from datetime import timedelta

import pytest
from django.contrib.auth import get_user_model
from django.utils import timezone
from rest_framework.test import APIClient

from billing.models import Subscription
from inquiries.models import Inquiry, InquiryForwarder
from organizations.models import Membership, Organization


def _mk_member(org, username, role="admin"):
    User = get_user_model()
    user = User.objects.create_user(username=username, email=f"{username}@example.com", password="pass")
    Membership.objects.create(user=user, organization=org, role=role)
    return user


def _client_for(user):
    client = APIClient()
    client.force_authenticate(user=user)
    return client


@pytest.fixture
def shipper_org(db):
    return Organization.objects.create(name="Acme Shipping", type=Organization.TYPE_SHIPPER)


@pytest.fixture
def forwarder_org(db):
    return Organization.objects.create(name="Fast Forwarding", type=Organization.TYPE_FORWARDER)


@pytest.fixture
def other_forwarder_org(db):
    return Organization.objects.create(name="Slow Forwarding", type=Organization.TYPE_FORWARDER)


@pytest.fixture
def shipper_user(shipper_org):
    return _mk_member(shipper_org, "shipper")


@pytest.fixture
def forwarder_user(forwarder_org):
    return _mk_member(forwarder_org, "forwarder")


@pytest.fixture
def other_forwarder_user(other_forwarder_org):
    return _mk_member(other_forwarder_org, "forwarder2")


@pytest.fixture
def shipper_client(shipper_user):
    return _client_for(shipper_user)


@pytest.fixture
def forwarder_client(forwarder_user):
    return _client_for(forwarder_user)


@pytest.fixture
def other_forwarder_client(other_forwarder_user):
    return _client_for(other_forwarder_user)


@pytest.fixture
def open_inquiry(shipper_org, forwarder_org, other_forwarder_org):
    """An open air-freight inquiry dispatched to both forwarders."""
    inquiry = Inquiry.objects.create(
        reference_number="INQ-0001",
        title="Electronics FRA-JFK",
        service_type="air_freight",
        status="open",
        shipper_organization=shipper_org,
        validity_date=timezone.now() + timedelta(days=14),
        sent_at=timezone.now(),
    )
    inquiry.packages.create(
        package_number="1", pieces=2, gross_weight="100",
        length="100", width="50", height="40",
    )
    InquiryForwarder.objects.create(inquiry=inquiry, forwarder_organization=forwarder_org)
    InquiryForwarder.objects.create(inquiry=inquiry, forwarder_organization=other_forwarder_org)
    return inquiry


@pytest.fixture
def quotation_payload():
    return {
        "pre_carriage": "100.00",
        "main_carriage": "850.50",
        "on_carriage": "75.25",
        "additional_charges": "0",
        "transit_time": 3,
        "valid_until": (timezone.now() + timedelta(days=7)).isoformat(),
    }


@pytest.fixture
def make_subscription():
    def _make(org, tier="basic", max_quotations_per_month=5):
        sub, _ = Subscription.objects.update_or_create(
            organization=org,
            defaults={"tier": tier, "max_quotations_per_month": max_quotations_per_month},
        )
        return sub
    return _make


@pytest.fixture
def member_client():
    """Client for a new user joining ``org`` with ``role``."""
    def _make(org, username, role="member"):
        return _client_for(_mk_member(org, username, role=role))
    return _make
