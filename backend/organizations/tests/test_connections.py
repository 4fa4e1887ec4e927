from io import StringIO

import pytest
from django.core.management import call_command

from billing.models import Subscription

from ..models import Membership, Organization, OrganizationConnection

pytestmark = pytest.mark.django_db

INVITE_URL = "/api/shipper/connections/"


def _accept_url(connection_id):
    return f"/api/forwarder/connections/{connection_id}/accept/"


class TestInvite:

    def test_invite_and_accept(self, shipper_client, forwarder_client, forwarder_org):
        res = shipper_client.post(INVITE_URL, {"forwarder_organization_id": forwarder_org.id}, format="json")
        assert res.status_code == 201, res.content
        assert res.json()["status"] == "pending"

        res = forwarder_client.post(_accept_url(res.json()["id"]))
        assert res.status_code == 200, res.content
        assert res.json()["status"] == "connected"
        assert res.json()["accepted_at"] is not None

    def test_basic_shipper_gets_one_connection(self, shipper_client, forwarder_org, other_forwarder_org):
        shipper_client.post(INVITE_URL, {"forwarder_organization_id": forwarder_org.id}, format="json")
        res = shipper_client.post(INVITE_URL, {"forwarder_organization_id": other_forwarder_org.id}, format="json")
        assert res.status_code == 403
        assert "Upgrade" in res.json()["detail"]
        assert OrganizationConnection.objects.count() == 1

    def test_paid_shipper_is_not_limited(self, shipper_client, shipper_org, forwarder_org, other_forwarder_org, make_subscription):
        make_subscription(shipper_org, tier="advanced")
        for forwarder in (forwarder_org, other_forwarder_org):
            res = shipper_client.post(INVITE_URL, {"forwarder_organization_id": forwarder.id}, format="json")
            assert res.status_code == 201

    def test_duplicate_invite(self, shipper_client, shipper_org, forwarder_org, make_subscription):
        make_subscription(shipper_org, tier="medium")
        shipper_client.post(INVITE_URL, {"forwarder_organization_id": forwarder_org.id}, format="json")
        res = shipper_client.post(INVITE_URL, {"forwarder_organization_id": forwarder_org.id}, format="json")
        assert res.status_code == 400

    def test_target_must_be_a_forwarder(self, shipper_client):
        other_shipper = Organization.objects.create(name="Other Shipper", type=Organization.TYPE_SHIPPER)
        res = shipper_client.post(INVITE_URL, {"forwarder_organization_id": other_shipper.id}, format="json")
        assert res.status_code == 404

    def test_members_cannot_invite(self, shipper_org, forwarder_org, member_client):
        client = member_client(shipper_org, "clerk")
        res = client.post(INVITE_URL, {"forwarder_organization_id": forwarder_org.id}, format="json")
        assert res.status_code == 403

    def test_forwarder_cannot_invite(self, forwarder_client, forwarder_org):
        res = forwarder_client.post(INVITE_URL, {"forwarder_organization_id": forwarder_org.id}, format="json")
        assert res.status_code == 403


class TestAccept:

    def test_pending_invite_is_not_counted_against_itself(self, shipper_org, forwarder_org, forwarder_client):
        connection = OrganizationConnection.objects.create(
            shipper_organization=shipper_org, forwarder_organization=forwarder_org
        )
        res = forwarder_client.post(_accept_url(connection.id))
        assert res.status_code == 200, res.content

    def test_basic_forwarder_with_existing_connection(self, shipper_org, forwarder_org, forwarder_client):
        second_shipper = Organization.objects.create(name="Second Shipper", type=Organization.TYPE_SHIPPER)
        OrganizationConnection.objects.create(
            shipper_organization=second_shipper, forwarder_organization=forwarder_org, status="connected"
        )
        pending = OrganizationConnection.objects.create(
            shipper_organization=shipper_org, forwarder_organization=forwarder_org
        )
        res = forwarder_client.post(_accept_url(pending.id))
        assert res.status_code == 403
        pending.refresh_from_db()
        assert pending.status == "pending"

    def test_only_pending_can_be_accepted(self, shipper_org, forwarder_org, forwarder_client):
        connection = OrganizationConnection.objects.create(
            shipper_organization=shipper_org, forwarder_organization=forwarder_org, status="connected"
        )
        assert forwarder_client.post(_accept_url(connection.id)).status_code == 404


class TestUsage:

    def test_forwarder_usage(self, forwarder_client):
        res = forwarder_client.get("/api/billing/usage/")
        assert res.status_code == 200
        body = res.json()
        assert body["tier"] == "basic"
        assert body["quotations"] == {"allowed": True, "current": 0, "limit": 5, "reason": None}
        assert body["connections"]["limit"] == 1

    def test_unlimited_is_null(self, shipper_client, shipper_org, make_subscription):
        make_subscription(shipper_org, tier="advanced")
        body = shipper_client.get("/api/billing/usage/").json()
        assert "quotations" not in body
        assert body["connections"]["limit"] is None


def test_seed_organizations_is_idempotent():
    call_command("seed_organizations", stdout=StringIO())
    call_command("seed_organizations", stdout=StringIO())
    assert Organization.objects.filter(type=Organization.TYPE_FORWARDER).count() == 2
    assert Membership.objects.count() == 3
    assert Subscription.objects.count() == 3
