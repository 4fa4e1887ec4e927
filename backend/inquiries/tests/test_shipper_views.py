from datetime import timedelta

import pytest
from django.core.management import call_command
from django.utils import timezone

from quotes.models import Quotation

from ..models import Inquiry, InquiryForwarder
from ..services.expiry import expire_stale_items, is_inquiry_expired, is_quotation_expired
from ..services.shipper_actions import shipper_context_for

pytestmark = pytest.mark.django_db


def _mk_quotation(inquiry, forwarder, status="submitted", valid_until=None):
    return Quotation.objects.create(
        quotation_number=f"Q-{inquiry.reference_number}-{forwarder.pk}",
        inquiry=inquiry,
        forwarder_organization=forwarder,
        main_carriage="500",
        valid_until=valid_until or timezone.now() + timedelta(days=7),
        status=status,
    )


class TestShipperInquiryDetail:

    def test_open_without_responses(self, shipper_client, open_inquiry):
        res = shipper_client.get(f"/api/shipper/inquiries/{open_inquiry.id}/")
        assert res.status_code == 200, res.content
        body = res.json()
        assert body["display_status"] == "open"
        assert body["can_cancel"] is True
        assert body["can_close"] is False
        assert body["is_final"] is False
        assert body["forwarder_responses"] == {"total": 2, "pending": 2, "rejected": 0, "quoted": 0}
        assert body["totals"]["total_pieces"] == 2
        assert body["dimensions_summary"] == "100x50x40cm"

    def test_drafts_are_not_counted(self, shipper_client, open_inquiry, forwarder_org):
        _mk_quotation(open_inquiry, forwarder_org, status="draft")
        ctx = shipper_context_for(open_inquiry)
        assert ctx.quotation_count == 0

        res = shipper_client.get(f"/api/shipper/inquiries/{open_inquiry.id}/")
        assert res.json()["display_status"] == "open"

    def test_submitted_quotation_shows_quoted(self, shipper_client, open_inquiry, forwarder_org):
        _mk_quotation(open_inquiry, forwarder_org)
        res = shipper_client.get(f"/api/shipper/inquiries/{open_inquiry.id}/")
        body = res.json()
        assert body["display_status"] == "quoted"
        assert body["quotation_count"] == 1
        assert body["can_cancel"] is False

    def test_all_forwarders_declined_shows_closed(self, shipper_client, open_inquiry):
        InquiryForwarder.objects.filter(inquiry=open_inquiry).update(response_status="rejected")
        res = shipper_client.get(f"/api/shipper/inquiries/{open_inquiry.id}/")
        assert res.json()["display_status"] == "closed"

    def test_forwarder_is_refused(self, forwarder_client, open_inquiry):
        res = forwarder_client.get(f"/api/shipper/inquiries/{open_inquiry.id}/")
        assert res.status_code == 403


class TestShipperCancel:

    def test_cancel_open_inquiry(self, shipper_client, open_inquiry):
        res = shipper_client.post(f"/api/shipper/inquiries/{open_inquiry.id}/cancel/")
        assert res.status_code == 200, res.content
        open_inquiry.refresh_from_db()
        assert open_inquiry.status == "cancelled"
        assert open_inquiry.closed_at is not None
        assert res.json()["is_final"] is True

    def test_cannot_cancel_with_quotations(self, shipper_client, open_inquiry, forwarder_org):
        _mk_quotation(open_inquiry, forwarder_org)
        res = shipper_client.post(f"/api/shipper/inquiries/{open_inquiry.id}/cancel/")
        assert res.status_code == 403
        open_inquiry.refresh_from_db()
        assert open_inquiry.status == "open"


class TestExpiry:

    def test_predicates(self):
        now = timezone.now()
        assert is_inquiry_expired(None, now) is False
        assert is_inquiry_expired(now - timedelta(seconds=1), now) is True
        assert is_quotation_expired(now + timedelta(days=1), now) is False

    def test_expires_stale_inquiries_and_quotations(self, open_inquiry, forwarder_org):
        quotation = _mk_quotation(open_inquiry, forwarder_org, valid_until=timezone.now() + timedelta(days=1))
        later = timezone.now() + timedelta(days=30)

        dry = expire_stale_items(now=later, dry_run=True)
        assert (dry.expired_inquiries, dry.expired_quotations) == (1, 1)
        open_inquiry.refresh_from_db()
        assert open_inquiry.status == "open"

        result = expire_stale_items(now=later)
        assert (result.expired_inquiries, result.expired_quotations) == (1, 1)
        open_inquiry.refresh_from_db()
        quotation.refresh_from_db()
        assert open_inquiry.status == "expired"
        assert quotation.status == "expired"

    def test_command_leaves_current_items(self, open_inquiry, capsys):
        call_command("expire_stale_items")
        assert "Expired 0 inquiries and 0 quotations." in capsys.readouterr().out
        assert Inquiry.objects.get(pk=open_inquiry.pk).status == "open"
