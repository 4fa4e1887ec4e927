import pytest

from core.statuses import ShipperInquiryStatus

from ..services.shipper_status import (
    ResponseSummary,
    ShipperStatusContext,
    can_shipper_cancel_inquiry,
    can_shipper_close_inquiry,
    get_shipper_display_status,
    is_shipper_inquiry_final,
    summarize_responses,
)


def _ctx(status, quotation_count=0, summary=None, **kwargs):
    return ShipperStatusContext(
        inquiry_status=status,
        quotation_count=quotation_count,
        forwarder_response_summary=summary,
        **kwargs,
    )


class TestShipperDisplayStatus:

    @pytest.mark.parametrize("status", ["draft", "awarded", "closed", "cancelled", "expired"])
    def test_non_open_passes_through(self, status):
        assert get_shipper_display_status(_ctx(status, quotation_count=3)) == status

    def test_open_with_quotations_is_quoted(self):
        assert get_shipper_display_status(_ctx("open", quotation_count=1)) == ShipperInquiryStatus.QUOTED

    def test_open_with_quoted_response_is_quoted(self):
        summary = ResponseSummary(total=2, pending=1, quoted=1)
        assert get_shipper_display_status(_ctx("open", summary=summary)) == ShipperInquiryStatus.QUOTED

    def test_every_forwarder_declined_is_closed(self):
        summary = ResponseSummary(total=2, rejected=2)
        assert get_shipper_display_status(_ctx("open", summary=summary)) == ShipperInquiryStatus.CLOSED

    def test_pending_responses_stay_open(self):
        summary = ResponseSummary(total=2, pending=1, rejected=1)
        assert get_shipper_display_status(_ctx("open", summary=summary)) == ShipperInquiryStatus.OPEN

    def test_no_summary_stays_open(self):
        assert get_shipper_display_status(_ctx("open")) == ShipperInquiryStatus.OPEN

    def test_empty_summary_stays_open(self):
        assert get_shipper_display_status(_ctx("open", summary=ResponseSummary())) == ShipperInquiryStatus.OPEN

    def test_unknown_persisted_status_is_draft(self):
        assert get_shipper_display_status(_ctx("rejected")) == ShipperInquiryStatus.DRAFT


class TestShipperPermissions:

    def test_cancel_open_without_quotations(self):
        assert can_shipper_cancel_inquiry(_ctx("open", quotation_count=0)) is True
        assert can_shipper_cancel_inquiry(_ctx("open", quotation_count=1)) is False

    def test_cancel_draft(self):
        assert can_shipper_cancel_inquiry(_ctx("draft")) is True

    @pytest.mark.parametrize("status", ["awarded", "closed", "cancelled", "expired"])
    def test_cannot_cancel_final(self, status):
        assert can_shipper_cancel_inquiry(_ctx(status)) is False

    @pytest.mark.parametrize("status", ["draft", "open", "awarded", "closed"])
    def test_never_closed_by_hand(self, status):
        assert can_shipper_close_inquiry(_ctx(status)) is False
        assert can_shipper_close_inquiry() is False

    @pytest.mark.parametrize("status, final", [
        ("draft", False), ("open", False), ("awarded", True),
        ("closed", True), ("cancelled", True), ("expired", True),
    ])
    def test_final(self, status, final):
        assert is_shipper_inquiry_final(_ctx(status)) is final


def test_summarize_responses():
    summary = summarize_responses(["pending", "rejected", "quoted", "quoted", "bogus"])
    assert summary == ResponseSummary(total=5, pending=1, rejected=1, quoted=2)


def test_derivations_are_repeatable():
    ctx = _ctx("open", summary=ResponseSummary(total=1, rejected=1))
    assert get_shipper_display_status(ctx) == get_shipper_display_status(ctx)
    assert can_shipper_cancel_inquiry(ctx) == can_shipper_cancel_inquiry(ctx)
