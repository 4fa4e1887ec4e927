"""
Tests for subscription quotas. Decision logic is exercised with a stub
counter; the ORM counter and the locking slots run against the test database.
"""
import math
from datetime import datetime, timedelta, timezone as dt_timezone
from unittest.mock import Mock

import pytest
from django.utils import timezone

from organizations.models import OrganizationConnection
from quotes.models import Quotation

from ..models import Subscription
from ..services.quota_guard import (
    ROLE_FORWARDER,
    ROLE_SHIPPER,
    UNLIMITED,
    OrmQuotaCounter,
    check_connection_limit,
    check_quotation_limit,
    connection_slot,
    get_organization_subscription,
    get_quotations_this_month,
    month_start,
    quotation_slot,
)
from ..tier_limits import CONNECTION_LIMITS, can_add_connection, get_connection_limit

pytestmark = pytest.mark.django_db


def _counter(quotations=0, connections=0):
    counter = Mock()
    counter.count_quotations_since.return_value = quotations
    counter.count_connections.return_value = connections
    return counter


class TestSubscription:

    def test_created_on_first_lookup(self, forwarder_org):
        assert not Subscription.objects.filter(organization=forwarder_org).exists()
        sub = get_organization_subscription(forwarder_org.id)
        assert (sub.tier, sub.status, sub.max_quotations_per_month) == ("basic", "active", 5)

    def test_lookup_is_idempotent(self, forwarder_org):
        first = get_organization_subscription(forwarder_org.id)
        second = get_organization_subscription(forwarder_org.id)
        assert first.pk == second.pk
        assert Subscription.objects.filter(organization=forwarder_org).count() == 1

    def test_default_limit_from_settings(self, forwarder_org, settings):
        settings.DEFAULT_MAX_QUOTATIONS_PER_MONTH = 10
        assert get_organization_subscription(forwarder_org.id).max_quotations_per_month == 10


class TestQuotationLimit:

    def test_below_limit(self, forwarder_org):
        decision = check_quotation_limit(forwarder_org.id, counter=_counter(quotations=4))
        assert decision.allowed is True
        assert (decision.current, decision.limit) == (4, 5)
        assert decision.reason is None

    def test_at_limit(self, forwarder_org):
        decision = check_quotation_limit(forwarder_org.id, counter=_counter(quotations=5))
        assert decision.allowed is False
        assert decision.current == 5
        assert "monthly limit of 5 quotations" in decision.reason
        assert "Upgrade" in decision.reason

    @pytest.mark.parametrize("tier", ["medium", "advanced"])
    def test_paid_tiers_are_unlimited(self, forwarder_org, make_subscription, tier):
        make_subscription(forwarder_org, tier=tier)
        counter = _counter(quotations=500)
        decision = check_quotation_limit(forwarder_org.id, counter=counter)
        assert decision.allowed is True
        assert decision.current == 0
        assert math.isinf(decision.limit)
        counter.count_quotations_since.assert_not_called()

    def test_basic_without_limit_is_unlimited(self, forwarder_org, make_subscription):
        make_subscription(forwarder_org, max_quotations_per_month=None)
        decision = check_quotation_limit(forwarder_org.id, counter=_counter(quotations=99))
        assert decision.allowed is True
        assert decision.limit == UNLIMITED

    def test_counts_from_month_start(self, forwarder_org):
        counter = _counter(quotations=2)
        now = datetime(2024, 3, 17, 15, 30, tzinfo=dt_timezone.utc)
        check_quotation_limit(forwarder_org.id, counter=counter, now=now)
        org_id, since = counter.count_quotations_since.call_args.args
        assert org_id == forwarder_org.id
        assert since == datetime(2024, 3, 1, tzinfo=dt_timezone.utc)


class TestMonthStart:

    def test_first_instant_of_month(self):
        now = datetime(2024, 2, 29, 23, 59, 59, 999, tzinfo=dt_timezone.utc)
        assert month_start(now) == datetime(2024, 2, 1, tzinfo=dt_timezone.utc)

    def test_naive(self):
        assert month_start(datetime(2024, 7, 4, 12)) == datetime(2024, 7, 1)


class TestOrmCounter:

    def _quotation(self, inquiry, forwarder, created_at):
        q = Quotation.objects.create(
            quotation_number=f"Q-{inquiry.reference_number}-{forwarder.pk}",
            inquiry=inquiry,
            forwarder_organization=forwarder,
            main_carriage="10",
            valid_until=timezone.now() + timedelta(days=7),
        )
        Quotation.objects.filter(pk=q.pk).update(created_at=created_at)
        return q

    def test_counts_only_this_month(self, open_inquiry, forwarder_org, other_forwarder_org):
        self._quotation(open_inquiry, forwarder_org, timezone.now())
        self._quotation(open_inquiry, other_forwarder_org, month_start() - timedelta(days=1))
        assert get_quotations_this_month(forwarder_org.id) == 1
        assert get_quotations_this_month(other_forwarder_org.id) == 0

    def test_counts_connections_by_role(self, shipper_org, forwarder_org, other_forwarder_org):
        OrganizationConnection.objects.create(shipper_organization=shipper_org, forwarder_organization=forwarder_org)
        keep = OrganizationConnection.objects.create(
            shipper_organization=shipper_org, forwarder_organization=other_forwarder_org, status="connected"
        )
        counter = OrmQuotaCounter()
        active = OrganizationConnection.ACTIVE_STATUSES
        assert counter.count_connections(shipper_org.id, ROLE_SHIPPER, active) == 2
        assert counter.count_connections(shipper_org.id, ROLE_SHIPPER, active, exclude_connection_id=keep.id) == 1
        assert counter.count_connections(forwarder_org.id, ROLE_FORWARDER, active) == 1
        assert counter.count_connections(shipper_org.id, ROLE_FORWARDER, active) == 0

    def test_unknown_role(self, shipper_org):
        with pytest.raises(ValueError):
            OrmQuotaCounter().count_connections(shipper_org.id, "carrier", ["pending"])


class TestConnectionLimit:

    def test_basic_allows_one(self, shipper_org):
        assert check_connection_limit(shipper_org.id, ROLE_SHIPPER, counter=_counter(connections=0)).allowed
        denied = check_connection_limit(shipper_org.id, ROLE_SHIPPER, counter=_counter(connections=1))
        assert denied.allowed is False
        assert denied.limit == 1
        assert denied.reason

    def test_exclusion_is_passed_through(self, shipper_org):
        counter = _counter(connections=0)
        check_connection_limit(shipper_org.id, ROLE_SHIPPER, exclude_connection_id=42, counter=counter)
        assert counter.count_connections.call_args.kwargs["exclude_connection_id"] == 42

    def test_paid_tier_is_unlimited(self, shipper_org, make_subscription):
        make_subscription(shipper_org, tier="medium")
        decision = check_connection_limit(shipper_org.id, ROLE_SHIPPER, counter=_counter(connections=50))
        assert decision.allowed is True
        assert decision.limit == UNLIMITED

    def test_tier_table(self):
        assert CONNECTION_LIMITS == {"basic": 1, "medium": 3, "advanced": 99999}
        assert get_connection_limit("platinum") == 1
        assert can_add_connection(2, "medium") is True
        assert can_add_connection(3, "medium") is False


class TestSlots:

    def test_quotation_slot_yields_decision(self, forwarder_org):
        with quotation_slot(forwarder_org.id, counter=_counter(quotations=5)) as decision:
            assert decision.allowed is False
        # the default subscription survives a denial
        assert Subscription.objects.filter(organization=forwarder_org).exists()

    def test_connection_slot_rolls_back_on_error(self, shipper_org, forwarder_org):
        with pytest.raises(RuntimeError):
            with connection_slot(shipper_org.id, ROLE_SHIPPER) as decision:
                assert decision.allowed
                OrganizationConnection.objects.create(
                    shipper_organization=shipper_org, forwarder_organization=forwarder_org
                )
                raise RuntimeError("insert failed downstream")
        assert not OrganizationConnection.objects.exists()
