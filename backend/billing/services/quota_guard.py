"""
Subscription-tier quota checks for quotations and connections.

The ``check_*`` functions are read-only decisions: they count what exists
and say whether one more is allowed. On their own they are check-then-act;
two requests racing at ``limit - 1`` can both pass. Mutation paths should
use ``quotation_slot`` / ``connection_slot``, which take a row lock on the
organization's subscription for the duration of the caller's insert.

Denials are returned, not raised. The caller turns ``allowed=False`` into a
forbidden response carrying ``reason`` as-is.
"""
from __future__ import annotations

import logging
import math
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Optional, Protocol

from django.conf import settings
from django.db import transaction
from django.utils import timezone

from organizations.models import OrganizationConnection
from quotes.models import Quotation

from ..models import Subscription
from ..tier_limits import TIER_BASIC, DEFAULT_QUOTATIONS_PER_MONTH, get_connection_limit

logger = logging.getLogger(__name__)

ROLE_SHIPPER = 'shipper'
ROLE_FORWARDER = 'forwarder'
ROLES = (ROLE_SHIPPER, ROLE_FORWARDER)

UNLIMITED = math.inf


@dataclass(frozen=True)
class QuotaDecision:
    allowed: bool
    current: int
    limit: float
    reason: Optional[str] = None


class QuotaCounter(Protocol):
    def count_quotations_since(self, organization_id, since: datetime) -> int: ...

    def count_connections(
        self,
        organization_id,
        role: str,
        statuses: Iterable[str],
        exclude_connection_id=None,
    ) -> int: ...


class OrmQuotaCounter:
    """Counts straight from the database."""

    def count_quotations_since(self, organization_id, since: datetime) -> int:
        return Quotation.objects.filter(
            forwarder_organization_id=organization_id,
            created_at__gte=since,
        ).count()

    def count_connections(self, organization_id, role, statuses, exclude_connection_id=None) -> int:
        if role not in ROLES:
            raise ValueError(f"Unknown connection role: {role!r}")
        qs = OrganizationConnection.objects.filter(
            **{f"{role}_organization_id": organization_id},
            status__in=list(statuses),
        )
        if exclude_connection_id is not None:
            qs = qs.exclude(pk=exclude_connection_id)
        return qs.count()


default_counter = OrmQuotaCounter()


def month_start(now: Optional[datetime] = None) -> datetime:
    """First instant of the current calendar month on the server clock."""
    now = now or timezone.now()
    if timezone.is_aware(now):
        now = timezone.localtime(now)
    return now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)


def _default_subscription_values() -> dict:
    return {
        'tier': TIER_BASIC,
        'status': 'active',
        'max_quotations_per_month': getattr(
            settings, 'DEFAULT_MAX_QUOTATIONS_PER_MONTH', DEFAULT_QUOTATIONS_PER_MONTH
        ),
    }


def get_organization_subscription(organization_id) -> Subscription:
    """
    Return the organization's subscription, creating the default basic one
    the first time an organization without a subscription is looked up.
    """
    subscription, created = Subscription.objects.get_or_create(
        organization_id=organization_id,
        defaults=_default_subscription_values(),
    )
    if created:
        logger.info("Created default %s subscription for organization %s", subscription.tier, organization_id)
    return subscription


def get_quotations_this_month(organization_id, counter: QuotaCounter = None, now: Optional[datetime] = None) -> int:
    counter = counter or default_counter
    return counter.count_quotations_since(organization_id, month_start(now))


def _is_unlimited(subscription: Subscription) -> bool:
    return not subscription.is_basic or not subscription.max_quotations_per_month


def _evaluate_quotation_limit(subscription, counter, now=None) -> QuotaDecision:
    if _is_unlimited(subscription):
        return QuotaDecision(allowed=True, current=0, limit=UNLIMITED)

    limit = subscription.max_quotations_per_month
    current = get_quotations_this_month(subscription.organization_id, counter=counter, now=now)
    if current >= limit:
        logger.warning(
            "Quotation limit reached for organization %s (%s/%s)",
            subscription.organization_id, current, limit,
        )
        return QuotaDecision(
            allowed=False,
            current=current,
            limit=limit,
            reason=(
                f"You have reached your monthly limit of {limit} quotations. "
                f"Upgrade to Medium or Advanced for more quotations."
            ),
        )
    return QuotaDecision(allowed=True, current=current, limit=limit)


def _evaluate_connection_limit(subscription, role, counter, exclude_connection_id=None) -> QuotaDecision:
    if not subscription.is_basic:
        return QuotaDecision(allowed=True, current=0, limit=UNLIMITED)

    limit = get_connection_limit(subscription.tier)
    current = counter.count_connections(
        subscription.organization_id,
        role,
        OrganizationConnection.ACTIVE_STATUSES,
        exclude_connection_id=exclude_connection_id,
    )
    if current >= limit:
        logger.warning(
            "Connection limit reached for organization %s as %s (%s/%s)",
            subscription.organization_id, role, current, limit,
        )
        return QuotaDecision(
            allowed=False,
            current=current,
            limit=limit,
            reason=(
                f"Your Basic plan allows {limit} active connection. "
                f"Upgrade to Medium or Advanced to connect with more partners."
            ),
        )
    return QuotaDecision(allowed=True, current=current, limit=limit)


def check_quotation_limit(organization_id, counter: QuotaCounter = None, now: Optional[datetime] = None) -> QuotaDecision:
    subscription = get_organization_subscription(organization_id)
    return _evaluate_quotation_limit(subscription, counter or default_counter, now=now)


def check_connection_limit(
    organization_id,
    role: str,
    exclude_connection_id=None,
    counter: QuotaCounter = None,
) -> QuotaDecision:
    """
    Decide whether the organization may hold one more pending/connected
    connection in ``role``. Pass ``exclude_connection_id`` when re-validating
    an existing connection so it is not counted against itself.
    """
    subscription = get_organization_subscription(organization_id)
    return _evaluate_connection_limit(
        subscription, role, counter or default_counter, exclude_connection_id=exclude_connection_id
    )


def _lock_subscription(organization_id) -> Subscription:
    return Subscription.objects.select_for_update().get(organization_id=organization_id)


@contextmanager
def quotation_slot(organization_id, counter: QuotaCounter = None):
    """
    Check the quotation quota and hold it for an insert.

    Usage::

        with quotation_slot(org.id) as decision:
            if not decision.allowed:
                raise PermissionDenied(decision.reason)
            Quotation.objects.create(...)

    Count and insert run in one transaction, serialized per organization by
    the subscription row lock.
    """
    get_organization_subscription(organization_id)
    with transaction.atomic():
        subscription = _lock_subscription(organization_id)
        yield _evaluate_quotation_limit(subscription, counter or default_counter)


@contextmanager
def connection_slot(organization_id, role: str, exclude_connection_id=None, counter: QuotaCounter = None):
    get_organization_subscription(organization_id)
    with transaction.atomic():
        subscription = _lock_subscription(organization_id)
        yield _evaluate_connection_limit(
            subscription, role, counter or default_counter, exclude_connection_id=exclude_connection_id
        )
