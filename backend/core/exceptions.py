from __future__ import annotations

import logging

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class MarketplaceError(Exception):
    """Base exception for marketplace rule violations raised by services"""
    pass


class TransitionNotAllowed(MarketplaceError):
    """Raised when a status change is not legal from the current state"""
    pass


class QuotaExceeded(MarketplaceError):
    """Raised when a subscription quota denies a creation; carries the quota reason"""
    pass


class MembershipRequired(MarketplaceError):
    """Raised when the acting user has no organization of the required type"""
    pass


def api_exception_handler(exc, context):
    """
    DRF exception handler that maps service-layer rule violations to 403.

    Everything else goes through DRF's default handling; errors DRF does not
    know about (database, network) are left to propagate.
    """
    if isinstance(exc, MarketplaceError):
        logger.info("Rejected %s: %s", context.get('view').__class__.__name__, exc)
        return Response({'detail': str(exc)}, status=status.HTTP_403_FORBIDDEN)
    return exception_handler(exc, context)
