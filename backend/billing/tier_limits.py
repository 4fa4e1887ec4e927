"""Per-tier resource limits for organization connections."""
from __future__ import annotations

TIER_BASIC = 'basic'
TIER_MEDIUM = 'medium'
TIER_ADVANCED = 'advanced'

CONNECTION_LIMITS = {
    TIER_BASIC: 1,
    TIER_MEDIUM: 3,
    TIER_ADVANCED: 99999,
}

DEFAULT_QUOTATIONS_PER_MONTH = 5


def get_connection_limit(tier: str) -> int:
    # Unknown tiers get the most restrictive limit
    return CONNECTION_LIMITS.get(tier, CONNECTION_LIMITS[TIER_BASIC])


def can_add_connection(current_connections: int, tier: str) -> bool:
    return current_connections < get_connection_limit(tier)
