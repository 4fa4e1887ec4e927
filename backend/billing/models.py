from django.db import models

from .tier_limits import TIER_ADVANCED, TIER_BASIC, TIER_MEDIUM, DEFAULT_QUOTATIONS_PER_MONTH


class Subscription(models.Model):
    TIER_CHOICES = [(TIER_BASIC, 'Basic'), (TIER_MEDIUM, 'Medium'), (TIER_ADVANCED, 'Advanced')]
    STATUS_CHOICES = [('active', 'Active'), ('canceled', 'Canceled'), ('past_due', 'Past due')]

    organization = models.OneToOneField(
        'organizations.Organization', on_delete=models.CASCADE, related_name='subscription'
    )
    tier = models.CharField(max_length=20, choices=TIER_CHOICES, default=TIER_BASIC)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='active')
    # NULL means unlimited
    max_quotations_per_month = models.PositiveIntegerField(
        null=True, blank=True, default=DEFAULT_QUOTATIONS_PER_MONTH
    )
    current_period_start = models.DateTimeField(null=True, blank=True)
    current_period_end = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    @property
    def is_basic(self) -> bool:
        return self.tier == TIER_BASIC

    def __str__(self):
        return f"{self.organization_id}: {self.tier} ({self.status})"
