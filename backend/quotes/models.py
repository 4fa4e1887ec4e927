from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models
from django.db.models import Q

from core.statuses import QuotationStatus
from core.utils import ZERO, d, q2


class Quotation(models.Model):
    COST_FIELDS = ('pre_carriage', 'main_carriage', 'on_carriage', 'additional_charges')

    quotation_number = models.CharField(max_length=64, unique=True)
    inquiry = models.ForeignKey('inquiries.Inquiry', on_delete=models.CASCADE, related_name='quotations')
    forwarder_organization = models.ForeignKey(
        'organizations.Organization', on_delete=models.CASCADE, related_name='quotations'
    )
    total_price = models.DecimalField(max_digits=12, decimal_places=2)
    currency = models.CharField(max_length=3, default='EUR')
    pre_carriage = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    main_carriage = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    on_carriage = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    additional_charges = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    transit_time = models.PositiveIntegerField(null=True, blank=True)
    valid_until = models.DateTimeField()
    notes = models.TextField(blank=True, null=True)
    terms = models.TextField(blank=True, null=True)
    status = models.CharField(max_length=20, choices=QuotationStatus.choices, default=QuotationStatus.DRAFT)
    submitted_at = models.DateTimeField(null=True, blank=True)
    responded_at = models.DateTimeField(null=True, blank=True)
    created_by = models.ForeignKey(settings.AUTH_USER_MODEL, null=True, blank=True, on_delete=models.SET_NULL)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(
                fields=['inquiry', 'forwarder_organization'],
                name='uniq_quotation_inquiry_forwarder',
            ),
            models.UniqueConstraint(
                fields=['inquiry'],
                condition=Q(status='accepted'),
                name='uniq_accepted_quotation_per_inquiry',
            ),
        ]
        indexes = [
            models.Index(fields=['forwarder_organization', 'created_at'], name='quotation_fwd_created_idx'),
        ]

    def compute_total_price(self):
        return q2(sum((d(getattr(self, f)) for f in self.COST_FIELDS), ZERO))

    def clean(self):
        if self.total_price is not None and d(self.total_price) != self.compute_total_price():
            raise ValidationError({'total_price': "Total price must equal the sum of the cost breakdown."})

    def save(self, *args, **kwargs):
        self.total_price = self.compute_total_price()
        return super().save(*args, **kwargs)

    def __str__(self):
        return self.quotation_number
