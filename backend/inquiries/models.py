from django.core.exceptions import ValidationError
from django.db import models
from django.db.models import F, Q

from core.statuses import InquiryStatus, ResponseStatus, ServiceType


class Inquiry(models.Model):
    # `rejected` is a forwarder-local display state and is never stored here
    STATUS_CHOICES = [c for c in InquiryStatus.choices if c[0] != InquiryStatus.REJECTED]

    reference_number = models.CharField(max_length=64, unique=True)
    title = models.CharField(max_length=255)
    description = models.TextField(blank=True, null=True)
    service_type = models.CharField(max_length=20, choices=ServiceType.choices, default=ServiceType.AIR_FREIGHT)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=InquiryStatus.DRAFT)
    shipper_organization = models.ForeignKey(
        'organizations.Organization', on_delete=models.CASCADE, related_name='inquiries'
    )
    validity_date = models.DateTimeField(null=True, blank=True)
    sent_at = models.DateTimeField(null=True, blank=True)
    closed_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name_plural = 'inquiries'
        indexes = [
            models.Index(fields=['shipper_organization', '-created_at'], name='inquiry_shipper_created_idx'),
            models.Index(fields=['status', 'validity_date'], name='inquiry_status_validity_idx'),
        ]

    def __str__(self):
        return self.reference_number


class InquiryPackage(models.Model):
    inquiry = models.ForeignKey(Inquiry, on_delete=models.CASCADE, related_name='packages')
    package_number = models.CharField(max_length=32)
    description = models.CharField(max_length=255, blank=True, null=True)
    pieces = models.PositiveIntegerField(default=1)
    gross_weight = models.DecimalField(max_digits=10, decimal_places=3)
    chargeable_weight = models.DecimalField(max_digits=10, decimal_places=3, null=True, blank=True)
    length = models.DecimalField(max_digits=8, decimal_places=2, null=True, blank=True)
    width = models.DecimalField(max_digits=8, decimal_places=2, null=True, blank=True)
    height = models.DecimalField(max_digits=8, decimal_places=2, null=True, blank=True)
    volume = models.DecimalField(max_digits=10, decimal_places=6, null=True, blank=True)
    temperature = models.CharField(max_length=64, blank=True, null=True)
    special_handling = models.CharField(max_length=255, blank=True, null=True)
    is_dangerous = models.BooleanField(default=False)
    dangerous_goods_class = models.CharField(max_length=16, blank=True, null=True)
    un_number = models.CharField(max_length=16, blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['package_number']
        constraints = [
            models.CheckConstraint(
                condition=Q(chargeable_weight__isnull=True) | Q(chargeable_weight__gte=F('gross_weight')),
                name='package_chargeable_gte_gross',
            ),
        ]

    def clean(self):
        if self.chargeable_weight is not None and self.gross_weight is not None:
            if self.chargeable_weight < self.gross_weight:
                raise ValidationError({'chargeable_weight': "Chargeable weight cannot be below gross weight."})

    def __str__(self):
        return f"{self.inquiry_id}/{self.package_number}"


class InquiryForwarder(models.Model):
    """The copy of an inquiry dispatched to one forwarder, and that forwarder's response."""
    inquiry = models.ForeignKey(Inquiry, on_delete=models.CASCADE, related_name='forwarder_responses')
    forwarder_organization = models.ForeignKey(
        'organizations.Organization', on_delete=models.CASCADE, related_name='received_inquiries'
    )
    response_status = models.CharField(
        max_length=20, choices=ResponseStatus.choices, default=ResponseStatus.PENDING
    )
    sent_at = models.DateTimeField(auto_now_add=True)
    viewed_at = models.DateTimeField(null=True, blank=True)
    rejected_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(
                fields=['inquiry', 'forwarder_organization'],
                name='uniq_inquiry_forwarder',
            ),
        ]

    def __str__(self):
        return f"{self.inquiry_id} -> {self.forwarder_organization_id} ({self.response_status})"
