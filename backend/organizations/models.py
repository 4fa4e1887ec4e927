from django.conf import settings
from django.db import models


class Organization(models.Model):
    TYPE_SHIPPER = 'shipper'
    TYPE_FORWARDER = 'forwarder'
    TYPE_CHOICES = [(TYPE_SHIPPER, 'Shipper'), (TYPE_FORWARDER, 'Forwarder')]

    name = models.CharField(max_length=255, unique=True)
    type = models.CharField(max_length=20, choices=TYPE_CHOICES)
    email = models.EmailField(blank=True, default='')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['name']

    @property
    def is_shipper(self) -> bool:
        return self.type == self.TYPE_SHIPPER

    @property
    def is_forwarder(self) -> bool:
        return self.type == self.TYPE_FORWARDER

    def __str__(self):
        return f"{self.name} ({self.get_type_display()})"


class Membership(models.Model):
    ROLE_CHOICES = [('owner', 'Owner'), ('admin', 'Admin'), ('member', 'Member')]
    MANAGER_ROLES = ('owner', 'admin')

    user = models.OneToOneField(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='membership')
    organization = models.ForeignKey(Organization, on_delete=models.CASCADE, related_name='memberships')
    role = models.CharField(max_length=20, choices=ROLE_CHOICES, default='member')
    created_at = models.DateTimeField(auto_now_add=True)

    @property
    def can_manage(self) -> bool:
        return self.role in self.MANAGER_ROLES

    def __str__(self):
        return f"{self.user} @ {self.organization.name} ({self.role})"


class OrganizationConnection(models.Model):
    STATUS_PENDING = 'pending'
    STATUS_CONNECTED = 'connected'
    STATUS_CHOICES = [(STATUS_PENDING, 'Pending'), (STATUS_CONNECTED, 'Connected')]
    ACTIVE_STATUSES = (STATUS_PENDING, STATUS_CONNECTED)

    shipper_organization = models.ForeignKey(
        Organization, on_delete=models.CASCADE, related_name='forwarder_connections'
    )
    forwarder_organization = models.ForeignKey(
        Organization, on_delete=models.CASCADE, related_name='shipper_connections'
    )
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_PENDING)
    invited_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, null=True, blank=True, on_delete=models.SET_NULL, related_name='+'
    )
    accepted_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, null=True, blank=True, on_delete=models.SET_NULL, related_name='+'
    )
    accepted_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(
                fields=['shipper_organization', 'forwarder_organization'],
                name='uniq_connection_shipper_forwarder',
            ),
        ]
        indexes = [
            models.Index(fields=['shipper_organization', 'status'], name='orgconn_shipper_status_idx'),
            models.Index(fields=['forwarder_organization', 'status'], name='orgconn_forwarder_status_idx'),
        ]

    def __str__(self):
        return f"{self.shipper_organization_id} -> {self.forwarder_organization_id} ({self.status})"
