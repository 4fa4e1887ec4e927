from rest_framework import serializers

from .models import OrganizationConnection


class ConnectionInviteSerializer(serializers.Serializer):
    forwarder_organization_id = serializers.IntegerField()


class OrganizationConnectionSerializer(serializers.ModelSerializer):
    class Meta:
        model = OrganizationConnection
        fields = [
            "id", "shipper_organization", "forwarder_organization", "status",
            "invited_by", "accepted_by", "accepted_at", "created_at",
        ]
        read_only_fields = fields
