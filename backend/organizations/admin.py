from django.contrib import admin

from .models import Membership, Organization, OrganizationConnection


@admin.register(Organization)
class OrganizationAdmin(admin.ModelAdmin):
    list_display = ("name", "type", "email", "created_at")
    list_filter = ("type",)
    search_fields = ("name", "email")


@admin.register(Membership)
class MembershipAdmin(admin.ModelAdmin):
    list_display = ("user", "organization", "role", "created_at")
    list_filter = ("role", "organization__type")
    search_fields = ("user__username", "organization__name")


@admin.register(OrganizationConnection)
class OrganizationConnectionAdmin(admin.ModelAdmin):
    list_display = ("shipper_organization", "forwarder_organization", "status", "accepted_at", "created_at")
    list_filter = ("status",)
    search_fields = ("shipper_organization__name", "forwarder_organization__name")
