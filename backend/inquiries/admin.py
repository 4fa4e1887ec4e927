from django.contrib import admin

from .models import Inquiry, InquiryForwarder, InquiryPackage


class InquiryPackageInline(admin.TabularInline):
    model = InquiryPackage
    extra = 0


class InquiryForwarderInline(admin.TabularInline):
    model = InquiryForwarder
    extra = 0
    readonly_fields = ("sent_at", "viewed_at", "rejected_at")


@admin.register(Inquiry)
class InquiryAdmin(admin.ModelAdmin):
    list_display = ("reference_number", "title", "shipper_organization", "service_type", "status", "validity_date", "created_at")
    list_filter = ("status", "service_type", "created_at")
    search_fields = ("reference_number", "title", "shipper_organization__name")
    date_hierarchy = "created_at"
    inlines = [InquiryPackageInline, InquiryForwarderInline]
