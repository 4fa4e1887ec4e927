from django.contrib import admin

from .models import Quotation


@admin.register(Quotation)
class QuotationAdmin(admin.ModelAdmin):
    list_display = ("quotation_number", "inquiry", "forwarder_organization", "status", "total_price", "currency", "valid_until", "created_at")
    search_fields = ("quotation_number", "inquiry__reference_number", "forwarder_organization__name")
    list_filter = ("status", "currency", "created_at")
    date_hierarchy = "created_at"
    readonly_fields = ("total_price", "submitted_at", "responded_at", "created_at")

    def get_readonly_fields(self, request, obj=None):
        ro = list(super().get_readonly_fields(request, obj))
        if obj and obj.status in ("accepted", "rejected", "withdrawn", "expired"):
            # terminal quotations are frozen
            for f in obj._meta.fields:
                if f.name not in ro:
                    ro.append(f.name)
        return ro
