from django.contrib import admin

from .models import Subscription


@admin.register(Subscription)
class SubscriptionAdmin(admin.ModelAdmin):
    list_display = ("organization", "tier", "status", "max_quotations_per_month", "current_period_end")
    list_filter = ("tier", "status")
    search_fields = ("organization__name",)
